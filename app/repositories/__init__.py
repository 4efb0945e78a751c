"""
Repository package for data access layers.

Each repository wraps one `AsyncSession` and returns ORM objects; services
own the mapping to response schemas.

    from app.repositories.movies import MovieRepository
    from app.repositories.reviews import ReviewRepository
    from app.repositories.users import UserRepository
"""
