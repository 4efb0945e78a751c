# tests/utils/factory.py

from typing import Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash
from app.db.models.movie import Movie
from app.db.models.review import Review
from app.db.models.user import User

DEFAULT_PASSWORD = "secret1!"


async def create_user(
    session: AsyncSession,
    *,
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: str = DEFAULT_PASSWORD,
) -> User:
    """
    ✅ Insert a user directly (bypasses the password policy).

    Args:
        session (AsyncSession): SQLAlchemy async session.
        username (str, optional): Defaults to a random one.
        email (str, optional): Defaults to `<username>@example.com`.
        password (str): Plain password, hashed before storing.
    """
    username = username or f"user_{uuid4().hex[:8]}"
    user = User(
        username=username,
        email=email or f"{username}@example.com",
        hashed_password=get_password_hash(password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_movie(
    session: AsyncSession,
    *,
    title: str = "Inception",
    release_year: int = 2010,
    description: Optional[str] = "",
) -> Movie:
    movie = Movie(title=title, release_year=release_year, description=description)
    session.add(movie)
    await session.commit()
    await session.refresh(movie, attribute_names=["reviews"])
    return movie


async def create_review(
    session: AsyncSession,
    *,
    movie: Movie,
    user: User,
    rating: int = 5,
    content: str = "Worth a watch.",
) -> Review:
    review = Review(movie_id=movie.id, user_id=user.id, rating=rating, content=content)
    session.add(review)
    await session.commit()
    await session.refresh(review, attribute_names=["user"])
    return review
