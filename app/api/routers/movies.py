# app/api/routers/movies.py
from __future__ import annotations

"""
Movies API — MovieReview
========================

All routes require a bearer token. Read routes return aggregated, enriched
`MovieRead` items (see `app.services.movie_service`). A missing movie is a
404 envelope; list routes return an empty list rather than an error.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Request, Response, status

from app.core.dependencies import get_current_user_id, get_movie_service
from app.core.exceptions import NotFoundError
from app.schemas.common import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from app.schemas.movies import MovieCreate, MovieQuery, MovieRead, MovieUpdate
from app.services.movie_service import MovieService

MOVIE_NOT_FOUND_MESSAGE = "No such movie found."

router = APIRouter(
    prefix="/Movies",
    tags=["Movies"],
    dependencies=[Depends(get_current_user_id)],
)


def movie_query(
    name: Optional[str] = Query(None, alias="Name"),
    sort_by: Optional[str] = Query(None, alias="SortBy"),
    is_descending: bool = Query(False, alias="IsDescending"),
    page_number: int = Query(1, alias="PageNumber", ge=INT32_MIN, le=INT32_MAX),
    page_size: int = Query(10, alias="PageSize", ge=INT32_MIN, le=INT32_MAX),
) -> MovieQuery:
    return MovieQuery(
        name=name,
        sort_by=sort_by,
        is_descending=is_descending,
        page_number=page_number,
        page_size=page_size,
    )


# ──────────────────────────────────────────────────────────────
# 📚 Reads
# ──────────────────────────────────────────────────────────────
@router.get("/GetAllMovies", response_model=List[MovieRead])
async def get_all_movies(movies: MovieService = Depends(get_movie_service)) -> List[MovieRead]:
    return await movies.get_all()


@router.get("/GetAllMoviesWithQuery", response_model=List[MovieRead])
async def get_all_movies_with_query(
    query: MovieQuery = Depends(movie_query),
    movies: MovieService = Depends(get_movie_service),
) -> List[MovieRead]:
    """Filter by title substring, sort by `name`/`releaseYear`, then page."""
    return await movies.get_all(query)


@router.get("/GetById/{movie_id}", response_model=MovieRead, name="get_movie_by_id")
async def get_by_id(
    movie_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    movies: MovieService = Depends(get_movie_service),
) -> MovieRead:
    movie = await movies.get_by_id(movie_id)
    if movie is None:
        raise NotFoundError(MOVIE_NOT_FOUND_MESSAGE)
    return movie


@router.get("/GetTopRatedMovies", response_model=List[MovieRead])
async def get_top_rated_movies(
    count: int = Query(10, ge=INT32_MIN, le=INT32_MAX),
    movies: MovieService = Depends(get_movie_service),
) -> List[MovieRead]:
    return await movies.get_top_rated(count)


@router.get("/GetMoviesByYear/{year}", response_model=List[MovieRead])
async def get_movies_by_year(
    year: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    movies: MovieService = Depends(get_movie_service),
) -> List[MovieRead]:
    return await movies.get_by_year(year)


# ──────────────────────────────────────────────────────────────
# ✏️ Writes
# ──────────────────────────────────────────────────────────────
@router.post("/AddMovie", response_model=MovieRead, status_code=status.HTTP_201_CREATED)
async def add_movie(
    request: Request,
    response: Response,
    payload: MovieCreate = Body(...),
    movies: MovieService = Depends(get_movie_service),
) -> MovieRead:
    created = await movies.create(payload)
    response.headers["Location"] = str(request.url_for("get_movie_by_id", movie_id=created.id))
    return created


@router.put("/UpdateMovie/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_movie(
    movie_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    payload: MovieUpdate = Body(...),
    movies: MovieService = Depends(get_movie_service),
) -> Response:
    if not await movies.update(movie_id, payload):
        raise NotFoundError(MOVIE_NOT_FOUND_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/DeleteMovie/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_movie(
    movie_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    movies: MovieService = Depends(get_movie_service),
) -> Response:
    if not await movies.delete(movie_id):
        raise NotFoundError(MOVIE_NOT_FOUND_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router", "movie_query", "MOVIE_NOT_FOUND_MESSAGE"]
