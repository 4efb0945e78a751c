# app/api/routers/reviews.py
from __future__ import annotations

"""
Reviews API — MovieReview
=========================

All routes require a bearer token. The author of a new review is the caller
identified by the token; the body never names a user. Edits and deletes are
author-only and answer 403 both for someone else's review and for a review
that does not exist.
"""

from typing import List

from fastapi import APIRouter, Body, Depends, Path, Request, Response, status

from app.core.dependencies import get_current_user_id, get_review_service
from app.core.exceptions import AuthorizationDeniedError, NotFoundError
from app.schemas.common import INT64_MAX, INT64_MIN
from app.schemas.reviews import ReviewCreate, ReviewRead, ReviewUpdate
from app.services.review_service import ReviewAccess, ReviewService

REVIEW_NOT_FOUND_MESSAGE = "No such review found."
EDIT_DENIED_MESSAGE = "You cannot edit this review."
DELETE_DENIED_MESSAGE = "You cannot delete this review."

router = APIRouter(prefix="/Reviews", tags=["Reviews"])


# ──────────────────────────────────────────────────────────────
# 📚 Reads
# ──────────────────────────────────────────────────────────────
@router.get("/GetById/{review_id}", response_model=ReviewRead, name="get_review_by_id")
async def get_by_id(
    review_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    _: int = Depends(get_current_user_id),
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewRead:
    review = await reviews.get_by_id(review_id)
    if review is None:
        raise NotFoundError(REVIEW_NOT_FOUND_MESSAGE)
    return review


@router.get("/GetByMovieId/{movie_id}", response_model=List[ReviewRead])
async def get_by_movie_id(
    movie_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    _: int = Depends(get_current_user_id),
    reviews: ReviewService = Depends(get_review_service),
) -> List[ReviewRead]:
    return await reviews.get_by_movie_id(movie_id)


@router.get("/GetByUserId/{user_id}", response_model=List[ReviewRead])
async def get_by_user_id(
    user_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    _: int = Depends(get_current_user_id),
    reviews: ReviewService = Depends(get_review_service),
) -> List[ReviewRead]:
    return await reviews.get_by_user_id(user_id)


# ──────────────────────────────────────────────────────────────
# ✏️ Writes (author only)
# ──────────────────────────────────────────────────────────────
@router.post("/AddReview", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def add_review(
    request: Request,
    response: Response,
    payload: ReviewCreate = Body(...),
    user_id: int = Depends(get_current_user_id),
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewRead:
    created = await reviews.add(payload, user_id)
    response.headers["Location"] = str(request.url_for("get_review_by_id", review_id=created.id))
    return created


@router.put("/UpdateReview/{review_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_review(
    review_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    payload: ReviewUpdate = Body(...),
    user_id: int = Depends(get_current_user_id),
    reviews: ReviewService = Depends(get_review_service),
) -> Response:
    if await reviews.update(review_id, payload, user_id) is ReviewAccess.DENIED:
        raise AuthorizationDeniedError(EDIT_DENIED_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/DeleteReview/{review_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_review(
    review_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    user_id: int = Depends(get_current_user_id),
    reviews: ReviewService = Depends(get_review_service),
) -> Response:
    if await reviews.delete(review_id, user_id) is ReviewAccess.DENIED:
        raise AuthorizationDeniedError(DELETE_DENIED_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router", "EDIT_DENIED_MESSAGE", "DELETE_DENIED_MESSAGE", "REVIEW_NOT_FOUND_MESSAGE"]
