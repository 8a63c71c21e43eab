"""Remix routes: details, updates and remix reviews. Remixes are created under /recipes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from remix.api.deps import (
    get_remix_repository,
    require_login,
    require_remix_owner,
    require_remix_review_owner,
)
from remix.core.datetime_format import with_readable_created_at
from remix.core.security import Identity
from remix.repositories import RemixRepository
from remix.schemas.dishes import RemixUpdate, ReviewCreate, ReviewUpdate

router = APIRouter()


@router.get("/reviews/{review_id}")
def get_remix_review(
    review_id: int,
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    return {"remixReview": with_readable_created_at(remixes.get_remix_review(review_id))}


@router.get("/{remix_id}")
def get_remix_details(
    remix_id: int,
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    """Remix details with the original recipe's name and all reviews, newest first."""
    details = with_readable_created_at(remixes.get_remix_details(remix_id))
    details["reviews"] = [with_readable_created_at(r) for r in details["reviews"]]
    return {"remixDetails": details}


@router.patch("/{remix_id}")
def update_remix(
    remix_id: int,
    body: RemixUpdate,
    _owner: Annotated[Identity, Depends(require_remix_owner)],
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    updated = remixes.update_remix(remix_id, body.model_dump(exclude_unset=True))
    return {
        "updatedRemix": with_readable_created_at(updated),
        "message": f"Successfully updated remix with id {remix_id}.",
    }


@router.get("/{remix_id}/reviews")
def get_remix_reviews(
    remix_id: int,
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    reviews = remixes.get_remix_reviews(remix_id)
    return {"remixReviews": [with_readable_created_at(r) for r in reviews]}


@router.post("/{remix_id}/reviews", status_code=status.HTTP_201_CREATED)
def add_remix_review(
    remix_id: int,
    body: ReviewCreate,
    user: Annotated[Identity, Depends(require_login)],
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    review = remixes.add_review(user.user_id, remix_id, body.model_dump())
    return {"newRemixReview": with_readable_created_at(review)}


@router.patch("/{remix_id}/reviews/{review_id}")
def update_remix_review(
    remix_id: int,
    review_id: int,
    body: ReviewUpdate,
    _owner: Annotated[Identity, Depends(require_remix_review_owner)],
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    updated = remixes.update_review(review_id, body.model_dump(exclude_unset=True))
    return {
        "updatedRemixReview": with_readable_created_at(updated),
        "message": f"Successfully updated remix review with id {review_id}.",
    }
