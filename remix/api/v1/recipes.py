"""Recipe routes: search, details, creation, updates, reviews and remixing.

Reads are public; writes need a login, and updates need the caller to be
the author of the recipe or review.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status

from remix.api.deps import (
    get_recipe_repository,
    get_remix_repository,
    require_login,
    require_recipe_owner,
    require_recipe_review_owner,
)
from remix.core.datetime_format import with_readable_created_at
from remix.core.security import Identity
from remix.errors import BadRequestError
from remix.repositories import RecipeRepository, RemixRepository
from remix.schemas.dishes import RecipeCreate, RecipeUpdate, RemixCreate, ReviewCreate, ReviewUpdate

router = APIRouter()

SEARCH_QUERY_MESSAGE = "The query string must only contain the non-empty property 'recipeName'."

# Sizes of the previews embedded in recipe details.
DETAIL_REMIX_LIMIT = 3
DETAIL_REVIEW_LIMIT = 1


@router.get("")
def search_recipes(
    request: Request,
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    """Basic info for all recipes by name; ?recipeName= filters case-insensitively."""
    if any(key != "recipeName" for key in request.query_params):
        raise BadRequestError(SEARCH_QUERY_MESSAGE)
    results = recipes.search_recipes(request.query_params.get("recipeName"))
    return {"recipeSearchResults": [with_readable_created_at(r) for r in results]}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_recipe(
    body: RecipeCreate,
    user: Annotated[Identity, Depends(require_login)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    new_recipe = recipes.add_recipe(user.user_id, body.model_dump(exclude_none=True))
    return {"newRecipe": with_readable_created_at(new_recipe)}


@router.get("/reviews/{review_id}")
def get_recipe_review(
    review_id: int,
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    return {"recipeReview": with_readable_created_at(recipes.get_recipe_review(review_id))}


@router.get("/{recipe_id}")
def get_recipe_details(
    recipe_id: int,
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    """Recipe details with its 3 most recent remixes and its most recent review ({} if none)."""
    details = recipes.get_recipe_details(recipe_id, DETAIL_REMIX_LIMIT, DETAIL_REVIEW_LIMIT)
    reviews = details.pop("reviews")
    details = with_readable_created_at(details)
    details["remixes"] = [with_readable_created_at(r) for r in details["remixes"]]
    details["mostRecentRecipeReview"] = with_readable_created_at(reviews[0]) if reviews else {}
    return {"recipeDetails": details}


@router.patch("/{recipe_id}")
def update_recipe(
    recipe_id: int,
    body: RecipeUpdate,
    _owner: Annotated[Identity, Depends(require_recipe_owner)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    updated = recipes.update_recipe(recipe_id, body.model_dump(exclude_unset=True))
    return {
        "updatedRecipe": with_readable_created_at(updated),
        "message": f"Successfully updated recipe with id {recipe_id}.",
    }


@router.get("/{recipe_id}/remixes")
def get_remixes(
    recipe_id: int,
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    return {"remixes": [with_readable_created_at(r) for r in recipes.get_remixes(recipe_id)]}


@router.post("/{recipe_id}/remixes", status_code=status.HTTP_201_CREATED)
def add_remix(
    recipe_id: int,
    body: RemixCreate,
    user: Annotated[Identity, Depends(require_login)],
    remixes: Annotated[RemixRepository, Depends(get_remix_repository)],
) -> dict[str, Any]:
    new_remix = remixes.add_remix(user.user_id, recipe_id, body.model_dump(exclude_none=True))
    return {"newRemix": with_readable_created_at(new_remix)}


@router.get("/{recipe_id}/reviews")
def get_recipe_reviews(
    recipe_id: int,
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    reviews = recipes.get_recipe_reviews(recipe_id)
    return {"recipeReviews": [with_readable_created_at(r) for r in reviews]}


@router.post("/{recipe_id}/reviews", status_code=status.HTTP_201_CREATED)
def add_recipe_review(
    recipe_id: int,
    body: ReviewCreate,
    user: Annotated[Identity, Depends(require_login)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    review = recipes.add_review(user.user_id, recipe_id, body.model_dump())
    return {"newRecipeReview": with_readable_created_at(review)}


@router.patch("/{recipe_id}/reviews/{review_id}")
def update_recipe_review(
    recipe_id: int,
    review_id: int,
    body: ReviewUpdate,
    _owner: Annotated[Identity, Depends(require_recipe_review_owner)],
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> dict[str, Any]:
    updated = recipes.update_review(review_id, body.model_dump(exclude_unset=True))
    return {
        "updatedRecipeReview": with_readable_created_at(updated),
        "message": f"Successfully updated recipe review with id {review_id}.",
    }
