"""User listing, profiles, account changes and favorites."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from remix.api.deps import get_user_repository, require_correct_user, require_login
from remix.core.datetime_format import with_readable_created_at
from remix.core.security import Identity
from remix.errors import BadRequestError
from remix.repositories import UserRepository
from remix.schemas.users import UserUpdate

router = APIRouter()

SEARCH_QUERY_MESSAGE = "The query string must only contain the non-empty property 'username'."


@router.get("")
def list_users(
    request: Request,
    _user: Annotated[Identity, Depends(require_login)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, Any]:
    """All users' username and email by username; ?username= filters case-insensitively."""
    if any(key != "username" for key in request.query_params):
        raise BadRequestError(SEARCH_QUERY_MESSAGE)
    return {"allUsers": users.get_all_users(request.query_params.get("username"))}


@router.get("/{username}")
def get_user(
    username: str,
    _user: Annotated[Identity, Depends(require_login)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, Any]:
    details = users.get_user_details(username)
    details = with_readable_created_at(details)
    details["recipes"] = [with_readable_created_at(r) for r in details["recipes"]]
    details["remixes"] = [with_readable_created_at(r) for r in details["remixes"]]
    return {"user": details}


@router.patch("/{username}")
def update_user(
    username: str,
    body: UserUpdate,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, Any]:
    """Change the caller's own email and/or password."""
    updated = users.update_user(username, body.model_dump(exclude_unset=True))
    return {"updatedUser": updated, "message": f"Successfully updated user {username}."}


@router.delete("/{username}")
def delete_user(
    username: str,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, str]:
    users.delete_user(username)
    return {"message": f"Successfully deleted user {username}."}


@router.get("/{username}/favorites")
def get_favorites(
    username: str,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, Any]:
    return {"favorites": users.get_favorites(username)}


@router.post("/{username}/favorites/recipes/{recipe_id}", status_code=201)
def add_recipe_favorite(
    username: str,
    recipe_id: int,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, str]:
    users.add_recipe_favorite(username, recipe_id)
    return {"message": f"Successfully added recipe with id {recipe_id} to favorites."}


@router.delete("/{username}/favorites/recipes/{recipe_id}")
def remove_recipe_favorite(
    username: str,
    recipe_id: int,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, str]:
    users.remove_recipe_favorite(username, recipe_id)
    return {"message": f"Successfully removed recipe with id {recipe_id} from favorites."}


@router.post("/{username}/favorites/remixes/{remix_id}", status_code=201)
def add_remix_favorite(
    username: str,
    remix_id: int,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, str]:
    users.add_remix_favorite(username, remix_id)
    return {"message": f"Successfully added remix with id {remix_id} to favorites."}


@router.delete("/{username}/favorites/remixes/{remix_id}")
def remove_remix_favorite(
    username: str,
    remix_id: int,
    _user: Annotated[Identity, Depends(require_correct_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> dict[str, str]:
    users.remove_remix_favorite(username, remix_id)
    return {"message": f"Successfully removed remix with id {remix_id} from favorites."}
