"""Value checks shared by the recipe, remix and review repositories.

Each check returns Pass or Fail(BAD_REQUEST); repositories raise on Fail.
"""

from collections.abc import Mapping
from typing import Any

from remix.errors import ErrorKind, Fail, Outcome, Pass
from remix.models import DEFAULT_IMAGE_URL

NAME_MAX_LEN = 100
DESCRIPTION_MAX_LEN = 255
PURPOSE_MAX_LEN = 255
REVIEW_TITLE_MAX_LEN = 100

# Logical (API) field name -> column name, for names that differ.
DISH_COLUMNS: dict[str, str] = {
    "cookingTime": "cooking_time",
    "imageUrl": "image_url",
}

RECIPE_UPDATE_FIELDS = frozenset(
    {"name", "description", "ingredients", "directions", "cookingTime", "servings", "imageUrl"}
)
REMIX_UPDATE_FIELDS = RECIPE_UPDATE_FIELDS | {"purpose"}
REVIEW_UPDATE_FIELDS = frozenset({"title", "content"})

REVIEW_UPDATE_FIELDS_MESSAGE = (
    "You can only update the following properties of a review: Title, content."
)


def _bad(message: str) -> Fail:
    return Fail(ErrorKind.BAD_REQUEST, message)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def check_dish_values(data: Mapping[str, Any], entity: str, updating: bool = False) -> Outcome:
    """
    Check recipe/remix field values present in data.

    entity is "recipe" or "remix" and appears in messages; updating switches
    the wording to "The updated ...".
    """
    the = "The updated" if updating else "The"
    if "name" in data:
        name = data["name"]
        if not isinstance(name, str) or not 1 <= len(name.strip()) <= NAME_MAX_LEN:
            return _bad(
                f"{the} name of the {entity} must be between 1 and {NAME_MAX_LEN} characters long."
            )
    if "description" in data:
        description = data["description"]
        if not isinstance(description, str) or not 1 <= len(description.strip()) <= DESCRIPTION_MAX_LEN:
            return _bad(
                f"{the} description of the {entity} must be between 1 and {DESCRIPTION_MAX_LEN} characters long."
            )
    if "purpose" in data:
        purpose = data["purpose"]
        if not isinstance(purpose, str) or not 1 <= len(purpose.strip()) <= PURPOSE_MAX_LEN:
            return _bad(
                f"{the} purpose of the {entity} must be between 1 and {PURPOSE_MAX_LEN} characters long."
            )
    for field, label in (("ingredients", "ingredients"), ("directions", "directions")):
        if field in data and _is_blank(data[field]):
            return _bad(f"{the} {label} of the {entity} cannot be blank.")
    for field, label in (("cookingTime", "cooking time"), ("servings", "servings")):
        if field in data:
            value = data[field]
            if isinstance(value, bool) or not isinstance(value, int):
                return _bad(f"{the} {label} must be a whole number.")
            if value < 0:
                return _bad(f"{the} {label} cannot be negative.")
    return Pass()


def with_default_image(data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of data where an empty imageUrl is replaced by the default image."""
    out = dict(data)
    if "imageUrl" in out and not (out["imageUrl"] or "").strip():
        out["imageUrl"] = DEFAULT_IMAGE_URL
    return out


def check_review_values(data: Mapping[str, Any], updating: bool = False) -> Outcome:
    if "title" in data:
        title = data["title"]
        if _is_blank(title):
            if updating:
                return _bad("The updated title of the review cannot be blank.")
            return _bad(
                f"The title of the review must be between 1-{REVIEW_TITLE_MAX_LEN} characters long."
            )
        if len(title) > REVIEW_TITLE_MAX_LEN:
            return _bad(
                f"The title of the review must be between 1-{REVIEW_TITLE_MAX_LEN} characters long."
            )
    if "content" in data and _is_blank(data["content"]):
        if updating:
            return _bad("The updated content of the review cannot be blank.")
        return _bad("The content of the review cannot be blank.")
    return Pass()
