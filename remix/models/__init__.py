"""SQLAlchemy ORM models."""

from remix.models.base import Base
from remix.models.recipe import DEFAULT_IMAGE_URL, Recipe, RecipeFavorite, RecipeReview
from remix.models.remix import Remix, RemixFavorite, RemixReview
from remix.models.user import User

__all__ = [
    "Base",
    "DEFAULT_IMAGE_URL",
    "Recipe",
    "RecipeFavorite",
    "RecipeReview",
    "Remix",
    "RemixFavorite",
    "RemixReview",
    "User",
]
