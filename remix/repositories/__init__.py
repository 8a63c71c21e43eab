"""Data access for users, recipes and remixes. SQL only; no HTTP concerns."""

from remix.repositories.recipes import RecipeRepository
from remix.repositories.remixes import RemixRepository
from remix.repositories.users import UserRepository

__all__ = ["RecipeRepository", "RemixRepository", "UserRepository"]
