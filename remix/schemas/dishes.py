"""Request bodies for recipes, remixes and their reviews.

Update bodies keep unknown keys (extra="allow") so the repository can reject
them with its own message; dump them with ``exclude_unset=True`` so only
the fields the caller sent reach the SET clause.
"""

from pydantic import BaseModel, ConfigDict, Field


class RecipeCreate(BaseModel):
    name: str
    description: str
    ingredients: str
    directions: str
    cookingTime: int | None = Field(default=None, description="Minutes; defaults to 0")
    servings: int | None = Field(default=None, description="Defaults to 0")
    imageUrl: str | None = Field(default=None, description="Defaults to a placeholder image")

    model_config = ConfigDict(extra="forbid")


class RemixCreate(RecipeCreate):
    purpose: str = Field(..., description="Why the original recipe was changed")


class RecipeUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    ingredients: str | None = None
    directions: str | None = None
    cookingTime: int | None = None
    servings: int | None = None
    imageUrl: str | None = None

    model_config = ConfigDict(extra="allow")


class RemixUpdate(RecipeUpdate):
    purpose: str | None = None


class ReviewCreate(BaseModel):
    title: str
    content: str

    model_config = ConfigDict(extra="forbid")


class ReviewUpdate(BaseModel):
    title: str | None = None
    content: str | None = None

    model_config = ConfigDict(extra="allow")
