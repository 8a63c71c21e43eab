"""Pydantic request/response schemas."""

from remix.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)
from remix.schemas.dishes import (
    RecipeCreate,
    RecipeUpdate,
    RemixCreate,
    RemixUpdate,
    ReviewCreate,
    ReviewUpdate,
)
from remix.schemas.health import HealthResponse
from remix.schemas.users import UserUpdate

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "RemixCreate",
    "RemixUpdate",
    "ReviewCreate",
    "ReviewUpdate",
    "UserInfo",
    "UserUpdate",
]
