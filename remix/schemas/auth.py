"""Request/response schemas for registration and login."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """New account details. Length rules are enforced by the user repository."""

    username: str = Field(..., description="Username (5-30 chars)")
    email: str = Field(..., min_length=1, description="Email address")
    password: str = Field(..., description="Password (8+ chars, at most 72 bytes)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class UserInfo(BaseModel):
    """Public account info returned with a token (no id, no password)."""

    username: str
    email: str | None = None


class RegisterResponse(BaseModel):
    """Response for POST /auth/register."""

    newUserInfo: UserInfo
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
    message: str = "Successfully registered new user"


class LoginResponse(BaseModel):
    """Response for POST /auth/login."""

    userInfo: UserInfo
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
