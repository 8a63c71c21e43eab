"""Request bodies for user profile changes."""

from pydantic import BaseModel, ConfigDict


class UserUpdate(BaseModel):
    """Only email and password can change; other keys are rejected by the repository."""

    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(extra="allow")
