"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from remix.core.config import Settings
from remix.errors import InvalidTokenError

# Username limits and the password minimum count characters.
USERNAME_MIN_LEN = 5
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 8
# bcrypt only reads the first 72 bytes, so the password maximum counts UTF-8 bytes.
PASSWORD_MAX_BYTES = 72


class Identity(BaseModel):
    """Non-secret claims identifying the actor of one request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: int = Field(alias="userId")
    username: str
    email: str | None = None
    issued_at: int | None = Field(default=None, alias="iat")


class CredentialVerifier:
    """Hashes and checks passwords; issues and verifies identity tokens.

    Built once from Settings at startup. Token claims are limited to
    userId, username and email; iat is added on issue.
    """

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.SECRET_KEY.get_secret_value()
        self._algorithm = settings.JWT_ALGORITHM
        self._expire_minutes = settings.JWT_EXPIRE_MINUTES
        self._work_factor = settings.bcrypt_work_factor

    @property
    def work_factor(self) -> int:
        return self._work_factor

    def hash_password(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:PASSWORD_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self._work_factor)).decode("utf-8")

    def verify_password(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash."""
        pw_bytes = plain_password.encode("utf-8")[:PASSWORD_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def issue_token(self, user_id: int, username: str, email: str | None = None) -> str:
        """Create a signed token carrying userId, username, email and iat."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "userId": user_id,
            "username": username,
            "email": email,
            "iat": now,
        }
        if self._expire_minutes is not None:
            payload["exp"] = now + timedelta(minutes=self._expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> Identity:
        """
        Decode and validate a token; return the identity it carries.
        Raises InvalidTokenError on bad signature, expiry, malformed input or missing claims.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e
        try:
            return Identity.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError("Token payload is missing identity claims") from e
