"""Application error kinds and the tagged guard/validation results built on them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Client-visible error kinds a guard or validation check can fail with."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class RemixError(Exception):
    """Base for errors surfaced to API callers as ``{"error": {"status", "message"}}``."""

    status_code = 500
    default_message = "An error has occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(RemixError):
    """Caller-supplied data violates a precondition."""

    status_code = 400
    default_message = "Bad Request, missing/invalid parameters"


class EmptyPayloadError(BadRequestError):
    """An update was requested with no fields to change."""

    default_message = "Please provide data to update."


class UnauthorizedError(RemixError):
    """No identity where one is required."""

    status_code = 401
    default_message = "Unauthorized, missing valid authentication"


class ForbiddenError(RemixError):
    """Identity present but not entitled to the resource."""

    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFoundError(RemixError):
    status_code = 404
    default_message = "Not Found"


class InvalidTokenError(Exception):
    """A credential failed verification (bad signature, expired, malformed).

    Deliberately not a RemixError: identity extraction degrades to an
    anonymous request instead of reporting it.
    """


_ERRORS_BY_KIND: dict[ErrorKind, type[RemixError]] = {
    ErrorKind.BAD_REQUEST: BadRequestError,
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.FORBIDDEN: ForbiddenError,
    ErrorKind.NOT_FOUND: NotFoundError,
}


@dataclass(frozen=True)
class Pass:
    """Check succeeded; the request may proceed."""

    ok = True


@dataclass(frozen=True)
class Fail:
    """Check failed with an error kind and an optional message override."""

    kind: ErrorKind
    message: str | None = None

    ok = False

    def to_error(self) -> RemixError:
        return _ERRORS_BY_KIND[self.kind](self.message)


Outcome = Pass | Fail


def raise_on_fail(outcome: Outcome) -> None:
    """Raise the error a Fail stands for; do nothing on Pass."""
    if isinstance(outcome, Fail):
        raise outcome.to_error()


__all__ = [
    "raise_on_fail",
    "BadRequestError",
    "EmptyPayloadError",
    "ErrorKind",
    "Fail",
    "ForbiddenError",
    "InvalidTokenError",
    "NotFoundError",
    "Outcome",
    "Pass",
    "RemixError",
    "UnauthorizedError",
]
