"""Request authorization guards and the runner that chains them.

A guard takes the request context and returns Pass or Fail. Guards run in
a fixed order (identity extraction, login, ownership) and the runner stops
at the first Fail. Errors raised by collaborators, such as NotFoundError
from an author lookup, are not caught here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from remix.core.security import Identity
from remix.errors import ErrorKind, Fail, InvalidTokenError, Outcome, Pass

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "You must be logged in to access this!"
LOGIN_REQUIRED_ACTION_MESSAGE = "You must be logged in to perform this action!"
WRONG_USER_MESSAGE = "You can only edit/delete information from your own account!"


class TokenVerifier(Protocol):
    def verify_token(self, token: str) -> Identity: ...


@dataclass
class RequestContext:
    """Per-request state shared by guards: the raw credential, path params and the identity."""

    authorization: str | None = None
    path_params: Mapping[str, Any] = field(default_factory=dict)
    identity: Identity | None = None
    method: str = ""
    path: str = ""


Guard = Callable[[RequestContext], Outcome]


def _bearer_token(header_value: str | None) -> str | None:
    """Accept ``Bearer <token>`` or the bare token; blank means no credential."""
    if not header_value:
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if rest and scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


class IdentityExtraction:
    """Attach the identity carried by the request credential, if any.

    Never fails: a missing or invalid credential leaves the request
    anonymous. Errors other than InvalidTokenError propagate.
    """

    def __init__(self, verifier: TokenVerifier) -> None:
        self._verifier = verifier

    def __call__(self, ctx: RequestContext) -> Outcome:
        token = _bearer_token(ctx.authorization)
        if token is None:
            return Pass()
        try:
            ctx.identity = self._verifier.verify_token(token)
        except InvalidTokenError:
            logger.info(
                "auth.anonymous method=%s path=%s reason=invalid_token",
                ctx.method,
                ctx.path,
            )
            ctx.identity = None
        return Pass()


def login_required(ctx: RequestContext) -> Outcome:
    """Fail as unauthorized when no identity is attached."""
    if ctx.identity is None:
        logger.warning(
            "auth.rejected method=%s path=%s reason=not_logged_in",
            ctx.method,
            ctx.path,
        )
        return Fail(ErrorKind.UNAUTHORIZED, LOGIN_REQUIRED_MESSAGE)
    return Pass()


class OwnershipRequired:
    """Pass only when the current identity authored the resource named in the path.

    get_author receives the path parameter value and returns a mapping with a
    "username" key; it raises NotFoundError for unknown ids.
    """

    def __init__(
        self,
        resource: str,
        path_param: str,
        get_author: Callable[[Any], Mapping[str, Any]],
    ) -> None:
        self.resource = resource
        self.path_param = path_param
        self._get_author = get_author

    def __call__(self, ctx: RequestContext) -> Outcome:
        if ctx.identity is None:
            return Fail(ErrorKind.UNAUTHORIZED, LOGIN_REQUIRED_ACTION_MESSAGE)
        author = self._get_author(ctx.path_params[self.path_param])
        if author["username"] != ctx.identity.username:
            logger.warning(
                "auth.rejected method=%s path=%s reason=not_%s_author",
                ctx.method,
                ctx.path,
                self.resource.replace(" ", "_"),
            )
            return Fail(
                ErrorKind.FORBIDDEN,
                f"You can't edit this {self.resource} because you didn't create it.",
            )
        return Pass()


class CorrectUser:
    """Pass only when the path's username is the current identity's username."""

    def __init__(self, path_param: str = "username") -> None:
        self.path_param = path_param

    def __call__(self, ctx: RequestContext) -> Outcome:
        if ctx.identity is None:
            return Fail(ErrorKind.UNAUTHORIZED, LOGIN_REQUIRED_ACTION_MESSAGE)
        if ctx.path_params.get(self.path_param) != ctx.identity.username:
            logger.warning(
                "auth.rejected method=%s path=%s reason=wrong_user",
                ctx.method,
                ctx.path,
            )
            return Fail(ErrorKind.FORBIDDEN, WRONG_USER_MESSAGE)
        return Pass()


correct_user = CorrectUser()


def run_guards(ctx: RequestContext, guards: Iterable[Guard]) -> Outcome:
    """Run guards in order; return the first Fail, or Pass if all pass."""
    for guard in guards:
        outcome = guard(ctx)
        if not outcome.ok:
            return outcome
    return Pass()
