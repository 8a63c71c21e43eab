"""FastAPI dependencies wiring the auth guards to requests.

get_request_context runs identity extraction once per request (it is an
app-level dependency, and FastAPI caches it for the route's own
dependencies). Route dependencies then apply login and ownership guards in
that order and raise the mapped RemixError on the first Fail.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from remix.core.auth import (
    Guard,
    IdentityExtraction,
    OwnershipRequired,
    RequestContext,
    correct_user,
    login_required,
    run_guards,
)
from remix.core.database import get_db
from remix.core.security import CredentialVerifier, Identity
from remix.errors import BadRequestError, raise_on_fail
from remix.repositories import RecipeRepository, RemixRepository, UserRepository


def get_credential_verifier(request: Request) -> CredentialVerifier:
    """The verifier built from settings at startup."""
    return request.app.state.credentials


def get_request_context(
    request: Request,
    verifier: Annotated[CredentialVerifier, Depends(get_credential_verifier)],
) -> RequestContext:
    """Build the guard context and attach the identity (or none) to request.state.user."""
    ctx = RequestContext(
        authorization=request.headers.get("authorization"),
        path_params=request.path_params,
        method=request.method,
        path=request.url.path,
    )
    IdentityExtraction(verifier)(ctx)
    request.state.user = ctx.identity
    return ctx


def enforce(ctx: RequestContext, *guards: Guard) -> Identity:
    """Run guards in order and raise on the first Fail; return the identity otherwise."""
    raise_on_fail(run_guards(ctx, guards))
    return ctx.identity


def require_login(ctx: Annotated[RequestContext, Depends(get_request_context)]) -> Identity:
    return enforce(ctx, login_required)


def require_correct_user(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
) -> Identity:
    """Login plus: the {username} in the path must be the caller's own."""
    return enforce(ctx, login_required, correct_user)


def _path_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise BadRequestError("The id in the path must be a whole number.") from None


# Ownership dependencies read the raw id from the context, so the login gate
# runs before the id is parsed: anonymous callers get 401 even for a bad id.


def require_recipe_owner(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    repo = RecipeRepository(db)
    return enforce(
        ctx,
        login_required,
        OwnershipRequired("recipe", "recipe_id", lambda raw: repo.get_recipe_author(_path_id(raw))),
    )


def require_recipe_review_owner(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    repo = RecipeRepository(db)
    return enforce(
        ctx,
        login_required,
        OwnershipRequired(
            "recipe review", "review_id", lambda raw: repo.get_review_author(_path_id(raw))
        ),
    )


def require_remix_owner(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    repo = RemixRepository(db)
    return enforce(
        ctx,
        login_required,
        OwnershipRequired("remix", "remix_id", lambda raw: repo.get_remix_author(_path_id(raw))),
    )


def require_remix_review_owner(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    repo = RemixRepository(db)
    return enforce(
        ctx,
        login_required,
        OwnershipRequired(
            "remix review", "review_id", lambda raw: repo.get_review_author(_path_id(raw))
        ),
    )


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
    verifier: Annotated[CredentialVerifier, Depends(get_credential_verifier)],
) -> UserRepository:
    return UserRepository(db, verifier)


def get_recipe_repository(db: Annotated[Session, Depends(get_db)]) -> RecipeRepository:
    return RecipeRepository(db)


def get_remix_repository(db: Annotated[Session, Depends(get_db)]) -> RemixRepository:
    return RemixRepository(db)
