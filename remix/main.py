"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url
from starlette.exceptions import HTTPException as StarletteHTTPException

from remix.api.deps import get_request_context
from remix.api.v1 import router as api_router
from remix.core.config import Settings, get_settings
from remix.core.request_logging import RequestLoggingMiddleware, setup_logging
from remix.core.security import CredentialVerifier
from remix.errors import BadRequestError, NotFoundError, RemixError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: Any) -> JSONResponse:
    """The single error body shape: {"error": {"status", "message"}}."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"status": status_code, "message": message}},
    )


def _describe_validation_errors(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RemixError)
    async def handle_remix_error(request: Request, exc: RemixError) -> JSONResponse:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed input (missing field, wrong type, bad path id) is a 400 like other bad requests."""
        messages = _describe_validation_errors(exc)
        return error_response(
            BadRequestError.status_code,
            messages or BadRequestError.default_message,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return error_response(404, NotFoundError.default_message)
        return error_response(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unexpected error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=True,
        )
        return error_response(500, RemixError.default_message)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application for the given settings (defaults to the cached env settings).
    The credential verifier is created here once and read by request dependencies.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings.DEBUG)
        logger.info(
            "Remix API starting env=%s port=%d bcrypt_work_factor=%d",
            settings.APP_ENV,
            settings.PORT,
            settings.bcrypt_work_factor,
        )
        logger.info(
            "Database: %s",
            make_url(settings.database_url).render_as_string(hide_password=True),
        )
        yield
        logger.info("Remix API shutting down")

    app = FastAPI(
        title="Remix API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        dependencies=[Depends(get_request_context)],
    )
    app.state.settings = settings
    app.state.credentials = CredentialVerifier(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Remix API"}

    return app


app = create_app()
