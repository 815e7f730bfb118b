"""
Shopfront Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn app.main:app`) and the test suite (`create_app()`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → GZip → CORS │
    │                                                     │
    │  Routes:                                            │
    │   /products[...]   /favorites[...]   /health        │
    │                                                     │
    │  Exception Handlers:                                │
    │   Unauthorized→401  Forbidden→403  NotFound→404     │
    │   Validation/Integrity→422  SQLAlchemy→500  *→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, report unsafe configuration
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    ShopfrontError,
    NotFoundError,
    ForbiddenError,
    UnauthorizedError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from app.routes import favorites, health, products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s

    The request id comes from RequestIDLogFilter, attached to the handler so
    records from every logger (ours, uvicorn's, SQLAlchemy's) carry it.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # The access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Shopfront Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Reported, not fatal: local development runs on the defaults
        logger.warning("%s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Shopfront Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the
    # ContextVar has been reset; request.state still has the id.
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_body(request: Request, error: str, message: str, details=None) -> dict:
    body = {"error": error, "message": message, "request_id": _request_id(request)}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse shape.

    Handler table:
        UnauthorizedError                         → 401 (WWW-Authenticate: Bearer)
        ForbiddenError                            → 403
        NotFoundError                             → 404
        RequestValidationError / pydantic errors  → 422
        IntegrityError (constraint rejection)     → 422
        ShopfrontError (base)                     → 500
        SQLAlchemyError                           → 500, generic message
        Exception (fallback)                      → 500, generic message

    Route handlers never catch; every failure reaches exactly one of these.
    Internal details (SQL, stack traces) are logged, not returned.
    """

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content=_error_body(request, "unauthorized", exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("Ownership check failed: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=403,
            content=_error_body(request, "forbidden", exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body(request, "not_found", exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=_error_body(
                request,
                "validation_error",
                "The request body or parameters are invalid",
                {"errors": jsonable_encoder(exc.errors())},
            ),
        )

    @app.exception_handler(PydanticValidationError)
    async def handle_model_validation(request: Request, exc: PydanticValidationError):
        return JSONResponse(
            status_code=422,
            content=_error_body(
                request,
                "validation_error",
                "The submitted fields are invalid",
                {"errors": jsonable_encoder(exc.errors(include_url=False))},
            ),
        )

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning("Constraint rejected write: %s", str(exc.orig))
        return JSONResponse(
            status_code=422,
            content=_error_body(
                request,
                "validation_error",
                "The submitted data references a missing record or violates a constraint",
            ),
        )

    @app.exception_handler(ShopfrontError)
    async def handle_app_error(request: Request, exc: ShopfrontError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "server_error", exc.message),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error("Database error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request,
                "server_error",
                "A database error occurred. Please try again later.",
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request,
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call returns a fresh instance with its own middleware stack, which
    the tests rely on to isolate dependency overrides.
    """
    app = FastAPI(
        title="Shopfront API",
        description=(
            "Products and favorites with bearer-token authentication "
            "and per-resource ownership."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(favorites.router)
    app.include_router(health.router)

    return app


app = create_app()
