"""
FastAPI Application Entry Point

This module creates and configures the catalog application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build the same app and override its dependencies

2. Lifespan Events
   - Startup and shutdown logging

3. Exception Handlers
   - HTTP errors (404 Genre not found, ...) render error.html
   - Database errors render a 500 page and are logged
   - Unparseable ids in the path render the 404 page
   - Internal details are only shown in debug mode, never in production
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from catalog.config import Settings, get_settings
from catalog.database import engine
from catalog.rendering import render_error
from catalog.routers import genres_router
from catalog.routers.genres import GENRE_LIST_URL, redirect
from catalog.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def error_detail(exc: Exception, settings: Settings) -> Optional[str]:
    """Text of ``exc`` for the error page, only in debug outside production."""
    if settings.debug and not settings.is_production:
        return str(exc)
    return None


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}, debug mode: {settings.debug}")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="Server-rendered library catalog.",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> Response:
        """Render HTTP errors (404 and friends) as the error page."""
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        else:
            logger.info(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

        response = render_error(request, status_code=exc.status_code, message=str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> Response:
        """
        Render unparseable input as an error page instead of JSON.

        A path id that is not an integer cannot name a genre, so it is
        handled like a missing one: the delete confirmation redirects to
        the list and every other page is a 404. Malformed form fields get
        a 422 page.
        """
        errors = exc.errors()
        logger.info(f"Invalid request on {request.url.path}: {errors}")

        if any(error.get("loc") and error["loc"][0] == "path" for error in errors):
            if request.method == "GET" and request.url.path.endswith("/delete"):
                return redirect(GENRE_LIST_URL)
            return render_error(
                request,
                status_code=404,
                message="Genre not found",
            )

        fields = ", ".join(str(error["loc"][-1]) for error in errors)
        return render_error(
            request,
            status_code=422,
            message=f"Invalid value for: {fields}",
            detail=error_detail(exc, settings),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> Response:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error while showing users a generic page.
        """
        logger.error(f"Database error on {request.url.path}: {exc}")
        return render_error(
            request,
            status_code=500,
            message="A database error occurred. Please try again later.",
            detail=error_detail(exc, settings),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> Response:
        """Catch-all exception handler."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return render_error(
            request,
            status_code=500,
            message="An internal error occurred.",
            detail=error_detail(exc, settings),
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(genres_router)

    # -------------------------------------------------------------------------
    # Health Check & Root
    # -------------------------------------------------------------------------
    @app.get("/health", tags=["Health"], summary="Health check")
    async def health_check() -> dict:
        """
        Health check endpoint for load balancers and monitoring.

        Reports whether the database answers a trivial query.
        """
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            database_ok = True
        except SQLAlchemyError as exc:
            logger.warning(f"Health check database error: {exc}")
            database_ok = False

        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app_name,
            "environment": settings.environment,
            "database": {"healthy": database_ok},
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "default_limit": settings.rate_limit_default,
                "write_limit": settings.rate_limit_write,
            },
        }

    @app.get("/", include_in_schema=False)
    @app.get("/catalog", include_in_schema=False)
    async def root() -> RedirectResponse:
        """The genre list is the landing page."""
        return RedirectResponse(url=GENRE_LIST_URL, status_code=302)

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
