"""FastAPI application entry point.

This module creates and configures the FastAPI application, including:
- Logging configuration
- Exception handlers for API and persistence errors
- Router mounting
- Per-app onboarding and profile services
- Root and health check endpoints
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from job_assistant.api.v1.router import router as v1_router
from job_assistant.core.config import settings
from job_assistant.core.database import dispose_engines
from job_assistant.core.errors import APIError
from job_assistant.core.logging import configure_logging
from job_assistant.core.rate_limiting import limiter, rate_limit_exceeded_handler
from job_assistant.core.responses import ErrorDetail, ErrorResponse
from job_assistant.repositories.errors import StoreError
from job_assistant.repositories.store import PersistenceAdapter, SqlPersistenceStore
from job_assistant.services.onboarding_service import OnboardingService
from job_assistant.services.profile_service import ProfileService

logger = structlog.get_logger()

_LOG_EXCERPT_LENGTH = 200
"""Maximum characters of database error text written to logs."""


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses.

    Headers added:
    - X-Frame-Options: Prevents clickjacking attacks
    - X-Content-Type-Options: Prevents MIME sniffing
    - Referrer-Policy: Controls referrer information leakage
    - Cache-Control: Onboarding/profile responses carry personal data
    - Content-Security-Policy: Restricts resource loading (API returns no HTML)
    - Strict-Transport-Security: Forces HTTPS (production only)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        path = request.url.path
        if path.startswith(
            (f"{settings.api_prefix}/onboarding", f"{settings.api_prefix}/profile")
        ):
            response.headers["Cache-Control"] = "no-store, max-age=0"

        response.headers["Content-Security-Policy"] = (
            "default-src 'none'; frame-ancestors 'none'"
        )

        # HSTS only in production (assumes HTTPS via reverse proxy)
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors.

    Args:
        request: The incoming request.
        exc: The APIError that was raised.

    Returns:
        JSONResponse with error envelope and appropriate status code.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            )
        ).model_dump(),
    )


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors from FastAPI.

    Converts FastAPI's validation errors to the standard envelope (400).

    Args:
        request: The incoming request.
        exc: The RequestValidationError from Pydantic.

    Returns:
        JSONResponse with VALIDATION_ERROR code and field-level details.
    """
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details=[
                    {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
                    for e in exc.errors()
                ],
            )
        ).model_dump(),
    )


def _internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
            )
        ).model_dump(),
    )


def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Handle persistence failures that services did not absorb.

    Returns the generic 500 envelope; database text never reaches the
    client. Service caches keep the state computed before the failed write.

    Args:
        request: The incoming request.
        exc: The StoreError raised by the persistence adapter.

    Returns:
        JSONResponse with generic error message (500).
    """
    logger.error(
        "Persistence operation failed",
        kind=exc.kind.value,
        table=exc.table,
        error=str(exc)[:_LOG_EXCERPT_LENGTH],
        method=request.method,
        path=str(request.url.path),
    )
    return _internal_error_response()


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Returns 500 INTERNAL_ERROR without exposing stack traces.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with generic error message (500).
    """
    logger.exception(
        "Unhandled exception",
        exc_info=exc,
        method=request.method,
        path=str(request.url.path),
    )
    return _internal_error_response()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup configuration and release database engines on shutdown."""
    logger.info(
        "API server starting",
        service=settings.service_name,
        port=settings.api_port,
        persistence_configured=app.state.store.is_configured(),
    )
    yield
    await dispose_engines()


def create_app(store: PersistenceAdapter | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Persistence adapter shared by the services. Defaults to a
            SqlPersistenceStore reading DATABASE_URL (cache-only when empty).

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging(settings)

    app = FastAPI(
        title="Job Assistant API",
        version="1.0.0",
        description="Onboarding wizard and profile management",
        lifespan=lifespan,
    )

    if store is None:
        store = SqlPersistenceStore(settings)
    app.state.store = store
    app.state.onboarding_service = OnboardingService(store)
    app.state.profile_service = ProfileService(store)

    # Middleware order: Starlette uses LIFO, so the LAST added runs FIRST.
    # CORS must run first to handle preflight requests, so add it last.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization", "X-Request-ID"],
    )

    # Order matters: specific handlers first, then catch-all
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.state.limiter = limiter

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.get("/")
    def root() -> dict:
        """Service banner used by uptime checks."""
        return {
            "status": "ok",
            "service": settings.service_name,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.head("/")
    def root_head() -> Response:
        return Response(status_code=200)

    @app.get("/health")
    def health_check() -> dict:
        """Health check endpoint for monitoring.

        Returns:
            {"status": "healthy"} if service is running.
        """
        return {"status": "healthy"}

    return app


# Create the application instance
# Used by uvicorn: uvicorn job_assistant.main:app
app = create_app()
