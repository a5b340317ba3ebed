"""FastAPI application entry point.

This module creates and configures the FastAPI application, including:
- Logging configuration
- Exception handlers mapping errors to the response envelope
- API router mounting under /api
- Health check endpoint
"""

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from account_service.api.v1.router import router as api_router
from account_service.core.config import settings
from account_service.core.errors import APIError, InternalError
from account_service.core.logging import configure_logging
from account_service.core.responses import ErrorResponse

logger = structlog.get_logger()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses.

    Headers added:
    - X-Frame-Options: Prevents clickjacking attacks
    - X-Content-Type-Options: Prevents MIME sniffing
    - X-XSS-Protection: Enables XSS filtering in older browsers
    - Referrer-Policy: Controls referrer information leakage
    - Cache-Control: Prevents caching of sensitive data on API responses
    - Content-Security-Policy: Restricts resource loading (API returns no HTML)
    - Cross-Origin-Opener-Policy: Isolates browsing context (Spectre mitigation)
    - Cross-Origin-Embedder-Policy: Requires CORP for cross-origin resources (Spectre)
    - Cross-Origin-Resource-Policy: Restricts resource sharing to same-origin (Spectre)
    - Strict-Transport-Security: Forces HTTPS (production only)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        # Clickjacking protection
        response.headers["X-Frame-Options"] = "DENY"

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        # XSS protection for older browsers
        response.headers["X-XSS-Protection"] = "1; mode=block"

        # Control referrer information leakage
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # API responses carry tokens and account data
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, max-age=0"

        # JSON only, nothing to load or frame
        response.headers["Content-Security-Policy"] = (
            "default-src 'none'; frame-ancestors 'none'"
        )

        # Cross-origin isolation
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        response.headers["Cross-Origin-Embedder-Policy"] = "require-corp"
        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"

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
            message=exc.message,
            errors=exc.errors,
        ).model_dump(exclude_none=True),
    )


def _error_field(loc: tuple) -> str:
    """Field name for a Pydantic error location, skipping the source prefix."""
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) if parts else "body"


def _error_message(error: dict) -> str:
    """Message for one Pydantic error, without the "Value error, " prefix."""
    ctx_error = error.get("ctx", {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    return error["msg"]


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors from FastAPI.

    Converts FastAPI's validation errors to the envelope with messages
    grouped by field name.

    Args:
        request: The incoming request.
        exc: The RequestValidationError from Pydantic.

    Returns:
        JSONResponse (422) with field-level messages.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_error_field(tuple(error["loc"])), []).append(
            _error_message(error)
        )

    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            message="Validation failed",
            errors=errors,
        ).model_dump(exclude_none=True),
    )


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Returns 500 without exposing stack traces. The exception is logged
    with the request path.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with generic error message (500).
    """
    logger.exception("Unhandled exception", exc_info=exc, path=str(request.url.path))
    return api_error_handler(request, InternalError())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging(settings)

    app = FastAPI(
        title="Account Service API",
        version="1.0.0",
        description="User accounts with bearer token authentication",
    )

    # Middleware order: Starlette uses LIFO, so the LAST added runs FIRST.
    # CORS must run first to handle preflight requests, so add it last.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
    )

    # Register exception handlers
    # Order matters: specific handlers first, then catch-all
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(api_router, prefix="/api")

    # Health check endpoint (outside the API prefix)
    @app.get("/health")
    def health_check() -> dict:
        """Health check endpoint for monitoring.

        Returns:
            {"status": "healthy"} if service is running.
        """
        return {"status": "healthy"}

    return app


# Used by uvicorn: uvicorn account_service.main:app
app = create_app()
