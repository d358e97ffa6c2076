"""Exception handlers for the FastAPI application.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Upstream and internal failures never leak their details to the client;
the full exception is logged instead.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from smogmap.exceptions import AuthenticationError, SmogmapError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def _cors_headers(request: Request) -> dict[str, str]:
    """CORS headers for responses built outside the CORS middleware.

    Handlers for bare Exception run in Starlette's outermost error
    middleware, so CORSMiddleware never sees their responses.
    """
    origin = request.headers.get("origin")
    if origin is None:
        return {}

    allowed = request.app.state.settings.cors_origins
    if "*" in allowed:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allowed:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(SmogmapError)
    async def smogmap_exception_handler(
        request: Request,
        exc: SmogmapError,
    ) -> JSONResponse:
        """Handle upstream failures that abort the whole request."""
        if isinstance(exc, AuthenticationError):
            logger.error(
                "Pollution API authentication failed on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
            code = "UPSTREAM_AUTH_FAILED"
        else:
            logger.error(
                "Upstream error on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
            code = "UPSTREAM_ERROR"

        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code=code,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for exceptions not handled above."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code="INTERNAL_ERROR",
            headers=_cors_headers(request),
        )
