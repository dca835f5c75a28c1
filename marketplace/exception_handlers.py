"""
Exception handlers for the marketplace API.

Register these on a FastAPI app instance via `register_exception_handlers(app)`.
Every error body has the shape ``{"error": "<message>"}``.
"""
import logging
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.env import is_local_env
from .core.errors import MarketplaceError

logger = logging.getLogger("marketplace")


async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    """Map service errors to their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request data"
    first = errors[0]
    # drop the leading "body"/"query" segment
    loc = [str(part) for part in first.get("loc", ())[1:]]
    message = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {message}" if loc else message


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400, not FastAPI's default 422."""
    return JSONResponse(
        status_code=400,
        content={"error": _describe_validation_error(exc)},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors"""
    error_traceback = traceback.format_exc()
    logger.error(f"Unhandled exception: {exc}\n{error_traceback}", exc_info=True)

    # In production, don't leak internal error details to clients
    if is_local_env():
        error_message = str(exc) or "Internal server error"
    else:
        error_message = "Internal server error"

    return JSONResponse(status_code=500, content={"error": error_message})


def register_exception_handlers(app):
    """Register all exception handlers on the given FastAPI app."""
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
