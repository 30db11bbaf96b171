"""
Exception handlers for MermaidUI application.

Every error response has the shape {"error": str, "details"?: str}.

Handles:
- Request validation errors (400)
- Storage validation / not-found / internal errors
- HTTP exceptions
- General unhandled exceptions
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from config.settings import config
from services.storage.exceptions import (
    StorageValidationError,
    CollectionNotFoundError,
    DiagramNotFoundError,
    StorageInternalError,
)

logger = logging.getLogger(__name__)


def error_body(error: str, details: str = None) -> dict:
    """Build the standard error body."""
    body = {"error": error}
    if details:
        body["details"] = details
    return body


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors as 400 Bad Request.

    These occur when request body/parameters don't match the expected schema.
    Common causes: wrong data types, malformed JSON, non-numeric ids.
    """
    path = getattr(request.url, 'path', '') if request and request.url else ''

    errors = exc.errors() if hasattr(exc, 'errors') else []
    error_details = []
    for error in errors:
        loc = error.get('loc', [])
        msg = error.get('msg', '')
        error_details.append(f"{'.'.join(str(x) for x in loc)}: {msg}")

    error_summary = '; '.join(error_details[:3])  # Show first 3 errors
    if len(error_details) > 3:
        error_summary += f" ... and {len(error_details) - 3} more"

    logger.debug("Request validation error on %s: %s", path, error_summary)

    return JSONResponse(
        status_code=400,
        content=error_body("Request validation failed", error_summary)
    )


async def storage_validation_handler(_request: Request, exc: StorageValidationError):
    """Missing or malformed fields rejected by the storage service."""
    logger.debug("Storage validation error: %s", exc.message)
    return JSONResponse(status_code=400, content=error_body(exc.message))


async def storage_not_found_handler(_request: Request, exc: Exception):
    """A referenced collection or diagram does not exist."""
    message = getattr(exc, 'message', str(exc))
    logger.debug("Storage not found: %s", message)
    return JSONResponse(status_code=404, content=error_body(message))


async def storage_internal_handler(_request: Request, exc: StorageInternalError):
    """Store failure; already rolled back and logged by the storage service."""
    details = exc.context.get("cause") if config.debug else None
    return JSONResponse(status_code=500, content=error_body("Internal server error", details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handle HTTP exceptions.

    ``detail`` may be a message string or a ready {"error", "details"} dict.
    """
    path = getattr(request.url, 'path', '') if request and request.url else ''
    detail = exc.detail

    if exc.status_code in (400, 404):
        # Client errors (bad parameters, missing records) are expected
        logger.debug("HTTP %s on %s: %s", exc.status_code, path, detail)
    else:
        logger.warning("HTTP %s on %s: %s", exc.status_code, path, detail)

    if isinstance(detail, dict):
        content = detail
    else:
        content = error_body(str(detail) if detail else "Error")
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, 'headers', None)
    )


async def general_exception_handler(_request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error("Unhandled exception: %s: %s", type(exc).__name__, exc, exc_info=True)

    # Add debug info in development mode
    details = str(exc) if config.debug else None

    return JSONResponse(
        status_code=500,
        content=error_body("An unexpected error occurred. Please try again later.", details)
    )


def setup_exception_handlers(app: FastAPI):
    """
    Register all exception handlers with the FastAPI application.
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StorageValidationError, storage_validation_handler)
    app.add_exception_handler(CollectionNotFoundError, storage_not_found_handler)
    app.add_exception_handler(DiagramNotFoundError, storage_not_found_handler)
    app.add_exception_handler(StorageInternalError, storage_internal_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
