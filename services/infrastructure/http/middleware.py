"""
Middleware configuration for MermaidUI application.

Handles:
- CORS configuration
- Request body size limiting
- Request/response logging
"""

import time
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from config.settings import config

logger = logging.getLogger(__name__)

# Maximum request body size (5MB) - uploads are small text files
MAX_REQUEST_BODY_SIZE = 5 * 1024 * 1024  # 5MB

# Exports launch a headless browser; anything slower than this is worth a warning
SLOW_EXPORT_SECONDS = 20
SLOW_REQUEST_SECONDS = 5


async def limit_request_body_size(request: Request, call_next):
    """
    Limit request body size.

    Rejects requests with Content-Length exceeding MAX_REQUEST_BODY_SIZE.
    """
    content_length = request.headers.get('content-length')
    if content_length:
        try:
            size = int(content_length)
            if size > MAX_REQUEST_BODY_SIZE:
                client_ip = request.client.host if request.client else 'unknown'
                logger.warning(
                    "Rejected %.1fMB request body from %s on %s",
                    size / 1024 / 1024, client_ip, request.url.path
                )
                return JSONResponse(
                    status_code=413,
                    content={
                        "error": f"Request body too large. Maximum size is {MAX_REQUEST_BODY_SIZE // 1024 // 1024}MB"
                    }
                )
        except ValueError:
            # Invalid Content-Length header, let it pass (will fail elsewhere if malformed)
            pass

    return await call_next(request)


async def log_requests(request: Request, call_next):
    """
    Log all HTTP requests and responses with timing information.
    """
    start_time = time.time()

    response = await call_next(request)

    response_time = time.time() - start_time
    client_host = request.client.host if request.client else 'unknown'
    logger.debug(
        "Request: %s %s from %s Response: %s in %.3fs",
        request.method, request.url.path, client_host, response.status_code, response_time
    )

    if request.url.path.startswith('/api/export/'):
        if response_time > SLOW_EXPORT_SECONDS:
            logger.warning(
                "Slow export: %s %s took %.3fs",
                request.method, request.url.path, response_time
            )
    elif response_time > SLOW_REQUEST_SECONDS:
        logger.warning(
            "Slow request: %s %s took %.3fs",
            request.method, request.url.path, response_time
        )

    return response


def setup_middleware(app: FastAPI):
    """
    Register all middleware with the FastAPI application.

    Order matters - middleware is executed in reverse order of registration.
    """
    allowed_origins = config.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials='*' not in allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.middleware("http")(limit_request_body_size)
    app.middleware("http")(log_requests)
