# blogstack/middleware/middleware.py
"""
Middleware components for the blogstack API.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan event handler that initializes and closes
the database and the search backend.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from blogstack.configs import settings
from blogstack.db import close_db, init_db
from blogstack.monitoring.logging import (
    clear_context,
    configure_structlog,
    get_logger,
    set_request_id,
)
from blogstack.search import create_search_backend
from blogstack.utils.helpers import get_summary, host

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    configure_structlog()

    # Startup
    logger.info(f"Starting {app.title}...")
    logger.info(f"{app.description}")

    try:
        await init_db()

        search = create_search_backend()
        await search.ensure_indexes()
        app.state.search = search

        logger.info("Services initialized successfully")
        logger.info("Services:")
        logger.info("  - Backend API: http://localhost:8000/api")
        logger.info("  - API Documentation: http://localhost:8000/docs")
        logger.info("  - Health Check: http://localhost:8000/health")
        logger.info("  - Metrics: http://localhost:8000/metrics")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {app.title}...")

    try:
        await app.state.search.close()
        await close_db()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:9000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    alert = f"X-{settings.CLIENT_APP_NAME}"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[
            REQUEST_ID_HEADER,
            "Location",
            "Link",
            "X-Total-Count",
            f"{alert}-alert",
            f"{alert}-error",
            f"{alert}-params",
        ],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing, with a request ID bound to every log line."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        set_request_id(request_id)

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time

            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration:.2f}s",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
