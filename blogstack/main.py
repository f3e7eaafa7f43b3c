# blogstack/main.py

"""blogstack - Blog and entry REST API with a search-index mirror."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from blogstack.configs import API_PREFIX, settings
from blogstack.db import check_db
from blogstack.errors import (
    BadRequestAlertError,
    DatabaseError,
    SearchIndexError,
    alert_exception_handler,
    database_exception_handler,
    search_exception_handler,
    validation_exception_handler,
)
from blogstack.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blogstack.monitoring import expose_metrics
from blogstack.routes import blog_router, entry_router
from blogstack.schemas import HealthCheckResponse, ServicesStatus
from blogstack.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blogs and entries with full-text search",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [
    blog_router,
    entry_router,
]

_ = [app.include_router(router, prefix=API_PREFIX) for router in routes]

errors = [
    (BadRequestAlertError, alert_exception_handler),
    (DatabaseError, database_exception_handler),
    (SearchIndexError, search_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

expose_metrics(app)


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2026-01-01 10:00:00",
                        "services": {
                            "database": "healthy",
                            "search_backend": "elasticsearch",
                            "search": "healthy",
                        },
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Overall status plus the status of the store and the search index.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "...", "services": { ... }}
    """
    search = request.app.state.search
    database_ok = await check_db()
    search_ok = await search.is_healthy()

    services = ServicesStatus(
        database="healthy" if database_ok else "unhealthy",
        search_backend=search.name,
        search="healthy" if search_ok else "unhealthy",
    )
    response = HealthCheckResponse(
        version=app.version,
        status="ok" if database_ok and search_ok else "degraded",
        timestamp=today_str(),
        services=services,
    )
    return ORJSONResponse(response.model_dump())


if __name__ == "__main__":
    from uvicorn import run

    run(
        "blogstack.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="info",
        reload=True,
    )
