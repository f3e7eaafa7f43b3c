"""
Prometheus metrics collection.

Resource operations are timed into a single histogram labelled by endpoint
pattern and outcome. Dual-write mirror failures get their own counter so an
index drifting away from the store shows up on dashboards.

Security
--------
Entity IDs, logins and queries are NEVER used as labels.
"""

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Latency buckets based on expected latency profile
LATENCY_BUCKETS: tuple[float, ...] = (
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

resource_duration_seconds = Histogram(
    "blogstack_resource_duration_seconds",
    "Time spent handling a REST resource operation",
    labelnames=("endpoint", "outcome"),
    buckets=LATENCY_BUCKETS,
)

search_mirror_failures_total = Counter(
    "blogstack_search_mirror_failures_total",
    "Index writes that failed after the store write was committed",
    labelnames=("entity", "operation"),
)


def record_resource_duration(endpoint: str, duration: float, *, success: bool) -> None:
    """Record the duration of one resource operation."""
    outcome = "success" if success else "error"
    resource_duration_seconds.labels(endpoint=endpoint, outcome=outcome).observe(duration)


def record_mirror_failure(entity: str, operation: str) -> None:
    """Count an index write that failed after a committed store write."""
    search_mirror_failures_total.labels(entity=entity, operation=operation).inc()


def expose_metrics(app: FastAPI) -> None:
    """Register the ``/metrics`` endpoint in Prometheus text format."""

    @app.get("/metrics", tags=["📈 Metrics"], include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
