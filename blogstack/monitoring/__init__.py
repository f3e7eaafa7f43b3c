"""
Monitoring and observability module for blogstack.

Usage
-----
>>> from blogstack.monitoring import get_logger
>>> logger = get_logger(__name__)
"""

from blogstack.monitoring.logging import (
    clear_context,
    configure_structlog,
    get_logger,
    get_request_id,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
    set_request_id,
)
from blogstack.monitoring.prometheus import (
    expose_metrics,
    record_mirror_failure,
    record_resource_duration,
)

__all__ = [
    "clear_context",
    "configure_structlog",
    "get_logger",
    "get_request_id",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
    "set_request_id",
    "expose_metrics",
    "record_mirror_failure",
    "record_resource_duration",
]
