"""
Structured logging with PII sanitization.

This module provides structured logging using structlog with:
- JSON output for non-development environments
- Pretty console output for development
- Automatic PII redaction
- Request ID correlation

Security
--------
Sensitive fields are automatically redacted from logs:
- Authorization headers
- Cookie values
- API keys
- Email addresses (pattern detection)
- JWT tokens
- Elasticsearch API keys and credentials embedded in URLs

The Elasticsearch transport logs every request at INFO; it is raised to
WARNING so request logs stay readable.

Examples
--------
>>> from blogstack.monitoring import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Blog saved", blog_id=1)
"""

from logging import INFO, WARNING, StreamHandler, getLogger, root
from logging.handlers import RotatingFileHandler
from pathlib import Path
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from blogstack.configs.settings import settings
from blogstack.utils.helpers import today_str

# Sensitive headers to redact
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "proxy-authorization",
    },
)

# Order matters: more specific patterns come first
PII_PATTERNS: list[tuple[Pattern, str]] = [
    (re_compile(r"(?<=://)[^/\s:@]+:[^/\s@]+(?=@)"), "[REDACTED_CREDENTIALS]"),
    (re_compile(r"(?i)(?<=ApiKey )[A-Za-z0-9+/=_-]+"), "[REDACTED_API_KEY]"),
    (re_compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"), "[REDACTED_JWT]"),
    (re_compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
]

# Characters to sanitize to prevent log injection
CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})

QUIET_LOGGERS: tuple[str, ...] = ("elastic_transport", "elasticsearch")


def sanitize_log_message(message: str) -> str:
    r"""
    Remove control characters and sanitize log messages.

    Args:
        message: Raw log message that might contain injection attempts.

    Returns:
        Sanitized message with control characters escaped or removed.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return str(message).translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with sensitive values redacted.

    Examples:
    --------
    >>> sanitize_headers({"Authorization": "Bearer token123", "Content-Type": "json"})
    {'Authorization': '[REDACTED]', 'Content-Type': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def redact_pii(message: str) -> str:
    """
    Redact PII patterns from log messages.

    Examples:
    --------
    >>> redact_pii("User user@example.com logged in")
    'User [REDACTED_EMAIL] logged in'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add a local timestamp to the log entry."""
    event_dict["timestamp"] = today_str()
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Sanitize the event dictionary for PII and injection.

    Args:
        logger: The wrapped logger instance.
        method_name: The name of the logging method being called.
        event_dict: The event dictionary being built.

    Returns:
        Sanitized event dictionary.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)

    return event_dict


def get_renderer(*, colors: bool = True) -> Processor:
    """Pick the final renderer for the current environment."""
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer()


def _formatter(*, colors: bool) -> ProcessorFormatter:
    return ProcessorFormatter(
        processors=[
            ProcessorFormatter.remove_processors_meta,
            ExtraAdder(),
            sanitize_event_dict,
            get_renderer(colors=colors),
        ],
        foreign_pre_chain=[
            merge_contextvars,
            add_logger_name,
            add_log_level,
            add_timestamp,
        ],
    )


def configure_structlog() -> None:
    """Configure structured logging for the application."""
    # Clear existing root handlers to prevent duplicates on hot reload
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            add_timestamp,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = StreamHandler()
    console_handler.setFormatter(_formatter(colors=True))
    root.addHandler(console_handler)
    configure_file_logging()

    for name in QUIET_LOGGERS:
        getLogger(name).setLevel(WARNING)


def configure_file_logging() -> None:
    """Attach a rotating file handler when file logging is enabled."""
    if not settings.LOG_TO_FILE:
        return

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
    )
    file_handler.setLevel(INFO)
    file_handler.setFormatter(_formatter(colors=False))
    root.addHandler(file_handler)


def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: The name of the logger (typically __name__).

    Returns:
        Configured structlog BoundLogger instance.
    """
    return struct_logger(name)


def set_request_id(request_id: str) -> None:
    """Bind request ID to the current logging context."""
    bind_contextvars(request_id=request_id)


def get_request_id() -> str | None:
    """Return the request ID bound to the current context, if any."""
    return get_contextvars().get("request_id")


def clear_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()
