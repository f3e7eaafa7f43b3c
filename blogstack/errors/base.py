from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from blogstack.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    @property
    def headers(self) -> dict[str, str]:
        """Extra response headers for this error."""
        return {}


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")
        headers: dict[str, str] = getattr(exc, "headers", {})

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        # Response body carries the message plus any additional exception attributes
        content: dict[str, Any] = {"detail": detail}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in ("status_code", "detail")},
        )

        return ORJSONResponse(content=content, status_code=status_code, headers=headers)

    return handler
