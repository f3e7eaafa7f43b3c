"""Request validation error handling."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY

from blogstack.monitoring.logging import get_logger
from blogstack.utils.helpers import host

logger = get_logger(__name__)

VALIDATION_MESSAGE = "error.validation"


def format_field_error(error: dict[str, Any]) -> dict[str, Any]:
    """
    Flatten one pydantic error into a field error.

    ``loc`` starts with where the value came from (``body``, ``query``,
    ``path``); the rest is the dotted field path, using the wire alias.
    """
    location, *path = error.get("loc", ()) or ("body",)
    field_error: dict[str, Any] = {
        "location": str(location),
        "field": ".".join(str(part) for part in path),
        "message": error.get("msg", "Invalid value"),
        "type": error.get("type", "validation_error"),
    }
    # ctx may hold the raised ValueError, which orjson cannot encode
    if "ctx" in error:
        field_error["context"] = {
            key: str(value) if isinstance(value, Exception) else value
            for key, value in error["ctx"].items()
        }
    return field_error


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Render request validation failures as a 422 with one entry per field.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse: ``detail``, ``message`` (``error.validation``) and ``errors``.
    """
    field_errors = [format_field_error(error) for error in cast(RequestValidationError, exc).errors()]

    logger.warning(
        f"Validation error for ip: {host(request)} at {request.method} {request.url.path}: {field_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation failed",
            "message": VALIDATION_MESSAGE,
            "errors": field_errors,
        },
    )
