"""Tests for application errors and their HTTP rendering."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.exceptions import RequestValidationError

from blogstack.errors import (
    BadRequestAlertError,
    DuplicateEntryError,
    RecordNotFoundError,
    SearchConfigurationError,
    SearchIndexError,
    alert_exception_handler,
    database_exception_handler,
    validation_exception_handler,
)
from blogstack.errors.validation import format_field_error


def _request(path: str = "/api/blogs") -> MagicMock:
    request = MagicMock()
    request.url.path = path
    request.client.host = "127.0.0.1"
    return request


def test_status_codes() -> None:
    assert RecordNotFoundError().status_code == 404
    assert DuplicateEntryError().status_code == 409
    assert SearchIndexError().status_code == 503
    assert SearchIndexError("bad query", status_code=400).status_code == 400
    assert SearchConfigurationError().status_code == 503


def test_bad_request_alert_error_attributes() -> None:
    exc = BadRequestAlertError("A new blog cannot already have an ID", "blog", "idexists")

    assert exc.status_code == 400
    assert exc.message == "error.idexists"
    assert exc.headers == {
        "X-blogstackApp-error": "error.idexists",
        "X-blogstackApp-params": "blog",
    }
    assert str(exc) == "A new blog cannot already have an ID"


@pytest.mark.asyncio
async def test_alert_handler_renders_body_and_headers() -> None:
    exc = BadRequestAlertError("A new entry cannot already have an ID", "entry", "idexists")

    response = await alert_exception_handler(_request(), exc)

    assert response.status_code == 400
    assert response.headers["X-blogstackApp-error"] == "error.idexists"
    assert orjson.loads(response.body) == {
        "detail": "A new entry cannot already have an ID",
        "entity_name": "entry",
        "error_key": "idexists",
        "message": "error.idexists",
    }


@pytest.mark.asyncio
async def test_database_handler_uses_error_status() -> None:
    response = await database_exception_handler(_request(), RecordNotFoundError("Blog with ID 9 not found"))

    assert response.status_code == 404
    assert orjson.loads(response.body) == {"detail": "Blog with ID 9 not found"}


def test_format_field_error_splits_location_and_path() -> None:
    error = {
        "loc": ("body", "tags", 0),
        "msg": "String should have at least 2 characters",
        "type": "string_too_short",
        "ctx": {"min_length": 2},
    }

    assert format_field_error(error) == {
        "location": "body",
        "field": "tags.0",
        "message": "String should have at least 2 characters",
        "type": "string_too_short",
        "context": {"min_length": 2},
    }


def test_format_field_error_stringifies_exceptions_in_context() -> None:
    error = {"loc": ("query", "size"), "msg": "bad", "type": "value_error", "ctx": {"error": ValueError("bad")}}

    assert format_field_error(error)["context"] == {"error": "bad"}


@pytest.mark.asyncio
async def test_validation_handler_renders_field_errors() -> None:
    request = _request("/api/entries")
    request.method = "GET"
    exc = RequestValidationError(
        [{"loc": ("query", "page"), "msg": "Input should be greater than or equal to 0", "type": "greater_than_equal"}],
    )

    response = await validation_exception_handler(request, exc)

    assert response.status_code == 422
    body = orjson.loads(response.body)
    assert body["message"] == "error.validation"
    assert body["errors"] == [
        {
            "location": "query",
            "field": "page",
            "message": "Input should be greater than or equal to 0",
            "type": "greater_than_equal",
        },
    ]
