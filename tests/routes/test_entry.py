from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, call

import pytest
from fastapi import status
from httpx import AsyncClient

from blogstack.configs import settings
from blogstack.errors import IntegrityViolationError, RecordNotFoundError, SearchIndexError
from blogstack.models import EntryDB
from blogstack.schemas import EntryRequest, EntryResponse
from blogstack.utils.pagination import Order, Page, Pageable

ALERT = "X-blogstackApp-alert"
PARAMS = "X-blogstackApp-params"
ERROR = "X-blogstackApp-error"

ENTRY_PAYLOAD = {
    "title": "Welcome",
    "content": "First post",
    "date": "2026-01-05T10:00:00Z",
    "blogId": 1,
    "tags": ["jhipster"],
}


@pytest.mark.asyncio
async def test_create_entry(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
    sample_entry: EntryDB,
) -> None:
    entry_repo.save.return_value = sample_entry

    response = await client.post("/api/entries", json=ENTRY_PAYLOAD)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.headers["Location"] == "/api/entries/1"
    assert response.headers[ALERT] == "blogstackApp.entry.created"
    assert response.headers[PARAMS] == "1"
    body = response.json()
    assert body["title"] == "Welcome"
    assert body["blog"] == {"id": 1, "name": "Jhipster Blog", "handle": "jhipster"}
    assert body["tags"] == [{"id": 1, "name": "jhipster"}]

    saved: EntryRequest = entry_repo.save.await_args.args[0]
    assert saved.id is None
    assert saved.blog_id == 1
    assert saved.date == datetime(2026, 1, 5, 10, 0, tzinfo=UTC)
    assert saved.tags == ["jhipster"]
    entry_search.save.assert_awaited_once_with(sample_entry)


@pytest.mark.asyncio
async def test_create_entry_writes_store_before_index(
    client: AsyncClient,
    entry_repo: AsyncMock,
    call_order: MagicMock,
    sample_entry: EntryDB,
) -> None:
    entry_repo.save.return_value = sample_entry

    await client.post("/api/entries", json=ENTRY_PAYLOAD)

    names = [name for name, _, _ in call_order.mock_calls]
    assert names == ["entry_repo.save", "entry_search.save"]


@pytest.mark.asyncio
async def test_create_entry_with_existing_id(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    response = await client.post("/api/entries", json={**ENTRY_PAYLOAD, "id": 5})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.headers[ERROR] == "error.idexists"
    assert response.headers[PARAMS] == "entry"
    entry_repo.save.assert_not_awaited()
    entry_search.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_entry_in_unknown_blog(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    entry_repo.save.side_effect = IntegrityViolationError("Blog with ID 1 not found")

    response = await client.post("/api/entries", json=ENTRY_PAYLOAD)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    entry_search.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_entry_rejects_short_tag(client: AsyncClient, entry_repo: AsyncMock) -> None:
    response = await client.post("/api/entries", json={**ENTRY_PAYLOAD, "tags": ["x"]})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    entry_repo.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_entry_rejects_date_without_offset(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    response = await client.post("/api/entries", json={**ENTRY_PAYLOAD, "date": "2026-01-05T10:00:00"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    error = response.json()["errors"][0]
    assert (error["location"], error["field"], error["type"]) == ("body", "date", "timezone_aware")
    entry_repo.save.assert_not_awaited()
    entry_search.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_entry(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
    sample_entry: EntryDB,
) -> None:
    entry_repo.save.return_value = sample_entry

    response = await client.put("/api/entries", json={**ENTRY_PAYLOAD, "id": 1})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers[ALERT] == "blogstackApp.entry.updated"
    assert response.headers[PARAMS] == "1"
    assert entry_repo.save.await_args.args[0].id == 1
    entry_search.save.assert_awaited_once_with(sample_entry)


@pytest.mark.asyncio
async def test_update_entry_without_id_creates(
    client: AsyncClient,
    entry_repo: AsyncMock,
    sample_entry: EntryDB,
) -> None:
    entry_repo.save.return_value = sample_entry

    response = await client.put("/api/entries", json=ENTRY_PAYLOAD)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.headers["Location"] == "/api/entries/1"
    assert response.headers[ALERT] == "blogstackApp.entry.created"


@pytest.mark.asyncio
async def test_update_unknown_entry(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    entry_repo.save.side_effect = RecordNotFoundError("Entry with ID 9 not found")

    response = await client.put("/api/entries", json={**ENTRY_PAYLOAD, "id": 9})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    entry_search.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_entry_strict_mirror(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
    sample_entry: EntryDB,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(settings, "SEARCH_STRICT_MIRROR", True)
    entry_repo.save.return_value = sample_entry
    entry_search.save.side_effect = SearchIndexError()

    response = await client.put("/api/entries", json={**ENTRY_PAYLOAD, "id": 1})

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    entry_repo.save.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_all_entries_paginated(
    client: AsyncClient,
    entry_repo: AsyncMock,
    sample_entry: EntryDB,
) -> None:
    entry_repo.find_by_blog_user_login_order_by_date_desc.return_value = Page(
        content=[sample_entry],
        number=1,
        size=1,
        total_elements=3,
    )

    response = await client.get("/api/entries", params={"page": 1, "size": 1})

    assert response.status_code == status.HTTP_200_OK
    assert [entry["id"] for entry in response.json()] == [1]
    assert response.headers["X-Total-Count"] == "3"
    assert response.headers["Link"] == (
        '</api/entries?page=2&size=1>; rel="next",'
        '</api/entries?page=0&size=1>; rel="prev",'
        '</api/entries?page=2&size=1>; rel="last",'
        '</api/entries?page=0&size=1>; rel="first"'
    )
    entry_repo.find_by_blog_user_login_order_by_date_desc.assert_awaited_once_with(
        "user",
        Pageable(page=1, size=1),
    )


@pytest.mark.asyncio
async def test_get_all_entries_default_page(client: AsyncClient, entry_repo: AsyncMock) -> None:
    entry_repo.find_by_blog_user_login_order_by_date_desc.return_value = Page(
        content=[],
        number=0,
        size=settings.DEFAULT_PAGE_SIZE,
        total_elements=0,
    )

    response = await client.get("/api/entries")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
    assert response.headers["X-Total-Count"] == "0"
    entry_repo.find_by_blog_user_login_order_by_date_desc.assert_awaited_once_with(
        "user",
        Pageable(page=0, size=settings.DEFAULT_PAGE_SIZE),
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"page": -1}, {"size": 0}, {"size": 10_000}])
async def test_get_all_entries_rejects_bad_page(
    client: AsyncClient,
    entry_repo: AsyncMock,
    params: dict[str, int],
) -> None:
    response = await client.get("/api/entries", params=params)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    entry_repo.find_by_blog_user_login_order_by_date_desc.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_all_entries_sorted(client: AsyncClient, entry_repo: AsyncMock) -> None:
    entry_repo.find_by_blog_user_login_order_by_date_desc.return_value = Page(
        content=[],
        number=0,
        size=20,
        total_elements=0,
    )

    response = await client.get("/api/entries", params=[("sort", "title,asc"), ("sort", "id,desc")])

    assert response.status_code == status.HTTP_200_OK
    entry_repo.find_by_blog_user_login_order_by_date_desc.assert_awaited_once_with(
        "user",
        Pageable(page=0, size=20, sort=(Order("title"), Order("id", descending=True))),
    )


@pytest.mark.asyncio
async def test_get_all_entries_rejects_unknown_sort_property(
    client: AsyncClient,
    entry_repo: AsyncMock,
) -> None:
    response = await client.get("/api/entries", params={"sort": "content,asc"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.headers[ERROR] == "error.sortinvalid"
    assert response.headers[PARAMS] == "entry"
    entry_repo.find_by_blog_user_login_order_by_date_desc.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_entry(client: AsyncClient, entry_repo: AsyncMock, sample_entry: EntryDB) -> None:
    entry_repo.find_one_with_eager_relationships.return_value = sample_entry

    response = await client.get("/api/entries/1")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["tags"] == [{"id": 1, "name": "jhipster"}]
    entry_repo.find_one_with_eager_relationships.assert_awaited_once_with(1)


@pytest.mark.asyncio
async def test_get_missing_entry(client: AsyncClient, entry_repo: AsyncMock) -> None:
    entry_repo.find_one_with_eager_relationships.return_value = None

    response = await client.get("/api/entries/404")

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_entry(
    client: AsyncClient,
    entry_repo: AsyncMock,
    call_order: MagicMock,
) -> None:
    entry_repo.delete.return_value = True

    response = await client.delete("/api/entries/1")

    assert response.status_code == status.HTTP_200_OK
    assert response.headers[ALERT] == "blogstackApp.entry.deleted"
    assert call_order.mock_calls == [call.entry_repo.delete(1), call.entry_search.delete(1)]


@pytest.mark.asyncio
async def test_delete_entry_survives_index_failure(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    entry_repo.delete.return_value = True
    entry_search.delete.side_effect = SearchIndexError()

    response = await client.delete("/api/entries/1")

    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_delete_missing_entry(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    entry_repo.delete.return_value = False

    response = await client.delete("/api/entries/1")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    entry_search.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_entries(
    client: AsyncClient,
    entry_repo: AsyncMock,
    entry_search: AsyncMock,
) -> None:
    found = EntryResponse(
        id=4,
        title="Spring tips",
        content="...",
        date=datetime(2026, 2, 1, tzinfo=UTC),
    )
    entry_search.search.return_value = Page(content=[found], number=0, size=20, total_elements=1)

    response = await client.get("/api/_search/entries", params={"query": "title:spring tips"})

    assert response.status_code == status.HTTP_200_OK
    assert [entry["id"] for entry in response.json()] == [4]
    assert response.headers["X-Total-Count"] == "1"
    assert response.headers["Link"] == (
        '</api/_search/entries?page=0&size=20&query=title%3Aspring+tips>; rel="last",'
        '</api/_search/entries?page=0&size=20&query=title%3Aspring+tips>; rel="first"'
    )
    entry_search.search.assert_awaited_once_with("title:spring tips", Pageable(page=0, size=20))
    entry_repo.assert_not_called()


@pytest.mark.asyncio
async def test_search_entry_bad_query(client: AsyncClient, entry_search: AsyncMock) -> None:
    entry_search.search.side_effect = SearchIndexError("Invalid search query: (", status_code=400)

    response = await client.get("/api/_search/entries", params={"query": "("})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Invalid search query: ("


@pytest.mark.asyncio
async def test_search_entries_sorted(client: AsyncClient, entry_search: AsyncMock) -> None:
    entry_search.search.return_value = Page(content=[], number=0, size=20, total_elements=0)

    response = await client.get("/api/_search/entries", params={"query": "spring", "sort": "date,desc"})

    assert response.status_code == status.HTTP_200_OK
    entry_search.search.assert_awaited_once_with(
        "spring",
        Pageable(page=0, size=20, sort=(Order("date", descending=True),)),
    )


@pytest.mark.asyncio
async def test_search_entries_rejects_unknown_sort_property(
    client: AsyncClient,
    entry_search: AsyncMock,
) -> None:
    response = await client.get("/api/_search/entries", params={"query": "spring", "sort": "blog"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.headers[ERROR] == "error.sortinvalid"
    entry_search.search.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_entries_past_result_window(client: AsyncClient, entry_search: AsyncMock) -> None:
    entry_search.search.side_effect = SearchIndexError(
        "Result window too large: from 10000 + size 20 exceeds 10000",
        status_code=400,
    )

    response = await client.get("/api/_search/entries", params={"query": "spring", "page": 500})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"].startswith("Result window too large")
