# tests/search/test_mirror.py
"""Tests for search-index mirror writes."""

from unittest.mock import AsyncMock, patch

import pytest

from blogstack.configs import settings
from blogstack.errors import SearchIndexError
from blogstack.search.mirror import mirror_write


@pytest.mark.asyncio
async def test_successful_write_is_awaited() -> None:
    write = AsyncMock()

    await mirror_write("blog", "save", 1, write())

    write.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_write_is_counted_and_swallowed() -> None:
    write = AsyncMock(side_effect=SearchIndexError("down"))

    with patch("blogstack.search.mirror.record_mirror_failure") as record:
        await mirror_write("entry", "delete", 5, write())

    record.assert_called_once_with("entry", "delete")


@pytest.mark.asyncio
async def test_failed_write_raises_in_strict_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "SEARCH_STRICT_MIRROR", True)
    write = AsyncMock(side_effect=SearchIndexError("down"))

    with (
        patch("blogstack.search.mirror.record_mirror_failure") as record,
        pytest.raises(SearchIndexError),
    ):
        await mirror_write("blog", "save", 1, write())

    record.assert_called_once_with("blog", "save")


@pytest.mark.asyncio
async def test_other_errors_propagate() -> None:
    write = AsyncMock(side_effect=ValueError("bug"))

    with pytest.raises(ValueError, match="bug"):
        await mirror_write("blog", "save", 1, write())
