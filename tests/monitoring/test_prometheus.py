"""Tests for Prometheus metrics and the timed decorator."""

import pytest
from prometheus_client import REGISTRY

from blogstack.decorators import timed
from blogstack.monitoring.prometheus import record_mirror_failure


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.mark.asyncio
async def test_timed_records_success() -> None:
    labels = {"endpoint": "test-success", "outcome": "success"}
    before = _sample("blogstack_resource_duration_seconds_count", labels)

    @timed("test-success")
    async def handler() -> str:
        return "ok"

    assert await handler() == "ok"
    assert _sample("blogstack_resource_duration_seconds_count", labels) == before + 1


@pytest.mark.asyncio
async def test_timed_records_error_and_reraises() -> None:
    labels = {"endpoint": "test-error", "outcome": "error"}
    before = _sample("blogstack_resource_duration_seconds_count", labels)

    @timed("test-error")
    async def handler() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await handler()
    assert _sample("blogstack_resource_duration_seconds_count", labels) == before + 1


@pytest.mark.asyncio
async def test_timed_defaults_to_function_name() -> None:
    labels = {"endpoint": "list_things", "outcome": "success"}
    before = _sample("blogstack_resource_duration_seconds_count", labels)

    @timed()
    async def list_things() -> list[int]:
        return []

    await list_things()
    assert _sample("blogstack_resource_duration_seconds_count", labels) == before + 1


def test_record_mirror_failure() -> None:
    labels = {"entity": "blog", "operation": "delete"}
    before = _sample("blogstack_search_mirror_failures_total", labels)

    record_mirror_failure("blog", "delete")

    assert _sample("blogstack_search_mirror_failures_total", labels) == before + 1
