"""Utility helper functions."""

from blogstack.utils.headers import (
    create_alert,
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    create_failure_alert,
)
from blogstack.utils.helpers import get_summary, host, today_str
from blogstack.utils.pagination import (
    Order,
    Page,
    Pageable,
    generate_pagination_headers,
    generate_search_pagination_headers,
    parse_sort,
)

__all__ = [
    "Order",
    "Page",
    "Pageable",
    "create_alert",
    "create_entity_creation_alert",
    "create_entity_deletion_alert",
    "create_entity_update_alert",
    "create_failure_alert",
    "generate_pagination_headers",
    "generate_search_pagination_headers",
    "get_summary",
    "host",
    "parse_sort",
    "today_str",
]
