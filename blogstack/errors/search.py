from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from blogstack.errors.base import BaseAppError, create_exception_handler
from blogstack.monitoring.logging import get_logger

logger = get_logger(__name__)


class SearchIndexError(BaseAppError):
    """Raised when the search backend rejects or cannot serve a request."""

    def __init__(
        self,
        detail: str = "Search index unavailable",
        status_code: int = HTTP_503_SERVICE_UNAVAILABLE,
    ) -> None:
        super().__init__(detail, status_code)


class SearchConfigurationError(SearchIndexError):
    """Raised when the search backend cannot be configured."""

    def __init__(
        self,
        detail: str = "Invalid search configuration",
    ) -> None:
        super().__init__(detail)


search_exception_handler = create_exception_handler(logger)
