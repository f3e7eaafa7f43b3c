from starlette.status import HTTP_400_BAD_REQUEST

from blogstack.errors.base import BaseAppError, create_exception_handler
from blogstack.monitoring.logging import get_logger
from blogstack.utils.headers import create_failure_alert

logger = get_logger(__name__)


class BadRequestAlertError(BaseAppError):
    """
    Bad request tied to an entity, reported to the client through alert headers.

    The response body carries ``entity_name``, ``error_key`` and the
    translation ``message`` (``error.<error_key>``) next to ``detail``.
    """

    def __init__(self, detail: str, entity_name: str, error_key: str) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)
        self.entity_name = entity_name
        self.error_key = error_key
        self.message = f"error.{error_key}"

    @property
    def headers(self) -> dict[str, str]:
        return create_failure_alert(self.entity_name, self.error_key)


alert_exception_handler = create_exception_handler(logger)
