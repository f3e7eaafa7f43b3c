from blogstack.errors.alert import BadRequestAlertError, alert_exception_handler
from blogstack.errors.base import BaseAppError, create_exception_handler
from blogstack.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    IntegrityViolationError,
    RecordNotFoundError,
    database_exception_handler,
)
from blogstack.errors.search import (
    SearchConfigurationError,
    SearchIndexError,
    search_exception_handler,
)
from blogstack.errors.validation import validation_exception_handler

__all__ = [
    "BadRequestAlertError",
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "IntegrityViolationError",
    "RecordNotFoundError",
    "SearchConfigurationError",
    "SearchIndexError",
    "alert_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "search_exception_handler",
    "validation_exception_handler",
]
