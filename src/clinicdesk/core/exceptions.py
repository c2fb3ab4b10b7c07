"""
Exception handling for ClinicDesk application.

This module provides custom exception classes for the infrastructure
layer. Business rule violations live in ``clinicdesk.domain.errors``.
"""

from typing import Any, Dict, Optional


class ClinicDeskException(Exception):
    """Base exception class for ClinicDesk application."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ClinicDeskException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class DatabaseError(ClinicDeskException):
    """Raised when there's a database operation error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "DATABASE_ERROR", details)


class UniqueConstraintError(DatabaseError):
    """Raised when a write would violate a uniqueness constraint."""

    def __init__(self, table: str, field: str, value: Any = None) -> None:
        self.table = table
        self.field = field
        super().__init__(
            f"Duplicate value for {table}.{field}",
            {"table": table, "field": field, "value": value},
        )
        self.error_code = "UNIQUE_CONSTRAINT"


class RecordNotFoundError(DatabaseError):
    """Raised when select_one matches no record."""

    def __init__(self, table: str, filters: Optional[Dict[str, Any]] = None) -> None:
        self.table = table
        super().__init__(f"No record in {table} matches filters", {"table": table, "filters": filters or {}})
        self.error_code = "RECORD_NOT_FOUND"


class MultipleRecordsError(DatabaseError):
    """Raised when select_one matches more than one record."""

    def __init__(self, table: str, count: int) -> None:
        self.table = table
        super().__init__(f"Expected one record in {table}, found {count}", {"table": table, "count": count})
        self.error_code = "MULTIPLE_RECORDS"


class AuthenticationError(ClinicDeskException):
    """Raised when there's an authentication error."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "AUTH_ERROR", details)


class ChildInsertError(DatabaseError):
    """Raised when the child rows of an atomic parent+children insert fail.

    The parent row has been rolled back by the time this is raised.
    """

    def __init__(self, table: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.table = table
        super().__init__(f"Failed to insert rows into {table}", {"table": table, **(details or {})})
        self.error_code = "CHILD_INSERT_FAILED"
