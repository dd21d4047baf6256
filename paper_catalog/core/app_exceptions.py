"""Catalog-specific exceptions for consistent error handling."""

from typing import Any

INVALID_ARGUMENT = "INVALID_ARGUMENT"
TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
APPLICATION_FAILURE = "APPLICATION_FAILURE"


class CatalogError(Exception):
    """Catalog error with standardized error code."""

    code: str = "CATALOG_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize catalog error."""
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidArgument(CatalogError):
    """Programming error in a call to the query API (e.g. page < 1). Not recovered."""

    code = INVALID_ARGUMENT


class TransportFailure(CatalogError):
    """Network error, timeout, non-2xx status or unreadable body."""

    code = TRANSPORT_FAILURE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code


class ApplicationFailure(CatalogError):
    """The server answered, but with an ``isSuccess: false`` or malformed envelope."""

    code = APPLICATION_FAILURE
