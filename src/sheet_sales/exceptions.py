"""Domain-specific exceptions for sheet_sales.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from SheetSalesError for easy catching.
"""

from __future__ import annotations


class SheetSalesError(Exception):
    """Base exception for all sheet_sales errors.

    Users can catch this exception to handle any error raised by the package.
    Field-level parse problems never surface as exceptions; they degrade to
    defaults inside the normalizers.
    """

    pass


class ConfigError(SheetSalesError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided
    - Required configuration is missing (e.g. no sheet URL)
    """

    pass


class ETLError(SheetSalesError):
    """Raised when a pipeline stage fails."""

    pass


class ExtractionError(ETLError):
    """Raised when data extraction from the published sheet fails."""

    pass


class FetchError(ExtractionError):
    """Raised when the published CSV cannot be retrieved.

    This exception is raised when:
    - The endpoint answers with a non-2xx status (``status_code`` is set)
    - The network request itself fails (``status_code`` is None)

    Attributes:
        status_code: HTTP status code of the failed response, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoDataError(ETLError):
    """Raised when a fetch succeeds but the sheet holds no data rows.

    Kept distinct from FetchError so callers can tell an empty sheet apart
    from a connection problem.
    """

    pass
