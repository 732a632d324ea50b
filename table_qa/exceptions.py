"""
Error types raised by the table-qa pipeline.

Every fatal condition derives from TableQAError so callers can report the
message and exit. Non-numeric cells are never represented here: the
aggregator skips them.
"""

from typing import Optional


class TableQAError(Exception):
    """
    Base class for pipeline failures.

    Attributes:
        source: Identifier of the data source (usually a file path)
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.cause = cause


class SourceUnavailableError(TableQAError):
    """The data source could not be opened or read."""


class HeaderUnreadableError(TableQAError):
    """The header row could not be decoded into fields."""


class RecordUnreadableError(TableQAError):
    """A data row could not be decoded into fields."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        cause: Optional[BaseException] = None,
        line_number: Optional[int] = None
    ):
        super().__init__(message, source=source, cause=cause)
        self.line_number = line_number


class NoNumericColumnsError(TableQAError):
    """The scan completed but no column held a numeric value."""
