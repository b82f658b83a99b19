"""Exceptions raised by the trade journal."""

from typing import Optional


class JournalError(Exception):
    """Base class for all journal errors."""


class ValidationError(JournalError):
    """An entry field is missing or malformed. Nothing was persisted."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StorageUnavailable(JournalError):
    """The backing store could not be read or written. The operation had no effect."""
