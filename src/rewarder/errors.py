"""Exception classes for settings loading and persistence.

This module defines a small hierarchy so callers can catch every
settings failure at once, or distinguish bad data from bad storage.
"""

from __future__ import annotations

from pathlib import Path


class SettingsError(Exception):
    """Base class for all settings errors."""


class SettingsLoadError(SettingsError, RuntimeError):
    """Persisted settings could not be turned into a valid record.

    Raised when the stored mapping has the wrong shape or holds values
    outside the allowed ranges.
    """


class SettingsStoreError(SettingsError):
    """Error reading from or writing to a settings store."""

    def __init__(
        self, message: str, path: Path | None = None, original_error: Exception | None = None
    ) -> None:
        """Initialize with store error details.

        Args:
            message: Description of the failure
            path: File the store was working with, if any
            original_error: The original exception that was caught
        """
        super().__init__(f"{message}: {path}" if path else message)
        self.path = path
        self.original_error = original_error
