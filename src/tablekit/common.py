"""Common utilities and constants for tablekit.

This module defines contract-level constants and helpers used across all components.
"""

from datetime import date, datetime
from typing import Any

# Schema version as integer per contract
SCHEMA_VERSION = 1

# Producer info - identifies the implementation that created documents
PRODUCER = {
    "name": "tablekit",
    "version": "0.1.0",
}


def cell_text(value: Any) -> str:
    """Convert an accessor value to its display string.

    Used for free-text search and default cell rendering.

    Args:
        value: Value returned by a column accessor.

    Returns:
        String representation. None becomes the empty string so that
        missing fields never match a query.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class DuplicateColumnError(ValueError):
    """Raised when a column set is built with a repeated column id."""

    def __init__(self, column_id: str):
        self.column_id = column_id
        super().__init__(f"Duplicate column id: {column_id}")


class RecordsFormatError(ValueError):
    """Raised when a records file cannot be parsed into records."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid records file {path}: {reason}")
