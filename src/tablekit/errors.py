"""Centralized error handling for the tablekit CLI.

This module provides:
- Standard error codes
- Error envelope format for --json output
- Helper functions for consistent error reporting

The engine itself never raises for bad table inputs (it clamps); these
errors cover configuration problems and the command line's own inputs.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import Sequence


# =============================================================================
# Error Codes
# =============================================================================

# Table configuration errors
DUPLICATE_COLUMN = "DUPLICATE_COLUMN"
UNKNOWN_COLUMN = "UNKNOWN_COLUMN"

# Input errors
RECORDS_INVALID = "RECORDS_INVALID"
FILE_NOT_FOUND = "FILE_NOT_FOUND"
INVALID_ARGUMENT = "INVALID_ARGUMENT"


# =============================================================================
# Error Envelope
# =============================================================================


@dataclass
class TableKitError:
    """Structured error for JSON output.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        hints: Actionable suggestions for resolving the error.
        details: Context-specific error details.
    """

    code: str
    message: str
    hints: list[str] = field(default_factory=list)
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to error envelope dict."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "hints": self.hints,
                "details": self.details,
            }
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def print_json(self, file=None) -> None:
        """Print error as JSON to file (default: stderr)."""
        if file is None:
            file = sys.stderr
        print(self.to_json(), file=file)

    def print_text(self, file=None) -> None:
        """Print error as human-readable text to file (default: stderr)."""
        if file is None:
            file = sys.stderr
        print(f"Error: {self.message}", file=file)
        for hint in self.hints:
            print(f"  Hint: {hint}", file=file)


# =============================================================================
# Factory Functions
# =============================================================================


def duplicate_column(column_id: str) -> TableKitError:
    """Create error for a repeated column id."""
    return TableKitError(
        code=DUPLICATE_COLUMN,
        message=f"Duplicate column id: {column_id}",
        hints=["Each column id may appear only once in --columns"],
        details={"column_id": column_id},
    )


def unknown_column(column_id: str, available: Sequence[str]) -> TableKitError:
    """Create error for a column id that is not in the records."""
    return TableKitError(
        code=UNKNOWN_COLUMN,
        message=f"Unknown column: {column_id}",
        hints=[
            "Run: tablekit columns <file>",
            f"Available columns: {', '.join(available) or '(none)'}",
        ],
        details={"column_id": column_id, "available": list(available)},
    )


def records_invalid(path: str, reason: str) -> TableKitError:
    """Create error for an unparseable records file."""
    return TableKitError(
        code=RECORDS_INVALID,
        message=f"Invalid records file: {path} ({reason})",
        hints=[
            "Use a JSON array of objects, JSON Lines, or CSV with a header row",
        ],
        details={"path": path, "reason": reason},
    )


def file_not_found(path: str) -> TableKitError:
    """Create error for missing file."""
    return TableKitError(
        code=FILE_NOT_FOUND,
        message=f"File not found: {path}",
        hints=["Check that the file path is correct"],
        details={"path": path},
    )


def invalid_argument(arg_name: str, value: str, reason: str = "") -> TableKitError:
    """Create error for invalid argument."""
    msg = f"Invalid argument '{arg_name}': {value}"
    if reason:
        msg += f" ({reason})"
    return TableKitError(
        code=INVALID_ARGUMENT,
        message=msg,
        hints=["Run: tablekit <command> --help"],
        details={"argument": arg_name, "value": value, "reason": reason},
    )


# =============================================================================
# Output Helper
# =============================================================================


def print_error(
    error: TableKitError,
    json_mode: bool = False,
    file=None,
) -> None:
    """Print error in appropriate format.

    Args:
        error: The error to print.
        json_mode: If True, print as JSON envelope. If False, print as text.
        file: Output file (default: stderr).
    """
    if json_mode:
        error.print_json(file)
    else:
        error.print_text(file)
