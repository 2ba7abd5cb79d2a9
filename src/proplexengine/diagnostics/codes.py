"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        3000-3999: Scanner errors (internal cursor invariants)
        6000-6999: Serialization errors (malformed stringify input)
    """

    # Scanner errors (3000-3999)
    # Parsing is total: the scanner never reports malformed input. The only
    # code in this range guards the cursor against reads past end-of-input.
    UNEXPECTED_EOF = 3001

    # Serialization errors (6000-6999)
    LINE_ENTRY_INVALID = 6001
    TREE_VALUE_INVALID = 6002
    TREE_CYCLE = 6003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        key_path: Tree path or line index at which the error occurred
        received_type: Actual type received (serialization errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    key_path: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            error[TREE_CYCLE]: Mapping at 'a.b' contains itself
              --> a.b
              = help: Break the reference cycle before calling stringify()

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
