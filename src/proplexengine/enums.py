"""Enumerations for PropLexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LineKind(StrEnum):
    """Discriminant of a parsed logical line.

    StrEnum provides automatic string conversion: str(LineKind.PAIR) == "pair"
    """

    PAIR = "pair"
    """Key-value line: key = value"""

    COMMENT = "comment"
    """Comment line: # text or ! text"""

    EMPTY_LINE = "empty_line"
    """Line holding only indentation, or nothing"""


class EscapeMode(StrEnum):
    """Which characters escape_non_printable() writes as \\uXXXX.

    StrEnum provides automatic string conversion: str(EscapeMode.LATIN1) == "latin1"
    """

    LATIN1 = "latin1"
    """Escape all but printable ASCII and U+00A1..U+00FF (ISO-8859-1 files)"""

    UNICODE = "unicode"
    """Escape only C0 control characters other than tab, LF, FF and CR"""


__all__ = [
    "EscapeMode",
    "LineKind",
]
