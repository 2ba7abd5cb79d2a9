""".properties line record definitions.

A parsed document is an ordered sequence of logical lines. Each logical
line is one of three records: Pair, Comment or EmptyLine. Records are
immutable values; the scanner builds them fresh per call and callers may
construct them directly to edit a document without building a tree.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from proplexengine.enums import LineKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Source ranges
    "Span",
    "PairSpan",
    # Line records
    "Pair",
    "Comment",
    "EmptyLine",
    # Type aliases
    "LineRecord",
]

# ============================================================================
# SOURCE RANGES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source range of a Comment or EmptyLine.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "  # note"
        Comment span: Span(start=2, end=8)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PairSpan:
    """Source range of a Pair: the key span followed by the value span.

    The separator is the text between key_end and value_start.

    Example:
        Source: "key : value"
        PairSpan(key_start=0, key_end=3, value_start=6, value_end=11)
    """

    key_start: int
    key_end: int
    value_start: int
    value_end: int

    def __post_init__(self) -> None:
        """Validate offsets are non-negative and non-decreasing."""
        if self.key_start < 0:
            msg = f"PairSpan key_start must be >= 0, got {self.key_start}"
            raise ValueError(msg)
        if not self.key_start <= self.key_end <= self.value_start <= self.value_end:
            msg = (
                "PairSpan offsets must be non-decreasing, got "
                f"({self.key_start}, {self.key_end}, {self.value_start}, {self.value_end})"
            )
            raise ValueError(msg)

    @property
    def key(self) -> Span:
        """Span of the raw (escaped) key text."""
        return Span(self.key_start, self.key_end)

    @property
    def value(self) -> Span:
        """Span of the raw (escaped) value text."""
        return Span(self.value_start, self.value_end)


# ============================================================================
# LINE RECORDS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pair:
    """Key-value line.

    Attributes:
        key: Unescaped key
        value: Unescaped value (may be empty)
        span: Source range, present only when parsed with ranges

    Examples:
        key = value
        key:value
        key value
    """

    key: str
    value: str
    span: PairSpan | None = None

    @property
    def kind(self) -> LineKind:
        """Discriminant of this record."""
        return LineKind.PAIR

    def separator(self, source: str) -> str | None:
        """Recover the literal separator text from the parsed source.

        Args:
            source: The text this pair was parsed from

        Returns:
            Separator text, e.g. " = " or ":", or None if the pair has no span

        Example:
            >>> source = "key: value"
            >>> parse_lines(source, with_ranges=True)[0].separator(source)
            ': '
        """
        if self.span is None:
            return None
        return source[self.span.key_end : self.span.value_start]

    @staticmethod
    def guard(line: object) -> TypeIs["Pair"]:
        """Type guard for Pair (used in line filtering)."""
        return isinstance(line, Pair)


@dataclass(frozen=True, slots=True)
class Comment:
    """Comment line.

    The text is verbatim: it starts at the "#" or "!" marker, excludes the
    line's indentation and terminator, and is not unescaped.

    Example:
        # This is a comment
        ! So is this
    """

    comment: str
    span: Span | None = None

    @property
    def kind(self) -> LineKind:
        """Discriminant of this record."""
        return LineKind.COMMENT

    @staticmethod
    def guard(line: object) -> TypeIs["Comment"]:
        """Type guard for Comment (used in line filtering)."""
        return isinstance(line, Comment)


@dataclass(frozen=True, slots=True)
class EmptyLine:
    """Line holding nothing but indentation."""

    span: Span | None = None

    @property
    def kind(self) -> LineKind:
        """Discriminant of this record."""
        return LineKind.EMPTY_LINE

    @staticmethod
    def guard(line: object) -> TypeIs["EmptyLine"]:
        """Type guard for EmptyLine (used in line filtering)."""
        return isinstance(line, EmptyLine)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type LineRecord = Pair | Comment | EmptyLine
