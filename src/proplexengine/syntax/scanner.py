""".properties line scanner.

Splits source text into logical lines and classifies each one as a Pair,
a Comment or an EmptyLine, following the line rules of
java.util.Properties.load():

- Leading space, tab and form feed are ignored on every physical line.
- A line whose first non-indent character is "#" or "!" is a comment.
- The key ends at the first unescaped space, tab, form feed, "=", ":" or
  line terminator.
- The separator is any run of indentation holding at most one "=" or ":".
- The value runs to the end of the logical line; a backslash before a
  line terminator continues it on the next physical line.

Scanning is total: every string yields a line list, malformed escapes
included. Each rule takes a cursor and returns the cursor where it stops.

Python 3.13+. Zero external dependencies.
"""

from proplexengine.constants import KEY_TERMINATORS, SEPARATOR_CHARS

from .ast import Comment, EmptyLine, LineRecord, Pair, PairSpan, Span
from .cursor import Cursor
from .escapes import unescape

__all__ = [
    "PropertiesScanner",
    "scan_key",
    "scan_lines",
    "scan_separator",
    "scan_value",
]


def scan_key(cursor: Cursor) -> Cursor:
    """Advance past the raw key text.

    Escaped characters never end the key; an escaped line terminator
    continues the key on the next line after its indentation.

    Example:
        >>> scan_key(Cursor("a\\\\ b=c", 0)).pos
        4
    """
    while not cursor.is_eof and cursor.current not in KEY_TERMINATORS:
        if cursor.at_continuation:
            cursor = cursor.skip_continuation()
        elif cursor.current == "\\":
            cursor = cursor.advance(2)
        else:
            cursor = cursor.advance()
    return cursor


def scan_separator(cursor: Cursor) -> Cursor:
    """Advance past the separator between key and value.

    Consumes indentation, at most one "=" or ":", and line continuations.
    A second "=" or ":" belongs to the value.

    Example:
        >>> scan_separator(Cursor("k = = v", 1)).pos
        4
    """
    seen_sign = False
    while not cursor.is_eof:
        ch = cursor.current
        if ch in SEPARATOR_CHARS:
            if seen_sign:
                break
            seen_sign = True
            cursor = cursor.advance()
        elif ch in " \t\f":
            cursor = cursor.advance()
        elif cursor.at_continuation:
            cursor = cursor.skip_continuation()
        else:
            break
    return cursor


def scan_value(cursor: Cursor) -> Cursor:
    """Advance to the end of the logical line.

    Escape pairs are skipped whole, so an escaped terminator (LF, CR or
    CRLF) continues the value instead of ending it.
    """
    while not cursor.at_line_end:
        if cursor.at_continuation:
            cursor = cursor.advance().skip_line_end()
        elif cursor.current == "\\":
            cursor = cursor.advance(2)
        else:
            cursor = cursor.advance()
    return cursor


class PropertiesScanner:
    """Scans .properties source into line records.

    Stateless apart from its configuration; safe to share across threads.

    Attributes:
        with_ranges: Attach source offsets (Span/PairSpan) to every record
    """

    __slots__ = ("_with_ranges",)

    def __init__(self, *, with_ranges: bool = False) -> None:
        """Initialize scanner.

        Args:
            with_ranges: Attach source offsets to the returned records
        """
        self._with_ranges = with_ranges

    @property
    def with_ranges(self) -> bool:
        """Whether records carry source offsets."""
        return self._with_ranges

    def scan(self, source: str) -> list[LineRecord]:
        """Scan source into its logical lines, in order.

        Args:
            source: .properties text

        Returns:
            One record per logical line. A trailing line terminator does
            not produce a final EmptyLine.

        Raises:
            TypeError: If source is not a str

        Example:
            >>> PropertiesScanner().scan("# c\\nk=v")
            [Comment(comment='# c', span=None), Pair(key='k', value='v', span=None)]
        """
        if not isinstance(source, str):
            msg = f"Expected str source, got {type(source).__name__}"
            raise TypeError(msg)

        with_ranges = self._with_ranges
        lines: list[LineRecord] = []
        cursor = Cursor(source, 0)

        while not cursor.is_eof:
            line_start = cursor.pos
            cursor = cursor.skip_indent()

            if cursor.at_line_end:
                lines.append(EmptyLine(Span(line_start, cursor.pos) if with_ranges else None))
            elif cursor.at_comment:
                end = cursor.skip_to_line_end()
                span = Span(cursor.pos, end.pos) if with_ranges else None
                lines.append(Comment(cursor.slice_to(end.pos), span))
                cursor = end
            else:
                key_end = scan_key(cursor)
                value_start = scan_separator(key_end)
                value_end = scan_value(value_start)
                pair_span = (
                    PairSpan(cursor.pos, key_end.pos, value_start.pos, value_end.pos)
                    if with_ranges
                    else None
                )
                lines.append(
                    Pair(
                        unescape(cursor.slice_to(key_end.pos)),
                        unescape(value_start.slice_to(value_end.pos)),
                        pair_span,
                    )
                )
                cursor = value_end

            cursor = cursor.skip_line_end()

        return lines


def scan_lines(source: str, *, with_ranges: bool = False) -> list[LineRecord]:
    """Split .properties text into Pair, Comment and EmptyLine records.

    Convenience function for PropertiesScanner.scan().

    Args:
        source: .properties text
        with_ranges: Attach source offsets to each record

    Returns:
        Records in source order

    Raises:
        TypeError: If source is not a str

    Example:
        >>> scan_lines("a = 1\\n\\n! note")
        [Pair(key='a', value='1', span=None), EmptyLine(span=None), Comment(comment='! note', span=None)]
    """
    return PropertiesScanner(with_ranges=with_ranges).scan(source)
