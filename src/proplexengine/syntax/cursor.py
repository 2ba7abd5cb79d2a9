"""Immutable cursor infrastructure for the .properties scanner.

Implements the immutable cursor pattern for zero-`None` scanning.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Each scan phase takes a cursor and returns the cursor where it stopped

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Fully supported, always consumed as one terminator
    - CR-only (Classic Mac, \\r): Supported, a lone \\r ends a line

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from dataclasses import dataclass

from proplexengine.constants import COMMENT_MARKERS, INDENT_CHARS, LINE_TERMINATORS
from proplexengine.diagnostics import ErrorTemplate

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (important for large files)
        3. Simple position - Just an integer offset
        4. EOF is a property - Not a return value
        5. current raises - No None handling needed!

    Example:
        >>> cursor = Cursor("key=value", 0)
        >>> cursor.current
        'k'
        >>> cursor.advance(3).current
        '='
        >>> cursor.current  # Original unchanged (immutability)
        'k'
        >>> Cursor("k", 1).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Returns:
            True if position >= source length
        """
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Returns:
            Current character at position

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Clamped to the end of the source, so advance(2) over a trailing
        lone backslash lands exactly on EOF.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor instance at new position (original unchanged)
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Args:
            end_pos: End position (exclusive)

        Returns:
            Source substring from current position to end_pos

        Example:
            >>> start = Cursor("key=value", 0)
            >>> start.slice_to(3)
            'key'
        """
        return self.source[self.pos : end_pos]

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @property
    def at_terminator(self) -> bool:
        """True if the current character is \\n or \\r."""
        return not self.is_eof and self.source[self.pos] in LINE_TERMINATORS

    @property
    def at_line_end(self) -> bool:
        """True at a line terminator or at end of input."""
        return self.is_eof or self.source[self.pos] in LINE_TERMINATORS

    @property
    def at_comment(self) -> bool:
        """True if the current character starts a comment (# or !)."""
        return not self.is_eof and self.source[self.pos] in COMMENT_MARKERS

    @property
    def at_continuation(self) -> bool:
        """True at a backslash immediately followed by a line terminator."""
        return (
            not self.is_eof
            and self.source[self.pos] == "\\"
            and self.peek(1) in LINE_TERMINATORS
        )

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def skip_indent(self) -> "Cursor":
        """Skip indentation characters (space, tab, form feed).

        Returns:
            New cursor advanced past all consecutive indentation characters

        Example:
            >>> Cursor(" \\t\\fkey", 0).skip_indent().pos
            3
        """
        source = self.source
        pos = self.pos
        end = len(source)
        while pos < end and source[pos] in INDENT_CHARS:
            pos += 1
        return Cursor(source, pos)

    def skip_line_end(self) -> "Cursor":
        """Skip LF, CR, or CRLF line ending.

        Returns:
            New cursor advanced past the line ending, or unchanged if not at line end.

        Example:
            >>> Cursor("a\\r\\nb", 1).skip_line_end().pos
            3
            >>> Cursor("a\\rb", 1).skip_line_end().pos
            2
        """
        if self.is_eof:
            return self
        if self.current == "\r":
            cursor = self.advance()
            # Handle CRLF
            if not cursor.is_eof and cursor.current == "\n":
                return cursor.advance()
            return cursor
        if self.current == "\n":
            return self.advance()
        return self

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character.

        Returns:
            New cursor positioned at \\n or \\r (does not consume line ending),
            or at EOF.

        Example:
            >>> Cursor("# note\\nkey", 0).skip_to_line_end().pos
            6
        """
        source = self.source
        pos = self.pos
        end = len(source)
        while pos < end and source[pos] not in LINE_TERMINATORS:
            pos += 1
        return Cursor(source, pos)

    def skip_continuation(self) -> "Cursor":
        """Skip a backslash, its line terminator and the next line's indent.

        Must only be called when at_continuation is True.

        Example:
            >>> Cursor("a\\\\\\r\\n  b", 1).skip_continuation().current
            'b'
        """
        return self.advance().skip_line_end().skip_indent()
