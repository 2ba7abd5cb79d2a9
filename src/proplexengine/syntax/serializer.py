"""Serialize line records or trees to .properties text.

Converts an ordered sequence of lines, or a hierarchical mapping, back
to .properties source. Useful for:
- Writing configuration files from Python data
- Editing a parsed document and writing it back (parse_lines round-trip)
- Property-based testing (roundtrip: stringify → parse)

Python 3.13+.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from proplexengine.constants import (
    DEFAULT_COMMENT_PREFIX,
    DEFAULT_FOLD_CHARS,
    DEFAULT_INDENT,
    DEFAULT_KEY,
    DEFAULT_KEY_SEPARATOR,
    DEFAULT_LINE_WIDTH,
    DEFAULT_NEWLINE,
    DEFAULT_PATH_SEPARATOR,
)
from proplexengine.diagnostics import ErrorTemplate, SerializationValidationError
from proplexengine.enums import EscapeMode

from .ast import Comment, EmptyLine, Pair
from .escapes import escape_key, escape_value
from .folder import FoldStyle, fold_line

__all__ = ["PropertiesSerializer", "StringifyOptions", "stringify"]

# Leading whitespace plus one comment marker and the whitespace after it.
_COMMENT_START = re.compile(r"^\s*(?:[#!][ \t\f]*)?")


@dataclass(frozen=True, slots=True)
class StringifyOptions:
    """Output styling for stringify().

    Attributes:
        comment_prefix: Replaces the marker of every comment line ("!" also valid)
        default_key: Tree key whose value is written under the parent's own key
        indent: Indentation of continuation lines (tabs also valid)
        key_sep: Text between key and value; should hold at most one "=" or ":"
        latin1: True escapes everything outside ISO-8859-1 printable text as
            \\uXXXX; False keeps Unicode text literal and escapes only controls
        line_width: Fold lines longer than this; None or <= 0 disables folding
        newline: Line terminator between logical lines (Windows uses "\\r\\n")
        path_sep: Joins nested tree keys; use the same separator in parse()
        fold_chars: Characters after which long lines are preferably folded
    """

    comment_prefix: str = DEFAULT_COMMENT_PREFIX
    default_key: str = DEFAULT_KEY
    indent: str = DEFAULT_INDENT
    key_sep: str = DEFAULT_KEY_SEPARATOR
    latin1: bool = True
    line_width: int | None = DEFAULT_LINE_WIDTH
    newline: str = DEFAULT_NEWLINE
    path_sep: str = DEFAULT_PATH_SEPARATOR
    fold_chars: str = DEFAULT_FOLD_CHARS

    def __post_init__(self) -> None:
        """Validate option invariants."""
        if not self.path_sep:
            msg = "StringifyOptions.path_sep must be a non-empty string"
            raise ValueError(msg)
        if not self.newline:
            msg = "StringifyOptions.newline must be a non-empty string"
            raise ValueError(msg)
        if self.line_width is not None and (
            isinstance(self.line_width, bool) or not isinstance(self.line_width, int)
        ):
            msg = f"StringifyOptions.line_width must be an int or None, got {self.line_width!r}"
            raise ValueError(msg)

    @property
    def escape_mode(self) -> EscapeMode:
        """EscapeMode selected by the latin1 flag."""
        return EscapeMode.LATIN1 if self.latin1 else EscapeMode.UNICODE


def _to_text(value: object) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


class PropertiesSerializer:
    """Converts lines or trees to .properties source.

    Thread-safe serializer with no mutable instance state.
    All serialization state is local to the serialize() call.

    Usage:
        >>> serializer = PropertiesSerializer(StringifyOptions(key_sep=": "))
        >>> serializer.serialize([("key", "value"), "# note"])
        'key: value\\n# note'
    """

    __slots__ = ("_comment_style", "_line_style", "_options")

    def __init__(self, options: StringifyOptions | None = None) -> None:
        """Initialize serializer.

        Args:
            options: Output styling (default: StringifyOptions())
        """
        self._options = options if options is not None else StringifyOptions()
        opts = self._options
        self._line_style = FoldStyle(
            indent=opts.indent,
            newline="\\" + opts.newline,
            line_width=opts.line_width,
            fold_chars=opts.fold_chars,
            mode=opts.escape_mode,
            escaped=True,
        )
        self._comment_style = FoldStyle(
            indent=opts.comment_prefix,
            newline=opts.newline,
            line_width=opts.line_width,
            fold_chars=opts.fold_chars,
            mode=opts.escape_mode,
            escaped=False,
        )

    @property
    def options(self) -> StringifyOptions:
        """Output styling used by this serializer."""
        return self._options

    def serialize(self, data: Mapping[str, Any] | Iterable[Any] | None) -> str:
        """Serialize a tree or a sequence of lines.

        Args:
            data: A mapping (flattened with path_sep and default_key first),
                or an ordered iterable whose entries are each:
                - "" or None or EmptyLine: blank line
                - str or Comment: comment line, re-prefixed with comment_prefix
                - (key, value) or Pair: key-value line joined by key_sep

        Returns:
            .properties source; logical lines joined by newline, with no
            trailing newline

        Raises:
            SerializationValidationError: If an entry or tree value has no
                .properties rendering, or a mapping contains itself
            TypeError: If data is a bare string
        """
        if not data:
            return ""
        if isinstance(data, str):
            msg = "stringify() expects a mapping or a sequence of lines, not a str"
            raise TypeError(msg)
        if isinstance(data, Mapping):
            from proplexengine.tree import flatten  # noqa: PLC0415 - circular

            lines: Iterable[Any] = flatten(
                data, self._options.path_sep, self._options.default_key
            )
        else:
            lines = data

        output = [self._serialize_line(index, line) for index, line in enumerate(lines)]
        return self._options.newline.join(output)

    def _serialize_line(self, index: int, line: object) -> str:
        """Serialize one entry, dispatching on its kind."""
        match line:
            case None | "" | EmptyLine():
                return ""
            case Pair(key=key, value=value):
                return self._serialize_pair(key, value)
            case Comment(comment=text):
                return self._serialize_comment(text)
            case str():
                return self._serialize_comment(line)
            case (key, value):
                return self._serialize_pair(_to_text(key), _to_text(value))
            case _:
                raise SerializationValidationError(
                    ErrorTemplate.line_entry_invalid(index, line)
                )

    def _serialize_pair(self, key: str, value: str) -> str:
        """Serialize a key-value line."""
        return fold_line(
            escape_key(key) + self._options.key_sep,
            escape_value(value),
            self._line_style,
        )

    def _serialize_comment(self, text: str) -> str:
        """Serialize a comment, replacing its marker with comment_prefix."""
        prefix = self._options.comment_prefix
        body = _COMMENT_START.sub(lambda _match: prefix, text, count=1)
        return fold_line("", body, self._comment_style)


def stringify(
    data: Mapping[str, Any] | Iterable[Any] | None,
    options: StringifyOptions | None = None,
    **overrides: Any,
) -> str:
    """Serialize a tree or a sequence of lines to .properties text.

    Convenience function for PropertiesSerializer.serialize().

    Args:
        data: Mapping or ordered iterable of lines (see PropertiesSerializer.serialize)
        options: Output styling (default: StringifyOptions())
        **overrides: StringifyOptions fields replacing those of options

    Returns:
        .properties source

    Raises:
        SerializationValidationError: If data has no .properties rendering
        TypeError: If an override names no StringifyOptions field

    Example:
        >>> stringify({"": "root", "a": {"": "A.", "a": "A.A"}}, key_sep=":")
        ':root\\na:A.\\na.a:A.A'
    """
    opts = options if options is not None else StringifyOptions()
    if overrides:
        opts = replace(opts, **overrides)
    return PropertiesSerializer(opts).serialize(data)
