"""Line folding for long .properties output lines.

A logical line longer than the configured width is split into several
physical lines. Key-value lines continue with a trailing backslash and
an indent; comment lines continue as a new comment with the comment
prefix. Breaks are placed right after a fold character when one was
seen in the current physical line, otherwise at the width (hard split).

The line is first cut into atomic units: a single character, an escape
pair such as "\\n" or "\\\\", a "\\uXXXX" escape, an escaped "\\r\\n" or a
raw line terminator. Breaks only ever fall between units, so unescaping
folded output is lossless wherever the break lands.

Pathological input (long runs of escape pairs without any fold
character) never fails: the folder always falls back to a hard split at
the current unit boundary.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from dataclasses import dataclass

from proplexengine.constants import (
    DEFAULT_FOLD_CHARS,
    DEFAULT_INDENT,
    DEFAULT_LINE_WIDTH,
    INDENT_CHARS,
    LINE_TERMINATORS,
)
from proplexengine.enums import EscapeMode

from .escapes import escape_non_printable

__all__ = ["FoldStyle", "fold_line"]

logger = logging.getLogger(__name__)

_HEX4 = re.compile(r"[0-9a-fA-F]{4}")


@dataclass(frozen=True, slots=True)
class FoldStyle:
    """How one kind of logical line is folded.

    Attributes:
        indent: Text starting each continuation line
        newline: Text ending each folded physical line
        line_width: Maximum physical line width; None or <= 0 disables folding
        fold_chars: Characters after which a break is preferred
        mode: Which characters escape_non_printable() writes as \\uXXXX
        escaped: True for key-value lines, whose text holds escape
            sequences and whose continuation lines drop leading whitespace.
            False for comments, whose text is taken literally.
    """

    indent: str = DEFAULT_INDENT
    newline: str = "\\\n"
    line_width: int | None = DEFAULT_LINE_WIDTH
    fold_chars: str = DEFAULT_FOLD_CHARS
    mode: EscapeMode = EscapeMode.LATIN1
    escaped: bool = True

    @property
    def width(self) -> int | None:
        """Effective width, or None when folding is disabled."""
        if self.line_width is None or self.line_width <= 0:
            return None
        return self.line_width


@dataclass(frozen=True, slots=True)
class _Unit:
    """Atomic piece of an output line."""

    text: str
    fold_after: bool = False
    breaks: bool = False
    raw_newline: bool = False


def _escaped_units(text: str, fold_chars: str) -> list[_Unit]:
    units: list[_Unit] = []
    i = 0
    end = len(text)
    while i < end:
        ch = text[i]
        if ch == "\\":
            nxt = text[i + 1] if i + 1 < end else ""
            if nxt == "u" and _HEX4.fullmatch(text, i + 2, i + 6):
                units.append(_Unit(text[i : i + 6]))
                i += 6
                continue
            if nxt == "r" and text.startswith("\\n", i + 2):
                units.append(_Unit(text[i : i + 4], breaks=True))
                i += 4
                continue
            pair = text[i : i + 2]
            match nxt:
                case "n" | "r":
                    units.append(_Unit(pair, breaks=True))
                case " " | "=" | ":":
                    units.append(_Unit(pair, fold_after=nxt in fold_chars))
                case "f":
                    units.append(_Unit(pair, fold_after="\f" in fold_chars))
                case "t":
                    units.append(_Unit(pair, fold_after="\t" in fold_chars))
                case _:
                    units.append(_Unit(pair))
            i += len(pair)
        elif ch in LINE_TERMINATORS:
            i = _append_terminator(units, text, i)
        else:
            units.append(_Unit(ch, fold_after=ch in fold_chars))
            i += 1
    return units


def _literal_units(text: str, fold_chars: str) -> list[_Unit]:
    units: list[_Unit] = []
    i = 0
    end = len(text)
    while i < end:
        ch = text[i]
        if ch in LINE_TERMINATORS:
            i = _append_terminator(units, text, i)
        else:
            units.append(_Unit(ch, fold_after=ch in fold_chars))
            i += 1
    return units


def _append_terminator(units: list[_Unit], text: str, i: int) -> int:
    size = 2 if text.startswith("\r\n", i) else 1
    units.append(_Unit(text[i : i + size], breaks=True, raw_newline=True))
    return i + size


def _layout(units: list[_Unit], start_col: int, style: FoldStyle, value_start: int = 0) -> str:
    """Place breaks between units and join the physical lines.

    Units before value_start are the key and separator: a break never
    leaves separator whitespace at the start of a continuation line.
    """
    width = style.width
    break_text = style.newline + style.indent
    out: list[str] = []
    chunk_start = 0
    col = start_col
    split: int | None = None
    hard_splits = 0
    k = 0
    while k < len(units):
        unit = units[k]
        end: int | None = None
        if width is not None and col >= width and k > chunk_start:
            if split is None:
                hard_splits += 1
                end = k
            else:
                end = split
        else:
            col += len(unit.text)
            k += 1
            if unit.breaks:
                end = k
            elif unit.fold_after:
                split = k
        if end is None:
            continue
        while end < value_start and units[end].text in INDENT_CHARS:
            end += 1
        if end >= len(units) and not units[-1].raw_newline:
            break

        chunk = units[chunk_start:end]
        if chunk and chunk[-1].raw_newline:
            chunk = chunk[:-1]
        out.extend(u.text for u in chunk)
        out.append(break_text)

        chunk_start = k = end
        col = len(style.indent)
        split = None
        if style.escaped and value_start <= k < len(units) and units[k].text[0] in INDENT_CHARS:
            # Continuation indent is skipped on re-parse; keep this whitespace.
            ws = units[k].text
            units[k] = _Unit("\\" + ws, fold_after=ws in style.fold_chars)

    out.extend(u.text for u in units[chunk_start:])
    if hard_splits:
        logger.debug(
            "Folded line with %d hard split(s): no fold character within width %s",
            hard_splits,
            width,
        )
    return "".join(out)


def fold_line(key: str, value: str, style: FoldStyle) -> str:
    """Escape non-printable characters and fold one logical line.

    Args:
        key: Escaped key plus key separator, or "" for comments
        value: Escaped value, or the prefixed comment text
        style: Width, indent and continuation text to use

    Returns:
        The logical line as one or more physical lines. When the key plus
        separator is narrower than the width, it stays whole on the first
        physical line and the value starts on the next one.

    Example:
        >>> fold_line("k0 = ", "0 val0", FoldStyle(indent="  ", line_width=8))
        'k0 = \\\\\\n  0 val0'
    """
    print_key = escape_non_printable(key, style.mode)
    print_value = escape_non_printable(value, style.mode)
    line = print_key + print_value
    width = style.width
    fits = width is None or len(line) <= width
    if fits and (style.escaped or not any(ch in LINE_TERMINATORS for ch in line)):
        return line

    split_units = _escaped_units if style.escaped else _literal_units
    if width is not None and print_key and len(print_key) < width:
        units = split_units(print_value, style.fold_chars)
        head = print_key + style.newline + style.indent
        return head + _layout(units, len(style.indent), style)
    if style.escaped:
        units = _escaped_units(print_key, style.fold_chars)
        value_start = len(units)
        units.extend(_escaped_units(print_value, style.fold_chars))
        return _layout(units, 0, style, value_start)
    return _layout(_literal_units(line, style.fold_chars), 0, style)
