"""Escape codec for .properties keys, values and comments.

Unescaping follows java.util.Properties.load(): \\t \\n \\f \\r map to
control characters, \\uXXXX to a UTF-16 code unit, a backslash before a
line terminator joins the next physical line (dropping its indentation),
and any other escaped character stands for itself.

Escaping is split in two stages so the line folder can work on the final
text: escape_key()/escape_value() protect structural characters, and
escape_non_printable() then writes characters outside the target
character set as \\uXXXX.

Python 3.13+. Zero external dependencies.
"""

import re

from proplexengine.enums import EscapeMode

__all__ = [
    "escape",
    "escape_key",
    "escape_non_printable",
    "escape_value",
    "unescape",
]

# Groups: \uXXXX | line terminator plus following indent | any single character.
# A trailing lone backslash matches with no group and is dropped.
_ESCAPE_SEQUENCE = re.compile(
    r"\\(u[0-9a-fA-F]{4}|(?:\r\n?|\n)[ \t\f]*|.)?",
    re.DOTALL,
)

_CONTROL_ESCAPES: dict[str, str] = {
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")

_ESCAPE_TABLE = str.maketrans({
    "\\": "\\\\",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
})

_KEY_ESCAPE_TABLE = str.maketrans({
    "\\": "\\\\",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    " ": "\\ ",
    "=": "\\=",
    ":": "\\:",
})

# Characters written as \uXXXX, per mode.
_NON_PRINTABLE: dict[EscapeMode, re.Pattern[str]] = {
    EscapeMode.LATIN1: re.compile("[^\t\n\f\r -~\xa1-\xff]"),
    EscapeMode.UNICODE: re.compile("[\x00-\x08\x0b\x0e-\x1f]"),
}


def _replace_escape(match: re.Match[str]) -> str:
    code = match.group(1)
    if code is None:
        return ""
    first = code[0]
    if first == "u" and len(code) == 5:
        return chr(int(code[1:], 16))
    if first in "\r\n":
        return ""
    return _CONTROL_ESCAPES.get(first, first)


def _join_surrogates(match: re.Match[str]) -> str:
    high, low = match.group(0)
    return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))


def unescape(text: str) -> str:
    """Resolve escape sequences in raw key or value text.

    Malformed escapes never fail: "\\u" followed by fewer than four hex
    digits drops the backslash and keeps the rest literally. UTF-16
    surrogate pairs written as two \\u escapes become one code point.

    Args:
        text: Raw text as found between the scanner's key or value offsets

    Returns:
        Unescaped text

    Example:
        >>> unescape("a\\\\tb")
        'a\\tb'
        >>> unescape("\\\\uabcx")
        'uabcx'
    """
    if "\\" not in text:
        return text
    result = _ESCAPE_SEQUENCE.sub(_replace_escape, text)
    if "\\u" in text:
        result = _SURROGATE_PAIR.sub(_join_surrogates, result)
    return result


def escape(text: str) -> str:
    """Escape backslash and the control characters \\f \\n \\r \\t."""
    return text.translate(_ESCAPE_TABLE)


def escape_key(key: str) -> str:
    """Escape a key, additionally protecting space, "=" and ":".

    A leading "#" or "!" is escaped too, or the line would read back as
    a comment.

    Example:
        >>> escape_key("key with spaces")
        'key\\\\ with\\\\ spaces'
    """
    escaped = key.translate(_KEY_ESCAPE_TABLE)
    if escaped[:1] in ("#", "!"):
        return "\\" + escaped
    return escaped


def escape_value(value: str) -> str:
    """Escape a value, additionally protecting one leading space.

    Only the first space needs a backslash: after it, the scanner is
    already inside the value and keeps whitespace.
    """
    escaped = value.translate(_ESCAPE_TABLE)
    if escaped.startswith(" "):
        return "\\" + escaped
    return escaped


def _unicode_escape(match: re.Match[str]) -> str:
    code = ord(match.group(0))
    if code > 0xFFFF:
        # Java strings are UTF-16: write the surrogate pair.
        code -= 0x10000
        return f"\\u{0xD800 + (code >> 10):04x}\\u{0xDC00 + (code & 0x3FF):04x}"
    return f"\\u{code:04x}"


def escape_non_printable(text: str, mode: EscapeMode = EscapeMode.LATIN1) -> str:
    """Write characters outside the mode's character set as \\uXXXX.

    Args:
        text: Text already processed by escape_key() or escape_value(),
            or a comment line
        mode: LATIN1 keeps printable ASCII and U+00A1..U+00FF literal;
            UNICODE only escapes C0 controls other than \\t \\n \\f \\r

    Returns:
        Text with lowercase, zero-padded four digit \\u escapes

    Example:
        >>> escape_non_printable("áĐ\\x00")
        'á\\\\u0110\\\\u0000'
        >>> escape_non_printable("áĐ\\x00", EscapeMode.UNICODE)
        'áĐ\\\\u0000'
    """
    return _NON_PRINTABLE[mode].sub(_unicode_escape, text)
