"""Shared constants for PropLexEngine.

This module provides centralized configuration constants used by the
scanner, the escape codec, the line folder and the tree layer. Placing
constants here avoids circular imports and provides a single source of
truth for option defaults.

Constants are grouped by domain:
- Character classes: Characters the scanner and folder classify
- Stringify defaults: Default values of StringifyOptions fields
- Tree keys: Default key and reserved key names

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Character classes
    "INDENT_CHARS",
    "LINE_TERMINATORS",
    "COMMENT_MARKERS",
    "SEPARATOR_CHARS",
    "KEY_TERMINATORS",
    # Stringify defaults
    "DEFAULT_COMMENT_PREFIX",
    "DEFAULT_INDENT",
    "DEFAULT_KEY_SEPARATOR",
    "DEFAULT_LINE_WIDTH",
    "DEFAULT_NEWLINE",
    "DEFAULT_PATH_SEPARATOR",
    "DEFAULT_FOLD_CHARS",
    # Tree keys
    "DEFAULT_KEY",
    "RESERVED_KEYS",
]

# ============================================================================
# CHARACTER CLASSES
# ============================================================================

# Leading indentation of a physical line. Never retained in records.
# Per java.util.Properties: space, tab and form feed.
INDENT_CHARS: frozenset[str] = frozenset(" \t\f")

# Physical line terminators. "\r\n" is handled as one terminator by the
# cursor; a lone "\r" still ends a line.
LINE_TERMINATORS: frozenset[str] = frozenset("\r\n")

# First non-indent character of a comment line.
COMMENT_MARKERS: frozenset[str] = frozenset("#!")

# Characters that may separate a key from its value. At most one of
# "=" or ":" is consumed per separator.
SEPARATOR_CHARS: frozenset[str] = frozenset("=:")

# Characters that end an unescaped key.
KEY_TERMINATORS: frozenset[str] = INDENT_CHARS | LINE_TERMINATORS | SEPARATOR_CHARS

# ============================================================================
# STRINGIFY DEFAULTS
# ============================================================================

# Replaces any leading "#"/"!" run of a comment line. "!" is also valid.
DEFAULT_COMMENT_PREFIX: str = "# "

# Indentation of continuation lines. Tabs are also valid.
DEFAULT_INDENT: str = "    "

# Text between key and value. Should hold at most one "=" or ":".
DEFAULT_KEY_SEPARATOR: str = " = "

# Maximum physical line width before folding. None or <= 0 disables it.
DEFAULT_LINE_WIDTH: int = 80

# Line terminator written between logical lines. Windows uses "\r\n".
DEFAULT_NEWLINE: str = "\n"

# Separator used to compose hierarchical keys from nested mappings.
DEFAULT_PATH_SEPARATOR: str = "."

# Characters after which a long line may be folded without changing
# its meaning: form feed, tab, space and full stop.
DEFAULT_FOLD_CHARS: str = "\f\t ."

# ============================================================================
# TREE KEYS
# ============================================================================

# Key under which a node stores its own scalar when it also has children.
# YAML 1.1 used "=" for the same purpose.
DEFAULT_KEY: str = ""

# Path segments never assigned when building a tree.
RESERVED_KEYS: frozenset[str] = frozenset({"__proto__"})
