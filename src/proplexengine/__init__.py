"""PropLexEngine - Java .properties parser and writer.

A bidirectional codec for the .properties format: comments, blank lines,
key-value pairs, escape sequences, line continuations and mixed line
terminators. Text goes in and out; files and encodings are the caller's
business.

Public API:
    parse - Parse .properties text to a flat or nested mapping
    parse_lines - Parse .properties text to ordered line records
    stringify - Write a mapping or line sequence as .properties text
    StringifyOptions - Output styling (width, indent, separators, escaping)
    Pair, Comment, EmptyLine - Line records (LineRecord union)

Exceptions:
    PropertiesError - Base exception class
    SerializationValidationError - Input that stringify() cannot write

Submodules:
    proplexengine.syntax - Scanner, escape codec, line folder, serializer
    proplexengine.tree - Mapping builder and flattener
    proplexengine.diagnostics - Error codes, templates and formatting
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import PropertiesError, SerializationValidationError
from .enums import EscapeMode, LineKind
from .syntax import (
    Comment,
    EmptyLine,
    LineRecord,
    Pair,
    PropertiesSerializer,
    StringifyOptions,
    escape,
    stringify,
    unescape,
)
from .syntax import scan_lines as parse_lines
from .tree import Tree, TreeValue, build_tree, flatten, parse

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("proplexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Comment",
    "EmptyLine",
    "EscapeMode",
    "LineKind",
    "LineRecord",
    "Pair",
    "PropertiesError",
    "PropertiesSerializer",
    "SerializationValidationError",
    "StringifyOptions",
    "Tree",
    "TreeValue",
    "__version__",
    "build_tree",
    "escape",
    "flatten",
    "parse",
    "parse_lines",
    "stringify",
    "unescape",
]
