""".properties syntax package.

Provides the line scanner, line record definitions, escape codec, line
folder and serializer. Independent of the tree layer so tooling can edit
documents line by line.

Python 3.13+.
"""

from .ast import Comment, EmptyLine, LineRecord, Pair, PairSpan, Span
from .cursor import Cursor
from .escapes import escape, escape_key, escape_non_printable, escape_value, unescape
from .folder import FoldStyle, fold_line
from .scanner import PropertiesScanner, scan_lines
from .serializer import PropertiesSerializer, StringifyOptions, stringify

__all__ = [
    "Comment",
    "Cursor",
    "EmptyLine",
    "FoldStyle",
    "LineRecord",
    "Pair",
    "PairSpan",
    "PropertiesScanner",
    "PropertiesSerializer",
    "Span",
    "StringifyOptions",
    "escape",
    "escape_key",
    "escape_non_printable",
    "escape_value",
    "fold_line",
    "scan_lines",
    "stringify",
    "unescape",
]
