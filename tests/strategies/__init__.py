"""Hypothesis strategies for PropLexEngine property-based testing.

Usage:
    from tests.strategies import line_sequences, stringify_options
    from tests.strategies.properties import property_text, trees

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - property_text, line_entries, stringify_options
"""

from .properties import (
    STRUCTURAL_CHARS,
    comment_lines,
    line_entries,
    line_sequences,
    property_text,
    stringify_options,
    trees,
)

__all__ = [
    "STRUCTURAL_CHARS",
    "comment_lines",
    "line_entries",
    "line_sequences",
    "property_text",
    "stringify_options",
    "trees",
]
