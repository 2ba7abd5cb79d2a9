"""Tests for tree building and flattening.

Covers flat and path-split parsing, default-key demotion, reserved
segments, flattening order, cycles and leaf coercion.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from proplexengine import (
    Comment,
    EmptyLine,
    Pair,
    SerializationValidationError,
    build_tree,
    flatten,
    parse,
    stringify,
)
from proplexengine.diagnostics import DiagnosticCode

DEFAULT_VALUES_TREE = {
    "": "root",
    "a": {"": "A.", "a": "A.A"},
    "b": {"": "B", "b": "B.B"},
}

# ============================================================================
# PARSE
# ============================================================================


class TestParse:
    """Test parse() into flat and nested mappings."""

    def test_flat_keys_verbatim(self) -> None:
        """Without path splitting, separators stay in the keys."""
        assert parse("a.b = 1\na = 2") == {"a.b": "1", "a": "2"}

    def test_later_duplicate_wins(self) -> None:
        """A repeated key keeps its last value."""
        assert parse("k = 1\nk = 2") == {"k": "2"}

    def test_read_default_values(self) -> None:
        """A key's own value moves under '' once it has children."""
        src = ":root\na:A\na.:A.\na.a:A.A\nb.b:B.B\nb:B"

        assert parse(src, True) == DEFAULT_VALUES_TREE

    def test_custom_path_separator(self) -> None:
        """A string path splits keys on that separator."""
        src = ":root\na:A\na/:A.\na/a:A.A\nb/b:B.B\nb:B"

        assert parse(src, "/") == DEFAULT_VALUES_TREE

    def test_empty_path_string_is_flat(self) -> None:
        """An empty separator string disables splitting."""
        assert parse("a.b = 1", "") == {"a.b": "1"}

    def test_malformed_unicode_escape(self) -> None:
        """A bad \\u escape keeps the literal remainder."""
        assert parse("foo: \\uabcx", True) == {"foo": "uabcx"}

    def test_custom_default_key(self) -> None:
        """default_key names the slot for a node's own value."""
        assert parse("a = A\na.b = B", True, default_key="_") == {"a": {"_": "A", "b": "B"}}

    def test_parse_records(self) -> None:
        """parse() accepts scanned or constructed records."""
        lines = [Comment("# c"), EmptyLine(), Pair("a.b", "1"), ("a.c", "2")]

        assert parse(lines, path=True) == {"a": {"b": "1", "c": "2"}}


# ============================================================================
# BUILD TREE
# ============================================================================


class TestBuildTree:
    """Test build_tree() edge cases."""

    def test_empty_scalar_is_demoted(self) -> None:
        """An empty intermediate value is kept under the default key."""
        assert build_tree([("a", ""), ("a.b", "B")], ".") == {"a": {"": "", "b": "B"}}

    def test_skips_non_pairs(self) -> None:
        """Comments, blanks and malformed entries are ignored."""
        lines = ["# c", "", None, ("only-one",), ("k", "v")]

        assert build_tree(lines) == {"k": "v"}  # type: ignore[arg-type]

    @pytest.mark.parametrize("key", ["__proto__", "__proto__.x", "a.__proto__", "a.__proto__.b"])
    def test_reserved_segment_rejected(self, key: str, caplog: pytest.LogCaptureFixture) -> None:
        """Keys with a reserved path segment are skipped and logged."""
        with caplog.at_level(logging.DEBUG, logger="proplexengine.tree"):
            tree = build_tree([(key, "polluted"), ("ok", "1")], ".")

        assert tree == {"ok": "1"}
        assert "reserved path segment" in caplog.text

    def test_reserved_key_allowed_without_paths(self) -> None:
        """Flat mappings keep every key verbatim."""
        assert build_tree([("__proto__", "x")]) == {"__proto__": "x"}

    def test_result_is_fresh(self) -> None:
        """Each call builds new mappings."""
        lines = [("a.b", "1")]

        first = build_tree(lines, ".")
        second = build_tree(lines, ".")

        assert first == second
        assert first["a"] is not second["a"]


# ============================================================================
# FLATTEN
# ============================================================================


class TestFlatten:
    """Test flatten() ordering and leaf handling."""

    def test_depth_first_order(self) -> None:
        """Lines follow each mapping's iteration order, depth first."""
        assert flatten(DEFAULT_VALUES_TREE) == [
            ("", "root"),
            ("a", "A."),
            ("a.a", "A.A"),
            ("b", "B"),
            ("b.b", "B.B"),
        ]

    def test_multi_char_separator(self) -> None:
        """Default-key paths strip the whole separator."""
        assert flatten({"a": {"": "A", "b": "B"}}, "::") == [("a", "A"), ("a::b", "B")]

    def test_scalar_leaves(self) -> None:
        """Scalars are written with str(); None becomes ''."""
        tree = {"i": 1, "f": 1.5, "b": True, "d": Decimal("2.50"), "n": None}

        assert flatten(tree) == [
            ("i", "1"),
            ("f", "1.5"),
            ("b", "True"),
            ("d", "2.50"),
            ("n", ""),
        ]

    @pytest.mark.parametrize("value", [["x"], ("x",), {"x"}, b"x"])
    def test_collection_leaf_rejected(self, value: object) -> None:
        """Sequences and sets have no property rendering."""
        with pytest.raises(SerializationValidationError) as exc_info:
            flatten({"a": {"b": value}})

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.TREE_VALUE_INVALID
        assert diagnostic.key_path == "a.b"

    def test_cycle_rejected(self) -> None:
        """A mapping reachable from itself is reported with its path."""
        inner: dict[str, object] = {}
        tree = {"a": {"b": inner}}
        inner["loop"] = tree

        with pytest.raises(SerializationValidationError) as exc_info:
            flatten(tree)

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.TREE_CYCLE
        assert diagnostic.key_path == "a.b.loop"

    def test_shared_subtree_is_not_a_cycle(self) -> None:
        """The same mapping may appear in sibling positions."""
        shared = {"x": "1"}

        assert flatten({"a": shared, "b": shared}) == [("a.x", "1"), ("b.x", "1")]

    def test_deep_tree(self) -> None:
        """Depth is not limited by the recursion limit."""
        tree: dict[str, object] = {"v": "leaf"}
        for _ in range(5000):
            tree = {"n": tree}

        lines = flatten(tree)

        assert lines == [("n." * 5000 + "v", "leaf")]

    def test_roundtrip_through_text(self) -> None:
        """stringify() then parse() restores a nested tree."""
        tree = {"db": {"host": "localhost", "port": "5432"}, "name": "app"}

        assert parse(stringify(tree), path=True) == tree
