"""Tests for stringify() and PropertiesSerializer.

Covers line entry kinds, comment re-prefixing, escaping modes, option
validation and rejection of unwritable input.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from proplexengine import (
    Comment,
    EmptyLine,
    Pair,
    PropertiesSerializer,
    SerializationValidationError,
    StringifyOptions,
    parse,
    parse_lines,
    stringify,
)
from proplexengine.diagnostics import DiagnosticCode
from proplexengine.enums import EscapeMode

LINES = [
    '# You are reading the ".properties" entry.',
    "! The exclamation mark can also mark text as comments.",
    ("lala", "ℊ the foo foo lalala;"),
    ("website", "http://en.wikipedia.org/"),
    "# Add spaces to the key",
    ("key with spaces", 'value for "key with spaces"'),
    ("tab", "\t"),
    ("another-test", ":: hihi"),
    ("null-prop", ""),
]

# ============================================================================
# LINE ENTRIES
# ============================================================================


class TestStringifyLines:
    """Test stringify() on ordered line sequences."""

    @pytest.mark.parametrize("data", [None, [], {}])
    def test_empty_input(self, data: object) -> None:
        """Empty or missing input is written as empty text."""
        assert stringify(data) == ""  # type: ignore[arg-type]

    def test_written_lines_read_back(self) -> None:
        """Written lines scan back; only comment markers are normalized."""
        out = stringify(LINES)
        fixed = out.replace("# The exclamation mark", "! The exclamation mark")
        expected = [
            Comment(line) if isinstance(line, str) else Pair(*line) for line in LINES
        ]

        assert parse_lines(out) != expected
        assert parse_lines(fixed) == expected

    def test_ascii(self) -> None:
        """Latin-1 mode escapes beyond ISO-8859-1; Unicode mode only controls."""
        src = "ipsum áé ĐѺ lore\0"

        assert stringify([("", src)], key_sep="") == "ipsum áé \\u0110\\u047a lore\\u0000"
        assert stringify([("", src)], latin1=False, key_sep="") == src[:-1] + "\\u0000"

    def test_empty_strings_are_blank_lines(self) -> None:
        """'' entries become blank lines."""
        assert stringify([""]) == ""
        assert stringify([("key1", "value1"), "", ("key2", "value2")]) == (
            "key1 = value1\n\nkey2 = value2"
        )

    def test_none_is_blank_line(self) -> None:
        """None entries also become blank lines."""
        assert stringify([("a", "1"), None, ("b", "2")]) == "a = 1\n\nb = 2"

    def test_empty_comments(self) -> None:
        """Bare comment markers are re-prefixed."""
        lines = [("key1", "value1"), "#", "! ", ("key2", "value2")]

        assert stringify(lines) == "key1 = value1\n# \n# \nkey2 = value2"

    def test_comment_prefix_option(self) -> None:
        """comment_prefix replaces the existing marker and its whitespace."""
        assert stringify(["  #  note", "plain"], comment_prefix="! ") == "! note\n! plain"

    def test_only_one_marker_is_replaced(self) -> None:
        """A run of markers keeps all but the first."""
        assert stringify(["## heading"]) == "# # heading"

    def test_manual_line_breaks_in_comment(self) -> None:
        """CRLF in a comment starts a new comment line."""
        lorem = "\r\nLorem ipsum dolor sit amet,\r\nconsectetur adipiscing elit"

        assert stringify([lorem]) == "# Lorem ipsum dolor sit amet,\n# consectetur adipiscing elit"

    def test_key_separator_and_newline_options(self) -> None:
        """key_sep and newline shape every line."""
        out = stringify([("a", "1"), ("b", "2")], key_sep=": ", newline="\r\n")

        assert out == "a: 1\r\nb: 2"

    def test_non_string_pair_parts_are_coerced(self) -> None:
        """Pair parts are written with str(); None becomes ''."""
        assert stringify([("n", 42), ("x", None)]) == "n = 42\nx = "

    def test_list_pairs_accepted(self) -> None:
        """Two-item lists are pairs too."""
        assert stringify([["a", "b"]]) == "a = b"

    def test_str_input_rejected(self) -> None:
        """A bare string is not a line sequence."""
        with pytest.raises(TypeError, match="not a str"):
            stringify("key = value")  # type: ignore[arg-type]

    @pytest.mark.parametrize("entry", [42, ("a", "b", "c"), ("a",), object()])
    def test_invalid_entry_rejected(self, entry: object) -> None:
        """Entries that are not comments, blanks or pairs are rejected."""
        with pytest.raises(SerializationValidationError) as exc_info:
            stringify([("ok", "1"), entry])

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.LINE_ENTRY_INVALID
        assert diagnostic.key_path == "line 1"
        assert diagnostic.received_type == type(entry).__name__

    def test_invalid_entry_is_value_error(self) -> None:
        """SerializationValidationError is also a ValueError."""
        with pytest.raises(ValueError, match="LINE_ENTRY_INVALID"):
            stringify([3.5])


# ============================================================================
# LINE RECORDS
# ============================================================================


class TestStringifyRecords:
    """Test stringify() on parse_lines() output."""

    def test_add_node(self) -> None:
        """Records from parse_lines() and constructed records mix freely."""
        src = "key:\nkey2: value2"
        lines = parse_lines(src, with_ranges=True)
        lines.append(Pair("key3", "value3"))

        assert lines[2].separator(src) is None  # type: ignore[union-attr]
        assert parse(lines) == {"key": "", "key2": "value2", "key3": "value3"}
        assert stringify(lines) == "key = \nkey2 = value2\nkey3 = value3"

    def test_all_record_kinds(self) -> None:
        """Comment and EmptyLine records are written like their plain forms."""
        lines = [Comment("! note"), EmptyLine(), Pair("k", "v")]

        assert stringify(lines) == "# note\n\nk = v"

    def test_roundtrip_keeps_line_structure(self) -> None:
        """Writing scanned records keeps comments, blanks and pairs in order."""
        src = "# head\n\na = 1\n# tail"

        assert parse_lines(stringify(parse_lines(src))) == parse_lines(src)


# ============================================================================
# TREES
# ============================================================================


class TestStringifyTree:
    """Test stringify() on mappings."""

    def test_write_default_values(self) -> None:
        """Default-key leaves take their parent's path."""
        tree = {"": "root", "a": {"": "A.", "a": "A.A"}, "b": {"": "B", "b": "B.B"}}

        assert stringify(tree, key_sep=":") == ":root\na:A.\na.a:A.A\nb:B\nb.b:B.B"

    def test_custom_path_separator_and_default_key(self) -> None:
        """path_sep and default_key shape flattened keys."""
        tree = {"a": {"_": "A", "b": "B"}}

        assert stringify(tree, path_sep="/", default_key="_") == "a = A\na/b = B"

    def test_cycle_rejected(self) -> None:
        """A tree containing itself cannot be written."""
        tree: dict[str, object] = {"a": {}}
        tree["a"]["self"] = tree  # type: ignore[index]

        with pytest.raises(SerializationValidationError) as exc_info:
            stringify(tree)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.TREE_CYCLE


# ============================================================================
# OPTIONS
# ============================================================================


class TestStringifyOptions:
    """Test StringifyOptions defaults and validation."""

    def test_defaults(self) -> None:
        """Defaults match the documented output style."""
        options = StringifyOptions()

        assert options.comment_prefix == "# "
        assert options.indent == "    "
        assert options.key_sep == " = "
        assert options.line_width == 80
        assert options.newline == "\n"
        assert options.path_sep == "."
        assert options.fold_chars == "\f\t ."
        assert options.escape_mode == EscapeMode.LATIN1

    def test_latin1_false_selects_unicode_mode(self) -> None:
        """latin1=False maps to EscapeMode.UNICODE."""
        assert StringifyOptions(latin1=False).escape_mode == EscapeMode.UNICODE

    @pytest.mark.parametrize(
        "overrides",
        [{"path_sep": ""}, {"newline": ""}, {"line_width": 8.5}, {"line_width": True}],
    )
    def test_invalid_options(self, overrides: dict[str, object]) -> None:
        """Invalid option values raise ValueError at construction."""
        with pytest.raises(ValueError, match="StringifyOptions"):
            StringifyOptions(**overrides)  # type: ignore[arg-type]

    def test_unknown_override_rejected(self) -> None:
        """Overrides must name StringifyOptions fields."""
        with pytest.raises(TypeError):
            stringify([("a", "b")], width=10)

    def test_options_object_and_overrides(self) -> None:
        """Overrides replace fields of a given options object."""
        base = StringifyOptions(key_sep="=")

        assert stringify([("a", "b")], base, newline="\r\n") == "a=b"
        assert stringify([("a", "b"), ("c", "d")], base, newline="\r\n") == "a=b\r\nc=d"

    def test_serializer_reuse(self) -> None:
        """A serializer can be reused across calls."""
        serializer = PropertiesSerializer(replace(StringifyOptions(), key_sep=":"))

        assert serializer.serialize([("a", "1")]) == "a:1"
        assert serializer.serialize({"b": "2"}) == "b:2"
        assert serializer.options.key_sep == ":"
