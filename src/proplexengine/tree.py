"""Tree building and flattening for .properties data.

build_tree() folds key-value lines into a mapping, optionally splitting
keys on a path separator into nested mappings. flatten() is its inverse
and produces the ordered (key, value) lines that stringify() writes.

When both "a" and "a.b" are present, "a" cannot be a string and a
mapping at once: its own value moves under the default key ("" unless
configured), giving {"a": {"": "A", "b": "B"}}.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence, Set
from typing import Any

from .constants import DEFAULT_KEY, DEFAULT_PATH_SEPARATOR, RESERVED_KEYS
from .diagnostics import ErrorTemplate, SerializationValidationError
from .syntax.ast import LineRecord, Pair
from .syntax.scanner import scan_lines

__all__ = ["Tree", "TreeValue", "build_tree", "flatten", "parse"]

logger = logging.getLogger(__name__)

type TreeValue = str | Tree
type Tree = dict[str, TreeValue]


def _demote_scalar(node: Tree, segment: str, default_key: str) -> Tree:
    """Return the child mapping at segment, creating or demoting as needed."""
    child = node.get(segment)
    if isinstance(child, dict):
        return child
    new_child: Tree = {} if child is None else {default_key: child}
    node[segment] = new_child
    return new_child


def _add_pair(
    tree: Tree, key: str, value: str, path_sep: str | None, default_key: str
) -> None:
    if path_sep is None:
        tree[key] = value
        return

    *parents, leaf = key.split(path_sep)
    if leaf in RESERVED_KEYS or not RESERVED_KEYS.isdisjoint(parents):
        logger.debug("Skipped key %r: reserved path segment", key)
        return

    node = tree
    for segment in parents:
        node = _demote_scalar(node, segment, default_key)

    existing = node.get(leaf)
    if isinstance(existing, dict):
        existing[default_key] = value
    else:
        node[leaf] = value


def build_tree(
    lines: Iterable[LineRecord | Sequence[str] | str | None],
    path_sep: str | None = None,
    *,
    default_key: str = DEFAULT_KEY,
) -> Tree:
    """Fold key-value lines into a mapping.

    Later duplicates overwrite earlier ones. Comments and blank lines,
    in record or plain form, are ignored.

    Args:
        lines: Pair records or (key, value) sequences, mixed with
            anything else that is skipped
        path_sep: Split keys on this separator into nested mappings;
            None keeps keys verbatim in a flat mapping
        default_key: Key holding a node's own value once it has children

    Returns:
        New mapping; never shares structure with the input

    Example:
        >>> build_tree([("a", "A"), ("a.b", "B")], ".")
        {'a': {'': 'A', 'b': 'B'}}
    """
    tree: Tree = {}
    for line in lines:
        match line:
            case Pair(key=key, value=value):
                _add_pair(tree, key, value, path_sep, default_key)
            case (str() as key, str() as value):
                _add_pair(tree, key, value, path_sep, default_key)
            case _:
                continue
    return tree


def _leaf_text(key_path: str, value: object) -> str:
    """Render a tree leaf as property text."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, (Sequence, Set)):
        raise SerializationValidationError(ErrorTemplate.tree_value_invalid(key_path, value))
    return str(value)


def flatten(
    tree: Mapping[str, Any],
    path_sep: str = DEFAULT_PATH_SEPARATOR,
    default_key: str = DEFAULT_KEY,
) -> list[tuple[str, str]]:
    """Flatten a mapping into ordered (key, value) lines.

    Depth-first, in each mapping's iteration order. Nested keys are
    joined with path_sep; a leaf named default_key takes its parent's
    path.

    Args:
        tree: Mapping of strings, scalars and nested mappings
        path_sep: Separator joining nested keys
        default_key: Leaf key written under the parent's own path

    Returns:
        (key, value) tuples ready for stringify()

    Raises:
        SerializationValidationError: If a mapping contains itself, or a
            leaf is a sequence or set

    Example:
        >>> flatten({"": "root", "a": {"": "A", "b": "B"}})
        [('', 'root'), ('a', 'A'), ('a.b', 'B')]
    """
    lines: list[tuple[str, str]] = []
    # Explicit stack of (mapping, its items iterator, key prefix) so depth
    # is bounded by memory, not the interpreter recursion limit.
    stack: list[tuple[Mapping[str, Any], Any, str]] = [(tree, iter(tree.items()), "")]
    active: set[int] = {id(tree)}

    while stack:
        node, items, prefix = stack[-1]
        entry = next(items, None)
        if entry is None:
            stack.pop()
            active.discard(id(node))
            continue

        raw_key, value = entry
        key = raw_key if isinstance(raw_key, str) else str(raw_key)
        if isinstance(value, Mapping):
            if id(value) in active:
                raise SerializationValidationError(ErrorTemplate.tree_cycle(prefix + key))
            active.add(id(value))
            stack.append((value, iter(value.items()), prefix + key + path_sep))
            continue

        path = prefix[: len(prefix) - len(path_sep)] if key == default_key else prefix + key
        lines.append((path, _leaf_text(path, value)))

    return lines


def parse(
    source: str | Iterable[LineRecord | Sequence[str] | str | None],
    path: bool | str = False,
    *,
    default_key: str = DEFAULT_KEY,
) -> Tree:
    """Parse .properties text (or already scanned lines) into a mapping.

    Args:
        source: .properties text, or a sequence of lines as returned by
            parse_lines()
        path: False for a flat mapping with verbatim keys; True to nest
            keys on "."; a string to nest keys on that separator
        default_key: Key holding a node's own value once it has children

    Returns:
        Flat or nested mapping of unescaped strings

    Example:
        >>> parse("a = 1\\na.b = 2", path=True)
        {'a': {'': '1', 'b': '2'}}
    """
    if isinstance(path, str):
        path_sep: str | None = path or None
    else:
        path_sep = DEFAULT_PATH_SEPARATOR if path else None
    lines = scan_lines(source) if isinstance(source, str) else source
    return build_tree(lines, path_sep, default_key=default_key)
