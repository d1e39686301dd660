"""Render a property store as text, or as nested Python lists and dicts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from dataprops.keys import canonical_key, is_numeric_segment, join_key
from dataprops.store import PropertyStore

Expander = Callable[[Optional[str]], Optional[str]]


def quote_value(value: str) -> str:
    """Single-quote *value*, escaping backslashes and embedded quotes."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def dump_store(store: PropertyStore, start: str = "", expand: Expander | None = None) -> str:
    """Return a listing of every property below *start* (whole tree when empty).

    Children are visited depth first in insertion order, each child's
    descendants before its own ``key = 'value'`` line. Levels with more than
    one child get a ``# key.@ = child child ...`` comment. Null values are
    left out. With *expand*, each value is passed through it first.
    """
    lines: list[str] = []
    _dump_level(store, canonical_key(start), expand, lines)
    return "".join(lines)


def _dump_level(store: PropertyStore, current: str, expand: Expander | None, out: list[str]) -> None:
    children = store.children(current)
    if len(children) > 1:
        out.append(f"# {join_key(current, '@')} = {' '.join(children)}\n")
    for child in children:
        key = join_key(current, child)
        _dump_level(store, key, expand, out)
        value = store.get_raw(key)
        if expand is not None:
            value = expand(value)
        if value is None:
            continue
        out.append(f"{key} = {quote_value(value)}\n")


def materialize(store: PropertyStore, key: str = "", expand: Expander | None = None) -> Any:
    """Return the subtree at *key* as plain Python data.

    A node whose child segments are all numeric becomes a list ordered by
    index; any other node with children becomes a dict in insertion order;
    a leaf becomes its (optionally expanded) value.
    """
    key = canonical_key(key)
    children = store.children(key)
    if not children:
        value = store.get_raw(key)
        return expand(value) if expand is not None else value
    if all(is_numeric_segment(child) for child in children):
        return [materialize(store, join_key(key, child), expand) for child in sorted(children, key=int)]
    return {child: materialize(store, join_key(key, child), expand) for child in children}
