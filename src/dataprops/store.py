# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory property store: canonical dotted keys plus ordered child indices."""

from __future__ import annotations

from collections.abc import Iterator

from dataprops.keys import canonical_key, is_valid_key, split_parent


class PropertyStore:
    """Backend holding property values and the child index of every node.

    Values are strings or ``None`` (the null sentinel, distinct from ``""``).
    Child indices are kept apart from values: for every key that has
    children, ``_children`` maps the key (``""`` for the root) to the list of
    its immediate child segments in first-insertion order, without duplicates.

    There is no delete operation. Overwriting a key replaces its value but
    never removes it from its ancestors' child indices.
    """

    def __init__(self) -> None:
        self._values: dict[str, str | None] = {}
        self._children: dict[str, list[str]] = {}

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_key(key) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def keys(self) -> Iterator[str]:
        """Iterate over the canonical keys that hold a value (or null)."""
        return iter(self._values)

    def set(self, key: str, value: str | None) -> None:
        """Create or overwrite *key* with *value* and register it in the child indices."""
        if not is_valid_key(key):
            raise ValueError(f"Invalid property key: {key!r}")
        key = canonical_key(key)
        self._values[key] = value
        while key:
            parent, segment = split_parent(key)
            siblings = self._children.get(parent)
            if siblings is None:
                self._children[parent] = [segment]
            elif segment not in siblings:
                siblings.append(segment)
            key = parent

    def get_raw(self, key: str, default: str | None = None) -> str | None:
        """Return the stored value for *key*, or *default* if it does not exist."""
        return self._values.get(canonical_key(key), default)

    def children(self, key: str = "") -> list[str]:
        """Return the ordered child segments of *key* (root when empty)."""
        return list(self._children.get(canonical_key(key), ()))

    def has_children(self, key: str) -> bool:
        return bool(self._children.get(canonical_key(key)))

    def copy(self) -> PropertyStore:
        """Return a shallow copy.

        Both mappings are copied, but the child-index lists are shared with
        this store: registering a new child of an existing node in either
        store shows up in both.
        """
        new = PropertyStore()
        new._values = dict(self._values)
        new._children = dict(self._children)
        return new
