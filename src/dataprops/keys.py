"""Key grammar and canonicalization shared by the store, parser and lookups."""

from __future__ import annotations

import re

KEY_PATTERN = r"[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*"

_KEY_RE = re.compile(KEY_PATTERN)
_NUMERIC_RE = re.compile(r"\d+", re.ASCII)

# Only ASCII letters are folded; other characters are left as they are.
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def canonical_key(key: str) -> str:
    """Return the canonical (ASCII lower-cased) form of a dotted key."""
    return key.translate(_ASCII_LOWER)


def is_valid_key(key: str) -> bool:
    """Check that *key* is one or more identifier segments joined by ``.``."""
    return bool(_KEY_RE.fullmatch(key))


def is_numeric_segment(segment: str) -> bool:
    return bool(_NUMERIC_RE.fullmatch(segment))


def join_key(parent: str, child: str) -> str:
    """Join two key parts, treating an empty *parent* as the root."""
    if not parent:
        return child
    if not child:
        return parent
    return f"{parent}.{child}"


def split_parent(key: str) -> tuple[str, str]:
    """Split ``a.b.c`` into ``("a.b", "c")``; a single segment has parent ``""``."""
    if "." in key:
        parent, _, last = key.rpartition(".")
        return parent, last
    return "", key
