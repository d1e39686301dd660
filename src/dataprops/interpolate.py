"""Placeholder expansion against the environment and a property store.

Handles:
  - a leading ``~`` (followed by ``/`` or end of text) replaced by ``$HOME``
  - ``${name}``: environment variable *name* if it exists, else the property
    *name* when it has a non-empty value, else empty
  - ``${.name}``: *name* relative to the supplied context
  - ``${name:default}``: *default* when no usable value is found
  - ``${name?}``: ``"1"`` when *name* is defined (not null), else ``""``
  - ``${name|then|else}``: *then* when the value is non-empty, else *else*;
    an empty *then* yields the value itself and ``${}`` inside either branch
    stands for the value
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping

from dataprops.keys import join_key
from dataprops.store import PropertyStore

logger = logging.getLogger(__name__)

_OPEN = "${"
_SELF = "${}"

_HEAD_RE = re.compile(r"\.?\w[-\w.]*\??", re.ASCII)
_TILDE_RE = re.compile(r"^~(?=/|$)")


def _find_close(text: str, start: int) -> int:
    """Return the index of the ``}`` closing a placeholder body that starts at *start*."""
    depth = 0
    i = start
    while i < len(text):
        if text.startswith(_OPEN, i):
            depth += 1
            i += 2
            continue
        if text[i] == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return -1


def _split_alternatives(text: str) -> list[str]:
    """Split on ``|`` characters that are not inside a nested placeholder."""
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(text):
        if text.startswith(_OPEN, i):
            depth += 1
            i += 2
            continue
        ch = text[i]
        if ch == "}" and depth:
            depth -= 1
        elif ch == "|" and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return parts


def _parse_body(body: str) -> tuple[str, str, list[str] | None] | None:
    """Split a placeholder body into (key, default, alternatives), or None if it does not fit."""
    m = _HEAD_RE.match(body)
    if m is None:
        return None
    key, rest = m.group(), body[m.end():]
    if not rest:
        return key, "", None
    if rest[0] == ":":
        return key, rest[1:], None
    if rest[0] != "|":
        return None
    return key, "", _split_alternatives(rest[1:])


class Interpolator:
    """Expand ``${...}`` placeholders using an environment table and a store."""

    def __init__(self, store: PropertyStore, environ: Mapping[str, str] | None = None) -> None:
        self.store = store
        self.environ = os.environ if environ is None else environ

    def expand(self, value: str | None, context: str = "") -> str | None:
        """Return *value* with tilde and placeholders expanded.

        ``None`` and ``""`` are returned unchanged.
        """
        if not value:
            return value
        logger.debug("expand(%r, %r)", value, context)
        if value.startswith("~"):
            home = self.environ.get("HOME", "")
            value = _TILDE_RE.sub(lambda _m: home, value, count=1)
        return self._interpolate(value, context or "")

    def _interpolate(self, template: str, context: str) -> str:
        out: list[str] = []
        pos = 0
        while True:
            start = template.find(_OPEN, pos)
            if start < 0:
                break
            end = _find_close(template, start + 2)
            if end < 0:
                break
            out.append(template[pos:start])
            out.append(self._placeholder(template[start + 2:end], context))
            pos = end + 1
        out.append(template[pos:])
        return "".join(out)

    def _placeholder(self, body: str, context: str) -> str:
        if not body:
            return _SELF
        parsed = _parse_body(body)
        if parsed is None:
            # Computed keys: expand nested placeholders first, then retry.
            inner = self._interpolate(body, context)
            if inner != body:
                parsed = _parse_body(inner)
            if parsed is None:
                return _OPEN + inner + "}"
        key, default, alternatives = parsed

        value = self.resolve(key, context)
        if value is None:
            value = self._interpolate(default, context) if default else ""
        if alternatives is None:
            return value

        then = alternatives[0]
        otherwise = "|".join(alternatives[1:])
        if value:
            if not then:
                return value
            branch = then
        else:
            branch = otherwise
        return self._interpolate(branch, context).replace(_SELF, value)

    def resolve(self, key: str, context: str = "") -> str | None:
        """Resolve one placeholder key.

        Returns the substitution text, or ``None`` when the key has no usable
        value and the placeholder's default applies. A trailing ``?`` selects
        definedness mode, which always returns ``"1"`` or ``""``.
        """
        check_defined = key.endswith("?")
        if check_defined:
            key = key[:-1]

        if key in self.environ:
            return "1" if check_defined else self.environ[key]

        if key.startswith("."):
            key = join_key(context, key[1:])
        value = self.store.get_raw(key)
        if check_defined:
            return "" if value is None else "1"
        # Properties are only usable with a non-empty value.
        if value:
            return value
        return None
