# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hierarchical, case-insensitive properties with context-aware lookup."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from dataprops.errors import MissingContextError, NoValueError
from dataprops.interpolate import Interpolator
from dataprops.keys import canonical_key, join_key
from dataprops.loader import FileLoader
from dataprops.parser import Parser
from dataprops.serialize import dump_store, materialize
from dataprops.store import PropertyStore

_MISSING: Any = object()


class LookupResult(Enum):
    """Where the last :meth:`Properties.get` found its value."""

    IN_CONTEXT = "in-context"
    OUT_OF_CONTEXT = "out-of-context"
    NOT_FOUND = "not-found"


class Properties:
    """A property tree loaded from property files and/or set directly.

    Keys are dotted names, compared case-insensitively. For any key the
    names of its immediate children can be listed in the order they were
    first defined.

    With a context ``ctx`` set, ``get("foo.bar")`` first tries
    ``ctx.foo.bar`` and then ``foo.bar``; ``get(".foo.bar")`` only tries
    ``ctx.foo.bar`` and raises :class:`MissingContextError` without a
    context. Returned values are expanded (see :mod:`dataprops.interpolate`).

    Example:
        >>> props = Properties(environ={})
        >>> _ = props.parse_lines(["config {", "  version = 1.23", "}"])
        >>> props.get("Config.Version")
        '1.23'
        >>> props.child_keys("config")
        ['version']
    """

    def __init__(
        self,
        initial: Mapping[str, str | None] | None = None,
        *,
        context: str | None = None,
        path: Iterable[str | Path] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._store = PropertyStore()
        self._environ = environ
        self._loader = FileLoader(list(path) if path is not None else None)
        self._context: str | None = None
        self._last_lookup: LookupResult | None = None
        self.set_context(context)
        if initial:
            self.set_many(initial)

    def _interpolator(self) -> Interpolator:
        return Interpolator(self._store, self._environ)

    def _parser(self) -> Parser:
        return Parser(self._store, self._interpolator(), self._loader)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    @property
    def store(self) -> PropertyStore:
        return self._store

    # -- construction ------------------------------------------------------

    def clone(self) -> Properties:
        """Return a new object sharing this one's contents.

        WARNING: this is not a deep copy. Child-index lists are shared, so
        adding a child to an existing node in one object is visible in the
        other. Replacing a value is not. The clone keeps the search path
        and environment but has no context.
        """
        new = Properties(path=self._loader.path, environ=self._environ)
        new._store = self._store.copy()
        return new

    # -- search path -------------------------------------------------------

    def set_path(self, *paths: str | Path) -> None:
        """Set the directories searched by :meth:`parse_file` and ``include``."""
        self._loader = FileLoader(list(paths) or None)

    def get_path(self) -> list[str]:
        return list(self._loader.path)

    # -- parsing -----------------------------------------------------------

    def parse_file(self, filename: str | Path, context: str | None = None) -> Properties:
        """Read a property file from the search path and add its contents.

        Absolute names are used as they are. With *context*, every property
        from the file becomes a subkey of it.
        """
        self._parser().parse_file(str(filename), context)
        return self

    def parse_lines(
        self,
        lines: Iterable[str],
        filename: str | None = None,
        context: str | None = None,
    ) -> Properties:
        """As :meth:`parse_file`, but process *lines* directly."""
        self._parser().parse_lines(lines, filename, context)
        return self

    # -- setting -----------------------------------------------------------

    def set(self, key: str, value: str | None) -> None:
        self._store.set(key, value)

    def set_many(self, values: Mapping[str, str | None]) -> None:
        for key, value in values.items():
            self._store.set(key, value)

    # -- context -----------------------------------------------------------

    def set_context(self, context: str | None = None) -> Properties:
        """Set the lookup context; without argument the context is cleared."""
        self._context = canonical_key(context) if context else None
        self._last_lookup = None
        return self

    def get_context(self) -> str | None:
        return self._context

    def last_lookup(self) -> LookupResult | None:
        """Return where the last lookup found its result (None before any lookup)."""
        return self._last_lookup

    # -- lookup ------------------------------------------------------------

    def _locate(
        self,
        key: str,
        exists: Callable[[str], bool],
        usable: Callable[[str], bool],
    ) -> str | None:
        """Return the canonical key a lookup of *key* resolves to, or None."""
        key = canonical_key(key)
        context_only = key.startswith(".")
        if context_only:
            key = key[1:]
            if not self._context:
                raise MissingContextError(key)
        if self._context:
            scoped = join_key(self._context, key)
            if exists(scoped):
                self._last_lookup = LookupResult.IN_CONTEXT
                return scoped
        if not context_only and usable(key):
            self._last_lookup = LookupResult.OUT_OF_CONTEXT
            return key
        self._last_lookup = LookupResult.NOT_FOUND
        return None

    def get_raw(self, key: str, default: str | None = None) -> str | None:
        """Like :meth:`get`, but without expansion."""
        found = self._locate(
            key,
            exists=self._store.__contains__,
            usable=lambda k: bool(self._store.get_raw(k)),
        )
        if found is not None:
            return self._store.get_raw(found)
        if default is None and not key.startswith("."):
            # Without a default, an empty value still beats no value.
            return self._store.get_raw(key)
        return default

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the expanded value of *key*, or the expanded *default*.

        A value found in context may be null (``None``); out of context only
        non-empty values count as found, so an empty value yields to an
        explicit *default*.
        """
        return self.expand(self.get_raw(key, default), self._context or "")

    def get_strict(self, key: str, default: Any = _MISSING) -> str | None:
        """Like :meth:`get`, but raise :class:`NoValueError` if no value can be established.

        An explicitly passed *default* (even ``None``) is always acceptable.
        """
        value = self.get(key, None if default is _MISSING else default)
        if value is None and default is _MISSING:
            raise NoValueError(key)
        return value

    def child_keys(self, key: str = "") -> list[str]:
        """Return the names of the immediate subkeys of *key*, in definition order.

        The names are unqualified: with ``foo.bar`` and ``foo.blech`` defined,
        ``child_keys("foo")`` is ``["bar", "blech"]``. The context applies as
        for :meth:`get`.
        """
        found = self._locate(key, exists=self._store.has_children, usable=self._store.has_children)
        if found is None:
            return []
        return self._store.children(found)

    def expand(self, value: str | None, context: str = "") -> str | None:
        """Expand *value* as :meth:`get` does, with ``.name`` relative to *context*."""
        return self._interpolator().expand(value, context)

    # -- output ------------------------------------------------------------

    def dump(self, start: str = "", expand: bool = False) -> str:
        """Return a listing of all properties from *start* down.

        With *expand*, values are expanded first.
        """
        return dump_store(self._store, start, self.expand if expand else None)

    def data(self, key: str = "", expand: bool = True) -> Any:
        """Return the subtree at *key* as nested lists, dicts and strings."""
        return materialize(self._store, key, self.expand if expand else None)
