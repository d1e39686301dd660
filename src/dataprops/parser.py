"""Parse property files into a :class:`PropertyStore`.

Each line is classified first, then dispatched against a stack of open
contexts. Recognized lines:
  - blank lines and ``#`` comments
  - ``key = value`` or ``key: value`` assignments
  - ``key {`` / ``key [`` opening a context or a list
  - ``}`` / ``]`` closing the innermost context or list
  - ``include file`` parsing another file in the current context
  - inside a list: bare ``{`` / ``[`` and bare values, stored positionally

Values in single quotes are stored as they are. The bare word ``null``
stores the null sentinel. Anything else (double quotes stripped) is
expanded once, here, against the innermost context.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dataprops.errors import (
    IncludeCycleError,
    MalformedLineError,
    StackUnderflowError,
    UnfinishedBlockError,
)
from dataprops.interpolate import Interpolator
from dataprops.keys import KEY_PATTERN, canonical_key, join_key
from dataprops.loader import FileLoader
from dataprops.store import PropertyStore

logger = logging.getLogger(__name__)


class LineKind(Enum):
    BLANK = "blank"
    ASSIGN = "assign"
    OPEN_MAP = "open-map"
    OPEN_LIST = "open-list"
    INCLUDE = "include"
    CLOSE = "close"
    ANON_MAP = "anon-map"
    ANON_LIST = "anon-list"
    OTHER = "other"


@dataclass(frozen=True)
class Line:
    """A classified input line."""

    kind: LineKind
    key: str = ""
    value: str = ""


# Tried in order; the first match decides the kind.
_RULES: tuple[tuple[LineKind, re.Pattern[str]], ...] = (
    (
        LineKind.ASSIGN,
        re.compile(
            rf"""
            ^\s*
            (?P<key>{KEY_PATTERN})
            \s*[=:]\s*          # separator
            (?P<value>.*)
            $
            """,
            re.VERBOSE,
        ),
    ),
    (LineKind.OPEN_MAP, re.compile(rf"^\s*(?P<key>{KEY_PATTERN})\s*\{{\s*$")),
    (LineKind.OPEN_LIST, re.compile(rf"^\s*(?P<key>{KEY_PATTERN})\s*\[\s*$")),
    (LineKind.INCLUDE, re.compile(r"^\s*include\s+(?P<value>.+)$")),
    (LineKind.CLOSE, re.compile(r"^\s*[}\]]\s*$")),
    (LineKind.ANON_MAP, re.compile(r"^\s*\{\s*$")),
    (LineKind.ANON_LIST, re.compile(r"^\s*\[\s*$")),
)

_SINGLE_QUOTE_ESCAPE_RE = re.compile(r"\\([\\'])")


def classify(text: str) -> Line:
    """Classify one line (without its terminator)."""
    stripped = text.strip()
    if not stripped or stripped.startswith("#"):
        return Line(LineKind.BLANK)
    for kind, regex in _RULES:
        m = regex.match(text)
        if m is not None:
            groups = m.groupdict()
            return Line(kind, groups.get("key") or "", (groups.get("value") or "").rstrip())
    return Line(LineKind.OTHER, value=stripped)


@dataclass
class _Frame:
    name: str
    is_list: bool = False
    next_index: int = 0


class Parser:
    """Feed property-file lines into a store, expanding values as they are read."""

    def __init__(self, store: PropertyStore, interpolator: Interpolator, loader: FileLoader) -> None:
        self.store = store
        self.interpolator = interpolator
        self.loader = loader
        # Files currently being parsed, outermost first.
        self._including: list[Path] = []

    def parse_file(self, filename: str, context: str | None = None) -> None:
        """Locate *filename* on the loader's search path and parse it.

        Raises :class:`IncludeCycleError` if the file is already being parsed
        further up the include chain.
        """
        path, lines = self.loader.load(filename)
        resolved = path.resolve()
        if resolved in self._including:
            raise IncludeCycleError([str(p) for p in self._including] + [str(resolved)])
        logger.debug("parsing %s (%d lines) in context %r", path, len(lines), context)
        self._including.append(resolved)
        try:
            self.parse_lines(lines, str(path), context)
        finally:
            self._including.pop()

    def parse_lines(
        self,
        lines: Iterable[str],
        filename: str | None = None,
        context: str | None = None,
    ) -> None:
        """Parse *lines*; *filename* is only used in error messages.

        With a *context*, every property is stored below it. Properties set
        before an error stay in the store.
        """
        stack: list[_Frame] = [_Frame(context)] if context else []
        initial_depth = len(stack)

        for lineno, raw in enumerate(lines, start=1):
            text = raw.rstrip("\r\n")
            line = classify(text)
            if line.kind is LineKind.BLANK:
                continue
            top = stack[-1] if stack else None
            ctx = top.name if top else ""

            if line.kind is LineKind.ASSIGN:
                self.store.set(join_key(ctx, line.key), self.resolve_value(line.value, ctx))
            elif line.kind is LineKind.OPEN_MAP or line.kind is LineKind.OPEN_LIST:
                stack.append(self._open(join_key(ctx, line.key), line.kind is LineKind.OPEN_LIST))
            elif line.kind is LineKind.INCLUDE:
                name = self.resolve_value(line.value, ctx, allow_null=False)
                self.parse_file(name or "", ctx or None)
            elif line.kind is LineKind.CLOSE:
                if not stack:
                    raise StackUnderflowError(filename, lineno)
                logger.debug("close %s", stack.pop().name)
            elif top is not None and top.is_list:
                self._list_element(stack, top, line)
            else:
                raise MalformedLineError(text, filename, lineno)

        if len(stack) != initial_depth:
            raise UnfinishedBlockError(filename, len(stack) - initial_depth)

    def _open(self, name: str, is_list: bool) -> _Frame:
        logger.debug("open %s %s", "list" if is_list else "context", name)
        if is_list:
            return _Frame(name, True, len(self.store.children(name)))
        return _Frame(name)

    def _list_element(self, stack: list[_Frame], top: _Frame, line: Line) -> None:
        name = join_key(top.name, str(top.next_index))
        top.next_index += 1
        if line.kind is LineKind.ANON_MAP:
            stack.append(self._open(name, False))
        elif line.kind is LineKind.ANON_LIST:
            stack.append(self._open(name, True))
        else:
            self.store.set(name, self.resolve_value(line.value, top.name))

    def resolve_value(self, raw: str, context: str, allow_null: bool = True) -> str | None:
        """Apply the quoting rules to a raw value and expand it if needed."""
        raw = raw.rstrip()
        if len(raw) >= 2 and raw[0] == "'" and raw[-1] == "'":
            return _SINGLE_QUOTE_ESCAPE_RE.sub(r"\1", raw[1:-1])
        if allow_null and canonical_key(raw) == "null":
            return None
        if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
            raw = raw[1:-1]
        return self.interpolator.expand(raw, context)
