# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exceptions raised while parsing property files and looking up properties."""

from __future__ import annotations

from collections.abc import Sequence


class PropertiesError(Exception):
    """Base exception for dataprops errors."""


class ParseError(PropertiesError):
    """A property file could not be parsed."""

    def __init__(self, message: str, filename: str | None = None, lineno: int | None = None) -> None:
        super().__init__(message)
        self.filename = filename
        self.lineno = lineno


class MalformedLineError(ParseError):
    """Raised when a non-blank line matches none of the recognized forms."""

    def __init__(self, line: str, filename: str | None, lineno: int) -> None:
        where = f"{filename}, line {lineno}" if filename else f"line {lineno}"
        super().__init__(f"{where}: cannot parse {line.strip()!r}", filename, lineno)
        self.line = line


class StackUnderflowError(ParseError):
    """Raised when a close token appears with no open context or list."""

    def __init__(self, filename: str | None, lineno: int) -> None:
        super().__init__(f"stack underflow at line {lineno}", filename, lineno)


class UnfinishedBlockError(ParseError):
    """Raised when input ends with contexts or lists still open."""

    def __init__(self, filename: str | None, depth: int) -> None:
        super().__init__(
            f"unfinished properties {filename or '<lines>'} ({depth} block(s) still open)",
            filename,
        )
        self.depth = depth


class IncludeNotFoundError(PropertiesError):
    """Raised when a property file is not found in any search-path entry."""

    def __init__(self, filename: str, search_path: Sequence[str]) -> None:
        super().__init__(f"no properties {filename} in {':'.join(search_path)}")
        self.filename = filename
        self.search_path = list(search_path)


class IncludeCycleError(ParseError):
    """Raised when a file includes itself, directly or through other files."""

    def __init__(self, chain: Sequence[str]) -> None:
        super().__init__(f"include cycle: {' -> '.join(chain)}", chain[-1])
        self.chain = list(chain)


class MissingContextError(PropertiesError):
    """Raised for a leading-dot lookup while no context is set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"no context for {key}")
        self.key = key


class NoValueError(PropertiesError, LookupError):
    """Raised by the strict lookup when neither a value nor a default exists."""

    def __init__(self, key: str) -> None:
        super().__init__(f"no value for {key}")
        self.key = key
