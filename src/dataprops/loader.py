"""Locate property files on a search path and read them as lines."""

from __future__ import annotations

import codecs
import logging
from collections.abc import Sequence
from pathlib import Path

from dataprops.errors import IncludeNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_PATH: tuple[str, ...] = (".",)

# Longest BOMs first: the UTF-32-LE BOM starts with the UTF-16-LE one.
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
)


def decode_bytes(data: bytes) -> str:
    """Decode file contents: honour a BOM, else try UTF-8, else fall back to Latin-1."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data[len(bom):].decode(encoding)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def read_lines(path: str | Path) -> list[str]:
    """Read *path* and return its lines without line terminators.

    Only ``\\n`` and ``\\r\\n`` end a line; form feeds, NEL and the Unicode
    separators stay inside values.
    """
    lines = decode_bytes(Path(path).read_bytes()).split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class FileLoader:
    """Find property files in an ordered list of directories."""

    def __init__(self, path: Sequence[str | Path] | None = None) -> None:
        self.path = [str(p) for p in path] if path else list(DEFAULT_PATH)

    def candidates(self, filename: str) -> list[Path]:
        """Return the paths tried for *filename*, in search order."""
        if Path(filename).is_absolute():
            return [Path(filename)]
        return [Path(prefix) / filename if prefix else Path(filename) for prefix in self.path]

    def locate(self, filename: str) -> Path | None:
        """Return the first existing candidate for *filename*, or None."""
        for candidate in self.candidates(filename):
            if candidate.is_file():
                logger.debug("located %s as %s", filename, candidate)
                return candidate
        return None

    def load(self, filename: str) -> tuple[Path, list[str]]:
        """Return the located path and lines of *filename*.

        Raises :class:`IncludeNotFoundError` when no search-path entry has it.
        """
        found = self.locate(filename)
        if found is None:
            raise IncludeNotFoundError(filename, self.path)
        return found, read_lines(found)
