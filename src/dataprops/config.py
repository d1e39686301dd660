""".dataprops.toml configuration loading.

Searches upward from cwd for ``.dataprops.toml`` and merges with
environment variables; CLI flags take precedence over both.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

CONFIG_FILENAME = ".dataprops.toml"
PATH_ENV = "DATAPROPS_PATH"
CONTEXT_ENV = "DATAPROPS_CONTEXT"


@dataclass
class DataPropsConfig:
    """Resolved configuration for the current invocation."""

    path: list[str] = field(default_factory=lambda: ["."])
    context: str | None = None
    files: list[str] = field(default_factory=list)
    config_path: Path | None = None

    def resolve_path(self, extra: list[str] | None = None) -> list[str]:
        """Return the search path: *extra* first, then ``$DATAPROPS_PATH``, then the config."""
        resolved = list(extra or [])
        env_path = os.environ.get(PATH_ENV)
        if env_path:
            resolved.extend(p for p in env_path.split(os.pathsep) if p)
        resolved.extend(self.path)
        return resolved

    def resolve_context(self, context: str | None = None) -> str | None:
        """Return *context*, else ``$DATAPROPS_CONTEXT``, else the configured context."""
        return context or os.environ.get(CONTEXT_ENV) or self.context


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.dataprops.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def load_config(path: Path | None = None) -> DataPropsConfig:
    """Load and return config.  Returns defaults if no file found."""
    if path is None:
        path = find_config_file()
    if path is None:
        return DataPropsConfig()

    raw: dict[str, Any] = tomllib.loads(path.read_text())
    section = raw.get("dataprops", {})

    base = path.parent
    entries = section.get("path", ["."])
    if isinstance(entries, str):
        entries = [entries]
    search_path = [p if Path(p).is_absolute() else str(base / p) for p in entries]

    return DataPropsConfig(
        path=search_path,
        context=section.get("context"),
        files=list(section.get("files", [])),
        config_path=path,
    )
