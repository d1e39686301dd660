"""Shared fixtures for dataprops tests."""

from __future__ import annotations

import pytest

from dataprops import Properties


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep tests away from the caller's config files and DATAPROPS_* variables.

    Each test runs from its own temporary directory so ``load_config`` and the
    default search path (``.``) only see files the test created.
    """
    monkeypatch.delenv("DATAPROPS_PATH", raising=False)
    monkeypatch.delenv("DATAPROPS_CONTEXT", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def environ() -> dict[str, str]:
    """A fake environment table so expansion never depends on the real one."""
    return {"HOME": "/home/tester", "USER": "tester"}


@pytest.fixture()
def props(environ) -> Properties:
    return Properties(environ=environ)


@pytest.fixture()
def sample_props(tmp_path):
    """Create a sample property file and return its path."""
    content = """\
# Sample properties
version = 1.23
name: demo
home = ~/data
greeting = "Hello, ${name}"
literal = '${name}'
nothing = null
empty =

server {
  host = localhost
  port = 8080
  url = http://${.host}:${.port}/
}

hosts [
  alpha
  'beta'
  {
    name = gamma
  }
]
"""
    p = tmp_path / "app.prp"
    p.write_text(content)
    return p
