"""Tests for locating and reading property files."""

from __future__ import annotations

import codecs

import pytest

from dataprops import IncludeNotFoundError
from dataprops.loader import FileLoader, decode_bytes, read_lines


def test_default_path_is_cwd(tmp_path):
    (tmp_path / "here.prp").write_text("a = 1\n")
    loader = FileLoader()
    assert loader.path == ["."]
    path, lines = loader.load("here.prp")
    assert path.name == "here.prp"
    assert lines == ["a = 1"]


def test_first_match_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "app.prp").write_text("src = first\n")
    (second / "app.prp").write_text("src = second\n")
    loader = FileLoader([tmp_path / "none", first, second])
    path, lines = loader.load("app.prp")
    assert path == first / "app.prp"
    assert lines == ["src = first"]


def test_absolute_name_ignores_path(tmp_path):
    target = tmp_path / "abs.prp"
    target.write_text("x = 1\n")
    loader = FileLoader(["/nonexistent"])
    assert loader.candidates(str(target)) == [target]
    assert loader.locate(str(target)) == target


def test_empty_prefix_uses_name_as_is(tmp_path):
    (tmp_path / "rel.prp").write_text("")
    loader = FileLoader(["", "elsewhere"])
    assert loader.locate("rel.prp").name == "rel.prp"


def test_directories_are_not_files(tmp_path):
    (tmp_path / "dir.prp").mkdir()
    loader = FileLoader([tmp_path])
    assert loader.locate("dir.prp") is None


def test_not_found(tmp_path):
    loader = FileLoader([tmp_path, "other"])
    with pytest.raises(IncludeNotFoundError) as exc_info:
        loader.load("missing.prp")
    assert exc_info.value.search_path == [str(tmp_path), "other"]
    assert "missing.prp" in str(exc_info.value)


@pytest.mark.parametrize(
    ("bom", "encoding"),
    [
        (codecs.BOM_UTF8, "utf-8"),
        (codecs.BOM_UTF16_LE, "utf-16-le"),
        (codecs.BOM_UTF16_BE, "utf-16-be"),
        (codecs.BOM_UTF32_LE, "utf-32-le"),
    ],
)
def test_decode_with_bom(bom, encoding):
    assert decode_bytes(bom + "name = café".encode(encoding)) == "name = café"


def test_decode_falls_back_to_latin1():
    assert decode_bytes("café".encode("latin-1")) == "café"


def test_read_lines_handles_line_endings(tmp_path):
    p = tmp_path / "mixed.prp"
    p.write_bytes(b"a = 1\r\nb = 2\nc = 3")
    assert read_lines(p) == ["a = 1", "b = 2", "c = 3"]


def test_read_lines_splits_only_on_newlines(tmp_path):
    p = tmp_path / "cp1252.prp"
    p.write_bytes(b"title = Wait\x85 done\r\na = x\x0cy\x1cz\n")
    assert read_lines(p) == ["title = Wait\x85 done", "a = x\x0cy\x1cz"]

    p = tmp_path / "utf8.prp"
    p.write_text("a = x\u2028y\u2029z\n", encoding="utf-8")
    assert read_lines(p) == ["a = x\u2028y\u2029z"]


def test_control_characters_stay_in_values(props, tmp_path):
    (tmp_path / "cp1252.prp").write_bytes(b"title = Wait\x85 done\na = x\x0cy\n")
    props.parse_file("cp1252.prp")
    assert props.get("title") == "Wait\x85 done"
    assert props.get("a") == "x\x0cy"
    assert props.child_keys() == ["title", "a"]


def test_read_lines_empty_file(tmp_path):
    p = tmp_path / "empty.prp"
    p.write_bytes(b"")
    assert read_lines(p) == []
