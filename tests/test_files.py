import pytest

from markdown_surgeon.errors import ErrorCode, MdError
from markdown_surgeon.loaders.files import (
    expand_file_patterns,
    read_text_file,
    write_text_file,
)


def test_read_write_roundtrip_keeps_line_endings(tmp_path):
	path = tmp_path / "a.md"
	write_text_file(path, "# A\r\nx\n")
	assert path.read_bytes() == b"# A\r\nx\n"
	assert read_text_file(path).startswith("# A")


def test_read_missing_file(tmp_path):
	with pytest.raises(MdError) as exc_info:
		read_text_file(tmp_path / "missing.md")
	assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND


def test_write_into_missing_directory(tmp_path):
	with pytest.raises(MdError) as exc_info:
		write_text_file(tmp_path / "no" / "such" / "a.md", "x")
	assert exc_info.value.code == ErrorCode.IO_ERROR


def test_expand_globs_filters_extensions(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	(tmp_path / "b.md").write_text("")
	(tmp_path / "a.md").write_text("")
	(tmp_path / "c.txt").write_text("")
	assert expand_file_patterns(["*"]) == ["a.md", "b.md"]
	assert expand_file_patterns(["*"], [".md", ".txt"]) == ["a.md", "b.md", "c.txt"]


def test_expand_explicit_paths_and_dedupe(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	(tmp_path / "a.md").write_text("")
	(tmp_path / "notes.txt").write_text("")
	assert expand_file_patterns(["notes.txt", "a.md", "*.md"]) == [
	    "notes.txt",
	    "a.md",
	]


def test_expand_missing_explicit_path(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	with pytest.raises(MdError) as exc_info:
		expand_file_patterns(["gone.md"])
	assert exc_info.value.file == "gone.md"


def test_expand_no_matches(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	with pytest.raises(MdError) as exc_info:
		expand_file_patterns(["*.md"])
	assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
