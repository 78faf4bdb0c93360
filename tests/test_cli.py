import io
import json

import pytest

from markdown_surgeon.main import entrypoint

SIMPLE = "# A\nold\n## B\nkeep\n"


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
	"""Fresh config per test, no .env pickup from the repo."""
	monkeypatch.chdir(tmp_path)
	monkeypatch.setattr("markdown_surgeon.main._config", None)
	for name in ("MD_JSON", "MD_EXTENSIONS", "MD_CONCAT_SHIFT"):
		monkeypatch.delenv(name, raising=False)


@pytest.fixture
def doc_file(tmp_path):
	path = tmp_path / "doc.md"
	path.write_text(SIMPLE)
	return path


def _run(*args):
	return entrypoint(list(args), standalone_mode=False)


def test_outline(doc_file, capsys):
	assert _run("outline", str(doc_file)) is None
	assert capsys.readouterr().out == "# A ^4887bbd6 L1\n## B ^7684a0e4 L3\n"


def test_outline_json(doc_file, capsys):
	_run("outline", str(doc_file), "--json")
	data = json.loads(capsys.readouterr().out)
	assert data == [
	    {"id": "4887bbd6", "level": 1, "title": "A", "line": 1},
	    {"id": "7684a0e4", "level": 2, "title": "B", "line": 3},
	]


def test_outline_after_and_count(doc_file, capsys):
	_run("outline", str(doc_file), "--after", "4887bbd6", "--count")
	assert capsys.readouterr().out == "1\n"


def test_read(doc_file, capsys):
	_run("read", str(doc_file), "4887bbd6")
	assert capsys.readouterr().out == "# A ^4887bbd6 L1-L2\n\nold\n"


def test_read_accepts_uppercase_id(doc_file, capsys):
	_run("read", str(doc_file), "4887BBD6", "--deep")
	assert capsys.readouterr().out.endswith("old\n## B\nkeep\n")


def test_write(doc_file, capsys):
	_run("write", str(doc_file), "4887bbd6", "new")
	assert capsys.readouterr().out == "updated ^4887bbd6 L1-L2 (+1, -1)\n"
	assert doc_file.read_text() == "# A\nnew\n## B\nkeep\n"


def test_write_reads_stdin(doc_file, monkeypatch, capsys):
	monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
	_run("write", str(doc_file), "7684a0e4")
	assert doc_file.read_text() == "# A\nold\n## B\nfrom stdin\n"


def test_append_to_section(doc_file):
	_run("append", str(doc_file), "4887bbd6", "more")
	assert doc_file.read_text() == "# A\nold\n\nmore\n## B\nkeep\n"


def test_append_to_document(doc_file):
	_run("append", str(doc_file), "tail text")
	assert doc_file.read_text() == SIMPLE + "\ntail text\n"


def test_append_created_section(doc_file, capsys):
	_run("append", str(doc_file), "7684a0e4", "## New\nbody", "--before",
	     "--json")
	data = json.loads(capsys.readouterr().out)
	assert data["action"] == "created"
	assert data["lineStart"] == 3
	assert doc_file.read_text() == "# A\nold\n## New\nbody\n## B\nkeep\n"


def test_empty_and_remove(doc_file, capsys):
	_run("empty", str(doc_file), "4887bbd6", "--deep")
	assert doc_file.read_text() == "# A\n"
	assert capsys.readouterr().out == "emptied ^4887bbd6 L1 (-3)\n"
	doc_file.write_text(SIMPLE)
	_run("remove", str(doc_file), "7684a0e4")
	assert doc_file.read_text() == "# A\nold\n"


def test_magic_expansion_in_write(tmp_path):
	path = tmp_path / "m.md"
	path.write_text("---\nowner: ada\n---\n# A\n")
	_run("write", str(path), "4887bbd6", "by {meta:owner}")
	assert path.read_text() == "---\nowner: ada\n---\n# A\nby ada\n"


def test_search(doc_file, capsys):
	_run("search", str(doc_file), "keep")
	assert capsys.readouterr().out == "^7684a0e4 L4 keep\n"
	_run("search", str(doc_file), "o", "--summary")
	assert capsys.readouterr().out == "# A ^4887bbd6 L2 (1 match)\n"


def test_meta_set_get_delete(doc_file, capsys):
	_run("meta", str(doc_file), "--set", "tags", "[a, b]")
	assert capsys.readouterr().out == "set tags\n"
	assert doc_file.read_text().startswith("---\ntags:\n- a\n- b\n---\n\n# A")

	_run("meta", str(doc_file), "tags.1")
	assert capsys.readouterr().out == "b\n"

	_run("meta", str(doc_file), "--del", "tags")
	assert doc_file.read_text() == "\n" + SIMPLE


def test_meta_h1(doc_file, capsys):
	_run("meta", str(doc_file), "--h1")
	assert capsys.readouterr().out == "A\n"


def test_meta_aggregate_across_files(tmp_path, capsys):
	(tmp_path / "one.md").write_text("---\ntags: [x, y]\n---\n")
	(tmp_path / "two.md").write_text("---\ntags: [x]\n---\n")
	_run("meta", "*.md", "--aggregate", "tags", "--json")
	assert json.loads(capsys.readouterr().out) == {"x": 2, "y": 1}


def test_concat(tmp_path, capsys):
	(tmp_path / "a.md").write_text("# One\n")
	(tmp_path / "b.md").write_text("# Two\n")
	_run("concat", "a.md", "b.md", "--shift", "1")
	assert capsys.readouterr().out == "## One\n\n\n## Two\n\n"


def test_create(tmp_path, capsys):
	_run("create", "new.md", "--title", "T", "--meta", "k=v")
	assert capsys.readouterr().out == "created new.md\n"
	assert (tmp_path / "new.md").read_text() == "---\nk: v\n---\n\n# T\n"


def test_create_refuses_overwrite(doc_file, capsys):
	assert _run("create", str(doc_file)) == 1
	assert "error: io_error" in capsys.readouterr().err
	assert doc_file.read_text() == SIMPLE


@pytest.mark.parametrize("args,code", [
    (("read", "doc.md", "00000000"), "section_not_found"),
    (("read", "doc.md", "nothex!!"), "invalid_id"),
    (("read", "missing.md", "4887bbd6"), "file_not_found"),
    (("write", "doc.md", "00000000", "x"), "section_not_found"),
    (("append", "doc.md", "nothex!!", "x"), "invalid_id"),
    (("meta", "doc.md", "--del", "nope"), "parse_error"),
])
def test_errors_go_to_stderr(doc_file, capsys, args, code):
	assert _run(*args) == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err.startswith(f"error: {code}\n")
	assert doc_file.read_text() == SIMPLE


def test_help_does_not_crash():
	with pytest.raises(SystemExit) as exc_info:
		entrypoint(["--help"], standalone_mode=True)
	assert exc_info.value.code == 0


def test_meta_set_refuses_malformed_frontmatter(tmp_path, capsys):
	path = tmp_path / "broken.md"
	original = "---\ntitle: Hello\ntags: [a, b\n---\n# A\n"
	path.write_text(original)
	assert _run("meta", str(path), "--set", "status", "done") == 1
	assert "error: parse_error\n" in capsys.readouterr().err
	assert path.read_text() == original
