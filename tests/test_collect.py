from markdown_surgeon.core.collect import (
    aggregate_meta,
    build_document,
    collect_meta_values,
    concat,
    count_meta,
    first_h1,
    shift_headings,
)
from markdown_surgeon.core.frontmatter import get_frontmatter
from markdown_surgeon.core.parser import parse_document


def _docs(*texts):
	return [parse_document(t) for t in texts]


def test_first_h1():
	assert first_h1(parse_document("## Sub\n# Top\n# Other\n")) == "Top"
	assert first_h1(parse_document("## Sub\n")) is None


def test_shift_headings_caps_at_six():
	lines = ["# A", "text", "##### E", "###### F"]
	assert shift_headings(lines, 1) == ["## A", "text", "###### E", "###### F"]
	assert shift_headings(lines, 0) == lines


def test_concat_keeps_first_frontmatter_only():
	docs = _docs("---\nk: v\n---\n# One\na\n", "---\nx: y\n---\n# Two\nb")
	result = parse_document(concat(docs))
	assert get_frontmatter(result) == {"k": "v"}
	assert [s.title for s in result.sections] == ["One", "Two"]
	assert "x: y" not in result.text


def test_concat_with_shift():
	docs = _docs("# One\n## Sub\n", "# Two\n")
	result = parse_document(concat(docs, shift=1))
	assert [(s.level, s.title) for s in result.sections] == [
	    (2, "One"),
	    (3, "Sub"),
	    (2, "Two"),
	]


def test_meta_collection():
	docs = _docs(
	    "---\ntags: [a, b]\nstatus: open\n---\n",
	    "---\ntags: [a]\nstatus: done\n---\n",
	    "# no frontmatter\n",
	)
	assert collect_meta_values(docs, ["tags"]) == ["a", "b", "a"]
	agg = aggregate_meta(docs, ["tags", "status"])
	assert agg["tags"] == {"a": 2, "b": 1}
	assert agg["status"] == {"open": 1, "done": 1}
	assert count_meta(docs, ["tags", "status"]) == {"tags": 3, "status": 2}


def test_build_document():
	text = build_document("Title", {"k": "v"}, "body")
	assert text == "---\nk: v\n---\n\n# Title\n\nbody"
	assert build_document() == ""
	assert build_document(content="only") == "only"


def test_shift_headings_skips_fenced_code():
	lines = [
	    "# A", "```bash", "# comment", "```", "~~~", "## not a heading", "~~~",
	    "## B"
	]
	assert shift_headings(lines, 1) == [
	    "## A",
	    "```bash",
	    "# comment",
	    "```",
	    "~~~",
	    "## not a heading",
	    "~~~",
	    "### B",
	]


def test_concat_shift_keeps_code_comments():
	docs = _docs("# One\n```python\n# keep me\n```\n")
	assert concat(docs, shift=1) == "## One\n```python\n# keep me\n```\n"
