from markdown_surgeon.core.hashing import section_hash
from markdown_surgeon.core.parser import parse_document
from markdown_surgeon.core.search import search

TEXT = "intro foo\n# A\nfoo bar\nbaz\nfoo again\n## B\nfoo\n"


def test_matches_in_line_order():
	matches, _ = search(parse_document(TEXT), "foo")
	assert [m.line for m in matches] == [0, 2, 4, 6]
	assert matches[0].section_id is None
	assert matches[1].section_id == section_hash(1, "A")
	assert matches[3].content == "foo"


def test_summaries_group_by_section():
	_, summaries = search(parse_document(TEXT), "foo")
	assert [s.title for s in summaries] == ["A", "B"]
	assert summaries[0].lines == [2, 4]
	assert summaries[0].match_count == 2
	assert summaries[1].level == 2


def test_heading_line_belongs_to_its_section():
	matches, _ = search(parse_document(TEXT), "## B")
	assert matches[0].section_id == section_hash(2, "B")


def test_no_matches():
	assert search(parse_document(TEXT), "zzz") == ([], [])
