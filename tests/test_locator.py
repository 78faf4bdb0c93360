import pytest

from markdown_surgeon.core.locator import (
    find_section,
    find_section_at_line,
    get_section_content,
    get_section_end_line,
    require_section,
    subsections,
)
from markdown_surgeon.core.parser import parse_document
from markdown_surgeon.errors import ErrorCode, MdError

NESTED = "# H1\na\n## H2\nb\n### H3\nc\n# Next\nd\n"


def _by_title(doc, title):
	return next(s for s in doc.sections if s.title == title)


def test_find_section_by_id():
	doc = parse_document(NESTED)
	h2 = _by_title(doc, "H2")
	assert find_section(doc, h2.id) == h2
	assert find_section(doc, h2.id.upper()) == h2
	assert find_section(doc, "00000000") is None


def test_require_section_raises_section_not_found():
	doc = parse_document(NESTED)
	with pytest.raises(MdError) as exc_info:
		require_section(doc, "00000000", file="x.md")
	assert exc_info.value.code == ErrorCode.SECTION_NOT_FOUND
	assert "x.md" in exc_info.value.message


def test_find_section_at_line():
	doc = parse_document("intro\n# A\nx\n## B\ny\n")
	assert find_section_at_line(doc, 0) is None
	assert find_section_at_line(doc, 1).title == "A"
	assert find_section_at_line(doc, 2).title == "A"
	assert find_section_at_line(doc, 4).title == "B"


class TestSectionEndLine:
	"""Shallow and deep boundaries."""

	def test_shallow_stops_at_any_heading(self):
		doc = parse_document(NESTED)
		h1 = _by_title(doc, "H1")
		h2 = _by_title(doc, "H2")
		assert get_section_end_line(doc, h1, deep=False) == 2
		assert get_section_end_line(doc, h1, deep=False) <= h2.line

	def test_deep_stops_at_same_or_higher_level(self):
		doc = parse_document(NESTED)
		h1 = _by_title(doc, "H1")
		assert get_section_end_line(doc, h1, deep=True) == 6

	def test_deep_region_covers_all_descendants(self):
		doc = parse_document(NESTED)
		h1 = _by_title(doc, "H1")
		end = get_section_end_line(doc, h1, deep=True)
		for child in subsections(doc, h1):
			assert child.line < end
			assert get_section_end_line(doc, child, deep=True) <= end
			assert get_section_end_line(doc, child, deep=False) <= end

	def test_last_section_runs_to_end_without_trailing_blanks(self):
		doc = parse_document("# A\nx\n\n\n")
		a = doc.sections[0]
		assert get_section_end_line(doc, a, deep=False) == 2
		assert get_section_end_line(doc, a, deep=True) == 2

	def test_empty_last_section(self):
		doc = parse_document("# A\n\n")
		a = doc.sections[0]
		assert get_section_end_line(doc, a, deep=True) == 1

	def test_deeper_section_ends_at_shallower_heading(self):
		doc = parse_document(NESTED)
		h3 = _by_title(doc, "H3")
		assert get_section_end_line(doc, h3, deep=False) == 6
		assert get_section_end_line(doc, h3, deep=True) == 6


def test_get_section_content():
	doc = parse_document(NESTED)
	h1 = _by_title(doc, "H1")
	assert get_section_content(doc, h1, 2) == "a"
	assert get_section_content(doc, h1, 6) == "a\n## H2\nb\n### H3\nc"


def test_subsections():
	doc = parse_document(NESTED)
	assert [s.title for s in subsections(doc, _by_title(doc, "H1"))] == [
	    "H2",
	    "H3",
	]
	assert subsections(doc, _by_title(doc, "Next")) == []


@pytest.mark.parametrize("bad", ["", "xyz", "4887bbd", "4887bbd6a", "g887bbd6"])
def test_require_section_rejects_malformed_ids(bad):
	with pytest.raises(MdError) as exc_info:
		require_section(parse_document(NESTED), bad)
	assert exc_info.value.code == ErrorCode.INVALID_ID
