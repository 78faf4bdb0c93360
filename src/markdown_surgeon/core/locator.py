"""
Section lookup and boundary computation.

``get_section_end_line`` is the single source of truth for where a
section's content region ends; ``Section`` stores no end boundary.
"""

from __future__ import annotations

from markdown_surgeon.core.hashing import ensure_valid_id
from markdown_surgeon.errors import section_not_found
from markdown_surgeon.models.document import Document, Section


def find_section(doc: Document, id: str) -> Section | None:
	"""Find a section by id."""
	wanted = id.lower()
	for section in doc.sections:
		if section.id == wanted:
			return section
	return None


def require_section(doc: Document, id: str, file: str | None = None) -> Section:
	"""
	Find a section by id.

	Raises:
		MdError: ``invalid_id`` for a malformed id, ``section_not_found``
			when no section matches.
	"""
	section = find_section(doc, ensure_valid_id(id, file))
	if section is None:
		raise section_not_found(id, file)
	return section


def find_section_at_line(doc: Document, line: int) -> Section | None:
	"""Return the nearest section whose heading is at or above ``line``."""
	for section in reversed(doc.sections):
		if section.line <= line:
			return section
	return None


def _index_of(doc: Document, section: Section) -> int:
	for i, s in enumerate(doc.sections):
		if s.id == section.id and s.line == section.line:
			return i
	raise section_not_found(section.id)


def _trimmed_end(doc: Document, floor: int) -> int:
	"""End of document excluding trailing blank lines, never below ``floor``."""
	end = len(doc.lines)
	while end > floor and doc.lines[end - 1].strip() == "":
		end -= 1
	return end


def get_section_end_line(doc: Document, section: Section, deep: bool) -> int:
	"""
	Compute the exclusive end of a section's content region.

	Shallow regions stop at the very next heading of any level, so nested
	subsections are excluded. Deep regions stop at the next heading whose
	level is <= the section's level and include every nested subsection.
	Without a terminating heading the region runs to end of document,
	minus trailing blank lines.

	Parameters:
		doc: Parsed document the section belongs to.
		section: Section to measure.
		deep: Whether nested subsections are part of the region.

	Returns:
		0-indexed line where the region ends (exclusive).
	"""
	idx = _index_of(doc, section)
	for following in doc.sections[idx + 1:]:
		if not deep or following.level <= section.level:
			return following.line
	return _trimmed_end(doc, section.line + 1)


def get_document_end_line(doc: Document) -> int:
	"""Line after the last non-blank line of the body (exclusive)."""
	return _trimmed_end(doc, doc.frontmatter_end_line)


def get_section_content(doc: Document, section: Section, end_line: int) -> str:
	"""Text between the heading line and ``end_line``."""
	return "\n".join(doc.lines[section.line + 1:end_line])


def subsections(doc: Document, section: Section) -> list[Section]:
	"""Sections nested inside the deep region of ``section``."""
	end = get_section_end_line(doc, section, deep=True)
	return [
	    s for s in doc.sections
	    if section.line < s.line < end and s.level > section.level
	]


__all__ = [
    "find_section",
    "require_section",
    "find_section_at_line",
    "get_section_end_line",
    "get_document_end_line",
    "get_section_content",
    "subsections",
]
