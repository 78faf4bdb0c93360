"""
Section read and mutation operations.

Every mutation takes a parsed ``Document``, splices its line buffer and
returns ``(new_text, MutationResult)``. Documents are never modified in
place; callers chaining edits must parse the returned text again.
"""

from __future__ import annotations

from typing import Sequence

from markdown_surgeon.core.locator import (
    get_document_end_line,
    get_section_content,
    get_section_end_line,
    require_section,
)
from markdown_surgeon.core.parser import match_heading, parse_document, split_lines
from markdown_surgeon.models.document import Document, SectionId
from markdown_surgeon.models.results import (
    MutationAction,
    MutationResult,
    ReadResult,
)
from markdown_surgeon.utils.logging import get_logger

logger = get_logger(__name__)


def content_lines(content: str | Sequence[str]) -> list[str]:
	"""
	Lines of replacement content.

	A string is split on newlines and ``""`` means no lines. A sequence
	(such as ``ReadResult.lines``) is taken verbatim, so a body consisting
	of a single blank line survives a read followed by a write.
	"""
	if not isinstance(content, str):
		return list(content)
	if content == "":
		return []
	return split_lines(content)


def _splice(lines: tuple[str, ...], start: int, end: int,
            new_lines: list[str]) -> str:
	logger.debug("splice [%d:%d) -> %d lines", start, end, len(new_lines))
	return "\n".join([*lines[:start], *new_lines, *lines[end:]])


def read_section(doc: Document, id: str, deep: bool = False) -> ReadResult:
	"""
	Read the content below a section's heading.

	Raises:
		MdError: ``section_not_found`` if the id does not resolve.
	"""
	section = require_section(doc, id)
	end_line = get_section_end_line(doc, section, deep)
	return ReadResult(section=section,
	                  content=get_section_content(doc, section, end_line),
	                  end_line=end_line,
	                  lines=list(doc.lines[section.line + 1:end_line]))


def write_section(doc: Document,
                  id: str,
                  content: str | Sequence[str],
                  deep: bool = False) -> tuple[str, MutationResult]:
	"""
	Replace a section's body, keeping its heading line.

	With ``deep`` the replaced range includes nested subsections. ``content``
	is raw text or a list of lines, see ``content_lines``.
	"""
	section = require_section(doc, id)
	end_line = get_section_end_line(doc, section, deep)
	start = section.line + 1
	new_lines = content_lines(content)
	text = _splice(doc.lines, start, end_line, new_lines)
	return text, MutationResult(
	    action=MutationAction.UPDATED,
	    id=section.id,
	    line_start=section.line,
	    line_end=start + len(new_lines),
	    lines_added=len(new_lines),
	    lines_removed=end_line - start,
	)


def empty_section(doc: Document,
                  id: str,
                  deep: bool = False) -> tuple[str, MutationResult]:
	"""Clear a section's body; the heading line is untouched."""
	text, result = write_section(doc, id, "", deep)
	return text, result.model_copy(update={
	    "action": MutationAction.EMPTIED,
	    "line_end": None
	})


def remove_section(doc: Document, id: str) -> tuple[str, MutationResult]:
	"""
	Delete a section's heading and its whole subtree.

	Removal is always deep: leaving subsections behind would re-parent
	them under whatever heading precedes the removed one.
	"""
	section = require_section(doc, id)
	end_line = get_section_end_line(doc, section, deep=True)
	text = _splice(doc.lines, section.line, end_line, [])
	return text, MutationResult(
	    action=MutationAction.REMOVED,
	    id=section.id,
	    line_start=section.line,
	    lines_added=0,
	    lines_removed=end_line - section.line,
	)


def append_section(
    doc: Document,
    id: str | None,
    content: str,
    deep: bool = False,
    before: bool = False,
) -> tuple[str, MutationResult]:
	"""
	Insert content relative to a section, or to the document.

	After mode (default) inserts at the end of the section's region, with
	a blank separator line when both the preceding line and the first
	content line are non-blank. ``before`` inserts immediately above the
	heading, verbatim. With ``id=None`` the target is the document:
	``before`` inserts right after the frontmatter block, otherwise after
	the last non-blank line so the trailing newline is kept.

	If the content starts with a heading the action is ``created`` and
	the result carries the new section's id.
	"""
	new_lines = split_lines(content)
	section_id: SectionId | None = None
	if id is None:
		insert_at = (doc.frontmatter_end_line
		             if before else get_document_end_line(doc))
	else:
		section = require_section(doc, id)
		section_id = section.id
		if before:
			insert_at = section.line
		else:
			insert_at = get_section_end_line(doc, section, deep)

	if (not before and insert_at > 0 and
	    doc.lines[insert_at - 1].strip() != "" and new_lines[0].strip() != ""):
		new_lines.insert(0, "")

	text = _splice(doc.lines, insert_at, insert_at, new_lines)

	heading = match_heading(content.split("\n", 1)[0])
	if heading is None:
		return text, MutationResult(
		    action=MutationAction.APPENDED,
		    id=section_id,
		    line_start=insert_at,
		    lines_added=len(new_lines),
		)

	# The new heading sits after the optional separator line.
	heading_line = insert_at + (1 if new_lines[0] == "" else 0)
	created = next((s for s in parse_document(text).sections
	                if s.line == heading_line and s.title == heading[1]), None)
	return text, MutationResult(
	    action=MutationAction.CREATED,
	    id=created.id if created else section_id,
	    line_start=insert_at,
	    line_end=insert_at + len(new_lines),
	    lines_added=len(new_lines),
	)


__all__ = [
    "content_lines",
    "read_section",
    "write_section",
    "empty_section",
    "remove_section",
    "append_section",
]
