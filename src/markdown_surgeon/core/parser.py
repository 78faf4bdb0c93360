"""
Document parser.

Turns raw text into a ``Document``: the line buffer, the frontmatter
block and the ordered list of sections with their ids. Parsing never
fails; ambiguous input (for example an unclosed frontmatter block)
degrades to the most conservative reading.
"""

from __future__ import annotations

import re

from markdown_surgeon.core.hashing import normalize_title, section_hash
from markdown_surgeon.loaders.frontmatter import find_frontmatter_block
from markdown_surgeon.models.document import Document, Section
from markdown_surgeon.utils.logging import get_logger

logger = get_logger(__name__)

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
FENCE_PREFIXES = ("```", "~~~")


def split_lines(text: str) -> list[str]:
	"""Split raw text on newlines; a trailing newline yields a final ''."""
	return text.split("\n")


def match_heading(line: str) -> tuple[int, str] | None:
	"""Return (level, title) if ``line`` is a heading, else None."""
	m = HEADING_RE.match(line)
	if not m:
		return None
	title = m.group(2).strip()
	if not title:
		return None
	return len(m.group(1)), title


def is_fence(line: str) -> bool:
	"""True if ``line`` opens or closes a fenced code block."""
	return line.strip().startswith(FENCE_PREFIXES)


def parse_document(text: str) -> Document:
	"""
	Parse raw text into a Document.

	Headings inside fenced code blocks are ignored. Each section's id is
	derived from its level, title and its occurrence among sections with
	the same level and title; the occurrence counter lives only for the
	duration of this call.

	Parameters:
		text: Raw document text.

	Returns:
		Immutable Document snapshot.
	"""
	lines = split_lines(text)
	frontmatter, fm_end = find_frontmatter_block(lines)

	occurrences: dict[tuple[int, str], int] = {}
	sections: list[Section] = []
	in_code_block = False
	for i in range(fm_end, len(lines)):
		line = lines[i]
		if is_fence(line):
			in_code_block = not in_code_block
			continue
		if in_code_block:
			continue
		heading = match_heading(line)
		if heading is None:
			continue
		level, title = heading
		key = (level, normalize_title(title))
		occurrence = occurrences.get(key, 0)
		occurrences[key] = occurrence + 1
		sections.append(
		    Section(id=section_hash(level, title, occurrence),
		            level=level,
		            title=title,
		            line=i))

	logger.debug("parsed %d lines, %d sections, frontmatter=%s", len(lines),
	             len(sections), frontmatter is not None)
	return Document(
	    lines=tuple(lines),
	    frontmatter=frontmatter,
	    frontmatter_end_line=fm_end,
	    sections=tuple(sections),
	)


__all__ = [
    "HEADING_RE",
    "split_lines",
    "match_heading",
    "is_fence",
    "parse_document",
]
