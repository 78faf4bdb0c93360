"""Substring search over a parsed document."""

from __future__ import annotations

from markdown_surgeon.core.locator import find_section, find_section_at_line
from markdown_surgeon.models.document import Document
from markdown_surgeon.models.results import SearchMatch, SearchSummary


def search(doc: Document,
           pattern: str) -> tuple[list[SearchMatch], list[SearchSummary]]:
	"""
	Find every line containing ``pattern``.

	Returns:
		Tuple of (matches in line order, summaries grouped by enclosing
		section in first-match order). Matches above the first heading
		have no section and are left out of the summaries.
	"""
	matches: list[SearchMatch] = []
	for i, line in enumerate(doc.lines):
		if pattern in line:
			section = find_section_at_line(doc, i)
			matches.append(
			    SearchMatch(section_id=section.id if section else None,
			                line=i,
			                content=line))

	grouped: dict[str, list[int]] = {}
	for match in matches:
		if match.section_id is not None:
			grouped.setdefault(match.section_id, []).append(match.line)

	summaries = []
	for section_id, lines in grouped.items():
		section = find_section(doc, section_id)
		summaries.append(
		    SearchSummary(id=section.id,
		                  level=section.level,
		                  title=section.title,
		                  lines=lines,
		                  match_count=len(lines)))
	return matches, summaries


__all__ = ["search"]
