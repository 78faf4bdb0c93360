"""
Text and JSON output formatters for the md CLI.

Pure functions: every formatter returns a string and never prints.
Line numbers are shown 1-indexed (``L1`` is the first line).
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Iterable

from markdown_surgeon.loaders.frontmatter import format_value, json_default
from markdown_surgeon.models.document import Section
from markdown_surgeon.models.results import (
    MutationResult,
    ReadResult,
    SearchMatch,
    SearchSummary,
)


def _dumps(value: Any) -> str:
	return json.dumps(value, default=json_default, ensure_ascii=False)


def _section_line(s: Section) -> str:
	return f"{s.heading} ^{s.id} L{s.line + 1}"


def _section_json(s: Section) -> dict[str, Any]:
	return {"id": s.id, "level": s.level, "title": s.title, "line": s.line + 1}


# Text formatters


def format_outline(sections: Iterable[Section]) -> str:
	return "\n".join(_section_line(s) for s in sections)


def format_section(section: Section | None) -> str:
	return _section_line(section) if section else ""


def format_read(result: ReadResult) -> str:
	s = result.section
	header = f"{s.heading} ^{s.id} L{s.line + 1}-L{result.end_line}"
	if result.content.strip() == "":
		return header
	return f"{header}\n\n{result.content}"


def format_mutation(result: MutationResult) -> str:
	"""One-line summary, e.g. ``updated ^a1b2c3d4 L3-L5 (+2, -1)``."""
	start = result.line_start + 1
	span = f"L{start}-L{result.line_end}" if result.line_end else f"L{start}"
	delta = []
	if result.lines_added:
		delta.append(f"+{result.lines_added}")
	if result.lines_removed:
		delta.append(f"-{result.lines_removed}")
	delta_str = f" ({', '.join(delta)})" if delta else ""
	return f"{result.action.value} ^{result.id or '-'} {span}{delta_str}"


def format_search_matches(matches: Iterable[SearchMatch]) -> str:
	return "\n".join(f"^{m.section_id or '-'} L{m.line + 1} {m.content}"
	                 for m in matches)


def format_search_summary(summaries: Iterable[SearchSummary]) -> str:
	out = []
	for s in summaries:
		lines = ",".join(f"L{n + 1}" for n in s.lines)
		word = "match" if s.match_count == 1 else "matches"
		out.append(
		    f"{'#' * s.level} {s.title} ^{s.id} {lines} ({s.match_count} {word})"
		)
	return "\n".join(out)


def format_values(values: Iterable[Any]) -> str:
	return "\n".join(format_value(v) for v in values)


def format_aggregate(counts: dict[str, Counter[str]]) -> str:
	multi = len(counts) > 1
	out = []
	for field, counter in counts.items():
		if multi:
			out.append(f"{field}:")
		prefix = "  " if multi else ""
		for value, n in counter.most_common():
			out.append(f"{prefix}{n} {value}")
	return "\n".join(out)


def format_counts(totals: dict[str, int]) -> str:
	if len(totals) == 1:
		return str(next(iter(totals.values())))
	return "\n".join(f"{field}: {n}" for field, n in totals.items())


# JSON formatters


def json_outline(sections: Iterable[Section]) -> str:
	return _dumps([_section_json(s) for s in sections])


def json_section(section: Section | None) -> str:
	return _dumps(_section_json(section) if section else None)


def json_count(n: int) -> str:
	return _dumps({"count": n})


def json_read(result: ReadResult) -> str:
	s = result.section
	return _dumps({
	    "id": s.id,
	    "level": s.level,
	    "title": s.title,
	    "lineStart": s.line + 1,
	    "lineEnd": result.end_line,
	    "content": result.content,
	})


def json_mutation(result: MutationResult) -> str:
	data: dict[str, Any] = {
	    "action": result.action.value,
	    "id": result.id or "-",
	    "lineStart": result.line_start + 1,
	}
	if result.line_end is not None:
		data["lineEnd"] = result.line_end
	data["linesAdded"] = result.lines_added
	data["linesRemoved"] = result.lines_removed
	return _dumps(data)


def json_search_matches(matches: Iterable[SearchMatch]) -> str:
	return _dumps([{
	    "sectionId": m.section_id,
	    "line": m.line + 1,
	    "content": m.content
	} for m in matches])


def json_search_summary(summaries: Iterable[SearchSummary]) -> str:
	return _dumps([{
	    "id": s.id,
	    "level": s.level,
	    "title": s.title,
	    "lines": [n + 1 for n in s.lines],
	    "matchCount": s.match_count,
	} for s in summaries])


def json_value(value: Any) -> str:
	return _dumps(value)


def json_aggregate(counts: dict[str, Counter[str]]) -> str:
	data = {field: dict(c.most_common()) for field, c in counts.items()}
	if len(data) == 1:
		return _dumps(next(iter(data.values())))
	return _dumps(data)


def json_counts(totals: dict[str, int]) -> str:
	if len(totals) == 1:
		return _dumps(next(iter(totals.values())))
	return _dumps(totals)


__all__ = [
    "format_outline",
    "format_section",
    "format_read",
    "format_mutation",
    "format_search_matches",
    "format_search_summary",
    "format_values",
    "format_aggregate",
    "format_counts",
    "json_outline",
    "json_section",
    "json_count",
    "json_read",
    "json_mutation",
    "json_search_matches",
    "json_search_summary",
    "json_value",
    "json_aggregate",
    "json_counts",
]
