"""
Multi-document helpers built on the parser.

Concatenation, frontmatter extraction across documents and new
document construction.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Iterable, Mapping

from markdown_surgeon.core.frontmatter import get_frontmatter
from markdown_surgeon.core.parser import is_fence, match_heading
from markdown_surgeon.loaders.frontmatter import (
    FRONTMATTER_DELIMITER,
    dump_frontmatter_yaml,
    get_nested_value,
    json_default,
)
from markdown_surgeon.models.document import Document

MAX_LEVEL = 6


def first_h1(doc: Document) -> str | None:
	"""Title of the first level-1 heading."""
	return next((s.title for s in doc.sections if s.level == 1), None)


def shift_headings(lines: Iterable[str], shift: int) -> list[str]:
	"""
	Deepen every heading by ``shift`` levels, capped at 6.

	Lines inside fenced code blocks are left untouched.
	"""
	if shift <= 0:
		return list(lines)
	out = []
	in_code_block = False
	for line in lines:
		if is_fence(line):
			in_code_block = not in_code_block
		heading = None if in_code_block else match_heading(line)
		if heading is None:
			out.append(line)
			continue
		level, title = heading
		out.append(f"{'#' * min(MAX_LEVEL, level + shift)} {title}")
	return out


def concat(docs: Iterable[Document], shift: int = 0) -> str:
	"""
	Concatenate document bodies separated by a blank line.

	Only the first document's frontmatter is kept.
	"""
	docs = list(docs)
	bodies = [
	    "\n".join(
	        shift_headings(doc.lines[doc.frontmatter_end_line:], shift))
	    for doc in docs
	]
	result = "\n\n".join(bodies)
	if docs and docs[0].has_frontmatter:
		block = "\n".join(
		    [FRONTMATTER_DELIMITER, docs[0].frontmatter, FRONTMATTER_DELIMITER])
		result = f"{block}\n\n{result}"
	return result


def _field_values(doc: Document, field: str) -> list[Any]:
	val = get_nested_value(get_frontmatter(doc), field)
	if val is None:
		return []
	return list(val) if isinstance(val, list) else [val]


def _count_key(value: Any) -> str:
	if isinstance(value, (dict, list)):
		return json.dumps(value, default=json_default)
	if isinstance(value, bool):
		return "true" if value else "false"
	return str(value)


def collect_meta_values(docs: Iterable[Document],
                        fields: list[str]) -> list[Any]:
	"""All values of ``fields`` across documents, lists flattened."""
	values: list[Any] = []
	for doc in docs:
		for field in fields:
			values.extend(_field_values(doc, field))
	return values


def aggregate_meta(docs: Iterable[Document],
                   fields: list[str]) -> dict[str, Counter[str]]:
	"""Unique value counts per field."""
	counts: dict[str, Counter[str]] = {f: Counter() for f in fields}
	for doc in docs:
		for field in fields:
			counts[field].update(
			    _count_key(v) for v in _field_values(doc, field))
	return counts


def count_meta(docs: Iterable[Document], fields: list[str]) -> dict[str, int]:
	"""Total number of values per field."""
	return {
	    field: sum(c.values())
	    for field, c in aggregate_meta(docs, fields).items()
	}


def build_document(title: str | None = None,
                   meta: Mapping[str, Any] | None = None,
                   content: str | None = None) -> str:
	"""Raw text of a new document."""
	lines: list[str] = []
	yaml_text = dump_frontmatter_yaml(dict(meta or {}))
	if yaml_text:
		lines.extend([FRONTMATTER_DELIMITER, yaml_text, FRONTMATTER_DELIMITER, ""])
	if title:
		lines.extend([f"# {title}", ""])
	if content:
		lines.append(content)
	return "\n".join(lines)


__all__ = [
    "first_h1",
    "shift_headings",
    "concat",
    "collect_meta_values",
    "aggregate_meta",
    "count_meta",
    "build_document",
]
