"""
Frontmatter operations on parsed documents.

Reads go through the YAML codec; writes re-serialize the whole mapping
and splice it over the existing block (lines ``[0, frontmatter_end_line)``),
adding delimiters when the document had no frontmatter.
"""

from __future__ import annotations

from typing import Any, Mapping

from markdown_surgeon.errors import ErrorCode, MdError
from markdown_surgeon.loaders.frontmatter import (
    FRONTMATTER_DELIMITER,
    delete_nested_value,
    dump_frontmatter_yaml,
    get_nested_value,
    load_frontmatter_yaml,
    parse_frontmatter_yaml,
    set_nested_value,
)
from markdown_surgeon.models.document import Document
from markdown_surgeon.utils.logging import get_logger

logger = get_logger(__name__)


def get_frontmatter_content(doc: Document) -> str:
	"""Raw frontmatter text without delimiters ('' when absent)."""
	return doc.frontmatter or ""


def get_frontmatter(doc: Document) -> dict[str, Any]:
	"""Frontmatter as a mapping ({} when absent or malformed)."""
	return parse_frontmatter_yaml(get_frontmatter_content(doc))


def get_frontmatter_value(doc: Document, path: str) -> Any:
	"""Value at a dot path, or None."""
	return get_nested_value(get_frontmatter(doc), path)


def require_frontmatter(doc: Document, file: str | None = None) -> dict[str, Any]:
	"""
	Frontmatter mapping for callers that need one.

	Raises:
		MdError: ``parse_error`` when the document has no frontmatter block.
	"""
	if not doc.has_frontmatter:
		raise MdError(ErrorCode.PARSE_ERROR,
		              "Document has no frontmatter",
		              file=file)
	return get_frontmatter(doc)


def _load_for_update(doc: Document) -> dict[str, Any]:
	"""Frontmatter mapping for a mutation; refuses to replace a broken block."""
	try:
		return load_frontmatter_yaml(get_frontmatter_content(doc))
	except ValueError as exc:
		raise MdError(ErrorCode.PARSE_ERROR,
		              f"Cannot update malformed frontmatter: {exc}") from exc


def apply_frontmatter(doc: Document, meta: Mapping[str, Any]) -> str:
	"""
	Replace the document's frontmatter block with ``meta``.

	An empty mapping removes the block. A document without frontmatter
	gets a new block followed by a blank line.
	"""
	yaml_text = dump_frontmatter_yaml(dict(meta))
	block = ([FRONTMATTER_DELIMITER, *yaml_text.split("\n"),
	          FRONTMATTER_DELIMITER] if yaml_text else [])

	if doc.has_frontmatter:
		lines = [*block, *doc.lines[doc.frontmatter_end_line:]]
	elif block:
		lines = [*block, "", *doc.lines]
	else:
		lines = list(doc.lines)
	return "\n".join(lines)


def set_frontmatter(doc: Document, path: str, value: Any) -> str:
	"""
	Set a dot-path value, creating intermediate mappings as needed.

	Returns:
		New raw text.

	Raises:
		MdError: ``parse_error`` if the path is invalid or the existing
			frontmatter is not a valid YAML mapping.
	"""
	meta = _load_for_update(doc)
	try:
		set_nested_value(meta, path, value)
	except ValueError as exc:
		raise MdError(ErrorCode.PARSE_ERROR, str(exc)) from exc
	logger.debug("set frontmatter %s", path)
	return apply_frontmatter(doc, meta)


def delete_frontmatter(doc: Document, path: str) -> str:
	"""
	Delete the leaf at a dot path; emptied parents are kept.

	Raises:
		MdError: ``parse_error`` if the path does not exist or the existing
			frontmatter is not a valid YAML mapping.
	"""
	meta = _load_for_update(doc)
	try:
		deleted = delete_nested_value(meta, path)
	except ValueError as exc:
		raise MdError(ErrorCode.PARSE_ERROR, str(exc)) from exc
	if not deleted:
		raise MdError(ErrorCode.PARSE_ERROR, f"Key '{path}' not found")
	logger.debug("deleted frontmatter %s", path)
	return apply_frontmatter(doc, meta)


def update_frontmatter(doc: Document, updates: Mapping[str, Any]) -> str:
	"""Patch top-level keys and return the new raw text."""
	meta = _load_for_update(doc)
	meta.update(updates)
	return apply_frontmatter(doc, meta)


__all__ = [
    "get_frontmatter_content",
    "get_frontmatter",
    "get_frontmatter_value",
    "require_frontmatter",
    "apply_frontmatter",
    "set_frontmatter",
    "delete_frontmatter",
    "update_frontmatter",
]
