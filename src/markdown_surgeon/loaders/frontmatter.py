"""
YAML frontmatter codec.

Parses and serializes the leading key/value block of a document and
provides dot-path access into the resulting mapping. Reads are lenient
and degrade malformed YAML to an empty mapping; writers use the strict
``load_frontmatter_yaml`` so a broken block is never overwritten.
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Any, Sequence

import yaml

from markdown_surgeon.utils.logging import get_logger

logger = get_logger(__name__)

FRONTMATTER_DELIMITER = "---"

_INDEX_RE = re.compile(r"^\d+$")


def find_frontmatter_block(lines: Sequence[str]) -> tuple[str | None, int]:
	"""
	Locate the YAML block between `---` delimiters at the start of a document.

	Parameters:
		lines: The document split into lines.

	Returns:
		Tuple of (text between the delimiters, index of the first line after
		the closing delimiter). Returns (None, 0) if there is no opening
		delimiter on the first line or the block is never closed.
	"""
	if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
		return None, 0

	for i in range(1, len(lines)):
		if lines[i].strip() == FRONTMATTER_DELIMITER:
			return "\n".join(lines[1:i]), i + 1

	logger.debug("unclosed frontmatter block; treating as body")
	return None, 0


def load_frontmatter_yaml(text: str) -> dict[str, Any]:
	"""
	Strictly parse frontmatter YAML (without delimiters) into a mapping.

	Empty input yields ``{}``.

	Raises:
		ValueError: If the YAML is malformed or is not a mapping.
	"""
	if not text.strip():
		return {}
	try:
		meta = yaml.safe_load(text)
	except yaml.YAMLError as exc:
		raise ValueError(f"invalid YAML: {exc}") from exc
	if meta is None:
		return {}
	if not isinstance(meta, dict):
		raise ValueError(f"expected a mapping, got {type(meta).__name__}")
	return meta


def parse_frontmatter_yaml(text: str) -> dict[str, Any]:
	"""
	Parse frontmatter YAML (without delimiters) into a mapping.

	Lenient counterpart of ``load_frontmatter_yaml`` for reads: invalid
	YAML and non-mapping documents yield ``{}`` with a warning.
	"""
	try:
		return load_frontmatter_yaml(text)
	except ValueError as exc:
		logger.warning("Ignoring malformed frontmatter: %s", exc)
		return {}


def dump_frontmatter_yaml(meta: dict[str, Any]) -> str:
	"""
	Serialize a mapping to YAML without delimiters.

	Keys keep insertion order; strings that contain structurally
	significant characters are quoted by the emitter, plain scalars are
	left bare. An empty mapping serializes to ``""``.
	"""
	if not meta:
		return ""
	return yaml.safe_dump(
	    meta,
	    sort_keys=False,
	    allow_unicode=True,
	    default_flow_style=False,
	    width=float("inf"),
	).strip()


def _split_path(path: str) -> list[str]:
	parts = path.split(".")
	if not path or any(p == "" for p in parts):
		raise ValueError(f"Invalid key path: {path!r}")
	return parts


def _child(container: Any, part: str) -> tuple[bool, Any]:
	"""Return (found, value) for one path segment."""
	if isinstance(container, dict):
		if part in container:
			return True, container[part]
		return False, None
	if isinstance(container, list) and _INDEX_RE.match(part):
		idx = int(part)
		if idx < len(container):
			return True, container[idx]
	return False, None


def get_nested_value(obj: Any, path: str) -> Any:
	"""
	Get a value from nested mappings/lists using dot notation.

	Numeric segments index into lists. Missing paths return None.
	"""
	current = obj
	for part in _split_path(path):
		found, current = _child(current, part)
		if not found:
			return None
	return current


def _assign(container: Any, part: str, value: Any) -> None:
	if isinstance(container, list):
		idx = int(part)
		while len(container) <= idx:
			container.append(None)
		container[idx] = value
	else:
		container[part] = value


def set_nested_value(obj: dict[str, Any], path: str, value: Any) -> None:
	"""
	Set a value in nested mappings using dot notation.

	Intermediate containers are created as needed: a list when the next
	segment is numeric, a mapping otherwise. Values in the way that
	cannot hold the next segment (scalars, or lists addressed by a
	non-numeric key) are replaced.
	"""
	parts = _split_path(path)
	current: Any = obj
	for part, next_part in zip(parts, parts[1:]):
		numeric_next = bool(_INDEX_RE.match(next_part))
		found, child = _child(current, part)
		usable = isinstance(child, dict) or (isinstance(child, list) and
		                                     numeric_next)
		if not found or not usable:
			child = [] if numeric_next else {}
			_assign(current, part, child)
		current = child
	_assign(current, parts[-1], value)


def delete_nested_value(obj: dict[str, Any], path: str) -> bool:
	"""
	Delete the leaf addressed by a dot path.

	Parent containers are never pruned, even when left empty.

	Returns:
		True if a value was removed, False if the path did not exist.
	"""
	parts = _split_path(path)
	current: Any = obj
	for part in parts[:-1]:
		found, current = _child(current, part)
		if not found or not isinstance(current, (dict, list)):
			return False
	found, _ = _child(current, parts[-1])
	if not found:
		return False
	if isinstance(current, list):
		del current[int(parts[-1])]
	else:
		del current[parts[-1]]
	return True


def format_value(value: Any) -> str:
	"""Format a value for plain-text output (minimal, no quoting)."""
	if value is None:
		return ""
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, (str, int, float)):
		return str(value)
	if isinstance(value, (_dt.date, _dt.datetime)):
		return value.isoformat()
	return yaml.safe_dump(value,
	                      sort_keys=False,
	                      allow_unicode=True,
	                      default_flow_style=False,
	                      width=float("inf")).strip()


def coerce_value(raw: str) -> Any:
	"""
	Interpret a command-line string as a typed YAML value.

	``"3"`` becomes 3, ``"[a, b]"`` a list, ``"true"`` a bool. Input that
	parses to an empty mapping, or fails to parse, stays a string.
	"""
	try:
		parsed = yaml.safe_load(raw)
	except yaml.YAMLError:
		return raw
	if parsed is None and raw.strip() not in ("null", "~"):
		return raw
	if isinstance(parsed, dict) and not parsed:
		return raw
	if isinstance(parsed, (_dt.date, _dt.datetime)):
		# keep timestamps as written
		return raw
	return parsed


def json_default(value: Any) -> Any:
	"""``json.dumps`` fallback for values YAML produces but JSON lacks."""
	if isinstance(value, (_dt.date, _dt.datetime)):
		return value.isoformat()
	return str(value)


__all__ = [
    "FRONTMATTER_DELIMITER",
    "find_frontmatter_block",
    "load_frontmatter_yaml",
    "parse_frontmatter_yaml",
    "dump_frontmatter_yaml",
    "get_nested_value",
    "set_nested_value",
    "delete_nested_value",
    "format_value",
    "coerce_value",
    "json_default",
]
