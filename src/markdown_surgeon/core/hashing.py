"""
Section identity.

A section id is a pure function of (level, title, occurrence index); it
never depends on the heading's line number, so edits elsewhere in a
document leave unrelated ids untouched.
"""

from __future__ import annotations

import re
from functools import lru_cache
from hashlib import sha256

from markdown_surgeon.errors import ErrorCode, MdError
from markdown_surgeon.models.document import SectionId

ID_LENGTH = 8

_ID_RE = re.compile(r"^[0-9a-f]{8}$", re.IGNORECASE)


def normalize_title(title: str) -> str:
	"""Title form that feeds both the hash and the occurrence counter."""
	return title.lower().strip()


@lru_cache(maxsize=4096)
def section_hash(level: int, title: str, occurrence_index: int = 0) -> SectionId:
	"""
	Derive the id of a section.

	Parameters:
		level: Heading depth (1-6).
		title: Heading text; compared case-insensitively.
		occurrence_index: Zero-based rank among sections sharing the same
			level and title, in document order.

	Returns:
		First 8 hex characters of the SHA-256 digest.
	"""
	key = f"{level}:{normalize_title(title)}:{occurrence_index}"
	return SectionId(sha256(key.encode("utf-8")).hexdigest()[:ID_LENGTH])


def is_valid_id(value: str) -> bool:
	"""Check if a string looks like a section id (8 hex chars)."""
	return bool(_ID_RE.match(value))


def ensure_valid_id(value: str, file: str | None = None) -> SectionId:
	"""Return ``value`` as a ``SectionId`` or raise ``invalid_id``."""
	if not is_valid_id(value):
		raise MdError(ErrorCode.INVALID_ID,
		              f"Invalid section ID: {value}",
		              file=file,
		              id=value)
	return SectionId(value.lower())


__all__ = [
    "ID_LENGTH",
    "normalize_title",
    "section_hash",
    "is_valid_id",
    "ensure_valid_id",
]
