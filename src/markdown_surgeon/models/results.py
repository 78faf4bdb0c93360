"""
Result models returned by document operations.

Line numbers are 0-indexed; formatters convert them for display.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .document import Section, SectionId


class MutationAction(str, Enum):
	"""Kind of change applied by a mutation."""

	UPDATED = "updated"
	CREATED = "created"
	APPENDED = "appended"
	EMPTIED = "emptied"
	REMOVED = "removed"


class MutationResult(BaseModel):
	"""
	Delta summary of a single mutation.

	Attributes:
		action: What the mutation did.
		id: Affected section id, or None for document-level appends.
		line_start: First affected line in the new document.
		line_end: Exclusive end of the affected region, where meaningful.
		lines_added: Number of lines inserted.
		lines_removed: Number of lines deleted.
	"""

	model_config = ConfigDict(frozen=True)

	action: MutationAction
	id: SectionId | None = None
	line_start: int = Field(ge=0)
	line_end: int | None = None
	lines_added: int = Field(default=0, ge=0)
	lines_removed: int = Field(default=0, ge=0)

	@property
	def delta(self) -> int:
		return self.lines_added - self.lines_removed


class ReadResult(BaseModel):
	"""Content of a section together with its computed boundary."""

	model_config = ConfigDict(frozen=True)

	section: Section
	content: str
	end_line: int
	lines: list[str] = Field(
	    default_factory=list,
	    description="Body lines exactly as stored; writing them back is lossless")


class SearchMatch(BaseModel):
	"""A single matching line."""

	model_config = ConfigDict(frozen=True)

	section_id: SectionId | None = Field(
	    default=None, description="Enclosing section, None before any heading")
	line: int
	content: str


class SearchSummary(BaseModel):
	"""Matches grouped by enclosing section."""

	model_config = ConfigDict(frozen=True)

	id: SectionId
	level: int
	title: str
	lines: list[int] = Field(default_factory=list)
	match_count: int = 0


__all__ = [
    "MutationAction",
    "MutationResult",
    "ReadResult",
    "SearchMatch",
    "SearchSummary",
]
