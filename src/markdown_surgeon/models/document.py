"""
Document model.

A ``Document`` is an immutable snapshot of one parse pass: the raw line
buffer, the frontmatter block and the ordered section list derived from
it. Sections never store their end boundary; it is always computed from
the document (see ``core.locator.get_section_end_line``).
"""

from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

SectionId = NewType("SectionId", str)


class Section(BaseModel):
	"""A heading line and its position in the document."""

	model_config = ConfigDict(frozen=True)

	id: SectionId = Field(description="Content-derived section identifier")
	level: int = Field(ge=1, le=6, description="Heading depth, 1 = top")
	title: str = Field(description="Heading text, whitespace-trimmed")
	line: int = Field(ge=0, description="0-indexed line of the heading")

	@property
	def heading(self) -> str:
		return f"{'#' * self.level} {self.title}"


class Document(BaseModel):
	"""Parsed document: line buffer, frontmatter and sections."""

	model_config = ConfigDict(frozen=True)

	lines: tuple[str, ...] = Field(description="Raw lines, no newlines")
	frontmatter: str | None = Field(
	    default=None,
	    description="Frontmatter text without delimiters, or None")
	frontmatter_end_line: int = Field(
	    default=0, description="First line after the frontmatter block")
	sections: tuple[Section, ...] = Field(default_factory=tuple)

	@property
	def has_frontmatter(self) -> bool:
		return self.frontmatter is not None

	@property
	def text(self) -> str:
		"""Raw text reassembled from the line buffer."""
		return "\n".join(self.lines)


__all__ = ["SectionId", "Section", "Document"]
