"""
Task log models.

A task file is a document with frontmatter metadata, a ``# Entries``
section holding timestamped log entries and a ``# Checkpoints`` section
holding periodic summaries.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TS_FORMAT = "%Y-%m-%d %H:%M"


def short_timestamp(now: datetime | None = None) -> str:
	"""Timestamp in the short ``YYYY-MM-DD HH:MM`` form used for titles."""
	return (now or datetime.now()).strftime(TS_FORMAT)


class Entry(BaseModel):
	"""A timestamped log message."""

	model_config = ConfigDict(frozen=True)

	ts: str = Field(description="Short timestamp, used as heading title")
	msg: str = Field(description="Entry body")


class Checkpoint(BaseModel):
	"""Changes made and learnings acquired at a point in time."""

	model_config = ConfigDict(frozen=True)

	ts: str
	changes: str = ""
	learnings: str = ""


class TaskFile(BaseModel):
	"""Parsed contents of a task file."""

	meta: dict[str, Any] = Field(default_factory=dict)
	entries: list[Entry] = Field(default_factory=list)
	checkpoints: list[Checkpoint] = Field(default_factory=list)


__all__ = ["TS_FORMAT", "short_timestamp", "Entry", "Checkpoint", "TaskFile"]
