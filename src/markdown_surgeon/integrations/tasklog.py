"""
Task log client.

Stores narrative log entries and checkpoints of a task as sections of a
markdown document and keeps task state in its frontmatter. Only the
public document API is used: well-known sections are located by their
precomputed ids, never by scanning lines.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from markdown_surgeon.core.collect import build_document
from markdown_surgeon.core.frontmatter import (
    require_frontmatter,
    update_frontmatter,
)
from markdown_surgeon.core.hashing import section_hash
from markdown_surgeon.core.locator import find_section, subsections
from markdown_surgeon.core.mutations import append_section, read_section
from markdown_surgeon.core.parser import parse_document
from markdown_surgeon.errors import MdError
from markdown_surgeon.models.document import Document, Section
from markdown_surgeon.models.task import Checkpoint, Entry, TaskFile
from markdown_surgeon.utils.logging import get_logger

logger = get_logger(__name__)

INVALID_TASK_FILE = "invalid_task_file"

ENTRIES_TITLE = "Entries"
CHECKPOINTS_TITLE = "Checkpoints"
CHANGES_TITLE = "Changes"
LEARNINGS_TITLE = "Learnings"

ENTRIES_ID = section_hash(1, ENTRIES_TITLE, 0)
CHECKPOINTS_ID = section_hash(1, CHECKPOINTS_TITLE, 0)

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _invalid(message: str) -> MdError:
	return MdError(INVALID_TASK_FILE, f"Invalid task file: {message}")


def _body(doc: Document, section: Section) -> str:
	return read_section(doc, section.id, deep=False).content.strip()


def _entry_text(entry: Entry) -> str:
	return f"## {entry.ts}\n{entry.msg}\n"


def _checkpoint_text(cp: Checkpoint) -> str:
	return (f"## {cp.ts}\n\n### {CHANGES_TITLE}\n{cp.changes}\n\n"
	        f"### {LEARNINGS_TITLE}\n{cp.learnings}")


def render_task(meta: Mapping[str, Any],
                entries: Iterable[Entry] = (),
                checkpoints: Iterable[Checkpoint] = ()) -> str:
	"""Raw text of a task file."""
	parts = [f"# {ENTRIES_TITLE}", ""]
	for entry in entries:
		parts.append(_entry_text(entry))
	parts.append(f"# {CHECKPOINTS_TITLE}")
	for cp in checkpoints:
		parts.extend(["", _checkpoint_text(cp)])
	return build_document(meta=meta, content="\n".join(parts) + "\n")


def parse_task_file(text: str) -> TaskFile:
	"""
	Parse a task file.

	Raises:
		MdError: ``invalid_task_file`` when the frontmatter block is missing.
	"""
	doc = parse_document(text)
	try:
		meta = require_frontmatter(doc)
	except MdError as exc:
		raise _invalid("missing frontmatter") from exc

	entries: list[Entry] = []
	entries_section = find_section(doc, ENTRIES_ID)
	if entries_section is not None:
		for s in subsections(doc, entries_section):
			if s.level == 2:
				entries.append(Entry(ts=s.title, msg=_body(doc, s)))

	checkpoints: list[Checkpoint] = []
	checkpoints_section = find_section(doc, CHECKPOINTS_ID)
	if checkpoints_section is not None:
		for s in subsections(doc, checkpoints_section):
			if s.level != 2 or not _TIMESTAMP_RE.match(s.title):
				continue
			parts = {
			    sub.title: _body(doc, sub)
			    for sub in subsections(doc, s) if sub.level == 3
			}
			checkpoints.append(
			    Checkpoint(ts=s.title,
			               changes=parts.get(CHANGES_TITLE, ""),
			               learnings=parts.get(LEARNINGS_TITLE, "")))

	return TaskFile(meta=meta, entries=entries, checkpoints=checkpoints)


def append_entry(text: str, entry: Entry) -> str:
	"""
	Add a log entry as the last ``##`` section under ``# Entries``.

	When ``# Checkpoints`` follows, the entry is inserted right above it.
	"""
	doc = parse_document(text)
	if find_section(doc, ENTRIES_ID) is None:
		raise _invalid(f"missing # {ENTRIES_TITLE} section")
	if find_section(doc, CHECKPOINTS_ID) is not None:
		new_text, result = append_section(doc,
		                                  CHECKPOINTS_ID,
		                                  _entry_text(entry),
		                                  before=True)
	else:
		new_text, result = append_section(doc,
		                                  ENTRIES_ID,
		                                  _entry_text(entry).rstrip("\n"),
		                                  deep=True)
	logger.debug("entry %s added (+%d lines)", entry.ts, result.lines_added)
	return new_text


def append_checkpoint(text: str, checkpoint: Checkpoint) -> str:
	"""Add a checkpoint at the end of ``# Checkpoints``."""
	doc = parse_document(text)
	if find_section(doc, CHECKPOINTS_ID) is None:
		raise _invalid(f"missing # {CHECKPOINTS_TITLE} section")
	new_text, result = append_section(doc,
	                                  CHECKPOINTS_ID,
	                                  _checkpoint_text(checkpoint),
	                                  deep=True)
	logger.debug("checkpoint %s added (+%d lines)", checkpoint.ts,
	             result.lines_added)
	return new_text


def patch_frontmatter(text: str, updates: Mapping[str, Any]) -> str:
	"""Update top-level frontmatter fields (status, timestamps, ...)."""
	return update_frontmatter(parse_document(text), updates)


__all__ = [
    "INVALID_TASK_FILE",
    "ENTRIES_ID",
    "CHECKPOINTS_ID",
    "render_task",
    "parse_task_file",
    "append_entry",
    "append_checkpoint",
    "patch_frontmatter",
]
