"""
Markdown Surgeon models.

This subpackage contains Pydantic models for parsed documents, the
results of document operations, and runtime configuration.

Key models:
    - Document / Section: immutable snapshot of one parse pass
    - MutationResult: delta summary returned by every mutation
    - ReadResult, SearchMatch, SearchSummary: read-side results
    - Config: configuration loaded from the environment
    - Entry, Checkpoint, TaskFile: task log contents
"""

from .config import Config, load_env
from .document import Document, Section, SectionId
from .task import Entry, Checkpoint, TaskFile, short_timestamp
from .results import (
    MutationAction,
    MutationResult,
    ReadResult,
    SearchMatch,
    SearchSummary,
)

__all__ = [
    "Config",
    "load_env",
    "Document",
    "Section",
    "SectionId",
    "MutationAction",
    "MutationResult",
    "ReadResult",
    "SearchMatch",
    "SearchSummary",
    "Entry",
    "Checkpoint",
    "TaskFile",
    "short_timestamp",
]
