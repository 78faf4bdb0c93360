"""
Markdown Surgeon - surgical section-level editing of Markdown documents.

Documents are parsed into sections addressed by short content-derived
ids (``^a1b2c3d4``) that survive edits elsewhere in the file. Every
operation takes raw text in and hands raw text back; persistence is
left to the caller.

Main entry points:
    - markdown_surgeon.main: CLI entrypoint (``md``)
    - markdown_surgeon.core: parse_document() and the section operations
    - markdown_surgeon.integrations.tasklog: task log client
"""

from markdown_surgeon.errors import ErrorCode, MdError
from markdown_surgeon.models import (
    Document,
    MutationAction,
    MutationResult,
    ReadResult,
    Section,
    SectionId,
)
from markdown_surgeon.core import (
    parse_document,
    section_hash,
    find_section,
    find_section_at_line,
    get_section_end_line,
    read_section,
    write_section,
    append_section,
    empty_section,
    remove_section,
    get_frontmatter_content,
    set_frontmatter,
    delete_frontmatter,
)

__all__ = [
    "ErrorCode",
    "MdError",
    "Document",
    "Section",
    "SectionId",
    "MutationAction",
    "MutationResult",
    "ReadResult",
    "parse_document",
    "section_hash",
    "find_section",
    "find_section_at_line",
    "get_section_end_line",
    "read_section",
    "write_section",
    "append_section",
    "empty_section",
    "remove_section",
    "get_frontmatter_content",
    "set_frontmatter",
    "delete_frontmatter",
]
