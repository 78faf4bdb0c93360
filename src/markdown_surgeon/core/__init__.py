"""Core document model and mutation operations.

Key modules:
    - hashing: section ids derived from (level, title, occurrence)
    - parser: raw text to Document
    - locator: section lookup and shallow/deep boundaries
    - mutations: read, write, append, empty, remove
    - frontmatter: get/set/delete on the leading YAML block
    - search, collect, magic: helpers layered on the parsed document
"""

from .hashing import section_hash, is_valid_id, ensure_valid_id
from .parser import parse_document
from .locator import (
    find_section,
    require_section,
    find_section_at_line,
    get_section_end_line,
    get_document_end_line,
    get_section_content,
    subsections,
)
from .mutations import (
    read_section,
    write_section,
    append_section,
    empty_section,
    remove_section,
)
from .frontmatter import (
    get_frontmatter_content,
    get_frontmatter,
    get_frontmatter_value,
    require_frontmatter,
    set_frontmatter,
    delete_frontmatter,
    update_frontmatter,
)
from .search import search
from .collect import (
    first_h1,
    concat,
    collect_meta_values,
    aggregate_meta,
    count_meta,
    build_document,
)
from .magic import expand_magic

__all__ = [
    # identity
    "section_hash",
    "is_valid_id",
    "ensure_valid_id",
    # parsing and lookup
    "parse_document",
    "find_section",
    "require_section",
    "find_section_at_line",
    "get_section_end_line",
    "get_document_end_line",
    "get_section_content",
    "subsections",
    # mutations
    "read_section",
    "write_section",
    "append_section",
    "empty_section",
    "remove_section",
    # frontmatter
    "get_frontmatter_content",
    "get_frontmatter",
    "get_frontmatter_value",
    "require_frontmatter",
    "set_frontmatter",
    "delete_frontmatter",
    "update_frontmatter",
    # helpers
    "search",
    "first_h1",
    "concat",
    "collect_meta_values",
    "aggregate_meta",
    "count_meta",
    "build_document",
    "expand_magic",
]
