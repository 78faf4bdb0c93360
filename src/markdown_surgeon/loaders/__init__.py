"""File and frontmatter loading utilities.

Key modules:
    - frontmatter: YAML frontmatter codec and dot-path access
    - files: raw text I/O and glob expansion for the CLI
"""

from .frontmatter import (
    find_frontmatter_block,
    load_frontmatter_yaml,
    parse_frontmatter_yaml,
    dump_frontmatter_yaml,
    get_nested_value,
    set_nested_value,
    delete_nested_value,
    format_value,
    coerce_value,
)
from .files import read_text_file, write_text_file, expand_file_patterns

__all__ = [
    "find_frontmatter_block",
    "load_frontmatter_yaml",
    "parse_frontmatter_yaml",
    "dump_frontmatter_yaml",
    "get_nested_value",
    "set_nested_value",
    "delete_nested_value",
    "format_value",
    "coerce_value",
    "read_text_file",
    "write_text_file",
    "expand_file_patterns",
]
