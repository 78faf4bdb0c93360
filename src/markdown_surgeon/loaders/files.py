"""
File access for the CLI layer.

The core never touches storage; these helpers read and write raw text
and translate OS failures into ``MdError`` codes.
"""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Iterable

from markdown_surgeon.errors import ErrorCode, MdError
from markdown_surgeon.utils.logging import get_logger

logger = get_logger(__name__)

_GLOB_CHARS = ("*", "?", "[")


def read_text_file(path: str | Path) -> str:
	"""
	Read a UTF-8 text file.

	Raises:
		MdError: ``file_not_found`` if missing, ``io_error`` otherwise.
	"""
	p = Path(path)
	try:
		return p.read_text(encoding="utf-8")
	except FileNotFoundError as exc:
		raise MdError(ErrorCode.FILE_NOT_FOUND,
		              f"File not found: {path}",
		              file=str(path)) from exc
	except (OSError, UnicodeDecodeError) as exc:
		raise MdError(ErrorCode.IO_ERROR,
		              f"Failed to read file: {path}",
		              file=str(path)) from exc


def write_text_file(path: str | Path, content: str) -> None:
	"""
	Write raw text verbatim (no newline translation).

	Raises:
		MdError: ``io_error`` on any OS failure.
	"""
	p = Path(path)
	try:
		with p.open("w", encoding="utf-8", newline="") as fh:
			fh.write(content)
	except OSError as exc:
		raise MdError(ErrorCode.IO_ERROR,
		              f"Failed to write file: {path}",
		              file=str(path)) from exc
	logger.debug("wrote %d chars to %s", len(content), path)


def expand_file_patterns(patterns: Iterable[str],
                         extensions: Iterable[str] = (".md",)) -> list[str]:
	"""
	Expand glob patterns and explicit paths into a list of files.

	Glob matches are filtered by suffix; explicit paths are taken as-is.
	Order is preserved and duplicates removed.

	Raises:
		MdError: ``file_not_found`` for a missing explicit path, or when
			nothing matched at all.
	"""
	suffixes = tuple(extensions)
	files: list[str] = []
	for pattern in patterns:
		if any(ch in pattern for ch in _GLOB_CHARS):
			for match in sorted(glob.glob(pattern, recursive=True)):
				if Path(match).is_file() and match.endswith(suffixes):
					files.append(match)
			continue
		if not Path(pattern).exists():
			raise MdError(ErrorCode.FILE_NOT_FOUND,
			              f"File not found: {pattern}",
			              file=pattern)
		if Path(pattern).is_file():
			files.append(pattern)

	if not files:
		raise MdError(ErrorCode.FILE_NOT_FOUND,
		              "No markdown files found matching patterns")
	return list(dict.fromkeys(files))


__all__ = ["read_text_file", "write_text_file", "expand_file_patterns"]
