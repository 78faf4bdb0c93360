"""
Error taxonomy shared by the core and its callers.

Every failure surfaced by the document model is an ``MdError`` carrying
exactly one ``ErrorCode``. The CLI maps any ``MdError`` to exit status 1.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
	"""Machine-readable error kinds."""

	FILE_NOT_FOUND = "file_not_found"
	SECTION_NOT_FOUND = "section_not_found"
	PARSE_ERROR = "parse_error"
	INVALID_ID = "invalid_id"
	IO_ERROR = "io_error"


class MdError(Exception):
	"""Structured error with code, message and optional context."""

	def __init__(
	    self,
	    code: ErrorCode | str,
	    message: str,
	    file: str | None = None,
	    id: str | None = None,
	) -> None:
		super().__init__(message)
		self.code = code
		self.message = message
		self.file = file
		self.id = id

	@property
	def code_value(self) -> str:
		return self.code.value if isinstance(self.code, Enum) else str(
		    self.code)

	def format(self) -> str:
		"""Render the error the way the CLI prints it."""
		return f"error: {self.code_value}\n{self.message}"

	def __repr__(self) -> str:
		return f"MdError({self.code_value!r}, {self.message!r})"


def section_not_found(id: str, file: str | None = None) -> MdError:
	"""Build the error raised when an id does not resolve."""
	where = f" in {file}" if file else ""
	return MdError(ErrorCode.SECTION_NOT_FOUND,
	               f"No section with id '{id}'{where}",
	               file=file,
	               id=id)


__all__ = ["ErrorCode", "MdError", "section_not_found"]
