"""
Magic expression expansion.

Content written through the CLI may contain ``{date}``, ``{time}``,
``{datetime}`` (alias ``{dt}``), ``{datetime:short}`` (``{dt:short}``) and
``{meta:<path>}`` placeholders. Unknown expressions are left untouched.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping

from markdown_surgeon.loaders.frontmatter import format_value, get_nested_value

MAGIC_RE = re.compile(r"\{([^}]+)\}")


def _local_now() -> datetime:
	return datetime.now().astimezone()


def expand_magic(text: str,
                 meta: Mapping[str, Any] | None = None,
                 now: datetime | None = None) -> str:
	"""
	Replace magic placeholders in ``text``.

	Parameters:
		text: Input text.
		meta: Frontmatter mapping used by ``{meta:<path>}``; when None those
			placeholders are left as-is.
		now: Reference time (defaults to local now, timezone-aware).
	"""
	ts = now or _local_now()

	def _repl(m: re.Match[str]) -> str:
		expr = m.group(1).strip()
		if expr in ("datetime", "dt"):
			return ts.isoformat(timespec="seconds")
		if expr in ("datetime:short", "dt:short"):
			return ts.strftime("%Y-%m-%d %H:%M")
		if expr == "date":
			return ts.strftime("%Y-%m-%d")
		if expr == "time":
			return ts.strftime("%H:%M:%S")
		if expr.startswith("meta:") and meta is not None:
			key = expr[len("meta:"):].strip()
			if not key:
				return m.group(0)
			return format_value(get_nested_value(meta, key))
		return m.group(0)

	return MAGIC_RE.sub(_repl, text)


__all__ = ["expand_magic"]
