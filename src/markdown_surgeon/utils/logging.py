"""
Logging configuration module.

Provides centralized logging setup for the md CLI. Log records always
go to stderr so they never mix with command output on stdout.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "markdown_surgeon"


def _resolve_level(level: str | int) -> int:
	if isinstance(level, int):
		return level
	return logging._nameToLevel.get(level.upper(), logging.WARNING)


def configure_logging(level: str | int = "warning") -> None:
	"""
	Configure the package logger with level and format.

	Installs a single stderr handler on the ``markdown_surgeon`` logger;
	repeated calls only adjust the level.

	Parameters:
		level: Log level string (e.g., "info", "debug", "warning").
	"""
	lvl = _resolve_level(level)
	pkg_logger = logging.getLogger("markdown_surgeon")
	pkg_logger.setLevel(lvl)
	# Avoid adding duplicate handlers on repeated calls
	if not any(h.get_name() == _HANDLER_NAME for h in pkg_logger.handlers):
		handler = logging.StreamHandler(sys.stderr)
		handler.set_name(_HANDLER_NAME)
		handler.setFormatter(logging.Formatter(LOG_FORMAT))
		pkg_logger.addHandler(handler)
	for h in pkg_logger.handlers:
		if h.get_name() == _HANDLER_NAME:
			h.setLevel(lvl)


def get_logger(name: str) -> logging.Logger:
	"""
	Get a logger for the specified module.

	Parameters:
		name: The logger name, typically __name__.

	Returns:
		Logger instance.
	"""
	return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "LOG_FORMAT"]
