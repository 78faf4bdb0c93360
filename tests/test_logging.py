"""Tests for the logging module."""

from __future__ import annotations

import logging

from markdown_surgeon.utils.logging import (
	LOG_FORMAT,
	configure_logging,
	get_logger,
)


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
	return [h for h in logger.handlers if h.get_name() == "markdown_surgeon"]


class TestConfigureLogging:
	"""Tests for configure_logging()."""

	def test_installs_single_handler(self) -> None:
		"""Repeated calls don't add duplicate handlers."""
		configure_logging("info")
		configure_logging("info")
		pkg = logging.getLogger("markdown_surgeon")
		assert len(_own_handlers(pkg)) == 1

	def test_sets_level(self) -> None:
		"""Level strings are case-insensitive."""
		configure_logging("DEBUG")
		pkg = logging.getLogger("markdown_surgeon")
		assert pkg.level == logging.DEBUG
		assert _own_handlers(pkg)[0].level == logging.DEBUG
		configure_logging("warning")
		assert pkg.level == logging.WARNING

	def test_unknown_level_defaults_to_warning(self) -> None:
		configure_logging("chatty")
		assert logging.getLogger("markdown_surgeon").level == logging.WARNING

	def test_handler_format(self) -> None:
		configure_logging("warning")
		pkg = logging.getLogger("markdown_surgeon")
		assert _own_handlers(pkg)[0].formatter._fmt == LOG_FORMAT


def test_get_logger_is_child_of_package() -> None:
	"""Module loggers propagate to the package logger."""
	log = get_logger("markdown_surgeon.core.parser")
	assert log.name == "markdown_surgeon.core.parser"
	assert log.name.startswith("markdown_surgeon.")
	assert log.propagate is True
