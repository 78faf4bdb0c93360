from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional

import typer
from rich.console import Console
from typer.main import get_command

from markdown_surgeon.core import (
    aggregate_meta,
    append_section,
    build_document,
    collect_meta_values,
    concat,
    count_meta,
    delete_frontmatter,
    empty_section,
    ensure_valid_id,
    expand_magic,
    first_h1,
    get_frontmatter,
    get_frontmatter_content,
    is_valid_id,
    parse_document,
    read_section,
    remove_section,
    require_section,
    search,
    set_frontmatter,
    subsections,
    write_section,
)
from markdown_surgeon.errors import ErrorCode, MdError
from markdown_surgeon.loaders.files import (
    expand_file_patterns,
    read_text_file,
    write_text_file,
)
from markdown_surgeon.loaders.frontmatter import (
    coerce_value,
    format_value,
    get_nested_value,
    set_nested_value,
)
from markdown_surgeon.models.config import Config, load_env
from markdown_surgeon.models.document import Document
from markdown_surgeon.models.results import MutationResult
from markdown_surgeon.ui import formatting as fmt
from markdown_surgeon.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

cli = typer.Typer(add_completion=False,
                  no_args_is_help=True,
                  help="Surgical section-level editing of Markdown files.")

err_console = Console(stderr=True)

_config: Config | None = None


def get_config() -> Config:
	"""Return the process configuration, loading it on first use."""
	global _config
	if _config is None:
		load_env()
		_config = Config()
	return _config


@cli.callback()
def root(log_level: str = typer.Option(
    None, "--log-level", help="Override MD_LOG_LEVEL")) -> None:
	"""
	Root callback for the md CLI.

	Loads configuration and sets up logging before any command runs.
	"""
	config = get_config()
	config.apply_overrides(log_level=log_level)
	configure_logging(config.log_level)


def _run(fn: Callable[[], str]) -> None:
	"""Run a command body, echo its output and map MdError to exit 1."""
	try:
		output = fn()
	except MdError as e:
		logger.debug("command failed: %r", e)
		err_console.print(e.format(), markup=False, highlight=False,
		                  soft_wrap=True)
		raise typer.Exit(1)
	if output:
		typer.echo(output)


def _use_json(flag: bool) -> bool:
	return flag or get_config().json_output


def _content_or_stdin(content: Optional[str]) -> str:
	return content if content is not None else sys.stdin.read()


def _load(file: str) -> Document:
	return parse_document(read_text_file(file))


def _mutation_output(file: str, text: str, result: MutationResult,
                     json_out: bool) -> str:
	write_text_file(file, text)
	return fmt.json_mutation(result) if json_out else fmt.format_mutation(result)


# Command implementations


def outline_impl(file: str,
                 after: str | None = None,
                 last: bool = False,
                 count: bool = False,
                 json_out: bool = False) -> str:
	"""List sections, optionally only those nested under ``after``."""
	doc = _load(file)
	sections = list(doc.sections)
	if after:
		parent = require_section(doc, ensure_valid_id(after, file), file)
		sections = subsections(doc, parent)

	if count:
		return fmt.json_count(len(sections)) if json_out else str(len(sections))
	if last:
		tail = sections[-1] if sections else None
		return fmt.json_section(tail) if json_out else fmt.format_section(tail)
	return fmt.json_outline(sections) if json_out else fmt.format_outline(
	    sections)


def read_impl(file: str, id: str, deep: bool = False,
              json_out: bool = False) -> str:
	section_id = ensure_valid_id(id, file)
	doc = _load(file)
	require_section(doc, section_id, file)
	result = read_section(doc, section_id, deep)
	return fmt.json_read(result) if json_out else fmt.format_read(result)


def write_impl(file: str,
               id: str,
               content: str,
               deep: bool = False,
               json_out: bool = False) -> str:
	section_id = ensure_valid_id(id, file)
	doc = _load(file)
	require_section(doc, section_id, file)
	expanded = expand_magic(content, get_frontmatter(doc))
	text, result = write_section(doc, section_id, expanded, deep)
	return _mutation_output(file, text, result, json_out)


def append_impl(file: str,
                id: str | None,
                content: str,
                deep: bool = False,
                before: bool = False,
                json_out: bool = False) -> str:
	doc = _load(file)
	if id is not None:
		id = ensure_valid_id(id, file)
		require_section(doc, id, file)
	expanded = expand_magic(content, get_frontmatter(doc))
	text, result = append_section(doc, id, expanded, deep=deep, before=before)
	return _mutation_output(file, text, result, json_out)


def empty_impl(file: str, id: str, deep: bool = False,
               json_out: bool = False) -> str:
	section_id = ensure_valid_id(id, file)
	doc = _load(file)
	require_section(doc, section_id, file)
	text, result = empty_section(doc, section_id, deep)
	return _mutation_output(file, text, result, json_out)


def remove_impl(file: str, id: str, json_out: bool = False) -> str:
	section_id = ensure_valid_id(id, file)
	doc = _load(file)
	require_section(doc, section_id, file)
	text, result = remove_section(doc, section_id)
	return _mutation_output(file, text, result, json_out)


def search_impl(file: str,
                pattern: str,
                summary: bool = False,
                json_out: bool = False) -> str:
	matches, summaries = search(_load(file), pattern)
	if summary:
		return (fmt.json_search_summary(summaries)
		        if json_out else fmt.format_search_summary(summaries))
	return (fmt.json_search_matches(matches)
	        if json_out else fmt.format_search_matches(matches))


def concat_impl(files: List[str], shift: int = 0) -> str:
	paths = expand_file_patterns(files, get_config().extensions)
	return concat([_load(p) for p in paths], shift)


def _split_fields(fields: str) -> list[str]:
	return [f.strip() for f in fields.split(",") if f.strip()]


def _load_many(patterns: List[str]) -> list[Document]:
	docs = []
	for path in expand_file_patterns(patterns, get_config().extensions):
		try:
			docs.append(_load(path))
		except MdError as e:
			logger.warning("skipping %s: %s", path, e.message)
	return docs


def meta_impl(
    targets: List[str],
    set_: bool = False,
    delete: bool = False,
    h1: bool = False,
    list_fields: str | None = None,
    aggregate_fields: str | None = None,
    count_fields: str | None = None,
    json_out: bool = False,
) -> str:
	"""Frontmatter access for one file, or extraction across many."""
	multi = next((opt for opt in (list_fields, aggregate_fields, count_fields)
	              if opt is not None), None)
	if multi is not None:
		if set_ or delete:
			raise MdError(ErrorCode.PARSE_ERROR,
			              "Cannot use --set/--del with --list, --aggregate or --count")
		docs = _load_many(targets)
		fields = _split_fields(multi)
		if list_fields is not None:
			values = collect_meta_values(docs, fields)
			return fmt.json_value(values) if json_out else fmt.format_values(
			    values)
		if aggregate_fields is not None:
			counts = aggregate_meta(docs, fields)
			return fmt.json_aggregate(counts) if json_out else fmt.format_aggregate(
			    counts)
		totals = count_meta(docs, fields)
		return fmt.json_counts(totals) if json_out else fmt.format_counts(totals)

	file, args = targets[0], targets[1:]
	if len(args) > 2:
		raise MdError(ErrorCode.PARSE_ERROR,
		              "Multiple files require --list, --aggregate, or --count flag")
	key = args[0] if args else None
	value = args[1] if len(args) > 1 else None
	doc = _load(file)

	if h1:
		return first_h1(doc) or ""

	if delete:
		if key is None:
			raise MdError(ErrorCode.PARSE_ERROR, "Usage: md meta <file> --del <key>")
		write_text_file(file, delete_frontmatter(doc, key))
		return f"deleted {key}"

	if set_ or value is not None:
		if key is None or value is None:
			raise MdError(ErrorCode.PARSE_ERROR,
			              "Usage: md meta <file> --set <key> <value>")
		expanded = expand_magic(value, get_frontmatter(doc))
		write_text_file(file, set_frontmatter(doc, key, coerce_value(expanded)))
		return f"set {key}"

	if key is not None:
		val = get_nested_value(get_frontmatter(doc), key)
		return fmt.json_value(val) if json_out else format_value(val)

	if json_out:
		return fmt.json_value(get_frontmatter(doc))
	return get_frontmatter_content(doc)


def _parse_meta_option(value: str) -> tuple[str, str]:
	key, sep, val = value.partition("=")
	if not sep or not key:
		raise MdError(ErrorCode.PARSE_ERROR,
		              f"Invalid --meta format: {value}. Expected key=value")
	return key, val


def create_impl(file: str,
                title: str | None = None,
                meta: List[str] | None = None,
                force: bool = False,
                content: str | None = None) -> str:
	"""Create a new document with optional frontmatter, title and body."""
	if Path(file).exists() and not force:
		raise MdError(ErrorCode.IO_ERROR,
		              f"File already exists: {file}. Use --force to overwrite.",
		              file=file)
	values: dict = {}
	for raw in meta or []:
		key, val = _parse_meta_option(raw)
		set_nested_value(values, key, expand_magic(val, values))
	text = build_document(
	    title=expand_magic(title, values) if title else None,
	    meta=values,
	    content=expand_magic(content, values) if content else None,
	)
	write_text_file(file, text)
	return f"created {file}"


# Typer commands


@cli.command()
def outline(
    file: str,
    after: str = typer.Option(None, "--after",
                              help="Only subsections of this section ID"),
    last: bool = typer.Option(False, "--last",
                              help="Show only the last section"),
    count: bool = typer.Option(False, "--count", help="Show count only"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""List sections in a Markdown file."""
	_run(lambda: outline_impl(file, after, last, count, _use_json(json_out)))


@cli.command()
def read(
    file: str,
    id: str,
    deep: bool = typer.Option(False, "--deep", help="Include subsections"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Read section content."""
	_run(lambda: read_impl(file, id, deep, _use_json(json_out)))


@cli.command()
def write(
    file: str,
    id: str,
    content: Optional[str] = typer.Argument(
        None, help="New content (read from stdin when omitted)"),
    deep: bool = typer.Option(False, "--deep",
                              help="Replace including subsections"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Replace section content."""
	_run(lambda: write_impl(file, id, _content_or_stdin(content), deep,
	                        _use_json(json_out)))


@cli.command()
def append(
    file: str,
    id_or_content: Optional[str] = typer.Argument(
        None, metavar="[ID]", help="Section ID; omit to target the document"),
    content: Optional[str] = typer.Argument(
        None, help="Content (read from stdin when omitted)"),
    deep: bool = typer.Option(False, "--deep",
                              help="Append after subsections"),
    before: bool = typer.Option(False, "--before",
                                help="Insert before the section heading"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Append content to a section or to the document."""
	has_id = id_or_content is not None and is_valid_id(id_or_content)
	# two positionals always mean ID + content; a bad ID is reported
	if has_id or content is not None:
		section_id, body = id_or_content, content
	else:
		section_id, body = None, id_or_content
	_run(lambda: append_impl(file, section_id, _content_or_stdin(body), deep,
	                         before, _use_json(json_out)))


@cli.command()
def empty(
    file: str,
    id: str,
    deep: bool = typer.Option(False, "--deep",
                              help="Also empty subsections"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Empty a section, keeping its heading."""
	_run(lambda: empty_impl(file, id, deep, _use_json(json_out)))


@cli.command()
def remove(
    file: str,
    id: str,
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Remove a section and its subsections."""
	_run(lambda: remove_impl(file, id, _use_json(json_out)))


@cli.command(name="search")
def search_cmd(
    file: str,
    pattern: str,
    summary: bool = typer.Option(False, "--summary",
                                 help="Group results by section"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Search for a pattern in a file."""
	_run(lambda: search_impl(file, pattern, summary, _use_json(json_out)))


@cli.command(name="concat")
def concat_cmd(
    files: List[str] = typer.Argument(..., help="Files or glob patterns"),
    shift: Optional[int] = typer.Option(
        None, "-s", "--shift", min=0, help="Shift heading levels by N"),
) -> None:
	"""Concatenate Markdown files."""
	level_shift = shift if shift is not None else get_config().concat_shift
	_run(lambda: concat_impl(files, level_shift))


@cli.command()
def meta(
    targets: List[str] = typer.Argument(..., metavar="FILE [KEY [VALUE]]"),
    set_: bool = typer.Option(False, "--set", help="Set KEY to VALUE"),
    delete: bool = typer.Option(False, "--del", help="Delete KEY"),
    h1: bool = typer.Option(False, "--h1", help="Print the H1 title"),
    list_fields: str = typer.Option(
        None, "--list", help="List FIELDS across files (with duplicates)"),
    aggregate_fields: str = typer.Option(
        None, "--aggregate", help="Unique values of FIELDS with counts"),
    count_fields: str = typer.Option(
        None, "--count", help="Total number of values of FIELDS"),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
	"""Manage YAML frontmatter."""
	_run(lambda: meta_impl(targets, set_, delete, h1, list_fields,
	                       aggregate_fields, count_fields, _use_json(json_out)))


@cli.command()
def create(
    file: str,
    content: Optional[str] = typer.Argument(None, help="Initial content"),
    title: str = typer.Option(None, "--title", help="Set the H1 title"),
    meta: Optional[List[str]] = typer.Option(
        None, "--meta", help="Frontmatter key=value (repeatable)"),
    force: bool = typer.Option(False, "--force",
                               help="Overwrite an existing file"),
) -> None:
	"""Create a new Markdown file."""
	_run(lambda: create_impl(file, title, meta, force, content))


def entrypoint(argv=None, *, standalone_mode: bool = True):
	"""
	Console script entrypoint for ``md``.

	Parameters:
		argv: Command-line arguments. Defaults to sys.argv[1:].
		standalone_mode: If True, Click handles exit codes.

	Returns:
		Result of the Click application main invocation.
	"""
	args = sys.argv[1:] if argv is None else list(argv)
	return get_command(cli).main(
	    args=args,
	    prog_name="md",
	    standalone_mode=standalone_mode,
	)


if __name__ == "__main__":
	entrypoint()
