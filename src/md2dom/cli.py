#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/cli.py
"""Command-line interface for md2dom.

Usage::

    md2dom README.md -o readme.js
    md2dom notes.md --style theme.js --site site.js --site-name notes
    cat notes.md | md2dom - --unsafe
    md2dom notes.md --dump-ast

The generated script is always a complete script: the site object, its
``render`` function holding the style sheet and the document body, then the
optional site script.

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from md2dom import __version__
from md2dom.constants import DEFAULT_CONTAINER_STYLE, DEFAULT_SITE_NAME, DEFAULT_STYLE_OBJECT, DEFAULT_STYLE_SHEET
from md2dom.exceptions import DependencyError, ParsingError, RenderingError, ValidationError
from md2dom.logging_utils import configure_logging
from md2dom.options import MarkdownParserOptions, ScriptRendererOptions
from md2dom.parsers.markdown import MarkdownToAstConverter
from md2dom.renderers.script import ScriptRenderer
from md2dom.utils.io_utils import write_content

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the ``md2dom`` command."""
    parser = argparse.ArgumentParser(
        prog="md2dom",
        description="Render markdown as a script that builds the document in the DOM.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Exit codes:\n"
            "  0  success\n"
            "  1  parsing or rendering failed\n"
            "  2  invalid arguments or unreadable input"
        ),
    )
    parser.add_argument("input", help="Markdown file to convert (use '-' for stdin)")
    parser.add_argument("--out", "-o", dest="output", help="Output file path (default: print to stdout)")
    parser.add_argument("--version", "-v", action="version", version=f"md2dom {__version__}")

    style_group = parser.add_argument_group("script options")
    style_group.add_argument("--style", metavar="FILE", help="Script file defining the style object")
    style_group.add_argument(
        "--no-style",
        action="store_true",
        help="Emit no style sheet and no style assignments",
    )
    style_group.add_argument(
        "--style-object",
        metavar="NAME",
        default=DEFAULT_STYLE_OBJECT,
        help=f"Name of the style object (default: {DEFAULT_STYLE_OBJECT})",
    )
    style_group.add_argument("--site", metavar="FILE", help="Script file appended after the render function")
    style_group.add_argument(
        "--site-name",
        default=None,
        help=f"Site name (default: front matter 'name', else {DEFAULT_SITE_NAME})",
    )
    style_group.add_argument(
        "--unsafe",
        action="store_true",
        help="Emit dangerous URLs and pass raw HTML through innerHTML",
    )
    style_group.add_argument(
        "--debug",
        action="store_true",
        help="Emit a debug comment before every attachment statement",
    )

    parse_group = parser.add_argument_group("markdown options")
    parse_group.add_argument("--no-frontmatter", action="store_true", help="Do not parse YAML front matter")
    parse_group.add_argument("--summary", action="store_true", help="Split off the '# Summary' section")
    parse_group.add_argument(
        "--no-attributes",
        action="store_true",
        help="Do not apply {#id .class key=value} annotations",
    )
    parse_group.add_argument("--dump-ast", action="store_true", help="Print the parsed node tree and exit")

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    log_group.add_argument("--log-file", help="Also write log messages to this file")
    log_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace wins over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_optional_file(path: Optional[str], what: str) -> Optional[str]:
    if path is None:
        return None
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Cannot read {what} file {path}: {e}", parameter_name=what, parameter_value=path) from e


def _read_input(source: str) -> str:
    try:
        if source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Cannot read input file {source}: {e}", parameter_name="input", parameter_value=source) from e


def _build_renderer_options(parsed_args: argparse.Namespace, site_name: str) -> ScriptRendererOptions:
    if parsed_args.no_style:
        style_sheet = None
        style_object = None
    else:
        style_sheet = _read_optional_file(parsed_args.style, "style") or DEFAULT_STYLE_SHEET
        style_object = parsed_args.style_object

    return ScriptRendererOptions(
        unsafe=parsed_args.unsafe,
        debug=parsed_args.debug,
        style_object=style_object,
        container_style=DEFAULT_CONTAINER_STYLE,
        standalone=True,
        site_name=site_name,
        style_sheet=style_sheet,
        site_script=_read_optional_file(parsed_args.site, "site"),
    )


def _write_output(script: str, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(script)
        return
    write_content(script, output)
    logger.info("Wrote %d characters to %s", len(script), output)


def main(args: list[str] | None = None) -> int:
    """Execute the ``md2dom`` command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # --help and --version exit with 0, usage errors with 2
        return e.code if isinstance(e.code, int) else EXIT_USAGE_ERROR

    _setup_logging_level(parsed_args)

    try:
        markdown_text = _read_input(parsed_args.input)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    parser_options = MarkdownParserOptions(
        parse_frontmatter=not parsed_args.no_frontmatter,
        extract_summary=parsed_args.summary,
        parse_attributes=not parsed_args.no_attributes,
    )

    try:
        document = MarkdownToAstConverter(parser_options).parse(markdown_text)
    except (ParsingError, DependencyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    metadata = document.metadata
    if metadata.get("title"):
        logger.info("Title: %s", metadata["title"])
    if metadata.get("author"):
        logger.info("Author: %s", metadata["author"])

    if parsed_args.dump_ast:
        from rich.console import Console

        from md2dom.ast.dump import build_rich_tree

        Console().print(build_rich_tree(document))
        return EXIT_SUCCESS

    site_name = parsed_args.site_name or metadata.get("name") or DEFAULT_SITE_NAME
    try:
        renderer_options = _build_renderer_options(parsed_args, str(site_name))
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except ValueError as e:
        print(f"Error: invalid option: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        script = ScriptRenderer(renderer_options).render_to_string(document)
        _write_output(script, parsed_args.output)
    except RenderingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS
