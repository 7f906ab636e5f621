#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/api.py
"""High-level conversion functions.

:func:`to_script` runs the whole pipeline: markdown text is parsed into the
node tree, which is rendered into a DOM-building script.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, Union

from md2dom.ast import Document
from md2dom.exceptions import ValidationError
from md2dom.options.markdown import MarkdownParserOptions
from md2dom.options.script import ScriptRendererOptions
from md2dom.parsers.markdown import MarkdownToAstConverter
from md2dom.renderers.script import ScriptRenderer

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, IO[bytes], IO[str], Document]


def _split_kwargs_for_parser_and_renderer(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split keyword options between parser and renderer by field name.

    Raises
    ------
    ValidationError
        If a keyword matches neither options class

    """
    parser_fields = {f.name for f in fields(MarkdownParserOptions)}
    renderer_fields = {f.name for f in fields(ScriptRendererOptions)}

    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    for key, value in kwargs.items():
        if key in parser_fields:
            parser_kwargs[key] = value
        elif key in renderer_fields:
            renderer_kwargs[key] = value
        else:
            raise ValidationError(f"Unknown option: {key}", parameter_name=key, parameter_value=value)
    return parser_kwargs, renderer_kwargs


def to_ast(source: Union[str, Path, bytes, IO[bytes], IO[str]], options: Optional[MarkdownParserOptions] = None) -> Document:
    """Parse markdown into a :class:`~md2dom.ast.Document`.

    Parameters
    ----------
    source : str, Path, bytes or file object
        Markdown text (str), raw bytes, a path or an open stream
    options : MarkdownParserOptions, optional
        Parser configuration

    """
    return MarkdownToAstConverter(options).parse(source)


def to_script(
    source: Source,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[ScriptRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Convert markdown, or an already built tree, to a DOM-building script.

    Parameters
    ----------
    source : str, Path, bytes, file object or Document
        Markdown text, a path or stream to read it from, or a node tree
    parser_options : MarkdownParserOptions, optional
        Parser configuration (ignored for Document input)
    renderer_options : ScriptRendererOptions, optional
        Renderer configuration
    kwargs : Any
        Individual option values, routed to the parser or renderer options by
        field name and overriding the given options objects

    Returns
    -------
    str
        Generated script

    Raises
    ------
    ValidationError
        If an option name or value is invalid
    ParsingError
        If the markdown or its front matter cannot be parsed
    RenderingError
        If the node tree is malformed

    Examples
    --------
    >>> script = to_script("# Hello", standalone=True, site_name="docs")
    >>> script.startswith("let site = {")
    True

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)

    try:
        if parser_kwargs:
            parser_options = (parser_options or MarkdownParserOptions()).create_updated(**parser_kwargs)
        if renderer_kwargs:
            renderer_options = (renderer_options or ScriptRendererOptions()).create_updated(**renderer_kwargs)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e

    if isinstance(source, Document):
        document = source
    else:
        document = to_ast(source, parser_options)

    return ScriptRenderer(renderer_options).render_to_string(document)
