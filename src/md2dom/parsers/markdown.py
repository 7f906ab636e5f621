#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/parsers/markdown.py
"""Markdown to AST converter.

This module builds the md2dom node tree from markdown text using the mistune
parser: mistune produces its token stream and every token is mapped onto the
closed node vocabulary of :mod:`md2dom.ast.nodes`.

Notable mappings:

- ``block_text`` (the content of a tight list item) becomes a TextBlock
- fenced and indented code become FencedCodeBlock and CodeBlock
- a ``<...>`` autolink becomes an AutoLink
- text has its entity references decoded
- soft and hard breaks become flags on the preceding Text

"""

from __future__ import annotations

import html
import logging
from typing import Any, Callable, Optional
from urllib.parse import unquote

from md2dom.ast import (
    AutoLink,
    Blockquote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    Image,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    RawHTML,
    Text,
    TextBlock,
    ThematicBreak,
)
from md2dom.constants import DEPS_MARKDOWN
from md2dom.exceptions import ParsingError
from md2dom.frontmatter import read_sections
from md2dom.options.markdown import MarkdownParserOptions
from md2dom.parsers.attributes import apply_attribute_annotations
from md2dom.parsers.base import BaseParser, ParserInput
from md2dom.utils.decorators import requires_dependencies
from md2dom.utils.security import sanitize_language_identifier

logger = logging.getLogger(__name__)

Token = dict[str, Any]


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to the md2dom node tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("## Title\n\nSome *text*.")
        >>> [str(child.kind) for child in doc.children]
        ['Heading', 'Paragraph']

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._source = ""

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: ParserInput) -> Document:
        """Parse Markdown input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, bytes or file object
            Markdown text, or a path or stream to read it from

        Returns
        -------
        Document
            Document node; its metadata holds the front matter fields

        Raises
        ------
        ParsingError
            If the front matter or the token stream cannot be processed

        """
        markdown_content = self._load_text_content(input_data)
        metadata, body = read_sections(
            markdown_content,
            parse_frontmatter=self.options.parse_frontmatter,
            summary=self.options.extract_summary,
        )

        import mistune

        markdown = mistune.create_markdown(renderer=None)
        self._source = body
        tokens, _state = markdown.parse(body)
        if not isinstance(tokens, list):
            raise ParsingError("Unexpected token stream from mistune", parsing_stage="markdown")

        try:
            children = self._process_tokens(tokens)
        except (KeyError, TypeError, ValueError) as e:
            raise ParsingError(f"Malformed markdown token: {e}", parsing_stage="markdown", original_error=e) from e

        document = Document(children=children, metadata=metadata.to_dict())
        if self.options.parse_attributes:
            apply_attribute_annotations(document)
        logger.debug("Parsed markdown into %d top-level nodes", len(document.children))
        return document

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[Token]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: Token) -> Optional[Node]:
        token_type = token.get("type", "")
        handler = self._block_handlers().get(token_type)
        if handler is not None:
            return handler(token)
        if token_type != "blank_line":
            logger.debug("Skipping unsupported block token: %s", token_type)
        return None

    def _block_handlers(self) -> dict[str, Callable[[Token], Node]]:
        return {
            "heading": self._process_heading,
            "paragraph": self._process_paragraph,
            "block_text": self._process_block_text,
            "block_code": self._process_code_block,
            "block_quote": self._process_block_quote,
            "list": self._process_list,
            "list_item": self._process_list_item,
            "thematic_break": lambda token: ThematicBreak(),
            "block_html": self._process_html_block,
        }

    def _process_heading(self, token: Token) -> Heading:
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, children=self._process_inline_tokens(token.get("children", [])))

    def _process_paragraph(self, token: Token) -> Paragraph:
        return Paragraph(children=self._process_inline_tokens(token.get("children", [])))

    def _process_block_text(self, token: Token) -> TextBlock:
        return TextBlock(children=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: Token) -> CodeBlock:
        code_content = token.get("raw", "")
        # mistune drops the final newline of indented code at end of input
        if code_content and not code_content.endswith("\n"):
            code_content += "\n"
        lines = code_content.splitlines(keepends=True)
        if token.get("style") != "fenced":
            return CodeBlock(lines=lines)

        attrs = token.get("attrs") or {}
        info_string = (attrs.get("info") or "").strip()
        language = sanitize_language_identifier(info_string.split(maxsplit=1)[0]) if info_string else ""
        return FencedCodeBlock(lines=lines, language=language or None)

    def _process_block_quote(self, token: Token) -> Blockquote:
        return Blockquote(children=self._process_tokens(token.get("children", [])))

    def _process_list(self, token: Token) -> List:
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = token.get("tight", attrs.get("tight", True))
        items = [
            self._process_list_item(child)
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") == "list_item"
        ]
        return List(children=list(items), ordered=ordered, start=start if isinstance(start, int) else 1, tight=tight)

    def _process_list_item(self, token: Token) -> ListItem:
        return ListItem(children=self._process_tokens(token.get("children", [])))

    def _process_html_block(self, token: Token) -> HTMLBlock:
        raw = token.get("raw", "")
        return HTMLBlock(lines=raw.splitlines(keepends=True))

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[Token]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            token_type = token.get("type", "")
            if token_type in ("softbreak", "linebreak"):
                self._mark_line_break(nodes, hard=token_type == "linebreak")
                continue

            handler = self._inline_handlers().get(token_type)
            if handler is None:
                logger.debug("Skipping unsupported inline token: %s", token_type)
                continue
            nodes.append(handler(token))
        return nodes

    def _inline_handlers(self) -> dict[str, Callable[[Token], Node]]:
        return {
            "text": self._handle_text_token,
            "emphasis": self._handle_emphasis_token,
            "strong": self._handle_strong_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "inline_html": self._handle_inline_html_token,
        }

    @staticmethod
    def _mark_line_break(nodes: list[Node], hard: bool) -> None:
        previous = nodes[-1] if nodes else None
        if not isinstance(previous, Text):
            previous = Text(content="")
            nodes.append(previous)
        if hard:
            previous.hard_line_break = True
        else:
            previous.soft_line_break = True

    def _handle_text_token(self, token: Token) -> Text:
        # mistune leaves entity references to its HTML renderer
        return Text(content=html.unescape(token.get("raw", "")))

    def _handle_emphasis_token(self, token: Token) -> Emphasis:
        return Emphasis(level=1, children=self._process_inline_tokens(token.get("children", [])))

    def _handle_strong_token(self, token: Token) -> Emphasis:
        return Emphasis(level=2, children=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: Token) -> CodeSpan:
        return CodeSpan(children=[Text(content=token.get("raw", ""))])

    def _handle_link_token(self, token: Token) -> Node:
        """Map a link token to a Link, or to an AutoLink for ``<...>`` links.

        mistune emits the same token for ``<https://x>`` and
        ``[https://x](https://x)``, so a link counts as an autolink only when
        its label equals its destination and ``<label>`` occurs in the source.
        An explicit link written next to an identical autolink in the same
        source is therefore also read as an autolink.
        """
        attrs = token.get("attrs") or {}
        url = attrs.get("url", "")
        children = token.get("children", [])

        # autolink labels are literal, entity references included
        label = _single_text(children)
        if label is not None and f"<{label}>" in self._source:
            if url == "mailto:" + label:
                return AutoLink(url=label, link_type="email", label=label)
            if label in (url, unquote(url)):
                return AutoLink(url=url, link_type="url", label=label)

        return Link(
            destination=url,
            title=attrs.get("title"),
            children=self._process_inline_tokens(children),
        )

    def _handle_image_token(self, token: Token) -> Image:
        attrs = token.get("attrs") or {}
        return Image(
            destination=attrs.get("url", ""),
            title=attrs.get("title"),
            children=self._process_inline_tokens(token.get("children", [])),
        )

    def _handle_inline_html_token(self, token: Token) -> RawHTML:
        return RawHTML(segments=[token.get("raw", "")])


def _single_text(children: list[Token]) -> Optional[str]:
    if len(children) == 1 and children[0].get("type") == "text":
        return children[0].get("raw", "")
    return None


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a Markdown string to a Document.

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse(markdown_content)
