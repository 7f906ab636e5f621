#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for building the node tree from markdown text."""
# src/md2dom/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from md2dom.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_frontmatter : bool, default True
        Split a leading ``---`` YAML block off the text and store it as the
        document metadata.
    extract_summary : bool, default False
        Move the section under a ``# Summary`` heading into the metadata
        instead of rendering it.
    parse_attributes : bool, default True
        Apply ``{#id .class name=value}`` annotations to the block, heading or
        image they follow.

    """

    parse_frontmatter: bool = field(
        default=True,
        metadata={"help": "Parse YAML front matter into document metadata", "importance": "core"},
    )
    extract_summary: bool = field(
        default=False,
        metadata={"help": "Move the '# Summary' section into document metadata", "importance": "advanced"},
    )
    parse_attributes: bool = field(
        default=True,
        metadata={"help": "Apply {#id .class key=value} attribute annotations", "importance": "core"},
    )
