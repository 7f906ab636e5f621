#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/ast/__init__.py
"""Node tree consumed by the md2dom script renderer.

The tree is produced by an external parser (see :mod:`md2dom.parsers.markdown`)
or built by hand, and walked by :func:`md2dom.ast.walk.walk`.

Examples
--------
    >>> from md2dom.ast import Document, Heading, Text
    >>> doc = Document(children=[Heading(level=2, children=[Text(content="Title")])])

"""

from md2dom.ast.dump import build_rich_tree, dump_tree
from md2dom.ast.nodes import (
    BLOCK_KINDS,
    INLINE_KINDS,
    AttributeValue,
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
    NodeKind,
    Paragraph,
    RawHTML,
    String,
    Text,
    TextBlock,
    ThematicBreak,
    format_attribute_value,
    plain_text,
)
from md2dom.ast.walk import WalkStatus, walk

__all__ = [
    "AttributeValue",
    "AutoLink",
    "BLOCK_KINDS",
    "Blockquote",
    "CodeBlock",
    "CodeSpan",
    "Document",
    "Emphasis",
    "FencedCodeBlock",
    "HTMLBlock",
    "Heading",
    "INLINE_KINDS",
    "Image",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeKind",
    "Paragraph",
    "RawHTML",
    "String",
    "Text",
    "TextBlock",
    "ThematicBreak",
    "WalkStatus",
    "build_rich_tree",
    "dump_tree",
    "format_attribute_value",
    "plain_text",
    "walk",
]
