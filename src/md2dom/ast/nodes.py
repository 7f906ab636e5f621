#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/ast/nodes.py
"""AST node classes for the script-building renderer.

This module defines the closed node vocabulary that the renderer accepts. The
kinds mirror the block and inline structure produced by a CommonMark parser:
every node carries an ordered list of children, a non-owning reference to its
parent, a kind-specific payload and a mutable bag of attributes that earlier
passes (attribute extensions, the markdown adapter) may fill in.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Heading, Blockquote, CodeBlock, FencedCodeBlock, HTMLBlock
    - List, ListItem, Paragraph, TextBlock, ThematicBreak

Inline nodes:
    - AutoLink, CodeSpan, Emphasis, Image, Link, RawHTML, Text, String

Parent references are maintained by the containers: children passed to a
constructor, or added later with :meth:`Node.append_child`, are re-parented
automatically.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, Literal, Optional, Union

AttributeValue = Union[bytes, str, int]
AutoLinkType = Literal["url", "email"]


class NodeKind(Enum):
    """Kinds of nodes the renderer knows how to dispatch."""

    DOCUMENT = "Document"
    HEADING = "Heading"
    BLOCKQUOTE = "Blockquote"
    CODE_BLOCK = "CodeBlock"
    FENCED_CODE_BLOCK = "FencedCodeBlock"
    HTML_BLOCK = "HTMLBlock"
    LIST = "List"
    LIST_ITEM = "ListItem"
    PARAGRAPH = "Paragraph"
    TEXT_BLOCK = "TextBlock"
    THEMATIC_BREAK = "ThematicBreak"
    AUTO_LINK = "AutoLink"
    CODE_SPAN = "CodeSpan"
    EMPHASIS = "Emphasis"
    IMAGE = "Image"
    LINK = "Link"
    RAW_HTML = "RawHTML"
    TEXT = "Text"
    STRING = "String"

    def __str__(self) -> str:
        return self.value


BLOCK_KINDS = frozenset(
    {
        NodeKind.DOCUMENT,
        NodeKind.HEADING,
        NodeKind.BLOCKQUOTE,
        NodeKind.CODE_BLOCK,
        NodeKind.FENCED_CODE_BLOCK,
        NodeKind.HTML_BLOCK,
        NodeKind.LIST,
        NodeKind.LIST_ITEM,
        NodeKind.PARAGRAPH,
        NodeKind.TEXT_BLOCK,
        NodeKind.THEMATIC_BREAK,
    }
)

INLINE_KINDS = frozenset(set(NodeKind) - BLOCK_KINDS)


def _check_attribute_value(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (bytes, str, int)):
        raise TypeError(f"Attribute '{name}' must be bytes, str or int, got {type(value).__name__}")


def format_attribute_value(value: AttributeValue) -> str:
    """Return the textual form of an attribute value.

    Byte sequences are decoded as UTF-8 (invalid bytes are replaced), strings
    are returned unchanged and integers are written as base-10 digits.

    Examples
    --------
    >>> format_attribute_value(b"intro")
    'intro'
    >>> format_attribute_value(-12)
    '-12'

    """
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return "%d" % value
    raise TypeError(f"Unsupported attribute value type: {type(value).__name__}")


@dataclass(eq=False)
class Node:
    """Base class for all AST nodes.

    Nodes compare by identity: the renderer keys its identifier side-table on
    node identity, so two structurally equal nodes are still distinct
    elements in the emitted script.

    Parameters
    ----------
    children : list of Node, default = empty list
        Ordered child nodes (empty for leaves)
    attributes : dict, default = empty dict
        Attribute bag; keys are case-sensitive and unique, insertion order is
        preserved and is the order in which attributes are emitted

    """

    kind: ClassVar[NodeKind]

    children: list[Node] = field(default_factory=list)
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    parent: Optional[Node] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        for name, value in self.attributes.items():
            _check_attribute_value(name, value)
        for child in self.children:
            child.parent = self

    def append_child(self, child: Node) -> Node:
        """Append ``child`` and make this node its parent.

        Returns
        -------
        Node
            The appended child, for chaining.

        """
        if child.parent is not None and child.parent is not self:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def set_attribute(self, name: str, value: AttributeValue) -> None:
        """Set an attribute, keeping the position of an existing key."""
        _check_attribute_value(name, value)
        self.attributes[name] = value

    def get_attribute(self, name: str, default: Optional[AttributeValue] = None) -> Optional[AttributeValue]:
        return self.attributes.get(name, default)

    @property
    def first_child(self) -> Optional[Node]:
        return self.children[0] if self.children else None

    @property
    def next_sibling(self) -> Optional[Node]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[index + 1] if index + 1 < len(siblings) else None
        return None

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant in document order."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def payload(self) -> dict[str, Any]:
        """Return the kind-specific fields of this node (used by dumps)."""
        return {}


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass(eq=False)
class Document(Node):
    """Root document node.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Document metadata (front matter fields); never rendered

    """

    kind = NodeKind.DOCUMENT

    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class Heading(Node):
    """Heading node (h1-h6)."""

    kind = NodeKind.HEADING

    level: int = 1

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")
        super().__post_init__()

    def payload(self) -> dict[str, Any]:
        return {"level": self.level}


@dataclass(eq=False)
class Blockquote(Node):
    """Block quote containing other block nodes."""

    kind = NodeKind.BLOCKQUOTE


@dataclass(eq=False)
class CodeBlock(Node):
    """Indented code block.

    Parameters
    ----------
    lines : list of str, default = empty list
        Raw code lines, each including its line terminator

    """

    kind = NodeKind.CODE_BLOCK

    lines: list[str] = field(default_factory=list)

    @property
    def code(self) -> str:
        return "".join(self.lines)

    def payload(self) -> dict[str, Any]:
        return {"lines": len(self.lines)}


@dataclass(eq=False)
class FencedCodeBlock(CodeBlock):
    """Fenced code block with an optional info string language."""

    kind = NodeKind.FENCED_CODE_BLOCK

    language: Optional[str] = None

    def payload(self) -> dict[str, Any]:
        return {"lines": len(self.lines), "language": self.language}


@dataclass(eq=False)
class HTMLBlock(Node):
    """Raw HTML block.

    Parameters
    ----------
    lines : list of str, default = empty list
        Raw HTML lines
    closure_line : str or None, default = None
        Closing line of the block, when the block type has one

    """

    kind = NodeKind.HTML_BLOCK

    lines: list[str] = field(default_factory=list)
    closure_line: Optional[str] = None

    @property
    def has_closure(self) -> bool:
        return self.closure_line is not None

    @property
    def content(self) -> str:
        return "".join(self.lines) + (self.closure_line or "")

    def payload(self) -> dict[str, Any]:
        return {"lines": len(self.lines), "closure": self.has_closure}


@dataclass(eq=False)
class List(Node):
    """Ordered or bullet list.

    Parameters
    ----------
    ordered : bool, default = False
        True for ordered (numbered) lists
    start : int, default = 1
        First number of an ordered list
    tight : bool, default = True
        Whether the items are separated by blank lines

    """

    kind = NodeKind.LIST

    ordered: bool = False
    start: int = 1
    tight: bool = True

    def payload(self) -> dict[str, Any]:
        return {"ordered": self.ordered, "start": self.start, "tight": self.tight}


@dataclass(eq=False)
class ListItem(Node):
    """Single list item containing block nodes."""

    kind = NodeKind.LIST_ITEM


@dataclass(eq=False)
class Paragraph(Node):
    """Paragraph containing inline nodes."""

    kind = NodeKind.PARAGRAPH


@dataclass(eq=False)
class TextBlock(Node):
    """Inline content of a tight list item, without a paragraph wrapper."""

    kind = NodeKind.TEXT_BLOCK


@dataclass(eq=False)
class ThematicBreak(Node):
    """Thematic break (horizontal rule)."""

    kind = NodeKind.THEMATIC_BREAK


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass(eq=False)
class AutoLink(Node):
    """Autolink such as ``<https://example.com>`` or ``<user@example.com>``."""

    kind = NodeKind.AUTO_LINK

    url: str = ""
    link_type: AutoLinkType = "url"
    label: Optional[str] = None

    @property
    def text(self) -> str:
        return self.label if self.label is not None else self.url

    def payload(self) -> dict[str, Any]:
        return {"url": self.url, "type": self.link_type}


@dataclass(eq=False)
class CodeSpan(Node):
    """Inline code; its children are Text or String nodes."""

    kind = NodeKind.CODE_SPAN


@dataclass(eq=False)
class Emphasis(Node):
    """Emphasis: level 1 renders as ``em``, level 2 as ``strong``."""

    kind = NodeKind.EMPHASIS

    level: int = 1

    def __post_init__(self) -> None:
        if self.level not in (1, 2):
            raise ValueError(f"Emphasis level must be 1 or 2, got {self.level}")
        super().__post_init__()

    @property
    def tag(self) -> str:
        return "strong" if self.level == 2 else "em"

    def payload(self) -> dict[str, Any]:
        return {"level": self.level}


@dataclass(eq=False)
class Link(Node):
    """Hyperlink with inline content.

    Parameters
    ----------
    destination : str, default = ''
        Link target
    title : str or None, default = None
        Optional title (tooltip)

    """

    kind = NodeKind.LINK

    destination: str = ""
    title: Optional[str] = None

    def payload(self) -> dict[str, Any]:
        return {"destination": self.destination, "title": self.title}


@dataclass(eq=False)
class Image(Node):
    """Image; its children hold the alternative text."""

    kind = NodeKind.IMAGE

    destination: str = ""
    title: Optional[str] = None

    def payload(self) -> dict[str, Any]:
        return {"destination": self.destination, "title": self.title}


@dataclass(eq=False)
class RawHTML(Node):
    """Inline raw HTML, kept as the list of source segments."""

    kind = NodeKind.RAW_HTML

    segments: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "".join(self.segments)

    def payload(self) -> dict[str, Any]:
        return {"segments": len(self.segments)}


@dataclass(eq=False)
class Text(Node):
    """Plain text segment.

    Parameters
    ----------
    content : str, default = ''
        Text of the segment
    soft_line_break : bool, default = False
        The segment is followed by a soft line break
    hard_line_break : bool, default = False
        The segment is followed by a hard line break
    raw : bool, default = False
        The segment must be written as-is

    """

    kind = NodeKind.TEXT

    content: str = ""
    soft_line_break: bool = False
    hard_line_break: bool = False
    raw: bool = False

    def payload(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "soft_line_break": self.soft_line_break,
            "hard_line_break": self.hard_line_break,
        }


@dataclass(eq=False)
class String(Node):
    """Literal string produced by a parser extension (not split into segments)."""

    kind = NodeKind.STRING

    value: str = ""
    code: bool = False
    raw: bool = False

    def payload(self) -> dict[str, Any]:
        return {"value": self.value, "code": self.code}


def plain_text(node: Node) -> str:
    """Concatenate the text of all Text and String descendants of ``node``.

    Used for the ``alt`` text of images.

    Examples
    --------
    >>> plain_text(Image(destination="a.png", children=[Text(content="a "), Emphasis(children=[Text(content="b")])]))
    'a b'

    """
    parts: list[str] = []
    for child in node.children:
        if isinstance(child, Text):
            parts.append(child.content)
        elif isinstance(child, String):
            parts.append(child.value)
        else:
            parts.append(plain_text(child))
    return "".join(parts)
