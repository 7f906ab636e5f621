#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/parsers/attributes.py
"""Attribute annotations in markdown sources.

Attributes are written in braces and attached to the node they follow:

- a paragraph consisting of an annotation only, or the last line of a
  paragraph, applies to the preceding block (or that paragraph)::

      Some text
      {#intro .lead data-section=1}

- a heading may end with an annotation: ``## Setup {#setup}``
- an annotation right after an image applies to the image:
  ``![logo](logo.png){width=120 loading=lazy}``

An annotation holds ``#id``, ``.class`` (repeatable) and ``name=value`` pairs;
values may be quoted. Integer values are stored as integers. Existing
attributes of the target node are never overwritten.

"""

from __future__ import annotations

import logging
import re
from typing import Optional

from md2dom.ast.nodes import AttributeValue, Heading, Image, Node, Paragraph, Text

logger = logging.getLogger(__name__)

_ATTRIBUTE_TOKEN = re.compile(
    r"""\s*(?:
        \#(?P<id>[\w-]+)
      | \.(?P<cls>[\w-]+)
      | (?P<name>[A-Za-z_:][\w:.-]*)=(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"'{}]+))
    )""",
    re.VERBOSE,
)
_TRAILING_ANNOTATION = re.compile(r"\s*(\{[^{}]*\})\s*$")
_LEADING_ANNOTATION = re.compile(r"^(\{[^{}]*\})")
_INTEGER = re.compile(r"^-?\d+$")


def parse_attribute_list(text: str) -> Optional[dict[str, AttributeValue]]:
    """Parse a ``{...}`` annotation.

    Returns
    -------
    dict or None
        Attributes in written order, or None if ``text`` is not an annotation

    Examples
    --------
    >>> parse_attribute_list("{#intro .lead .wide data-n=3 title='A title'}")
    {'id': 'intro', 'class': 'lead wide', 'data-n': 3, 'title': 'A title'}
    >>> parse_attribute_list("{not an annotation}") is None
    True

    """
    text = text.strip()
    if len(text) < 2 or text[0] != "{" or text[-1] != "}":
        return None

    inner = text[1:-1]
    attributes: dict[str, AttributeValue] = {}
    classes: list[str] = []
    position = 0
    while position < len(inner):
        if not inner[position:].strip():
            break
        match = _ATTRIBUTE_TOKEN.match(inner, position)
        if match is None:
            return None
        position = match.end()

        if match.group("id"):
            attributes["id"] = match.group("id")
        elif match.group("cls"):
            classes.append(match.group("cls"))
            attributes["class"] = " ".join(classes)
        else:
            name = match.group("name")
            bare = match.group("bare")
            if bare is not None:
                attributes[name] = int(bare) if _INTEGER.match(bare) else bare
            else:
                value = match.group("dq")
                attributes[name] = value if value is not None else match.group("sq")

    return attributes or None


def _merge(node: Node, attributes: dict[str, AttributeValue]) -> None:
    for name, value in attributes.items():
        if name not in node.attributes:
            node.set_attribute(name, value)


def _only_text(node: Node) -> Optional[str]:
    if node.children and all(isinstance(child, Text) for child in node.children):
        return "".join(child.content for child in node.children if isinstance(child, Text))
    return None


def _take_trailing_line(paragraph: Paragraph) -> Optional[dict[str, AttributeValue]]:
    # "text<soft break>{...}" at the end of a paragraph
    if len(paragraph.children) < 2:
        return None
    last, before = paragraph.children[-1], paragraph.children[-2]
    if not isinstance(last, Text) or not isinstance(before, Text) or not before.soft_line_break:
        return None
    attributes = parse_attribute_list(last.content)
    if attributes is None:
        return None
    paragraph.children.pop()
    before.soft_line_break = False
    return attributes


def _take_heading_suffix(heading: Heading) -> Optional[dict[str, AttributeValue]]:
    last = heading.children[-1] if heading.children else None
    if not isinstance(last, Text):
        return None
    match = _TRAILING_ANNOTATION.search(last.content)
    if match is None:
        return None
    attributes = parse_attribute_list(match.group(1))
    if attributes is None:
        return None
    last.content = last.content[: match.start()]
    if not last.content and len(heading.children) > 1:
        heading.children.pop()
    return attributes


def _apply_image_annotations(node: Node) -> None:
    emptied: list[Node] = []
    for index, child in enumerate(node.children):
        if not isinstance(child, Image) or index + 1 >= len(node.children):
            continue
        following = node.children[index + 1]
        if not isinstance(following, Text):
            continue
        match = _LEADING_ANNOTATION.match(following.content)
        attributes = parse_attribute_list(match.group(1)) if match else None
        if match is None or attributes is None:
            continue
        _merge(child, attributes)
        following.content = following.content[match.end() :]
        if not following.content and not (following.soft_line_break or following.hard_line_break):
            emptied.append(following)

    if emptied:
        node.children[:] = [child for child in node.children if all(child is not empty for empty in emptied)]


def apply_attribute_annotations(node: Node) -> None:
    """Move the annotations below ``node`` onto the nodes they follow.

    The tree is modified in place; annotation-only paragraphs are removed.

    """
    kept: list[Node] = []
    for child in list(node.children):
        if isinstance(child, Paragraph):
            text = _only_text(child)
            attributes = parse_attribute_list(text) if text is not None else None
            if attributes is not None:
                if kept:
                    _merge(kept[-1], attributes)
                else:
                    logger.debug("Attribute annotation without a preceding block ignored: %s", text)
                child.parent = None
                continue
            trailing = _take_trailing_line(child)
            if trailing is not None:
                _merge(child, trailing)
        elif isinstance(child, Heading):
            suffix = _take_heading_suffix(child)
            if suffix is not None:
                _merge(child, suffix)

        _apply_image_annotations(child)
        apply_attribute_annotations(child)
        kept.append(child)

    node.children[:] = kept
