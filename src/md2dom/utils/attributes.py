#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/utils/attributes.py
"""Per-element attribute allow-lists.

Attributes attached to nodes by earlier passes are only propagated to the
generated script when the element kind allows them. Every kind shares the
global list; some kinds extend it (links, images, lists, ...). Names starting
with ``data-`` always pass.

"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from md2dom.ast.nodes import AttributeValue, Node, NodeKind, format_attribute_value
from md2dom.constants import DATA_ATTRIBUTE_PREFIX


class AttributeFilter:
    """Immutable set of attribute names an element kind accepts.

    Parameters
    ----------
    names : iterable of str
        Accepted attribute names (case-sensitive)

    Examples
    --------
    >>> quote = GLOBAL_ATTRIBUTE_FILTER.extend("cite")
    >>> quote.allows("cite"), quote.allows("data-source"), quote.allows("onclick")
    (True, True, False)

    """

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str]):
        self._names = frozenset(names)

    def extend(self, *names: str) -> AttributeFilter:
        """Return a new filter accepting ``names`` in addition to these."""
        return AttributeFilter(self._names.union(names))

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"AttributeFilter({sorted(self._names)!r})"

    def allows(self, name: str) -> bool:
        """Return True if ``name`` is listed or carries the ``data-`` prefix."""
        return name in self._names or name.startswith(DATA_ATTRIBUTE_PREFIX)


# Attribute names any element can have.
GLOBAL_ATTRIBUTE_FILTER = AttributeFilter(
    [
        "accesskey",
        "autocapitalize",
        "autofocus",
        "class",
        "contenteditable",
        "dir",
        "draggable",
        "enterkeyhint",
        "hidden",
        "id",
        "inert",
        "inputmode",
        "is",
        "itemid",
        "itemprop",
        "itemref",
        "itemscope",
        "itemtype",
        "lang",
        "part",
        "role",
        "slot",
        "spellcheck",
        "style",
        "tabindex",
        "title",
        "translate",
    ]
)

HEADING_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER
PARAGRAPH_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER
CODE_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER
EMPHASIS_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER

BLOCKQUOTE_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER.extend("cite")

LIST_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER.extend("start", "reversed", "type")

LIST_ITEM_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER.extend("value")

THEMATIC_BREAK_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER.extend(
    "align",  # deprecated
    "color",  # not standardized
    "noshade",  # deprecated
    "size",  # deprecated
    "width",  # deprecated
)

# href is set from the destination and never copied from the attribute bag
LINK_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER.extend(
    "download",
    "hreflang",
    "media",
    "ping",
    "referrerpolicy",
    "rel",
    "shape",
    "target",
)

IMAGE_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER.extend(
    "align",
    "border",
    "crossorigin",
    "decoding",
    "height",
    "importance",
    "intrinsicsize",
    "ismap",
    "loading",
    "referrerpolicy",
    "sizes",
    "srcset",
    "usemap",
    "width",
)

# Text, String and TextBlock never become elements of their own, Document
# attributes describe the source rather than the container.
NO_ATTRIBUTES = AttributeFilter(())

KIND_ATTRIBUTE_FILTERS: Mapping[NodeKind, AttributeFilter] = {
    NodeKind.DOCUMENT: NO_ATTRIBUTES,
    NodeKind.HEADING: HEADING_ATTRIBUTE_FILTER,
    NodeKind.BLOCKQUOTE: BLOCKQUOTE_ATTRIBUTE_FILTER,
    NodeKind.CODE_BLOCK: CODE_ATTRIBUTE_FILTER,
    NodeKind.FENCED_CODE_BLOCK: CODE_ATTRIBUTE_FILTER,
    NodeKind.HTML_BLOCK: GLOBAL_ATTRIBUTE_FILTER,
    NodeKind.LIST: LIST_ATTRIBUTE_FILTER,
    NodeKind.LIST_ITEM: LIST_ITEM_ATTRIBUTE_FILTER,
    NodeKind.PARAGRAPH: PARAGRAPH_ATTRIBUTE_FILTER,
    NodeKind.TEXT_BLOCK: NO_ATTRIBUTES,
    NodeKind.THEMATIC_BREAK: THEMATIC_BREAK_ATTRIBUTE_FILTER,
    NodeKind.AUTO_LINK: LINK_ATTRIBUTE_FILTER,
    NodeKind.CODE_SPAN: CODE_ATTRIBUTE_FILTER,
    NodeKind.EMPHASIS: EMPHASIS_ATTRIBUTE_FILTER,
    NodeKind.IMAGE: IMAGE_ATTRIBUTE_FILTER,
    NodeKind.LINK: LINK_ATTRIBUTE_FILTER,
    NodeKind.RAW_HTML: GLOBAL_ATTRIBUTE_FILTER,
    NodeKind.TEXT: NO_ATTRIBUTES,
    NodeKind.STRING: NO_ATTRIBUTES,
}


def filter_for_kind(kind: NodeKind) -> AttributeFilter:
    """Return the allow-list applying to elements created for ``kind``."""
    return KIND_ATTRIBUTE_FILTERS[kind]


def filter_attributes(
    attributes: Mapping[str, AttributeValue], attribute_filter: AttributeFilter
) -> list[tuple[str, str]]:
    """Select and format the attributes ``attribute_filter`` lets through.

    Parameters
    ----------
    attributes : mapping
        Attribute bag in insertion order
    attribute_filter : AttributeFilter
        Allow-list of the element kind

    Returns
    -------
    list of tuple
        ``(name, text)`` pairs in the original insertion order

    Examples
    --------
    >>> filter_attributes({"id": "intro", "onclick": "x()", "data-n": 3}, GLOBAL_ATTRIBUTE_FILTER)
    [('id', 'intro'), ('data-n', '3')]

    """
    return [
        (name, format_attribute_value(value)) for name, value in attributes.items() if attribute_filter.allows(name)
    ]


def filtered(node: Node, attribute_filter: AttributeFilter | None = None) -> list[tuple[str, str]]:
    """Return the attributes of ``node`` to emit, using its kind's filter by default."""
    if not node.attributes:
        return []
    return filter_attributes(node.attributes, attribute_filter or filter_for_kind(node.kind))
