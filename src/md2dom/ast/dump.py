#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/ast/dump.py
"""Human readable dumps of a node tree, for debugging parser output."""

from __future__ import annotations

from typing import Any

from md2dom.ast.nodes import Node, format_attribute_value


def _describe(node: Node) -> str:
    parts = [str(node.kind)]
    payload = node.payload()
    if payload:
        parts.append(" ".join(f"{key}={_short(value)}" for key, value in payload.items()))
    if node.attributes:
        attrs = ", ".join(f"{name}={format_attribute_value(value)!r}" for name, value in node.attributes.items())
        parts.append(f"[{attrs}]")
    return " ".join(parts)


def _short(value: Any, limit: int = 40) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def dump_tree(node: Node, indent: str = "    ") -> str:
    """Return an indented outline of ``node`` and its descendants.

    Each line shows the node kind, its kind-specific payload and its
    attributes.

    Parameters
    ----------
    node : Node
        Root of the subtree to dump
    indent : str, default = four spaces
        Indentation added per depth level

    Returns
    -------
    str
        One line per node, newline terminated

    Examples
    --------
        >>> print(dump_tree(Document(children=[Paragraph(children=[Text(content="hi")])])))
        Document
            Paragraph
                Text content='hi' soft_line_break=False hard_line_break=False

    """
    lines: list[str] = []

    def _visit(current: Node, depth: int) -> None:
        lines.append(f"{indent * depth}{_describe(current)}")
        for child in current.children:
            _visit(child, depth + 1)

    _visit(node, 0)
    return "\n".join(lines) + "\n"


def build_rich_tree(node: Node) -> Any:
    """Build a :class:`rich.tree.Tree` mirroring ``node`` for console display."""
    from rich.markup import escape
    from rich.tree import Tree

    def _branch(current: Node, tree: Any) -> None:
        for child in current.children:
            _branch(child, tree.add(escape(_describe(child))))

    root = Tree(escape(_describe(node)))
    _branch(node, root)
    return root
