#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_dump.py
"""Unit tests for node tree dumps."""

import pytest
from rich.console import Console
from rich.tree import Tree

from md2dom.ast import Document, Heading, Link, Paragraph, Text, build_rich_tree, dump_tree


@pytest.mark.unit
class TestDumpTree:
    """Tests for dump_tree()."""

    def test_outline(self):
        """Test one indented line per node."""
        doc = Document(
            children=[
                Heading(level=2, children=[Text(content="Title")], attributes={"id": "top"}),
                Paragraph(children=[Link(destination="https://x.org", children=[Text(content="x")])]),
            ]
        )
        lines = dump_tree(doc, indent="  ").splitlines()

        assert lines[0] == "Document"
        assert lines[1] == "  Heading level=2 [id='top']"
        assert lines[2].startswith("    Text content='Title'")
        assert lines[3] == "  Paragraph"
        assert lines[4] == "    Link destination='https://x.org' title=None"
        assert len(lines) == 6

    def test_long_values_shortened(self):
        """Test long payload values are cut with an ellipsis."""
        line = dump_tree(Text(content="x" * 100)).splitlines()[0]
        assert "..." in line
        assert len(line) < 120


@pytest.mark.unit
class TestRichTree:
    """Tests for build_rich_tree()."""

    def test_tree_mirrors_nodes(self):
        """Test the rich tree has one branch per child."""
        doc = Document(children=[Paragraph(children=[Text(content="[bold]x[/bold]")])])
        tree = build_rich_tree(doc)

        assert isinstance(tree, Tree)
        assert len(tree.children) == 1
        assert len(tree.children[0].children) == 1

        console = Console(record=True, width=120)
        console.print(tree)
        output = console.export_text()
        # markup in text content is printed literally
        assert "[bold]x[/bold]" in output
