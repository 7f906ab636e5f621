#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and parent links
- Kind-specific payloads and validation
- Attribute values and their textual form
- Plain text extraction

"""

import pytest

from md2dom.ast import (
    BLOCK_KINDS,
    INLINE_KINDS,
    AutoLink,
    CodeBlock,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    Image,
    Link,
    List,
    NodeKind,
    Paragraph,
    RawHTML,
    String,
    Text,
    format_attribute_value,
    plain_text,
)


@pytest.mark.unit
class TestNodeKinds:
    """Tests for the closed kind vocabulary."""

    def test_block_and_inline_kinds_partition_vocabulary(self):
        """Test every kind is either block or inline, never both."""
        assert BLOCK_KINDS | INLINE_KINDS == set(NodeKind)
        assert not BLOCK_KINDS & INLINE_KINDS

    def test_kind_str_is_name(self):
        """Test kinds print as their node names."""
        assert str(NodeKind.FENCED_CODE_BLOCK) == "FencedCodeBlock"
        assert str(Paragraph().kind) == "Paragraph"

    def test_fenced_code_block_has_own_kind(self):
        """Test the subclass does not inherit the indented code kind."""
        assert CodeBlock().kind is NodeKind.CODE_BLOCK
        assert FencedCodeBlock().kind is NodeKind.FENCED_CODE_BLOCK


@pytest.mark.unit
class TestParentLinks:
    """Tests for parent maintenance."""

    def test_constructor_sets_parent(self):
        """Test children passed to a constructor point back to it."""
        text = Text(content="hi")
        paragraph = Paragraph(children=[text])
        assert text.parent is paragraph
        assert paragraph.parent is None

    def test_append_child_reparents(self):
        """Test appending a child moves it out of its previous parent."""
        text = Text(content="hi")
        first = Paragraph(children=[text])
        second = Paragraph()

        assert second.append_child(text) is text
        assert text.parent is second
        assert first.children == []
        assert second.children == [text]

    def test_siblings(self):
        """Test first child and next sibling navigation."""
        a, b = Text(content="a"), Text(content="b")
        paragraph = Paragraph(children=[a, b])
        assert paragraph.first_child is a
        assert a.next_sibling is b
        assert b.next_sibling is None
        assert paragraph.next_sibling is None

    def test_iter_descendants_document_order(self):
        """Test descendants are yielded depth first."""
        inner = Text(content="b")
        doc = Document(children=[Paragraph(children=[Text(content="a"), Emphasis(children=[inner])])])
        kinds = [str(node.kind) for node in doc.iter_descendants()]
        assert kinds == ["Paragraph", "Text", "Emphasis", "Text"]

    def test_nodes_compare_by_identity(self):
        """Test structurally equal nodes are distinct."""
        assert Text(content="x") != Text(content="x")


@pytest.mark.unit
class TestPayloads:
    """Tests for kind-specific fields."""

    def test_heading_level_validated(self):
        """Test heading levels outside 1-6 are rejected."""
        assert Heading(level=6).level == 6
        with pytest.raises(ValueError):
            Heading(level=0)
        with pytest.raises(ValueError):
            Heading(level=7)

    def test_emphasis_tag(self):
        """Test emphasis levels map to em and strong."""
        assert Emphasis(level=1).tag == "em"
        assert Emphasis(level=2).tag == "strong"
        with pytest.raises(ValueError):
            Emphasis(level=3)

    def test_code_block_joins_lines(self):
        """Test code blocks keep their line terminators."""
        block = FencedCodeBlock(lines=["a = 1\n", "b = 2\n"], language="python")
        assert block.code == "a = 1\nb = 2\n"
        assert block.payload() == {"lines": 2, "language": "python"}

    def test_html_block_content(self):
        """Test HTML block content includes the closure line."""
        block = HTMLBlock(lines=["<div>\n", "x\n"], closure_line="</div>\n")
        assert block.has_closure
        assert block.content == "<div>\nx\n</div>\n"
        assert not HTMLBlock(lines=["<br>\n"]).has_closure

    def test_raw_html_segments(self):
        """Test inline raw HTML joins its segments."""
        assert RawHTML(segments=["<b ", 'class="x">']).content == '<b class="x">'

    def test_auto_link_text_defaults_to_url(self):
        """Test the label falls back to the URL."""
        assert AutoLink(url="https://x.org").text == "https://x.org"
        assert AutoLink(url="a@b.org", link_type="email", label="mail me").text == "mail me"

    def test_list_defaults(self):
        """Test list defaults."""
        lst = List()
        assert (lst.ordered, lst.start, lst.tight) == (False, 1, True)


@pytest.mark.unit
class TestAttributes:
    """Tests for the attribute bag."""

    def test_insertion_order_preserved(self):
        """Test attributes keep the order they were set in."""
        node = Paragraph(attributes={"id": "a"})
        node.set_attribute("class", "lead")
        node.set_attribute("data-n", 3)
        node.set_attribute("id", "b")
        assert list(node.attributes) == ["id", "class", "data-n"]
        assert node.get_attribute("id") == "b"
        assert node.get_attribute("missing", "x") == "x"

    @pytest.mark.parametrize("value", [True, 1.5, None, ["a"]])
    def test_invalid_values_rejected(self, value):
        """Test only bytes, str and int values are accepted."""
        with pytest.raises(TypeError):
            Paragraph().set_attribute("data-x", value)
        with pytest.raises(TypeError):
            Paragraph(attributes={"data-x": value})

    @pytest.mark.parametrize(
        "value,expected",
        [(b"caf\xc3\xa9", "café"), (b"\xff", "�"), ("text", "text"), (42, "42"), (-7, "-7"), (0, "0")],
    )
    def test_format_attribute_value(self, value, expected):
        """Test the single formatting function for attribute values."""
        assert format_attribute_value(value) == expected


@pytest.mark.unit
class TestPlainText:
    """Tests for plain_text()."""

    def test_nested_inline_content(self):
        """Test text of nested inline nodes is concatenated."""
        image = Image(
            destination="a.png",
            children=[Text(content="a "), Emphasis(children=[Text(content="b")]), String(value=" c")],
        )
        assert plain_text(image) == "a b c"

    def test_link_without_children(self):
        """Test an empty node has empty text."""
        assert plain_text(Link(destination="x")) == ""
