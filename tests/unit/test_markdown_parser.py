#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_parser.py
"""Unit tests for the markdown to node tree adapter."""

from io import BytesIO

import pytest

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
    Paragraph,
    RawHTML,
    Text,
    TextBlock,
    ThematicBreak,
)
from md2dom.exceptions import InvalidOptionsError, ParsingError
from md2dom.options import MarkdownParserOptions, ScriptRendererOptions
from md2dom.parsers import MarkdownToAstConverter, markdown_to_ast


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level tokens."""

    def test_paragraph(self):
        """Test a plain paragraph."""
        doc = markdown_to_ast("This is a paragraph.")
        assert isinstance(doc, Document)
        assert len(doc.children) == 1
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert [child.content for child in para.children] == ["This is a paragraph."]
        assert para.parent is doc

    def test_heading_levels(self):
        """Test all six heading levels."""
        doc = markdown_to_ast("\n".join(f"{'#' * level} H{level}" for level in range(1, 7)))
        assert [child.level for child in doc.children] == [1, 2, 3, 4, 5, 6]
        assert all(isinstance(child, Heading) for child in doc.children)
        assert doc.children[5].children[0].content == "H6"

    def test_blockquote(self):
        """Test a quote holds paragraphs."""
        doc = markdown_to_ast("> Quoted")
        quote = doc.children[0]
        assert isinstance(quote, Blockquote)
        assert isinstance(quote.children[0], Paragraph)

    def test_tight_list_uses_text_blocks(self):
        """Test tight list items hold TextBlock nodes."""
        doc = markdown_to_ast("- one\n- two\n- three")
        lst = doc.children[0]
        assert isinstance(lst, List)
        assert lst.ordered is False
        assert lst.tight is True
        assert len(lst.children) == 3
        for item in lst.children:
            assert isinstance(item, ListItem)
            assert isinstance(item.children[0], TextBlock)

    def test_loose_list_uses_paragraphs(self):
        """Test blank lines between items give paragraphs."""
        doc = markdown_to_ast("- one\n\n- two\n")
        lst = doc.children[0]
        assert lst.tight is False
        assert isinstance(lst.children[0].children[0], Paragraph)

    def test_ordered_list_start(self):
        """Test ordered lists keep their first number."""
        assert markdown_to_ast("3. three\n4. four").children[0].start == 3
        one = markdown_to_ast("1. one\n2. two").children[0]
        assert one.ordered is True
        assert one.start == 1

    def test_nested_list(self):
        """Test nested lists end up inside the item."""
        doc = markdown_to_ast("- Item 1\n  - Nested 1\n  - Nested 2\n- Item 2")
        first_item = doc.children[0].children[0]
        assert any(isinstance(child, List) for child in first_item.children)

    def test_fenced_code(self):
        """Test fenced code keeps lines and language."""
        doc = markdown_to_ast("```python\nx = 1\ny = 2\n```")
        block = doc.children[0]
        assert isinstance(block, FencedCodeBlock)
        assert block.language == "python"
        assert block.lines == ["x = 1\n", "y = 2\n"]

    def test_fenced_code_unsafe_language_dropped(self):
        """Test unsafe info strings leave no language."""
        block = markdown_to_ast("```<script>\nx\n```").children[0]
        assert isinstance(block, FencedCodeBlock)
        assert block.language is None

    def test_indented_code(self):
        """Test indented code becomes a plain code block."""
        block = markdown_to_ast("    indented\n").children[0]
        assert type(block) is CodeBlock
        assert block.code == "indented\n"

    @pytest.mark.parametrize("source", ["    indented", "    indented\n", "```\nindented\n```"])
    def test_code_blocks_end_with_newline(self, source):
        """Test indented and fenced code carry the same text, final newline included."""
        assert markdown_to_ast(source).children[0].code == "indented\n"

    def test_thematic_break(self):
        """Test a rule."""
        assert isinstance(markdown_to_ast("***").children[0], ThematicBreak)

    def test_html_block(self):
        """Test HTML blocks keep their raw lines."""
        block = markdown_to_ast("<div>\nhello\n</div>\n").children[0]
        assert isinstance(block, HTMLBlock)
        assert "<div>" in block.content
        assert "hello" in block.content


@pytest.mark.unit
class TestInlines:
    """Tests for inline tokens."""

    def test_emphasis_levels(self):
        """Test em and strong."""
        para = markdown_to_ast("Some *em* and **strong** text").children[0]
        emphasis = [child for child in para.children if isinstance(child, Emphasis)]
        assert [e.level for e in emphasis] == [1, 2]
        assert emphasis[0].children[0].content == "em"

    def test_code_span(self):
        """Test inline code becomes a code span with one text."""
        para = markdown_to_ast("Use `code` here").children[0]
        code = para.children[1]
        assert isinstance(code, CodeSpan)
        assert code.children[0].content == "code"

    def test_link(self):
        """Test links keep destination, title and content."""
        link = markdown_to_ast('[Link text](https://example.com "Title")').children[0].children[0]
        assert isinstance(link, Link)
        assert link.destination == "https://example.com"
        assert link.title == "Title"
        assert link.children[0].content == "Link text"

    def test_url_autolink(self):
        """Test angle bracket URLs become autolinks."""
        node = markdown_to_ast("<https://example.com>").children[0].children[0]
        assert isinstance(node, AutoLink)
        assert node.link_type == "url"
        assert node.url == "https://example.com"

    def test_email_autolink(self):
        """Test angle bracket emails become email autolinks without mailto."""
        node = markdown_to_ast("<me@example.com>").children[0].children[0]
        assert isinstance(node, AutoLink)
        assert node.link_type == "email"
        assert node.url == "me@example.com"

    def test_explicit_link_to_itself_stays_link(self):
        """Test a bracketed link whose text is its destination is not an autolink."""
        link = markdown_to_ast("[https://example.com](https://example.com)").children[0].children[0]
        assert isinstance(link, Link)
        assert link.destination == "https://example.com"

    def test_entity_references_decoded(self):
        """Test entity references in text are decoded."""
        paragraph = markdown_to_ast("&amp; &copy; &lt;x&gt;").children[0]
        assert "".join(child.content for child in paragraph.children) == "& © <x>"

    def test_entity_references_in_link_text_decoded(self):
        """Test link content is decoded like any other text."""
        link = markdown_to_ast("[a &amp; b](https://example.com)").children[0].children[0]
        assert isinstance(link, Link)
        assert "".join(child.content for child in link.children) == "a & b"

    def test_image(self):
        """Test images keep alt text as children."""
        image = markdown_to_ast('![Alt text](img.png "T")').children[0].children[0]
        assert isinstance(image, Image)
        assert image.destination == "img.png"
        assert image.title == "T"
        assert image.children[0].content == "Alt text"

    def test_inline_html(self):
        """Test inline HTML becomes RawHTML."""
        para = markdown_to_ast("Press <kbd>Ctrl</kbd> now").children[0]
        raw = [child for child in para.children if isinstance(child, RawHTML)]
        assert [node.content for node in raw] == ["<kbd>", "</kbd>"]

    def test_soft_break(self):
        """Test a soft break flags the preceding text."""
        para = markdown_to_ast("Line 1\nLine 2").children[0]
        assert para.children[0].content == "Line 1"
        assert para.children[0].soft_line_break is True
        assert para.children[-1].content == "Line 2"

    def test_hard_break(self):
        """Test a hard break flags the preceding text."""
        para = markdown_to_ast("Line 1  \nLine 2").children[0]
        assert len(para.children) == 2
        assert para.children[0].hard_line_break is True
        assert not para.children[1].hard_line_break

    def test_break_after_element_adds_empty_text(self):
        """Test a break after a non-text node gets its own empty text."""
        para = markdown_to_ast("*em*\nnext").children[0]
        assert isinstance(para.children[0], Emphasis)
        assert isinstance(para.children[1], Text)
        assert para.children[1].content == ""
        assert para.children[1].soft_line_break is True


@pytest.mark.unit
class TestInputs:
    """Tests for input types and options."""

    def test_bytes_and_streams(self, tmp_path):
        """Test bytes, binary streams and paths are read as UTF-8."""
        assert markdown_to_ast("# Café".encode()).children[0].children[0].content == "Café"

        converter = MarkdownToAstConverter()
        assert isinstance(converter.parse(BytesIO(b"# Hi")).children[0], Heading)

        path = tmp_path / "doc.md"
        path.write_text("# From file", encoding="utf-8")
        assert converter.parse(path).children[0].children[0].content == "From file"

    def test_front_matter_becomes_metadata(self):
        """Test front matter is removed from the body."""
        doc = markdown_to_ast("---\ntitle: T\n---\n# Body\n")
        assert doc.metadata == {"title": "T"}
        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Heading)

    def test_front_matter_disabled(self):
        """Test the fence is parsed as markdown when disabled."""
        doc = markdown_to_ast("---\ntitle: T\n---\n", MarkdownParserOptions(parse_frontmatter=False))
        assert doc.metadata == {}
        assert any(isinstance(child, ThematicBreak) for child in doc.children)

    def test_unclosed_front_matter(self):
        """Test a missing closing fence is a parsing error."""
        with pytest.raises(ParsingError, match="front matter"):
            markdown_to_ast("---\ntitle: T\n# Body\n")

    def test_summary_extraction(self):
        """Test the summary section moves into the metadata."""
        options = MarkdownParserOptions(extract_summary=True)
        doc = markdown_to_ast("# Summary\nShort.\n\n# Intro\nLong.\n", options)
        assert doc.metadata["summary"] == "Short."
        assert [child.children[0].content for child in doc.children if isinstance(child, Heading)] == ["Intro"]

    def test_attributes_applied_by_default(self):
        """Test annotations are applied unless disabled."""
        text = "## Setup {#setup}"
        assert markdown_to_ast(text).children[0].attributes == {"id": "setup"}
        plain = markdown_to_ast(text, MarkdownParserOptions(parse_attributes=False)).children[0]
        assert plain.attributes == {}
        assert plain.children[0].content == "Setup {#setup}"

    def test_wrong_options_type(self):
        """Test renderer options are rejected by the parser."""
        with pytest.raises(InvalidOptionsError):
            MarkdownToAstConverter(ScriptRendererOptions())
