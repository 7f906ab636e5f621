#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_frontmatter.py
"""Unit tests for front matter and summary sections."""

import datetime

import pytest

from md2dom.exceptions import ParsingError
from md2dom.frontmatter import (
    DocumentMetadata,
    extract_summary,
    parse_front_matter,
    read_sections,
    split_front_matter,
)


@pytest.mark.unit
class TestSplitFrontMatter:
    """Tests for split_front_matter()."""

    def test_split(self):
        """Test the fenced block is separated from the body."""
        assert split_front_matter("---\ntitle: A\n---\n# Body\n") == ("title: A\n", "# Body\n")

    def test_no_front_matter(self):
        """Test text not starting with a fence is returned unchanged."""
        assert split_front_matter("# Body\n---\n") == (None, "# Body\n---\n")
        assert split_front_matter("") == (None, "")

    def test_crlf_and_trailing_spaces(self):
        """Test Windows line endings and spaces after the closing fence."""
        assert split_front_matter("---\r\na: 1\r\n---  \r\nbody") == ("a: 1\r\n", "body")

    def test_empty_front_matter(self):
        """Test an empty block."""
        assert split_front_matter("---\n---\nbody") == ("", "body")

    def test_unclosed(self):
        """Test a missing closing fence."""
        with pytest.raises(ParsingError) as exc_info:
            split_front_matter("---\ntitle: A\n")
        assert exc_info.value.parsing_stage == "frontmatter"


@pytest.mark.unit
class TestParseFrontMatter:
    """Tests for parse_front_matter()."""

    def test_known_and_extra_keys(self):
        """Test known keys become fields and the rest goes to extra."""
        metadata = parse_front_matter("title: Notes\nauthor: Jane\nname: notes\ntags: [a, b]\n")
        assert metadata.title == "Notes"
        assert metadata.author == "Jane"
        assert metadata.name == "notes"
        assert metadata.extra == {"tags": ["a", "b"]}

    def test_date_iso_format(self):
        """Test YAML dates are stored in ISO format."""
        assert parse_front_matter("date: 2024-03-01\n").date == "2024-03-01"

    def test_non_string_values(self):
        """Test scalar values are stored as text."""
        assert parse_front_matter("title: 42\n").title == "42"

    def test_empty(self):
        """Test an empty block gives empty metadata."""
        assert parse_front_matter("") == DocumentMetadata()

    def test_invalid_yaml(self):
        """Test malformed YAML."""
        with pytest.raises(ParsingError, match="Invalid YAML") as exc_info:
            parse_front_matter("title: [unclosed\n")
        assert exc_info.value.original_error is not None

    def test_not_a_mapping(self):
        """Test a YAML list is rejected."""
        with pytest.raises(ParsingError, match="mapping"):
            parse_front_matter("- a\n- b\n")


@pytest.mark.unit
class TestDocumentMetadata:
    """Tests for DocumentMetadata."""

    def test_to_dict_only_set_fields(self):
        """Test unset fields are left out."""
        metadata = DocumentMetadata(title="T", summary="S", extra={"tags": ["x"]})
        assert metadata.to_dict() == {"tags": ["x"], "title": "T", "summary": "S"}

    def test_from_mapping_datetime(self):
        """Test datetimes are converted too."""
        metadata = DocumentMetadata.from_mapping({"date": datetime.datetime(2024, 1, 2, 3, 4, 5)})
        assert metadata.date == "2024-01-02T03:04:05"


@pytest.mark.unit
class TestSummary:
    """Tests for extract_summary()."""

    def test_summary_until_next_heading(self):
        """Test the section ends at the next level-one heading."""
        assert extract_summary("# Summary\nShort.\n\n# Intro\nLong.\n") == ("Short.", "# Intro\nLong.\n")

    def test_summary_case_insensitive_to_end(self):
        """Test the heading is matched in any case and may run to the end."""
        assert extract_summary("Intro\n# SUMMARY\nAll of it.\n## Sub\nmore\n") == (
            "All of it.\n## Sub\nmore",
            "Intro\n",
        )

    def test_no_summary(self):
        """Test text without a summary heading."""
        assert extract_summary("# Intro\n") == (None, "# Intro\n")


@pytest.mark.unit
class TestReadSections:
    """Tests for read_sections()."""

    def test_front_matter_and_summary(self):
        """Test both sections are split off."""
        metadata, body = read_sections("---\ntitle: T\n---\n# Summary\nS.\n# Body\n", summary=True)
        assert metadata.title == "T"
        assert metadata.summary == "S."
        assert body == "# Body\n"

    def test_front_matter_disabled(self):
        """Test disabled front matter leaves the text alone."""
        metadata, body = read_sections("---\ntitle: T\n---\n", parse_frontmatter=False)
        assert metadata == DocumentMetadata()
        assert body == "---\ntitle: T\n---\n"
