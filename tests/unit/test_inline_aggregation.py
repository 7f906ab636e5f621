#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_inline_aggregation.py
"""Unit tests for the inline run aggregator."""

import pytest

from md2dom.ast import Emphasis, List, Paragraph, String, Text
from md2dom.exceptions import UnexpectedNodeShapeError
from md2dom.renderers import RenderState, aggregate_inline_run


def _run(paragraph):
    state = RenderState()
    aggregate_inline_run(state, paragraph, "el9")
    return state


@pytest.mark.unit
class TestAggregateInlineRun:
    """Tests for aggregate_inline_run()."""

    def test_single_text_fast_path(self):
        """Test one text child becomes text content without a text node."""
        state = _run(Paragraph(children=[Text(content="only")]))
        assert state.sink.statements == ["el9.textContent = `only`;"]
        assert state.identifiers.allocated == 0

    def test_adjacent_text_merged(self):
        """Test adjacent text children become one text node."""
        state = _run(Paragraph(children=[Text(content="a"), Text(content="b"), Text(content="c")]))
        assert state.sink.statements == [
            "const el2 = document.createTextNode(`abc`);",
            "el9.appendChild(el2);",
        ]

    def test_flush_before_inline_element(self):
        """Test buffered text is written before the next element."""
        paragraph = Paragraph(children=[Text(content="a"), Emphasis(children=[Text(content="b")]), Text(content="c")])
        state = _run(paragraph)
        assert state.sink.statements == [
            "const el2 = document.createTextNode(`a`);",
            "el9.appendChild(el2);",
            "let el3 = document.createElement('em');",
            "el3.textContent = `b`;",
            "el9.appendChild(el3);",
            "const el4 = document.createTextNode(`c`);",
            "el9.appendChild(el4);",
        ]

    def test_string_is_not_merged(self):
        """Test a String child gets its own text node."""
        state = _run(Paragraph(children=[Text(content="a"), String(value="b")]))
        assert state.sink.statements == [
            "const el2 = document.createTextNode(`a`);",
            "el9.appendChild(el2);",
            "const el3 = document.createTextNode(`b`);",
            "el9.appendChild(el3);",
        ]

    def test_created_nodes_are_bound(self):
        """Test inline elements are recorded in the binding table."""
        emphasis = Emphasis(children=[Text(content="b")])
        state = _run(Paragraph(children=[emphasis]))
        assert state.lookup(emphasis) == "el2"

    def test_empty_run(self):
        """Test an empty run writes nothing."""
        assert len(_run(Paragraph()).sink) == 0

    def test_block_child_rejected(self):
        """Test a block node inside the run."""
        with pytest.raises(UnexpectedNodeShapeError, match="block node List"):
            _run(Paragraph(children=[List()]))
