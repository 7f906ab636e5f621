"""Pytest configuration and shared fixtures for the md2dom test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from md2dom.ast import (
    Blockquote,
    CodeSpan,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Text,
    TextBlock,
    ThematicBreak,
)

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "security: Tests of URL and raw HTML filtering")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a markdown document touching most node kinds.

    Returns
    -------
    str
        Markdown text with front matter.

    """
    return """---
title: Sample Document
author: Jane Doe
name: sample
---
# Sample Document

This is a **sample document** with *italic text* and some `inline code`.

> Quoted text

- Item 1
- Item 2

3. Third
4. Fourth

```python
print("hi")
```

***
"""


@pytest.fixture
def sample_document() -> Document:
    """Provide a hand-built node tree with every block kind the renderer styles.

    Returns
    -------
    Document
        Document with a heading, paragraph, quote, list, code block and rule.

    """
    return Document(
        children=[
            Heading(level=1, children=[Text(content="Intro")], attributes={"id": "intro"}),
            Paragraph(
                children=[
                    Text(content="Some "),
                    Emphasis(level=2, children=[Text(content="bold")]),
                    Text(content=" and "),
                    CodeSpan(children=[Text(content="code")]),
                    Text(content=", see "),
                    Link(destination="https://example.com", children=[Text(content="here")]),
                    Text(content="."),
                ]
            ),
            Blockquote(children=[Paragraph(children=[Text(content="Quoted")])]),
            List(
                ordered=False,
                children=[
                    ListItem(children=[TextBlock(children=[Text(content="one")])]),
                    ListItem(children=[TextBlock(children=[Text(content="two")])]),
                ],
            ),
            Paragraph(children=[Image(destination="logo.png", children=[Text(content="Logo")])]),
            FencedCodeBlock(lines=["x = 1\n"], language="python"),
            ThematicBreak(),
        ]
    )
