"""md2dom - render markdown as a script that builds the document in the DOM.

md2dom parses markdown into a small node tree and renders that tree into
imperative script statements (``document.createElement``, ``appendChild``,
...) which rebuild the document as live elements when executed in a browser.

Examples
--------
    >>> from md2dom import to_script
    >>> print(to_script("## Title"), end="")
    let mdDiv = document.createElement('div');
    mdDiv.id = 'mdDiv';
    let el2 = document.createElement('h2');
    el2.textContent = `Title`;
    mdDiv.appendChild(el2);
    return mdDiv;
    };

Requirements
------------
- Python 3.10+
- mistune and PyYAML for markdown input, rich for the tree dump of the CLI

"""

import logging

__version__ = "0.3.0"

from md2dom.api import to_ast, to_script  # noqa: E402
from md2dom.ast import Document  # noqa: E402
from md2dom.exceptions import (  # noqa: E402
    DependencyError,
    InvalidOptionsError,
    Md2DomError,
    MissingParentBindingError,
    MissingSelfBindingError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    UnexpectedNodeShapeError,
    ValidationError,
)
from md2dom.options import MarkdownParserOptions, ScriptRendererOptions  # noqa: E402
from md2dom.renderers.script import ScriptRenderer, wrap_script  # noqa: E402

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DependencyError",
    "Document",
    "InvalidOptionsError",
    "MarkdownParserOptions",
    "Md2DomError",
    "MissingParentBindingError",
    "MissingSelfBindingError",
    "OutputWriteError",
    "ParsingError",
    "RenderingError",
    "ScriptRenderer",
    "ScriptRendererOptions",
    "UnexpectedNodeShapeError",
    "ValidationError",
    "__version__",
    "to_ast",
    "to_script",
    "wrap_script",
]
