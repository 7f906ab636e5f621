#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the md2dom parser and renderer.

Each component has its own frozen Options dataclass.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from md2dom.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2dom.options.markdown import MarkdownParserOptions
from md2dom.options.script import ScriptRendererOptions, is_script_identifier


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs
        Field values to override

    Returns
    -------
    Any
        New instance of the same class

    """
    return replace(options, **kwargs)


__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "ScriptRendererOptions",
    "create_updated_options",
    "is_script_identifier",
]
