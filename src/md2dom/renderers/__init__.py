#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/renderers/__init__.py
"""Renderers turning the md2dom node tree into output text."""

from md2dom.renderers.base import BaseRenderer
from md2dom.renderers.script import HANDLERS, ScriptRenderer, aggregate_inline_run, script_prologue, wrap_script
from md2dom.renderers.state import IdentifierAllocator, RenderState, ScriptSink

__all__ = [
    "BaseRenderer",
    "HANDLERS",
    "IdentifierAllocator",
    "RenderState",
    "ScriptRenderer",
    "ScriptSink",
    "aggregate_inline_run",
    "script_prologue",
    "wrap_script",
]
