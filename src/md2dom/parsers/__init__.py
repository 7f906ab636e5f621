#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/parsers/__init__.py
"""Builders of the md2dom node tree."""

from md2dom.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
