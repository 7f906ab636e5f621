#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/utils/__init__.py
"""Helpers shared by the md2dom parsers and renderers."""
