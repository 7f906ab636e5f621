#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering a document tree to a DOM-building script."""
# src/md2dom/options/script.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, Optional

from md2dom.constants import DEFAULT_ROOT_ID, DEFAULT_SITE_NAME
from md2dom.options.base import BaseRendererOptions

_SCRIPT_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_script_identifier(name: str) -> bool:
    """Return True if ``name`` can be used as a script variable name."""
    return bool(_SCRIPT_IDENTIFIER.match(name))


@dataclass(frozen=True)
class ScriptRendererOptions(BaseRendererOptions):
    """Configuration options for the script renderer.

    Parameters
    ----------
    unsafe : bool, default False
        Trust the content: dangerous link and image destinations are emitted
        and raw HTML is passed through ``innerHTML``.
    debug : bool, default False
        Precede every attachment statement with a comment naming the child,
        the parent and the parent kind.
    root_id : str, default "mdDiv"
        Variable name and DOM id of the root container.
    style_object : str or None, default None
        Name of a style object (such as ``mdStyle``); when set, styled
        elements get ``Object.assign(<el>.style, <style_object>.<key>)``.
    container_style : mapping or None, default None
        Inline style properties assigned to the root container.
    standalone : bool, default False
        Wrap the output in the site object and its ``render`` function.
    site_name : str, default "mdtest"
        Name stored in the site object of a standalone script.
    style_sheet : str or None, default None
        Script text defining the style object, inserted before the body of a
        standalone script.
    site_script : str or None, default None
        Script text appended after the body of a standalone script.

    """

    unsafe: bool = field(
        default=False,
        metadata={"help": "Emit dangerous URLs and pass raw HTML through innerHTML", "importance": "security"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Emit a debug comment before every attachment statement", "importance": "advanced"},
    )
    root_id: str = field(
        default=DEFAULT_ROOT_ID,
        metadata={"help": "Variable name and DOM id of the root container", "importance": "core"},
    )
    style_object: Optional[str] = field(
        default=None,
        metadata={"help": "Style object whose entries are assigned to styled elements", "importance": "core"},
    )
    container_style: Optional[Mapping[str, str]] = field(
        default=None,
        metadata={"help": "Inline style properties of the root container", "importance": "advanced"},
    )
    standalone: bool = field(
        default=False,
        metadata={"help": "Wrap the body in the site object and render function", "importance": "core"},
    )
    site_name: str = field(
        default=DEFAULT_SITE_NAME,
        metadata={"help": "Site name of a standalone script", "importance": "advanced"},
    )
    style_sheet: Optional[str] = field(
        default=None,
        metadata={"help": "Style sheet script inserted before the body", "importance": "advanced"},
    )
    site_script: Optional[str] = field(
        default=None,
        metadata={"help": "Site script appended after the body", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate identifier options.

        Raises
        ------
        ValueError
            If ``root_id`` or ``style_object`` is not a valid script identifier.

        """
        super().__post_init__()

        if not is_script_identifier(self.root_id):
            raise ValueError(f"root_id must be a valid script identifier, got {self.root_id!r}")

        if self.style_object is not None and not is_script_identifier(self.style_object):
            raise ValueError(f"style_object must be a valid script identifier, got {self.style_object!r}")

        if self.container_style is not None:
            for key in self.container_style:
                if not is_script_identifier(key):
                    raise ValueError(f"container_style keys must be style property names, got {key!r}")
