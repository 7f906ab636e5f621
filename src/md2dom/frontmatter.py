#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/frontmatter.py
"""Front matter and summary sections of markdown sources.

A source may start with a YAML block fenced by ``---`` lines, and may contain
a ``# Summary`` section. Both are split off the text before it is parsed:

    ---
    title: Release notes
    author: Jane
    ---
    # Summary
    What changed, in short.

    # Details
    ...

"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from md2dom.constants import DEPS_FRONTMATTER, SUMMARY_HEADING
from md2dom.exceptions import ParsingError
from md2dom.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_FENCE = "---"
_LEVEL_ONE_HEADING = re.compile(r"^#[ \t]")


@dataclass
class DocumentMetadata:
    """Metadata read from the front matter of a source.

    Parameters
    ----------
    title : str or None
        Document title
    author : str or None
        Author name
    date : str or None
        Date in ISO format when YAML produced a date, otherwise as written
    name : str or None
        Short name of the document
    summary : str or None
        Text of the ``# Summary`` section, when extracted
    extra : dict
        Any other front matter keys

    """

    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    name: Optional[str] = None
    summary: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> DocumentMetadata:
        """Build metadata from a parsed front matter mapping."""
        known = {"title", "author", "date", "name"}
        date = data.get("date")
        if isinstance(date, (datetime.date, datetime.datetime)):
            date = date.isoformat()
        return cls(
            title=_optional_str(data.get("title")),
            author=_optional_str(data.get("author")),
            date=_optional_str(date),
            name=_optional_str(data.get("name")),
            extra={str(key): value for key, value in data.items() if key not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the fields that are set, ``extra`` keys merged in."""
        result: dict[str, Any] = dict(self.extra)
        for key in ("title", "author", "date", "name", "summary"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def split_front_matter(text: str) -> tuple[Optional[str], str]:
    """Split a leading ``---`` fenced block off ``text``.

    Parameters
    ----------
    text : str
        Markdown source

    Returns
    -------
    tuple
        ``(front_matter, body)``; ``front_matter`` is None when the text does
        not start with a fence

    Raises
    ------
    ParsingError
        If the opening fence has no closing fence

    Examples
    --------
    >>> split_front_matter("---\\ntitle: A\\n---\\n# Body\\n")
    ('title: A\\n', '# Body\\n')
    >>> split_front_matter("# Body\\n")
    (None, '# Body\\n')

    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != _FENCE:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n").rstrip() == _FENCE:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    raise ParsingError("No end of front matter section", parsing_stage="frontmatter")


def extract_summary(text: str) -> tuple[Optional[str], str]:
    """Split the ``# Summary`` section off ``text``.

    The section starts at a level-one heading reading "Summary" (any case) and
    runs up to the next level-one heading or the end of the text. The heading
    line itself is dropped.

    Returns
    -------
    tuple
        ``(summary, remaining_text)``; ``summary`` is None when there is no
        summary heading

    Examples
    --------
    >>> extract_summary("# Summary\\nShort.\\n\\n# Intro\\nLong.\\n")
    ('Short.', '# Intro\\nLong.\\n')

    """
    lines = text.splitlines(keepends=True)
    start = None
    for index, line in enumerate(lines):
        if line.strip().lower() == SUMMARY_HEADING:
            start = index
            break
    if start is None:
        return None, text

    end = len(lines)
    for index in range(start + 1, len(lines)):
        if _LEVEL_ONE_HEADING.match(lines[index]):
            end = index
            break

    summary = "".join(lines[start + 1 : end]).strip()
    remaining = "".join(lines[:start] + lines[end:])
    return summary, remaining


@requires_dependencies("frontmatter", DEPS_FRONTMATTER)
def parse_front_matter(front_matter: str) -> DocumentMetadata:
    """Parse YAML front matter into :class:`DocumentMetadata`.

    Raises
    ------
    ParsingError
        If the YAML is invalid or is not a mapping

    """
    import yaml

    try:
        data = yaml.safe_load(front_matter)
    except yaml.YAMLError as e:
        raise ParsingError(f"Invalid YAML front matter: {e}", parsing_stage="frontmatter", original_error=e) from e

    if data is None:
        return DocumentMetadata()
    if not isinstance(data, dict):
        raise ParsingError(
            f"Front matter must be a mapping, got {type(data).__name__}", parsing_stage="frontmatter"
        )

    metadata = DocumentMetadata.from_mapping(data)
    logger.debug("Front matter keys: %s", ", ".join(str(key) for key in data))
    return metadata


def read_sections(text: str, parse_frontmatter: bool = True, summary: bool = False) -> tuple[DocumentMetadata, str]:
    """Split a source into its metadata and the markdown body to render.

    Parameters
    ----------
    text : str
        Markdown source
    parse_frontmatter : bool, default True
        Split off and parse the YAML front matter
    summary : bool, default False
        Split off the ``# Summary`` section into ``metadata.summary``

    Returns
    -------
    tuple
        ``(metadata, body)``

    """
    metadata = DocumentMetadata()
    body = text

    if parse_frontmatter:
        front_matter, body = split_front_matter(body)
        if front_matter is not None:
            metadata = parse_front_matter(front_matter)

    if summary:
        metadata.summary, body = extract_summary(body)

    return metadata, body
