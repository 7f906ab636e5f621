#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/parsers/base.py
"""Base class for parsers producing the md2dom node tree."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from md2dom.ast import Document
from md2dom.exceptions import InvalidOptionsError
from md2dom.options.base import BaseParserOptions
from md2dom.utils.io_utils import read_text

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, bytes, IO[bytes], IO[str]]


class BaseParser(ABC):
    """Abstract base class for all parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    ``parse()`` accepts markdown text (str), raw bytes, a :class:`~pathlib.Path`
    or an open file object.

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input into a Document.

        Raises
        ------
        ParsingError
            If the input cannot be parsed

        """

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Return the text of ``input_data``; str input is the content itself."""
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return input_data.decode("utf-8-sig")
        return read_text(input_data)
