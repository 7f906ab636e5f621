#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security utilities for md2dom script generation.

The generated script assigns link and image destinations to live element
properties, so destinations using an executable or local scheme must never
reach the output unless the caller explicitly trusts the content.

Functions
---------
- is_dangerous_url: Classify a link or image destination as unsafe
- is_url_allowed: Apply the classification under an unsafe-mode switch
- sanitize_language_identifier: Sanitize code fence language identifiers
"""

import logging
import re

from md2dom.constants import (
    DANGEROUS_URL_PREFIXES,
    DATA_IMAGE_PREFIX,
    MAX_LANGUAGE_IDENTIFIER_LENGTH,
    SAFE_DATA_IMAGE_TYPES,
    SAFE_LANGUAGE_IDENTIFIER_PATTERN,
)

logger = logging.getLogger(__name__)


def _has_prefix(url: str, prefix: str) -> bool:
    return url[: len(prefix)].lower() == prefix


def is_dangerous_url(url: str | bytes) -> bool:
    """Return True if ``url`` looks like a potentially dangerous destination.

    Matching is a case-insensitive prefix test:

    - ``javascript:``, ``vbscript:``, ``file:`` and ``data:`` are dangerous
    - ``data:image/png;``, ``gif;``, ``jpeg;``, ``webp;`` and ``svg+xml;`` are
      the exceptions and are treated as safe
    - everything else (web schemes, relative paths, fragments) is safe

    Parameters
    ----------
    url : str or bytes
        Link, image or autolink destination

    Returns
    -------
    bool
        True when the destination must be omitted in safe mode

    Examples
    --------
    >>> is_dangerous_url("JavaScript:alert(1)")
    True
    >>> is_dangerous_url("data:image/png;base64,iVBORw0KGgo=")
    False
    >>> is_dangerous_url("data:image/bmp;base64,Qk0=")
    True
    >>> is_dangerous_url("https://example.com")
    False

    """
    if isinstance(url, bytes):
        url = url.decode("utf-8", errors="replace")

    if _has_prefix(url, DATA_IMAGE_PREFIX):
        image_type = url[len(DATA_IMAGE_PREFIX) :]
        return not any(_has_prefix(image_type, safe) for safe in SAFE_DATA_IMAGE_TYPES)

    return any(_has_prefix(url, prefix) for prefix in DANGEROUS_URL_PREFIXES)


def is_url_allowed(url: str, unsafe: bool = False) -> bool:
    """Decide whether ``url`` may be emitted.

    Parameters
    ----------
    url : str
        Destination to check
    unsafe : bool, default = False
        Trusted-content mode; disables the check entirely

    Returns
    -------
    bool
        True if the destination may be written to the script

    """
    if unsafe:
        return True
    if is_dangerous_url(url):
        logger.debug("Blocked dangerous URL: %.50s", url)
        return False
    return True


def sanitize_language_identifier(language: str) -> str:
    r"""Sanitize a code fence language identifier.

    The language ends up in a ``class`` attribute of the generated script, so
    only alphanumeric characters, underscores, hyphens and plus signs are
    accepted.

    Parameters
    ----------
    language : str
        Raw language identifier string to sanitize

    Returns
    -------
    str
        Sanitized language identifier, or empty string if invalid

    Examples
    --------
    >>> sanitize_language_identifier("python")
    'python'
    >>> sanitize_language_identifier("c++")
    'c++'
    >>> sanitize_language_identifier("python'); alert(1); ('")
    ''

    """
    if not language:
        return ""

    language = language.strip()

    if len(language) > MAX_LANGUAGE_IDENTIFIER_LENGTH:
        logger.warning(f"Language identifier too long ({len(language)} chars), ignoring")
        return ""

    if not re.match(SAFE_LANGUAGE_IDENTIFIER_PATTERN, language):
        logger.warning(f"Invalid language identifier {language!r}, ignoring")
        return ""

    return language
