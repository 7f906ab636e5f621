#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/utils/escape.py
"""Escaping of values embedded in generated script statements.

Two literal forms are used by the renderer:

- single-quoted strings for tag names, attribute names and values, URLs
- template literals (backquoted) for text content, which keeps multi-line
  text readable in the generated script

Both functions return the literal *body* only; the caller adds the quotes.

"""

from __future__ import annotations

from urllib.parse import quote

from md2dom.constants import URL_SAFE_CHARACTERS

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def js_string(value: str) -> str:
    r"""Escape ``value`` for use inside a single-quoted script string.

    ``</`` is also broken up so the script can be inlined in a ``<script>``
    element.

    Examples
    --------
    >>> js_string("it's")
    "it\\'s"
    >>> js_string("a\nb")
    'a\\nb'

    """
    escaped = "".join(_JS_STRING_ESCAPES.get(char, char) for char in value)
    return escaped.replace("</", "<\\/")


def js_template(value: str) -> str:
    r"""Escape ``value`` for use inside a backquoted template literal.

    Backslashes, backquotes and ``${`` placeholders are escaped; newlines are
    kept as they are.

    Examples
    --------
    >>> js_template("cost: ${price}")
    'cost: \\${price}'
    >>> js_template("`x`")
    '\\`x\\`'

    """
    escaped = value.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
    return escaped.replace("</", "<\\/")


def escape_url(url: str) -> str:
    """Percent-escape characters of ``url`` that are not valid in a URL.

    Existing escapes and reserved characters are left alone.

    Examples
    --------
    >>> escape_url("https://example.com/a b?q=ü")
    'https://example.com/a%20b?q=%C3%BC'

    """
    return quote(url, safe=URL_SAFE_CHARACTERS)
