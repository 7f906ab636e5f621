#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/constants.py
"""Constants shared across md2dom modules.

This module collects the defaults for script generation, the URL safety
tables and the dependency specifications used by the optional parsers.

"""

from __future__ import annotations

# =============================================================================
# Script generation
# =============================================================================

# Identifiers are "<prefix><n>"; the counter starts here and is incremented
# before every use, so the first allocated identifier is "el2".
IDENTIFIER_PREFIX = "el"
IDENTIFIER_SEED = 1

DEFAULT_ROOT_ID = "mdDiv"
DEFAULT_SITE_NAME = "mdtest"
DEFAULT_STYLE_OBJECT = "mdStyle"

# Style keys looked up on the style object for styled element kinds
STYLE_KEY_BLOCKQUOTE = "block"
STYLE_KEY_PARAGRAPH = "p"
STYLE_KEY_LINK = "a"
STYLE_KEY_CODE = "code"
STYLE_KEY_LIST_ITEM = "li"

RAW_HTML_OMITTED_COMMENT = "// raw HTML omitted"

DEFAULT_STYLE_SHEET = """let mdStyle = {
\th1: {fontSize: '2rem', margin: '0 1rem',},
\th2: {fontSize: '1.5rem'},
\th3: {fontSize: '1.2rem'},
\th4: {fontSize: '1rem'},
\th5: {fontSize: '1rem'},
\th6: {fontSize: '1rem'},
\tp: {margin: '1rem 0'},
\tcode: {fontFamily: 'monospace'},
\tblock: {margin: '0px 40px', color: 'purple', backgroundColor: 'lightgrey',},
\ta: {color: 'blue', textDecoration: 'underline',},
\tul: {margin: '0 0 0 10px'},
\tol: {margin: '0 0 0 10px'},
\tli: {listStylePosition: 'outside', margin: '0 0 0 30px'},
};
"""

DEFAULT_CONTAINER_STYLE = {
    "margin": "10px",
    "border": "1px dashed blue",
    "position": "relative",
    "minHeight": "200px",
}

# =============================================================================
# URL safety
# =============================================================================

DANGEROUS_URL_PREFIXES = ("javascript:", "vbscript:", "file:", "data:")
DATA_IMAGE_PREFIX = "data:image/"
SAFE_DATA_IMAGE_TYPES = ("png;", "gif;", "jpeg;", "webp;", "svg+xml;")

# Characters left untouched when percent-escaping link and image destinations
URL_SAFE_CHARACTERS = "-_.!~*'();/?:@&=+$,#%[]"

# =============================================================================
# Attribute filtering
# =============================================================================

DATA_ATTRIBUTE_PREFIX = "data-"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_FRONTMATTER = [("pyyaml", "yaml", ">=6.0")]

SUMMARY_HEADING = "# summary"

SAFE_LANGUAGE_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_+\-]+$"
MAX_LANGUAGE_IDENTIFIER_LENGTH = 50
