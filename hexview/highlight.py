"""Pygments colorization for the non-interactive dump."""

from __future__ import annotations

import logging

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import HexdumpLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_PYGMENTS_VALID_STYLES: set[str] = set()
_PYGMENTS_INVALID_STYLES: set[str] = set()


def _normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _PYGMENTS_VALID_STYLES:
        return style
    if style in _PYGMENTS_INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        _PYGMENTS_INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _PYGMENTS_VALID_STYLES.add(style)
    return style


def colorize_dump(dump: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``dump`` with ANSI colors from the Pygments hexdump lexer."""
    formatter = Terminal256Formatter(style=_normalize_style(style))
    return pygments_highlight(dump, HexdumpLexer(), formatter)
