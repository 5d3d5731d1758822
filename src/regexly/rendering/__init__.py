"""Highlight rendering for matched text."""

from regexly.rendering.highlight import escape_html, render, unrender
from regexly.rendering.markers import (
    DEFAULT_MARKER,
    DEFAULT_MARKER_CLASS,
    DEFAULT_MARKER_TAG,
    HighlightMarker,
)

__all__ = [
    "DEFAULT_MARKER",
    "DEFAULT_MARKER_CLASS",
    "DEFAULT_MARKER_TAG",
    "HighlightMarker",
    "escape_html",
    "render",
    "unrender",
]
