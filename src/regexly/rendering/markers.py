"""Highlight marker definition.

A marker is a plain wrapper element with a single class.  It carries no data
beyond "this span matched"; colours and spacing live in the stylesheet.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_MARKER_TAG = "mark"
DEFAULT_MARKER_CLASS = "regex-match"

_TAG_NAME = re.compile(r"[a-z][a-z0-9]*")
_CLASS_NAME = re.compile(r"-?[_a-zA-Z][_a-zA-Z0-9-]*")


@dataclass(frozen=True)
class HighlightMarker:
    """Open/close tag pair wrapped around each match."""

    tag: str = DEFAULT_MARKER_TAG
    css_class: str = DEFAULT_MARKER_CLASS

    def __post_init__(self) -> None:
        if not _TAG_NAME.fullmatch(self.tag):
            msg = f"Invalid marker tag name: {self.tag!r}"
            raise ValueError(msg)
        if not _CLASS_NAME.fullmatch(self.css_class):
            msg = f"Invalid marker class name: {self.css_class!r}"
            raise ValueError(msg)

    @property
    def open_tag(self) -> str:
        return f'<{self.tag} class="{self.css_class}">'

    @property
    def close_tag(self) -> str:
        return f"</{self.tag}>"

    def wrap(self, escaped: str) -> str:
        """Wrap already-escaped text in the marker."""
        return f"{self.open_tag}{escaped}{self.close_tag}"


DEFAULT_MARKER = HighlightMarker()
