"""Render source text with matches wrapped in highlight markers.

The output is safe to assign to ``innerHTML``: every literal segment,
including the text inside a marker, is entity-escaped.  Stripping the
markers and un-escaping recovers the source text exactly.
"""

# Pattern: Functional Core (pure string transformation)

from __future__ import annotations

import html as html_module
import re
from typing import TYPE_CHECKING

from regexly.rendering.markers import DEFAULT_MARKER, HighlightMarker

if TYPE_CHECKING:
    from collections.abc import Sequence

    from regexly.matching.models import MatchRecord

# Order matters: "&" first so later entities are not double-escaped.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(text: str) -> str:
    """Escape the five structural characters of HTML."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _check_match(match: MatchRecord, cursor: int, text_length: int) -> None:
    if match.start < cursor:
        msg = (
            f"Match at {match.start} overlaps or precedes previous match "
            f"ending at {cursor}"
        )
        raise ValueError(msg)
    if match.end > text_length:
        msg = f"Match [{match.start}:{match.end}] exceeds text length {text_length}"
        raise ValueError(msg)


def render(
    text: str,
    matches: Sequence[MatchRecord],
    marker: HighlightMarker = DEFAULT_MARKER,
) -> str:
    """Build display markup for *text* with *matches* highlighted.

    Args:
        text: Source text.
        matches: Ascending, non-overlapping match records over *text*, as
            produced by :func:`regexly.matching.extract`.
        marker: Wrapper element for matched spans.

    Returns:
        Escaped markup.  With no matches this is just the escaped text.

    Raises:
        ValueError: If *matches* are out of order, overlap, or run past the
            end of *text*.  The renderer never reorders or drops characters
            to paper over a bad sequence.
    """
    if not matches:
        return escape_html(text)

    parts: list[str] = []
    cursor = 0
    for match in matches:
        _check_match(match, cursor, len(text))
        parts.append(escape_html(text[cursor : match.start]))
        parts.append(marker.wrap(escape_html(match.text)))
        cursor = match.end
    parts.append(escape_html(text[cursor:]))
    return "".join(parts)


def unrender(markup: str, marker: HighlightMarker = DEFAULT_MARKER) -> str:
    """Inverse of :func:`render`: drop markers and decode entities."""
    stripped = re.sub(
        f"{re.escape(marker.open_tag)}|{re.escape(marker.close_tag)}", "", markup
    )
    return html_module.unescape(stripped)
