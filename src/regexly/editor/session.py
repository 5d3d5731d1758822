"""Immutable session snapshot: inputs plus everything derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field

from regexly.matching.extractor import recompute
from regexly.matching.flags import FlagSet
from regexly.matching.models import EMPTY_RESULT, ExtractionResult
from regexly.rendering.highlight import render
from regexly.rendering.markers import DEFAULT_MARKER, HighlightMarker


@dataclass(frozen=True)
class SessionState:
    """Everything the tester shows, as a single value.

    A new snapshot replaces the previous one after every input event; no
    field is ever mutated in place.

    Attributes:
        pattern: Pattern source as typed.
        flags: Active flag set.
        text: Source text under test.
        result: Matches or error for (pattern, flags, text).
        markup: Highlighted markup for ``text``; just the escaped text when
            there are no matches or an error.
    """

    pattern: str = ""
    flags: FlagSet = field(default_factory=FlagSet)
    text: str = ""
    result: ExtractionResult = EMPTY_RESULT
    markup: str = ""

    @property
    def match_count(self) -> int:
        return self.result.count

    @property
    def error_message(self) -> str | None:
        return self.result.error.message if self.result.error else None


def build_state(
    pattern: str,
    flags: FlagSet,
    text: str,
    marker: HighlightMarker = DEFAULT_MARKER,
) -> SessionState:
    """Run extraction and rendering for one input snapshot."""
    result = recompute(pattern, flags, text)
    return SessionState(
        pattern=pattern,
        flags=flags,
        text=text,
        result=result,
        markup=render(text, result.matches, marker),
    )
