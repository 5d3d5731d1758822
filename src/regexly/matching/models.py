"""Result types produced by the match extractor.

These dataclasses are the contract between the extractor, the highlight
renderer and the UI (match counter, inline error label).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

type MatchSequence = tuple[MatchRecord, ...]


class ErrorKind(StrEnum):
    """Why extraction produced no matches."""

    INVALID_PATTERN = "invalid_pattern"  # re.error at compile time
    ENGINE_FAILURE = "engine_failure"  # anything else the engine raised


@dataclass(frozen=True)
class MatchRecord:
    """One matched occurrence.

    Attributes:
        text: Full matched text (group 0).
        start: Offset of the match in the source text (Python string index).
        groups: Capture groups in order; ``None`` for an optional group that
            did not participate in the match.
    """

    text: str
    start: int
    groups: tuple[str | None, ...] = ()

    @property
    def end(self) -> int:
        """Offset one past the last matched character."""
        return self.start + len(self.text)


@dataclass(frozen=True)
class ExtractionError:
    """Structured extraction failure.

    The message is passed through verbatim from the regex engine.
    """

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ExtractionResult:
    """Matches or an error, never both.

    Attributes:
        matches: Ascending, non-overlapping match records.
        error: Set when the pattern could not be compiled or the engine failed.
    """

    matches: MatchSequence = ()
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def count(self) -> int:
        """Match count for display; always 0 when an error is present."""
        if self.error is not None:
            return 0
        return len(self.matches)


EMPTY_RESULT = ExtractionResult()
