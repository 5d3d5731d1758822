"""Match extraction: pattern + flags + text to an ordered match sequence.

All engine failures are converted to :class:`ExtractionResult` values at this
boundary so that a bad pattern can never interrupt the UI.
"""

# Pattern: Functional Core (pure functions, no UI or session state)

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from regexly.matching.models import (
    EMPTY_RESULT,
    ErrorKind,
    ExtractionError,
    ExtractionResult,
    MatchRecord,
)

if TYPE_CHECKING:
    from regexly.matching.flags import FlagSet

logger = logging.getLogger(__name__)


def _to_record(match: re.Match[str]) -> MatchRecord:
    return MatchRecord(text=match.group(0), start=match.start(), groups=match.groups())


def _engine_failure(exc: BaseException) -> ExtractionResult:
    message = str(exc) or type(exc).__name__
    return ExtractionResult(error=ExtractionError(ErrorKind.ENGINE_FAILURE, message))


def _scan_all(compiled: re.Pattern[str], text: str) -> tuple[MatchRecord, ...]:
    """Collect successive matches, each search resuming at the previous end.

    Stops right after a zero-length match: its end equals the resume
    position, so searching again would not advance.
    """
    records: list[MatchRecord] = []
    pos = 0
    while pos <= len(text):
        match = compiled.search(text, pos)
        if match is None:
            break
        records.append(_to_record(match))
        if match.start() == match.end():
            break
        pos = match.end()
    return tuple(records)


def extract(pattern: str, flags: FlagSet, text: str) -> ExtractionResult:
    """Apply *pattern* with *flags* to *text*.

    Args:
        pattern: Regular expression source, as typed by the user.
        flags: Flag set; ``global_`` selects all matches vs. the first one.
        text: Source text to search.

    Returns:
        ExtractionResult with ascending, non-overlapping matches, or with an
        ``INVALID_PATTERN`` / ``ENGINE_FAILURE`` error and no matches.
        Empty pattern or empty text yields an empty result with no error.
    """
    if not pattern or not text:
        return EMPTY_RESULT

    try:
        compiled = re.compile(pattern, flags.to_re_flags())
    except (re.error, ValueError) as exc:
        logger.debug("Invalid pattern %r: %s", pattern, exc)
        return ExtractionResult(
            error=ExtractionError(ErrorKind.INVALID_PATTERN, str(exc))
        )
    except (RecursionError, OverflowError, MemoryError) as exc:
        logger.warning("Regex engine failed compiling %r", pattern, exc_info=True)
        return _engine_failure(exc)

    try:
        if flags.global_:
            matches = _scan_all(compiled, text)
        else:
            match = compiled.search(text)
            matches = (_to_record(match),) if match is not None else ()
    except Exception as exc:
        logger.warning("Regex engine failed searching %r", pattern, exc_info=True)
        return _engine_failure(exc)

    return ExtractionResult(matches=matches)


def recompute(pattern: str, flags: FlagSet, text: str) -> ExtractionResult:
    """Pipeline entry point called by input handlers after every change."""
    result = extract(pattern, flags, text)
    if result.error is not None:
        logger.debug("recompute /%s/%s -> %s", pattern, flags, result.error.kind)
    else:
        logger.debug(
            "recompute /%s/%s over %d chars -> %d matches",
            pattern,
            flags,
            len(text),
            result.count,
        )
    return result
