"""Match extraction: turn a pattern, flag set and text into match records."""

from regexly.matching.extractor import extract, recompute
from regexly.matching.flags import FLAG_DETAILS, FlagDetail, FlagName, FlagSet
from regexly.matching.models import (
    EMPTY_RESULT,
    ErrorKind,
    ExtractionError,
    ExtractionResult,
    MatchRecord,
    MatchSequence,
)

__all__ = [
    "EMPTY_RESULT",
    "FLAG_DETAILS",
    "ErrorKind",
    "ExtractionError",
    "ExtractionResult",
    "FlagDetail",
    "FlagName",
    "FlagSet",
    "MatchRecord",
    "MatchSequence",
    "extract",
    "recompute",
]
