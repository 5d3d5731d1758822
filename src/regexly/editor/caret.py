"""Caret offset <-> text run position mapping, and caret restoration.

Re-rendering replaces the whole highlighted subtree, so the caret cannot
survive on its own.  It is captured as a plain character offset before the
render and replayed onto the new runs afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from regexly.editor.surface import TextSurface
    from regexly.editor.text_runs import TextRun

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaretPosition:
    """A collapsed caret inside a specific text run.

    Attributes:
        run_index: Index of the run in document order.
        offset: Residual offset inside that run (0..len(run.text)).
    """

    run_index: int
    offset: int


def locate_caret(runs: Sequence[TextRun], offset: int) -> CaretPosition | None:
    """Find the run in which a caret at *offset* belongs.

    Accumulates run lengths until the running total reaches or exceeds
    *offset*; a caret sitting on a boundary therefore goes to the end of the
    earlier run.

    Returns:
        The caret position, or None when *offset* is negative, *runs* is
        empty, or *offset* lies beyond the end of the text.
    """
    if offset < 0:
        return None
    for run in runs:
        if run.end >= offset:
            return CaretPosition(run_index=run.index, offset=offset - run.start)
    return None


def caret_offset_of(runs: Sequence[TextRun], position: CaretPosition) -> int:
    """Inverse of :func:`locate_caret`.

    Raises:
        ValueError: If *position* does not point inside *runs*.
    """
    if not 0 <= position.run_index < len(runs):
        msg = f"Run index {position.run_index} out of range ({len(runs)} runs)"
        raise ValueError(msg)
    run = runs[position.run_index]
    if not 0 <= position.offset <= len(run.text):
        msg = f"Offset {position.offset} outside run of length {len(run.text)}"
        raise ValueError(msg)
    return run.start + position.offset


def restore_caret(surface: TextSurface, offset: int) -> None:
    """Place a collapsed caret at *offset* in the surface's current content.

    Falls back to the end of the content when the offset no longer fits, and
    when anything goes wrong while mapping or placing.  Never raises.
    """
    try:
        position = locate_caret(surface.text_runs(), offset)
        if position is None:
            surface.collapse_to_end()
        else:
            surface.place_caret(position)
        return
    except Exception:
        logger.debug(
            "Caret restore to %d failed; collapsing to end", offset, exc_info=True
        )

    try:
        surface.collapse_to_end()
    except Exception:
        logger.debug("Collapsing caret to end failed", exc_info=True)
