"""Editable text-surface capability.

The editor talks to its display through :class:`TextSurface`.  The browser
implementation lives in ``regexly.pages.editor_bridge``; :class:`MarkupSurface`
is an in-memory implementation over selectolax text runs, used for
server-side rendering checks and in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from regexly.editor.caret import CaretPosition, caret_offset_of, locate_caret
from regexly.editor.text_runs import TextRun, total_length, walk_text_runs
from regexly.rendering.highlight import escape_html

if TYPE_CHECKING:
    from collections.abc import Sequence


class TextSurface(Protocol):
    """Protocol for an editable surface that displays rendered markup."""

    def set_markup(self, markup: str) -> None:
        """Replace the displayed content with *markup*."""
        ...

    def plain_text(self) -> str:
        """Current visible text, ignoring markup."""
        ...

    def caret_offset(self) -> int:
        """Caret position as a character count from the start of the text."""
        ...

    def text_runs(self) -> Sequence[TextRun]:
        """Text nodes of the current content, in document order."""
        ...

    def place_caret(self, position: CaretPosition) -> None:
        """Collapse the caret inside a run at a residual offset."""
        ...

    def collapse_to_end(self) -> None:
        """Collapse the caret after the last character."""
        ...


class MarkupSurface:
    """In-memory surface that behaves like a contenteditable element.

    ``set_markup`` is destructive: like assigning ``innerHTML``, it rebuilds
    every text node and drops the caret back to the start.  ``type_text`` and
    ``delete_backward`` edit the existing text nodes in place, the way a
    browser applies keystrokes.
    """

    def __init__(self, markup: str = "") -> None:
        self._markup = ""
        self._runs: list[TextRun] = []
        self._caret: CaretPosition | None = None
        self._at_end = False
        self.set_markup(markup)

    @property
    def markup(self) -> str:
        return self._markup

    def set_markup(self, markup: str) -> None:
        self._markup = markup
        self._runs = walk_text_runs(markup)
        self._caret = None
        self._at_end = False

    def plain_text(self) -> str:
        return "".join(run.text for run in self._runs)

    def text_runs(self) -> list[TextRun]:
        return list(self._runs)

    def caret_offset(self) -> int:
        if self._at_end:
            return total_length(self._runs)
        if self._caret is None:
            return 0
        return caret_offset_of(self._runs, self._caret)

    def place_caret(self, position: CaretPosition) -> None:
        caret_offset_of(self._runs, position)  # validates
        self._caret = position
        self._at_end = False

    def collapse_to_end(self) -> None:
        self._caret = None
        self._at_end = True

    def set_caret_offset(self, offset: int) -> None:
        """Move the caret as a mouse click at *offset* would.

        Raises:
            ValueError: If *offset* lies outside the text.
        """
        position = locate_caret(self._runs, offset)
        if position is None:
            if offset == 0 and not self._runs:
                self._caret = None
                self._at_end = False
                return
            length = total_length(self._runs)
            msg = f"Caret offset {offset} outside text of length {length}"
            raise ValueError(msg)
        self.place_caret(position)

    def type_text(self, text: str) -> None:
        """Insert *text* at the caret inside the caret's text node."""
        offset = self.caret_offset()
        self._splice(offset, offset, text)

    def delete_backward(self, count: int = 1) -> None:
        """Delete up to *count* characters before the caret (Backspace)."""
        end = self.caret_offset()
        start = max(0, end - count)
        self._splice(start, end, "")

    def _splice(self, start: int, end: int, insert: str) -> None:
        texts = [run.text for run in self._runs]
        target = locate_caret(self._runs, start)

        for i, run in enumerate(self._runs):
            lo = max(start, run.start)
            hi = min(end, run.end)
            if lo < hi:
                texts[i] = texts[i][: lo - run.start] + texts[i][hi - run.start :]

        if target is None:
            texts.append(insert)
        else:
            current = texts[target.run_index]
            texts[target.run_index] = (
                current[: target.offset] + insert + current[target.offset :]
            )

        runs: list[TextRun] = []
        pos = 0
        for text in texts:
            if not text:
                continue
            runs.append(TextRun(index=len(runs), text=text, start=pos))
            pos += len(text)

        self._runs = runs
        self._markup = "".join(escape_html(run.text) for run in runs)
        self._at_end = False
        self._caret = locate_caret(runs, start + len(insert))
