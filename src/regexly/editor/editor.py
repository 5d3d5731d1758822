"""Caret-preserving editor around a highlighted, editable surface.

Per edit event the editor runs four steps:

1. capture the caret offset from the surface
2. read the surface's plain text as the new source text
3. recompute matches, render, and replace the surface content
4. on the next idle tick, replay the captured offset onto the new text runs

Step 4 is deferred so that the new text nodes exist before the walk runs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from regexly.editor.caret import restore_caret
from regexly.editor.session import SessionState, build_state
from regexly.matching.flags import FlagSet
from regexly.rendering.markers import DEFAULT_MARKER, HighlightMarker

if TYPE_CHECKING:
    from collections.abc import Callable

    from regexly.editor.surface import TextSurface
    from regexly.matching.flags import FlagName

logger = logging.getLogger(__name__)

type Deferrer = Callable[[Callable[[], None]], None]
type StateListener = Callable[[SessionState], None]


def call_now(callback: Callable[[], None]) -> None:
    """Deferrer that runs the callback immediately."""
    callback()


class CaretPreservingEditor:
    """Keeps a surface's highlighting in sync with its text and the pattern.

    Args:
        surface: Display to render into and read edits from.
        pattern: Initial pattern.
        flags: Initial flag set (defaults to ``g`` only).
        text: Initial source text.
        marker: Highlight wrapper for matches.
        defer: Schedules a callback for the next idle tick.  The web page
            passes a one-shot timer; tests pass a queue they flush by hand.
    """

    def __init__(
        self,
        surface: TextSurface,
        *,
        pattern: str = "",
        flags: FlagSet | None = None,
        text: str = "",
        marker: HighlightMarker = DEFAULT_MARKER,
        defer: Deferrer = call_now,
    ) -> None:
        self._surface = surface
        self._marker = marker
        self._defer = defer
        self._listeners: list[StateListener] = []
        self._state = build_state(pattern, flags or FlagSet(), text, marker)
        surface.set_markup(self._state.markup)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def surface(self) -> TextSurface:
        return self._surface

    def on_change(self, listener: StateListener) -> None:
        """Register *listener* to receive every new session snapshot."""
        self._listeners.append(listener)

    # -- inputs ------------------------------------------------------------

    def handle_edit(self) -> SessionState:
        """React to the user typing into the surface."""
        caret = self._capture_caret()
        text = self._surface.plain_text()
        state = self._apply(self._state.pattern, self._state.flags, text)
        self._defer(lambda: restore_caret(self._surface, caret))
        return state

    def set_pattern(self, pattern: str) -> SessionState:
        return self._rerender_in_place(pattern, self._state.flags)

    def set_flags(self, flags: FlagSet) -> SessionState:
        return self._rerender_in_place(self._state.pattern, flags)

    def toggle_flag(self, name: FlagName) -> SessionState:
        return self.set_flags(self._state.flags.toggled(name))

    def set_text(self, text: str) -> SessionState:
        """Replace the source text wholesale; the caret goes to the end."""
        state = self._apply(self._state.pattern, self._state.flags, text)
        self._defer(self._surface.collapse_to_end)
        return state

    # -- internals ---------------------------------------------------------

    def _capture_caret(self) -> int:
        try:
            return self._surface.caret_offset()
        except Exception:
            logger.debug("Could not read caret; will restore to end", exc_info=True)
        try:
            return len(self._surface.plain_text())
        except Exception:
            logger.debug("Could not read surface text", exc_info=True)
            return len(self._state.text)

    def _rerender_in_place(self, pattern: str, flags: FlagSet) -> SessionState:
        caret = self._capture_caret()
        state = self._apply(pattern, flags, self._state.text)
        self._defer(lambda: restore_caret(self._surface, caret))
        return state

    def _apply(self, pattern: str, flags: FlagSet, text: str) -> SessionState:
        state = build_state(pattern, flags, text, self._marker)
        self._state = state
        self._surface.set_markup(state.markup)
        for listener in self._listeners:
            listener(state)
        return state
