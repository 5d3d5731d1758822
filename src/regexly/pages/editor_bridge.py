"""Browser-backed text surface for the caret-preserving editor.

The contenteditable element lives in the client.  Python keeps a mirror of
the markup it last pushed (and the text runs derived from it) and receives
the text and caret the browser reports on each ``input`` event.  All DOM work
happens in ``static/regexly-editor.js``.

Every DOM call carries the text the server believes the element holds.  If
the user has typed since, the browser drops the call; the input event for
that keystroke is already queued and triggers a fresh render.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from regexly.editor.caret import CaretPosition, caret_offset_of
from regexly.editor.text_runs import TextRun, total_length, walk_text_runs

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

EDITOR_SCRIPT_URL = "/static/regexly-editor.js"
EDITOR_CSS_URL = "/static/regexly.css"

# Client -> server event carrying {text, caret} after every keystroke
EDIT_EVENT = "regexly_edit"


def _js_call(function: str, *args: Any) -> str:
    """Build a JS call with every argument JSON-encoded."""
    encoded = ", ".join(json.dumps(arg) for arg in args)
    return f"window.regexly && window.regexly.{function}({encoded});"


class BrowserSurface:
    """:class:`~regexly.editor.surface.TextSurface` over a DOM element.

    Args:
        dom_id: ``id`` attribute of the contenteditable element.
        run_javascript: Sends a JS snippet to the page's client, typically
            ``client.run_javascript``.
    """

    def __init__(self, dom_id: str, run_javascript: Callable[[str], Any]) -> None:
        self._dom_id = dom_id
        self._run_javascript = run_javascript
        self._markup = ""
        self._runs: list[TextRun] = []
        self._text = ""
        self._dom_text = ""
        self._caret: int | None = None

    @property
    def dom_id(self) -> str:
        return self._dom_id

    def attach_script(self) -> str:
        """JS that wires the element's input/paste/keydown handlers."""
        return _js_call("attach", self._dom_id, EDIT_EVENT)

    def report(self, text: str, caret: int | None) -> None:
        """Record the text and caret the browser sent with an edit event."""
        logger.debug("Edit event: %d chars, caret %s", len(text), caret)
        self._text = text
        self._dom_text = text
        self._caret = caret

    # -- TextSurface --------------------------------------------------------

    def set_markup(self, markup: str) -> None:
        self._markup = markup
        self._runs = walk_text_runs(markup)
        self._text = "".join(run.text for run in self._runs)
        expected, self._dom_text = self._dom_text, self._text
        self._run_javascript(_js_call("setMarkup", self._dom_id, markup, expected))

    def plain_text(self) -> str:
        return self._text

    def caret_offset(self) -> int:
        # No caret inside the element: treat as "at end"
        if self._caret is None:
            return len(self._text)
        return self._caret

    def text_runs(self) -> list[TextRun]:
        return list(self._runs)

    def place_caret(self, position: CaretPosition) -> None:
        self._caret = caret_offset_of(self._runs, position)
        self._run_javascript(
            _js_call(
                "placeCaret",
                self._dom_id,
                position.run_index,
                position.offset,
                self._dom_text,
            )
        )

    def collapse_to_end(self) -> None:
        self._caret = total_length(self._runs)
        self._run_javascript(_js_call("collapseToEnd", self._dom_id, self._dom_text))
