"""Map rendered markup to an ordered list of text runs.

A text run is one DOM text node together with its position in the surface's
plain-text coordinate space.  Caret offsets are mapped onto (run, residual)
pairs through this list.

The walk must agree with the browser-side ``walkTextRuns`` in
``static/regexly-editor.js``:

- text nodes are visited in document order, whitespace kept verbatim
  (the surface uses ``white-space: pre-wrap``)
- ``<br>`` contributes a one-character ``"\\n"`` run
- ``script`` / ``style`` / ``noscript`` / ``template`` are skipped entirely

Note that the HTML parser normalises ``\\r\\n`` and lone ``\\r`` to ``\\n``,
exactly as a browser does when the markup is assigned to ``innerHTML``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from selectolax.lexbor import LexborHTMLParser

# Tags whose content is not visible text
_SKIP_TAGS = frozenset(("script", "style", "noscript", "template"))

# The markup is parsed inside a wrapper element so that leading whitespace
# is not discarded by the "before head" insertion mode.
_WRAPPER_OPEN = "<div>"
_WRAPPER_CLOSE = "</div>"


@dataclass(frozen=True)
class TextRun:
    """One text node's contribution to the surface text.

    Attributes:
        index: Position of the run in document order.
        text: Decoded text of the node.
        start: Offset of the run's first character in the surface text.
    """

    index: int
    text: str
    start: int

    @property
    def end(self) -> int:
        """Offset one past the run's last character."""
        return self.start + len(self.text)


def walk_text_runs(markup: str) -> list[TextRun]:
    """Return the text runs of *markup* in document order.

    Empty text nodes are skipped; they cannot hold a visible caret.
    """
    if not markup:
        return []

    tree = LexborHTMLParser(f"{_WRAPPER_OPEN}{markup}{_WRAPPER_CLOSE}")
    body = tree.body
    wrapper = body.child if body is not None else None
    if wrapper is None:
        return []

    runs: list[TextRun] = []
    offset = 0

    def _append(text: str) -> None:
        nonlocal offset
        runs.append(TextRun(index=len(runs), text=text, start=offset))
        offset += len(text)

    def _walk(node: Any) -> None:
        tag = node.tag

        # Text node: selectolax uses "-text" as the tag
        if tag == "-text":
            text = node.text_content
            if text:
                _append(text)
            return

        if tag in _SKIP_TAGS:
            return

        if tag == "br":
            _append("\n")
            return

        child = node.child
        while child is not None:
            _walk(child)
            child = child.next

    child = wrapper.child
    while child is not None:
        _walk(child)
        child = child.next

    return runs


def plain_text(markup: str) -> str:
    """Visible text of *markup*, markers and entities removed."""
    return "".join(run.text for run in walk_text_runs(markup))


def total_length(runs: list[TextRun]) -> int:
    """Length of the surface text covered by *runs*."""
    return runs[-1].end if runs else 0
