"""Caret-preserving editing of the highlighted text view."""

from regexly.editor.caret import (
    CaretPosition,
    caret_offset_of,
    locate_caret,
    restore_caret,
)
from regexly.editor.editor import CaretPreservingEditor, call_now
from regexly.editor.session import SessionState, build_state
from regexly.editor.surface import MarkupSurface, TextSurface
from regexly.editor.text_runs import TextRun, plain_text, walk_text_runs

__all__ = [
    "CaretPosition",
    "CaretPreservingEditor",
    "MarkupSurface",
    "SessionState",
    "TextRun",
    "TextSurface",
    "build_state",
    "call_now",
    "caret_offset_of",
    "locate_caret",
    "plain_text",
    "restore_caret",
    "walk_text_runs",
]
