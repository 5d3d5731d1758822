"""Regex tester page.

Pattern input, flag checkboxes, inline error, match counter, and the
highlighted test text, which stays editable in place.  Every input event
drives the same pipeline: extract -> render -> push markup -> restore caret.

Route: /
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from nicegui import ui

from regexly.config import get_settings
from regexly.editor.editor import CaretPreservingEditor
from regexly.matching.flags import FLAG_DETAILS
from regexly.pages.editor_bridge import (
    EDIT_EVENT,
    EDITOR_CSS_URL,
    EDITOR_SCRIPT_URL,
    BrowserSurface,
)
from regexly.pages.layout import TAGLINE, page_layout
from regexly.pages.registry import page_route

if TYPE_CHECKING:
    from collections.abc import Callable

    from nicegui.events import GenericEventArguments, ValueChangeEventArguments

    from regexly.editor.session import SessionState
    from regexly.matching.flags import FlagName
    from regexly.matching.models import MatchRecord
    from regexly.rendering.markers import HighlightMarker

logger = logging.getLogger(__name__)

SURFACE_DOM_ID = "regexly-surface"
PATTERN_PLACEHOLDER = r"Enter regex pattern (e.g., \d+|[a-zA-Z]+)"
TEXT_PLACEHOLDER = "Paste your text here to test the regex pattern..."
UNMATCHED_GROUP = "-"

_MATCH_COLUMNS: list[dict[str, Any]] = [
    {"name": "index", "label": "#", "field": "index", "align": "right"},
    {"name": "start", "label": "Start", "field": "start", "align": "right"},
    {"name": "text", "label": "Match", "field": "text", "align": "left"},
    {"name": "groups", "label": "Groups", "field": "groups", "align": "left"},
]


def match_count_label(count: int) -> str:
    return f"{count} match" if count == 1 else f"{count} matches"


def format_groups(groups: tuple[str | None, ...]) -> str:
    """Render capture groups for the match table; unmatched groups show a dash."""
    return ", ".join(UNMATCHED_GROUP if g is None else repr(g) for g in groups)


def match_rows(matches: tuple[MatchRecord, ...]) -> list[dict[str, Any]]:
    """Rows for the match table, numbered from 1."""
    return [
        {
            "index": i,
            "start": match.start,
            "text": match.text,
            "groups": format_groups(match.groups),
        }
        for i, match in enumerate(matches, start=1)
    ]


def build_marker_css(marker: HighlightMarker) -> str:
    """Style rule for the configured highlight marker."""
    return (
        f".regexly-surface {marker.tag}.{marker.css_class} {{ "
        "background-color: #22c55e; color: #000; border-radius: 3px; }"
    )


@dataclass
class _TesterView:
    """UI elements that reflect the current session state."""

    error_label: ui.label
    count_badge: ui.badge
    match_table: ui.table

    def update(self, state: SessionState) -> None:
        message = state.error_message
        self.error_label.set_text(message or "")
        self.error_label.set_visibility(message is not None)

        self.count_badge.set_text(match_count_label(state.match_count))
        self.count_badge.set_visibility(state.match_count > 0)

        self.match_table.rows = match_rows(state.result.matches)
        self.match_table.update()


def _flag_handler(
    editor: CaretPreservingEditor, name: FlagName
) -> Callable[[ValueChangeEventArguments], None]:
    def _on_change(e: ValueChangeEventArguments) -> None:
        editor.set_flags(editor.state.flags.with_flag(name, bool(e.value)))

    return _on_change


@page_route("/", title="Tester", icon="manage_search", order=10)
async def tester_page() -> None:
    """Live regex tester."""
    settings = get_settings()
    marker = settings.highlight.marker()
    initial_flags = settings.editor.initial_flags()
    max_length = settings.editor.max_text_length
    client = ui.context.client

    ui.add_head_html(f'<link rel="stylesheet" href="{EDITOR_CSS_URL}">')
    ui.add_head_html(f"<style>{build_marker_css(marker)}</style>")
    ui.add_body_html(f'<script src="{EDITOR_SCRIPT_URL}"></script>')

    with page_layout():
        ui.label(TAGLINE).classes("text-body1 text-grey-7")

        with ui.card().classes("w-full"):
            ui.label("Pattern").classes("text-h6")
            pattern_input = (
                ui.input(placeholder=PATTERN_PLACEHOLDER)
                .classes("w-full font-mono")
                .props('outlined data-testid="pattern-input"')
            )
            error_label = (
                ui.label("")
                .classes("text-negative text-body2")
                .props('data-testid="pattern-error"')
            )
            error_label.set_visibility(False)

            flag_boxes: list[tuple[FlagName, ui.checkbox]] = []
            with ui.row().classes("items-center gap-4"):
                ui.label("Flags:").classes("text-body2")
                for detail in FLAG_DETAILS:
                    box = ui.checkbox(
                        f"({detail.letter}) {detail.label}",
                        value=getattr(initial_flags, detail.name),
                    ).props(f'data-testid="flag-{detail.letter}"')
                    flag_boxes.append((detail.name, box))

            with ui.row().classes("w-full items-center justify-between q-mt-md"):
                ui.label("Test Text").classes("text-h6")
                count_badge = (
                    ui.badge("0 matches", color="positive")
                    .props('data-testid="match-count"')
                )
                count_badge.set_visibility(False)

            ui.element("div").classes("regexly-surface regexly-empty w-full").props(
                f'id="{SURFACE_DOM_ID}" contenteditable="plaintext-only" '
                f'spellcheck="false" data-placeholder="{TEXT_PLACEHOLDER}" '
                'data-testid="test-text"'
            )

            match_table = (
                ui.table(columns=_MATCH_COLUMNS, rows=[], row_key="index")
                .classes("w-full q-mt-md")
                .props('flat dense data-testid="match-table"')
            )

        # Holds the one-shot timers that restore the caret after a render
        tick_host = ui.element("div").classes("hidden")

    view = _TesterView(
        error_label=error_label, count_badge=count_badge, match_table=match_table
    )

    await client.connected()

    def _next_tick(callback: Callable[[], None]) -> None:
        with tick_host:
            ui.timer(0, callback, once=True)

    surface = BrowserSurface(SURFACE_DOM_ID, client.run_javascript)
    client.run_javascript(surface.attach_script())
    editor = CaretPreservingEditor(
        surface, flags=initial_flags, marker=marker, defer=_next_tick
    )
    editor.on_change(view.update)
    view.update(editor.state)

    pattern_input.on_value_change(lambda e: editor.set_pattern(e.value or ""))
    for name, box in flag_boxes:
        box.on_value_change(_flag_handler(editor, name))

    def on_edit(e: GenericEventArguments) -> None:
        text = e.args.get("text", "")
        caret = e.args.get("caret")
        if not isinstance(text, str):
            return
        surface.report(text, caret if isinstance(caret, int) else None)
        if len(text) > max_length:
            logger.info("Rejected edit of %d chars (limit %d)", len(text), max_length)
            ui.notify(
                f"Test text is limited to {max_length:,} characters", type="warning"
            )
            editor.set_text(editor.state.text)
            return
        editor.handle_edit()

    ui.on(EDIT_EVENT, on_edit)
