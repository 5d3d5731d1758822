"""About page: flag reference and notes on the pattern dialect.

Route: /about
"""

from __future__ import annotations

from nicegui import ui

from regexly.matching.flags import FLAG_DETAILS
from regexly.pages.layout import TAGLINE, page_layout
from regexly.pages.registry import page_route

_FLAG_HELP: dict[str, str] = {
    "g": "Report every match. Off: stop after the first one.",
    "i": "Case-insensitive matching. Without u, only ASCII letters fold case.",
    "m": "^ and $ also match at line breaks.",
    "s": ". also matches newline characters.",
    "u": r"Unicode-aware \w, \d, \s and \b. Off: ASCII only.",
}

_DIALECT_NOTES = (
    "Patterns use Python's re syntax: named groups are written (?P<name>...), "
    "and lookbehind must be fixed-width.",
    "Offsets count Unicode code points, so an emoji is one character wide.",
    "Empty matches are reported once; scanning stops at the first empty match.",
)


@page_route("/about", title="About", icon="info", order=20)
async def about_page() -> None:
    """Static reference page."""
    with page_layout("About"):
        ui.label(TAGLINE).classes("text-body1")

        with ui.card().classes("w-full"):
            ui.label("Flags").classes("text-h6")
            columns = [
                {"name": "flag", "label": "Flag", "field": "flag", "align": "left"},
                {"name": "name", "label": "Name", "field": "name", "align": "left"},
                {"name": "help", "label": "Effect", "field": "help", "align": "left"},
            ]
            rows = [
                {"flag": d.letter, "name": d.label, "help": _FLAG_HELP[d.letter]}
                for d in FLAG_DETAILS
            ]
            ui.table(columns=columns, rows=rows, row_key="flag").props("flat dense")

        with ui.card().classes("w-full"):
            ui.label("Pattern dialect").classes("text-h6")
            for note in _DIALECT_NOTES:
                ui.markdown(f"- {note}")
