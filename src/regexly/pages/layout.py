"""Shared layout components for Regexly.

Provides consistent header, navigation drawer, footer and page structure.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from nicegui import ui

from regexly import __version__
from regexly.config import get_settings
from regexly.pages.registry import get_nav_pages

if TYPE_CHECKING:
    from collections.abc import Iterator

TAGLINE = (
    "Test regex patterns with real-time highlighting. "
    "Built for developers who need instant feedback."
)


def _nav_item(label: str, route: str, icon: str | None = None) -> None:
    """Create a navigation item in the drawer."""
    with ui.item(on_click=lambda: ui.navigate.to(route)).classes("w-full"):
        if icon:
            with ui.item_section().props("avatar"):
                ui.icon(icon)
        with ui.item_section():
            ui.item_label(label)


@contextmanager
def page_layout(title: str | None = None) -> Iterator[None]:
    """Context manager for consistent page layout with header and nav drawer.

    Usage:
        @page_route("/my-page", title="My Page", icon="star")
        async def my_page():
            with page_layout("My Page"):
                ui.label("Page content here")

    Args:
        title: Page title shown in header; defaults to the app title.

    Yields:
        Context for page content.
    """
    app_title = get_settings().app.title

    with ui.header().classes("bg-primary items-center q-py-xs"):
        menu_btn = ui.button(icon="menu").props("flat color=white")
        ui.label(title or app_title).classes("text-h6 text-white q-ml-sm")

    with ui.left_drawer(value=False).classes("bg-grey-2") as drawer:
        ui.label("Navigation").classes("text-h6 q-pa-md")
        ui.separator()
        with ui.list().props("padding"):
            for page in get_nav_pages():
                _nav_item(page.title, page.route, page.icon)

    menu_btn.on("click", drawer.toggle)

    with ui.column().classes("w-full max-w-5xl mx-auto q-pa-md gap-4"):
        yield

    with ui.footer().classes("bg-white text-grey-7 justify-center q-py-sm"):
        credit = f"{app_title} v{__version__} · by developers, for developers"
        ui.label(credit).classes("text-caption")
