"""Page registration system for data-driven navigation.

Provides a decorator for registering pages with metadata, so the navigation
drawer is generated from whatever pages are imported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nicegui import ui

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class PageMeta:
    """Metadata for a registered page."""

    route: str
    title: str
    icon: str
    show_in_nav: bool = True
    order: int = field(default=100)


# Global registry of all pages
_page_registry: dict[str, PageMeta] = {}


def page_route(
    route: str,
    *,
    title: str,
    icon: str,
    show_in_nav: bool = True,
    order: int = 100,
) -> Callable:
    """Decorator to register a page with navigation metadata.

    Usage:
        @page_route("/about", title="About", icon="info", order=20)
        async def about_page():
            ...

    Args:
        route: URL path for the page.
        title: Display title in navigation.
        icon: Material icon name.
        show_in_nav: Whether the page appears in the navigation drawer.
        order: Sort order in the drawer (lower = higher).

    Returns:
        Decorated function registered with NiceGUI and the page registry.
    """

    def decorator(func: Callable) -> Callable:
        _page_registry[route] = PageMeta(
            route=route,
            title=title,
            icon=icon,
            show_in_nav=show_in_nav,
            order=order,
        )
        return ui.page(route)(func)

    return decorator


def get_nav_pages() -> list[PageMeta]:
    """Pages shown in the navigation drawer, sorted by order then title."""
    pages = [meta for meta in _page_registry.values() if meta.show_in_nav]
    pages.sort(key=lambda p: (p.order, p.title))
    return pages
