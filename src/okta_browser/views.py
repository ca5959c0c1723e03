"""Text rendered around the list and detail panes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from .browser import LIST_TITLE
from .state import ViewMode

if TYPE_CHECKING:
    from .browser import ListBrowser
    from .state import AppState


def render_title(browser: ListBrowser) -> str:
    """List title with the number of (matching) users."""
    total = len(browser.entries)
    shown = len(browser.visible)
    if browser.filter_text:
        return f"[bold]{LIST_TITLE}[/]  [dim]{shown} of {total}[/]"
    noun = "user" if total == 1 else "users"
    return f"[bold]{LIST_TITLE}[/]  [dim]{total} {noun}[/]"


def render_filter_bar(browser: ListBrowser) -> str:
    if browser.filtering:
        return f"[cyan]Filter:[/] {escape(browser.filter_text)}█"
    if browser.filter_text:
        return f"[cyan]Filter:[/] {escape(browser.filter_text)}  [dim](esc to clear)[/]"
    return ""


def render_status(state: AppState) -> str:
    """Status line for the current mode."""
    if state.mode is ViewMode.LOADING and state.last_request is not None:
        return f"[yellow]Loading profile for {escape(state.last_request.identifier)}…[/]"
    if state.mode is ViewMode.ERROR and state.error is not None:
        return (
            f"[red]{escape(state.error.message)}[/]  "
            "[dim]enter: retry · esc: dismiss[/]"
        )
    if not state.browser.entries:
        return "[dim]No users found · q: quit[/]"
    return "[dim]↑↓ navigate · enter: view profile · /: filter · q: quit[/]"
