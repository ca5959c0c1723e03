"""Widget adapters for the list and detail panes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import OptionList, Static

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import DirectoryEntry


def _entry_prompt(entry: DirectoryEntry) -> Text:
    prompt = Text(entry.login, style="bold")
    if entry.label:
        prompt.append(f"  {entry.label}", style="dim")
    return prompt


class EntryList(OptionList, can_focus=False):
    """Entry list. Selection is driven by the app, never by focus."""

    def show_entries(self, entries: Iterable[DirectoryEntry]) -> None:
        """Replace the options with the given entries."""
        self.clear_options()
        self.add_options([_entry_prompt(entry) for entry in entries])

    def select_index(self, index: int | None) -> None:
        if self.highlighted != index:
            self.highlighted = index


class ProfilePane(VerticalScroll, can_focus=False):
    """Scrollable profile text."""

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)
        self._content = ""

    def compose(self) -> ComposeResult:
        yield Static("", id="profile-text")

    @property
    def content(self) -> str:
        return self._content

    def show_content(self, content: str, offset: int) -> None:
        """Display pre-wrapped ``content`` scrolled to row ``offset``."""
        if content != self._content:
            self._content = content
            self.query_one("#profile-text", Static).update(
                Text(content, no_wrap=True, overflow="ellipsis")
            )
        self.call_after_refresh(self.scroll_to, y=offset, animate=False)
