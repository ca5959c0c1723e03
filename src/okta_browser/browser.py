"""List browser state: entries, selection and filter."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import cached_property

from .models import DirectoryEntry

LIST_TITLE = "Okta Users"

# Rows taken by the title, filter bar and status line around the list
LIST_CHROME_HEIGHT = 3

UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})
PAGE_UP_KEYS = frozenset({"pageup", "left", "h"})
PAGE_DOWN_KEYS = frozenset({"pagedown", "right", "l"})
FIRST_KEYS = frozenset({"home", "g"})
LAST_KEYS = frozenset({"end", "G", "shift+g"})
FILTER_KEY = "slash"


@dataclass(frozen=True)
class ListBrowser:
    """Immutable list state.

    ``index`` points into ``visible`` (the filtered entries) and is None
    exactly when nothing is visible.
    """

    entries: tuple[DirectoryEntry, ...] = ()
    index: int | None = None
    filter_text: str = ""
    filtering: bool = False
    width: int = 0
    height: int = 0

    @cached_property
    def visible(self) -> tuple[DirectoryEntry, ...]:
        """Entries matching the filter, in load order."""
        needle = self.filter_text.casefold()
        if not needle:
            return self.entries
        return tuple(e for e in self.entries if needle in e.filter_value.casefold())

    @property
    def page_size(self) -> int:
        return max(1, self.height - LIST_CHROME_HEIGHT)

    def load(self, entries: Iterable[DirectoryEntry]) -> ListBrowser:
        """Replace the collection and select the first visible entry."""
        return replace(self, entries=tuple(entries))._select_first()

    def selected(self) -> DirectoryEntry | None:
        if self.index is None or self.index >= len(self.visible):
            return None
        return self.visible[self.index]

    def resize(self, width: int, height: int) -> ListBrowser:
        return replace(self, width=max(0, width), height=max(0, height))

    def handle_key(self, key: str, character: str | None = None) -> ListBrowser:
        """Apply a navigation or filter keystroke."""
        if self.filtering:
            return self._handle_filter_key(key, character)

        if key == FILTER_KEY or character == "/":
            return replace(self, filtering=True)
        if key == "escape":
            if self.filter_text:
                return replace(self, filter_text="")._select_first()
            return self
        if key in UP_KEYS:
            return self._move(-1)
        if key in DOWN_KEYS:
            return self._move(1)
        if key in PAGE_UP_KEYS:
            return self._move(-self.page_size)
        if key in PAGE_DOWN_KEYS:
            return self._move(self.page_size)
        if key in FIRST_KEYS:
            return self._move_to(0)
        if key in LAST_KEYS:
            return self._move_to(len(self.visible) - 1)
        return self

    def _handle_filter_key(self, key: str, character: str | None) -> ListBrowser:
        if key == "enter":
            return replace(self, filtering=False)
        if key == "escape":
            return replace(self, filtering=False, filter_text="")._select_first()
        if key == "backspace":
            return replace(self, filter_text=self.filter_text[:-1])._select_first()
        if key in ("up", "down"):
            return self._move(-1 if key == "up" else 1)
        if character and character.isprintable():
            return replace(self, filter_text=self.filter_text + character)._select_first()
        return self

    def _select_first(self) -> ListBrowser:
        return replace(self, index=0 if self.visible else None)

    def _move(self, delta: int) -> ListBrowser:
        if self.index is None:
            return self
        return self._move_to(self.index + delta)

    def _move_to(self, index: int) -> ListBrowser:
        if not self.visible:
            return replace(self, index=None)
        return replace(self, index=min(max(index, 0), len(self.visible) - 1))
