"""Detail viewer state and profile formatting."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, replace
from functools import cached_property

from .models import ProfileRecord

NAVIGATION_HINT = "Press 'esc' to go back to the user list."

# Columns kept free for the pane's vertical scrollbar
SCROLLBAR_WIDTH = 2


def format_profile(record: ProfileRecord) -> str:
    """Format a profile as the text shown in the detail pane."""
    lines: list[str] = []
    if not record.available:
        lines.append("User Profile not available")
    else:
        if record.login is not None:
            lines.append(f"User Profile for {record.login}")
        else:
            lines.append("User Profile (login unknown)")
        lines.append("")
        lines.extend(f"{name}: {value}" for name, value in record.fields.items())
    lines.append("")
    lines.append(NAVIGATION_HINT)
    return "\n".join(lines)


@dataclass(frozen=True)
class DetailViewer:
    """Immutable scroll state over a block of text."""

    content: str = ""
    offset: int = 0
    width: int = 0
    height: int = 0

    @cached_property
    def lines(self) -> tuple[str, ...]:
        """Content broken into display rows that fit the pane width."""
        wrap_width = self.width - SCROLLBAR_WIDTH
        if wrap_width < 1:
            return tuple(self.content.splitlines())
        rows: list[str] = []
        for line in self.content.splitlines():
            rows.extend(textwrap.wrap(line, wrap_width, replace_whitespace=False) or [""])
        return tuple(rows)

    @property
    def rendered(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def max_offset(self) -> int:
        return max(0, self.line_count - self.height)

    def set_content(self, text: str) -> DetailViewer:
        """Replace the content and scroll back to the top."""
        return replace(self, content=text, offset=0)

    def resize(self, width: int, height: int) -> DetailViewer:
        resized = replace(self, width=max(0, width), height=max(0, height))
        return resized._scroll_to(resized.offset)

    def handle_key(self, key: str) -> DetailViewer:
        """Apply a scroll keystroke; other keys leave the viewer unchanged."""
        page = max(1, self.height)
        half = max(1, page // 2)
        deltas = {
            "up": -1,
            "k": -1,
            "down": 1,
            "j": 1,
            "pageup": -page,
            "b": -page,
            "pagedown": page,
            "f": page,
            "space": page,
            "u": -half,
            "ctrl+u": -half,
            "d": half,
            "ctrl+d": half,
        }
        if key in deltas:
            return self._scroll_to(self.offset + deltas[key])
        if key in ("home", "g"):
            return self._scroll_to(0)
        if key in ("end", "G", "shift+g"):
            return self._scroll_to(self.max_offset)
        return self

    def _scroll_to(self, offset: int) -> DetailViewer:
        offset = min(max(offset, 0), self.max_offset)
        if offset == self.offset:
            return self
        return replace(self, offset=offset)
