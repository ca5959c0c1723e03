"""Messages posted to the app from background workers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.message import Message

if TYPE_CHECKING:
    from .events import FetchResult


class FetchCompleted(Message):
    """Message sent when a profile fetch reaches its terminal result."""

    def __init__(self, result: FetchResult) -> None:
        super().__init__()
        self.result = result
