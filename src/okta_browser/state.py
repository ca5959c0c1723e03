"""Application state owned by the interaction controller."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .browser import ListBrowser
from .exceptions import FetchError
from .models import DirectoryEntry, FetchRequest, ProfileRecord
from .viewer import DetailViewer


class ViewMode(str, Enum):
    """Top-level view. Exactly one is active at a time."""

    BROWSING = "browsing"
    LOADING = "loading"
    DETAIL = "detail"
    ERROR = "error"


@dataclass(frozen=True)
class AppState:
    """Everything the UI renders, as one immutable value."""

    browser: ListBrowser = field(default_factory=ListBrowser)
    viewer: DetailViewer = field(default_factory=DetailViewer)
    mode: ViewMode = ViewMode.BROWSING
    profile: ProfileRecord | None = None
    last_request: FetchRequest | None = None
    error: FetchError | None = None

    @classmethod
    def initial(cls, entries: Iterable[DirectoryEntry]) -> AppState:
        """State after a successful startup load."""
        return cls(browser=ListBrowser().load(entries))

    @property
    def last_sequence(self) -> int:
        """Highest sequence number issued so far (0 before the first fetch)."""
        return self.last_request.sequence if self.last_request else 0
