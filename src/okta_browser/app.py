"""Main Textual app for the Okta user browser."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, ClassVar

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from .controller import transition
from .events import Event, FetchResult, IssueFetch, KeyPressed, Quit, Resized
from .fetcher import ProfileFetcher
from .messages import FetchCompleted
from .state import AppState, ViewMode
from .styles import APP_CSS
from .views import render_filter_bar, render_status, render_title
from .widgets import EntryList, ProfilePane

if TYPE_CHECKING:
    from .client import DirectoryClient
    from .events import Effect
    from .models import DirectoryEntry

logger = logging.getLogger(__name__)


class DirectoryBrowserApp(App[None]):
    """Browse directory users and view their profiles.

    The app holds the only mutable reference to ``AppState``. Every key,
    resize and fetch result goes through ``apply_event``, which runs the
    controller's transition, executes its effects and re-renders.
    """

    TITLE = "Okta Users"

    CSS = APP_CSS

    AUTO_FOCUS = None
    ENABLE_COMMAND_PALETTE = False

    # Priority bindings fire before key events are delivered, so route them by hand
    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        Binding("ctrl+c", "route_key('ctrl+c')", "Quit", show=False, priority=True),
        Binding("ctrl+q", "route_key('ctrl+q')", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        entries: Iterable[DirectoryEntry],
        client_factory: Callable[[], DirectoryClient],
        *,
        fetch_timeout: float = 30.0,
    ) -> None:
        super().__init__()
        self.app_state = AppState.initial(entries)
        self._client_factory = client_factory
        self._fetch_timeout = fetch_timeout
        self._client: DirectoryClient | None = None
        self._fetcher: ProfileFetcher | None = None
        self._ui_ready = False

    def compose(self) -> ComposeResult:
        with Vertical(id="browse-container"):
            yield Static("", id="list-title")
            yield Static("", id="status-bar")
            yield EntryList(id="entry-list")
            yield Static("", id="filter-bar")
        yield ProfilePane(id="profile-pane", classes="hidden")

    def on_mount(self) -> None:
        """Build the directory client and draw the initial list."""
        self._client = self._client_factory()
        self._fetcher = ProfileFetcher(
            self._client,
            self._deliver_result,
            runner=self.run_worker,
            timeout=self._fetch_timeout,
        )
        logger.debug("Starting with %d users", len(self.app_state.browser.entries))
        self._ui_ready = True
        self._render_state(None)
        self.apply_event(Resized(self.size.width, self.size.height))

    async def on_unmount(self) -> None:
        """Close the directory client on exit."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def on_key(self, event: events.Key) -> None:
        """Every key goes through the controller."""
        event.stop()
        event.prevent_default()
        self.apply_event(KeyPressed(event.key, event.character))

    def on_resize(self, event: events.Resize) -> None:
        self.apply_event(Resized(event.size.width, event.size.height))

    def on_fetch_completed(self, message: FetchCompleted) -> None:
        self.apply_event(message.result)

    def action_route_key(self, key: str) -> None:
        self.apply_event(KeyPressed(key))

    def apply_event(self, event: Event) -> None:
        """Run one event through the state machine."""
        previous = self.app_state
        self.app_state, effects = transition(previous, event)
        for effect in effects:
            self._run_effect(effect)
        if self._ui_ready:
            self._render_state(previous)

    def _deliver_result(self, result: FetchResult) -> None:
        self.post_message(FetchCompleted(result))

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, IssueFetch):
            assert self._fetcher is not None
            self._fetcher.issue(effect.request)
        elif isinstance(effect, Quit):
            self.exit()

    def _render_state(self, previous: AppState | None) -> None:
        """Bring the widgets in line with ``self.app_state``."""
        state = self.app_state
        browser = state.browser

        entry_list = self.query_one("#entry-list", EntryList)
        if (
            previous is None
            or previous.browser.entries is not browser.entries
            or previous.browser.filter_text != browser.filter_text
        ):
            entry_list.show_entries(browser.visible)
        entry_list.select_index(browser.index)

        self.query_one("#list-title", Static).update(render_title(browser))
        self.query_one("#filter-bar", Static).update(render_filter_bar(browser))
        self.query_one("#status-bar", Static).update(render_status(state))

        in_detail = state.mode is ViewMode.DETAIL
        self.query_one("#browse-container", Vertical).set_class(in_detail, "hidden")
        pane = self.query_one("#profile-pane", ProfilePane)
        pane.set_class(not in_detail, "hidden")
        pane.show_content(state.viewer.rendered, state.viewer.offset)
