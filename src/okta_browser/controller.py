"""Interaction controller: the view-mode state machine.

``transition(state, event)`` is a pure function returning the next state and
the side effects the shell must run. Routing is a table keyed by
``(mode, event kind)``; any pair missing from the table leaves the state
untouched, which is how results arriving outside ``Loading`` and keys with
no meaning in the current mode are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from enum import Enum

from .events import (
    Effect,
    Event,
    FetchFailed,
    FetchSucceeded,
    IssueFetch,
    KeyPressed,
    Quit,
    Resized,
)
from .models import FetchRequest
from .state import AppState, ViewMode
from .viewer import format_profile

logger = logging.getLogger(__name__)

CONFIRM_KEYS = frozenset({"enter"})
ESCAPE_KEYS = frozenset({"escape"})
CONTROL_QUIT_KEYS = frozenset({"ctrl+c", "ctrl+q"})
QUIT_KEYS = frozenset({"q"}) | CONTROL_QUIT_KEYS

# Horizontal and vertical padding around both panes
FRAME_WIDTH = 4
FRAME_HEIGHT = 2


class EventKind(Enum):
    CONFIRM = "confirm"
    ESCAPE = "escape"
    QUIT = "quit"
    NAVIGATE = "navigate"
    SCROLL = "scroll"
    RESIZE = "resize"
    FETCH_SUCCEEDED = "fetch_succeeded"
    FETCH_FAILED = "fetch_failed"


Transition = tuple[AppState, list[Effect]]
Handler = Callable[[AppState, Event], Transition]


def classify(state: AppState, event: Event) -> EventKind:
    """Decide what an event means in the current state."""
    if isinstance(event, Resized):
        return EventKind.RESIZE
    if isinstance(event, FetchSucceeded):
        return EventKind.FETCH_SUCCEEDED
    if isinstance(event, FetchFailed):
        return EventKind.FETCH_FAILED

    if event.key in CONTROL_QUIT_KEYS:
        return EventKind.QUIT
    # Filter entry owns the other keys until it is accepted or cancelled
    if state.mode is not ViewMode.DETAIL and state.browser.filtering:
        return EventKind.NAVIGATE
    if event.key in CONFIRM_KEYS:
        return EventKind.CONFIRM
    if event.key in ESCAPE_KEYS:
        return EventKind.ESCAPE
    if event.key in QUIT_KEYS:
        return EventKind.QUIT
    if state.mode is ViewMode.DETAIL:
        return EventKind.SCROLL
    return EventKind.NAVIGATE


def _unchanged(state: AppState, _event: Event) -> Transition:
    return state, []


def _issue_fetch(state: AppState, _event: Event) -> Transition:
    entry = state.browser.selected()
    if entry is None:
        return state, []
    request = FetchRequest(identifier=entry.lookup_key, sequence=state.last_sequence + 1)
    logger.info("Fetching profile for %s (seq %d)", request.identifier, request.sequence)
    new_state = replace(state, mode=ViewMode.LOADING, last_request=request, error=None)
    return new_state, [IssueFetch(request)]


def _forward_to_list(state: AppState, event: Event) -> Transition:
    assert isinstance(event, KeyPressed)
    return replace(state, browser=state.browser.handle_key(event.key, event.character)), []


def _forward_to_viewer(state: AppState, event: Event) -> Transition:
    assert isinstance(event, KeyPressed)
    return replace(state, viewer=state.viewer.handle_key(event.key)), []


def _quit(state: AppState, _event: Event) -> Transition:
    return state, [Quit()]


def _back_to_browsing(state: AppState, _event: Event) -> Transition:
    """Leave Loading or Error for the list; a pending result becomes stale."""
    return replace(state, mode=ViewMode.BROWSING, error=None), []


def _close_detail(state: AppState, _event: Event) -> Transition:
    return (
        replace(
            state,
            mode=ViewMode.BROWSING,
            profile=None,
            viewer=state.viewer.set_content(""),
        ),
        [],
    )


def _apply_profile(state: AppState, event: Event) -> Transition:
    assert isinstance(event, FetchSucceeded)
    if event.sequence != state.last_sequence:
        logger.debug(
            "Discarding stale profile (seq %d, latest %d)", event.sequence, state.last_sequence
        )
        return state, []
    new_state = replace(
        state,
        mode=ViewMode.DETAIL,
        profile=event.record,
        viewer=state.viewer.set_content(format_profile(event.record)),
    )
    return new_state, []


def _apply_failure(state: AppState, event: Event) -> Transition:
    assert isinstance(event, FetchFailed)
    if event.sequence != state.last_sequence:
        logger.debug(
            "Discarding stale failure (seq %d, latest %d)", event.sequence, state.last_sequence
        )
        return state, []
    logger.warning("%s", event.error.message)
    return replace(state, mode=ViewMode.ERROR, error=event.error), []


def _discard_result(state: AppState, event: Event) -> Transition:
    assert isinstance(event, (FetchSucceeded, FetchFailed))
    logger.debug("Discarding result seq %d received in %s mode", event.sequence, state.mode.value)
    return state, []


def _resize(state: AppState, event: Event) -> Transition:
    assert isinstance(event, Resized)
    width = event.width - FRAME_WIDTH
    height = event.height - FRAME_HEIGHT
    return (
        replace(
            state,
            browser=state.browser.resize(width, height),
            viewer=state.viewer.resize(width, height),
        ),
        [],
    )


_TRANSITIONS: dict[tuple[ViewMode, EventKind], Handler] = {
    # Browsing
    (ViewMode.BROWSING, EventKind.CONFIRM): _issue_fetch,
    (ViewMode.BROWSING, EventKind.NAVIGATE): _forward_to_list,
    (ViewMode.BROWSING, EventKind.ESCAPE): _forward_to_list,
    (ViewMode.BROWSING, EventKind.QUIT): _quit,
    # Loading: the list stays usable and a new confirm supersedes the pending fetch
    (ViewMode.LOADING, EventKind.CONFIRM): _issue_fetch,
    (ViewMode.LOADING, EventKind.NAVIGATE): _forward_to_list,
    (ViewMode.LOADING, EventKind.ESCAPE): _back_to_browsing,
    (ViewMode.LOADING, EventKind.FETCH_SUCCEEDED): _apply_profile,
    (ViewMode.LOADING, EventKind.FETCH_FAILED): _apply_failure,
    # Detail
    (ViewMode.DETAIL, EventKind.ESCAPE): _close_detail,
    (ViewMode.DETAIL, EventKind.SCROLL): _forward_to_viewer,
    # Error
    (ViewMode.ERROR, EventKind.CONFIRM): _issue_fetch,
    (ViewMode.ERROR, EventKind.NAVIGATE): _forward_to_list,
    (ViewMode.ERROR, EventKind.ESCAPE): _back_to_browsing,
}
for _mode in ViewMode:
    _TRANSITIONS[(_mode, EventKind.RESIZE)] = _resize
    if _mode is not ViewMode.LOADING:
        _TRANSITIONS[(_mode, EventKind.FETCH_SUCCEEDED)] = _discard_result
        _TRANSITIONS[(_mode, EventKind.FETCH_FAILED)] = _discard_result


def transition(state: AppState, event: Event) -> Transition:
    """Compute the next state and side effects for one event."""
    kind = classify(state, event)
    handler = _TRANSITIONS.get((state.mode, kind), _unchanged)
    new_state, effects = handler(state, event)
    if new_state.mode is not state.mode:
        logger.debug("%s -> %s on %s", state.mode.value, new_state.mode.value, kind.value)
    return new_state, effects
