"""Tests for the list browser state."""

from __future__ import annotations

from okta_browser.browser import LIST_CHROME_HEIGHT, ListBrowser
from okta_browser.models import DirectoryEntry


def make_entries(*logins: str) -> list[DirectoryEntry]:
    return [DirectoryEntry(login=login) for login in logins]


def type_filter(browser: ListBrowser, text: str) -> ListBrowser:
    browser = browser.handle_key("slash", "/")
    for char in text:
        browser = browser.handle_key(char, char)
    return browser


class TestLoad:
    def test_selects_first_entry(self) -> None:
        browser = ListBrowser().load(make_entries("alice", "bob"))
        assert browser.index == 0
        assert browser.selected() == DirectoryEntry(login="alice")

    def test_empty_collection_has_no_selection(self) -> None:
        browser = ListBrowser().load([])
        assert browser.index is None
        assert browser.selected() is None

    def test_reload_replaces_collection_and_resets_selection(self) -> None:
        browser = ListBrowser().load(make_entries("a", "b", "c")).handle_key("down")
        assert browser.index == 1
        reloaded = browser.load(make_entries("x", "y"))
        assert [e.login for e in reloaded.entries] == ["x", "y"]
        assert reloaded.index == 0


class TestNavigation:
    def test_down_and_up_are_clamped(self) -> None:
        browser = ListBrowser().load(make_entries("a", "b"))
        browser = browser.handle_key("down").handle_key("j").handle_key("down")
        assert browser.selected() == DirectoryEntry(login="b")
        browser = browser.handle_key("up").handle_key("k")
        assert browser.index == 0

    def test_first_and_last(self) -> None:
        browser = ListBrowser().load(make_entries("a", "b", "c"))
        assert browser.handle_key("end").index == 2
        assert browser.handle_key("G", "G").index == 2
        assert browser.handle_key("end").handle_key("home").index == 0

    def test_page_moves_by_visible_rows(self) -> None:
        logins = [f"user{i}" for i in range(20)]
        browser = ListBrowser().load(make_entries(*logins)).resize(80, LIST_CHROME_HEIGHT + 5)
        assert browser.page_size == 5
        assert browser.handle_key("pagedown").index == 5
        assert browser.handle_key("pagedown").handle_key("pageup").index == 0

    def test_navigation_on_empty_list_is_noop(self) -> None:
        browser = ListBrowser().load([])
        assert browser.handle_key("down") == browser

    def test_unknown_key_is_noop(self) -> None:
        browser = ListBrowser().load(make_entries("a"))
        assert browser.handle_key("x", "x") == browser


class TestFilter:
    def test_typing_filters_and_selects_first_match(self) -> None:
        browser = ListBrowser().load(make_entries("alice", "bob", "bobby"))
        browser = type_filter(browser, "BOB")
        assert browser.filtering
        assert [e.login for e in browser.visible] == ["bob", "bobby"]
        assert browser.selected() == DirectoryEntry(login="bob")

    def test_filter_matches_label(self) -> None:
        entries = [DirectoryEntry(login="u1", label="Ada Lovelace"), DirectoryEntry(login="u2")]
        browser = type_filter(ListBrowser().load(entries), "love")
        assert [e.login for e in browser.visible] == ["u1"]

    def test_no_match_clears_selection(self) -> None:
        browser = type_filter(ListBrowser().load(make_entries("alice")), "zzz")
        assert browser.visible == ()
        assert browser.selected() is None

    def test_backspace(self) -> None:
        browser = type_filter(ListBrowser().load(make_entries("alice", "bob")), "bx")
        browser = browser.handle_key("backspace")
        assert browser.filter_text == "b"
        assert [e.login for e in browser.visible] == ["bob"]

    def test_enter_accepts_filter(self) -> None:
        browser = type_filter(ListBrowser().load(make_entries("alice", "bob")), "bo")
        browser = browser.handle_key("enter")
        assert not browser.filtering
        assert browser.filter_text == "bo"
        # Letters navigate again once the filter is accepted
        assert browser.handle_key("j", "j").filter_text == "bo"

    def test_escape_while_typing_cancels(self) -> None:
        browser = type_filter(ListBrowser().load(make_entries("alice", "bob")), "bo")
        browser = browser.handle_key("escape")
        assert not browser.filtering
        assert browser.filter_text == ""
        assert len(browser.visible) == 2

    def test_escape_clears_applied_filter(self) -> None:
        browser = type_filter(ListBrowser().load(make_entries("alice", "bob")), "bo")
        browser = browser.handle_key("enter").handle_key("escape")
        assert browser.filter_text == ""
        assert browser.index == 0

    def test_filter_never_mutates_entries(self) -> None:
        loaded = ListBrowser().load(make_entries("alice", "bob"))
        filtered = type_filter(loaded, "bob")
        assert filtered.entries is loaded.entries


def test_resize_clamps_negative_sizes() -> None:
    browser = ListBrowser().resize(-3, -1)
    assert (browser.width, browser.height) == (0, 0)
