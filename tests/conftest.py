"""Shared fixtures for Okta Browser tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator

import pytest

from okta_browser import config
from okta_browser.exceptions import FetchError
from okta_browser.models import DirectoryEntry, ProfileRecord


class FakeDirectoryClient:
    """In-memory directory client.

    Profiles listed in ``gates`` block until the matching event is set, which
    lets tests control the order fetches complete in.
    """

    def __init__(
        self,
        entries: list[DirectoryEntry] | None = None,
        profiles: dict[str, ProfileRecord] | None = None,
        failures: dict[str, FetchError] | None = None,
    ) -> None:
        self.entries = entries or []
        self.profiles = profiles or {}
        self.failures = failures or {}
        self.gates: dict[str, asyncio.Event] = {}
        self.requested: list[str] = []
        self.closed = False

    def gate(self, identifier: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[identifier] = event
        return event

    async def list_entries(self) -> list[DirectoryEntry]:
        return list(self.entries)

    async def get_profile(self, identifier: str) -> ProfileRecord:
        self.requested.append(identifier)
        gate = self.gates.get(identifier)
        if gate is not None:
            await gate.wait()
        if identifier in self.failures:
            raise self.failures[identifier]
        return self.profiles[identifier]

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from the caller's Okta environment and cached settings."""
    for name in ("OKTA_ORG_URL", "OKTA_API_TOKEN", "LOG_LEVEL", "LOG_FILE", "FETCH_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    config._settings = None
    yield
    config._settings = None


@pytest.fixture
def entries() -> list[DirectoryEntry]:
    return [
        DirectoryEntry(login="alice", label="Alice Liddell", user_id="00u1"),
        DirectoryEntry(login="bob", label="Bob Stone", user_id="00u2"),
    ]


@pytest.fixture
def bob_profile() -> ProfileRecord:
    return ProfileRecord(login="bob", fields={"login": "bob", "department": "eng"})


@pytest.fixture
def alice_profile() -> ProfileRecord:
    return ProfileRecord(login="alice", fields={"login": "alice", "department": "ops"})


@pytest.fixture
def fake_client(
    entries: list[DirectoryEntry], alice_profile: ProfileRecord, bob_profile: ProfileRecord
) -> FakeDirectoryClient:
    return FakeDirectoryClient(
        entries=entries,
        profiles={"alice": alice_profile, "bob": bob_profile},
    )
