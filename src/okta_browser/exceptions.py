"""Custom exceptions for the Okta user browser."""

from __future__ import annotations

from typing import Literal

FetchErrorKind = Literal[
    "timeout", "not_found", "http", "network", "invalid_response", "unexpected"
]


class DirectoryError(Exception):
    """Base exception for directory browser errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(DirectoryError):
    """Raised when required startup settings are missing or invalid."""

    def __init__(self, missing: list[str], detail: str | None = None):
        if detail is None:
            names = " and ".join(missing)
            noun = "setting" if len(missing) == 1 else "settings"
            detail = f"Missing required {noun}: {names} must be set"
        super().__init__(detail)
        self.missing = missing


class ClientConstructionError(DirectoryError):
    """Raised when the directory client cannot be built."""

    pass


class InitialLoadError(DirectoryError):
    """Raised when the initial user listing fails."""

    pass


class FetchError(DirectoryError):
    """Raised when a single profile fetch fails.

    Non-fatal: the controller turns it into an Error-mode transition.
    """

    def __init__(self, identifier: str, kind: FetchErrorKind, detail: str):
        super().__init__(f"Failed to fetch profile for {identifier}: {detail}")
        self.identifier = identifier
        self.kind = kind
        self.detail = detail
