"""Data models for directory entries and fetched profiles."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Sentinels used when a user payload lacks the data we need
LOGIN_UNKNOWN = "unknown"
PROFILE_NOT_AVAILABLE = "profile not available"
VALUE_UNAVAILABLE = "unavailable"


class DirectoryEntry(BaseModel):
    """One user shown in the list."""

    model_config = ConfigDict(frozen=True)

    login: str
    label: str | None = None
    user_id: str | None = None  # Okta user id, used when the login is a sentinel

    @property
    def lookup_key(self) -> str:
        """Identifier to request the full profile with."""
        if self.login in (LOGIN_UNKNOWN, PROFILE_NOT_AVAILABLE) and self.user_id:
            return self.user_id
        return self.login

    @property
    def filter_value(self) -> str:
        """Text matched against the list filter."""
        if self.label:
            return f"{self.login} {self.label}"
        return self.login


class ProfileRecord(BaseModel):
    """Fetched profile of a single user.

    ``fields`` preserves the order the API returned them in. Values that
    could not be read are stored as ``VALUE_UNAVAILABLE`` instead of being
    dropped, and a missing login is stored as ``LOGIN_UNKNOWN``.
    """

    model_config = ConfigDict(frozen=True)

    login: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)
    available: bool = True


class FetchRequest(BaseModel):
    """An issued profile fetch."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    sequence: int = Field(ge=1)


def _login_of(profile: dict[str, Any]) -> str | None:
    login = profile.get("login")
    if isinstance(login, str) and login:
        return login
    return None


def _display_label(profile: dict[str, Any]) -> str | None:
    """Build a human label from name fields, falling back to email."""
    parts = [
        str(profile[key]).strip()
        for key in ("firstName", "lastName")
        if isinstance(profile.get(key), str) and profile[key].strip()
    ]
    if parts:
        return " ".join(parts)
    email = profile.get("email")
    if isinstance(email, str) and email:
        return email
    return None


def format_value(value: Any) -> str:
    """Render a profile value as display text."""
    if value is None:
        return VALUE_UNAVAILABLE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ", ".join(format_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)


def entry_from_user(user: dict[str, Any]) -> DirectoryEntry:
    """Build a list entry from an Okta user object."""
    user_id = user.get("id") if isinstance(user.get("id"), str) else None
    profile = user.get("profile")
    if not isinstance(profile, dict):
        return DirectoryEntry(login=PROFILE_NOT_AVAILABLE, user_id=user_id)
    return DirectoryEntry(
        login=_login_of(profile) or LOGIN_UNKNOWN,
        label=_display_label(profile),
        user_id=user_id,
    )


def profile_from_user(user: Any) -> ProfileRecord:
    """Parse an Okta user object into a ProfileRecord."""
    profile = user.get("profile") if isinstance(user, dict) else None
    if not isinstance(profile, dict):
        return ProfileRecord(available=False)

    login = _login_of(profile)
    fields: dict[str, str] = {}
    if login is None:
        fields["login"] = LOGIN_UNKNOWN
    for key, value in profile.items():
        if key == "login" and login is None:
            continue
        fields[str(key)] = format_value(value)
    return ProfileRecord(login=login, fields=fields)
