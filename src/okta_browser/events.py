"""Events consumed and effects produced by the interaction controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .exceptions import FetchError
from .models import FetchRequest, ProfileRecord


@dataclass(frozen=True)
class KeyPressed:
    """A decoded key from the terminal."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Resized:
    """The terminal was resized to ``width`` x ``height`` cells."""

    width: int
    height: int


@dataclass(frozen=True)
class FetchSucceeded:
    sequence: int
    record: ProfileRecord


@dataclass(frozen=True)
class FetchFailed:
    sequence: int
    error: FetchError


FetchResult = Union[FetchSucceeded, FetchFailed]
Event = Union[KeyPressed, Resized, FetchSucceeded, FetchFailed]


@dataclass(frozen=True)
class IssueFetch:
    """Start a background profile fetch."""

    request: FetchRequest


@dataclass(frozen=True)
class Quit:
    """Exit the application."""


Effect = Union[IssueFetch, Quit]
