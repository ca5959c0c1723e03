"""Okta Browser - interactive terminal viewer for Okta users."""

from __future__ import annotations

from .cli import main

__all__ = ["main"]
