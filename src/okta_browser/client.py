"""Okta Users API client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import quote

import httpx

from .exceptions import ClientConstructionError, FetchError, InitialLoadError
from .models import DirectoryEntry, ProfileRecord, entry_from_user, profile_from_user

if TYPE_CHECKING:
    from types import TracebackType

    from .config import Settings

logger = logging.getLogger(__name__)

USERS_PATH = "/api/v1/users"


class DirectoryClient(Protocol):
    """What the browser needs from a directory backend."""

    async def list_entries(self) -> list[DirectoryEntry]: ...
    async def get_profile(self, identifier: str) -> ProfileRecord: ...
    async def aclose(self) -> None: ...


def _error_summary(response: httpx.Response) -> str:
    """Pull Okta's errorSummary out of an error response, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("errorSummary"), str):
        return body["errorSummary"]
    return response.reason_phrase or f"HTTP {response.status_code}"


class OktaDirectoryClient:
    """Async client for the Okta Users API.

    The underlying ``httpx.AsyncClient`` is created on first use so the
    client can be built outside a running event loop. Use one instance per
    event loop and close it with ``aclose()`` (or ``async with``).
    """

    def __init__(
        self,
        org_url: str,
        api_token: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        try:
            url = httpx.URL(org_url.strip())
        except (httpx.InvalidURL, TypeError) as e:
            raise ClientConstructionError(f"Invalid Okta org URL {org_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ClientConstructionError(
                f"Invalid Okta org URL {org_url!r}: expected http(s)://<host>"
            )
        if not api_token.strip():
            raise ClientConstructionError("Okta API token is empty")

        self._base_url = f"{url.scheme}://{url.netloc.decode('ascii')}"
        self._api_token = api_token.strip()
        self._timeout = httpx.Timeout(timeout, connect=min(timeout, 10.0))
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> OktaDirectoryClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Authorization": f"SSWS {self._api_token}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._http

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def list_entries(self) -> list[DirectoryEntry]:
        """List the users of the organization (first page only)."""
        client = self._get_http_client()
        try:
            response = await client.get(USERS_PATH)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as e:
            raise InitialLoadError(
                f"Failed to list Okta users: {_error_summary(e.response)}"
            ) from e
        except httpx.HTTPError as e:
            raise InitialLoadError(f"Failed to list Okta users: {e}") from e
        except ValueError as e:
            raise InitialLoadError("Failed to list Okta users: response is not JSON") from e

        if not isinstance(payload, list):
            raise InitialLoadError("Failed to list Okta users: expected a JSON array")

        entries = [entry_from_user(user) for user in payload if isinstance(user, dict)]
        logger.info("Loaded %d users from %s", len(entries), self.base_url)
        return entries

    async def get_profile(self, identifier: str) -> ProfileRecord:
        """Fetch one user's profile by login or user id."""
        client = self._get_http_client()
        try:
            response = await client.get(f"{USERS_PATH}/{quote(identifier, safe='@')}")
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.TimeoutException as e:
            raise FetchError(identifier, "timeout", "request timed out") from e
        except httpx.HTTPStatusError as e:
            kind = "not_found" if e.response.status_code == 404 else "http"
            raise FetchError(identifier, kind, _error_summary(e.response)) from e
        except httpx.HTTPError as e:
            raise FetchError(identifier, "network", str(e) or type(e).__name__) from e
        except ValueError as e:
            raise FetchError(identifier, "invalid_response", "response is not JSON") from e

        return profile_from_user(payload)


def build_client(settings: Settings) -> OktaDirectoryClient:
    """Build the directory client from settings."""
    return OktaDirectoryClient(
        settings.okta_org_url,
        settings.okta_api_token.get_secret_value(),
        timeout=settings.fetch_timeout_seconds,
    )
