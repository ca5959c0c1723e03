"""Background profile fetches."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any, Protocol

from .events import FetchFailed, FetchResult, FetchSucceeded
from .exceptions import FetchError

if TYPE_CHECKING:
    from .client import DirectoryClient
    from .models import FetchRequest

logger = logging.getLogger(__name__)

FETCH_GROUP = "profile-fetch"


class WorkerRunner(Protocol):
    """Matches ``App.run_worker`` closely enough for our use."""

    def __call__(
        self,
        work: Coroutine[Any, Any, Any],
        name: str | None = ...,
        group: str = ...,
        exit_on_error: bool = ...,
    ) -> object: ...


class ProfileFetcher:
    """Runs one worker per issued request and reports exactly one result.

    Workers are never cancelled; a superseded fetch still completes and its
    result is left for the controller to discard.
    """

    def __init__(
        self,
        client: DirectoryClient,
        deliver: Callable[[FetchResult], object],
        *,
        runner: WorkerRunner,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._deliver = deliver
        self._runner = runner
        self._timeout = timeout

    def issue(self, request: FetchRequest) -> int:
        """Start fetching ``request.identifier`` and return its sequence number."""
        self._runner(
            self._fetch(request.identifier, request.sequence),
            name=f"fetch-profile-{request.sequence}",
            group=FETCH_GROUP,
            exit_on_error=False,
        )
        return request.sequence

    async def _fetch(self, identifier: str, sequence: int) -> FetchResult:
        result: FetchResult
        try:
            record = await asyncio.wait_for(
                self._client.get_profile(identifier), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            error = FetchError(identifier, "timeout", f"no response after {self._timeout:g}s")
            result = FetchFailed(sequence, error)
        except FetchError as e:
            result = FetchFailed(sequence, e)
        except Exception as e:
            logger.exception("Unexpected error fetching %s", identifier)
            error = FetchError(identifier, "unexpected", str(e) or type(e).__name__)
            result = FetchFailed(sequence, error)
        else:
            result = FetchSucceeded(sequence, record)

        logger.debug("Fetch seq %d for %s finished: %s", sequence, identifier, type(result).__name__)
        self._deliver(result)
        return result
