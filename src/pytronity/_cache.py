"""Single-flight, time-bounded cache in front of a bulk endpoint.

One upstream call returns everything known about a vehicle, while the
controller polls several values independently and often.  The accessor
below serves all of those reads from one response per TTL window and
never lets concurrent readers trigger more than one upstream call.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """Last successful fetch.  Staleness is judged on read, not on write."""

    value: T
    fetched_at: float


class CachedBulkAccessor(Generic[T]):
    """Serve a fetched value for ``ttl`` seconds, fetching at most once at a time.

    Parameters
    ----------
    fetch : callable
        Coroutine function performing the upstream call.
    ttl : float
        Seconds a successful result is served before ``fetch`` is called
        again.  ``0`` disables reuse between calls; overlapping calls are
        still coalesced.
    clock : callable
        Wall-clock source, ``time.time`` by default.

    Behaviour of :meth:`get`:

    * a cached value younger than ``ttl`` is returned immediately;
    * otherwise one ``fetch`` runs and every caller arriving while it is
      in flight awaits that same call and gets the same value or the
      same exception;
    * a failed fetch leaves the cache untouched and is not remembered,
      so the next ``get`` fetches again.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        ttl: float,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetch = fetch
        self._ttl = ttl
        self._clock = clock
        self._entry: CacheEntry[T] | None = None
        self._in_flight: asyncio.Future[T] | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def entry(self) -> CacheEntry[T] | None:
        """The last successful fetch, fresh or stale."""
        return self._entry

    def _fresh(self) -> CacheEntry[T] | None:
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry.fetched_at < self._ttl:
            return entry
        return None

    async def get(self) -> T:
        """Return the current value, fetching it if missing or stale."""
        entry = self._fresh()
        if entry is not None:
            return entry.value

        if self._in_flight is None:
            self._in_flight = asyncio.ensure_future(self._refresh())
            self._in_flight.add_done_callback(_retrieve_exception)
        else:
            _logger.debug("Joining in-flight fetch")

        # A cancelled caller must not cancel the fetch other callers wait on.
        return await asyncio.shield(self._in_flight)

    async def _refresh(self) -> T:
        try:
            _logger.debug("Cache miss; fetching")
            value = await self._fetch()
            self._entry = CacheEntry(value=value, fetched_at=self._clock())
            return value
        finally:
            self._in_flight = None


def _retrieve_exception(fut: asyncio.Future[Any]) -> None:
    # Marks a failure as seen when every waiting caller was cancelled.
    if not fut.cancelled():
        fut.exception()
