"""In-memory TTL cache with stale-on-failure fallback.

Keys look like ``bootstrap-static`` or ``live-gw-{gameweek}``. A failed
refresh serves the last stored payload even when it has expired; only a
key that was never stored raises DataUnavailable.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fplsync.api.models import CacheEntryInfo
from fplsync.exceptions import DataUnavailable, FeedError

log = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


@dataclass
class CacheEntry:
    payload: Any
    stored_at: float
    ttl: float


class TTLCache:
    """Per-entry TTL cache keyed by string.

    Concurrent callers for the same stale key share one in-flight refresh.
    Entries are kept in least-recently-used order and the oldest is evicted
    once ``max_entries`` is exceeded.
    """

    def __init__(
        self,
        max_entries: int | None = 128,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._clock = clock if clock is not None else time.monotonic
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._inflight: dict[str, asyncio.Task] = {}
        self.hits = 0
        self.misses = 0
        self.stale_serves = 0
        self.coalesced = 0
        self._generation = 0

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < entry.ttl

    async def get(self, key: str, ttl: float, loader: Loader) -> Any:
        """Return the payload for ``key``, refreshing it through ``loader``.

        Raises DataUnavailable when the refresh fails and nothing was ever
        stored for the key.
        """
        entry = self._store.get(key)
        if entry is not None and self._is_fresh(entry):
            self._store.move_to_end(key)
            self.hits += 1
            log.debug("Using cached %s", key)
            return copy.deepcopy(entry.payload)

        self.misses += 1
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._refresh(key, ttl, loader))
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._forget_inflight(key, t))
        else:
            self.coalesced += 1
            log.debug("Joining in-flight refresh for %s", key)

        try:
            payload = await asyncio.shield(task)
        except FeedError as exc:
            entry = self._store.get(key)
            if entry is None:
                log.error("Failed to fetch %s and no cache available: %s", key, exc)
                raise DataUnavailable(key) from exc
            self.stale_serves += 1
            log.warning("Returning expired cached %s due to API failure: %s", key, exc)
            return copy.deepcopy(entry.payload)
        return copy.deepcopy(payload)

    async def _refresh(self, key: str, ttl: float, loader: Loader) -> Any:
        generation = self._generation
        payload = await loader()
        if generation == self._generation:
            self._set(key, payload, ttl)
        else:
            log.debug("Cache cleared during refresh of %s, not storing", key)
        return payload

    def _forget_inflight(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # awaiters read the outcome through shield()
        if not task.cancelled():
            task.exception()

    def _set(self, key: str, payload: Any, ttl: float) -> None:
        self._store[key] = CacheEntry(payload=payload, stored_at=self._clock(), ttl=ttl)
        self._store.move_to_end(key)
        if self.max_entries is not None:
            while len(self._store) > self.max_entries:
                evicted, _ = self._store.popitem(last=False)
                log.info("Evicted least recently used cache entry %s", evicted)

    def invalidate(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        """Drop every entry. Refreshes already in flight will not store."""
        self._generation += 1
        self._store.clear()
        log.info("FPL API cache cleared")

    def snapshot(self) -> list[CacheEntryInfo]:
        """Age, TTL and expiry of each entry. Does not touch LRU order."""
        now = self._clock()
        return [
            CacheEntryInfo(
                key=key,
                age=now - entry.stored_at,
                ttl=entry.ttl,
                expired=now - entry.stored_at >= entry.ttl,
            )
            for key, entry in self._store.items()
        ]
