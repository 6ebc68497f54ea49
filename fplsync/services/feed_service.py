"""Orchestrator: rate-limited fetches behind the TTL cache."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fplsync.api.client import FPLClient
from fplsync.api.endpoints import get_bootstrap, get_fixtures, get_live_event
from fplsync.api.fetcher import RetryingFetcher, Sleep
from fplsync.api.models import Diagnostics, Fixture
from fplsync.config import Settings
from fplsync.services.cache import TTLCache
from fplsync.services.deadline import compute_deadline, first_fixture_time
from fplsync.services.rate_limit import RateLimiter

log = logging.getLogger(__name__)

BOOTSTRAP_KEY = "bootstrap-static"

POSITION_NAMES: dict[int, str] = {1: "GKP", 2: "DEF", 3: "MID", 4: "FWD"}


def live_key(gameweek: int) -> str:
    return f"live-gw-{gameweek}"


def fixtures_key(gameweek: int) -> str:
    return f"fixtures-gw-{gameweek}"


def _find_by_id(collection: Any, entity_id: int) -> dict | None:
    if not isinstance(collection, list):
        return None
    for item in collection:
        if isinstance(item, dict) and item.get("id") == entity_id:
            return item
    return None


class FeedService:
    """Serves FPL reference and live data from cache, refreshing on expiry.

    Each instance owns its cache and limiter; nothing is module-global.
    """

    def __init__(
        self,
        settings: Settings,
        client: FPLClient | None = None,
        cache: TTLCache | None = None,
        limiter: RateLimiter | None = None,
        fetcher: RetryingFetcher | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self.settings = settings
        if client is None:
            client = FPLClient(
                base_url=settings.base_url,
                user_agent=settings.user_agent,
                timeout=settings.request_timeout,
            )
        self.client = client
        if cache is None:
            cache = TTLCache(max_entries=settings.cache_max_entries)
        self.cache = cache
        if limiter is None:
            limiter = RateLimiter(limit=settings.rate_limit, window=settings.rate_window)
        self.limiter = limiter
        if fetcher is None:
            fetcher = RetryingFetcher(
                self.client,
                self.limiter,
                max_attempts=settings.max_attempts,
                backoff_base=settings.backoff_base,
                sleep=sleep,
            )
        self.fetcher = fetcher

    async def close(self) -> None:
        await self.client.close()

    async def get_reference_data(self) -> Any:
        """Bootstrap payload (players, teams, events)."""
        return await self.cache.get(
            BOOTSTRAP_KEY,
            self.settings.bootstrap_ttl,
            lambda: get_bootstrap(self.fetcher),
        )

    async def get_live_data(self, gameweek: int) -> Any:
        """Live per-player stats for a gameweek."""
        return await self.cache.get(
            live_key(gameweek),
            self.settings.live_ttl,
            lambda: get_live_event(self.fetcher, gameweek),
        )

    async def get_fixtures(self, gameweek: int) -> list[Fixture]:
        raw = await self.cache.get(
            fixtures_key(gameweek),
            self.settings.fixtures_ttl,
            lambda: get_fixtures(self.fetcher, gameweek),
        )
        return [Fixture(**f) for f in raw]

    async def get_entity_info(self, entity_id: int) -> dict | None:
        """Player record from the bootstrap ``elements`` list, if any."""
        data = await self.get_reference_data()
        if not isinstance(data, dict):
            return None
        return _find_by_id(data.get("elements"), entity_id)

    async def get_entity_stats(self, gameweek: int, entity_id: int) -> dict | None:
        """A player's ``stats`` block from the gameweek's live data, if any."""
        data = await self.get_live_data(gameweek)
        if not isinstance(data, dict):
            return None
        element = _find_by_id(data.get("elements"), entity_id)
        if element is None:
            return None
        return element.get("stats") or None

    async def get_current_gameweek(self) -> int:
        data = await self.get_reference_data()
        events = data.get("events") if isinstance(data, dict) else None
        if not isinstance(events, list):
            return 1
        for flag in ("is_current", "is_next"):
            for event in events:
                if isinstance(event, dict) and event.get(flag):
                    return event["id"]
        return 1

    async def get_gameweek_deadline(self, gameweek: int) -> datetime | None:
        """Two hours before the gameweek's earliest kickoff.

        None when no fixture in the gameweek has a kickoff time yet.
        """
        fixtures = await self.get_fixtures(gameweek)
        first = first_fixture_time(fixtures)
        if first is None:
            log.warning("No scheduled fixtures found for gameweek %d", gameweek)
            return None
        return compute_deadline(first)

    @staticmethod
    def get_position_name(element_type: int) -> str:
        return POSITION_NAMES.get(element_type, "UNK")

    def forget_live_data(self, gameweek: int) -> None:
        """Drop a closed gameweek's live entry."""
        self.cache.invalidate(live_key(gameweek))

    def clear_all(self) -> None:
        self.cache.clear()

    def get_diagnostics(self) -> Diagnostics:
        entries = self.cache.snapshot()
        return Diagnostics(
            entries=len(entries),
            request_count=self.limiter.current_count,
            request_limit=self.limiter.limit,
            window_age=self.limiter.window_age,
            hits=self.cache.hits,
            misses=self.cache.misses,
            stale_serves=self.cache.stale_serves,
            coalesced=self.cache.coalesced,
            cache_entries=entries,
        )
