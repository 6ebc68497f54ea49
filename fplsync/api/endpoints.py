"""Fetch functions for the FPL feed endpoints."""

from __future__ import annotations

from typing import Any

from fplsync.api.fetcher import RetryingFetcher

BOOTSTRAP_PATH = "/bootstrap-static/"
FIXTURES_PATH = "/fixtures/"


def live_event_path(gameweek: int) -> str:
    return f"/event/{gameweek}/live/"


async def get_bootstrap(fetcher: RetryingFetcher) -> Any:
    """Players, teams and events. Large and slow-changing."""
    return await fetcher.fetch(BOOTSTRAP_PATH)


async def get_live_event(fetcher: RetryingFetcher, gameweek: int) -> Any:
    """Per-player live stats for one gameweek."""
    return await fetcher.fetch(live_event_path(gameweek))


async def get_fixtures(fetcher: RetryingFetcher, gameweek: int) -> list[dict]:
    """Fixtures scheduled in one gameweek."""
    data = await fetcher.fetch(FIXTURES_PATH, params={"event": gameweek})
    return data if isinstance(data, list) else []
