"""Shared test fixtures."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from fplsync.api.client import FPLClient
from fplsync.config import Settings
from fplsync.services.cache import TTLCache
from fplsync.services.feed_service import FeedService
from fplsync.services.rate_limit import RateLimiter


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stands in for asyncio.sleep; records the requested delays."""

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.delays: list[float] = []
        self.clock = clock

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def clocked_sleep(clock) -> RecordingSleep:
    """Sleep that advances the fake clock."""
    return RecordingSleep(clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url="https://fpl.test/api")


@pytest.fixture
def bootstrap_payload() -> dict:
    """Trimmed bootstrap-static response."""
    return {
        "events": [
            {"id": 1, "is_current": False, "is_next": False, "finished": True},
            {"id": 2, "is_current": True, "is_next": False, "finished": False},
            {"id": 3, "is_current": False, "is_next": True, "finished": False},
        ],
        "teams": [{"id": 1, "name": "Arsenal"}, {"id": 14, "name": "Man Utd"}],
        "elements": [
            {"id": 1, "web_name": "Raya", "element_type": 1, "team": 1, "now_cost": 55},
            {"id": 355, "web_name": "Saka", "element_type": 3, "team": 1, "now_cost": 100},
            {"id": 430, "web_name": "Fernandes", "element_type": 3, "team": 14, "now_cost": 85},
        ],
    }


@pytest.fixture
def live_payload() -> dict:
    """Trimmed event/{gw}/live response."""
    return {
        "elements": [
            {"id": 355, "stats": {"minutes": 90, "goals_scored": 1, "assists": 1, "total_points": 10}},
            {"id": 430, "stats": {"minutes": 64, "goals_scored": 0, "assists": 0, "total_points": 2}},
        ],
    }


@pytest.fixture
def fixtures_payload() -> list[dict]:
    return [
        {"id": 11, "event": 2, "kickoff_time": "2026-08-23T14:00:00Z", "team_h": 1, "team_a": 14},
        {"id": 10, "event": 2, "kickoff_time": "2026-08-22T19:00:00Z", "team_h": 14, "team_a": 1},
        {"id": 12, "event": 2, "kickoff_time": None, "team_h": 3, "team_a": 4},
    ]


class FakeFeed:
    """Routes mock transport requests by path and counts calls."""

    def __init__(self, routes: dict[str, object]) -> None:
        self.routes = routes
        self.calls: list[str] = []
        self.fail = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        if self.fail:
            return httpx.Response(503, json={"detail": "down"})
        body = self.routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"detail": "Not found."})
        return httpx.Response(200, json=body)


@pytest.fixture
def fake_feed(bootstrap_payload, live_payload, fixtures_payload) -> FakeFeed:
    return FakeFeed({
        "/api/bootstrap-static/": bootstrap_payload,
        "/api/event/2/live/": live_payload,
        "/api/fixtures/": fixtures_payload,
    })


@pytest.fixture
def make_service(settings, clock, sleep) -> Callable[..., FeedService]:
    def _make(handler, **overrides) -> FeedService:
        client = FPLClient(
            base_url=settings.base_url,
            transport=httpx.MockTransport(handler),
        )
        return FeedService(
            settings=overrides.pop("settings", settings),
            client=client,
            cache=overrides.pop("cache", TTLCache(clock=clock)),
            limiter=overrides.pop("limiter", RateLimiter(clock=clock)),
            sleep=sleep,
        )

    return _make
