"""Bounded retries with exponential backoff, gated by the rate limiter."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from fplsync.api.client import FPLClient
from fplsync.exceptions import FetchError, RateLimited
from fplsync.services.rate_limit import RateLimiter

log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


def backoff_schedule(attempts: int, base: float = 1.0) -> list[float]:
    """Delays slept between failed attempts: base * 2**i, no jitter.

    There is no sleep after the final attempt, so 3 attempts give [1, 2].
    """
    return [base * 2**i for i in range(max(0, attempts - 1))]


class RetryingFetcher:
    """GETs a path with up to ``max_attempts`` tries.

    A rate-limit denial counts as a failed attempt. Only the last error
    escapes once the budget is spent.
    """

    def __init__(
        self,
        client: FPLClient,
        limiter: RateLimiter,
        *,
        max_attempts: int = 3,
        backoff_base: float = 1.0,
        sleep: Sleep | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = client
        self.limiter = limiter
        self.max_attempts = max_attempts
        self.delays = backoff_schedule(max_attempts, backoff_base)
        self._sleep = sleep if sleep is not None else asyncio.sleep

    async def fetch(self, path: str, params: dict[str, Any] | None = None) -> Any:
        last_error = FetchError(f"no attempt made for {path}")
        for attempt in range(self.max_attempts):
            try:
                if not self.limiter.try_acquire():
                    raise RateLimited(self.limiter.limit, self.limiter.window)
                log.info("Fetching FPL API: %s (attempt %d)", path, attempt + 1)
                data = await self.client.get(path, params=params)
                log.info("Successfully fetched FPL API: %s", path)
                return data
            except FetchError as exc:
                last_error = exc
                log.warning(
                    "FPL API fetch attempt %d/%d failed for %s: %s",
                    attempt + 1, self.max_attempts, path, exc,
                )
            if attempt < len(self.delays):
                await self._sleep(self.delays[attempt])

        raise last_error
