"""Fixed-window request limiter for the upstream feed."""

from __future__ import annotations

import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


class RateLimiter:
    """Allows at most ``limit`` attempts per ``window`` seconds.

    Denial is immediate; there is no queue. The check and the increment
    happen without yielding to the event loop.
    """

    def __init__(
        self,
        limit: int = 10,
        window: float = 60.0,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.limit = limit
        self.window = window
        self._clock = clock if clock is not None else time.monotonic
        self.count = 0
        self.window_start = self._clock()

    def try_acquire(self) -> bool:
        now = self._clock()
        if now - self.window_start > self.window:
            self.count = 0
            self.window_start = now
        if self.count >= self.limit:
            log.warning("FPL API rate limit exceeded, using cached data")
            return False
        self.count += 1
        return True

    @property
    def window_age(self) -> float:
        """Seconds since the current window opened."""
        return self._clock() - self.window_start

    @property
    def current_count(self) -> int:
        """Attempts counted in the live window; 0 once the window has lapsed."""
        if self.window_age > self.window:
            return 0
        return self.count

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.current_count)

    @property
    def status_text(self) -> str:
        used = self.current_count
        return f"Requests: {used}/{self.limit} per {self.window:g}s"
