"""Errors raised while syncing the FPL feed."""

from __future__ import annotations


class FeedError(Exception):
    """Base class for feed sync errors."""


class FetchError(FeedError):
    """A single upstream fetch failed."""


class RateLimited(FetchError):
    """The local request quota for the current window is used up."""

    def __init__(self, limit: int, window: float) -> None:
        super().__init__(f"Rate limit exceeded: {limit} requests per {window:g}s")
        self.limit = limit
        self.window = window


class TransportFailure(FetchError):
    """Network fault, non-2xx status, or an unreadable body."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"GET {url} failed: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class DataUnavailable(FeedError):
    """No cached value exists and the refresh failed."""

    def __init__(self, key: str) -> None:
        super().__init__(f"{key} data unavailable and no cache available")
        self.key = key
