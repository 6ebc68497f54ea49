"""Async httpx wrapper for the public FPL endpoints."""

from __future__ import annotations

from typing import Any

import httpx

from fplsync.exceptions import TransportFailure

BASE_URL = "https://fantasy.premierleague.com/api"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


class FPLClient:
    """Async HTTP client for the FPL feed. No auth; a fixed User-Agent."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        user_agent: str = USER_AGENT,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {
            "base_url": base_url,
            "timeout": timeout,
            "headers": {"User-Agent": user_agent},
            "follow_redirects": True,
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)
        self.last_status: int | None = None

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make one GET request and return the decoded JSON body.

        Every failure mode is raised as TransportFailure.
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            self.last_status = None
            raise TransportFailure(path, str(exc) or type(exc).__name__) from exc

        self.last_status = response.status_code
        if not response.is_success:
            raise TransportFailure(
                path,
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TransportFailure(
                path, "invalid JSON body", status_code=response.status_code
            ) from exc
