"""Status bar: rate-window usage, last refresh, warnings."""

from __future__ import annotations

from datetime import datetime

from textual.widgets import Static

from fplsync.services.rate_limit import RateLimiter


class StatusBar(Static):
    """Bottom status bar showing request usage, refresh time, and warnings."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        dock: bottom;
        background: #1a1a2e;
        color: #aaaaaa;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("[bold]Requests: --[/bold]", **kwargs)
        self._requests = "Requests: --"
        self._last_refresh = ""
        self._warning = ""
        self._refreshing = False

    def update_requests(self, limiter: RateLimiter) -> None:
        self._requests = limiter.status_text
        self._warning = "" if limiter.remaining else "Rate limit reached - serving cache"
        self._refresh_content()

    def update_refresh_time(self) -> None:
        self._last_refresh = f"Last: {datetime.now().strftime('%H:%M:%S')}"
        self._refresh_content()

    def set_warning(self, text: str) -> None:
        self._warning = text
        self._refresh_content()

    def set_refreshing(self, refreshing: bool) -> None:
        self._refreshing = refreshing
        self._refresh_content()

    def _refresh_content(self) -> None:
        parts: list[str] = [f"[bold]{self._requests}[/bold]"]
        if self._refreshing:
            parts.append("[bold yellow]Refreshing...[/bold yellow]")
        if self._last_refresh:
            parts.append(self._last_refresh)
        if self._warning:
            parts.append(f"[bold red]{self._warning}[/bold red]")
        parts.append("[dim]q:Quit  r:Refresh  c:Clear cache[/dim]")
        self.update("  |  ".join(parts))
