"""FeedMonitorApp — admin view over the feed cache."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding

from fplsync.config import Settings, load_settings
from fplsync.exceptions import DataUnavailable
from fplsync.services.feed_service import FeedService
from fplsync.ui.widgets.cache_panel import CachePanel
from fplsync.ui.widgets.gameweek_panel import GameweekPanel
from fplsync.ui.widgets.status_bar import StatusBar

log = logging.getLogger(__name__)


class FeedMonitorApp(App):
    """FPL feed cache and deadline monitor."""

    TITLE = "fplsync"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("r", "refresh", "Refresh", show=False),
        Binding("c", "clear_cache", "Clear cache", show=False),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings: Settings = settings or load_settings()
        self.feed = FeedService(self.settings)
        self._refresh_timer = None

    def compose(self) -> ComposeResult:
        yield GameweekPanel(id="gameweek-panel")
        yield CachePanel(id="cache-panel")
        yield StatusBar(id="status-bar")

    async def on_mount(self) -> None:
        self.run_worker(self._load(), exclusive=True, group="load")
        self._refresh_timer = self.set_interval(
            self.settings.monitor_refresh_interval, self._auto_refresh
        )

    async def on_unmount(self) -> None:
        await self.feed.close()

    def action_refresh(self) -> None:
        self.run_worker(self._load(), exclusive=True, group="load")

    def action_clear_cache(self) -> None:
        self.feed.clear_all()
        self._render_diagnostics()

    async def _auto_refresh(self) -> None:
        self.run_worker(self._load(), exclusive=True, group="load")

    def _render_diagnostics(self) -> None:
        self.query_one("#cache-panel", CachePanel).update_diagnostics(
            self.feed.get_diagnostics()
        )
        self.query_one("#status-bar", StatusBar).update_requests(self.feed.limiter)

    async def _load(self) -> None:
        status = self.query_one("#status-bar", StatusBar)
        panel = self.query_one("#gameweek-panel", GameweekPanel)
        status.set_refreshing(True)
        try:
            gameweek = await self.feed.get_current_gameweek()
            await self.feed.get_live_data(gameweek)
            deadline = await self.feed.get_gameweek_deadline(gameweek)
            panel.update_gameweek(gameweek, deadline)
            self._render_diagnostics()
            status.update_refresh_time()
        except DataUnavailable as exc:
            log.warning("Monitor refresh failed: %s", exc)
            self._render_diagnostics()
            status.set_warning(str(exc))
        except Exception:
            log.exception("Error refreshing feed monitor")
            status.set_warning("Refresh failed - see log")
        finally:
            status.set_refreshing(False)
