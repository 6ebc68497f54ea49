"""Cache diagnostics table."""

from __future__ import annotations

from rich.console import Group
from rich.rule import Rule
from rich.text import Text

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from fplsync.api.models import CacheEntryInfo, Diagnostics


def _duration(seconds: float) -> str:
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m{seconds % 60:02d}s"
    return f"{seconds // 3600}h{(seconds % 3600) // 60:02d}m"


def _build_header() -> Text:
    h = Text()
    h.append("KEY".ljust(24), style="bold #00ff88")
    h.append("  ")
    h.append("AGE".rjust(8), style="bold #00ff88")
    h.append("  ")
    h.append("TTL".rjust(8), style="bold #00ff88")
    h.append("  ")
    h.append("STATE", style="bold #00ff88")
    return h


def _build_row(entry: CacheEntryInfo) -> Text:
    line = Text()
    line.append(entry.key[:24].ljust(24), style="bold")
    line.append("  ")
    line.append(_duration(entry.age).rjust(8))
    line.append("  ")
    line.append(_duration(entry.ttl).rjust(8), style="dim")
    line.append("  ")
    if entry.expired:
        line.append("expired", style="bold red")
    else:
        line.append("fresh", style="green")
    return line


def _build_summary(diag: Diagnostics) -> Text:
    t = Text()
    t.append(f"Entries: {diag.entries}", style="bold")
    t.append(f"   Hits: {diag.hits}   Misses: {diag.misses}")
    t.append(f"   Stale served: {diag.stale_serves}", style="yellow" if diag.stale_serves else "")
    t.append(f"   Coalesced: {diag.coalesced}")
    t.append(f"   Window: {diag.request_count}/{diag.request_limit} ({_duration(diag.window_age)} old)")
    return t


class CachePanel(VerticalScroll):
    """Scrollable view of the feed cache."""

    DEFAULT_CSS = """
    CachePanel {
        height: 1fr;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("[dim]No cache entries yet[/dim]", id="cache-content")

    def update_diagnostics(self, diag: Diagnostics) -> None:
        content = self.query_one("#cache-content", Static)
        parts: list = [_build_summary(diag), Rule(style="#333333"), _build_header()]
        if diag.cache_entries:
            parts.extend(_build_row(e) for e in diag.cache_entries)
        else:
            parts.append(Text("No cache entries", style="dim"))
        content.update(Group(*parts))
