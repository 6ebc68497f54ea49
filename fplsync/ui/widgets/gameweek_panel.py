"""Current gameweek and time left before the team deadline."""

from __future__ import annotations

from datetime import datetime, timezone

from textual.widgets import Static


class GameweekPanel(Static):
    DEFAULT_CSS = """
    GameweekPanel {
        height: 3;
        dock: top;
        padding: 1 1 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("[dim]Gameweek: --[/dim]", **kwargs)

    def update_gameweek(
        self,
        gameweek: int,
        deadline: datetime | None,
        now: datetime | None = None,
    ) -> None:
        if deadline is None:
            self.update(f"[bold]Gameweek {gameweek}[/bold]  [dim]deadline unknown[/dim]")
            return
        now = now or datetime.now(timezone.utc)
        hours = (deadline - now).total_seconds() / 3600
        stamp = deadline.strftime("%Y-%m-%d %H:%M UTC")
        if hours < 0:
            left = f"[bold red]passed {-hours:.1f}h ago[/bold red]"
        else:
            left = f"[green]{hours:.1f}h remaining[/green]"
        self.update(f"[bold]Gameweek {gameweek}[/bold]  Deadline: {stamp}  {left}")
