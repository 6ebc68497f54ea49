"""Team submission deadline derived from a gameweek's first kickoff."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from fplsync.api.models import Fixture

DEADLINE_OFFSET = timedelta(hours=2)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_deadline(first_fixture_time: datetime) -> datetime:
    """Deadline is 2 hours before the first match."""
    return as_utc(first_fixture_time) - DEADLINE_OFFSET


def first_fixture_time(fixtures: Iterable[Fixture]) -> datetime | None:
    """Earliest kickoff, ignoring fixtures that are not yet scheduled."""
    kickoffs = [as_utc(f.kickoff_time) for f in fixtures if f.kickoff_time is not None]
    return min(kickoffs) if kickoffs else None
