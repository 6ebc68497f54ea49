"""Pydantic models for FPL feed records and the app's gating inputs."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Fixture(BaseModel):
    id: int
    event: int | None = None
    kickoff_time: datetime | None = None
    team_h: int | None = None
    team_a: int | None = None
    started: bool | None = None
    finished: bool = False


class Gameweek(BaseModel):
    """A scheduling period. Exactly one is active at a time."""

    id: int
    number: int
    deadline: datetime
    is_active: bool = False
    is_completed: bool = False


class PaymentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentProof(BaseModel):
    user_id: int
    gameweek_id: int
    team_number: int
    status: PaymentStatus = PaymentStatus.PENDING
    submitted_at: datetime
    verified_at: datetime | None = None


class Team(BaseModel):
    id: int
    user_id: int
    gameweek_id: int
    team_number: int
    is_locked: bool = False


class CacheEntryInfo(BaseModel):
    """Read-only view of one cache entry."""

    key: str
    age: float  # seconds
    ttl: float  # seconds
    expired: bool


class Diagnostics(BaseModel):
    """Snapshot of cache and rate-window state for the admin surface."""

    entries: int
    request_count: int
    request_limit: int
    window_age: float
    hits: int = 0
    misses: int = 0
    stale_serves: int = 0
    coalesced: int = 0
    cache_entries: list[CacheEntryInfo] = Field(default_factory=list)
