"""Tests for feed and gating models."""

from __future__ import annotations

from datetime import datetime, timezone

from fplsync.api.models import Diagnostics, Fixture, PaymentProof, PaymentStatus, Team


class TestFixture:
    def test_parses_feed_record(self):
        fx = Fixture(**{
            "id": 10, "code": 2561895, "event": 2, "finished": False,
            "kickoff_time": "2026-08-22T19:00:00Z", "team_a": 1, "team_h": 14,
        })
        assert fx.kickoff_time == datetime(2026, 8, 22, 19, 0, tzinfo=timezone.utc)
        assert fx.team_h == 14

    def test_unscheduled_fixture(self):
        fx = Fixture(id=99, event=None, kickoff_time=None)
        assert fx.kickoff_time is None
        assert fx.finished is False


class TestPaymentProof:
    def test_default_status_pending(self):
        proof = PaymentProof(
            user_id=1, gameweek_id=2, team_number=1,
            submitted_at=datetime(2026, 8, 20, tzinfo=timezone.utc),
        )
        assert proof.status is PaymentStatus.PENDING
        assert proof.verified_at is None

    def test_status_from_string(self):
        proof = PaymentProof(
            user_id=1, gameweek_id=2, team_number=1, status="approved",
            submitted_at=datetime(2026, 8, 20, tzinfo=timezone.utc),
        )
        assert proof.status is PaymentStatus.APPROVED


class TestTeam:
    def test_unlocked_by_default(self):
        assert Team(id=1, user_id=1, gameweek_id=2, team_number=1).is_locked is False


class TestDiagnostics:
    def test_defaults(self):
        diag = Diagnostics(entries=0, request_count=0, request_limit=10, window_age=0.0)
        assert diag.cache_entries == []
        assert diag.stale_serves == 0
