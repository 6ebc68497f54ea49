"""Tests for RateLimiter."""

from fplsync.services.rate_limit import RateLimiter


def test_ten_calls_allowed_then_denied(clock):
    rl = RateLimiter(limit=10, window=60, clock=clock)
    assert all(rl.try_acquire() for _ in range(10))
    assert not rl.try_acquire()
    assert rl.count == 10


def test_denial_does_not_increment(clock):
    rl = RateLimiter(limit=2, window=60, clock=clock)
    rl.try_acquire()
    rl.try_acquire()
    rl.try_acquire()
    rl.try_acquire()
    assert rl.count == 2


def test_window_rolls_over(clock):
    rl = RateLimiter(limit=10, window=60, clock=clock)
    for _ in range(10):
        rl.try_acquire()
    assert not rl.try_acquire()

    clock.advance(61)
    assert rl.try_acquire()
    assert rl.count == 1


def test_window_boundary_is_exclusive(clock):
    """Reset needs strictly more than the window length to elapse."""
    rl = RateLimiter(limit=1, window=60, clock=clock)
    assert rl.try_acquire()
    clock.advance(60)
    assert not rl.try_acquire()
    clock.advance(0.5)
    assert rl.try_acquire()


def test_remaining_and_status_text(clock):
    rl = RateLimiter(limit=10, window=60, clock=clock)
    assert rl.remaining == 10
    for _ in range(3):
        rl.try_acquire()
    assert rl.remaining == 7
    assert rl.status_text == "Requests: 3/10 per 60s"

    clock.advance(120)
    assert rl.remaining == 10
    assert rl.status_text == "Requests: 0/10 per 60s"


def test_window_age(clock):
    rl = RateLimiter(clock=clock)
    clock.advance(12.5)
    assert rl.window_age == 12.5


def test_current_count_lapses_with_window(clock):
    rl = RateLimiter(limit=10, window=60, clock=clock)
    rl.try_acquire()
    rl.try_acquire()
    assert rl.current_count == 2

    clock.advance(61)
    assert rl.current_count == 0
    assert rl.count == 2  # not reset until the next acquire
