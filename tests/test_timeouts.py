"""Tests for the timeout budget."""

from timeouts import Timeout


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_unbounded() -> None:
    tm = Timeout(clock=FakeClock())
    assert tm.remaining() is None
    assert not tm.expired()


def test_block_restarts_on_mark_start() -> None:
    clock = FakeClock()
    tm = Timeout(block=2.0, clock=clock)
    clock.now = 0.5
    assert tm.remaining() == 1.5
    tm.mark_start()
    clock.now = 1.0
    assert tm.remaining() == 1.5


def test_total_ignores_mark_start() -> None:
    clock = FakeClock()
    tm = Timeout(total=5.0, clock=clock)
    clock.now = 3.0
    tm.mark_start()
    assert tm.remaining() == 2.0


def test_deadline_caps_block_window() -> None:
    clock = FakeClock()
    tm = Timeout(block=2.0, total=3.0, clock=clock)
    clock.now = 1.5
    tm.mark_start()
    clock.now = 2.5
    # block would allow 1.0 more, the deadline only 0.5
    assert tm.remaining() == 0.5


def test_expired_clamps_at_zero() -> None:
    clock = FakeClock()
    tm = Timeout(block=1.0, clock=clock)
    clock.now = 10.0
    assert tm.remaining() == 0.0
    assert tm.expired()
