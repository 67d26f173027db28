import logging

import pytest

from mizu.timing import (
    FrameCounter,
    IntermittentLambda,
    MaxPeriod,
    Ticker,
    as_secs_dt,
)

MS = 1_000_000


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, d):
        self.now += d


def test_ticker_counts_intervals_and_carries_remainder():
    clock = FakeClock()
    ticker = Ticker(10, clock)
    clock.advance(25)
    assert ticker.tick() == 2
    assert ticker.dt() == 25
    clock.advance(5)
    assert ticker.tick() == 1
    assert ticker.elapsed() == 30


def test_ticker_without_interval_never_ticks():
    clock = FakeClock()
    ticker = Ticker(0, clock)
    clock.advance(1000)
    assert ticker.tick() == 0
    assert ticker.dt() == 1000


def test_ticker_reset():
    clock = FakeClock()
    ticker = Ticker(10, clock)
    clock.advance(7)
    ticker.tick()
    ticker.reset()
    assert ticker.elapsed() == 0
    assert ticker.dt() == 0
    clock.advance(7)
    assert ticker.tick() == 0


def test_frame_counter_dt():
    clock = FakeClock()
    fc = FrameCounter(clock)
    assert fc.dt() == 0
    fc.update()
    assert fc.dt() == 0
    clock.advance(16 * MS)
    fc.update()
    assert fc.dt() == 16 * MS


def test_frame_counter_fps_counts_frames_in_first_second():
    clock = FakeClock()
    fc = FrameCounter(clock)
    frames = 5
    for _ in range(frames):
        clock.advance(100 * MS)
        fc.update()
    assert fc.fps() == pytest.approx(frames)


def test_frame_counter_drops_old_timestamps():
    clock = FakeClock()
    fc = FrameCounter(clock)
    for _ in range(40):
        clock.advance(100 * MS)
        fc.update()
    assert 0 < fc.fps() <= 12


def test_as_secs_dt():
    assert as_secs_dt(1_500_000_000) == 1.5
    assert as_secs_dt(0) == 0.0


def test_max_period_tracks_maximum():
    clock = FakeClock()
    mp = MaxPeriod(100, clock)
    for v in [3, 9, 4]:
        mp.update(v)
        clock.advance(1)
    assert mp.value() == 9


def test_max_period_expires_old_samples():
    clock = FakeClock()
    mp = MaxPeriod(100, clock)
    mp.update(10)
    clock.advance(101)
    mp.update(1)
    assert mp.value() == 1


def test_max_period_empty_raises():
    mp = MaxPeriod(100, FakeClock())
    with pytest.raises(ValueError):
        mp.value()


def test_max_period_debug_print(caplog):
    mp = MaxPeriod(100, FakeClock())
    mp.update(7)
    mp.update(7)
    with caplog.at_level(logging.INFO, logger="mizu.timing"):
        mp.debug_print()
    assert "7: 2" in caplog.text


def test_intermittent_lambda_calls_once_per_interval():
    calls = []

    def f(x):
        calls.append(x)
        return x * 2

    lam = IntermittentLambda(10, f, default=-1)
    assert lam(4, 1) == -1
    assert calls == []
    assert lam(6, 2) == 4
    assert calls == [2]
    assert lam(3, 5) == 4
    assert calls == [2]