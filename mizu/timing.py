"""Tickers, frame counters and other time-based helpers.

Durations are integer nanoseconds; clocks are callables returning the current
time in nanoseconds (``time.monotonic_ns`` by default).
"""

from __future__ import annotations

import logging
import time
from collections import Counter, deque
from typing import Any, Callable, Generic, Hashable, TypeVar

from mizu.averagers import EMA

Clock = Callable[[], int]
NS_PER_SEC = 1_000_000_000

_log = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class Ticker:
    """Measures time between ticks and counts whole intervals elapsed."""

    def __init__(self, interval: int = 0, clock: Clock = time.monotonic_ns) -> None:
        self._clock = clock
        self._interval = interval
        self.reset()

    def reset(self) -> None:
        self._start = self._clock()
        self._last = self._start
        self._dt = 0
        self._acc = 0

    def tick(self) -> int:
        """Advance to now; return how many whole intervals have passed."""
        now = self._clock()
        self._dt = now - self._last
        self._last = now
        if self._interval == 0:
            return 0
        self._acc += self._dt
        count, self._acc = divmod(self._acc, self._interval)
        return count

    def dt(self) -> int:
        return self._dt

    def elapsed(self) -> int:
        return self._last - self._start


class FrameCounter:
    """Estimates frames per second from frame timestamps."""

    def __init__(self, clock: Clock = time.monotonic_ns) -> None:
        self._clock = clock
        self._timestamps: deque[int] = deque()
        self._ticker = Ticker(NS_PER_SEC, clock)
        self._averager = EMA(1.0)

    def update(self) -> None:
        self._timestamps.append(self._clock())
        while (
            len(self._timestamps) > 2
            and self._timestamps[-1] - self._timestamps[0] > NS_PER_SEC
        ):
            self._timestamps.popleft()
        self._averager.update(float(len(self._timestamps)))
        if self._ticker.tick() > 0:
            self._averager.alpha = 2.0 / (1.0 + len(self._timestamps))

    def fps(self) -> float:
        return self._averager.value()

    def dt(self) -> int:
        """Time between the last two frames, or 0 with fewer than two."""
        if len(self._timestamps) < 2:
            return 0
        return self._timestamps[-1] - self._timestamps[-2]


def as_secs_dt(d: int) -> float:
    """Convert a nanosecond duration to seconds."""
    return d / 1e9


class MaxPeriod(Generic[T]):
    """Tracks the maximum value seen within a trailing time window."""

    def __init__(self, period: int, clock: Clock = time.monotonic_ns) -> None:
        self._period = period
        self._clock = clock
        self._samples: deque[tuple[int, T]] = deque()
        self._frequency: Counter[T] = Counter()

    def update(self, v: T) -> None:
        now = self._clock()
        self._samples.append((now, v))
        self._frequency[v] += 1
        while self._samples and now - self._samples[0][0] > self._period:
            _, old = self._samples.popleft()
            self._frequency[old] -= 1
            if self._frequency[old] == 0:
                del self._frequency[old]

    def value(self) -> T:
        if not self._frequency:
            raise ValueError("no samples within the period")
        return max(self._frequency)

    def debug_print(self) -> None:
        for value, count in self._frequency.items():
            _log.info("%s: %s", value, count)


class IntermittentLambda:
    """Calls a function at most once per interval, caching its last result."""

    def __init__(self, interval: int, f: Callable[..., Any], default: Any = None) -> None:
        self._interval = interval
        self._acc = 0
        self._f = f
        self._saved = default

    def __call__(self, dt: int, *args: Any) -> Any:
        self._acc += dt
        if self._acc >= self._interval:
            self._saved = self._f(*args)
            self._acc -= self._interval
        return self._saved