"""Running averages: cumulative, exponential and simple moving."""

from __future__ import annotations

from collections import deque


class CMA:
    """Cumulative moving average."""

    def __init__(self, sample_count: int = 0) -> None:
        self._value = 0.0
        self._sample_count = sample_count

    def update(self, v: float) -> None:
        self._sample_count += 1
        self._value += (v - self._value) / self._sample_count

    def value(self) -> float:
        return self._value

    def samples(self) -> int:
        return self._sample_count


class EMA:
    """Exponential moving average with a mutable smoothing factor."""

    def __init__(self, alpha: float) -> None:
        self.alpha = alpha
        self._value = 0.0

    def update(self, v: float) -> None:
        self._value = self.alpha * v + (1 - self.alpha) * self._value

    def value(self) -> float:
        return self._value


class SMA:
    """Simple moving average over the last ``sample_count`` samples."""

    def __init__(self, sample_count: int) -> None:
        self.sample_count = sample_count
        self._samples: deque[float] = deque()
        self._value = 0.0

    def update(self, v: float) -> None:
        self._samples.append(v)
        if len(self._samples) <= self.sample_count:
            self._value += (v - self._value) / len(self._samples)
        else:
            oldest = self._samples.popleft()
            self._value += (v - oldest) / len(self._samples)

    def value(self) -> float:
        return self._value