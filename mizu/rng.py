"""Thread-local PCG64 random number generator and uniform helpers."""

from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from typing import Optional

_log = logging.getLogger(__name__)

_MASK64 = (1 << 64) - 1
_MASK128 = (1 << 128) - 1
_MULTIPLIER = (2549297995355413124 << 64) + 4865540595714422341

B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


class Pcg64:
    """128-bit state LCG with XSL-RR output, 64-bit results, selectable stream."""

    def __init__(self, seed: int = 0, stream: int = 0) -> None:
        self._state = 0
        self._inc = 1
        self.seed(seed, stream)

    def seed(self, seed: int, stream: int = 0) -> None:
        """Reset the state from a seed and choose the output stream."""
        self._inc = ((stream << 1) | 1) & _MASK128
        self._state = self._bump((seed + self._inc) & _MASK128)

    def _bump(self, state: int) -> int:
        return (state * _MULTIPLIER + self._inc) & _MASK128

    def next_u64(self) -> int:
        """Advance the state and return the next 64-bit output."""
        self._state = self._bump(self._state)
        s = self._state
        rot = s >> 122
        x = (s ^ (s >> 64)) & _MASK64
        return ((x >> rot) | (x << (-rot & 63))) & _MASK64

    def below(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError("upper bound must be positive")
        words = max(1, -(-(n - 1).bit_length() // 64))
        total = 1 << (64 * words)
        limit = total - total % n
        while True:
            x = 0
            for _ in range(words):
                x = (x << 64) | self.next_u64()
            if x < limit:
                return x % n

    def canonical(self) -> float:
        """Uniform float in [0, 1)."""
        return (self.next_u64() >> 11) * (1.0 / (1 << 53))


@dataclass
class SeedData:
    """The seed and stream the current thread's generator was last seeded with."""

    seed: int = 0
    stream: int = 0


_local = threading.local()


def seed_info() -> SeedData:
    """Seed data of the current thread."""
    info = getattr(_local, "seed_info", None)
    if info is None:
        info = _local.seed_info = SeedData()
    return info


def _gen_seed_vals() -> None:
    info = seed_info()
    info.seed = secrets.randbits(128)
    info.stream = secrets.randbits(128)


def generator() -> Pcg64:
    """The current thread's generator, seeded from system entropy on first use."""
    gen = getattr(_local, "generator", None)
    if gen is None:
        _gen_seed_vals()
        info = seed_info()
        gen = _local.generator = Pcg64(info.seed, info.stream)
    return gen


def reseed() -> None:
    """Reseed the current thread's generator from system entropy."""
    gen = generator()
    _gen_seed_vals()
    info = seed_info()
    gen.seed(info.seed, info.stream)


def seed128(seed_hi: int, seed_lo: int, stream_hi: int = 0, stream_lo: int = 0) -> None:
    """Seed from 128-bit seed and stream values given as 64-bit halves."""
    full_seed = ((seed_hi & _MASK64) << 64) | (seed_lo & _MASK64)
    full_stream = ((stream_hi & _MASK64) << 64) | (stream_lo & _MASK64)
    generator().seed(full_seed, full_stream)
    info = seed_info()
    info.seed = full_seed
    info.stream = full_stream


def seed(seed: int, stream: int = 0) -> None:
    """Seed from 64-bit seed and stream values."""
    seed &= _MASK64
    stream &= _MASK64
    generator().seed(seed, stream)
    info = seed_info()
    info.seed = seed
    info.stream = stream


def debug_show_seed() -> str:
    """Log and return a statement that reproduces the current seed."""
    generator()
    info = seed_info()
    if info.seed >> 64 == 0 and info.stream >> 64 == 0:
        statement = f"rnd::seed({info.seed:#x}, {info.stream:#x});"
    else:
        statement = (
            f"rnd::seed128({info.seed >> 64:#x}, {info.seed & _MASK64:#x}, "
            f"{info.stream >> 64:#x}, {info.stream & _MASK64:#x});"
        )
    message = f"Seed statement: {statement}"
    _log.debug(message)
    return message


def get_int(low: int, high: Optional[int] = None) -> int:
    """Uniform integer in [low, high]; with one argument, in [0, low]."""
    if high is None:
        low, high = 0, low
        if high < 0:
            raise ValueError("upper bound must not be negative")
    if low > high:
        low, high = high, low
    return low + generator().below(high - low + 1)


def get_float(low: Optional[float] = None, high: Optional[float] = None) -> float:
    """Uniform float in [low, high); [0, low) with one argument, [0, 1) with none."""
    if low is None and high is None:
        low, high = 0.0, 1.0
    elif high is None:
        low, high = 0.0, low
    elif low is None:
        low = 0.0
    if low > high:
        low, high = high, low
    return low + generator().canonical() * (high - low)


def get_bool(chance: float) -> bool:
    """True with probability ``chance``."""
    if not 0.0 <= chance <= 1.0:
        raise ValueError(f"chance {chance} outside [0, 1]")
    return generator().canonical() < chance


def base58(length: int) -> str:
    """Random string of base58 characters."""
    return "".join(B58_ALPHABET[get_int(0x00, 0xFF) % 58] for _ in range(length))