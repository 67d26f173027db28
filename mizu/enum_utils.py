"""Helpers for iterating and masking enumerations."""

from __future__ import annotations

import enum
from typing import Iterator, TypeVar

E = TypeVar("E", bound=enum.Enum)
F = TypeVar("F", bound=enum.Flag)


def enum_range(front: E, back: E) -> Iterator[E]:
    """Yield members from ``front`` to ``back`` inclusive by value.

    Values between the two must be contiguous; a gap raises ValueError.
    """
    cls = type(front)
    for value in range(front.value, back.value + 1):
        yield cls(value)


def unwrap(e: enum.Enum):
    """Return the underlying value of a member."""
    return e.value


def is_flag_set(e: F, mask: F) -> bool:
    """Whether every bit of ``mask`` is set in ``e``."""
    return (e & mask) == mask