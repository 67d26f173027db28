"""8-bit RGBA colours and simple 2D shape records."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Optional, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Rgba:
    """A colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if not 0 <= v <= 255:
                raise ValueError(f"channel {f.name}={v} outside 0..255")

    def gl_color(self) -> tuple[float, float, float, float]:
        """Channels as floats in [0, 1]."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)


def _channels(name: str, hex_or_r: int, rest: tuple[Optional[int], ...]) -> Optional[tuple[int, ...]]:
    if all(v is None for v in rest):
        return None
    if any(v is None for v in rest):
        raise TypeError(f"{name}() takes a single hex value or every channel")
    return (hex_or_r, *rest)  # type: ignore[return-value]


def rgb(hex_or_r: int, g: Optional[int] = None, b: Optional[int] = None) -> Rgba:
    """Opaque colour from 0xRRGGBB or from three channels."""
    channels = _channels("rgb", hex_or_r, (g, b))
    if channels is None:
        h = hex_or_r
        return Rgba(h >> 16 & 0xFF, h >> 8 & 0xFF, h & 0xFF, 255)
    return Rgba(*channels, 255)


def rgba(
    hex_or_r: int, g: Optional[int] = None, b: Optional[int] = None, a: Optional[int] = None
) -> Rgba:
    """Colour from 0xRRGGBBAA or from four channels."""
    channels = _channels("rgba", hex_or_r, (g, b, a))
    if channels is None:
        h = hex_or_r
        return Rgba(h >> 24 & 0xFF, h >> 16 & 0xFF, h >> 8 & 0xFF, h & 0xFF)
    return Rgba(*channels)


def _to_byte(x: float) -> int:
    scaled = x * 255.0
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def rgb_f(r: float, g: float, b: float) -> Rgba:
    """Opaque colour from float channels in [0, 1]."""
    return Rgba(_to_byte(r), _to_byte(g), _to_byte(b), 255)


def rgba_f(r: float, g: float, b: float, a: float) -> Rgba:
    """Colour from float channels in [0, 1]."""
    return Rgba(_to_byte(r), _to_byte(g), _to_byte(b), _to_byte(a))


@dataclass
class Point:
    pos: Vec2
    color: Rgba


@dataclass
class Line:
    v0: Vec2
    v1: Vec2
    rot: Vec3
    color: Rgba


@dataclass
class Triangle:
    v0: Vec2
    v1: Vec2
    v2: Vec2
    rot: Vec3
    color: Rgba


@dataclass
class Rectangle:
    pos: Vec2
    size: Vec2
    rot: Vec3
    color: Rgba