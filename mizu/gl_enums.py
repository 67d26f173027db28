"""OpenGL state enumerations and context creation flags."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class ContextVersion:
    major: int
    minor: int


class ClearBit(enum.IntFlag):
    COLOR = 0x4000
    DEPTH = 0x0100
    STENCIL = 0x0400


class Capability(enum.IntEnum):
    BLEND = 0x0BE2
    COLOR_LOGIC_OP = 0x0BF2
    CULL_FACE = 0x0B44
    DEBUG_OUTPUT = 0x92E0
    DEBUG_OUTPUT_SYNC = 0x8242
    DEPTH_CLAMP = 0x864F
    DEPTH_TEST = 0x0B71
    DITHER = 0x0BD0
    FRAMEBUFFER_SRGB = 0x8DB9
    LINE_SMOOTH = 0x0B20
    MULTISAMPLE = 0x809D
    POLYGON_OFFSET_FILL = 0x8037
    POLYGON_OFFSET_LINE = 0x2A02
    POLYGON_OFFSET_POINT = 0x2A01
    POLYGON_SMOOTH = 0x0B41
    PRIMITIVE_RESTART = 0x8F9D
    PRIMITIVE_RESTART_FIXED_INDEX = 0x8D69
    RASTERIZER_DISCARD = 0x8C89
    SAMPLE_ALPHA_TO_COVERAGE = 0x809E
    SAMPLE_ALPHA_TO_ONE = 0x809F
    SAMPLE_COVERAGE = 0x80A0
    SAMPLE_MASK = 0x8E51
    SCISSOR_TEST = 0x0C11
    STENCIL_TEST = 0x0B90
    TEXTURE_CUBE_MAP_SEAMLESS = 0x884F
    PROGRAM_POINT_SIZE = 0x8642


class BlendFunc(enum.IntEnum):
    ZERO = 0
    ONE = 1
    SRC_COLOR = 0x0300
    ONE_MINUS_SRC_COLOR = 0x0301
    DST_COLOR = 0x0306
    ONE_MINUS_DST_COLOR = 0x0307
    SRC_ALPHA = 0x0302
    ONE_MINUS_SRC_ALPHA = 0x0303
    CONSTANT_COLOR = 0x8001
    ONE_MINUS_CONSTANT_COLOR = 0x8002
    CONSTANT_ALPHA = 0x8003
    ONE_MINUS_CONSTANT_ALPHA = 0x8004
    SRC_ALPHA_SATURATE = 0x0308
    SRC1_COLOR = 0x88F9
    ONE_MINUS_SRC1_COLOR = 0x88FA
    SRC1_ALPHA = 0x0308
    ONE_MINUS_SRC1_ALPHA = 0x0303


class DepthFunc(enum.IntEnum):
    NEVER = 0x0200
    LESS = 0x0201
    EQUAL = 0x0202
    LEQUAL = 0x0203
    GREATER = 0x0204
    NOT_EQUAL = 0x0205
    GEQUAL = 0x0206
    ALWAYS = 0x0207


class ClipOrigin(enum.IntEnum):
    LOWER_LEFT = 0x8CA1
    UPPER_LEFT = 0x8CA2


class ClipDepth(enum.IntEnum):
    NEGATIVE_ONE_TO_ONE = 0x935E
    ZERO_TO_ONE = 0x935F


class ContextFlags(enum.IntFlag):
    NONE = 0
    DEBUG = 0x1
    FORWARD_COMPATIBLE = 0x2
    ROBUST_ACCESS = 0x4
    RESET_ISOLATION = 0x8


class ContextFlagsBuilder:
    """Chainable accumulator of context creation flags."""

    def __init__(self) -> None:
        self._flags = ContextFlags.NONE

    def debug(self) -> "ContextFlagsBuilder":
        self._flags |= ContextFlags.DEBUG
        return self

    def forward_compatible(self) -> "ContextFlagsBuilder":
        self._flags |= ContextFlags.FORWARD_COMPATIBLE
        return self

    def robust_access(self) -> "ContextFlagsBuilder":
        self._flags |= ContextFlags.ROBUST_ACCESS
        return self

    def reset_isolation(self) -> "ContextFlagsBuilder":
        self._flags |= ContextFlags.RESET_ISOLATION
        return self

    def build(self) -> ContextFlags:
        """The accumulated flags."""
        return self._flags