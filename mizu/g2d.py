"""Immediate-mode 2D drawing on top of the batcher."""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence, Tuple

from mizu.batcher import Batcher, BatchType
from mizu.color import Rgba, rgb
from mizu.texture import Texture

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

NO_ROTATION: Vec3 = (0.0, 0.0, 0.0)
WHITE = rgb(0xFFFFFF)


def _vertex(x: float, y: float, z: float, color: Sequence[float], rot: Vec3) -> tuple:
    return (x, y, z, *color, rot[0], rot[1], math.radians(rot[2]))


class G2d:
    """Draws points, lines, triangles, rectangles and textures.

    Every shape gets its own depth so later shapes cover earlier ones; shapes
    whose colour is not fully opaque are drawn with blending.
    """

    def __init__(self, batcher: Batcher) -> None:
        self._batcher = batcher

    @property
    def batcher(self) -> Batcher:
        return self._batcher

    def point(self, pos: Vec2, color: Rgba) -> None:
        c = color.gl_color()
        z = self._batcher.z()
        self._batcher.add(BatchType.POINTS, c[3] < 1.0, 0, (pos[0], pos[1], z, *c))

    def line(self, p0: Vec2, p1: Vec2, color: Rgba, rot: Vec3 = NO_ROTATION) -> None:
        c = color.gl_color()
        z = self._batcher.z()
        self._batcher.add(
            BatchType.LINES,
            c[3] < 1.0,
            0,
            (*_vertex(p0[0], p0[1], z, c, rot), *_vertex(p1[0], p1[1], z, c, rot)),
        )

    def fill_tri(
        self, p0: Vec2, p1: Vec2, p2: Vec2, color: Rgba, rot: Vec3 = NO_ROTATION
    ) -> None:
        c = color.gl_color()
        z = self._batcher.z()
        self._batcher.add(
            BatchType.TRIANGLES,
            c[3] < 1.0,
            0,
            tuple(v for p in (p0, p1, p2) for v in _vertex(p[0], p[1], z, c, rot)),
        )

    def fill_rect(self, pos: Vec2, size: Vec2, color: Rgba, rot: Vec3 = NO_ROTATION) -> None:
        c = color.gl_color()
        z = self._batcher.z()
        trans = c[3] < 1.0
        x0, y0 = pos
        x1, y1 = pos[0] + size[0], pos[1] + size[1]
        for corners in (((x0, y0), (x1, y0), (x1, y1)), ((x0, y0), (x1, y1), (x0, y1))):
            self._batcher.add(
                BatchType.TRIANGLES,
                trans,
                0,
                tuple(v for x, y in corners for v in _vertex(x, y, z, c, rot)),
            )

    def texture(
        self,
        t: Texture,
        pos: Vec2,
        size: Optional[Vec2] = None,
        region: Optional[Vec4] = None,
        rot: Vec3 = NO_ROTATION,
        color: Rgba = WHITE,
    ) -> None:
        """Draw a region of a texture (all of it by default).

        Without a size the region is drawn at its own pixel size.
        """
        if region is None:
            region = (0.0, 0.0, t.width(), t.height())
        if size is None:
            size = (region[2], region[3])
        c = color.gl_color()
        z = self._batcher.z()
        x0, y0 = pos
        x1, y1 = pos[0] + size[0], pos[1] + size[1]
        s0, t0 = t.s(region[0]), t.t(region[1])
        s1, t1 = t.s(region[0] + region[2]), t.t(region[1] + region[3])
        corners = (
            (x0, y0, s0, t0),
            (x1, y0, s1, t0),
            (x1, y1, s1, t1),
            (x0, y0, s0, t0),
            (x1, y1, s1, t1),
            (x0, y1, s0, t1),
        )
        self._batcher.add(
            BatchType.TEX,
            True,
            t.id(),
            tuple(v for x, y, s, tc in corners for v in (*_vertex(x, y, z, c, rot), s, tc)),
        )

    def flush(self, projection: Any) -> None:
        """Draw everything submitted this frame, then start a new frame."""
        self._batcher.draw(projection)
        self._batcher.clear()