"""Batches 2D geometry into fixed-size vertex buffers and issues draw calls.

Opaque geometry is drawn newest first with depth testing; translucent geometry
is drawn afterwards in submission order with blending. All actual graphics work
goes through a ``Renderer``.
"""

from __future__ import annotations

import enum
import functools
import time
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Protocol, Sequence

from mizu.buffer import FillMode, StaticSizeBuffer
from mizu.gl_enums import BlendFunc, Capability
from mizu.timing import NS_PER_SEC, Clock, MaxPeriod, Ticker

_BATCH_BYTES = 8_000_000
_UNUSED_WINDOW = 10 * NS_PER_SEC
_START_Z = 2.0


class DrawMode(enum.IntEnum):
    POINTS = 0x0000
    LINES = 0x0001
    TRIANGLES = 0x0004


class BatchType(enum.IntEnum):
    POINTS = 0
    LINES = 1
    TRIANGLES = 2
    TEX = 3

    @property
    def vertex_size(self) -> int:
        """Floats per vertex."""
        return _VERTEX_SIZE[self]

    @property
    def vertices_per_object(self) -> int:
        return _VERTICES_PER_OBJECT[self]

    @property
    def capacity(self) -> int:
        """Objects held by one batch."""
        return _BATCH_BYTES // (32 * self.vertex_size * self.vertices_per_object)

    @property
    def draw_mode(self) -> DrawMode:
        return _DRAW_MODE[self]

    @property
    def attributes(self) -> tuple[tuple[str, int], ...]:
        """Vertex attribute names and component counts, in buffer order."""
        return _ATTRIBUTES[self]


_VERTEX_SIZE = {
    BatchType.POINTS: 7,
    BatchType.LINES: 10,
    BatchType.TRIANGLES: 10,
    BatchType.TEX: 12,
}
_VERTICES_PER_OBJECT = {
    BatchType.POINTS: 1,
    BatchType.LINES: 2,
    BatchType.TRIANGLES: 3,
    BatchType.TEX: 6,
}
_DRAW_MODE = {
    BatchType.POINTS: DrawMode.POINTS,
    BatchType.LINES: DrawMode.LINES,
    BatchType.TRIANGLES: DrawMode.TRIANGLES,
    BatchType.TEX: DrawMode.TRIANGLES,
}
_ATTRIBUTES = {
    BatchType.POINTS: (("pos", 3), ("color", 4)),
    BatchType.LINES: (("pos", 3), ("color", 4), ("rot_params", 3)),
    BatchType.TRIANGLES: (("pos", 3), ("color", 4), ("rot_params", 3)),
    BatchType.TEX: (("pos", 3), ("color", 4), ("rot_params", 3), ("tex_coord", 2)),
}


class Renderer(Protocol):
    """The graphics operations the batcher needs."""

    def use_shader(self, batch_type: BatchType) -> None: ...

    def set_projection(self, batch_type: BatchType, projection: Any) -> None: ...

    def upload(self, batch: "Batch", offset: int, items: Sequence[float]) -> None: ...

    def draw_arrays(self, batch: "Batch", mode: DrawMode, first: int, count: int) -> None: ...

    def depth_mask(self, enabled: bool) -> None: ...

    def enable(self, capability: Capability) -> None: ...

    def disable(self, capability: Capability) -> None: ...

    def blend_func(self, sfactor: BlendFunc, dfactor: BlendFunc) -> None: ...

    def bind_texture(self, texture_id: int) -> None: ...


class Batch:
    """One vertex buffer holding up to ``capacity`` objects of one type."""

    def __init__(
        self,
        batch_type: BatchType,
        capacity: Optional[int] = None,
        fill_mode: FillMode = FillMode.FRONT_TO_BACK,
    ) -> None:
        self.batch_type = batch_type
        self.vertex_size = batch_type.vertex_size
        if capacity is None:
            capacity = batch_type.capacity
        self.vbo: StaticSizeBuffer[float] = StaticSizeBuffer(
            self.vertex_size * batch_type.vertices_per_object * capacity, fill_mode
        )

    @property
    def attributes(self) -> tuple[tuple[str, int], ...]:
        return self.batch_type.attributes

    def _sync(self, renderer: Renderer) -> None:
        self.vbo.sync(functools.partial(renderer.upload, self))

    def _draw(self, renderer: Renderer, first: int, count: int) -> None:
        renderer.draw_arrays(
            self,
            self.batch_type.draw_mode,
            first // self.vertex_size,
            count // self.vertex_size,
        )


@dataclass(frozen=True)
class TransDrawCall:
    """A range of floats in one translucent batch to draw together."""

    batch_idx: int
    first: int
    count: int
    list_idx: int = 0
    texture_id: int = 0


class _BatchList:
    _fill_mode = FillMode.FRONT_TO_BACK

    def __init__(
        self, batch_type: BatchType, renderer: Renderer, clock: Clock = time.monotonic_ns
    ) -> None:
        self._type = batch_type
        self._renderer = renderer
        self._batches: list[Batch] = []
        self._active_idx = 0
        self._batch_count_max: MaxPeriod[int] = MaxPeriod(_UNUSED_WINDOW, clock)
        self._check_batches_timer = Ticker(_UNUSED_WINDOW, clock)
        self._checking_unused = False
        self._last_batch_count = 0

    def __len__(self) -> int:
        """Number of allocated batches."""
        return len(self._batches)

    @property
    def batch_type(self) -> BatchType:
        return self._type

    def _new_batch(self) -> Batch:
        return Batch(self._type, self._type.capacity, self._fill_mode)

    def _on_batch_full(self) -> None:
        pass

    def _add(self, vertex_data: Iterable[float]) -> None:
        data = list(vertex_data)
        if len(data) % self._type.vertex_size:
            raise ValueError(
                f"{len(data)} floats is not a whole number of "
                f"{self._type.vertex_size}-float vertices"
            )
        if not self._batches:
            self._batches.append(self._new_batch())
        elif self._batches[self._active_idx].vbo.is_full():
            self._on_batch_full()
            self._active_idx += 1
            if self._active_idx >= len(self._batches):
                self._batches.append(self._new_batch())
        self._batches[self._active_idx].vbo.push(data)

    def _cleanup_unused(self) -> None:
        count = self._active_idx + 1
        self._batch_count_max.update(count)
        if self._checking_unused:
            if self._check_batches_timer.tick() >= 1:
                max_recent = self._batch_count_max.value()
                del self._batches[max_recent:]
                if max_recent <= 1:
                    self._checking_unused = False
        elif self._last_batch_count <= 1 and len(self._batches) > 1:
            self._check_batches_timer.reset()
            self._checking_unused = True
        self._last_batch_count = count

    def _clear_batches(self) -> None:
        self._cleanup_unused()
        for batch in self._batches:
            batch.vbo.clear()
        self._active_idx = 0


class OpaqueBatchList(_BatchList):
    """Opaque geometry of one type; drawn newest first."""

    _fill_mode = FillMode.BACK_TO_FRONT

    def __init__(
        self, batch_type: BatchType, renderer: Renderer, clock: Clock = time.monotonic_ns
    ) -> None:
        super().__init__(batch_type, renderer, clock)

    def add(self, vertex_data: Iterable[float]) -> None:
        self._add(vertex_data)

    def draw(self, projection: Any) -> None:
        if not self._batches:
            return
        self._renderer.use_shader(self._type)
        self._renderer.set_projection(self._type, projection)
        for batch in reversed(self._batches[: self._active_idx + 1]):
            batch._sync(self._renderer)
            batch._draw(self._renderer, batch.vbo.front(), len(batch.vbo))

    def clear(self) -> None:
        self._clear_batches()


class TransBatchList(_BatchList):
    """Translucent geometry of one type; drawn in submission order."""

    _fill_mode = FillMode.FRONT_TO_BACK

    def __init__(
        self, batch_type: BatchType, renderer: Renderer, clock: Clock = time.monotonic_ns
    ) -> None:
        super().__init__(batch_type, renderer, clock)
        self._saved_draw_calls: list[TransDrawCall] = []
        self._last_draw_call_offset = 0

    def draw_calls(self) -> list[TransDrawCall]:
        """Close the current range and hand over all ranges saved so far."""
        self._save_draw_call()
        calls, self._saved_draw_calls = self._saved_draw_calls, []
        return calls

    def add(self, vertex_data: Iterable[float]) -> None:
        self._add(vertex_data)

    def _on_batch_full(self) -> None:
        self._save_draw_call()
        self._last_draw_call_offset = 0

    def set_projection_and_sync(self, projection: Any) -> None:
        if not self._batches:
            return
        self._renderer.use_shader(self._type)
        self._renderer.set_projection(self._type, projection)
        for batch in reversed(self._batches[: self._active_idx + 1]):
            batch._sync(self._renderer)

    def draw(self, batch_idx: int, first: int, count: int) -> None:
        self._renderer.use_shader(self._type)
        self._batches[batch_idx]._draw(self._renderer, first, count)

    def clear(self) -> None:
        self._clear_batches()
        self._last_draw_call_offset = 0

    def _save_draw_call(self) -> None:
        if not self._batches:
            return
        size = len(self._batches[self._active_idx].vbo)
        self._saved_draw_calls.append(
            TransDrawCall(
                self._active_idx,
                self._last_draw_call_offset,
                size - self._last_draw_call_offset,
            )
        )
        self._last_draw_call_offset = size


class Batcher:
    """Collects geometry for a frame and draws it in the right order."""

    def __init__(self, renderer: Renderer, clock: Clock = time.monotonic_ns) -> None:
        self._renderer = renderer
        self._opaque = [
            OpaqueBatchList(t, renderer, clock)
            for t in (BatchType.POINTS, BatchType.LINES, BatchType.TRIANGLES)
        ]
        self._trans = [TransBatchList(t, renderer, clock) for t in BatchType]
        self._last_trans_type: Optional[BatchType] = None
        self._last_texture_id: Optional[int] = None
        self._saved_trans_draw_calls: list[TransDrawCall] = []
        self._z_level = _START_Z

    def z(self) -> float:
        """Depth for the next object; each call returns a higher one."""
        z = self._z_level
        self._z_level += 1
        return z

    def add(
        self, batch_type: BatchType, trans: bool, texture_id: int, vertex_data: Iterable[float]
    ) -> None:
        if trans:
            self._add_trans(batch_type, texture_id, vertex_data)
        else:
            if batch_type is BatchType.TEX:
                raise ValueError("textured geometry is always drawn as translucent")
            self._opaque[batch_type].add(vertex_data)

    def draw(self, projection: Any) -> None:
        self._flush_trans_draw_calls()

        for opaque in self._opaque:
            opaque.draw(projection)

        r = self._renderer
        r.depth_mask(False)
        r.enable(Capability.BLEND)
        r.blend_func(BlendFunc.SRC_ALPHA, BlendFunc.ONE_MINUS_SRC_ALPHA)

        for trans in self._trans:
            trans.set_projection_and_sync(projection)

        for call in self._saved_trans_draw_calls:
            if call.texture_id != 0:
                r.bind_texture(call.texture_id)
            self._trans[call.list_idx].draw(call.batch_idx, call.first, call.count)
            if call.texture_id != 0:
                r.bind_texture(0)

        r.depth_mask(True)
        r.disable(Capability.BLEND)

    def clear(self) -> None:
        for opaque in self._opaque:
            opaque.clear()
        for trans in self._trans:
            trans.clear()
        self._last_trans_type = None
        self._last_texture_id = None
        self._saved_trans_draw_calls.clear()
        self._z_level = _START_Z

    def _add_trans(
        self, batch_type: BatchType, texture_id: int, vertex_data: Iterable[float]
    ) -> None:
        if self._last_trans_type is not batch_type:
            self._flush_trans_draw_calls()
        elif self._last_texture_id is not None and self._last_texture_id != texture_id:
            self._flush_trans_draw_calls()

        self._trans[batch_type].add(vertex_data)
        self._last_trans_type = batch_type
        if texture_id != 0:
            self._last_texture_id = texture_id

    def _flush_trans_draw_calls(self) -> None:
        if self._last_trans_type is None:
            return
        texture_id = self._last_texture_id or 0
        self._saved_trans_draw_calls.extend(
            replace(call, list_idx=int(self._last_trans_type), texture_id=texture_id)
            for call in self._trans[self._last_trans_type].draw_calls()
        )