import pytest

from mizu.batcher import (
    Batch,
    BatchType,
    Batcher,
    DrawMode,
    OpaqueBatchList,
    TransBatchList,
    TransDrawCall,
)
from mizu.gl_enums import BlendFunc, Capability
from mizu.timing import NS_PER_SEC


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def use_shader(self, batch_type):
        self.calls.append(("use", batch_type))

    def set_projection(self, batch_type, projection):
        self.calls.append(("proj", batch_type, projection))

    def upload(self, batch, offset, items):
        self.calls.append(("upload", batch.batch_type, offset, len(items)))

    def draw_arrays(self, batch, mode, first, count):
        self.calls.append(("draw", batch.batch_type, mode, first, count))

    def depth_mask(self, enabled):
        self.calls.append(("depth_mask", enabled))

    def enable(self, capability):
        self.calls.append(("enable", capability))

    def disable(self, capability):
        self.calls.append(("disable", capability))

    def blend_func(self, sfactor, dfactor):
        self.calls.append(("blend_func", sfactor, dfactor))

    def bind_texture(self, texture_id):
        self.calls.append(("bind_texture", texture_id))

    def of(self, kind):
        return [c[1:] for c in self.calls if c[0] == kind]


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def points(n):
    return [0.0] * (BatchType.POINTS.vertex_size * n)


def test_batch_capacities():
    points_batch = Batch(BatchType.POINTS, BatchType.POINTS.capacity)
    assert points_batch.vbo.capacity == 35714 * 7
    tex_batch = Batch(BatchType.TEX, BatchType.TEX.capacity)
    assert tex_batch.vbo.capacity == 3472 * 12 * 6


def test_tex_attribute_layout():
    names = [name for name, _ in BatchType.TEX.attributes]
    assert names == ["pos", "color", "rot_params", "tex_coord"]
    batch = Batch(BatchType.TEX, 1)
    assert batch.vertex_size == 12
    assert batch.vbo.capacity == 12 * 6


def test_batch_buffer_size():
    batch = Batch(BatchType.LINES, 5)
    assert batch.vbo.capacity == 100
    assert batch.vertex_size == BatchType.LINES.vertex_size


def test_opaque_draw_uploads_and_draws():
    r = RecordingRenderer()
    lst = OpaqueBatchList(BatchType.POINTS, r, FakeClock())
    lst.add(points(1))
    lst.draw("P")
    cap = BatchType.POINTS.capacity
    assert r.calls[0] == ("use", BatchType.POINTS)
    assert r.calls[1] == ("proj", BatchType.POINTS, "P")
    assert r.of("upload") == [(BatchType.POINTS, 0, cap * BatchType.POINTS.vertex_size)]
    assert r.of("draw") == [(BatchType.POINTS, DrawMode.POINTS, cap - 1, 1)]


def test_opaque_draw_empty_does_nothing():
    r = RecordingRenderer()
    OpaqueBatchList(BatchType.LINES, r, FakeClock()).draw("P")
    assert r.calls == []


def test_opaque_rejects_partial_vertex():
    lst = OpaqueBatchList(BatchType.POINTS, RecordingRenderer(), FakeClock())
    with pytest.raises(ValueError):
        lst.add([0.0] * 5)


def test_opaque_overflow_opens_new_batch_drawn_first():
    r = RecordingRenderer()
    lst = OpaqueBatchList(BatchType.POINTS, r, FakeClock())
    cap = BatchType.POINTS.capacity
    lst.add(points(cap))
    assert len(lst) == 1
    lst.add(points(1))
    assert len(lst) == 2
    lst.draw("P")
    assert [d[3] for d in r.of("draw")] == [1, cap]


def test_unused_batches_are_released():
    clock = FakeClock()
    lst = OpaqueBatchList(BatchType.POINTS, RecordingRenderer(), clock)
    lst.add(points(BatchType.POINTS.capacity))
    lst.add(points(1))
    lst.clear()
    assert len(lst) == 2

    lst.add(points(1))
    lst.clear()
    assert len(lst) == 2

    clock.now = 11 * NS_PER_SEC
    lst.add(points(1))
    lst.clear()
    assert len(lst) == 1


def test_trans_draw_calls_track_ranges():
    lst = TransBatchList(BatchType.POINTS, RecordingRenderer(), FakeClock())
    size = BatchType.POINTS.vertex_size
    lst.add(points(1))
    assert lst.draw_calls() == [TransDrawCall(0, 0, size)]
    lst.add(points(1))
    assert lst.draw_calls() == [TransDrawCall(0, size, size)]


def test_trans_overflow_splits_draw_calls():
    lst = TransBatchList(BatchType.TRIANGLES, RecordingRenderer(), FakeClock())
    per_obj = BatchType.TRIANGLES.vertex_size * BatchType.TRIANGLES.vertices_per_object
    cap = BatchType.TRIANGLES.capacity
    lst.add([0.0] * (per_obj * cap))
    lst.add([0.0] * per_obj)
    assert lst.draw_calls() == [
        TransDrawCall(0, 0, per_obj * cap),
        TransDrawCall(1, 0, per_obj),
    ]


def test_z_increases_and_resets():
    b = Batcher(RecordingRenderer(), FakeClock())
    first = b.z()
    assert b.z() == first + 1
    b.clear()
    assert b.z() == first


def test_opaque_texture_is_rejected():
    b = Batcher(RecordingRenderer(), FakeClock())
    with pytest.raises(ValueError):
        b.add(BatchType.TEX, False, 1, [0.0] * 72)


def test_translucent_draw_order_and_state():
    r = RecordingRenderer()
    b = Batcher(r, FakeClock())
    tri = [0.0] * 30
    b.add(BatchType.TRIANGLES, True, 0, tri)
    b.add(BatchType.TRIANGLES, True, 0, tri)
    b.add(BatchType.POINTS, True, 0, points(1))
    b.draw("P")
    assert r.of("draw") == [
        (BatchType.TRIANGLES, DrawMode.TRIANGLES, 0, 6),
        (BatchType.POINTS, DrawMode.POINTS, 0, 1),
    ]
    assert r.of("depth_mask") == [(False,), (True,)]
    assert r.of("enable") == [(Capability.BLEND,)]
    assert r.of("disable") == [(Capability.BLEND,)]
    assert r.of("blend_func") == [(BlendFunc.SRC_ALPHA, BlendFunc.ONE_MINUS_SRC_ALPHA)]
    assert r.of("bind_texture") == []


def test_texture_changes_split_draw_calls():
    r = RecordingRenderer()
    b = Batcher(r, FakeClock())
    quad = [0.0] * 72
    b.add(BatchType.TEX, True, 5, quad)
    b.add(BatchType.TEX, True, 5, quad)
    b.add(BatchType.TEX, True, 7, quad)
    b.draw("P")
    assert r.of("bind_texture") == [(5,), (0,), (7,), (0,)]
    assert [(d[2], d[3]) for d in r.of("draw")] == [(0, 12), (12, 6)]


def test_opaque_drawn_before_translucent():
    r = RecordingRenderer()
    b = Batcher(r, FakeClock())
    b.add(BatchType.POINTS, True, 0, points(1))
    b.add(BatchType.LINES, False, 0, [0.0] * 20)
    b.draw("P")
    draws = r.of("draw")
    assert [d[0] for d in draws] == [BatchType.LINES, BatchType.POINTS]
    mask_off = r.calls.index(("depth_mask", False))
    first_draw = next(i for i, c in enumerate(r.calls) if c[0] == "draw")
    assert first_draw < mask_off


def test_clear_empties_the_frame():
    r = RecordingRenderer()
    b = Batcher(r, FakeClock())
    b.add(BatchType.POINTS, False, 0, points(1))
    b.add(BatchType.POINTS, True, 0, points(1))
    b.clear()
    r.calls.clear()
    b.draw("P")
    draws = r.of("draw")
    assert all(d[3] == 0 for d in draws)
    assert r.of("bind_texture") == []