import pytest

from mizu.buffer import FillMode, StaticSizeBuffer


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, offset, items):
        self.calls.append((offset, list(items)))


def test_front_to_back_push_and_len():
    buf = StaticSizeBuffer(4)
    buf.push([1.0, 2.0])
    assert len(buf) == 2
    assert buf.front() == 0
    assert list(buf) == [1.0, 2.0]
    assert not buf.is_full()
    buf.push([3.0, 4.0])
    assert buf.is_full()


def test_back_to_front_keeps_order_of_each_push():
    buf = StaticSizeBuffer(5, FillMode.BACK_TO_FRONT)
    buf.push([1.0, 2.0])
    buf.push([3.0, 4.0])
    assert buf.front() == 1
    assert len(buf) == 4
    assert list(buf) == [3.0, 4.0, 1.0, 2.0]


def test_overflow_raises_and_leaves_buffer_unchanged():
    buf = StaticSizeBuffer(3)
    buf.push([1.0, 2.0])
    with pytest.raises(OverflowError):
        buf.push([3.0, 4.0])
    assert list(buf) == [1.0, 2.0]

    back = StaticSizeBuffer(1, FillMode.BACK_TO_FRONT)
    with pytest.raises(OverflowError):
        back.push([1.0, 2.0])
    assert len(back) == 0


def test_clear_empties():
    for mode in FillMode:
        buf = StaticSizeBuffer(4, mode)
        buf.push([1.0, 2.0, 3.0])
        buf.clear()
        assert len(buf) == 0
        assert not buf.is_full()


def test_sync_front_to_back_uploads_only_new_data():
    buf = StaticSizeBuffer(4)
    rec = Recorder()
    buf.push([1.0, 2.0])
    assert buf.sync(rec) is True
    assert rec.calls == [(0, [1.0, 2.0, 0.0, 0.0])]
    assert buf.sync(rec) is False
    buf.push([3.0])
    assert buf.sync(rec) is True
    assert rec.calls[-1] == (2, [3.0])
    assert len(rec.calls) == 2


def test_sync_back_to_front_uploads_new_prefix():
    buf = StaticSizeBuffer(4, FillMode.BACK_TO_FRONT)
    rec = Recorder()
    buf.push([7.0])
    buf.sync(rec)
    assert rec.calls == [(0, [0.0, 0.0, 0.0, 7.0])]
    buf.push([5.0, 6.0])
    assert buf.sync(rec) is True
    assert rec.calls[-1] == (1, [5.0, 6.0])


def test_sync_after_clear_does_nothing_until_pushed():
    buf = StaticSizeBuffer(3)
    rec = Recorder()
    buf.push([1.0])
    buf.sync(rec)
    buf.clear()
    assert buf.sync(rec) is False
    buf.push([9.0])
    buf.sync(rec)
    assert rec.calls[-1] == (0, [9.0])


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        StaticSizeBuffer(-1)