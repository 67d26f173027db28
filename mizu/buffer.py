"""Fixed-capacity vertex buffer that tracks which part still needs uploading."""

from __future__ import annotations

import enum
from typing import Callable, Generic, Iterable, Iterator, Sequence, TypeVar

T = TypeVar("T")

Upload = Callable[[int, Sequence[T]], None]


class BufferTarget(enum.IntEnum):
    ARRAY = 0x8892
    ATOMIC_COUNTER = 0x92C0
    COPY_READ = 0x8F36
    COPY_WRITE = 0x8F37
    DISPATCH_INDIRECT = 0x90EE
    DRAW_INDIRECT = 0x8F3F
    ELEMENT_ARRAY = 0x8893
    PIXEL_PACK = 0x88EB
    PIXEL_UNPACK = 0x88EC
    QUERY = 0x9192
    SHADER_STORAGE = 0x90D2
    TEXTURE = 0x8C2A
    TRANSFORM_FEEDBACK = 0x8C8E
    UNIFORM = 0x8A11


class FillMode(enum.Enum):
    FRONT_TO_BACK = enum.auto()
    BACK_TO_FRONT = enum.auto()


class StaticSizeBuffer(Generic[T]):
    """A buffer of fixed capacity filled either from the front or from the back.

    ``sync`` hands the part written since the last sync to an upload callable
    taking ``(offset, items)``; the first sync uploads the whole storage.
    """

    def __init__(self, capacity: int, fill_mode: FillMode = FillMode.FRONT_TO_BACK) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._fill_mode = fill_mode
        self._data: list = [0.0] * capacity
        self._capacity = capacity
        self._pos = 0 if fill_mode is FillMode.FRONT_TO_BACK else capacity
        self._gl_capacity = 0
        self._gl_pos = 0

    @property
    def fill_mode(self) -> FillMode:
        return self._fill_mode

    @property
    def capacity(self) -> int:
        return self._capacity

    def front(self) -> int:
        """Index of the first stored element."""
        if self._fill_mode is FillMode.FRONT_TO_BACK:
            return 0
        return self._pos

    def __len__(self) -> int:
        if self._fill_mode is FillMode.FRONT_TO_BACK:
            return self._pos
        return self._capacity - self._pos

    def __iter__(self) -> Iterator[T]:
        start = self.front()
        return iter(self._data[start:start + len(self)])

    def is_full(self) -> bool:
        if self._fill_mode is FillMode.FRONT_TO_BACK:
            return self._pos == self._capacity
        return self._pos == 0

    def push(self, values: Iterable[T]) -> None:
        """Append values, keeping their order, at the fill end."""
        items = list(values)
        n = len(items)
        if self._capacity - len(self) < n:
            raise OverflowError(f"cannot push {n} items: {self._capacity - len(self)} free")
        if self._fill_mode is FillMode.FRONT_TO_BACK:
            self._data[self._pos:self._pos + n] = items
            self._pos += n
        else:
            self._data[self._pos - n:self._pos] = items
            self._pos -= n

    def clear(self) -> None:
        if self._fill_mode is FillMode.FRONT_TO_BACK:
            self._gl_pos = 0
            self._pos = 0
        else:
            self._gl_pos = self._capacity
            self._pos = self._capacity

    def sync(self, upload: Upload) -> bool:
        """Upload whatever changed since the last sync; return whether anything was sent."""
        if self._gl_capacity != 0 and self._gl_pos == self._pos:
            return False
        if self._gl_capacity == 0:
            upload(0, list(self._data))
            self._gl_capacity = self._capacity
        elif self._fill_mode is FillMode.FRONT_TO_BACK:
            upload(self._gl_pos, self._data[self._gl_pos:self._pos])
        else:
            upload(self._pos, self._data[self._pos:self._gl_pos])
        self._gl_pos = self._pos
        return True