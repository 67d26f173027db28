"""Indexed binary heap keyed by integer ids, with in-place priority updates."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Node(Generic[T]):
    """One entry of the queue."""

    key: int
    priority: Any
    value: T


class PriorityQueue(Generic[T]):
    """A heap whose entries can be found and re-prioritised by key.

    With the default comparison (``operator.lt``) the entry with the greatest
    priority sits at the top; pass ``operator.gt`` to get a min-heap.
    """

    def __init__(self, compare: Callable[[Any, Any], bool] = operator.lt) -> None:
        self._compare = compare
        self._positions: dict[int, int] = {}
        self._heap: list[Node[T]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def top(self) -> Node[T]:
        """Return the top entry without removing it."""
        if not self._heap:
            raise IndexError("top of an empty priority queue")
        return self._heap[0]

    def pop(self) -> None:
        """Remove the top entry; does nothing when the queue is empty."""
        self.pop_value()

    def pop_value(self) -> Optional[Node[T]]:
        """Remove and return the top entry, or None when the queue is empty."""
        if not self._heap:
            return None
        node = self._heap[0]
        del self._positions[node.key]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._positions[last.key] = 0
            self._sift_down(0)
        return node

    def push(self, key: int, priority: Any, value: T = None) -> bool:
        """Insert a new entry; returns False if the key is already queued."""
        if key in self._positions:
            return False
        pos = len(self._heap)
        self._positions[key] = pos
        self._heap.append(Node(key, priority, value))
        self._sift_up(pos)
        return True

    def update(self, key: int, new_priority: Any, only_if_higher: bool = False) -> bool:
        """Change the priority of a queued key; returns whether it changed."""
        pos = self._positions.get(key)
        if pos is None:
            return False
        node = self._heap[pos]
        if not self._compare(new_priority, node.priority):
            node.priority = new_priority
            self._sift_up(pos)
            return True
        if not only_if_higher:
            node.priority = new_priority
            self._sift_down(pos)
            return True
        return False

    def push_or_update(
        self, key: int, priority: Any, value: T = None, only_if_higher: bool = False
    ) -> bool:
        """Update the key if it is queued, otherwise insert it."""
        if key in self._positions:
            return self.update(key, priority, only_if_higher)
        return self.push(key, priority, value)

    def get_priority(self, key: int) -> Optional[Any]:
        """Return the priority of a queued key, or None."""
        pos = self._positions.get(key)
        return None if pos is None else self._heap[pos].priority

    def _swap(self, a: int, b: int) -> None:
        heap = self._heap
        heap[a], heap[b] = heap[b], heap[a]
        self._positions[heap[a].key] = a
        self._positions[heap[b].key] = b

    def _sift_down(self, pos: int) -> None:
        if len(self._heap) <= 1:
            return
        child = self._greater_child(pos)
        while child is not None and not self._compare(
            self._heap[child].priority, self._heap[pos].priority
        ):
            self._swap(child, pos)
            pos = child
            child = self._greater_child(pos)

    def _sift_up(self, pos: int) -> None:
        if len(self._heap) <= 1:
            return
        while pos > 0:
            parent = (pos - 1) // 2
            if self._compare(self._heap[pos].priority, self._heap[parent].priority):
                break
            self._swap(pos, parent)
            pos = parent

    def _greater_child(self, pos: int) -> Optional[int]:
        left, right = pos * 2 + 1, pos * 2 + 2
        size = len(self._heap)
        if left >= size:
            return None
        if right < size and not self._compare(
            self._heap[right].priority, self._heap[left].priority
        ):
            return right
        return left