import operator

import pytest

from mizu.priority_queue import PriorityQueue


def test_pops_in_descending_priority_order():
    pq = PriorityQueue()
    priorities = [5, 1, 9, 3, 7, 2]
    for key, prio in enumerate(priorities):
        assert pq.push(key, prio, f"v{key}")
    popped = []
    while pq:
        popped.append(pq.pop_value().priority)
    assert popped == sorted(priorities, reverse=True)


def test_min_heap_with_greater_comparison():
    pq = PriorityQueue(operator.gt)
    priorities = [5, 1, 9, 3, 7]
    for key, prio in enumerate(priorities):
        pq.push(key, prio)
    popped = [pq.pop_value().priority for _ in range(len(priorities))]
    assert popped == sorted(priorities)


def test_duplicate_push_is_rejected():
    pq = PriorityQueue()
    assert pq.push(3, 10, "a")
    assert not pq.push(3, 20, "b")
    assert len(pq) == 1
    assert pq.top().value == "a"


def test_get_priority():
    pq = PriorityQueue()
    pq.push(4, 42)
    assert pq.get_priority(4) == 42
    assert pq.get_priority(5) is None


def test_update_raises_entry_to_top():
    pq = PriorityQueue()
    for key, prio in enumerate([10, 20, 30]):
        pq.push(key, prio)
    assert pq.update(0, 100)
    assert pq.top().key == 0
    assert pq.get_priority(0) == 100


def test_update_lower_sinks_entry():
    pq = PriorityQueue()
    for key, prio in enumerate([10, 20, 30]):
        pq.push(key, prio)
    assert pq.update(2, 1)
    assert pq.top().key == 1
    keys = [pq.pop_value().key for _ in range(3)]
    assert keys[-1] == 2


def test_update_only_if_higher_refuses_lower():
    pq = PriorityQueue()
    pq.push(0, 50)
    assert not pq.update(0, 10, only_if_higher=True)
    assert pq.get_priority(0) == 50


def test_update_unknown_key():
    pq = PriorityQueue()
    assert not pq.update(7, 1)


def test_push_or_update():
    pq = PriorityQueue()
    assert pq.push_or_update(1, 5, "x")
    assert pq.push_or_update(1, 15)
    assert len(pq) == 1
    assert pq.get_priority(1) == 15


def test_empty_queue_behaviour():
    pq = PriorityQueue()
    pq.pop()
    assert pq.pop_value() is None
    assert not pq
    with pytest.raises(IndexError):
        pq.top()


def test_key_can_be_reused_after_pop():
    pq = PriorityQueue()
    pq.push(1, 5)
    pq.pop()
    assert pq.get_priority(1) is None
    assert pq.push(1, 6)
    assert pq.get_priority(1) == 6


def test_positions_stay_consistent_after_many_updates():
    pq = PriorityQueue()
    for key in range(20):
        pq.push(key, key)
    for key in range(0, 20, 3):
        pq.update(key, 100 + key)
    for key in range(20):
        expected = 100 + key if key % 3 == 0 else key
        assert pq.get_priority(key) == expected
    popped = [pq.pop_value().priority for _ in range(20)]
    assert popped == sorted(popped, reverse=True)