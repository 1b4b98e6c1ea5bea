"""
Unit tests for HeapAdaptablePriorityQueue.
"""

import random

import pytest

from sptree.pqueue import HeapAdaptablePriorityQueue


def drain(pq):
    out = []
    while not pq.is_empty():
        out.append(pq.remove_min())
    return out


def test_remove_min_order():
    pq = HeapAdaptablePriorityQueue()
    for k, v in [(5, "a"), (1, "b"), (3, "c"), (4, "d")]:
        pq.insert(k, v)

    assert len(pq) == 4
    assert pq.min() == (1, "b")
    assert drain(pq) == [(1, "b"), (3, "c"), (4, "d"), (5, "a")]


def test_equal_keys_leave_in_insertion_order():
    pq = HeapAdaptablePriorityQueue()
    for v in "abcdef":
        pq.insert(7, v)

    assert [v for _, v in drain(pq)] == list("abcdef")


def test_decrease_key_moves_entry_up():
    pq = HeapAdaptablePriorityQueue()
    pq.insert(2, "x")
    loc = pq.insert(9, "y")
    pq.insert(5, "z")

    pq.decrease_key(loc, 1)

    assert loc.key == 1
    assert pq.remove_min() == (1, "y")


def test_decrease_key_rejects_increase():
    pq = HeapAdaptablePriorityQueue()
    loc = pq.insert(3, "x")

    with pytest.raises(ValueError):
        pq.decrease_key(loc, 4)


def test_update_can_raise_key():
    pq = HeapAdaptablePriorityQueue()
    loc = pq.insert(1, "x")
    pq.insert(2, "y")

    pq.update(loc, 10)

    assert drain(pq) == [(2, "y"), (10, "x")]


def test_remove_by_locator():
    pq = HeapAdaptablePriorityQueue()
    pq.insert(1, "a")
    loc = pq.insert(2, "b")
    pq.insert(3, "c")

    assert pq.remove(loc) == (2, "b")
    assert drain(pq) == [(1, "a"), (3, "c")]


def test_stale_locator_is_rejected():
    pq = HeapAdaptablePriorityQueue()
    loc = pq.insert(1, "a")
    pq.insert(2, "b")
    pq.remove_min()

    with pytest.raises(ValueError):
        pq.decrease_key(loc, 0)
    with pytest.raises(ValueError):
        pq.remove(loc)


def test_locator_from_other_queue_is_rejected():
    a = HeapAdaptablePriorityQueue()
    b = HeapAdaptablePriorityQueue()
    loc = a.insert(1, "x")
    b.insert(1, "y")

    with pytest.raises(ValueError):
        b.update(loc, 0)


def test_empty_queue():
    pq = HeapAdaptablePriorityQueue()

    assert pq.is_empty()
    with pytest.raises(IndexError):
        pq.remove_min()
    with pytest.raises(IndexError):
        pq.min()


def test_random_operations_keep_heap_order():
    rnd = random.Random(7)
    pq = HeapAdaptablePriorityQueue()
    live = {}
    for i in range(300):
        op = rnd.random()
        if op < 0.5 or not live:
            live[i] = pq.insert(rnd.randint(0, 1000), i)
        elif op < 0.8:
            v = rnd.choice(list(live))
            loc = live[v]
            pq.decrease_key(loc, loc.key - rnd.randint(0, 50))
        else:
            v = rnd.choice(list(live))
            pq.remove(live.pop(v))

    expected = sorted((loc.key, loc._seq, v) for v, loc in live.items())
    assert drain(pq) == [(k, v) for k, _, v in expected]
