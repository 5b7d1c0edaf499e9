from typing import List

import pytest

from pfds.common import EmptyHeapError, Entry, Flip, leq
from pfds.pairing import PairingHeap


def assert_heap_order(heap: PairingHeap[int]) -> None:
    """Every root sorts before or with the roots of its children"""
    stack = [heap]
    while stack:
        node = stack.pop()
        for child in node.children():
            assert not child.null()
            assert leq(node.find_min(), child.find_min())
            stack.append(child)


def test_empty_heap():
    """Test creating an empty heap and asserting it is empty"""
    heap = PairingHeap.empty(int)
    assert heap.null()
    assert heap.size() == 0
    assert heap.uncons() is None
    assert heap.list() == []


def test_empty_heap_raises():
    heap = PairingHeap.empty(int)
    with pytest.raises(EmptyHeapError):
        heap.find_min()
    with pytest.raises(EmptyHeapError):
        heap.delete_min()


def test_singleton():
    heap = PairingHeap.singleton(5)
    assert heap.size() == 1
    assert heap.find_min() == 5
    assert heap.delete_min().null()


def test_insert_multiple():
    """Test inserting multiple elements maintains min-heap property"""
    heap = PairingHeap.empty(int)
    heap = heap.insert(5).insert(2).insert(8).insert(1).insert(7)
    assert heap.size() == 5
    assert heap.find_min() == 1
    assert_heap_order(heap)


def test_merge_links_larger_root_as_first_child():
    small = PairingHeap.singleton(1)
    big = PairingHeap.singleton(2)
    merged = big.merge(small)
    assert merged.find_min() == 1
    assert merged.children().head() is big

    # A later link goes to the front of the child list
    merged2 = merged.merge(PairingHeap.singleton(3))
    assert merged2.children().head().find_min() == 3
    assert merged2.children().size() == 2


def test_merge_with_empty():
    heap = PairingHeap.mk([3, 1])
    empty = PairingHeap.empty(int)
    assert heap.merge(empty) is heap
    assert empty.merge(heap) is heap


def test_merge():
    heap1 = PairingHeap.mk([1, 3, 5])
    heap2 = PairingHeap.mk([2, 4, 6])
    merged = heap1 + heap2
    assert merged.size() == 6
    assert merged.find_min() == 1
    assert merged.list() == [1, 2, 3, 4, 5, 6]
    assert_heap_order(merged)


def test_delete_min_two_pass():
    """Children 9, 8, 7, 6, 5 pair up as (9, 8), (7, 6), 5 and merge right to left"""
    heap = PairingHeap.singleton(0)
    for value in [5, 6, 7, 8, 9]:
        heap = heap.merge(PairingHeap.singleton(value))
    assert [c.find_min() for c in heap.children()] == [9, 8, 7, 6, 5]

    rest = heap.delete_min()
    assert rest.find_min() == 5
    assert rest.size() == 5
    # The pair roots 6 then 8 are linked under 5, the last one in front
    assert [c.find_min() for c in rest.children()] == [8, 6]
    assert_heap_order(rest)


def test_delete_min_single_child_is_reused():
    child = PairingHeap.mk([4, 6])
    heap = PairingHeap.singleton(1).merge(child)
    assert heap.delete_min() is child


def test_persistence():
    """Test that operations don't modify the original heap"""
    heap = PairingHeap.mk([5, 3, 8])
    heap2 = heap.insert(1)
    assert heap.find_min() == 3
    assert heap2.find_min() == 1

    deleted = heap2.delete_min()
    assert heap.list() == [3, 5, 8]
    assert heap2.list() == [1, 3, 5, 8]
    assert deleted.list() == [3, 5, 8]


def test_duplicates_are_kept():
    heap = PairingHeap.mk([3, 1, 3, 2, 1])
    assert heap.size() == 5
    assert heap.list() == [1, 1, 2, 3, 3]


def test_ties_keep_left_root():
    first = PairingHeap.singleton(Entry(1, "first"))
    second = PairingHeap.singleton(Entry(1, "second"))
    assert first.merge(second).find_min().value == "first"
    assert second.merge(first).find_min().value == "second"


def test_flip_makes_max_heap():
    heap = PairingHeap.mk([Flip(v) for v in [4, 9, 1, 7]])
    assert heap.find_min().value == 9
    assert [f.value for f in heap.iter()] == [9, 7, 4, 1]


def test_uncons_and_fold():
    heap = PairingHeap.mk([4, 2, 6])
    result = heap.uncons()
    assert result is not None
    value, rest = result
    assert value == 2
    assert rest.list() == [4, 6]
    collected: List[int] = heap.fold(lambda acc, x: acc + [x], [])
    assert collected == [2, 4, 6]


def test_operators():
    heap = PairingHeap.empty(int) >> 3
    heap = 1 << heap
    assert heap.list() == [1, 3]


def test_large_heap():
    values = list(range(1000, 0, -1))
    heap = PairingHeap.mk(values)
    assert heap.size() == 1000
    assert heap.find_min() == 1
    assert heap.list() == list(range(1, 1001))


def test_ascending_inserts_build_wide_root():
    """Ascending input leaves every element a child of the root"""
    heap = PairingHeap.mk(range(2000))
    assert heap.children().size() == 1999
    assert heap.list() == list(range(2000))
