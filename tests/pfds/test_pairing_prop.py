"""Property-based tests for PairingHeap using Hypothesis."""

from typing import List

from hypothesis import given
from hypothesis import strategies as st

from pfds.common import leq
from pfds.pairing import PairingHeap
from tests.pfds.hypo import configure_hypo

configure_hypo()


@st.composite
def heap_strategy(
    draw: st.DrawFn, element_strategy: st.SearchStrategy[int] = st.integers()
) -> PairingHeap[int]:
    """Generate a heap through a mix of inserts, merges and deletes."""
    heap: PairingHeap[int] = PairingHeap.empty()
    ops = draw(
        st.lists(
            st.one_of(
                st.tuples(st.just("insert"), element_strategy),
                st.tuples(st.just("merge"), st.lists(element_strategy, max_size=5)),
                st.tuples(st.just("delete"), st.none()),
            ),
            max_size=30,
        )
    )
    for op, arg in ops:
        if op == "insert":
            heap = heap.insert(arg)
        elif op == "merge":
            heap = heap.merge(PairingHeap.mk(arg))
        elif not heap.null():
            heap = heap.delete_min()
    return heap


def heap_order_holds(heap: PairingHeap[int]) -> bool:
    stack = [heap]
    while stack:
        node = stack.pop()
        for child in node.children():
            if child.null() or not leq(node.find_min(), child.find_min()):
                return False
            stack.append(child)
    return True


def reachable(heap: PairingHeap[int]) -> List[int]:
    """Sorted elements stored in the nodes of the heap, without deleting any."""
    found: List[int] = []
    stack = [heap]
    while stack:
        node = stack.pop()
        if not node.null():
            found.append(node.find_min())
            stack.extend(node.children())
    return sorted(found)


@given(heap_strategy())
def test_heap_order_invariant(heap: PairingHeap[int]):
    """Every version built by insert, merge and delete_min is heap-ordered."""
    assert heap_order_holds(heap)
    current = heap
    while not current.null():
        current = current.delete_min()
        assert heap_order_holds(current)


@given(st.lists(st.integers(), max_size=50))
def test_iter_sorts(values: List[int]):
    heap = PairingHeap.mk(values)
    assert heap.size() == len(values)
    assert heap.list() == sorted(values)


@given(heap_strategy(), heap_strategy())
def test_merge_is_multiset_union(first: PairingHeap[int], second: PairingHeap[int]):
    merged = first.merge(second)
    assert merged.size() == first.size() + second.size()
    assert merged.list() == sorted(first.list() + second.list())
    assert heap_order_holds(merged)
    if not first.null() and not second.null():
        assert merged.find_min() == min(first.find_min(), second.find_min())


@given(heap_strategy(), st.integers())
def test_insert_persistence(heap: PairingHeap[int], value: int):
    """Deriving new versions leaves the old one intact."""
    before = reachable(heap)
    inserted = heap.insert(value)
    merged = heap.merge(inserted)
    if not heap.null():
        deleted = heap.delete_min()
        assert deleted.size() == heap.size() - 1
    assert reachable(heap) == before
    assert heap_order_holds(heap)
    assert inserted.find_min() == min(before + [value])
    assert merged.size() == 2 * heap.size() + 1


@given(heap_strategy())
def test_size_matches_reachable(heap: PairingHeap[int]):
    assert len(reachable(heap)) == heap.size()
