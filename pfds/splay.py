"""Persistent min-heap implementation using splay trees.

The heap is a binary search tree (left <= value <= right) with no balance
information at all. Every insert, merge and delete_min restructures the
path it walks, rotating left-left (or right-right) chains so that path
roughly halves in length. That is enough for O(log n) amortized bounds.

Splitting a tree around a pivot is the core operation: `partition` does it
in one pass, `smaller` and `bigger` compute each half on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generator,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    override,
)

from pfds.common import EmptyHeapError, Impossible, Iterating, Sized, leq
from pfds.plist import PList
from pfds.tree import PTree, PTreeBranch, PTreeEmpty

__all__ = ["SplayHeap", "splay_sort"]


type NodeTuple[T] = Tuple[PTree[T], PTree[T]]
"""A tree split into its (smaller, bigger) halves."""


@dataclass(frozen=True, eq=False)
class SplayHeap[T](Sized, Iterating[T]):
    """A persistent splay heap"""

    _tree: PTree[T]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> SplayHeap[T]:
        """Create an empty heap.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            An empty heap instance.
        """
        return _SPLAY_EMPTY

    @staticmethod
    def singleton(value: T) -> SplayHeap[T]:
        return SplayHeap(PTree.singleton(value))

    @staticmethod
    def mk(values: Iterable[T]) -> SplayHeap[T]:
        """Create a heap from an iterable of elements.

        Args:
            values: Iterable of elements to insert into the heap.

        Returns:
            A heap containing all the given elements.
        """
        tree: PTree[T] = PTree.empty()
        for value in values:
            tree = _splay_insert(value, tree)
        return SplayHeap(tree)

    @override
    def null(self) -> bool:
        return self._tree.null()

    @override
    def size(self) -> int:
        return self._tree.size()

    def tree(self) -> PTree[T]:
        """The underlying binary search tree."""
        return self._tree

    def find_min(self) -> T:
        """Return the minimum element, the leftmost node of the tree.

        Time Complexity: O(depth). This walks the left spine without
        restructuring it; insert, merge and delete_min pay that path down.

        Raises:
            EmptyHeapError: If the heap is empty.
        """
        return _splay_find_min(self._tree)

    def delete_min(self) -> SplayHeap[T]:
        """Remove the minimum element, rotating the left spine on the way down.

        Time Complexity: O(log n) amortized

        Returns:
            A new heap without the minimum element.

        Raises:
            EmptyHeapError: If the heap is empty.
        """
        return SplayHeap(_splay_delete_min(self._tree))

    def uncons(self) -> Optional[Tuple[T, SplayHeap[T]]]:
        """Split off the minimum element.

        Returns:
            None if the heap is empty, otherwise a tuple of the minimum
            element and the heap without it.
        """
        if self._tree.null():
            return None
        return (_splay_find_min(self._tree), SplayHeap(_splay_delete_min(self._tree)))

    def insert(self, value: T) -> SplayHeap[T]:
        """Insert a new element as the new root.

        Time Complexity: O(log n) amortized

        Args:
            value: The element to insert.

        Returns:
            A new heap containing the inserted element.
        """
        return SplayHeap(_splay_insert(value, self._tree))

    def insert_split(self, value: T) -> SplayHeap[T]:
        """Insert like insert(), but split with smaller() and bigger().

        This walks the tree twice instead of once; the resulting heap holds
        the same elements.
        """
        return SplayHeap(
            PTree.branch(
                _splay_smaller(value, self._tree),
                value,
                _splay_bigger(value, self._tree),
            )
        )

    def merge(self, other: SplayHeap[T]) -> SplayHeap[T]:
        """Merge this heap with another heap.

        Args:
            other: The heap to merge with this one.

        Returns:
            A new heap containing all elements from both heaps.
        """
        return SplayHeap(_splay_merge(self._tree, other._tree))

    def partition(self, pivot: T) -> Tuple[SplayHeap[T], SplayHeap[T]]:
        """Split the heap around a pivot.

        Args:
            pivot: The value to split on. It need not be in the heap.

        Returns:
            A heap of the elements <= pivot and a heap of the elements > pivot.
        """
        small, big = _splay_partition(pivot, self._tree)
        return (SplayHeap(small), SplayHeap(big))

    def smaller(self, pivot: T) -> SplayHeap[T]:
        """The elements <= pivot, with right-right chains rotated."""
        return SplayHeap(_splay_smaller(pivot, self._tree))

    def bigger(self, pivot: T) -> SplayHeap[T]:
        """The elements > pivot, with left-left chains rotated."""
        return SplayHeap(_splay_bigger(pivot, self._tree))

    @override
    def iter(self) -> Generator[T]:
        """Iterate through the heap in ascending order.

        This is an in-order walk of the tree and leaves its shape alone.
        """
        return self._tree.iter()

    def fold[Z](self, fn: Callable[[Z, T], Z], acc: Z) -> Z:
        """Fold the heap in ascending order with an accumulator.

        Args:
            fn: Takes the accumulator and an element, returns the new accumulator.
            acc: The initial accumulator value.

        Returns:
            The final accumulator value after processing all elements.
        """
        result = acc
        for item in self.iter():
            result = fn(result, item)
        return result

    def __add__(self, other: SplayHeap[T]) -> SplayHeap[T]:
        """Alias for merge()."""
        return self.merge(other)

    def __rshift__(self, value: T) -> SplayHeap[T]:
        """Alias for insert()."""
        return self.insert(value)

    def __rlshift__(self, value: T) -> SplayHeap[T]:
        """Alias for insert()."""
        return self.insert(value)


_SPLAY_EMPTY: SplayHeap[Any] = SplayHeap(PTree.empty())


def splay_sort[T](values: PList[T]) -> PList[T]:
    """Sort a list by pushing it through a splay heap.

    Every element is inserted, then the minimum is extracted until the heap
    is empty. Time Complexity: O(n log n)

    Args:
        values: The list to sort. Duplicates are kept.

    Returns:
        A new list with the same elements in ascending order.
    """
    tree = values.reduce(lambda acc, value: _splay_insert(value, acc), PTree.empty())
    ordered: List[T] = []
    while not tree.null():
        ordered.append(_splay_find_min(tree))
        tree = _splay_delete_min(tree)
    return PList.mk(ordered)


def _branch[T](left: PTree[T], value: T, right: PTree[T]) -> PTree[T]:
    return PTree.branch(left, value, right)


# Sorted input builds spines as long as the tree, so the rotations below
# descend in a loop onto frame stacks and rebuild bottom-up.

# Frames for a result that fills the left slot: (value, right)
type LeftFrame[T] = Tuple[T, PTree[T]]

# Frames for a result that fills the right slot: (left, value)
type RightFrame[T] = Tuple[PTree[T], T]


def _fill_left[T](frames: List[LeftFrame[T]], tree: PTree[T]) -> PTree[T]:
    for value, right in reversed(frames):
        tree = _branch(tree, value, right)
    return tree


def _fill_right[T](frames: List[RightFrame[T]], tree: PTree[T]) -> PTree[T]:
    for left, value in reversed(frames):
        tree = _branch(left, value, tree)
    return tree


def _splay_bigger[T](pivot: T, tree: PTree[T]) -> PTree[T]:
    frames: List[LeftFrame[T]] = []
    while True:
        match tree:
            case PTreeEmpty():
                return _fill_left(frames, tree)
            case PTreeBranch(a, x, b, _):
                if leq(x, pivot):
                    tree = b
                    continue
                match a:
                    case PTreeEmpty():
                        return _fill_left(frames, tree)
                    case PTreeBranch(a1, y, a2, _):
                        if leq(y, pivot):
                            frames.append((x, b))
                            tree = a2
                        else:
                            frames.append((y, _branch(a2, x, b)))
                            tree = a1
                    case _:
                        raise Impossible
            case _:
                raise Impossible


def _splay_smaller[T](pivot: T, tree: PTree[T]) -> PTree[T]:
    frames: List[RightFrame[T]] = []
    while True:
        match tree:
            case PTreeEmpty():
                return _fill_right(frames, tree)
            case PTreeBranch(a, x, b, _):
                if not leq(x, pivot):
                    tree = a
                    continue
                match b:
                    case PTreeEmpty():
                        return _fill_right(frames, tree)
                    case PTreeBranch(b1, y, b2, _):
                        if not leq(y, pivot):
                            frames.append((a, x))
                            tree = b1
                        else:
                            frames.append((_branch(a, x, b1), y))
                            tree = b2
                    case _:
                        raise Impossible
            case _:
                raise Impossible


def _splay_partition[T](pivot: T, tree: PTree[T]) -> NodeTuple[T]:
    # Each step wraps the small half, the big half, or both
    small_frames: List[RightFrame[T]] = []
    big_frames: List[LeftFrame[T]] = []
    small: PTree[T]
    big: PTree[T]
    while True:
        match tree:
            case PTreeEmpty():
                small, big = tree, tree
                break
            case PTreeBranch(a, x, b, _):
                if leq(x, pivot):
                    match b:
                        case PTreeEmpty():
                            small, big = tree, b
                            break
                        case PTreeBranch(b1, y, b2, _):
                            if leq(y, pivot):
                                small_frames.append((_branch(a, x, b1), y))
                                tree = b2
                            else:
                                small_frames.append((a, x))
                                big_frames.append((y, b2))
                                tree = b1
                        case _:
                            raise Impossible
                else:
                    match a:
                        case PTreeEmpty():
                            small, big = a, tree
                            break
                        case PTreeBranch(a1, y, a2, _):
                            if leq(y, pivot):
                                small_frames.append((a1, y))
                                big_frames.append((x, b))
                                tree = a2
                            else:
                                big_frames.append((y, _branch(a2, x, b)))
                                tree = a1
                        case _:
                            raise Impossible
            case _:
                raise Impossible
    return (_fill_right(small_frames, small), _fill_left(big_frames, big))


def _splay_insert[T](value: T, tree: PTree[T]) -> PTree[T]:
    small, big = _splay_partition(value, tree)
    return _branch(small, value, big)


@dataclass(frozen=True)
class _MergeStep[T]:
    """Merge first into second and push the result."""

    first: PTree[T]
    second: PTree[T]


@dataclass(frozen=True)
class _BuildStep[T]:
    """Pop the merged right and left subtrees and join them under value."""

    value: T


def _splay_merge[T](first: PTree[T], second: PTree[T]) -> PTree[T]:
    # Both subtrees of each node are merged, so this keeps a work stack
    # of steps and a stack of finished subtrees instead of recursing.
    work: List[_MergeStep[T] | _BuildStep[T]] = [_MergeStep(first, second)]
    done: List[PTree[T]] = []
    while work:
        match work.pop():
            case _MergeStep(PTreeEmpty(), other):
                done.append(other)
            case _MergeStep(PTreeBranch(a, x, b, _), other):
                small, big = _splay_partition(x, other)
                work.append(_BuildStep(x))
                work.append(_MergeStep(big, b))
                work.append(_MergeStep(small, a))
            case _BuildStep(x):
                right = done.pop()
                left = done.pop()
                done.append(_branch(left, x, right))
            case _:
                raise Impossible
    return done.pop()


def _splay_find_min[T](tree: PTree[T]) -> T:
    if tree.null():
        raise EmptyHeapError("find_min of empty heap")
    while True:
        match tree:
            case PTreeBranch(PTreeEmpty(), x, _, _):
                return x
            case PTreeBranch(a, _, _, _):
                tree = a
            case _:
                raise Impossible


def _splay_delete_min[T](tree: PTree[T]) -> PTree[T]:
    if tree.null():
        raise EmptyHeapError("delete_min of empty heap")
    frames: List[LeftFrame[T]] = []
    while True:
        match tree:
            case PTreeBranch(PTreeEmpty(), _, b, _):
                return _fill_left(frames, b)
            case PTreeBranch(PTreeBranch(PTreeEmpty(), _, a2, _), y, c, _):
                return _fill_left(frames, _branch(a2, y, c))
            case PTreeBranch(PTreeBranch(a1, x, a2, _), y, c, _):
                frames.append((x, _branch(a2, y, c)))
                tree = a1
            case _:
                raise Impossible
