"""Persistent min-heap implementation using pairing heaps.

A pairing heap is a multiway tree in heap order: every node's value sorts
before or together with the roots of its children. Merging just hangs one
root under the other, and deleting the minimum combines the orphaned
children with the two-pass pairing scheme, which is what makes delete_min
O(log n) amortized.
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

__all__ = ["PairingHeap"]


# sealed
class PairingHeap[T](Sized, Iterating[T]):
    """A persistent pairing heap"""

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PairingHeap[T]:
        """Create an empty heap.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            An empty heap instance.
        """
        return _PAIRING_EMPTY

    @staticmethod
    def singleton(value: T) -> PairingHeap[T]:
        return PairingNode(1, value, PList.empty())

    @staticmethod
    def mk(values: Iterable[T]) -> PairingHeap[T]:
        """Create a heap from an iterable of elements.

        Args:
            values: Iterable of elements to insert into the heap.

        Returns:
            A heap containing all the given elements.
        """
        heap: PairingHeap[T] = PairingHeap.empty()
        for value in values:
            heap = heap.insert(value)
        return heap

    @override
    def null(self) -> bool:
        match self:
            case PairingEmpty():
                return True
            case _:
                return False

    @override
    def size(self) -> int:
        match self:
            case PairingEmpty():
                return 0
            case PairingNode(size, _, _):
                return size
            case _:
                raise Impossible

    def find_min(self) -> T:
        """Return the minimum element, which sits at the root.

        Time Complexity: O(1)

        Raises:
            EmptyHeapError: If the heap is empty.
        """
        match self:
            case PairingNode(_, value, _):
                return value
            case _:
                raise EmptyHeapError("find_min of empty heap")

    def delete_min(self) -> PairingHeap[T]:
        """Remove the minimum element.

        Time Complexity: O(log n) amortized

        Returns:
            A new heap without the root element.

        Raises:
            EmptyHeapError: If the heap is empty.
        """
        match self:
            case PairingNode(_, _, children):
                return _pairing_merge_pairs(children)
            case _:
                raise EmptyHeapError("delete_min of empty heap")

    def uncons(self) -> Optional[Tuple[T, PairingHeap[T]]]:
        """Split off the minimum element.

        Returns:
            None if the heap is empty, otherwise a tuple of the minimum
            element and the heap without it.
        """
        match self:
            case PairingEmpty():
                return None
            case PairingNode(_, value, children):
                return (value, _pairing_merge_pairs(children))
            case _:
                raise Impossible

    def insert(self, value: T) -> PairingHeap[T]:
        """Insert a new element into the heap.

        Time Complexity: O(1)

        Args:
            value: The element to insert.

        Returns:
            A new heap containing the inserted element.
        """
        return _pairing_merge(PairingHeap.singleton(value), self)

    def merge(self, other: PairingHeap[T]) -> PairingHeap[T]:
        """Merge this heap with another heap.

        Time Complexity: O(1)

        Args:
            other: The heap to merge with this one.

        Returns:
            A new heap containing all elements from both heaps.
        """
        return _pairing_merge(self, other)

    def children(self) -> PList[PairingHeap[T]]:
        """The subheaps hanging off the root, most recently linked first."""
        match self:
            case PairingEmpty():
                return PList.empty()
            case PairingNode(_, _, children):
                return children
            case _:
                raise Impossible

    @override
    def iter(self) -> Generator[T]:
        """Iterate through the heap in ascending order."""
        return _pairing_iter(self)

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

    def __add__(self, other: PairingHeap[T]) -> PairingHeap[T]:
        """Alias for merge()."""
        return self.merge(other)

    def __rshift__(self, value: T) -> PairingHeap[T]:
        """Alias for insert()."""
        return self.insert(value)

    def __rlshift__(self, value: T) -> PairingHeap[T]:
        """Alias for insert()."""
        return self.insert(value)


@dataclass(frozen=True, eq=False)
class PairingEmpty[T](PairingHeap[T]):
    pass


_PAIRING_EMPTY: PairingHeap[Any] = PairingEmpty()


@dataclass(frozen=True, eq=False)
class PairingNode[T](PairingHeap[T]):
    """A non-empty pairing heap.

    Attributes:
        _size: Total number of elements in this heap.
        _value: The minimum element.
        _children: Non-empty subheaps, each rooted at an element no smaller
            than _value.
    """

    _size: int
    _value: T
    _children: PList[PairingHeap[T]]


def _pairing_link[T](first: PairingNode[T], second: PairingNode[T]) -> PairingNode[T]:
    # On ties the first root stays on top
    if leq(first._value, second._value):
        return PairingNode(
            first._size + second._size,
            first._value,
            first._children.cons(second),
        )
    else:
        return PairingNode(
            first._size + second._size,
            second._value,
            second._children.cons(first),
        )


def _pairing_merge[T](first: PairingHeap[T], second: PairingHeap[T]) -> PairingHeap[T]:
    match first:
        case PairingEmpty():
            return second
        case PairingNode():
            match second:
                case PairingEmpty():
                    return first
                case PairingNode():
                    return _pairing_link(first, second)
                case _:
                    raise Impossible
        case _:
            raise Impossible


def _pairing_merge_pairs[T](children: PList[PairingHeap[T]]) -> PairingHeap[T]:
    # First pass: merge adjacent children left to right
    paired: List[PairingHeap[T]] = []
    while True:
        match children.uncons():
            case None:
                break
            case (first, rest):
                match rest.uncons():
                    case None:
                        paired.append(first)
                        break
                    case (second, rest_of_rest):
                        paired.append(_pairing_merge(first, second))
                        children = rest_of_rest
                    case _:
                        raise Impossible
            case _:
                raise Impossible
    # Second pass: merge the pairs right to left
    result: PairingHeap[T] = PairingHeap.empty()
    for heap in reversed(paired):
        result = _pairing_merge(heap, result)
    return result


def _pairing_iter[T](heap: PairingHeap[T]) -> Generator[T]:
    while True:
        match heap.uncons():
            case None:
                return
            case (value, rest):
                yield value
                heap = rest
            case _:
                raise Impossible
