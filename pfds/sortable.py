"""Incremental sorting with lazy bottom-up mergesort.

A `Sortable` keeps its elements as sorted segments whose lengths are the
powers of two in the binary representation of its size. Adding an element
works like incrementing a binary counter: the new singleton segment merges
with the existing segment of each carried bit. That merge cascade is
suspended and only runs when something forces it, and it runs at most once
no matter how many later versions depend on it, which gives O(log n)
amortized cost per add even when old versions are reused.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator, Iterable, List, Optional, Type, override

from pfds.common import Impossible, Iterating, Sized, leq
from pfds.plist import PList
from pfds.susp import Susp

__all__ = ["Sortable", "mrg"]


type Segments[T] = PList[PList[T]]
"""Sorted segments, shortest first."""


@dataclass(frozen=True, eq=False)
class Sortable[T](Sized, Iterating[T]):
    """A persistent collection that sorts on demand.

    Attributes:
        _size: Number of elements added.
        _segments: Suspended segment list. Segment i (counting from the
            front) has length 2**k for the k-th set bit of _size.
    """

    _size: int
    _segments: Susp[Segments[T]]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> Sortable[T]:
        return _SORTABLE_EMPTY

    @staticmethod
    def mk(values: Iterable[T]) -> Sortable[T]:
        """Add every value, in order, to an empty sortable.

        Nothing is merged until the result is sorted.
        """
        sortable: Sortable[T] = Sortable.empty()
        for value in values:
            sortable = sortable.add(value)
        return sortable

    @override
    def size(self) -> int:
        return self._size

    def add(self, value: T) -> Sortable[T]:
        """Add an element without doing any merging yet.

        Time Complexity: O(1) now, O(log n) amortized once forced

        Args:
            value: The element to add.

        Returns:
            A new sortable whose segments, once forced, include value.
        """
        size = self._size
        prev = self._segments
        return Sortable(
            size + 1,
            Susp.delay(
                lambda: _add_seg(PList.singleton(value), prev.force(), size),
                after=prev,
            ),
        )

    def segments(self) -> Segments[T]:
        """Force and return the sorted segments, shortest first."""
        return self._segments.force()

    def pending(self) -> bool:
        """True while the merges of the most recent add have not run."""
        return not self._segments.forced()

    def sort(self) -> PList[T]:
        """Return all elements in ascending order.

        Elements that compare equal come out in the order they were added.
        Sorting the same instance again reuses the forced segments.
        """
        return _merge_all(self._segments.force())

    @override
    def iter(self) -> Generator[T]:
        """Iterate through the elements in ascending order."""
        return self.sort().iter()

    def __rshift__(self, value: T) -> Sortable[T]:
        """Alias for add()."""
        return self.add(value)


_SORTABLE_EMPTY: Sortable[Any] = Sortable(0, Susp.now(PList.empty()))


def mrg[T](xs: PList[T], ys: PList[T]) -> PList[T]:
    """Merge two ascending lists into one.

    On ties the element from xs comes first. Whatever remains of the longer
    list after the other runs out is shared, not copied.

    Args:
        xs: An ascending list.
        ys: An ascending list.

    Returns:
        An ascending list of the elements of both.
    """
    merged: List[T] = []
    while True:
        match xs.uncons():
            case None:
                return ys.prepend(merged)
            case (x, xs_tail):
                match ys.uncons():
                    case None:
                        return xs.prepend(merged)
                    case (y, ys_tail):
                        if leq(x, y):
                            merged.append(x)
                            xs = xs_tail
                        else:
                            merged.append(y)
                            ys = ys_tail
                    case _:
                        raise Impossible
            case _:
                raise Impossible


def _add_seg[T](seg: PList[T], segs: Segments[T], size: int) -> Segments[T]:
    # Carry while the low bit is set; older elements stay on the left
    while size % 2 == 1:
        seg = mrg(segs.head(), seg)
        segs = segs.tail()
        size //= 2
    return segs.cons(seg)


def _merge_all[T](segs: Segments[T]) -> PList[T]:
    # Later segments hold older elements
    return segs.reduce(lambda acc, seg: mrg(seg, acc), PList.empty())
