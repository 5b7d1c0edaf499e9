"""Persistent singly-linked list.

Cons cells are never modified, so prepending shares the whole tail with
the original list. The heaps use it for child lists and the mergesort
uses it for its segments.
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

from pfds.common import EmptyListError, Impossible, LexComparable, Sized

__all__ = ["PList"]


# sealed
class PList[T](Sized, LexComparable[T, "PList[T]"]):
    """A persistent cons list"""

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PList[T]:
        """Create an empty list.

        Args:
            _ty: Optional type hint (unused).

        Returns:
            The empty list instance.
        """
        return _PLIST_EMPTY

    @staticmethod
    def singleton(value: T) -> PList[T]:
        return PListCons(value, _PLIST_EMPTY, 1)

    @staticmethod
    def mk(values: Iterable[T]) -> PList[T]:
        """Create a list from an iterable of values, preserving their order.

        Args:
            values: Iterable of values to include in the list.

        Returns:
            A list containing all the given values in order.
        """
        return _list_prepend_all(list(values), PList.empty())

    @override
    def null(self) -> bool:
        match self:
            case PListEmpty():
                return True
            case _:
                return False

    @override
    def size(self) -> int:
        """Get the number of elements in the list in constant time."""
        match self:
            case PListEmpty():
                return 0
            case PListCons(_, _, size):
                return size
            case _:
                raise Impossible

    def head(self) -> T:
        """Get the first element.

        Raises:
            EmptyListError: If the list is empty.
        """
        match self:
            case PListCons(head, _, _):
                return head
            case _:
                raise EmptyListError("head of empty list")

    def tail(self) -> PList[T]:
        """Get the list without its first element.

        Raises:
            EmptyListError: If the list is empty.
        """
        match self:
            case PListCons(_, tail, _):
                return tail
            case _:
                raise EmptyListError("tail of empty list")

    def uncons(self) -> Optional[Tuple[T, PList[T]]]:
        """Split off the first element.

        Returns:
            None if the list is empty, otherwise (first_element, rest_of_list).
        """
        match self:
            case PListEmpty():
                return None
            case PListCons(head, tail, _):
                return (head, tail)
            case _:
                raise Impossible

    def cons(self, value: T) -> PList[T]:
        """Prepend an element in constant time.

        Args:
            value: The element to add.

        Returns:
            A new list with the element in front of this one.
        """
        return PListCons(value, self, self.size() + 1)

    def prepend(self, values: Iterable[T]) -> PList[T]:
        """Put all values in front of this list, keeping their order.

        The result shares this list as its tail.
        """
        return _list_prepend_all(list(values), self)

    def reduce[Z](self, fn: Callable[[Z, T], Z], acc: Z) -> Z:
        """Fold the list from left to right with an accumulator.

        Args:
            fn: Takes the accumulator and an element, returns the new accumulator.
            acc: The initial accumulator value.

        Returns:
            The final accumulator value after processing all elements.
        """
        result = acc
        for value in self.iter():
            result = fn(result, value)
        return result

    def reverse(self) -> PList[T]:
        return self.reduce(lambda acc, value: acc.cons(value), PList.empty())

    @override
    def iter(self) -> Generator[T]:
        """Return a generator that yields elements from first to last."""
        return _list_iter(self)

    def __rlshift__(self, value: T) -> PList[T]:
        """Alias for cons()."""
        return self.cons(value)

    def __repr__(self) -> str:
        return f"PList.mk({self.list()!r})"


@dataclass(frozen=True, eq=False, repr=False)
class PListEmpty[T](PList[T]):
    pass


_PLIST_EMPTY: PList[Any] = PListEmpty()


@dataclass(frozen=True, eq=False, repr=False)
class PListCons[T](PList[T]):
    """A cons cell.

    Attributes:
        _head: The first element.
        _tail: The rest of the list, shared with whoever else holds it.
        _size: Number of elements in this list, including the head.
    """

    _head: T
    _tail: PList[T]
    _size: int


def _list_prepend_all[T](values: List[T], rest: PList[T]) -> PList[T]:
    """Cons the python list in front of rest, keeping its order."""
    for value in reversed(values):
        rest = rest.cons(value)
    return rest


def _list_iter[T](lst: PList[T]) -> Generator[T]:
    while True:
        match lst:
            case PListEmpty():
                return
            case PListCons(head, tail, _):
                yield head
                lst = tail
            case _:
                raise Impossible
