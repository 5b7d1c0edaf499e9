"""Common types and comparison utilities for the pfds structures.

Every structure in this package orders its elements with `compare`, so the
total order is whatever the element type defines. Wrap elements in `Entry`
to order by a key, or in `Flip` to reverse the order.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generator, List, cast, override

__all__ = [
    "Comparable",
    "EmptyHeapError",
    "EmptyListError",
    "EmptyNodeError",
    "Entry",
    "Flip",
    "Impossible",
    "Iterating",
    "LexComparable",
    "Ordering",
    "Sized",
    "compare",
    "compare_lex",
    "leq",
]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in data structure operations.
    """

    pass


class EmptyHeapError(LookupError):
    """Raised by find_min or delete_min on an empty heap."""

    pass


class EmptyListError(LookupError):
    """Raised by head or tail on an empty list."""

    pass


class EmptyNodeError(LookupError):
    """Raised when accessing the parts of an empty tree node."""

    pass


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Generator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Generator[U]:
        return self.iter()


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1


class Comparable[T](metaclass=ABCMeta):
    @abstractmethod
    def compare(self, other: T) -> Ordering: ...

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, type(self)):
            return self.compare(cast(T, other)) == Ordering.Eq
        else:
            return False

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __lt__(self, other: T) -> bool:
        return self.compare(other) == Ordering.Lt

    def __le__(self, other: T) -> bool:
        return not self.__gt__(other)

    def __gt__(self, other: T) -> bool:
        return self.compare(other) == Ordering.Gt

    def __ge__(self, other: T) -> bool:
        return not self.__lt__(other)


class LexComparable[U, T](Iterating[U], Comparable[T]):
    @override
    def compare(self, other: T) -> Ordering:
        return compare_lex(self.iter(), getattr(other, "iter")())


@dataclass(frozen=True, eq=False)
class Entry[K, V](Comparable["Entry[K, V]"]):
    """A key-value entry that compares only on the key.

    Equal keys compare equal regardless of value, which makes entries
    handy for observing how a structure treats ties.
    """

    key: K
    value: V

    @override
    def compare(self, other: Entry[K, V]) -> Ordering:
        """Compare entries based on their keys only."""
        return compare(self.key, other.key)


@dataclass(frozen=True, eq=False)
class Flip[T](Comparable["Flip[T]"]):
    """A wrapper that flips the comparison result of the wrapped value.

    This is useful for converting min-heaps to max-heaps by reversing
    the comparison order of elements.

    Example:
        >>> from pfds.common import Flip, compare, Ordering
        >>> compare(1, 2)  # Normal comparison
        <Ordering.Lt: -1>
        >>> compare(Flip(1), Flip(2))  # Flipped comparison
        <Ordering.Gt: 1>
    """

    value: T

    @override
    def compare(self, other: Flip[T]) -> Ordering:
        """Compare by flipping the result of comparing the wrapped values."""
        result = compare(self.value, other.value)
        if result == Ordering.Lt:
            return Ordering.Gt
        elif result == Ordering.Gt:
            return Ordering.Lt
        else:
            return Ordering.Eq


def compare[T](a: T, b: T) -> Ordering:
    """Compare two values and return their ordering relationship.

    Uses the objects' __eq__ and __lt__ methods to determine the comparison result.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    # Unsafe eq/lt because generic protocols are half-baked
    if getattr(a, "__eq__")(b):
        return Ordering.Eq
    elif getattr(a, "__lt__")(b):
        return Ordering.Lt
    else:
        return Ordering.Gt


def leq[T](a: T, b: T) -> bool:
    """True when a sorts before or together with b."""
    return compare(a, b) != Ordering.Gt


def compare_lex[T](agen: Generator[T], bgen: Generator[T]) -> Ordering:
    """Perform lexicographic comparison of two sequences via generators.

    Compares elements from both generators in order, returning the first
    non-equal comparison result. If one generator is exhausted first,
    the shorter sequence is considered less than the longer one.

    Args:
        agen: Generator producing elements from the first sequence.
        bgen: Generator producing elements from the second sequence.

    Returns:
        Ordering indicating the lexicographic relationship between the sequences.
    """
    while True:
        try:
            a = next(agen)
        except StopIteration:
            try:
                _ = next(bgen)
                return Ordering.Lt
            except StopIteration:
                return Ordering.Eq
        try:
            b = next(bgen)
            r = compare(a, b)
            if r != Ordering.Eq:
                return r
        except StopIteration:
            return Ordering.Gt
