"""Persistent binary tree nodes.

Trees are built bottom-up with `PTree.branch` and never modified, so
rebuilding a path to the root shares every untouched subtree. Branches
cache their size, which keeps `size()` constant time for the splay heap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator, List, Optional, Type, override

from pfds.common import EmptyNodeError, Impossible, Iterating, Sized

__all__ = ["PTree"]


# sealed
class PTree[T](Sized, Iterating[T]):
    """An immutable binary tree"""

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PTree[T]:
        return _PTREE_EMPTY

    @staticmethod
    def singleton(value: T) -> PTree[T]:
        return PTreeBranch(_PTREE_EMPTY, value, _PTREE_EMPTY, 1)

    @staticmethod
    def branch(left: PTree[T], value: T, right: PTree[T]) -> PTree[T]:
        """Create a node from two existing subtrees.

        Args:
            left: The left subtree.
            value: The value at the new node.
            right: The right subtree.

        Returns:
            A new node sharing both subtrees.
        """
        return PTreeBranch(left, value, right, left.size() + right.size() + 1)

    @override
    def null(self) -> bool:
        match self:
            case PTreeEmpty():
                return True
            case _:
                return False

    @override
    def size(self) -> int:
        match self:
            case PTreeEmpty():
                return 0
            case PTreeBranch(_, _, _, size):
                return size
            case _:
                raise Impossible

    def left(self) -> PTree[T]:
        """Get the left subtree.

        Raises:
            EmptyNodeError: If the tree is empty.
        """
        match self:
            case PTreeBranch(left, _, _, _):
                return left
            case _:
                raise EmptyNodeError("left of empty tree")

    def value(self) -> T:
        """Get the value at the root.

        Raises:
            EmptyNodeError: If the tree is empty.
        """
        match self:
            case PTreeBranch(_, value, _, _):
                return value
            case _:
                raise EmptyNodeError("value of empty tree")

    def right(self) -> PTree[T]:
        """Get the right subtree.

        Raises:
            EmptyNodeError: If the tree is empty.
        """
        match self:
            case PTreeBranch(_, _, right, _):
                return right
            case _:
                raise EmptyNodeError("right of empty tree")

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        result = 0
        level: List[PTree[T]] = [self] if not self.null() else []
        while level:
            result += 1
            level = [
                child
                for node in level
                for child in (node.left(), node.right())
                if not child.null()
            ]
        return result

    @override
    def iter(self) -> Generator[T]:
        """Yield values in order (left subtree, root, right subtree)."""
        return _tree_iter(self)


@dataclass(frozen=True, eq=False)
class PTreeEmpty[T](PTree[T]):
    pass


_PTREE_EMPTY: PTree[Any] = PTreeEmpty()


@dataclass(frozen=True, eq=False)
class PTreeBranch[T](PTree[T]):
    """A tree node with two (possibly empty) subtrees.

    Attributes:
        _left: The left subtree.
        _value: The value at this node.
        _right: The right subtree.
        _size: Total number of values in this tree.
    """

    _left: PTree[T]
    _value: T
    _right: PTree[T]
    _size: int


def _tree_iter[T](tree: PTree[T]) -> Generator[T]:
    # Explicit stack since degenerate trees can be deeper than the recursion limit
    stack: List[PTreeBranch[T]] = []
    node = tree
    while True:
        match node:
            case PTreeBranch(left, _, _, _):
                stack.append(node)
                node = left
            case PTreeEmpty():
                if not stack:
                    return
                top = stack.pop()
                yield top._value
                node = top._right
            case _:
                raise Impossible
