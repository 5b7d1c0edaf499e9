"""Memoized suspensions.

A `Susp` holds a deferred computation that runs at most once; every later
`force` returns the cached result. Evaluation happens under a lock, so
threads racing to force the same suspension share one evaluation.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable, List, Optional, cast

__all__ = ["Susp"]


class Susp[T]:
    """A thread-safe, memoized deferred computation.

    A suspension may name another suspension its computation forces
    (`after`). Forcing walks such chains iteratively and evaluates them
    oldest first, so each computation finds its predecessor already cached
    and forcing a long chain does not recurse.
    """

    def __init__(
        self,
        thunk: Optional[Callable[[], T]],
        value: Optional[T] = None,
        after: Optional[Susp[Any]] = None,
    ):
        self._lock = Lock()
        self._thunk = thunk
        self._value = value
        self._after = after

    @staticmethod
    def delay(thunk: Callable[[], T], after: Optional[Susp[Any]] = None) -> Susp[T]:
        """Suspend a computation without running it.

        Args:
            thunk: The computation to run on first force.
            after: A suspension that thunk forces, if any.

        Returns:
            An unevaluated suspension.
        """
        return Susp(thunk, after=after)

    @staticmethod
    def now(value: T) -> Susp[T]:
        """Wrap an already computed value."""
        return Susp(None, value=value)

    def forced(self) -> bool:
        """True once the computation has run and its result is cached."""
        return self._thunk is None

    def force(self) -> T:
        """Evaluate the suspension if needed and return the cached value.

        If the computation raises, the suspension stays unevaluated and the
        exception propagates; the next force tries again.
        """
        if self._thunk is not None:
            chain: List[Susp[Any]] = []
            cur: Optional[Susp[Any]] = self
            while cur is not None and not cur.forced():
                chain.append(cur)
                cur = cur._after
            for susp in reversed(chain):
                susp._evaluate()
        return cast(T, self._value)

    def _evaluate(self) -> None:
        with self._lock:
            thunk = self._thunk
            if thunk is None:
                return
            logging.debug("Forcing suspension %x", id(self))
            self._value = thunk()
            self._thunk = None
            self._after = None

    def __repr__(self) -> str:
        if self.forced():
            return f"Susp.now({self._value!r})"
        else:
            return "Susp.delay(...)"
