# opcount/session.py
"""
Counting sessions: wrap a batch, run an operation on it, read the tallies.

Snapshot point
──────────────
By default the tallies are read as soon as the operation returns, *before*
the surviving wrappers are torn down.  ``drop`` therefore only reports
destructions the operation itself caused.  Pass ``include_teardown=True`` to
release every wrapper still in the working list first; in a closed system the
result then satisfies ``drop == new + clone``.

Usage
─────
    from opcount import count_operations

    counts = count_operations([3, 1, 2], lambda xs: xs.sort())
    counts["partial_cmp"]

    with CountingSession() as session:
        session.run([3, 1, 2], lambda xs: xs.sort())
        session.values()      # [1, 2, 3]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from .counter import OperationCounter
from .errors import SessionReusedError
from .instrumented import Instrumented

_log = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[List[Instrumented[Any]]], Any]


class CountingSession(Generic[T]):
    """One fresh counter, one wrapped batch, one operation.

    Parameters
    ----------
    include_teardown:
        Release the surviving wrappers before taking the snapshot.
    """

    def __init__(self, *, include_teardown: bool = False) -> None:
        self.include_teardown = include_teardown
        self.counter = OperationCounter()
        self.items: List[Instrumented[T]] = []
        self._closed = False
        self._ran = False

    def wrap(self, batch: Iterable[T]) -> List[Instrumented[T]]:
        """Wrap *batch* in order and append it to the working list."""
        self.items.extend(Instrumented(value, self.counter) for value in batch)
        return self.items

    def run(self, batch: Iterable[T], operation: Operation) -> OperationCounter:
        """Wrap *batch*, apply *operation* to the working list, snapshot.

        Exceptions raised by *operation* propagate unchanged.  A session runs
        once, and not after :meth:`close`; otherwise this raises
        :class:`~opcount.errors.SessionReusedError` so every snapshot comes
        from a fresh counter.
        """
        if self._ran or self._closed:
            raise SessionReusedError("a counting session can only run once")
        self._ran = True
        items = self.wrap(batch)
        _log.debug("session: wrapped %d value(s)", len(items))
        operation(items)
        if self.include_teardown:
            self.close()
        counts = self.counter.snapshot()
        _log.debug("session: %s finished with %r", _describe(operation), counts)
        return counts

    def values(self) -> List[T]:
        """Inner values of the working list, in order, without counting."""
        return [item.value for item in self.items]

    def close(self) -> None:
        """Release every wrapper still in the working list."""
        if self._closed:
            return
        self._closed = True
        for item in self.items:
            item.release()

    def __enter__(self) -> CountingSession[T]:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def count_operations(
    batch: Iterable[T],
    operation: Operation,
    *,
    include_teardown: bool = False,
) -> OperationCounter:
    """Count the tracked operations *operation* performs on *batch*.

    Returns a snapshot independent of the session's live counter.  An empty
    batch with a no-op operation yields all zeros.
    """
    return CountingSession(include_teardown=include_teardown).run(batch, operation)


def _describe(operation: Optional[Operation]) -> str:
    return getattr(operation, "__qualname__", None) or repr(operation)


__all__ = ["CountingSession", "count_operations", "Operation"]
