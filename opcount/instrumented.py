# opcount/instrumented.py
"""
Transparent wrapper that counts the operations performed on a value.

:class:`Instrumented` delegates equality, ordering and duplication to the
wrapped value and records every invocation in an
:class:`~opcount.counter.OperationCounter` shared by all wrappers of a
session.  The slot is bumped *before* delegating, so an inner operation that
raises is still counted as invoked.

Operator mapping
────────────────
    ``Instrumented(v, c)``                 → new
    ``clone()`` / ``copy.copy`` / ``copy.deepcopy``  → clone
    ``release()`` / ``__del__`` / ``with`` exit      → drop (once per instance)
    ``==`` ``!=``                          → eq
    ``<`` ``<=`` ``>`` ``>=`` ``partial_cmp()``      → partial_cmp
    ``cmp()`` / ``sort_key``               → cmp

Values that define their own ``partial_cmp`` / ``cmp`` methods, nested
wrappers included, are asked directly; anything else is compared through
its rich comparison operators.

``repr()``, ``hash()`` and the ``value`` / ``counter`` / ``released``
accessors are observations and never touch the counter.

Example
───────
    >>> from opcount import Instrumented, OperationCounter
    >>> c = OperationCounter()
    >>> a, b = Instrumented(1, c), Instrumented(2, c)
    >>> a < b
    True
    >>> c
    [('new', 2), ('clone', 0), ('drop', 0), ('eq', 0), ('partial_cmp', 1), ('cmp', 0)]
"""

from __future__ import annotations

import copy
import enum
import functools
from typing import Any, Dict, Generic, Optional, TypeVar

from .counter import OperationCounter, OperationKind
from .errors import IncomparableValuesError, ReleasedValueError

T = TypeVar("T")


class Ordering(enum.IntEnum):
    """Result of a three-way comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> Ordering:
        return Ordering(-self.value)


def _partial_order(left: Any, right: Any) -> Optional[Ordering]:
    """Three-way compare two raw values; ``None`` if they are unordered."""
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    if left == right:
        return Ordering.EQUAL
    return None


class Instrumented(Generic[T]):
    """A value of type ``T`` whose tracked operations are counted.

    Parameters
    ----------
    value:
        The wrapped value.  It is stored as-is and never modified by the
        wrapper.
    counter:
        The session counter.  Duplicates of this wrapper share it.
    """

    __slots__ = ("_value", "_counter", "_released")

    def __init__(self, value: T, counter: OperationCounter) -> None:
        counter.record(OperationKind.NEW)
        self._value = value
        self._counter = counter
        self._released = False

    def _adopt(self, value: T) -> Instrumented[T]:
        # Builds a sibling without going through __init__, which counts `new`.
        twin = object.__new__(type(self))
        twin._value = value
        twin._counter = self._counter
        twin._released = False
        return twin

    def _count(self, kind: OperationKind, other: Optional[Instrumented[Any]] = None) -> None:
        # Both operands of a comparison must still be live.
        for operand in (self, other):
            if operand is not None and operand._released:
                raise ReleasedValueError(
                    f"{kind.label} on a released wrapper of {operand._value!r}"
                )
        self._counter.record(kind)

    # ── observation ──────────────────────────────────────────────────

    @property
    def value(self) -> T:
        return self._value

    @property
    def counter(self) -> OperationCounter:
        return self._counter

    @property
    def released(self) -> bool:
        return self._released

    def __repr__(self) -> str:
        return repr(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # ── duplication ──────────────────────────────────────────────────

    def clone(self) -> Instrumented[T]:
        """Return a new wrapper over a shallow copy of the value."""
        self._count(OperationKind.CLONE)
        return self._adopt(copy.copy(self._value))

    def __copy__(self) -> Instrumented[T]:
        return self.clone()

    def __deepcopy__(self, memo: Dict[int, Any]) -> Instrumented[T]:
        self._count(OperationKind.CLONE)
        return self._adopt(copy.deepcopy(self._value, memo))

    # ── destruction ──────────────────────────────────────────────────

    def release(self) -> None:
        """Count this wrapper as destroyed.  Later calls do nothing."""
        if self._released:
            return
        self._released = True
        self._counter.record(OperationKind.DROP)

    def into_inner(self) -> T:
        """Release the wrapper and hand back the wrapped value."""
        self.release()
        return self._value

    def __del__(self) -> None:
        # __init__ may have failed before the attributes were bound.
        if not getattr(self, "_released", True):
            self.release()

    def __enter__(self) -> Instrumented[T]:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.release()

    # ── equality ─────────────────────────────────────────────────────

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Instrumented):
            return NotImplemented
        self._count(OperationKind.EQ, other)
        return self._value == other._value

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Instrumented):
            return NotImplemented
        self._count(OperationKind.EQ, other)
        return self._value != other._value

    # ── partial order ────────────────────────────────────────────────

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Instrumented):
            return NotImplemented
        self._count(OperationKind.PARTIAL_CMP, other)
        return self._value < other._value

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Instrumented):
            return NotImplemented
        self._count(OperationKind.PARTIAL_CMP, other)
        return self._value <= other._value

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Instrumented):
            return NotImplemented
        self._count(OperationKind.PARTIAL_CMP, other)
        return self._value > other._value

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Instrumented):
            return NotImplemented
        self._count(OperationKind.PARTIAL_CMP, other)
        return self._value >= other._value

    def partial_cmp(self, other: Instrumented[T]) -> Optional[Ordering]:
        """Three-way compare; ``None`` when the values are incomparable."""
        self._count(OperationKind.PARTIAL_CMP, other)
        inner = getattr(self._value, "partial_cmp", None)
        if inner is not None:
            return inner(other._value)
        return _partial_order(self._value, other._value)

    # ── total order ──────────────────────────────────────────────────

    def cmp(self, other: Instrumented[T]) -> Ordering:
        """Three-way compare under a total order.

        Raises
        ------
        IncomparableValuesError
            If the wrapped values are neither less, greater nor equal.
        """
        self._count(OperationKind.CMP, other)
        inner = getattr(self._value, "cmp", None)
        if inner is not None:
            return inner(other._value)
        ordering = _partial_order(self._value, other._value)
        if ordering is None:
            raise IncomparableValuesError(self._value, other._value)
        return ordering


def _total_order(left: Instrumented[Any], right: Instrumented[Any]) -> int:
    return int(left.cmp(right))


#: ``key=`` adapter ordering wrappers by :meth:`Instrumented.cmp`.
sort_key = functools.cmp_to_key(_total_order)


__all__ = ["Instrumented", "Ordering", "sort_key"]
