# opcount/counter.py
"""
Shared tally record for one counting session.

An :class:`OperationCounter` holds one slot per :class:`OperationKind`.
Every :class:`~opcount.instrumented.Instrumented` wrapper created in a
session keeps a reference to the same counter and bumps the matching slot
through :meth:`OperationCounter.record`.

Slot layout
───────────
    ====  ===========  ==========================================
    slot  label        incremented by
    ====  ===========  ==========================================
    0     new          wrapping a raw value
    1     clone        duplicating a wrapper
    2     drop         releasing a wrapper
    3     eq           ``==`` / ``!=``
    4     partial_cmp  ``<`` ``<=`` ``>`` ``>=`` / ``partial_cmp()``
    5     cmp          ``cmp()``
    ====  ===========  ==========================================
"""

from __future__ import annotations

import enum
import functools
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union


class OperationKind(enum.IntEnum):
    """The six tracked operations, valued by their slot index."""

    NEW = 0
    CLONE = 1
    DROP = 2
    EQ = 3
    PARTIAL_CMP = 4
    CMP = 5

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> OperationKind:
        try:
            return cls(_LABELS.index(label))
        except ValueError:
            raise KeyError(label) from None


_LABELS: Tuple[str, ...] = ("new", "clone", "drop", "eq", "partial_cmp", "cmp")

COLUMNS: int = len(OperationKind)

Tallies = Tuple[int, int, int, int, int, int]


@functools.total_ordering
class OperationCounter:
    """Fixed-size tally of tracked operations.

    Two counters compare slot by slot, in slot order.
    """

    __slots__ = ("_counts",)

    def __init__(self, tallies: Iterable[int] = ()) -> None:
        self._counts: List[int] = [0] * COLUMNS
        tallies = tuple(tallies)
        if tallies:
            self.set(tallies)

    # ── hot path ─────────────────────────────────────────────────────

    def record(self, kind: OperationKind) -> None:
        """Increment the slot for *kind* by one."""
        self._counts[kind] += 1

    # ── bulk access ──────────────────────────────────────────────────

    @staticmethod
    def names() -> Tuple[str, ...]:
        """Slot labels in slot order."""
        return _LABELS

    def get(self) -> Tallies:
        return tuple(self._counts)  # type: ignore[return-value]

    def set(self, tallies: Iterable[int]) -> None:
        """Overwrite every slot at once."""
        values = [int(v) for v in tallies]
        if len(values) != COLUMNS:
            raise ValueError(
                f"expected {COLUMNS} tallies, got {len(values)}"
            )
        self._counts = values

    def snapshot(self) -> OperationCounter:
        """Return an independent copy of the current tallies."""
        return OperationCounter(self._counts)

    def as_dict(self) -> Dict[str, int]:
        return dict(zip(_LABELS, self._counts))

    def __getitem__(self, key: Union[OperationKind, str]) -> int:
        if isinstance(key, str):
            key = OperationKind.from_label(key)
        return self._counts[key]

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._counts))

    def __len__(self) -> int:
        return COLUMNS

    @property
    def total(self) -> int:
        return sum(self._counts)

    @property
    def live(self) -> int:
        """Wrappers created and not yet released."""
        return (
            self._counts[OperationKind.NEW]
            + self._counts[OperationKind.CLONE]
            - self._counts[OperationKind.DROP]
        )

    # ── comparison ───────────────────────────────────────────────────

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, OperationCounter):
            return NotImplemented
        return self._counts == other._counts

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, OperationCounter):
            return NotImplemented
        return self._counts < other._counts

    __hash__ = None  # type: ignore[assignment]

    # ── formatting ───────────────────────────────────────────────────

    def pairs(self) -> List[Tuple[str, int]]:
        return list(zip(_LABELS, self._counts))

    def __repr__(self) -> str:
        return repr(self.pairs())

    def format_columns(self, width: int = 12) -> str:
        """Render a header line of labels over a line of values."""
        header = "".join(f"{name:>{width}}" for name in _LABELS)
        values = "".join(f"{count:>{width}}" for count in self._counts)
        return f"{header}\n{values}"


__all__ = ["OperationKind", "OperationCounter", "COLUMNS", "Tallies"]
