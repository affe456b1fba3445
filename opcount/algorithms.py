# opcount/algorithms.py
"""
Reference algorithms whose operation counts the sweep driver reports.

Every algorithm takes a mutable sequence and rearranges it in place, which
is the shape :func:`opcount.session.count_operations` hands to its
operation.  The functions work equally on raw values, so an instrumented
run can be checked against an uninstrumented one.
"""

from __future__ import annotations

import copy
import functools
import heapq
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, MutableSequence

from .errors import UnknownAlgorithmError


def builtin_sort(seq: MutableSequence[Any]) -> None:
    seq.sort()  # type: ignore[attr-defined]


def insertion_sort(seq: MutableSequence[Any]) -> None:
    """Swap each element leftwards until its predecessor is not larger.

    Performs ``n - 1`` ``<`` tests on sorted input and ``n(n-1)/2`` on
    reversed input.  Elements are moved, never copied.
    """
    for i in range(1, len(seq)):
        j = i
        while j > 0 and seq[j] < seq[j - 1]:
            seq[j], seq[j - 1] = seq[j - 1], seq[j]
            j -= 1


def _three_way(left: Any, right: Any) -> int:
    cmp = getattr(left, "cmp", None)
    if cmp is not None:
        return int(cmp(right))
    return (left > right) - (left < right)


def cmp_sort(seq: MutableSequence[Any]) -> None:
    """Built-in sort driven by the three-way total order."""
    seq.sort(key=functools.cmp_to_key(_three_way))  # type: ignore[attr-defined]


def heap_sort(seq: MutableSequence[Any]) -> None:
    heap = list(seq)
    heapq.heapify(heap)
    seq[:] = [heapq.heappop(heap) for _ in range(len(heap))]


def copy_sort(seq: MutableSequence[Any]) -> None:
    """Sort shallow copies and let the originals go."""
    seq[:] = sorted(copy.copy(item) for item in seq)


def dedup(seq: MutableSequence[Any]) -> None:
    """Drop consecutive duplicates, keeping the first of each run."""
    if not seq:
        return
    kept = [seq[0]]
    for item in seq[1:]:
        if item != kept[-1]:
            kept.append(item)
    seq[:] = kept


@dataclass(frozen=True)
class Algorithm:
    name: str
    run: Callable[[MutableSequence[Any]], None]
    description: str = ""

    def __call__(self, seq: MutableSequence[Any]) -> None:
        self.run(seq)


class AlgorithmRegistry:
    """Named algorithms available to the sweep driver and the CLI."""

    def __init__(self) -> None:
        self._algorithms: Dict[str, Algorithm] = {}

    def register(
        self,
        name: str,
        run: Callable[[MutableSequence[Any]], None],
        description: str = "",
    ) -> Algorithm:
        """Register *run* under *name*, replacing any previous entry."""
        algorithm = Algorithm(name, run, description or _first_line(run))
        self._algorithms[name] = algorithm
        return algorithm

    def get(self, name: str) -> Algorithm:
        try:
            return self._algorithms[name]
        except KeyError:
            raise UnknownAlgorithmError(name) from None

    def has(self, name: str) -> bool:
        return name in self._algorithms

    def names(self) -> FrozenSet[str]:
        return frozenset(self._algorithms)

    def all(self) -> List[Algorithm]:
        return [self._algorithms[name] for name in sorted(self._algorithms)]


def _first_line(func: Callable[..., Any]) -> str:
    doc = (func.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else ""


REGISTRY = AlgorithmRegistry()
REGISTRY.register("sort", builtin_sort, "list.sort() (Timsort) using <")
REGISTRY.register("insertion_sort", insertion_sort)
REGISTRY.register("cmp_sort", cmp_sort)
REGISTRY.register("heap_sort", heap_sort, "heapify then pop every element (heapq)")
REGISTRY.register("copy_sort", copy_sort)
REGISTRY.register("dedup", dedup)


def get_algorithm(name: str) -> Algorithm:
    return REGISTRY.get(name)


__all__ = [
    "Algorithm",
    "AlgorithmRegistry",
    "REGISTRY",
    "get_algorithm",
    "builtin_sort",
    "insertion_sort",
    "cmp_sort",
    "heap_sort",
    "copy_sort",
    "dedup",
]
