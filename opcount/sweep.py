# opcount/sweep.py
"""
Size sweeps: run one counting session per input size and collect the rows.

Size ranges
───────────
Sizes are written in a small range language parsed by a PEG grammar::

    16              a single size
    1..1024         1, 2, 4, ... 1024   (doubling is the default step)
    1..1000*10      1, 10, 100, 1000
    0..50+10        0, 10, 20, 30, 40, 50

A range that would never reach its upper bound (``0..8*2``, ``1..8*1``,
``0..8+0``) or whose upper bound is below its start is rejected with
:class:`~opcount.errors.SweepSpecError`.

Configuration
─────────────
:class:`SweepConfig` carries the knobs; :meth:`SweepConfig.from_env` reads
``OPCOUNT_ALGORITHM``, ``OPCOUNT_SIZES``, ``OPCOUNT_BATCH``, ``OPCOUNT_SEED``
and ``OPCOUNT_INCLUDE_TEARDOWN``.
"""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from .algorithms import REGISTRY, AlgorithmRegistry
from .batches import BATCH_KINDS, make_batch
from .counter import OperationCounter
from .errors import ConfigError, OpcountError, SweepSpecError
from .session import count_operations

_log = logging.getLogger(__name__)


SIZE_RANGE_GRAMMAR = Grammar(r'''
    range     = _ size upper? _
    upper     = _ ".." _ size step?
    step      = _ operator _ size
    operator  = "*" / "+"
    size      = ~"[0-9]+"
    _         = ~"\s*"
''')


@dataclass(frozen=True)
class SizeRange:
    start: int
    stop: int
    operator: str = "*"
    step: int = 2

    def sizes(self) -> List[int]:
        """Every size from ``start`` up to and including ``stop``."""
        out: List[int] = []
        n = self.start
        while n <= self.stop:
            out.append(n)
            n = n * self.step if self.operator == "*" else n + self.step
        return out


class _SizeRangeBuilder(NodeVisitor):

    def generic_visit(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children or node

    def visit_range(self, node: Node, visited_children: List[Any]) -> SizeRange:
        _, start, upper, _ = visited_children
        if not isinstance(upper, list):
            return SizeRange(start, start)
        stop, step = upper[0]
        if step is None:
            return SizeRange(start, stop)
        operator, amount = step
        return SizeRange(start, stop, operator, amount)

    def visit_upper(self, node: Node, visited_children: List[Any]) -> Any:
        _, _, _, stop, step = visited_children
        return stop, (step[0] if isinstance(step, list) else None)

    def visit_step(self, node: Node, visited_children: List[Any]) -> Any:
        _, operator, _, amount = visited_children
        return operator, amount

    def visit_operator(self, node: Node, visited_children: List[Any]) -> str:
        return node.text

    def visit_size(self, node: Node, visited_children: List[Any]) -> int:
        return int(node.text)


def parse_sizes(text: str) -> SizeRange:
    """Parse and check a size-range expression."""
    try:
        tree = SIZE_RANGE_GRAMMAR.parse(text)
    except ParseError as exc:
        raise SweepSpecError(text, f"syntax error at column {exc.column()}") from exc
    size_range = _SizeRangeBuilder().visit(tree)

    if size_range.stop < size_range.start:
        raise SweepSpecError(text, "upper bound is below the start")
    if size_range.stop > size_range.start:
        if size_range.operator == "*" and (size_range.start == 0 or size_range.step <= 1):
            raise SweepSpecError(text, "a multiplicative step needs start >= 1 and factor >= 2")
        if size_range.operator == "+" and size_range.step == 0:
            raise SweepSpecError(text, "an additive step must be positive")
    return size_range


@dataclass(frozen=True)
class SweepConfig:
    """Tuning knobs for one size sweep."""
    algorithm: str = "sort"
    sizes: str = "1..1024"
    batch: str = "random"
    seed: Optional[int] = None
    include_teardown: bool = False

    def validate(self, registry: AlgorithmRegistry = REGISTRY) -> List[str]:
        """Return a list of problems (empty if the config is usable)."""
        problems: List[str] = []
        if not registry.has(self.algorithm):
            problems.append(f"unknown algorithm {self.algorithm!r}")
        if self.batch not in BATCH_KINDS:
            problems.append(f"unknown batch kind {self.batch!r}")
        try:
            parse_sizes(self.sizes)
        except OpcountError as exc:
            problems.append(str(exc))
        return problems

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SweepConfig:
        """Defaults overridden by the ``OPCOUNT_*`` variables of *environ*.

        Raises :class:`~opcount.errors.ConfigError` on a non-integer seed.
        """
        env = os.environ if environ is None else environ
        config = cls()
        overrides: dict = {}
        if env.get("OPCOUNT_ALGORITHM"):
            overrides["algorithm"] = env["OPCOUNT_ALGORITHM"]
        if env.get("OPCOUNT_SIZES"):
            overrides["sizes"] = env["OPCOUNT_SIZES"]
        if env.get("OPCOUNT_BATCH"):
            overrides["batch"] = env["OPCOUNT_BATCH"]
        if env.get("OPCOUNT_SEED"):
            try:
                overrides["seed"] = int(env["OPCOUNT_SEED"])
            except ValueError as exc:
                raise ConfigError("OPCOUNT_SEED", env["OPCOUNT_SEED"], "not an integer") from exc
        if env.get("OPCOUNT_INCLUDE_TEARDOWN"):
            overrides["include_teardown"] = env["OPCOUNT_INCLUDE_TEARDOWN"].strip().lower() in (
                "1", "true", "yes", "on",
            )
        return replace(config, **overrides)


@dataclass(frozen=True)
class SweepRow:
    size: int
    counts: OperationCounter


def run_sweep(
    config: SweepConfig,
    registry: AlgorithmRegistry = REGISTRY,
) -> List[SweepRow]:
    """One counting session per size of ``config.sizes``."""
    algorithm = registry.get(config.algorithm)
    sizes = parse_sizes(config.sizes).sizes()
    rng = random.Random(config.seed)

    _log.info(
        "Sweeping %s over %d size(s) (%s batches)",
        algorithm.name, len(sizes), config.batch,
    )
    rows: List[SweepRow] = []
    for size in sizes:
        batch = make_batch(config.batch, size, rng)
        counts = count_operations(
            batch, algorithm.run, include_teardown=config.include_teardown,
        )
        _log.debug("size %d: %r", size, counts)
        rows.append(SweepRow(size, counts))
    return rows


__all__ = [
    "SIZE_RANGE_GRAMMAR",
    "SizeRange",
    "parse_sizes",
    "SweepConfig",
    "SweepRow",
    "run_sweep",
]
