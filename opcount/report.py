"""
opcount/report.py
═════════════════

Renderers for counting results.

Output formats
──────────────
  • table : fixed-width columns, one row per size (default)
  • pairs : ``size=N new=.. clone=.. ...`` one line per size
  • json  : a list of ``{"size": N, "new": .., ...}`` objects
  • sexp  : ``(sweep (row (size N) (new ..) ...) ...)``

Only the table header is coloured, and only when asked to; termcolor
itself honours ``NO_COLOR`` / ``FORCE_COLOR`` and non-tty streams.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Sequence

import sexpdata
from termcolor import colored

from .counter import OperationCounter
from .sweep import SweepRow

FORMATS = ("table", "pairs", "json", "sexp")


def render_pairs(counter: OperationCounter) -> str:
    """``new=4 clone=0 drop=0 eq=0 partial_cmp=3 cmp=0``"""
    return " ".join(f"{name}={count}" for name, count in counter.pairs())


def render_table(
    rows: Sequence[SweepRow],
    *,
    colour: bool = True,
    min_width: int = 6,
) -> str:
    """Fixed-width table with a ``size`` column followed by the six slots."""
    header = ("size",) + OperationCounter.names()
    body = [(row.size,) + row.counts.get() for row in rows]

    widths = [max(len(label), min_width) for label in header]
    for values in body:
        for i, value in enumerate(values):
            widths[i] = max(widths[i], len(str(value)))

    title = "  ".join(label.rjust(w) for label, w in zip(header, widths))
    if colour:
        title = colored(title, attrs=["bold"])
    lines = [title]
    for values in body:
        lines.append("  ".join(str(v).rjust(w) for v, w in zip(values, widths)))
    return "\n".join(lines)


def _row_dict(row: SweepRow) -> Dict[str, int]:
    out: Dict[str, int] = {"size": row.size}
    out.update(row.counts.as_dict())
    return out


def render_json(rows: Sequence[SweepRow], indent: int = 2) -> str:
    return json.dumps([_row_dict(row) for row in rows], indent=indent)


def render_sexp(rows: Sequence[SweepRow]) -> str:
    tree: List[Any] = [sexpdata.Symbol("sweep")]
    for row in rows:
        tree.append(
            [sexpdata.Symbol("row")]
            + [[sexpdata.Symbol(key), value] for key, value in _row_dict(row).items()]
        )
    return sexpdata.dumps(tree)


def render(rows: Sequence[SweepRow], fmt: str = "table", *, colour: bool = True) -> str:
    """Dispatch on *fmt*; unknown formats raise ``ValueError``."""
    renderers: Dict[str, Callable[[], str]] = {
        "table": lambda: render_table(rows, colour=colour),
        "pairs": lambda: "\n".join(
            f"size={row.size} {render_pairs(row.counts)}" for row in rows
        ),
        "json": lambda: render_json(rows),
        "sexp": lambda: render_sexp(rows),
    }
    renderer = renderers.get(fmt)
    if renderer is None:
        raise ValueError(f"unknown output format {fmt!r}; expected one of {FORMATS}")
    return renderer()


__all__ = ["FORMATS", "render", "render_pairs", "render_table", "render_json", "render_sexp"]
