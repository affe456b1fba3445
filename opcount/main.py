#!/usr/bin/env python3
"""opcount/main.py — CLI entry-point for the operation counter.

Usage examples
--------------
    # Count Timsort's comparisons over random permutations of 1..1024
    opcount sweep

    # Insertion sort on reversed input, sizes 1, 2, 4, ... 64
    opcount sweep --algorithm insertion_sort --batch reversed --sizes 1..64

    # Include the teardown of the surviving wrappers, emit JSON
    opcount sweep --sizes 1..100*10 --include-teardown --format json

    # List the registered algorithms
    opcount algorithms

Exit codes
----------
    0   Success.
    1   Bad arguments (unknown algorithm, malformed size range, ...).
    2   Infrastructure failure (output file cannot be written).

The module doubles as ``python -m opcount`` via ``opcount/__main__.py``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence, TextIO

from . import __version__
from .algorithms import REGISTRY
from .batches import BATCH_KINDS
from .errors import OpcountError
from .report import FORMATS, render
from .sweep import SweepConfig, run_sweep

_log = logging.getLogger("opcount")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``opcount`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("opcount")
    root.setLevel(level)
    root.handlers[:] = [handler]


def _open_output(dest: Optional[str]) -> TextIO:
    """*dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path."""
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


# ===========================================================================
# Sub-command implementations
# ===========================================================================

def cmd_sweep(args: argparse.Namespace) -> int:
    """Run one counting session per size and print the table."""
    try:
        config = SweepConfig.from_env()
    except OpcountError as exc:
        _log.error("%s", exc)
        return EXIT_ERROR
    overrides = {
        key: value
        for key, value in (
            ("algorithm", args.algorithm),
            ("sizes", args.sizes),
            ("batch", args.batch),
            ("seed", args.seed),
        )
        if value is not None
    }
    if args.include_teardown:
        overrides["include_teardown"] = True
    config = replace(config, **overrides)

    problems = config.validate()
    for problem in problems:
        _log.error("%s", problem)
    if problems:
        return EXIT_ERROR

    try:
        rows = run_sweep(config)
    except OpcountError as exc:
        _log.error("Sweep aborted: %s", exc)
        return EXIT_ERROR

    try:
        out = _open_output(args.output)
    except OSError as exc:
        _log.error("Cannot open output %s: %s", args.output, exc)
        return EXIT_INFRA
    colour = not args.no_colour and out is sys.stdout
    try:
        out.write(render(rows, args.format, colour=colour) + "\n")
    finally:
        if out is not sys.stdout:
            out.close()
    return EXIT_OK


def cmd_algorithms(args: argparse.Namespace) -> int:
    """List the registered algorithms."""
    for algorithm in REGISTRY.all():
        sys.stdout.write(f"{algorithm.name:<16} {algorithm.description}\n")
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opcount",
        description="Count the operations an algorithm performs on its inputs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")

    p_sweep = sub.add_parser("sweep", help="Count operations over a range of input sizes.")
    p_sweep.add_argument(
        "-a", "--algorithm", choices=sorted(REGISTRY.names()),
        help="Algorithm to measure (default: sort).",
    )
    p_sweep.add_argument(
        "-s", "--sizes",
        help="Size range, e.g. 16, 1..1024, 1..1000*10, 0..50+10 (default: 1..1024).",
    )
    p_sweep.add_argument(
        "-b", "--batch", choices=sorted(BATCH_KINDS),
        help="Input order (default: random).",
    )
    p_sweep.add_argument("--seed", type=int, help="Seed for random batches.")
    p_sweep.add_argument(
        "--include-teardown", action="store_true",
        help="Count the release of surviving wrappers in the drop column.",
    )
    p_sweep.add_argument("-f", "--format", choices=FORMATS, default="table")
    p_sweep.add_argument("-o", "--output", help="Write to a file instead of stdout.")
    p_sweep.add_argument("--no-colour", action="store_true", help="Plain table header.")
    p_sweep.set_defaults(func=cmd_sweep)

    p_algorithms = sub.add_parser("algorithms", help="List the registered algorithms.")
    p_algorithms.set_defaults(func=cmd_algorithms)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not getattr(args, "func", None):
        parser.print_help(sys.stderr)
        return EXIT_ERROR
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
