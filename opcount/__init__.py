"""
opcount — Operation-counting instrumentation harness
=====================================================

Wraps arbitrary values so that every construction, clone, destruction,
equality test, partial-order test and total-order test performed on them is
tallied in a shared counter, without changing what the values compare or
copy to.  Useful for checking how many comparisons or copies an algorithm
really makes.

Core modules
------------
counter
    ``OperationKind`` slots and the ``OperationCounter`` tally record.
instrumented
    The ``Instrumented`` wrapper and the ``Ordering`` three-way result.
session
    ``count_operations`` and ``CountingSession``: wrap, run, snapshot.

Support modules
---------------
algorithms
    Registry of reference algorithms (sorts, dedup) to measure.
batches
    Sorted, reversed and shuffled input batches.
sweep
    Size-range parsing and the size sweep driver.
report
    Table, pairs, JSON and S-expression renderers.

Quick start
-----------
>>> from opcount import count_operations
>>> from opcount.algorithms import insertion_sort
>>> count_operations([3, 2, 1, 0], insertion_sort)
[('new', 4), ('clone', 0), ('drop', 0), ('eq', 0), ('partial_cmp', 6), ('cmp', 0)]
"""

from __future__ import annotations

import importlib
import sys
from typing import TYPE_CHECKING, List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__all__: List[str] = []          # populated below

# ---------------------------------------------------------------------------
# Re-exported names per submodule.  Import failure of any of them is fatal.
# ---------------------------------------------------------------------------

_CORE_MODULES = {
    "errors": [
        "OpcountError",
        "IncomparableValuesError",
        "ReleasedValueError",
        "SessionReusedError",
        "UnknownAlgorithmError",
        "UnknownBatchKindError",
        "SweepSpecError",
        "ConfigError",
    ],
    "counter": [
        "OperationKind",
        "OperationCounter",
    ],
    "instrumented": [
        "Instrumented",
        "Ordering",
        "sort_key",
    ],
    "session": [
        "CountingSession",
        "count_operations",
    ],
}


def _import_names(module_rel_name: str, names: List[str]) -> None:
    """Import *names* from a submodule and bind them in the package namespace."""
    fq_name = f"{__name__}.{module_rel_name}"
    try:
        mod = importlib.import_module(fq_name)
    except ImportError as exc:
        raise ImportError(
            f"opcount: required submodule '{module_rel_name}' "
            f"failed to import: {exc}"
        ) from exc

    current_module = sys.modules[__name__]
    for name in names:
        obj = getattr(mod, name, None)
        if obj is None:
            raise AttributeError(f"opcount.{module_rel_name} does not export '{name}'")
        setattr(current_module, name, obj)
        __all__.append(name)

    setattr(current_module, module_rel_name, mod)
    if module_rel_name not in __all__:
        __all__.append(module_rel_name)


for _mod, _names in _CORE_MODULES.items():
    _import_names(_mod, _names)

del _mod, _names


def list_submodules() -> List[str]:
    """Names of the core submodules re-exported by the package."""
    return sorted(_CORE_MODULES)


__all__ += ["list_submodules", "__version__"]

# ---------------------------------------------------------------------------
# TYPE_CHECKING block: static visibility of the dynamically bound names
# ---------------------------------------------------------------------------

if TYPE_CHECKING:
    from .errors import (
        OpcountError as OpcountError,
        IncomparableValuesError as IncomparableValuesError,
        ReleasedValueError as ReleasedValueError,
        SessionReusedError as SessionReusedError,
        UnknownAlgorithmError as UnknownAlgorithmError,
        UnknownBatchKindError as UnknownBatchKindError,
        SweepSpecError as SweepSpecError,
        ConfigError as ConfigError,
    )
    from .counter import (
        OperationKind as OperationKind,
        OperationCounter as OperationCounter,
    )
    from .instrumented import (
        Instrumented as Instrumented,
        Ordering as Ordering,
        sort_key as sort_key,
    )
    from .session import (
        CountingSession as CountingSession,
        count_operations as count_operations,
    )
