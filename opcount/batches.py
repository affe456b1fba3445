# opcount/batches.py
"""Input batches for counting sessions: permutations of ``0 .. n-1``."""

from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional

from .errors import UnknownBatchKindError


def random_batch(n: int, rng: Optional[random.Random] = None) -> List[int]:
    """A uniformly shuffled permutation of ``range(n)``."""
    rng = rng or random.Random()
    batch = list(range(n))
    rng.shuffle(batch)
    return batch


def sorted_batch(n: int, rng: Optional[random.Random] = None) -> List[int]:
    return list(range(n))


def reversed_batch(n: int, rng: Optional[random.Random] = None) -> List[int]:
    return list(range(n - 1, -1, -1))


BATCH_KINDS: Dict[str, Callable[[int, Optional[random.Random]], List[int]]] = {
    "random": random_batch,
    "sorted": sorted_batch,
    "reversed": reversed_batch,
}


def make_batch(kind: str, n: int, rng: Optional[random.Random] = None) -> List[int]:
    try:
        factory = BATCH_KINDS[kind]
    except KeyError:
        raise UnknownBatchKindError(kind) from None
    return factory(n, rng)


__all__ = ["random_batch", "sorted_batch", "reversed_batch", "make_batch", "BATCH_KINDS"]
