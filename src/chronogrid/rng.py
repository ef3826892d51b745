"""
One process-wide random stream shared by the coach policies and the engine.

Every policy/resolution call takes an optional ``rng``; leaving it out draws from
the shared stream. Anything exposing ``random()`` and ``integers(low, high)`` with
numpy's semantics can stand in for it.
"""
from __future__ import annotations
from typing import Optional

import numpy as np

_shared = np.random.default_rng()


def shared_rng() -> np.random.Generator:
    return _shared


def seed(value: Optional[int]) -> np.random.Generator:
    """Replace the shared stream with a freshly seeded one and return it."""
    global _shared
    _shared = np.random.default_rng(value)
    return _shared


def resolve(rng=None):
    return shared_rng() if rng is None else rng


def randint(rng, low: int, high: int) -> int:
    """Uniform integer in [low, high], both ends inclusive."""
    return int(rng.integers(low, high + 1))


def roll(rng, p: float) -> bool:
    return bool(rng.random() < p)
