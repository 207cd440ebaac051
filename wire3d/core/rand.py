"""Shared random number generation.

Every randomized operation accepts an optional ``numpy.random.Generator``.
When none is given, the module-level default generator is used, which can be
reseeded with :func:`seed` for reproducible frames.
"""

from __future__ import annotations

import numpy as np

_default_rng = np.random.default_rng()


def seed(value: int | None) -> None:
    """Reseed the shared default generator."""
    global _default_rng
    _default_rng = np.random.default_rng(value)


def get_rng(rng: np.random.Generator | None = None) -> np.random.Generator:
    """Return ``rng`` if given, otherwise the shared default generator."""
    return rng if rng is not None else _default_rng


def uniform(low: float, high: float, rng: np.random.Generator | None = None) -> float:
    """Draw a single float from ``[low, high)``."""
    return float(get_rng(rng).uniform(low, high))


def angle(rng: np.random.Generator | None = None) -> float:
    """Draw a random angle in ``[0, 2*pi)``."""
    return float(get_rng(rng).uniform(0.0, 2.0 * np.pi))
