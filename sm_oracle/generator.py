from __future__ import annotations

from typing import Optional

import numpy as np

from .agents import PreferenceLists


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source for a run; pass a seed to make trials reproducible."""
    return np.random.default_rng(seed)


def generate_input(n: int, rng: np.random.Generator) -> PreferenceLists:
    """Return n preference lists, each an independent uniform permutation of 0..n-1."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    return [rng.permutation(n).tolist() for _ in range(n)]
