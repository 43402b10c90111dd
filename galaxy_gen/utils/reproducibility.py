"""Reproducibility utilities for repeatable galaxies."""

import random
import numpy as np
from typing import Optional


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random source for ``generate``; unseeded when ``seed`` is None."""
    return np.random.default_rng(seed)


def set_all_seeds(seed: int):
    """Seed the global Python and NumPy generators.
    
    Args:
        seed: Random seed
    """
    random.seed(seed)
    np.random.seed(seed)
