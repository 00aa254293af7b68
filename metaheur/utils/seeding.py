"""
Seed derivation for stochastic components.

Every stochastic component owns its own generator. Components built from one
master seed get independent child seeds from numpy's SeedSequence, so runs
are reproducible without sharing random state.
"""

from typing import List, Optional

import numpy as np


def spawn_seeds(seed: Optional[int], count: int) -> List[Optional[int]]:
    """
    Derive ``count`` independent integer seeds from ``seed``.

    Returns a list of None when ``seed`` is None (fresh OS entropy per component).
    """
    if seed is None:
        return [None] * count
    children = np.random.SeedSequence(seed).spawn(count)
    return [int(child.generate_state(1)[0]) for child in children]
