"""
Random seed utilities for deterministic behavior.
"""

import random
from typing import Optional

import numpy as np


def set_deterministic_seeds(seed: int) -> None:
    """
    Set all global random seeds for deterministic behavior.

    Args:
        seed: Random seed to use for all random number generators
    """
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Independent generator; seeded when ``seed`` is given."""
    return random.Random(seed)
