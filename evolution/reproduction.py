"""
Reproduction rule: energy-proportional, asexual, clone + small mutation.
"""

from __future__ import annotations
import random
from typing import Optional

import numpy as np

from neural.network import Network


def reproduction_probability(energy: float, max_energy: float) -> float:
    """energy / max_energy, clamped to [0, 1]. A cell at max energy always reproduces."""
    if max_energy <= 0:
        return 0.0
    return max(0.0, min(1.0, energy / max_energy))


def should_reproduce(energy: float, max_energy: float, rng: random.Random) -> bool:
    return rng.random() < reproduction_probability(energy, max_energy)


def clone_for_spawn(
    parent: Network,
    strength: float,
    rng: Optional[np.random.Generator] = None,
) -> Network:
    child = parent.clone()
    child.mutate(strength, rng=rng)
    return child

# Age-weighted throttle, kept here as a possible future policy (not applied):
#   reproduce only if rng.uniform(0, 100) < (age / max_age) * 20
