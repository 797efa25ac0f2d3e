"""
Random placement of entities.

All helpers take the caller's numpy ``Generator`` (the environment's
``np_random``) so spawn sequences replay exactly for a given seed.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .entities import HazardKind


# Lane-dodge hazards. Fall speed is the shared ramp, not per kind.
LANE_HAZARD_KINDS: Tuple[HazardKind, ...] = (
    HazardKind("rock", "🪨", width=40.0, follows=False, weight=3.0),
    HazardKind("bird", "🐦", width=36.0, follows=True, weight=2.0),
    HazardKind("bee", "🐝", width=28.0, follows=True, weight=1.0),
)

# Free-roam hazards never move.
ROAM_HAZARD_KIND = HazardKind("bee", "🐝", width=30.0)


def random_cell(rng: np.random.Generator, grid_size: int) -> Tuple[int, int]:
    """Uniform random cell in [0, grid_size) on both axes"""
    x, y = rng.integers(0, grid_size, size=2)
    return int(x), int(y)


def random_point(rng: np.random.Generator, width: float, height: float,
                 margin: float = 0.0) -> Tuple[float, float]:
    """Uniform random point, keeping margin away from every edge"""
    x = rng.uniform(margin, width - margin)
    y = rng.uniform(margin, height - margin)
    return float(x), float(y)


def pick_kind(rng: np.random.Generator, kinds: Sequence[HazardKind]) -> HazardKind:
    """Draw one kind from a weighted table"""
    weights = np.array([k.weight for k in kinds], dtype=np.float64)
    idx = rng.choice(len(kinds), p=weights / weights.sum())
    return kinds[int(idx)]


def chance(rng: np.random.Generator, probability: float) -> bool:
    """Independent Bernoulli trial"""
    return bool(rng.random() < probability)
