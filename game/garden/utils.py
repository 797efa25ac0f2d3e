"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def sign(x: float) -> int:
    """Unit step toward zero-crossing: -1, 0 or 1"""
    return (x > 0) - (x < 0)


def wrap(x: float, size: float) -> float:
    """Wrap a coordinate into [0, size)"""
    x = x % size
    # -tiny % size can round up to size itself
    return 0.0 if x >= size else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def within(x1: float, y1: float, x2: float, y2: float, radius: float) -> bool:
    """Check if two points are strictly closer than radius"""
    return distance(x1, y1, x2, y2) < radius


def same_cell(a, b) -> bool:
    """Exact grid coordinate equality for any two positioned entities"""
    return a.x == b.x and a.y == b.y


def nearest(items, x: float, y: float, k: int):
    """Return the k items closest to (x, y)"""
    return sorted(items, key=lambda e: (e.x - x) ** 2 + (e.y - y) ** 2)[:k]
