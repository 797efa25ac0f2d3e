"""
Input decoding shared by the windows.

Everything here works on plain key names and screen deltas (y down), so the
windowing layer only has to translate its own events into this vocabulary.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

MIN_SWIPE_DISTANCE = 30

KEY_DIRECTIONS: Dict[str, str] = {
    "ArrowUp": "up",
    "ArrowDown": "down",
    "ArrowLeft": "left",
    "ArrowRight": "right",
}

# Screen angles, y grows downwards
DIRECTION_ANGLES: Dict[str, float] = {
    "right": 0.0,
    "down": math.pi / 2,
    "left": math.pi,
    "up": -math.pi / 2,
}


def direction_for_key(key: str) -> Optional[str]:
    return KEY_DIRECTIONS.get(key)


def heading_for_key(key: str) -> Optional[float]:
    """Cardinal heading for an arrow key, None for anything else"""
    direction = KEY_DIRECTIONS.get(key)
    return None if direction is None else DIRECTION_ANGLES[direction]


def decode_swipe(dx: float, dy: float, min_distance: float = MIN_SWIPE_DISTANCE) -> Optional[str]:
    """Map a drag vector to a direction; the dominant axis wins"""
    if abs(dx) > abs(dy):
        if abs(dx) > min_distance:
            return "right" if dx > 0 else "left"
        return None
    if abs(dy) > min_distance:
        return "down" if dy > 0 else "up"
    return None


class SwipeTracker:
    """Start/end bookkeeping for one touch or mouse drag at a time"""

    def __init__(self, min_distance: float = MIN_SWIPE_DISTANCE):
        self.min_distance = min_distance
        self.is_swiping = False
        self._start: Tuple[float, float] = (0.0, 0.0)

    def start(self, x: float, y: float) -> None:
        self._start = (x, y)
        self.is_swiping = True

    def finish(self, x: float, y: float) -> Optional[str]:
        """End the drag and return its direction, if it was long enough"""
        if not self.is_swiping:
            return None
        self.is_swiping = False
        sx, sy = self._start
        return decode_swipe(x - sx, y - sy, self.min_distance)


class LatchedKeys:
    """Held-key state; only release() and release_all() clear it"""

    def __init__(self, *names: str):
        self.state: Dict[str, bool] = {n: False for n in names}

    def press(self, name: str) -> None:
        if name in self.state:
            self.state[name] = True

    def release(self, name: str) -> None:
        if name in self.state:
            self.state[name] = False

    def release_all(self) -> None:
        for name in self.state:
            self.state[name] = False

    def __getitem__(self, name: str) -> bool:
        return self.state[name]
