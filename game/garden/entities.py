"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Butterfly:
    """Turn-based avatar, one grid cell"""
    x: int
    y: int


@dataclass
class Flower:
    """Collectible flower (grid cell or pixel position)"""
    x: float
    y: float


@dataclass
class Bird:
    """Grid hazard that pursues the butterfly"""
    x: int
    y: int


@dataclass
class Obstacle:
    """Blocking grid cell (tree or rock)"""
    x: int
    y: int
    kind: str = "tree"


@dataclass(frozen=True)
class HazardKind:
    """Row of a hazard type table"""
    name: str
    glyph: str
    width: float
    follows: bool = False  # nudges toward the player each tick
    weight: float = 1.0  # relative spawn weight


@dataclass
class Hazard:
    """Continuous-variant hazard"""
    x: float
    y: float
    kind: HazardKind

    @property
    def width(self) -> float:
        return self.kind.width

    @property
    def follows(self) -> bool:
        return self.kind.follows


@dataclass
class Player:
    """Lane-dodge avatar, only moves horizontally"""
    x: float
    y: float
    width: float = 40.0


@dataclass
class Roamer:
    """Free-roam avatar"""
    x: float
    y: float
    angle: float = 0.0  # radians, 0 points right, y grows downwards
    speed: float = 2.0
