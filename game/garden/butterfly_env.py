"""
ButterflyEnv - turn-based grid garden
-------------------------------------
- The butterfly moves one cell per directional input
- Flowers are eaten by stepping onto them
- Birds chase the butterfly every second accepted move
- Trees and rocks (obstacle variant) block movement outright
- Gymnasium API with Discrete(4) actions and occupancy-plane observations

Quick test:
    python -m game.garden.play butterfly
"""

from __future__ import annotations

import logging
from typing import List, Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .entities import Butterfly, Flower, Bird, Obstacle
from .spawner import random_cell
from .utils import clamp, sign, same_cell

logger = logging.getLogger(__name__)

# Action index -> direction name
DIRECTIONS = ("up", "down", "left", "right")

STEPS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

OBSTACLE_KINDS = ("tree", "rock")


class ButterflyEnv(gym.Env):
    """Turn-based butterfly game on a square grid"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 10}
    scene = "butterfly"

    def __init__(
        self,
        render_mode: Optional[str] = None,
        grid_size: int = 16,
        cell_size: int = 30,  # 480px canvas at 16 cells
        num_flowers: int = 8,
        num_birds: int = 2,
        num_obstacles: int = 10,
        butterfly_speed: int = 1,
        bird_period: int = 2,  # birds move every 2 turns
        max_steps: int = 500,
        flower_reward: float = 1.0,
        win_reward: float = 5.0,
        caught_penalty: float = 5.0,
        blocked_penalty: float = 0.05,
    ):
        super().__init__()

        if grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        if bird_period < 1:
            raise ValueError(f"bird_period must be positive, got {bird_period}")

        self.render_mode = render_mode

        # Board
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.width = grid_size * cell_size
        self.height = grid_size * cell_size
        self.max_steps = max_steps

        # Gameplay config
        self.num_flowers = num_flowers
        self.num_birds = num_birds
        self.num_obstacles = num_obstacles
        self.butterfly_speed = butterfly_speed
        self.bird_period = bird_period

        # Reward config
        self.flower_reward = flower_reward
        self.win_reward = win_reward
        self.caught_penalty = caught_penalty
        self.blocked_penalty = blocked_penalty

        # 0 up, 1 down, 2 left, 3 right
        self.action_space = spaces.Discrete(len(DIRECTIONS))

        # Planes: butterfly, flowers, birds, obstacles
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(4, grid_size, grid_size), dtype=np.float32
        )

        self._window = None

        # World state
        self.butterfly: Butterfly = None  # type: ignore
        self.flowers: List[Flower] = []
        self.birds: List[Bird] = []
        self.obstacles: List[Obstacle] = []
        self.turn_count = 0
        self.score = 0
        self.game_over = False

        # Step state
        self._step_count = 0
        self.blocked = False

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self.blocked = False

        # Independent random cells; overlaps are not re-rolled
        self.butterfly = Butterfly(*random_cell(self.np_random, self.grid_size))
        self.flowers = [Flower(*random_cell(self.np_random, self.grid_size))
                        for _ in range(self.num_flowers)]
        self.birds = [Bird(*random_cell(self.np_random, self.grid_size))
                      for _ in range(self.num_birds)]
        self.obstacles = [Obstacle(*random_cell(self.np_random, self.grid_size),
                                   kind=OBSTACLE_KINDS[i % 2])
                          for i in range(self.num_obstacles)]

        self.turn_count = 0
        self.score = 0
        self.game_over = False

        logger.debug("Butterfly game reset: butterfly at (%d, %d), %d obstacles",
                     self.butterfly.x, self.butterfly.y, len(self.obstacles))

        return self._get_obs(), self._get_info()

    def step(self, action):
        score_before = self.score
        was_won = self.won

        self.advance(DIRECTIONS[int(action)])

        reward = self.flower_reward * (self.score - score_before)
        if self.blocked:
            reward -= self.blocked_penalty
        if self.won and not was_won:
            reward += self.win_reward
        if self.game_over:
            reward -= self.caught_penalty

        terminated = self.game_over or self.won
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Core mechanics
    # ----------------------------

    @property
    def won(self) -> bool:
        return not self.flowers

    def advance(self, direction: str) -> None:
        """Move the butterfly one cell and resolve the turn"""
        if direction not in STEPS:
            raise ValueError(f"Unknown direction: {direction!r}")

        self.blocked = False
        if self.game_over:
            return

        dx, dy = STEPS[direction]
        hi = self.grid_size - 1
        candidate = Butterfly(
            x=int(clamp(self.butterfly.x + dx * self.butterfly_speed, 0, hi)),
            y=int(clamp(self.butterfly.y + dy * self.butterfly_speed, 0, hi)),
        )

        # Obstacles block the move outright
        if any(same_cell(o, candidate) for o in self.obstacles):
            self.blocked = True
            return

        self.butterfly = candidate
        self.turn_count += 1

        self._eat_flowers()
        if self.turn_count % self.bird_period == 0:
            self._move_birds()
        self._check_caught()

    def _eat_flowers(self):
        remaining = []
        for f in self.flowers:
            if same_cell(f, self.butterfly):
                self.score += 1
            else:
                remaining.append(f)
        self.flowers = remaining

    def _move_birds(self):
        hi = self.grid_size - 1
        bx, by = self.butterfly.x, self.butterfly.y
        # One cell per axis toward the butterfly
        self.birds = [
            Bird(x=int(clamp(b.x + sign(bx - b.x), 0, hi)),
                 y=int(clamp(b.y + sign(by - b.y), 0, hi)))
            for b in self.birds
        ]

    def _check_caught(self):
        for b in self.birds:
            if same_cell(b, self.butterfly):
                self.game_over = True
                logger.debug("Butterfly caught at (%d, %d), score %d",
                             b.x, b.y, self.score)
                break

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        obs = np.zeros(self.observation_space.shape, dtype=np.float32)
        obs[0, self.butterfly.y, self.butterfly.x] = 1.0
        for plane, items in ((1, self.flowers), (2, self.birds), (3, self.obstacles)):
            for e in items:
                obs[plane, int(e.y), int(e.x)] = 1.0
        return obs

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "game_over": self.game_over,
            "won": self.won,
            "blocked": self.blocked,
            "turn": self.turn_count,
            "num_flowers": len(self.flowers),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            from .render import rasterize
            return rasterize(self)

        if self._window is None:
            from .window import GardenWindow
            self._window = GardenWindow(self)
        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
