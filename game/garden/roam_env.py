"""
FreeRoamEnv - continuous wrap-around flower collector
-----------------------------------------------------
- The butterfly flies along a heading set directly by input
- Leaving one edge re-enters at the opposite edge
- Every flower eaten is replaced at once and makes the butterfly faster
- Bees appear at random and never leave

Quick test:
    python -m game.garden.play free_roam
"""

from __future__ import annotations

import math
import logging
from typing import List, Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .entities import Roamer, Flower, Hazard, HazardKind
from .spawner import ROAM_HAZARD_KIND, random_point, chance
from .utils import clamp, wrap, within, nearest

logger = logging.getLogger(__name__)


class FreeRoamEnv(gym.Env):
    """Free-roam collector game on a torus"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}
    scene = "free_roam"

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        base_speed: float = 2.0,
        speed_increment: float = 0.05,
        collect_radius: float = 20.0,
        num_flowers: int = 5,
        num_hazards: int = 3,
        hazard_spawn_probability: float = 0.005,
        hazard_kind: HazardKind = ROAM_HAZARD_KIND,
        spawn_margin: float = 20.0,
        k_flowers: int = 3,
        k_hazards: int = 5,
        max_steps: int = 3600,
        flower_reward: float = 1.0,
        crash_penalty: float = 5.0,
    ):
        super().__init__()

        if not 0.0 <= hazard_spawn_probability <= 1.0:
            raise ValueError(
                f"hazard_spawn_probability must be in [0, 1], got {hazard_spawn_probability}"
            )
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas must have positive size, got {width}x{height}")

        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.max_steps = max_steps

        # Gameplay config
        self.base_speed = base_speed
        self.speed_increment = speed_increment
        self.collect_radius = collect_radius
        self.num_flowers = num_flowers
        self.num_hazards = num_hazards
        self.hazard_spawn_probability = hazard_spawn_probability
        self.hazard_kind = hazard_kind
        self.spawn_margin = spawn_margin

        # Reward / observation config
        self.k_flowers = k_flowers
        self.k_hazards = k_hazards
        self.flower_reward = flower_reward
        self.crash_penalty = crash_penalty

        # Heading in radians
        self.action_space = spaces.Box(
            low=-math.pi, high=math.pi, shape=(1,), dtype=np.float32
        )

        # Roamer: pos(2) heading(2) speed(1); flowers/hazards: rel pos(2)
        obs_dim = 2 + 2 + 1 + (self.k_flowers * 2) + (self.k_hazards * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        # World state
        self.roamer: Roamer = None  # type: ignore
        self.flowers: List[Flower] = []
        self.hazards: List[Hazard] = []
        self.score = 0
        self.game_over = False

        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self.roamer = Roamer(x=self.width / 2, y=self.height / 2,
                             angle=0.0, speed=self.base_speed)
        self.flowers = [self._new_flower() for _ in range(self.num_flowers)]
        self.hazards = [self._new_hazard() for _ in range(self.num_hazards)]
        self.score = 0
        self.game_over = False

        logger.debug("Free roam reset: %d flowers, %d hazards",
                     len(self.flowers), len(self.hazards))

        return self._get_obs(), self._get_info()

    def step(self, action):
        self.set_heading(float(np.asarray(action).reshape(-1)[0]))

        score_before = self.score
        self.tick()

        reward = self.flower_reward * (self.score - score_before)
        if self.game_over:
            reward -= self.crash_penalty

        terminated = self.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Input
    # ----------------------------

    def set_heading(self, angle: float) -> None:
        """Point the butterfly along angle (radians), no turn-rate limit"""
        self.roamer.angle = angle

    def steer_towards(self, x: float, y: float) -> None:
        """Head straight at a canvas position, e.g. the pointer"""
        dx = x - self.roamer.x
        dy = y - self.roamer.y
        if dx == 0 and dy == 0:
            return
        self.roamer.angle = math.atan2(dy, dx)

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def tick(self) -> None:
        """Advance one frame"""
        if self.game_over:
            return

        self._update_roamer()
        self._collect_flowers()
        self._handle_hazards()
        if self.game_over:
            return

        if chance(self.np_random, self.hazard_spawn_probability):
            self.hazards.append(self._new_hazard())

    def _update_roamer(self):
        r = self.roamer
        r.x = wrap(r.x + math.cos(r.angle) * r.speed, self.width)
        r.y = wrap(r.y + math.sin(r.angle) * r.speed, self.height)

    def _collect_flowers(self):
        r = self.roamer
        kept = []
        eaten = 0
        for f in self.flowers:
            if within(r.x, r.y, f.x, f.y, self.collect_radius):
                eaten += 1
            else:
                kept.append(f)

        # Replacements are not checked until the next frame
        for _ in range(eaten):
            self.score += 1
            r.speed += self.speed_increment
            kept.append(self._new_flower())
        self.flowers = kept

    def _handle_hazards(self):
        r = self.roamer
        if any(within(r.x, r.y, h.x, h.y, self.collect_radius) for h in self.hazards):
            self.game_over = True
            logger.debug("Free roam hit a hazard, score %d", self.score)

    def _new_flower(self) -> Flower:
        return Flower(*random_point(self.np_random, self.width, self.height, self.spawn_margin))

    def _new_hazard(self) -> Hazard:
        x, y = random_point(self.np_random, self.width, self.height, self.spawn_margin)
        return Hazard(x=x, y=y, kind=self.hazard_kind)

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        r = self.roamer
        obs_parts = [
            (r.x / self.width) * 2 - 1,
            (r.y / self.height) * 2 - 1,
            math.cos(r.angle),
            math.sin(r.angle),
            clamp(r.speed / max(1e-6, self.base_speed * 5), 0, 1) * 2 - 1,
        ]

        for items, k in ((self.flowers, self.k_flowers), (self.hazards, self.k_hazards)):
            closest = nearest(items, r.x, r.y, k)
            for i in range(k):
                if i < len(closest):
                    e = closest[i]
                    obs_parts += [
                        clamp((e.x - r.x) / self.width, -1, 1),
                        clamp((e.y - r.y) / self.height, -1, 1),
                    ]
                else:
                    obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "game_over": self.game_over,
            "speed": self.roamer.speed,
            "num_flowers": len(self.flowers),
            "num_hazards": len(self.hazards),
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
