"""
LaneDodgeEnv - continuous falling-hazard dodge
----------------------------------------------
- The player slides along the bottom lane while a direction is latched
- Hazards fall at one shared speed that ramps up every frame
- Some hazard kinds drift toward the player as they fall
- Score counts frames survived

Quick test:
    python -m game.garden.play lane_dodge
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .controls import LatchedKeys
from .entities import Player, Hazard, HazardKind
from .spawner import LANE_HAZARD_KINDS, pick_kind, chance
from .utils import clamp, distance, nearest

logger = logging.getLogger(__name__)


class LaneDodgeEnv(gym.Env):
    """Side-scrolling dodge game"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}
    scene = "lane_dodge"

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 400,
        height: int = 600,
        player_width: float = 40.0,
        player_speed: float = 5.0,
        base_speed: float = 2.0,
        speed_increment: float = 0.001,
        follow_factor: float = 0.02,
        spawn_probability: float = 0.02,
        despawn_margin: float = 50.0,
        score_divisor: int = 10,
        hazard_kinds: Sequence[HazardKind] = LANE_HAZARD_KINDS,
        k_hazards: int = 5,
        max_steps: int = 3600,
        survival_reward: float = 0.01,
        crash_penalty: float = 1.0,
    ):
        super().__init__()

        if not 0.0 <= spawn_probability <= 1.0:
            raise ValueError(f"spawn_probability must be in [0, 1], got {spawn_probability}")
        if score_divisor < 1:
            raise ValueError(f"score_divisor must be positive, got {score_divisor}")
        if not hazard_kinds:
            raise ValueError("hazard_kinds must not be empty")

        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.max_steps = max_steps

        # Gameplay config
        self.player_width = player_width
        self.player_speed = player_speed
        self.base_speed = base_speed
        self.speed_increment = speed_increment
        self.follow_factor = follow_factor
        self.spawn_probability = spawn_probability
        self.despawn_margin = despawn_margin
        self.score_divisor = score_divisor
        self.hazard_kinds = tuple(hazard_kinds)

        # Reward / observation config
        self.k_hazards = k_hazards
        self.survival_reward = survival_reward
        self.crash_penalty = crash_penalty

        # 0 stay, 1 left, 2 right
        self.action_space = spaces.Discrete(3)

        # Player: x(1) speed(1); each hazard: rel pos(2) follows(1)
        obs_dim = 2 + self.k_hazards * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        # Latched input; only key-up or restart clears these
        self.keys = LatchedKeys("left", "right")

        # World state
        self.player: Player = None  # type: ignore
        self.hazards: List[Hazard] = []
        self.score = 0
        self.game_over = False
        self._ramp_ticks = 0

        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self._step_count = 0
        self.restart()
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        self.keys.release_all()
        if action == 1:
            self.keys.press("left")
        elif action == 2:
            self.keys.press("right")

        self.tick()

        reward = -self.crash_penalty if self.game_over else self.survival_reward

        terminated = self.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Core mechanics
    # ----------------------------

    @property
    def speed(self) -> float:
        """Shared fall speed, base_speed + speed_increment per tick survived"""
        return self.base_speed + self.speed_increment * self._ramp_ticks

    @property
    def display_score(self) -> int:
        return self.score // self.score_divisor

    def restart(self) -> None:
        """Start a fresh run: centre the player, clear hazards, reset score and ramp"""
        self.player = Player(
            x=self.width / 2,
            y=self.height - self.player_width * 1.5,
            width=self.player_width,
        )
        self.hazards = []
        self.score = 0
        self._ramp_ticks = 0
        self.game_over = False
        self.keys.release_all()
        logger.debug("Lane dodge restarted")

    def tick(self) -> None:
        """Advance one frame"""
        if self.game_over:
            return

        self._update_player()
        self._update_hazards()
        self._spawn_logic()
        self._handle_collisions()

        # Counts the crash frame too
        self.score += 1

    def _update_player(self):
        vx = 0.0
        if self.keys["left"]:
            vx -= self.player_speed
        if self.keys["right"]:
            vx += self.player_speed

        half = self.player.width / 2
        self.player.x = clamp(self.player.x + vx, half, self.width - half)

    def _update_hazards(self):
        fall = self.speed
        px = self.player.x

        for h in self.hazards:
            h.y += fall
            if h.follows:
                h.x += (px - h.x) * self.follow_factor

        self._ramp_ticks += 1

        # Off the bottom -> gone for good
        limit = self.height + self.despawn_margin
        self.hazards = [h for h in self.hazards if h.y <= limit]

    def _spawn_logic(self):
        if not chance(self.np_random, self.spawn_probability):
            return
        kind = pick_kind(self.np_random, self.hazard_kinds)
        half = kind.width / 2
        x = float(self.np_random.uniform(half, self.width - half))
        self.hazards.append(Hazard(x=x, y=-half, kind=kind))

    def _handle_collisions(self):
        p = self.player
        for h in self.hazards:
            if distance(p.x, p.y, h.x, h.y) < (p.width + h.width) / 2:
                self.game_over = True
                logger.debug("Lane dodge crash into %s, score %d", h.kind.name, self.score)
                break

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        obs_parts = [
            (self.player.x / self.width) * 2 - 1,
            clamp(self.speed / max(1e-6, self.base_speed * 10), 0, 1) * 2 - 1,
        ]

        for h in nearest(self.hazards, self.player.x, self.player.y, self.k_hazards):
            obs_parts += [
                clamp((h.x - self.player.x) / self.width, -1, 1),
                clamp((h.y - self.player.y) / self.height, -1, 1),
                1.0 if h.follows else 0.0,
            ]
        obs_parts += [0.0] * (self.observation_space.shape[0] - len(obs_parts))

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "display_score": self.display_score,
            "game_over": self.game_over,
            "speed": self.speed,
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
