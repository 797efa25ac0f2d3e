"""
The four garden games and their default tunables
"""

from __future__ import annotations

from typing import Any, Dict

from .butterfly_env import ButterflyEnv
from .dodge_env import LaneDodgeEnv
from .roam_env import FreeRoamEnv

VARIANT_CONFIGS: Dict[str, Dict[str, Any]] = {
    # 1: open meadow, no obstacles
    "butterfly": {
        "env": ButterflyEnv,
        "id": "garden/Butterfly-v0",
        "kwargs": {"grid_size": 16, "num_flowers": 8, "num_birds": 2, "num_obstacles": 0},
    },
    # 2: trees and rocks block movement
    "butterfly_obstacles": {
        "env": ButterflyEnv,
        "id": "garden/ButterflyObstacles-v0",
        "kwargs": {"grid_size": 16, "num_flowers": 8, "num_birds": 2, "num_obstacles": 10},
    },
    # 3
    "lane_dodge": {
        "env": LaneDodgeEnv,
        "id": "garden/LaneDodge-v0",
        "kwargs": {"follow_factor": 0.02, "speed_increment": 0.001, "spawn_probability": 0.02},
    },
    # 4
    "free_roam": {
        "env": FreeRoamEnv,
        "id": "garden/FreeRoam-v0",
        "kwargs": {"speed_increment": 0.05, "collect_radius": 20.0,
                   "hazard_spawn_probability": 0.005},
    },
}


def variant_kwargs(name: str, **overrides) -> Dict[str, Any]:
    if name not in VARIANT_CONFIGS:
        raise ValueError(f"Unknown variant: {name!r} (choose from {', '.join(VARIANT_CONFIGS)})")
    return {**VARIANT_CONFIGS[name]["kwargs"], **overrides}


def make_variant(name: str, **overrides):
    """Build a variant's environment with its defaults plus overrides"""
    kwargs = variant_kwargs(name, **overrides)
    return VARIANT_CONFIGS[name]["env"](**kwargs)


def register_variants() -> None:
    """Register every variant with gymnasium under its garden/ id"""
    import gymnasium as gym

    for cfg in VARIANT_CONFIGS.values():
        if cfg["id"] in gym.registry:
            continue
        env_cls = cfg["env"]
        gym.register(
            id=cfg["id"],
            entry_point=f"{env_cls.__module__}:{env_cls.__name__}",
            kwargs=dict(cfg["kwargs"]),
        )
