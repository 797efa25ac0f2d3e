import math

import numpy as np
import pytest

from game.garden import FreeRoamEnv
from game.garden.entities import Flower, Hazard
from game.garden.spawner import ROAM_HAZARD_KIND


@pytest.fixture
def env():
    env = FreeRoamEnv(num_hazards=0, hazard_spawn_probability=0.0)
    env.reset(seed=0)
    # Park the flowers out of the way
    env.flowers = [Flower(50.0, 50.0 + 10 * i) for i in range(env.num_flowers)]
    return env


def test_moves_along_heading(env):
    r = env.roamer
    x0, y0 = r.x, r.y
    env.set_heading(math.pi / 2)
    env.tick()
    assert r.x == pytest.approx(x0)
    assert r.y == pytest.approx(y0 + env.base_speed)


def test_wraps_at_right_edge(env):
    env.roamer.x = env.width - 1.0
    env.set_heading(0.0)
    env.tick()
    assert env.roamer.x == pytest.approx(1.0)


def test_wraps_at_top_edge(env):
    env.roamer.y = 0.5
    env.set_heading(-math.pi / 2)
    env.tick()
    assert env.roamer.y == pytest.approx(env.height - 1.5)


def test_position_always_on_canvas(env):
    rng = np.random.default_rng(9)
    env.collect_radius = 0.0  # nothing gets eaten
    for angle in rng.uniform(-math.pi, math.pi, size=1000):
        env.set_heading(float(angle))
        env.roamer.speed = 37.0
        env.tick()
        assert 0 <= env.roamer.x < env.width
        assert 0 <= env.roamer.y < env.height


def test_flower_eaten_and_replaced(env):
    r = env.roamer
    env.flowers[0] = Flower(r.x + r.speed, r.y)
    env.tick()
    assert env.score == 1
    assert r.speed == pytest.approx(env.base_speed + env.speed_increment)
    assert len(env.flowers) == env.num_flowers


def test_speed_compounds_per_flower(env):
    r = env.roamer
    v0 = r.speed
    parked = [Flower(50.0, 50.0 + 10 * i) for i in range(env.num_flowers - 1)]
    for m in range(1, 8):
        env.flowers = [Flower(r.x + r.speed, r.y)] + parked
        env.tick()
        assert env.score == m
        assert r.speed == pytest.approx(v0 + m * 0.05)
        assert len(env.flowers) == env.num_flowers


def test_collect_radius_is_strict(env):
    r = env.roamer
    env.flowers[0] = Flower(r.x + r.speed + env.collect_radius, r.y)
    env.tick()
    assert env.score == 0


def test_hazard_ends_game_without_removal(env):
    r = env.roamer
    env.hazards = [Hazard(r.x + r.speed + 5, r.y, ROAM_HAZARD_KIND)]
    env.tick()
    assert env.game_over
    assert len(env.hazards) == 1

    x = r.x
    env.tick()
    assert r.x == x
    assert env.score == 0


def test_hazards_only_grow():
    env = FreeRoamEnv(num_hazards=0, hazard_spawn_probability=1.0)
    env.reset(seed=4)
    env.tick()
    assert len(env.hazards) == 1


def test_steer_towards_pointer(env):
    r = env.roamer
    env.steer_towards(r.x, r.y + 100)
    assert r.angle == pytest.approx(math.pi / 2)
    # Pointer on the butterfly keeps the old heading
    env.steer_towards(r.x, r.y)
    assert r.angle == pytest.approx(math.pi / 2)


def test_reset_populates_world():
    env = FreeRoamEnv(num_flowers=5, num_hazards=3)
    env.reset(seed=1)
    assert len(env.flowers) == 5
    assert len(env.hazards) == 3
    assert env.roamer.speed == env.base_speed
    assert env.score == 0 and not env.game_over


def test_step_api(env):
    obs, reward, terminated, truncated, info = env.step(np.array([0.0], dtype=np.float32))
    assert obs.shape == env.observation_space.shape
    assert env.observation_space.contains(obs)
    assert not terminated and not truncated
    assert info["num_flowers"] == env.num_flowers
    assert reward == 0.0


def test_step_flower_reward(env):
    r = env.roamer
    env.flowers[0] = Flower(r.x + r.speed, r.y)
    _, reward, _, _, info = env.step(np.array([0.0], dtype=np.float32))
    assert reward == pytest.approx(env.flower_reward)
    assert info["score"] == 1


def test_rgb_array_render():
    env = FreeRoamEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (600, 800, 3)
