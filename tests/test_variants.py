import gymnasium as gym
import pytest

from game.garden import VARIANT_CONFIGS, make_variant, ButterflyEnv, LaneDodgeEnv


def test_make_variant_with_overrides():
    env = make_variant("lane_dodge", follow_factor=0.1)
    assert isinstance(env, LaneDodgeEnv)
    assert env.follow_factor == 0.1


def test_obstacle_variant_defaults():
    env = make_variant("butterfly_obstacles")
    assert isinstance(env, ButterflyEnv)
    assert env.num_obstacles == 10
    assert env.grid_size == 16


def test_unknown_variant():
    with pytest.raises(ValueError):
        make_variant("tetris")


@pytest.mark.parametrize("name", list(VARIANT_CONFIGS))
def test_registered_with_gymnasium(name):
    env = gym.make(VARIANT_CONFIGS[name]["id"])
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    assert "score" in info
    env.close()
