import math

import numpy as np
import pytest
from gymnasium import spaces

from game.garden import FreeRoamEnv, LaneDodgeEnv
from rl.wrappers import DiscreteToBoxWrapper, HeadingToDiscreteWrapper, wrap_for_algo


def test_box_bins_to_discrete():
    env = DiscreteToBoxWrapper(LaneDodgeEnv())
    assert isinstance(env.action_space, spaces.Box)
    assert env.action(np.array([-1.0])) == 0
    assert env.action(np.array([0.0])) == 1
    assert env.action(np.array([1.0])) == 2


def test_discrete_headings():
    env = HeadingToDiscreteWrapper(FreeRoamEnv(), n_headings=8)
    assert env.action_space.n == 8
    assert env.action(2)[0] == pytest.approx(math.pi / 2)
    assert env.action(4)[0] == pytest.approx(-math.pi)
    assert env.action(6)[0] == pytest.approx(-math.pi / 2)


def test_wrap_for_algo():
    assert isinstance(wrap_for_algo(LaneDodgeEnv(), "sac"), DiscreteToBoxWrapper)
    assert isinstance(wrap_for_algo(FreeRoamEnv(), "dqn"), HeadingToDiscreteWrapper)
    env = LaneDodgeEnv()
    assert wrap_for_algo(env, "ppo") is env
