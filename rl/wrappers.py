"""
Action-space wrappers so every algorithm can train on every garden game
"""

import math

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class DiscreteToBoxWrapper(gym.ActionWrapper):
    """
    Wrapper to convert a Discrete action space to Box for SAC.
    SAC outputs a continuous value in [-1, 1] which is binned into n actions.
    """

    def __init__(self, env):
        super().__init__(env)
        self.orig_action_space = env.action_space
        self._n = int(env.action_space.n)
        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(1,), dtype=np.float32)

    def action(self, action):
        a = float(np.asarray(action).reshape(-1)[0])
        scaled = (a + 1) / 2  # [0, 1]
        return int(np.clip(scaled * self._n, 0, self._n - 1))


class HeadingToDiscreteWrapper(gym.ActionWrapper):
    """
    Wrapper to convert the free-roam heading Box to Discrete for DQN.
    Action i flies at angle 2*pi*i/n.
    """

    def __init__(self, env, n_headings: int = 8):
        super().__init__(env)
        self.orig_action_space = env.action_space
        self.n_headings = n_headings
        self.action_space = spaces.Discrete(n_headings)

        # Precompute headings, wrapped into [-pi, pi)
        self._headings = []
        for i in range(n_headings):
            ang = (math.pi * 2) * (i / n_headings)
            if ang >= math.pi:
                ang -= math.pi * 2
            self._headings.append(ang)

    def action(self, action):
        return np.array([self._headings[int(action) % self.n_headings]], dtype=np.float32)


def wrap_for_algo(env, algo: str):
    """Adapt env's action space to what algo can drive"""
    discrete = isinstance(env.action_space, spaces.Discrete)
    if algo == "sac" and discrete:
        return DiscreteToBoxWrapper(env)
    if algo == "dqn" and not discrete:
        return HeadingToDiscreteWrapper(env)
    return env
