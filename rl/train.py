"""
Training script for the garden games using Stable-Baselines3
Supports PPO, DQN, and SAC on every variant with metrics tracking.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN, SAC
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.garden import VARIANT_CONFIGS, make_variant
from rl.configs.garden_config import (
    ENV_CONFIGS, ALGO_CONFIGS, TRAINING_CONFIG, get_experiment_matrix
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback
from rl.wrappers import wrap_for_algo

ALGORITHMS = {
    "ppo": PPO,
    "dqn": DQN,
    "sac": SAC,
}


def make_env(variant: str, algo: str, render_mode: Optional[str] = None,
             seed: Optional[int] = None):
    """Factory function to create the environment"""
    def _init():
        env = make_variant(variant, render_mode=render_mode, **ENV_CONFIGS.get(variant, {}))
        env = wrap_for_algo(env, algo)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train_agent(
    variant: str,
    algo: str = "ppo",
    total_timesteps: Optional[int] = None,
    n_envs: int = 4,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
):
    """Train one algorithm on one garden variant"""

    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    if variant not in VARIANT_CONFIGS:
        raise ValueError(f"Unknown variant: {variant}")

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    run_name = f"{algo}_{variant}"
    save_dir = save_dir or os.path.join(TRAINING_CONFIG["model_dir"], run_name)
    log_dir = log_dir or os.path.join(TRAINING_CONFIG["log_dir"], run_name)
    tensorboard_log = tensorboard_log or os.path.join(TRAINING_CONFIG["tensorboard_log"], run_name)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    # Only PPO gains from parallel rollouts here
    if algo != "ppo":
        n_envs = 1

    print(f"\n{'='*60}")
    print(f"Training {algo.upper()} on {variant} for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} environment(s)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(variant, algo, seed=i) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(variant, algo, seed=100)])

    if algo == "ppo":
        # Normalize observations and rewards
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix=run_name,
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 5000) // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name=algo,
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = ALGORITHMS[algo](
        env=env,
        tensorboard_log=tensorboard_log,
        **ALGO_CONFIGS[algo]
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, f"{run_name}_final")
    model.save(final_path)
    if algo == "ppo":
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"{algo.upper()} training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.2f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on a garden game")
    parser.add_argument(
        "--variant",
        type=str,
        default="butterfly_obstacles",
        choices=list(VARIANT_CONFIGS),
        help="Game to train on (default: butterfly_obstacles)",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=list(ALGORITHMS),
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Run the whole experiment matrix sequentially",
    )

    args = parser.parse_args()

    if args.all:
        experiments = get_experiment_matrix()
        print(f"Running {len(experiments)} experiments sequentially...")
        for exp in experiments:
            train_agent(
                exp["variant"],
                exp["algorithm"],
                total_timesteps=args.timesteps or exp["timesteps"],
                n_envs=args.n_envs,
            )
        return

    train_agent(args.variant, args.algo, total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
