"""
Training configuration for the garden games
Per-variant environment overrides, algorithm hyperparameters and the experiment matrix
"""

# Environment overrides on top of game.garden.variants.VARIANT_CONFIGS
ENV_CONFIGS = {
    "butterfly": {
        "max_steps": 300,
        "flower_reward": 1.0,
        "win_reward": 5.0,
        "caught_penalty": 5.0,
        "blocked_penalty": 0.0,  # nothing blocks here
    },
    "butterfly_obstacles": {
        "max_steps": 300,
        "flower_reward": 1.0,
        "win_reward": 5.0,
        "caught_penalty": 5.0,
        "blocked_penalty": 0.05,  # discourage walking into trees
    },
    "lane_dodge": {
        "max_steps": 3600,  # 60 seconds at 60 FPS
        "k_hazards": 5,
        "survival_reward": 0.01,
        "crash_penalty": 1.0,
    },
    "free_roam": {
        "max_steps": 3600,
        "k_flowers": 3,
        "k_hazards": 5,
        "flower_reward": 1.0,
        "crash_penalty": 5.0,
    },
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# SAC hyperparameters (free roam natively, discrete games through a Box wrapper)
SAC_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 256,
    "tau": 0.005,
    "gamma": 0.99,
    "train_freq": 1,
    "gradient_steps": 1,
    "ent_coef": "auto",
    "target_entropy": "auto",
    "verbose": 1,
}

ALGO_CONFIGS = {
    "ppo": PPO_CONFIG,
    "dqn": DQN_CONFIG,
    "sac": SAC_CONFIG,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}

TIMESTEP_CONFIGS = {
    "short": 50_000,
    "medium": 500_000,
}

EXPERIMENT_CONFIG = {
    "seeds": [42, 123, 456],
    "n_eval_episodes": 10,
    "variants": ["butterfly", "butterfly_obstacles", "lane_dodge", "free_roam"],
    "algorithms": ["dqn", "ppo", "sac"],
    "timestep_configs": ["short"],
}


def get_experiment_matrix():
    """
    Generate all experiment configurations.
    Returns list of dicts with: name, variant, algorithm, timesteps
    """
    experiments = []

    for variant in EXPERIMENT_CONFIG["variants"]:
        for timestep_name in EXPERIMENT_CONFIG["timestep_configs"]:
            for algo in EXPERIMENT_CONFIG["algorithms"]:
                experiments.append({
                    "name": f"{algo}_{variant}_{timestep_name}",
                    "variant": variant,
                    "algorithm": algo,
                    "timestep_config": timestep_name,
                    "timesteps": TIMESTEP_CONFIGS[timestep_name],
                })

    return experiments


if __name__ == "__main__":
    experiments = get_experiment_matrix()
    print(f"Total experiments: {len(experiments)}")
    print("-" * 70)
    for exp in experiments:
        print(f"  {exp['name']:40} | {exp['timesteps']:>10,} steps")
    print("-" * 70)
