"""
Plotting script for garden training runs.
Generates learning curves and comparison plots from MetricsCallback CSVs.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Optional


def load_metrics(log_dir: str, algo: str, variant: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm on one variant."""
    csv_path = os.path.join(log_dir, f"{algo}_{variant}", f"{algo}_metrics.csv")
    if os.path.exists(csv_path):
        return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(
    df: pd.DataFrame,
    algo: str,
    variant: str,
    output_dir: str,
    window: int = 50,
):
    """Plot learning curves for a single run."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} on {variant}", fontsize=16, fontweight="bold")

    timesteps = df["timestep"].values

    # Episode reward
    ax = axes[0, 0]
    smoothed = smooth(df["reward"].values, window)
    ax.plot(timesteps[:len(smoothed)], smoothed, linewidth=2)
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Episode Reward")
    ax.set_title("Episode Reward vs Timesteps")
    ax.grid(True, alpha=0.3)

    # Score
    ax = axes[0, 1]
    smoothed = smooth(df["score"].values, window)
    ax.plot(timesteps[:len(smoothed)], smoothed, linewidth=2, color="purple")
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Score")
    ax.set_title("Score vs Timesteps")
    ax.grid(True, alpha=0.3)

    # Episode length
    ax = axes[1, 0]
    smoothed = smooth(df["length"].values, window)
    ax.plot(timesteps[:len(smoothed)], smoothed, linewidth=2, color="orange")
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Episode Length")
    ax.set_title("Episode Length vs Timesteps")
    ax.grid(True, alpha=0.3)

    # Survival and win rate
    ax = axes[1, 1]
    for column, color in (("survival_rate", "green"), ("won", "gold")):
        if column in df.columns:
            smoothed = smooth(df[column].values, window)
            ax.plot(timesteps[:len(smoothed)], smoothed, linewidth=2, color=color, label=column)
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Rate")
    ax.set_title("Survival / Win Rate vs Timesteps")
    ax.set_ylim(0, 1.1)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_{variant}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    variant: str,
    output_dir: str,
    window: int = 50,
):
    """Plot score curves of all algorithms on one variant."""
    fig, ax = plt.subplots(figsize=(10, 6))
    colors = {"dqn": "#2ecc71", "ppo": "#3498db", "sac": "#e74c3c"}

    for algo, df in data.items():
        if df is not None and len(df) > 0:
            smoothed = smooth(df["score"].values, window)
            ax.plot(df["timestep"].values[:len(smoothed)], smoothed,
                    linewidth=2, label=algo.upper(), color=colors.get(algo))
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Score")
    ax.set_title(f"Score Comparison on {variant}")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{variant}_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def generate_summary_report(data: Dict[str, pd.DataFrame], variant: str, output_dir: str):
    """Generate a text summary report."""
    report_lines = [
        "=" * 60,
        f"GARDEN TRAINING SUMMARY: {variant}",
        "=" * 60,
    ]

    for algo, df in data.items():
        if df is not None and len(df) > 0:
            final = df.tail(100)
            report_lines.append(f"\n{algo.upper()} Results:")
            report_lines.append("-" * 40)
            report_lines.append(f"  Total Episodes: {len(df)}")
            report_lines.append(f"  Total Timesteps: {df['timestep'].max():,}")
            report_lines.append(f"  Mean Reward: {df['reward'].mean():.2f} ± {df['reward'].std():.2f}")
            report_lines.append(f"  Mean Score (last 100): {final['score'].mean():.2f}")
            report_lines.append(f"  Survival Rate (last 100): {final['survival_rate'].mean():.2%}")
            report_lines.append(f"  Win Rate (last 100): {final['won'].mean():.2%}")

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, f"{variant}_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot garden training results")
    parser.add_argument(
        "--variant",
        type=str,
        default="butterfly_obstacles",
        help="Variant to plot (default: butterfly_obstacles)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="./logs",
        help="Directory containing log files",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./plots",
        help="Directory to save plots",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=50,
        help="Smoothing window size (default: 50)",
    )
    parser.add_argument(
        "--algos",
        nargs="+",
        default=["dqn", "ppo", "sac"],
        help="Algorithms to plot",
    )

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo, args.variant)
        if df is not None:
            print(f"  Loaded {algo}: {len(df)} episodes")
        else:
            print(f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.variant, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.variant, args.output_dir, args.window)

    generate_summary_report(data, args.variant, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
