import argparse
import os

import matplotlib.pyplot as plt
from stable_baselines3.common.env_checker import check_env

from constants import DEFAULT_REWARDS, load_reward_config
from env import VacuumEnv, WrappedVacuumEnv
from eval import RandomAgent, compute_metrics, save_metrics_with_summary, export_metrics_plots


# --------------------------------------
# Rollout and save last frame
# --------------------------------------
def eval_and_save(env, agent, n_episodes=5, max_steps=1000, dir_name="logs/random",
                  mode="pic", name="eval"):
    all_metrics = []
    os.makedirs(dir_name, exist_ok=True)

    for i in range(n_episodes):
        obs, _ = env.reset()
        episode_reward = 0
        steps = 0
        outcome_counts = {"regenerations": 0, "blocked_moves": 0}

        for _ in range(max_steps):
            action, _ = agent.predict(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            steps += 1
            episode_reward += reward

            if info.get("regenerated"):
                outcome_counts["regenerations"] += 1
            if info.get("collided"):
                outcome_counts["blocked_moves"] += 1

            if terminated or truncated:
                break

        metrics = compute_metrics(env.unwrapped.room)
        metrics["episode_length"] = steps
        metrics["episode_reward"] = episode_reward
        metrics.update(outcome_counts)
        all_metrics.append(metrics)

        if mode == "pic":
            last_frame = env.unwrapped.render_frame()
            fname = f"{name}_ep{i}.png"
            plt.figure()
            plt.imshow(last_frame)
            plt.axis("off")
            plt.savefig(os.path.join(dir_name, fname), bbox_inches="tight", pad_inches=0)
            plt.close()
            print(f"Last frame saved to {fname}")

    save_metrics_with_summary(all_metrics, dir_name)
    return all_metrics


if __name__ == "__main__":
    # ------------------------------
    # Parse command-line arguments
    # ------------------------------
    parser = argparse.ArgumentParser(description="Roll out a random agent in the robot vacuum room")
    parser.add_argument("--grid_size", type=int, nargs=2, default=[40, 30],
                        help="Room size as two integers, width then height (e.g., 40 30)")
    parser.add_argument("--episodes", type=int, default=5, help="Number of evaluation episodes")
    parser.add_argument("--max_steps", type=int, default=1000, help="Step limit per episode")
    parser.add_argument("--seed", type=int, default=None, help="Seed for level generation")
    parser.add_argument("--config", type=str, default=None,
                        help="JSON file overriding reward constants")
    parser.add_argument("--out_dir", type=str, default="logs/random", help="Where metrics and frames go")
    parser.add_argument("--mode", choices=["pic", "none"], default="pic",
                        help="Save the last frame of each episode as a PNG")
    args = parser.parse_args()

    grid_size = tuple(args.grid_size)
    rewards = load_reward_config(args.config) if args.config else dict(DEFAULT_REWARDS)
    print(f"Grid size: {grid_size}, rewards: {rewards}")

    check_env(VacuumEnv(grid_size=grid_size, rewards=rewards), warn=True)

    factory = WrappedVacuumEnv(grid_size=grid_size, max_steps=args.max_steps, rewards=rewards, seed=args.seed)
    env = factory()
    agent = RandomAgent(env.action_space)
    if args.seed is not None:
        env.action_space.seed(args.seed)

    all_metrics = eval_and_save(env, agent, n_episodes=args.episodes, max_steps=args.max_steps,
                                dir_name=args.out_dir, mode=args.mode)
    export_metrics_plots({k: [m[k] for m in all_metrics] for k in ("episode_reward", "cells_cleaned", "collisions")},
                         os.path.join(args.out_dir, "plots"))
