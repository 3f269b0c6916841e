import gymnasium as gym
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, List
import json
import os


def compute_dirt_remaining(room):
    return room.board.total_dirt()


def compute_cleaning_ratio(room):
    """Share of the current level's starting dirt that has been removed"""
    if room.initial_dirt == 0:
        return 0.0
    return (room.initial_dirt - compute_dirt_remaining(room)) / room.initial_dirt


def compute_collision_rate(room):
    return room.collisions / room.steps if room.steps > 0 else 0.0


def compute_metrics(room):
    return {
        "dirt_remaining": compute_dirt_remaining(room),
        "cells_cleaned": room.cells_cleaned,
        "collisions": room.collisions,
        "collision_rate": compute_collision_rate(room),
        "levels_completed": room.levels_completed,
        "cleaning_ratio": compute_cleaning_ratio(room),
        "cumulative_reward": room.get_cumulative_reward(),
    }


class MetricWrapper(gym.Wrapper):
    def __init__(self, env):
        super().__init__(env)
        self.metrics = {}

    def reset(self, **kwargs):
        self.metrics = {}
        return self.env.reset(**kwargs)

    def step(self, action):
        obs, reward, terminated, truncated, info = self.env.step(action)

        if terminated or truncated:
            self.metrics = compute_metrics(self.env.unwrapped.room)
            info.update(self.metrics)

        return obs, reward, terminated, truncated, info


class RandomAgent:
    """Simple random agent for baseline comparison"""
    def __init__(self, action_space):
        self.action_space = action_space

    def predict(self, observation):
        return self.action_space.sample(), None


METRIC_KEYS = ["episode_rewards", "episode_lengths", "dirt_remaining", "cells_cleaned",
               "collisions", "levels_completed", "cleaning_ratio"]


def evaluate_agent_steps(agent, env, max_total_steps=100_000, max_episode_steps=3000,
                         verbose=True) -> Dict[str, List[float]]:
    """
    Run an agent for up to `max_total_steps` across multiple episodes,
    limiting each episode to `max_episode_steps`, and collect evaluation metrics.
    """
    total_steps = 0
    metrics = {k: [] for k in METRIC_KEYS}

    episode = 0
    while total_steps < max_total_steps:
        obs, _ = env.reset()
        done = False
        episode_reward = 0
        episode_length = 0

        while not done and episode_length < max_episode_steps and total_steps < max_total_steps:
            action, _ = agent.predict(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            episode_reward += reward
            episode_length += 1
            total_steps += 1

        room_metrics = compute_metrics(env.unwrapped.room)
        metrics["episode_rewards"].append(episode_reward)
        metrics["episode_lengths"].append(episode_length)
        for k in METRIC_KEYS[2:]:
            metrics[k].append(room_metrics[k])

        episode += 1
        if verbose:
            print(f"Episode {episode}")
            print(f"Reward: {episode_reward:.2f}")
            print(f"Length: {episode_length}")
            print(f"Cleaned: {room_metrics['cells_cleaned']} ({room_metrics['cleaning_ratio']:.2%} of level)")
            print(f"Collisions: {room_metrics['collisions']}")
            print(f"Levels completed: {room_metrics['levels_completed']}")
            print("---")

    return metrics


def summarize_metrics(all_metrics):
    """Mean/std of every numeric entry in a list of per-episode metric dicts"""
    if not all_metrics:
        return {}
    keys = all_metrics[0].keys()
    return {
        k: {
            "mean": float(np.mean([m[k] for m in all_metrics])),
            "std": float(np.std([m[k] for m in all_metrics]))
        }
        for k in keys
        if isinstance(all_metrics[0][k], (int, float, np.integer, np.floating))
    }


def convert_to_builtin(obj):
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


def save_metrics_with_summary(all_metrics, dir_name):
    os.makedirs(dir_name, exist_ok=True)

    metrics_path = os.path.join(dir_name, "all_metrics.json")
    with open(metrics_path, "w") as f:
        json.dump(all_metrics, f, indent=4, default=convert_to_builtin)
    print(f"All metrics saved to {metrics_path}")

    summary = summarize_metrics(all_metrics)
    summary_path = os.path.join(dir_name, "summary_metrics.json")
    with open(summary_path, "w") as f:
        json.dump(summary, f, indent=4)

    print("Evaluation Summary:")
    for k, v in summary.items():
        print(f"{k}: mean={v['mean']:.3f}, std={v['std']:.3f}")
    return summary


def export_metrics_plots(metrics, output_dir):
    os.makedirs(output_dir, exist_ok=True)

    for metric_name, values in metrics.items():
        plt.figure(figsize=(10, 4))
        plt.plot(range(1, len(values) + 1), values)
        plt.title(metric_name)
        plt.xlabel("Episode")
        plt.ylabel("Value")
        plt.grid(True)

        safe_name = metric_name.replace("/", "_")
        plt.savefig(os.path.join(output_dir, f"{safe_name}.png"))
        plt.close()
