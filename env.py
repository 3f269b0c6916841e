import gymnasium as gym
from gymnasium import spaces
from gymnasium.envs.registration import register
from gymnasium.wrappers import TimeLimit
import numpy as np
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors

from stable_baselines3.common.monitor import Monitor

from constants import STATE_SIZE, CHARGING_PAD, OBSTACLE, HAZARD
from eval import MetricWrapper
from footprint import occupied_cells, suction_cells
from robot import Action, action_from_index
from room import Room

# render_frame layer codes
FLOOR, LIGHT_DIRT, HEAVY_DIRT, PAD, WALL, DANGER, BODY, SUCTION = range(8)
HEAVY_DIRT_LEVEL = 3


class VacuumEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    def __init__(self, grid_size=(40, 30), rewards=None, strict_actions=False, render_mode=None):
        super().__init__()
        self.grid_size = tuple(grid_size)  # (xsize, ysize)
        self.rewards = rewards
        self.strict_actions = strict_actions
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(len(Action))  # codes follow robot.Action
        self.observation_space = spaces.Box(
            low=float(HAZARD), high=np.inf, shape=(STATE_SIZE,), dtype=np.float32
        )

        self.room = None
        self.reset()

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        # every episode is a fresh simulation, so the cumulative reward restarts
        self.room = Room(*self.grid_size, rng=self.np_random, rewards=self.rewards)
        return self.room.get_state_vector(), self._get_info()

    def step(self, action):
        """Take a step in the environment"""
        outcome = self.room.perform(action_from_index(action, strict=self.strict_actions))

        info = self._get_info()
        info.update({
            "collided": outcome.collided,
            "cleaned": outcome.cleaned,
            "regenerated": outcome.regenerated,
        })
        # the room never ends on its own; episodes are cut by TimeLimit
        return self.room.get_state_vector(), float(outcome.reward), False, False, info

    def _get_info(self):
        return {
            "cumulative_reward": self.room.get_cumulative_reward(),
            "pose": self.room.get_pose(),
        }

    def render(self):
        if self.render_mode == "rgb_array":
            return self.render_frame()
        return None

    def render_frame(self):
        """Return a visual frame/image"""
        snapshot = self.room.get_board_snapshot()
        cells = snapshot.cells
        x, y, dirn = self.room.get_pose()

        grid_image = np.full(cells.shape, FLOOR, dtype=np.float32)
        grid_image[cells > 0] = LIGHT_DIRT
        grid_image[cells >= HEAVY_DIRT_LEVEL] = HEAVY_DIRT
        grid_image[cells == CHARGING_PAD] = PAD
        grid_image[cells == OBSTACLE] = WALL
        grid_image[cells == HAZARD] = DANGER

        for layer, positions in ((BODY, occupied_cells(x, y, dirn)), (SUCTION, suction_cells(x, y, dirn))):
            for cx, cy in positions:
                if 0 <= cx < snapshot.xsize and 0 <= cy < snapshot.ysize:
                    grid_image[cy, cx] = layer

        cmap = mcolors.ListedColormap(
            ["white", "tan", "saddlebrown", "cyan", "black", "red", "gray", "gold"]
        )
        bounds = list(range(9))
        norm = mcolors.BoundaryNorm(bounds, cmap.N)

        fig, ax = plt.subplots(figsize=(6, 6 * snapshot.ysize / snapshot.xsize))
        ax.imshow(grid_image, cmap=cmap, norm=norm)
        ax.set_title(f"Robot @ ({x}, {y}), facing {dirn}, reward {self.room.get_cumulative_reward():.2f}")
        ax.axis("off")

        fig.canvas.draw()
        img = np.asarray(fig.canvas.buffer_rgba())[..., :3].copy()
        plt.close(fig)

        return img


register(
    id="VacuumEnv-v0",
    entry_point="env:VacuumEnv",
)


class WrappedVacuumEnv:
    def __init__(self, grid_size, max_steps, rewards=None, seed=None):
        self.grid_size = grid_size
        self.max_steps = max_steps
        self.rewards = rewards
        self.seed = seed
        self.base_env = None

    def __call__(self):
        env = gym.make("VacuumEnv-v0", grid_size=self.grid_size, rewards=self.rewards)
        env = TimeLimit(env, max_episode_steps=self.max_steps)
        env = MetricWrapper(env)
        env = Monitor(env)

        env.reset(seed=self.seed)
        self.base_env = env
        return env
