import numpy as np

from action_engine import ActionEngine
from level_generator import LevelGenerator
from robot import Action, RobotState, action_from_index
from state_encoder import encode


class Room:
    """
    One simulation instance: a generated board, the robot on its dock, and
    the step counters the metrics read.

    Either pass a numpy Generator as rng or a seed; with neither the room
    owns a freshly seeded generator.
    """

    def __init__(self, xsize, ysize, rng=None, seed=None, rewards=None):
        if xsize <= 0 or ysize <= 0:
            raise ValueError(f"Room dimensions must be positive, got {xsize}x{ysize}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.engine = ActionEngine(rewards)
        self.board = LevelGenerator(self.rng).generate(xsize, ysize)
        self.robot = RobotState.docked(ysize)

        self.steps = 0
        self.collisions = 0
        self.cells_cleaned = 0
        self.levels_completed = 0
        self.initial_dirt = self.board.total_dirt()

    @property
    def xsize(self):
        return self.board.xsize

    @property
    def ysize(self):
        return self.board.ysize

    def perform_action(self, action):
        return self.perform(action).reward

    def perform(self, action):
        """Apply an Action (or numeric action code) and return the StepOutcome"""
        if not isinstance(action, Action):
            action = action_from_index(action)
        outcome = self.engine.step(action, self.robot, self.board, self.rng)

        self.steps += 1
        self.collisions += int(outcome.collided)
        self.cells_cleaned += outcome.cleaned
        if outcome.regenerated:
            self.levels_completed += 1
            self.initial_dirt = self.board.total_dirt()
        return outcome

    def get_state_vector(self):
        return encode(self.board, self.robot)

    def get_cumulative_reward(self):
        return self.robot.reward

    def get_board_snapshot(self):
        return self.board.snapshot()

    def get_pose(self):
        return self.robot.pose()


def new_room(xsize, ysize, rng=None, seed=None, rewards=None):
    return Room(xsize, ysize, rng=rng, seed=seed, rewards=rewards)
