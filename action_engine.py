from collections import namedtuple

from board import CellKind
from constants import make_reward_config
from footprint import HEADING_STEPS, occupied_cells, suction_cells
from level_generator import LevelGenerator
from robot import Action

StepOutcome = namedtuple("StepOutcome", ["reward", "collided", "cleaned", "regenerated"])


class ActionEngine:
    """
    Applies robot actions to a RobotState and Board and scores them.

    Collisions are handled in-band: the move is discarded and the worst
    penalty among the footprint cells is charged.
    """

    def __init__(self, rewards=None):
        self.rewards = make_reward_config(rewards)

    def apply(self, action, robot, board, rng):
        return self.step(action, robot, board, rng).reward

    def step(self, action, robot, board, rng):
        action = Action(action)
        collided = False
        cleaned = 0
        regenerated = False

        if action in (Action.FORWARD, Action.REVERSE):
            sign = 1 if action == Action.FORWARD else -1
            dx, dy = HEADING_STEPS[robot.dirn]
            nx, ny = robot.x + sign * dx, robot.y + sign * dy

            penalty = self.collision_penalty(board, nx, ny, robot.dirn)
            collided = penalty < 0
            if not collided:
                robot.x, robot.y = nx, ny
            cost = self.rewards["forward_cost" if sign > 0 else "reverse_cost"]
            reward = penalty + cost

        elif action == Action.L:
            robot.dirn = (robot.dirn - 1) % 4
            reward = self.rewards["turn_cost"]

        elif action == Action.R:
            robot.dirn = (robot.dirn + 1) % 4
            reward = self.rewards["turn_cost"]

        else:  # SUCK
            if robot.is_docked(board.ysize):
                new_board = LevelGenerator(rng).generate(board.xsize, board.ysize)
                board.replace(new_board)
                regenerated = True
                reward = self.rewards["dock_reward"]
            else:
                cleaned = self.suck(board, robot)
                reward = cleaned * self.rewards["clean_reward"] + self.rewards["suck_cost"]

        robot.reward += reward
        return StepOutcome(reward, collided, cleaned, regenerated)

    def cell_penalty(self, board, x, y):
        if not board.in_bounds(x, y):
            return self.rewards["obstacle_penalty"]
        kind = board.kind(x, y)
        if kind == CellKind.HAZARD:
            return self.rewards["hazard_penalty"]
        if kind == CellKind.OBSTACLE:
            return self.rewards["obstacle_penalty"]
        return 0.0

    def collision_penalty(self, board, x, y, dirn):
        """Worst penalty over the footprint at (x, y, dirn); 0.0 when clear"""
        return min(
            [0.0] + [self.cell_penalty(board, cx, cy) for cx, cy in occupied_cells(x, y, dirn)]
        )

    def suck(self, board, robot):
        cleaned = 0
        for x, y in suction_cells(robot.x, robot.y, robot.dirn):
            if board.in_bounds(x, y) and board.kind(x, y) == CellKind.DIRT:
                board.set(x, y, board.get(x, y) - 1)
                cleaned += 1
        return cleaned
