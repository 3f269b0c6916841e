from enum import IntEnum

from constants import UP


class Action(IntEnum):
    FORWARD = 0
    REVERSE = 1
    L = 2
    R = 3
    SUCK = 4


def action_from_index(index, strict=False):
    """
    Map a numeric action code to an Action.

    Codes outside the enumeration fall back to FORWARD unless strict is set,
    in which case they raise ValueError.
    """
    try:
        return Action(int(index))
    except (ValueError, TypeError):
        if strict:
            raise ValueError(f"Invalid action code: {index!r}") from None
        return Action.FORWARD


def dock_pose(ysize):
    """Reference pose that centres the robot on the charging pad"""
    return 1, ysize - 3


class RobotState:
    def __init__(self, x, y, dirn=UP, reward=0.0):
        self.x = x
        self.y = y
        self.dirn = dirn
        self.reward = reward  # cumulative

    @classmethod
    def docked(cls, ysize):
        x, y = dock_pose(ysize)
        return cls(x, y, UP)

    def is_docked(self, ysize):
        return (self.x, self.y) == dock_pose(ysize)

    def pose(self):
        return self.x, self.y, self.dirn

    def __repr__(self):
        return f"RobotState(x={self.x}, y={self.y}, dirn={self.dirn}, reward={self.reward:.2f})"
