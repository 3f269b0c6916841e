from collections import namedtuple
from enum import Enum

import numpy as np

from constants import EMPTY, CHARGING_PAD, OBSTACLE, HAZARD, PAD_SIZE


class CellKind(Enum):
    EMPTY = "empty"
    DIRT = "dirt"
    CHARGING_PAD = "charging_pad"
    OBSTACLE = "obstacle"
    HAZARD = "hazard"


_SPECIAL_KINDS = {
    CHARGING_PAD: CellKind.CHARGING_PAD,
    OBSTACLE: CellKind.OBSTACLE,
    HAZARD: CellKind.HAZARD,
}


def classify(value):
    """Map a raw cell value to its CellKind"""
    if value > 0:
        return CellKind.DIRT
    if value == EMPTY:
        return CellKind.EMPTY
    try:
        return _SPECIAL_KINDS[value]
    except KeyError:
        raise ValueError(f"Invalid cell value: {value}") from None


BoardSnapshot = namedtuple("BoardSnapshot", ["cells", "xsize", "ysize"])


class Board:
    """
    Rectangular room grid stored row-major as cells[y, x].

    Values: >0 dirt units, 0 empty, -1 charging pad, -2 obstacle, -3 hazard.
    """

    def __init__(self, xsize, ysize):
        if xsize < PAD_SIZE or ysize < PAD_SIZE:
            raise ValueError(
                f"Board must be at least {PAD_SIZE}x{PAD_SIZE}, got {xsize}x{ysize}"
            )
        self.xsize = int(xsize)
        self.ysize = int(ysize)
        self.cells = np.zeros((self.ysize, self.xsize), dtype=np.int32)

    def in_bounds(self, x, y):
        return 0 <= x < self.xsize and 0 <= y < self.ysize

    def get(self, x, y):
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.xsize}x{self.ysize} board")
        return int(self.cells[y, x])

    def set(self, x, y, value):
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.xsize}x{self.ysize} board")
        self.cells[y, x] = value

    def kind(self, x, y):
        return classify(self.get(x, y))

    def stamp_charging_pad(self):
        self.cells[self.ysize - PAD_SIZE:, :PAD_SIZE] = CHARGING_PAD

    def total_dirt(self):
        return int(self.cells[self.cells > 0].sum())

    def replace(self, other):
        """Install another board's cells in a single assignment"""
        if (other.xsize, other.ysize) != (self.xsize, self.ysize):
            raise ValueError("Replacement board has different dimensions")
        self.cells = other.cells

    def snapshot(self):
        cells = self.cells.copy()
        cells.flags.writeable = False
        return BoardSnapshot(cells, self.xsize, self.ysize)
