"""Procedural room generation: charging pad, hazards, obstacle blobs and dirt."""

import numpy as np

from board import Board
from constants import (
    EMPTY, OBSTACLE, HAZARD, DOCK_CLEARANCE,
    HAZARD_DENSITY, OBSTACLE_DENSITY, DIRT_DENSITY,
    HAZARD_SIZE_RANGE, OBSTACLE_SIZE_RANGE,
)

# Growth directions, indexed like robot headings
GROWTH_STEPS = [(0, -1), (1, 0), (0, 1), (-1, 0)]


class LevelGenerator:
    """
    Builds a fresh Board from an injected numpy Generator.

    The same generator state always yields the same layout.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate(self, xsize, ysize):
        board = Board(xsize, ysize)
        board.stamp_charging_pad()

        for _ in range((xsize * ysize) // HAZARD_DENSITY):
            self._place_hazard(board)
        for _ in range((xsize * ysize) // OBSTACLE_DENSITY):
            size = int(self.rng.integers(*OBSTACLE_SIZE_RANGE))
            self._grow_obstacle(board, size)
        self._scatter_dirt(board, (xsize * ysize) // DIRT_DENSITY)

        board.stamp_charging_pad()
        return board

    def _near_dock(self, board, x, y):
        return x < DOCK_CLEARANCE and y > board.ysize - DOCK_CLEARANCE

    def _place_hazard(self, board):
        """Stamp one clipped rectangle of hazard cells, unless it crowds the dock"""
        w = int(self.rng.integers(*HAZARD_SIZE_RANGE))
        h = int(self.rng.integers(*HAZARD_SIZE_RANGE))
        x0 = int(self.rng.integers(0, board.xsize))
        y0 = int(self.rng.integers(0, board.ysize))
        x1 = min(x0 + w, board.xsize)
        y1 = min(y0 + h, board.ysize)

        if self._near_dock(board, x0, y1):
            return False
        board.cells[y0:y1, x0:x1] = HAZARD
        return True

    def _grow_obstacle(self, board, size):
        """
        Random-walk an obstacle blob from a seed cell.

        Each iteration fires a ray from inside the blob's bounding box and
        claims the first empty cell it reaches. Rays pass through existing
        obstacle cells and stop at the board edge, the dock clearance zone,
        or any other occupied cell.
        """
        sx = int(self.rng.integers(0, board.xsize))
        sy = int(self.rng.integers(0, board.ysize))
        # only growth rays honour the dock clearance; a seed just has to be empty
        if board.cells[sy, sx] != EMPTY:
            return 0

        board.cells[sy, sx] = OBSTACLE
        claimed = 1
        min_x = max_x = sx
        min_y = max_y = sy

        for _ in range(size):
            dx, dy = GROWTH_STEPS[int(self.rng.integers(0, 4))]
            if dx == 0:
                x, y = int(self.rng.integers(min_x, max_x + 1)), sy
            else:
                x, y = sx, int(self.rng.integers(min_y, max_y + 1))

            while True:
                x += dx
                y += dy
                if not board.in_bounds(x, y) or self._near_dock(board, x, y):
                    break
                value = board.cells[y, x]
                if value == EMPTY:
                    board.cells[y, x] = OBSTACLE
                    claimed += 1
                    min_x, max_x = min(min_x, x), max(max_x, x)
                    min_y, max_y = min(min_y, y), max(max_y, y)
                    break
                if value != OBSTACLE:
                    break
        return claimed

    def _scatter_dirt(self, board, count):
        for _ in range(count):
            x = int(self.rng.integers(0, board.xsize))
            y = int(self.rng.integers(0, board.ysize))
            if board.cells[y, x] >= 0:
                board.cells[y, x] += 1


def generate(xsize, ysize, rng):
    return LevelGenerator(rng).generate(xsize, ysize)
