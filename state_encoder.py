import numpy as np

from constants import OBSTACLE, WINDOW_SIZE, WINDOW_OFFSET, STATE_SIZE


def encode_window(board, x, y):
    """20x20 board window around (x, y); off-board samples read as OBSTACLE"""
    window = np.full((WINDOW_SIZE, WINDOW_SIZE), OBSTACLE, dtype=np.float32)

    x0, y0 = x - WINDOW_OFFSET, y - WINDOW_OFFSET
    bx0, by0 = max(x0, 0), max(y0, 0)
    bx1 = min(x0 + WINDOW_SIZE, board.xsize)
    by1 = min(y0 + WINDOW_SIZE, board.ysize)
    if bx0 < bx1 and by0 < by1:
        window[by0 - y0:by1 - y0, bx0 - x0:bx1 - x0] = board.cells[by0:by1, bx0:bx1]
    return window


def encode(board, robot):
    """
    Fixed-length state vector:
    [0, 400)  board window, row-major
    400       robot.x - 1 (offset from the dock)
    401       ysize - robot.y - 3
    402       heading
    """
    state = np.empty(STATE_SIZE, dtype=np.float32)
    state[:WINDOW_SIZE * WINDOW_SIZE] = encode_window(board, robot.x, robot.y).ravel()
    state[-3] = robot.x - 1
    state[-2] = board.ysize - robot.y - 3
    state[-1] = robot.dirn
    return state
