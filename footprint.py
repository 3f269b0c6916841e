from constants import UP, RIGHT, DOWN, LEFT

# Robot body spans dx, dy in -1..2 around the reference corner (x, y).
# The leading edge drops its two corner cells so the shape points forward.
_BODY = [(dx, dy) for dy in range(-1, 3) for dx in range(-1, 3)]

_CLIPPED_CORNERS = {
    UP: {(-1, -1), (2, -1)},
    RIGHT: {(2, -1), (2, 2)},
    DOWN: {(-1, 2), (2, 2)},
    LEFT: {(-1, -1), (-1, 2)},
}

FOOTPRINT = {
    dirn: tuple(cell for cell in _BODY if cell not in corners)
    for dirn, corners in _CLIPPED_CORNERS.items()
}

# Cells just past the leading edge, left-to-right from the robot's point of view
SUCTION_RANGE = {
    UP: ((-1, -2), (0, -2), (1, -2), (2, -2)),
    RIGHT: ((3, -1), (3, 0), (3, 1), (3, 2)),
    DOWN: ((2, 3), (1, 3), (0, 3), (-1, 3)),
    LEFT: ((-2, 2), (-2, 1), (-2, 0), (-2, -1)),
}

# Position delta for one FORWARD step
HEADING_STEPS = {
    UP: (0, -1),
    RIGHT: (1, 0),
    DOWN: (0, 1),
    LEFT: (-1, 0),
}


def occupied_cells(x, y, dirn):
    return [(x + dx, y + dy) for dx, dy in FOOTPRINT[dirn]]


def suction_cells(x, y, dirn):
    return [(x + dx, y + dy) for dx, dy in SUCTION_RANGE[dirn]]
