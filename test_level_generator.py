import numpy as np
import pytest

from board import Board, CellKind, classify
from constants import CHARGING_PAD, OBSTACLE, HAZARD, PAD_SIZE
from level_generator import LevelGenerator, generate


class FixedRng:
    """Stands in for a numpy Generator, replaying scripted integers"""

    def __init__(self, values):
        self.values = list(values)

    def integers(self, low, high=None):
        return self.values.pop(0)


def pad_region(board):
    return board.cells[board.ysize - PAD_SIZE:, :PAD_SIZE]


@pytest.mark.parametrize("size", [(4, 4), (20, 20), (40, 30), (64, 48), (100, 40)])
@pytest.mark.parametrize("seed", range(5))
def test_charging_pad_always_intact(size, seed):
    board = generate(*size, np.random.default_rng(seed))
    assert np.all(pad_region(board) == CHARGING_PAD)


def test_pad_is_the_only_charging_cells_on_small_room():
    board = generate(20, 20, np.random.default_rng(0))
    assert np.count_nonzero(board.cells == CHARGING_PAD) == 16


def test_same_seed_same_layout():
    a = generate(64, 48, np.random.default_rng(123))
    b = generate(64, 48, np.random.default_rng(123))
    assert np.array_equal(a.cells, b.cells)


def test_different_seeds_differ():
    a = generate(64, 48, np.random.default_rng(1))
    b = generate(64, 48, np.random.default_rng(2))
    assert not np.array_equal(a.cells, b.cells)


@pytest.mark.parametrize("seed", range(10))
def test_hazards_keep_clear_of_dock(seed):
    board = generate(80, 60, np.random.default_rng(seed))
    near_dock = board.cells[board.ysize - 7:, :8]
    assert not np.any(near_dock == HAZARD)


def test_large_room_has_every_feature():
    board = generate(100, 80, np.random.default_rng(5))
    assert np.any(board.cells == HAZARD)
    assert np.any(board.cells == OBSTACLE)
    assert np.any(board.cells > 0)


def test_dirt_is_bounded_by_scatter_count():
    board = generate(40, 30, np.random.default_rng(0))
    assert 0 < board.total_dirt() <= (40 * 30) // 10


def test_only_known_cell_values():
    board = generate(64, 48, np.random.default_rng(9))
    for value in np.unique(board.cells):
        classify(int(value))


def test_obstacle_growth_on_empty_board():
    gen = LevelGenerator(np.random.default_rng(4))
    board = Board(30, 30)
    claimed = gen._grow_obstacle(board, 8)
    assert 1 <= claimed <= 9
    assert np.count_nonzero(board.cells == OBSTACLE) == claimed


def test_obstacle_growth_aborts_on_occupied_seed():
    gen = LevelGenerator(np.random.default_rng(4))
    board = Board(20, 20)
    board.cells[:] = HAZARD
    assert gen._grow_obstacle(board, 8) == 0
    assert np.all(board.cells == HAZARD)


def test_obstacle_growth_never_overwrites_other_cells():
    gen = LevelGenerator(np.random.default_rng(11))
    board = Board(30, 30)
    board.cells[::2, :] = 3  # dirty stripes block rays
    before = board.cells.copy()
    for _ in range(20):
        gen._grow_obstacle(board, 10)
    changed = board.cells != before
    assert np.all(before[changed] == 0)
    assert np.all(board.cells[changed] == OBSTACLE)


def test_obstacle_growth_stays_out_of_dock_zone():
    board = Board(12, 12)
    # seed (7, 4), one DOWN ray from x=7 straight into the zone
    gen = LevelGenerator(FixedRng([7, 4, 2, 7]))
    assert gen._grow_obstacle(board, 1) == 1
    assert board.cells[5, 7] == 0

    gen = LevelGenerator(FixedRng([8, 4, 2, 8]))
    assert gen._grow_obstacle(board, 1) == 2
    assert board.cells[5, 8] == OBSTACLE


def test_obstacle_rays_pass_through_obstacles():
    board = Board(20, 20)
    board.set(10, 3, OBSTACLE)
    gen = LevelGenerator(FixedRng([10, 2, 2, 10]))
    assert gen._grow_obstacle(board, 1) == 2
    assert board.get(10, 4) == OBSTACLE


def test_obstacle_rays_stop_at_hazards():
    board = Board(20, 20)
    board.set(10, 3, HAZARD)
    gen = LevelGenerator(FixedRng([10, 2, 2, 10]))
    assert gen._grow_obstacle(board, 1) == 1
    assert board.get(10, 4) == 0


def test_obstacle_horizontal_ray_starts_at_seed_column():
    board = Board(20, 20)
    # seed (10, 5); DOWN ray from x=10; RIGHT ray from row 6 of the box
    gen = LevelGenerator(FixedRng([10, 5, 2, 10, 1, 6]))
    assert gen._grow_obstacle(board, 2) == 3
    assert board.get(10, 6) == OBSTACLE
    assert board.get(11, 6) == OBSTACLE
    assert np.count_nonzero(board.cells == OBSTACLE) == 3


def test_obstacle_vertical_ray_starts_inside_wider_box():
    board = Board(20, 20)
    # RIGHT ray widens the box to x=10..11, then an UP ray leaves from x=11
    gen = LevelGenerator(FixedRng([10, 5, 1, 5, 0, 11]))
    assert gen._grow_obstacle(board, 2) == 3
    assert board.get(11, 5) == OBSTACLE
    assert board.get(11, 4) == OBSTACLE
    assert board.get(10, 4) == 0


def test_obstacle_seed_only_needs_an_empty_cell():
    board = Board(12, 12)
    gen = LevelGenerator(FixedRng([2, 8]))
    assert gen._grow_obstacle(board, 0) == 1
    assert board.get(2, 8) == OBSTACLE


def test_dirt_stacks_and_skips_special_cells():
    board = Board(20, 20)
    board.stamp_charging_pad()
    board.set(5, 5, OBSTACLE)
    board.set(6, 6, HAZARD)
    gen = LevelGenerator(FixedRng([10, 10, 10, 10, 5, 5, 6, 6, 1, 18]))
    gen._scatter_dirt(board, 5)
    assert board.get(10, 10) == 2
    assert board.get(5, 5) == OBSTACLE
    assert board.get(6, 6) == HAZARD
    assert board.get(1, 18) == CHARGING_PAD
    assert board.total_dirt() == 2


def test_hazard_near_dock_is_skipped():
    board = Board(30, 30)
    gen = LevelGenerator(FixedRng([5, 5, 2, 20]))  # w, h, x0, y0 -> bottom 25 > 22
    assert gen._place_hazard(board) is False
    assert not np.any(board.cells == HAZARD)

    gen = LevelGenerator(FixedRng([5, 5, 10, 20]))
    assert gen._place_hazard(board) is True
    assert np.count_nonzero(board.cells == HAZARD) == 25


def test_hazard_is_clipped_to_board():
    board = Board(20, 20)
    gen = LevelGenerator(FixedRng([11, 11, 15, 0]))
    assert gen._place_hazard(board) is True
    assert np.count_nonzero(board.cells == HAZARD) == 5 * 11


def test_board_kind():
    board = Board(10, 10)
    board.stamp_charging_pad()
    board.set(5, 5, 2)
    board.set(6, 5, OBSTACLE)
    board.set(7, 5, HAZARD)
    assert board.kind(0, 9) == CellKind.CHARGING_PAD
    assert board.kind(5, 5) == CellKind.DIRT
    assert board.kind(6, 5) == CellKind.OBSTACLE
    assert board.kind(7, 5) == CellKind.HAZARD
    assert board.kind(5, 0) == CellKind.EMPTY


def test_board_rejects_out_of_range_access():
    board = Board(10, 8)
    with pytest.raises(IndexError):
        board.get(10, 0)
    with pytest.raises(IndexError):
        board.set(0, -1, 1)


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-5, 10), (3, 10)])
def test_board_rejects_degenerate_sizes(size):
    with pytest.raises(ValueError):
        Board(*size)


def test_snapshot_is_read_only():
    board = generate(20, 20, np.random.default_rng(0))
    snapshot = board.snapshot()
    assert (snapshot.xsize, snapshot.ysize) == (20, 20)
    with pytest.raises(ValueError):
        snapshot.cells[0, 0] = 5
