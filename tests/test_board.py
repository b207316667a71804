import numpy as np
import pytest

from blockfall.board import BOARD_HEIGHT, BOARD_WIDTH, Board
from blockfall.tetromino import PieceType, Point
from blockfall.utils import IdGenerator


def fill_row(board: Board, gen: IdGenerator, y: int, skip=()) -> list:
    points = []
    positions = []
    for x in range(BOARD_WIDTH):
        if x in skip:
            continue
        points.append(Point(gen.next_id(), PieceType.I))
        positions.append((x, y))
    board.lock_points(points, positions)
    return points


def lock_single(board: Board, gen: IdGenerator, pos) -> Point:
    point = Point(gen.next_id(), PieceType.T)
    board.lock_points([point], [pos])
    return point


def test_lock_updates_grid_and_map_together():
    board = Board()
    gen = IdGenerator()
    point = lock_single(board, gen, (3, 7))
    assert board.get_cell((3, 7)) == point
    assert board.get_point_position(point.id) == (3, 7)
    assert int(board.grid[7, 3]) == point.id
    board.check_invariants()


def test_locking_onto_occupied_cell_is_fatal():
    board = Board()
    gen = IdGenerator()
    lock_single(board, gen, (0, 0))
    with pytest.raises(RuntimeError):
        lock_single(board, gen, (0, 0))


def test_out_of_bounds_access():
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell((BOARD_WIDTH, 0))
    with pytest.raises(IndexError):
        lock_single(board, IdGenerator(), (0, BOARD_HEIGHT))
    assert not board.is_empty((-1, 0))


def test_unknown_point_lookup():
    board = Board()
    assert board.get_point_position(42) is None
    with pytest.raises(KeyError):
        board.get_point(42)


def test_collides_with_locked_cells_and_walls():
    board = Board()
    lock_single(board, IdGenerator(), (5, 10))
    assert board.collides([(0, 0), (1, 0)], (4, 10))
    assert not board.collides([(0, 0), (1, 0)], (6, 10))
    assert board.collides([(0, 0)], (BOARD_WIDTH, 0))


def test_find_filled_rows_top_to_bottom():
    board = Board()
    gen = IdGenerator()
    fill_row(board, gen, 23)
    fill_row(board, gen, 20)
    fill_row(board, gen, 21, skip=(4,))
    assert board.find_filled_rows() == [20, 23]


def test_clearing_without_filled_rows_changes_nothing():
    board = Board()
    gen = IdGenerator()
    fill_row(board, gen, 23, skip=(0,))
    lock_single(board, gen, (2, 22))
    grid_before = board.grid.copy()
    positions_before = board.point_positions()
    assert board.clear_filled_rows() == []
    assert np.array_equal(board.grid, grid_before)
    assert board.point_positions() == positions_before


def test_compaction_shifts_by_number_of_rows_cleared_below():
    board = Board()
    gen = IdGenerator()
    bottom = fill_row(board, gen, 23)
    below_gap = lock_single(board, gen, (3, 22))
    middle = fill_row(board, gen, 21)
    above = lock_single(board, gen, (5, 20))
    top = lock_single(board, gen, (0, 19))
    total_before = len(board)

    removed = board.clear_filled_rows()

    assert [p.id for p in removed] == [p.id for p in bottom] + [p.id for p in middle]
    assert len(board) == total_before - 2 * BOARD_WIDTH
    assert board.get_point_position(below_gap.id) == (3, 23)
    assert board.get_point_position(above.id) == (5, 22)
    assert board.get_point_position(top.id) == (0, 21)
    board.check_invariants()


def test_points_below_lowest_cleared_row_stay_put():
    board = Board()
    gen = IdGenerator()
    floor = lock_single(board, gen, (7, 23))
    fill_row(board, gen, 22)
    above = lock_single(board, gen, (1, 21))
    board.clear_filled_rows()
    assert board.get_point_position(floor.id) == (7, 23)
    assert board.get_point_position(above.id) == (1, 22)


def test_check_invariants_detects_drift():
    board = Board()
    point = lock_single(board, IdGenerator(), (1, 1))
    board._points_pos[point.id] = (2, 2)
    with pytest.raises(RuntimeError):
        board.check_invariants()


def test_clear_empties_board():
    board = Board()
    gen = IdGenerator()
    fill_row(board, gen, 23)
    board.clear()
    assert len(board) == 0
    assert not board.grid.any()
