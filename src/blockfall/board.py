"""Board representation for the playfield.

Locked points are stored twice: in a grid of point ids for constant time
collision checks and in a map from point id to position for constant time
lookups by renderers.  Every mutation goes through :meth:`Board._put` and
:meth:`Board._take` so both views always agree.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import Point
from .utils import Id, Position, add_positions

LOGGER = logging.getLogger(__name__)

# Dimensions of the board including the rows hidden above the visible field.
BOARD_WIDTH = 10
BOARD_HEIGHT = 24
HIDDEN_BOARD_TOP = 4
VISIBLE_BOARD_HEIGHT = BOARD_HEIGHT - HIDDEN_BOARD_TOP

# Point ids start at 1, so 0 marks an empty cell.
EMPTY = 0

Grid = NDArray[np.uint32]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.uint32)


class Board:
    """Playfield holding the locked points."""

    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()
        self._points: Dict[Id, Point] = {}
        self._points_pos: Dict[Id, Position] = {}

    # Internal helpers -------------------------------------------------
    def _put(self, point: Point, pos: Position) -> None:
        x, y = pos
        if self.grid[y, x] != EMPTY:
            raise RuntimeError(f"Cell {pos} is already occupied")
        self.grid[y, x] = point.id
        self._points[point.id] = point
        self._points_pos[point.id] = pos

    def _take(self, pos: Position) -> Optional[Point]:
        x, y = pos
        point_id = int(self.grid[y, x])
        if point_id == EMPTY:
            return None
        self.grid[y, x] = EMPTY
        del self._points_pos[point_id]
        return self._points.pop(point_id)

    # Queries ----------------------------------------------------------
    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, pos: Position) -> Optional[Point]:
        """Return the point locked at ``pos``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not self.in_bounds(pos):
            raise IndexError("Cell out of bounds")
        point_id = int(self.grid[pos[1], pos[0]])
        return self._points[point_id] if point_id != EMPTY else None

    def is_empty(self, pos: Position) -> bool:
        """Return ``True`` if the cell at ``pos`` is free.

        Any coordinates outside the board are treated as occupied so placements
        that leave the board are rejected as collisions.
        """

        if not self.in_bounds(pos):
            return False
        return bool(self.grid[pos[1], pos[0]] == EMPTY)

    def collides(self, local_positions: Iterable[Position], anchor: Position) -> bool:
        """Return ``True`` if a block placed at ``anchor`` hits a locked cell."""

        return any(
            not self.is_empty(add_positions(anchor, pos)) for pos in local_positions
        )

    def get_point_position(self, point_id: Id) -> Optional[Position]:
        return self._points_pos.get(point_id)

    def get_point(self, point_id: Id) -> Point:
        """Return a locked point by id.

        Raises:
            KeyError: If no such point is locked on the board.
        """

        return self._points[point_id]

    def point_positions(self) -> Dict[Id, Position]:
        return dict(self._points_pos)

    def __len__(self) -> int:
        return len(self._points_pos)

    # Mutations --------------------------------------------------------
    def lock_points(self, points: Iterable[Point], positions: Iterable[Position]) -> None:
        """Write ``points`` into the board at the given absolute positions.

        Raises:
            RuntimeError: If a target cell is already occupied.
            IndexError: If a target cell is outside the board.
        """

        for point, pos in zip(points, positions):
            if not self.in_bounds(pos):
                raise IndexError("Block out of bounds")
            self._put(point, pos)

    def find_filled_rows(self) -> List[int]:
        """Return the indices of completely filled rows, top to bottom."""

        full_rows = np.all(self.grid != EMPTY, axis=1)
        return [int(y) for y in np.flatnonzero(full_rows)]

    def remove_rows(self, rows: List[int]) -> List[Point]:
        """Remove ``rows`` and let the rows above fall into the gap.

        Rows are processed bottom to top.  Each removed row increases the
        distance the remaining rows above it move down.  Removed points are
        returned bottom row first, left to right within a row.
        """

        removed: List[Point] = []
        to_remove = set(rows)
        drop = 0
        for y in range(self.height - 1, -1, -1):
            if y in to_remove:
                for x in range(self.width):
                    point = self._take((x, y))
                    if point is not None:
                        removed.append(point)
                drop += 1
            elif drop > 0:
                for x in range(self.width):
                    point = self._take((x, y))
                    if point is not None:
                        self._put(point, (x, y + drop))
        if rows:
            LOGGER.debug("Removed rows %s (%d points)", sorted(rows), len(removed))
        return removed

    def clear_filled_rows(self) -> List[Point]:
        """Remove every filled row and return the removed points."""

        return self.remove_rows(self.find_filled_rows())

    def clear(self) -> None:
        self.grid = create_empty_grid()
        self._points.clear()
        self._points_pos.clear()

    def check_invariants(self) -> None:
        """Verify that the grid and the id map describe the same points.

        Raises:
            RuntimeError: If the two representations disagree.
        """

        from_grid = {
            int(self.grid[y, x]): (int(x), int(y))
            for y, x in zip(*np.nonzero(self.grid))
        }
        if from_grid != self._points_pos:
            raise RuntimeError("Board grid and point map are out of sync")
        if set(self._points) != set(self._points_pos):
            raise RuntimeError("Board point registry is out of sync")


__all__ = [
    "BOARD_WIDTH",
    "BOARD_HEIGHT",
    "HIDDEN_BOARD_TOP",
    "VISIBLE_BOARD_HEIGHT",
    "EMPTY",
    "Grid",
    "create_empty_grid",
    "Board",
]
