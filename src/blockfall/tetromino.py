"""Piece catalog and the active block.

The catalog stores, for each of the seven piece types, the local offsets of
its four cells as ``(x, y)`` pairs together with a display colour.  The
offsets are deliberately left as authored: they are not normalised to a
common bounding box and the rotation geometry depends on them exactly.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .utils import Id, IdGenerator, Position

Color = Tuple[int, int, int]


class PieceType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


@dataclass(frozen=True)
class PieceInfo:
    points: Tuple[Position, ...]
    color: Color


PIECES: Dict[PieceType, PieceInfo] = {
    PieceType.I: PieceInfo(((0, 0), (0, 1), (0, 2), (0, 3)), (0, 255, 255)),
    PieceType.J: PieceInfo(((0, 0), (0, 1), (1, 1), (2, 1)), (0, 0, 255)),
    PieceType.L: PieceInfo(((0, 1), (1, 1), (2, 1), (2, 0)), (255, 165, 0)),
    PieceType.O: PieceInfo(((0, 0), (1, 0), (1, 1), (0, 1)), (255, 255, 0)),
    PieceType.S: PieceInfo(((0, 1), (1, 1), (1, 0), (2, 0)), (0, 255, 0)),
    PieceType.T: PieceInfo(((0, 1), (1, 1), (1, 0), (2, 1)), (128, 0, 128)),
    PieceType.Z: PieceInfo(((0, 0), (1, 0), (1, 1), (2, 1)), (255, 0, 0)),
}


def get_shape_points(piece_type: PieceType) -> Tuple[Position, ...]:
    """Return the canonical local offsets for ``piece_type``."""

    return PIECES[piece_type].points


def get_piece_color(piece_type: PieceType) -> Color:
    return PIECES[piece_type].color


def get_random_piece_type(rng: random.Random) -> PieceType:
    """Return a uniformly chosen piece type.

    There is no bag or history; the same type may come up repeatedly.
    """

    return rng.choice(list(PieceType))


@dataclass(frozen=True)
class Point:
    """A single cell, identified for its whole lifetime.

    ``origin_piece_type`` is kept after the point is locked so renderers can
    still colour it.
    """

    id: Id
    origin_piece_type: PieceType


class Block:
    """The active falling piece.

    Point positions are local to the block's anchor on the board.  The layout
    only changes as a whole through :meth:`replace_layout`.
    """

    def __init__(
        self,
        id: Id,
        piece_type: PieceType,
        points: List[Point],
        points_pos: Dict[Id, Position],
    ) -> None:
        if set(points_pos) != {p.id for p in points}:
            raise ValueError("Layout must hold exactly one position per point")
        self.id = id
        self.piece_type = piece_type
        self._points = list(points)
        self._points_pos = dict(points_pos)

    @classmethod
    def spawn(cls, piece_type: PieceType, id_generator: IdGenerator) -> "Block":
        """Create a block of ``piece_type`` with freshly generated ids.

        The block id is allocated first, then one id per cell in catalog
        order.
        """

        block_id = id_generator.next_id()
        points: List[Point] = []
        points_pos: Dict[Id, Position] = {}
        for pos in get_shape_points(piece_type):
            point = Point(id_generator.next_id(), piece_type)
            points.append(point)
            points_pos[point.id] = pos
        return cls(block_id, piece_type, points, points_pos)

    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def points_pos(self) -> Dict[Id, Position]:
        """Return a copy of the local layout."""

        return dict(self._points_pos)

    def local_positions(self) -> List[Position]:
        """Return local positions in point order."""

        return [self._points_pos[p.id] for p in self._points]

    def get_point_position(self, point_id: Id) -> Optional[Position]:
        return self._points_pos.get(point_id)

    def width(self) -> int:
        """Maximum local x among the points (not a cell count)."""

        return max(x for x, _ in self._points_pos.values())

    def height(self) -> int:
        """Maximum local y among the points (not a cell count)."""

        return max(y for _, y in self._points_pos.values())

    def replace_layout(self, points_pos: Dict[Id, Position]) -> None:
        if set(points_pos) != set(self._points_pos):
            raise ValueError("Layout must hold exactly one position per point")
        self._points_pos = dict(points_pos)


__all__ = [
    "Color",
    "PieceType",
    "PieceInfo",
    "PIECES",
    "get_shape_points",
    "get_piece_color",
    "get_random_piece_type",
    "Point",
    "Block",
]
