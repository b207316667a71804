"""Rotation of the active block."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from .board import BOARD_HEIGHT, BOARD_WIDTH
from .tetromino import Block
from .utils import Id, Position

FitsFn = Callable[[List[Position], Position], bool]


def rotate_block(
    block: Block, block_pos: Position, fits: FitsFn
) -> Optional[Tuple[Dict[Id, Position], Position]]:
    """Return the layout and anchor of ``block`` turned by 90 degrees.

    Points are turned about the integer centre of the block's bounding box.
    The rotated points are then shifted so their minimum coordinates become
    the new anchor.  Only this single placement is tried: if it leaves the
    board or ``fits`` rejects it, ``None`` is returned and the caller keeps
    the current orientation.

    ``fits`` receives the normalised local positions (in point order) and the
    candidate anchor.
    """

    w, h = block.width(), block.height()
    cx = w // 2
    cy = h // 2

    rotated: List[Position] = []
    for x, y in block.local_positions():
        rotated.append((-(y - cy) + cx, (x - cx) + cy))

    min_x = min(x for x, _ in rotated)
    min_y = min(y for _, y in rotated)

    anchor_x = block_pos[0] + min_x
    anchor_y = block_pos[1] + min_y
    # The extents are compared swapped: after a quarter turn the old height
    # spans x and the old width spans y.
    if (
        anchor_x < 0
        or anchor_x + h >= BOARD_WIDTH
        or anchor_y < 0
        or anchor_y + w >= BOARD_HEIGHT
    ):
        return None

    new_anchor = (anchor_x, anchor_y)
    normalised = [(x - min_x, y - min_y) for x, y in rotated]
    if not fits(normalised, new_anchor):
        return None

    new_layout = {point.id: pos for point, pos in zip(block.points(), normalised)}
    return new_layout, new_anchor


__all__ = ["FitsFn", "rotate_block"]
