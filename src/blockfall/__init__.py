"""Deterministic falling-block puzzle engine."""

from .board import Board, BOARD_WIDTH, BOARD_HEIGHT, HIDDEN_BOARD_TOP, VISIBLE_BOARD_HEIGHT
from .tetromino import Block, PieceType, Point, get_shape_points, get_random_piece_type
from .input import RawInput, RepeatedAction, SmartInput
from .rotation import rotate_block
from .game_state import (
    BlockLocked,
    Game,
    GameConfig,
    GameOver,
    NewBlock,
    PointRemoved,
    TickChange,
    render_grid,
)
from .utils import IdGenerator, Timer

__all__ = [
    "Board",
    "BOARD_WIDTH",
    "BOARD_HEIGHT",
    "HIDDEN_BOARD_TOP",
    "VISIBLE_BOARD_HEIGHT",
    "Block",
    "PieceType",
    "Point",
    "get_shape_points",
    "get_random_piece_type",
    "RawInput",
    "RepeatedAction",
    "SmartInput",
    "rotate_block",
    "BlockLocked",
    "Game",
    "GameConfig",
    "GameOver",
    "NewBlock",
    "PointRemoved",
    "TickChange",
    "render_grid",
    "IdGenerator",
    "Timer",
]
