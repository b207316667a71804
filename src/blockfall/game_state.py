"""High level game state and the per-tick simulation step."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Union

from .board import BOARD_HEIGHT, BOARD_WIDTH, Board
from .input import REPEAT_DURATION, WAIT_DURATION, RawInput, SmartInput
from .rotation import rotate_block
from .tetromino import Block, PieceType, get_random_piece_type
from .utils import Id, IdGenerator, Position, Timer, add_positions

LOGGER = logging.getLogger(__name__)

SPAWN_POSITION: Position = (4, 0)


@dataclass(frozen=True)
class BlockLocked:
    """The active block was written into the board."""


@dataclass(frozen=True)
class PointRemoved:
    """A locked point disappeared with a cleared row."""

    point_id: Id


@dataclass(frozen=True)
class NewBlock:
    """A new active block was spawned."""


@dataclass(frozen=True)
class GameOver:
    """The new active block overlaps locked points."""


TickChange = Union[BlockLocked, PointRemoved, NewBlock, GameOver]


@dataclass
class GameConfig:
    """Tunables for a game session.

    Durations are measured in ticks.  ``drop_speed`` is the number of ticks
    the active block needs to fall one row.
    """

    drop_speed: int = 10
    wait_duration: int = WAIT_DURATION
    repeat_duration: int = REPEAT_DURATION
    random_seed: Optional[int] = None
    spawn_position: Position = SPAWN_POSITION

    @property
    def fast_drop_speed(self) -> int:
        return max(self.drop_speed // 2, 1)


class Game:
    """Owns the board and the active block and advances them tick by tick."""

    def __init__(
        self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.id_generator = IdGenerator()
        self.input = SmartInput(self.config.wait_duration, self.config.repeat_duration)
        self.board = Board()
        self.drop_timer = Timer()
        self.game_over = False
        self._instant_drop_held = False
        self.active_block = self._new_block()
        self.active_block_position = self.config.spawn_position
        LOGGER.debug("Spawned %s block", self.active_block.piece_type.value)

    def _new_block(self) -> Block:
        return Block.spawn(get_random_piece_type(self.rng), self.id_generator)

    def reset(self) -> None:
        """Start a new game on an empty board.

        Identifiers keep increasing across resets so renderers never see an id
        reused.
        """

        self.board.clear()
        self.input = SmartInput(self.config.wait_duration, self.config.repeat_duration)
        self.drop_timer.restart()
        self.game_over = False
        self._instant_drop_held = False
        self._spawn_block()
        LOGGER.info("Game reset")

    # Queries ----------------------------------------------------------
    def get_point_position(self, point_id: Id) -> Optional[Position]:
        """Return the board position of a locked point.

        Points of the falling block are not on the board yet; query
        :attr:`active_block` for those.
        """

        return self.board.get_point_position(point_id)

    def active_point_positions(self) -> List[Position]:
        """Return the absolute positions of the active block's points."""

        return [
            add_positions(self.active_block_position, pos)
            for pos in self.active_block.local_positions()
        ]

    # Simulation -------------------------------------------------------
    def tick(self, raw_input: RawInput) -> List[TickChange]:
        """Advance the simulation by one frame.

        Returns the changes that happened in the order they occurred.  The list
        is empty unless the active block locked.
        """

        if self.game_over:
            return []

        block = self.active_block
        block_pos = self.active_block_position
        self.input.tick(raw_input)

        if self.input.move_left:
            if block_pos[0] > 0 and not self.board.collides(
                block.local_positions(), (block_pos[0] - 1, block_pos[1])
            ):
                block_pos = (block_pos[0] - 1, block_pos[1])
        if self.input.move_right:
            if block_pos[0] + block.width() < BOARD_WIDTH - 1 and not self.board.collides(
                block.local_positions(), (block_pos[0] + 1, block_pos[1])
            ):
                block_pos = (block_pos[0] + 1, block_pos[1])
        if self.input.rotate:
            rotated = rotate_block(
                block,
                block_pos,
                lambda points, anchor: not self.board.collides(points, anchor),
            )
            if rotated is not None:
                new_layout, block_pos = rotated
                block.replace_layout(new_layout)

        drop_speed = (
            self.config.fast_drop_speed if self.input.fast_drop else self.config.drop_speed
        )

        instant_drop = self.input.instant_drop and not self._instant_drop_held
        self._instant_drop_held = self.input.instant_drop
        if instant_drop:
            while not self._is_resting(block_pos):
                block_pos = (block_pos[0], block_pos[1] + 1)
            self.drop_timer.restart()
            return self._lock_and_spawn(block_pos)

        if self.drop_timer.tick_and_restart_if_elapsed(drop_speed):
            if self._is_resting(block_pos):
                return self._lock_and_spawn(block_pos)
            block_pos = (block_pos[0], block_pos[1] + 1)

        self.active_block_position = block_pos
        return []

    def _is_resting(self, block_pos: Position) -> bool:
        """Return ``True`` if the active block cannot fall any further."""

        return block_pos[1] + self.active_block.height() == BOARD_HEIGHT - 1 or (
            self.board.collides(
                self.active_block.local_positions(), (block_pos[0], block_pos[1] + 1)
            )
        )

    def _lock_and_spawn(self, block_pos: Position) -> List[TickChange]:
        changes: List[TickChange] = []
        self._lock_active_block(block_pos)
        changes.append(BlockLocked())

        for point in self.board.clear_filled_rows():
            changes.append(PointRemoved(point.id))

        self._spawn_block()
        changes.append(NewBlock())

        if self.board.collides(
            self.active_block.local_positions(), self.active_block_position
        ):
            self.game_over = True
            changes.append(GameOver())
            LOGGER.info("Game over: %d points left on the board", len(self.board))
        return changes

    def _lock_active_block(self, block_pos: Position) -> None:
        block = self.active_block
        positions = [add_positions(block_pos, pos) for pos in block.local_positions()]
        self.board.lock_points(block.points(), positions)
        LOGGER.debug(
            "Locked %s block %d at %s", block.piece_type.value, block.id, block_pos
        )

    def _spawn_block(self) -> None:
        self.active_block = self._new_block()
        self.active_block_position = self.config.spawn_position
        LOGGER.debug("Spawned %s block", self.active_block.piece_type.value)


def render_grid(game: Game) -> List[List[Optional[PieceType]]]:
    """Return the board as rows of piece types with the active block overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without touching the board itself.
    """

    board = game.board
    grid: List[List[Optional[PieceType]]] = [
        [None] * board.width for _ in range(board.height)
    ]
    for point_id, (x, y) in board.point_positions().items():
        grid[y][x] = board.get_point(point_id).origin_piece_type
    for x, y in game.active_point_positions():
        if board.in_bounds((x, y)):
            grid[y][x] = game.active_block.piece_type
    return grid


__all__ = [
    "SPAWN_POSITION",
    "BlockLocked",
    "PointRemoved",
    "NewBlock",
    "GameOver",
    "TickChange",
    "GameConfig",
    "Game",
    "render_grid",
]
