"""Simple pygame front-end for the engine.

The window runs at a fixed frame rate and advances the game by exactly one
tick per frame.  Held keys are sampled every frame and handed to
:meth:`Game.tick` as a :class:`RawInput`; debouncing is left to the engine.

Drawing follows the change events returned by the engine: the view keeps the
set of point ids it currently shows and adds or drops them as blocks spawn
and rows are cleared.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

import pygame

from .board import BOARD_WIDTH, HIDDEN_BOARD_TOP, VISIBLE_BOARD_HEIGHT
from .game_state import BlockLocked, Game, GameConfig, GameOver, NewBlock, PointRemoved, TickChange
from .input import RawInput
from .tetromino import PieceType, get_piece_color
from .utils import Id, Position, add_positions

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 20
BORDER_SIZE = 2
MARGIN_SIZE = 20
# One engine tick per frame
FPS = 60

BG_COLOR = (0, 0, 0)
BORDER_COLOR = (255, 255, 255)


def read_input(pressed: "pygame.key.ScancodeWrapper") -> RawInput:
    """Map the held keys to the engine's raw controls."""

    return RawInput(
        move_left=bool(pressed[pygame.K_LEFT]),
        move_right=bool(pressed[pygame.K_RIGHT]),
        rotate=bool(pressed[pygame.K_UP]),
        fast_drop=bool(pressed[pygame.K_DOWN]),
        instant_drop=bool(pressed[pygame.K_SPACE]),
    )


class PointView:
    """Tracks which points are on screen and whether they are still falling."""

    def __init__(self, game: Game) -> None:
        self.game = game
        self.falling: Dict[Id, PieceType] = {}
        self.locked: Dict[Id, PieceType] = {}
        self._add_active_block()

    def _add_active_block(self) -> None:
        self.falling = {p.id: p.origin_piece_type for p in self.game.active_block.points()}

    def reset(self) -> None:
        self.locked.clear()
        self._add_active_block()

    def apply(self, changes: Iterable[TickChange]) -> None:
        for change in changes:
            if isinstance(change, BlockLocked):
                self.locked.update(self.falling)
                self.falling = {}
            elif isinstance(change, PointRemoved):
                del self.locked[change.point_id]
            elif isinstance(change, NewBlock):
                self._add_active_block()

    def cells(self) -> Iterable[Tuple[Position, PieceType]]:
        """Yield the absolute position and piece type of every shown point."""

        for point_id, piece_type in self.locked.items():
            pos = self.game.get_point_position(point_id)
            if pos is None:
                raise KeyError(point_id)
            yield pos, piece_type
        block = self.game.active_block
        anchor = self.game.active_block_position
        for point_id, piece_type in self.falling.items():
            local = block.get_point_position(point_id)
            if local is None:
                raise KeyError(point_id)
            yield add_positions(anchor, local), piece_type


def board_origin() -> Tuple[int, int]:
    return (MARGIN_SIZE + BORDER_SIZE, MARGIN_SIZE + BORDER_SIZE)


def draw(screen: pygame.Surface, view: PointView) -> None:
    """Render the board frame and every visible point."""

    board_w = BOARD_WIDTH * CELL_SIZE
    board_h = VISIBLE_BOARD_HEIGHT * CELL_SIZE
    screen.fill(BG_COLOR)
    pygame.draw.rect(
        screen,
        BORDER_COLOR,
        pygame.Rect(MARGIN_SIZE, MARGIN_SIZE, board_w + 2 * BORDER_SIZE, board_h + 2 * BORDER_SIZE),
        BORDER_SIZE,
    )
    ox, oy = board_origin()
    for (x, y), piece_type in view.cells():
        # Rows above the visible field are never drawn.
        if y < HIDDEN_BOARD_TOP:
            continue
        rect = pygame.Rect(
            ox + x * CELL_SIZE, oy + (y - HIDDEN_BOARD_TOP) * CELL_SIZE, CELL_SIZE, CELL_SIZE
        )
        pygame.draw.rect(screen, get_piece_color(piece_type), rect)
        pygame.draw.rect(screen, (50, 50, 50), rect, 1)


class GameRunner:
    """Manage the game loop with pause/resume/restart controls."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config
        self._running = False
        self._paused = False
        self._game: Optional[Game] = None
        self._view: Optional[PointView] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._running = False
            elif event.key == pygame.K_p:
                self._paused = not self._paused
                LOGGER.info("Paused" if self._paused else "Resumed")
            elif event.key == pygame.K_r and self._game and self._view:
                self._game.reset()
                self._view.reset()
                pygame.display.set_caption("blockfall")

    def run(self) -> None:
        pygame.init()
        width = BOARD_WIDTH * CELL_SIZE + 2 * (MARGIN_SIZE + BORDER_SIZE)
        height = VISIBLE_BOARD_HEIGHT * CELL_SIZE + 2 * (MARGIN_SIZE + BORDER_SIZE)
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("blockfall")
        clock = pygame.time.Clock()

        self._game = Game(self.config)
        self._view = PointView(self._game)
        self._running = True
        LOGGER.info("Game started")
        try:
            while self._running:
                clock.tick(FPS)
                for event in pygame.event.get():
                    self._handle_event(event)

                if not self._paused and not self._game.game_over:
                    changes = self._game.tick(read_input(pygame.key.get_pressed()))
                    self._view.apply(changes)
                    if any(isinstance(c, GameOver) for c in changes):
                        pygame.display.set_caption("blockfall - Game over, R to restart")

                draw(screen, self._view)
                pygame.display.flip()
        finally:
            pygame.quit()
            LOGGER.info("Game stopped")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
