"""Simple ASCII demo for the engine.

Run with: `python -m blockfall`

The game runs headless for a number of ticks with a scripted input pattern
and the final frame is printed.  Hidden rows above the visible field are
left out.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from . import Game, GameConfig, RawInput, render_grid
from .board import HIDDEN_BOARD_TOP
from .game_state import GameOver, PointRemoved
from .tetromino import PieceType

LOGGER = logging.getLogger(__name__)


def _print_grid(grid: List[List[Optional[PieceType]]]) -> None:
    for row in grid[HIDDEN_BOARD_TOP:]:
        print("".join(cell.value if cell else "." for cell in row))


def scripted_input(tick: int) -> RawInput:
    """Return a deterministic input pattern that spreads pieces out."""

    phase = (tick // 40) % 4
    return RawInput(
        move_left=phase == 0,
        move_right=phase == 2,
        rotate=tick % 90 == 0,
        fast_drop=phase == 3,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--ticks", type=int, default=600, help="Number of ticks to simulate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece selection")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    game = Game(GameConfig(random_seed=args.seed))
    removed = 0
    for tick in range(args.ticks):
        changes = game.tick(scripted_input(tick))
        removed += sum(isinstance(c, PointRemoved) for c in changes)
        if any(isinstance(c, GameOver) for c in changes):
            LOGGER.info("Game over after %d ticks", tick + 1)
            break
    _print_grid(render_grid(game))
    print(f"Points removed: {removed}")


if __name__ == "__main__":
    main()
