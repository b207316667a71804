from __future__ import annotations

import itertools
from typing import Callable, Optional, Sequence

import pytest

from blockfall.game_state import Game, GameConfig
from blockfall.tetromino import PieceType


class ScriptedRng:
    """Stand-in for ``random.Random`` that hands out a fixed piece order."""

    def __init__(self, pieces: Sequence[PieceType]) -> None:
        self._pieces = itertools.cycle(pieces)

    def choice(self, _seq):
        return next(self._pieces)


@pytest.fixture
def make_game() -> Callable[..., Game]:
    def factory(*pieces: PieceType, config: Optional[GameConfig] = None) -> Game:
        return Game(config, rng=ScriptedRng(pieces or (PieceType.O,)))

    return factory
