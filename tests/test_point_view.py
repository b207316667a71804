import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pytest.importorskip("pygame")

from blockfall.game_state import Game, GameConfig, render_grid
from blockfall.input import RawInput
from blockfall.run_pygame import PointView, read_input


def view_grid(view: PointView, game: Game):
    grid = [[None] * game.board.width for _ in range(game.board.height)]
    for (x, y), piece_type in view.cells():
        grid[y][x] = piece_type
    return grid


def test_view_follows_change_events():
    game = Game(GameConfig(random_seed=2))
    view = PointView(game)
    for tick in range(2000):
        changes = game.tick(RawInput(instant_drop=tick % 3 == 0, move_left=tick % 7 == 0))
        view.apply(changes)
        if game.game_over:
            break
        assert view_grid(view, game) == render_grid(game)


def test_view_reset_drops_locked_points():
    game = Game(GameConfig(random_seed=2))
    view = PointView(game)
    view.apply(game.tick(RawInput(instant_drop=True)))
    assert view.locked
    game.reset()
    view.reset()
    assert not view.locked
    assert set(view.falling) == {p.id for p in game.active_block.points()}


def test_read_input_maps_arrow_keys():
    import pygame

    pressed = {
        pygame.K_LEFT: True,
        pygame.K_RIGHT: False,
        pygame.K_UP: True,
        pygame.K_DOWN: False,
        pygame.K_SPACE: False,
    }
    assert read_input(pressed) == RawInput(move_left=True, rotate=True)
