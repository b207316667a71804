"""Small helpers shared by the game engine.

Only logical ticks are counted here.  Wall-clock time is the concern of the
front-end driving :meth:`blockfall.game_state.Game.tick`.
"""

from __future__ import annotations

from typing import Tuple

Id = int
Position = Tuple[int, int]  # (x, y), y grows downwards

# Identifiers mirror an unsigned 32-bit counter.
MAX_ID = 2**32 - 1


def add_positions(a: Position, b: Position) -> Position:
    """Return the component-wise sum of two positions."""

    return (a[0] + b[0], a[1] + b[1])


class Timer:
    """Monotonic tick counter used for gravity and key repeat."""

    def __init__(self) -> None:
        self.ticks = 0

    def tick(self) -> None:
        self.ticks += 1

    def restart(self) -> None:
        self.ticks = 0

    def has_elapsed(self, duration: int) -> bool:
        return self.ticks >= duration

    def tick_and_restart_if_elapsed(self, duration: int) -> bool:
        """Advance by one tick and report whether ``duration`` was reached.

        When the duration has elapsed the counter is reset so the next period
        starts immediately.
        """

        self.tick()
        if self.has_elapsed(duration):
            self.restart()
            return True
        return False


class IdGenerator:
    """Source of unique point and block identifiers.

    Identifiers start at ``1`` and increase without gaps.  ``0`` is never
    handed out, which lets the board grid use it as the empty marker.
    """

    def __init__(self) -> None:
        self._next_id: Id = 1

    def next_id(self) -> Id:
        """Return the next identifier.

        Raises:
            OverflowError: If the 32-bit identifier space is exhausted.
        """

        value = self._next_id
        if value > MAX_ID:
            raise OverflowError("Identifier space exhausted")
        self._next_id = value + 1
        return value


__all__ = ["Id", "Position", "MAX_ID", "add_positions", "Timer", "IdGenerator"]
