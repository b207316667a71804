"""Input debouncing.

Front-ends report which controls are *held* on every tick.  The classes here
turn that raw state into discrete actions with keyboard-style auto repeat:
one action on press, a pause of ``wait_duration`` ticks and then one action
every ``repeat_duration`` ticks while the control stays held.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .utils import Timer

WAIT_DURATION = 30
REPEAT_DURATION = 5


@dataclass(frozen=True)
class RawInput:
    """Snapshot of the controls held during a single tick."""

    move_left: bool = False
    move_right: bool = False
    rotate: bool = False
    fast_drop: bool = False
    instant_drop: bool = False


class RepeatState(Enum):
    INACTIVE = "inactive"
    WAIT = "wait"
    REPEAT = "repeat"


class RepeatedAction:
    """Debounce/auto-repeat state machine for one discrete action."""

    def __init__(
        self, wait_duration: int = WAIT_DURATION, repeat_duration: int = REPEAT_DURATION
    ) -> None:
        self.wait_duration = wait_duration
        self.repeat_duration = repeat_duration
        self.state = RepeatState.INACTIVE
        self.timer = Timer()
        self.active = False

    def tick(self, held: bool) -> None:
        """Advance the state machine with this tick's raw ``held`` flag."""

        if not held:
            self.state = RepeatState.INACTIVE
            self.active = False
            return

        if self.state is RepeatState.INACTIVE:
            self.timer.restart()
            self.state = RepeatState.WAIT
            self.active = True
        elif self.state is RepeatState.WAIT:
            if self.timer.tick_and_restart_if_elapsed(self.wait_duration):
                self.state = RepeatState.REPEAT
                self.active = True
            else:
                self.active = False
        else:
            self.active = self.timer.tick_and_restart_if_elapsed(self.repeat_duration)


class SmartInput:
    """Debounced view over the raw controls.

    Moves and rotation are debounced.  Fast drop and instant drop are
    continuous controls and are reported exactly as held.
    """

    def __init__(
        self, wait_duration: int = WAIT_DURATION, repeat_duration: int = REPEAT_DURATION
    ) -> None:
        self._move_left = RepeatedAction(wait_duration, repeat_duration)
        self._move_right = RepeatedAction(wait_duration, repeat_duration)
        self._rotate = RepeatedAction(wait_duration, repeat_duration)
        self._fast_drop = False
        self._instant_drop = False

    def tick(self, raw: RawInput) -> None:
        self._move_left.tick(raw.move_left)
        self._move_right.tick(raw.move_right)
        self._rotate.tick(raw.rotate)
        self._fast_drop = raw.fast_drop
        self._instant_drop = raw.instant_drop

    @property
    def move_left(self) -> bool:
        return self._move_left.active

    @property
    def move_right(self) -> bool:
        return self._move_right.active

    @property
    def rotate(self) -> bool:
        return self._rotate.active

    @property
    def fast_drop(self) -> bool:
        return self._fast_drop

    @property
    def instant_drop(self) -> bool:
        return self._instant_drop


__all__ = [
    "WAIT_DURATION",
    "REPEAT_DURATION",
    "RawInput",
    "RepeatState",
    "RepeatedAction",
    "SmartInput",
]
