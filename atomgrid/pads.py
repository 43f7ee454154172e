"""Two-port controller input with per-button edge detection."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, NamedTuple


class ButtonState(enum.IntEnum):
    """How a button changed between two frames."""

    UP = 0
    RELEASED = 1
    HELD = 2
    PRESSED = 3


class Key(enum.IntFlag):
    """Bits of the combined controller status word."""

    UP = 0x0001
    DOWN = 0x0002
    LEFT = 0x0004
    RIGHT = 0x0008
    BUTTON_1 = 0x0010
    BUTTON_2 = 0x0020
    B_UP = 0x0040
    B_DOWN = 0x0080
    B_LEFT = 0x0100
    B_RIGHT = 0x0200
    B_BUTTON_1 = 0x0400
    B_BUTTON_2 = 0x0800


class PadKeys(NamedTuple):
    """The status bits that make up one controller."""

    a: int
    b: int
    up: int
    down: int
    left: int
    right: int


PORT_A = PadKeys(Key.BUTTON_1, Key.BUTTON_2, Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT)
PORT_B = PadKeys(
    Key.B_BUTTON_1, Key.B_BUTTON_2, Key.B_UP, Key.B_DOWN, Key.B_LEFT, Key.B_RIGHT
)


def button_state(new: int, previous: int, mask: int) -> ButtonState:
    """Classify the change of the bits in ``mask`` between two status words."""
    now = bool(new & mask)
    before = bool(previous & mask)
    if now and before:
        return ButtonState.HELD
    if now:
        return ButtonState.PRESSED
    if before:
        return ButtonState.RELEASED
    return ButtonState.UP


@dataclass
class Pad:
    """The button states of one controller for the current frame."""

    a: ButtonState = ButtonState.UP
    b: ButtonState = ButtonState.UP
    up: ButtonState = ButtonState.UP
    down: ButtonState = ButtonState.UP
    left: ButtonState = ButtonState.UP
    right: ButtonState = ButtonState.UP
    current: int = 0
    previous: int = 0

    def update(self, current: int, previous: int, keys: PadKeys) -> None:
        """Recompute every button from two status words."""
        self.current = current
        self.previous = previous
        self.a = button_state(current, previous, keys.a)
        self.b = button_state(current, previous, keys.b)
        self.up = button_state(current, previous, keys.up)
        self.down = button_state(current, previous, keys.down)
        self.left = button_state(current, previous, keys.left)
        self.right = button_state(current, previous, keys.right)


class Pads:
    """Both controllers, fed from one status word per frame."""

    def __init__(self) -> None:
        self._pads = (Pad(), Pad())

    def reset(self) -> None:
        """Forget the previous status word of each controller."""
        for pad in self._pads:
            pad.previous = 0

    def update(self, value: int) -> None:
        """Feed this frame's status word to both controllers."""
        value &= 0xFFFF
        first, second = self._pads
        previous = first.current
        first.update(value, previous, PORT_A)
        second.update(value, previous, PORT_B)

    def __getitem__(self, index: int) -> Pad:
        return self._pads[index]

    def __iter__(self) -> Iterator[Pad]:
        return iter(self._pads)

    def __len__(self) -> int:
        return len(self._pads)