"""The 10 by 7 board of atoms and how it is drawn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

WIDTH = 10
HEIGHT = 7
SQUARE_COUNT = WIDTH * HEIGHT

OFFSET_X = 2
OFFSET_Y = 3

ATOMS2_TILECOUNT = 72
ANIMATED_TILE_INDEX = 208

PLAYER_BANKS = (9, 9, 9, 10, 10, 10)
IDLE_INDEX = (0, 4)
CRITICAL_INDEX = (2, 6, 8)
GROW_INDEX = (20, 22, 24, 26)
TILE_OFFSET = (0, 0, 36, 72, 108, 144, 180)

CURSOR_START_X = 10
CURSOR_START_Y = 18

EXPLODING = 5

_IDLE_FRAMES = {0: 0, 8: 1, 16: 2, 24: 3}
_GROW_FRAMES = {0: 0, 5: 1, 10: 2, 15: 3}


@dataclass
class GridSquare:
    """One cell of the board."""

    x: int = 0
    y: int = 0
    player: int = 0
    size: int = 0
    grow_size: int = 0
    changed: int = 0
    max_size: int = 0
    explode: int = 0
    animate: int = 0
    change_anim: int = 0
    tile_x: int = 0
    tile_y: int = 0


def _max_size(x: int, y: int) -> int:
    on_x_edge = x in (0, WIDTH - 1)
    on_y_edge = y in (0, HEIGHT - 1)
    if on_x_edge and on_y_edge:
        return 2
    if on_x_edge or on_y_edge:
        return 3
    return 4


def _pick(table: tuple[int, ...], index: int, what: str) -> int:
    if not 0 <= index < len(table):
        raise ValueError(f"no {what} tiles for index {index}")
    return table[index]


def idle_frame(anim_counter: int) -> Optional[int]:
    """The idle animation frame to load at this counter, or None."""
    return _IDLE_FRAMES.get(anim_counter)


def grow_frame(anim_counter: int) -> Optional[int]:
    """The grow animation frame to load at this counter, or None."""
    return _GROW_FRAMES.get(anim_counter)


def cursor_sprite_positions(cursor_x: int, cursor_y: int) -> list[list[tuple[int, int]]]:
    """Screen positions of the twelve cursor sprites, four corners of three."""
    x = (cursor_x * 24 + CURSOR_START_X) & 0xFF
    y = (cursor_y * 24 + CURSOR_START_Y) & 0xFF
    return [
        [(x, y), (x + 8, y), (x, y + 8)],
        [(x + 12, y), (x + 20, y), (x + 20, y + 8)],
        [(x, y + 12), (x, y + 20), (x + 8, y + 20)],
        [(x + 20, y + 12), (x + 12, y + 20), (x + 20, y + 20)],
    ]


class Grid:
    """The board: squares in reading order, row by row."""

    def __init__(self) -> None:
        self._squares = [GridSquare() for _ in range(SQUARE_COUNT)]
        self.setup()

    def setup(self) -> None:
        """Clear ownership and set each square's position and capacity."""
        for index, square in enumerate(self._squares):
            y, x = divmod(index, WIDTH)
            square.player = 0
            square.max_size = _max_size(x, y)
            square.x = x
            square.y = y
            square.tile_x = x * 3 + OFFSET_X
            square.tile_y = y * 3 + OFFSET_Y

    def square(self, x: int, y: int) -> GridSquare:
        """The square at column ``x``, row ``y``."""
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError(f"square ({x}, {y}) is off the board")
        return self._squares[y * WIDTH + x]

    def __iter__(self) -> Iterator[GridSquare]:
        return iter(self._squares)

    def __len__(self) -> int:
        return len(self._squares)

    def increment(self, x: int, y: int, player: int) -> None:
        """Add an atom to a square, claiming it for ``player``."""
        square = self.square(x, y)
        square.grow_size += 1
        square.changed = 1
        square.player = player

    def try_increment(self, x: int, y: int, player: int) -> bool:
        """Add an atom if the square is empty or already ``player``'s."""
        square = self.square(x, y)
        if square.player not in (0, player):
            return False
        self.increment(x, y, player)
        return True

    def player_at(self, x: int, y: int) -> int:
        return self.square(x, y).player

    def size_at(self, x: int, y: int) -> int:
        return self.square(x, y).size

    def neighbours(self, x: int, y: int) -> list[tuple[int, int]]:
        """Squares an explosion at (x, y) spreads to, in spreading order."""
        self.square(x, y)
        last_x = WIDTH - 1
        last_y = HEIGHT - 1
        right, left = (x + 1, y), (x - 1, y)
        up, down = (x, y - 1), (x, y + 1)
        if y == 0 and x == 0:
            return [right, down]
        if y == 0 and x == last_x:
            return [left, down]
        if y == 0:
            return [right, left, down]
        if y == last_y and x == 0:
            return [right, up]
        if x == 0:
            return [right, up, down]
        if y == last_y and x == last_x:
            return [left, up]
        if y == last_y:
            return [right, left, up]
        if x == last_x:
            return [left, up, down]
        return [right, up, down, left]

    def reset_anims(self) -> None:
        """Turn finished grow animations back into a redraw request."""
        for square in self._squares:
            if square.change_anim == 1:
                square.change_anim = 0
                square.animate = 1

    def square_tiles(self, square: GridSquare) -> tuple[int, int, int, int]:
        """The 2x2 tile indices showing a square, row by row."""
        if square.player == 0:
            return (0, 0, 0, 0)
        base = ANIMATED_TILE_INDEX + _pick(TILE_OFFSET, square.player, "player")
        size = square.size
        if square.change_anim == 0:
            if size == EXPLODING:
                start = base + GROW_INDEX[size - 2]
                offset = 8
            elif size + 1 == square.max_size:
                start = base + _pick(CRITICAL_INDEX, size - 1, "critical")
                offset = 10
            else:
                start = base + _pick(IDLE_INDEX, size - 1, "idle")
                offset = 10
        else:
            if size == EXPLODING:
                size -= 1
            start = base + _pick(GROW_INDEX, size - 1, "grow")
            offset = 8
        return (start, start + 1, start + offset, start + offset + 1)

    def draw(self, console) -> None:
        """Redraw every square flagged for animation and clear the flag."""
        for square in self._squares:
            if square.animate:
                console.load_tile_area(
                    square.tile_x, square.tile_y, self.square_tiles(square), 2, 2
                )
                square.animate = 0