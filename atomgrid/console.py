"""An in-memory model of the console's tile map, sprites, palette and sound."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

WIDTH = 32
HEIGHT = 28
MAX_SPRITES = 64


@dataclass
class Sprite:
    """One hardware sprite."""

    index: int
    x: int
    y: int
    tile: int
    visible: bool = True


class Console:
    """Holds everything the game draws or plays during a frame."""

    width = WIDTH
    height = HEIGHT

    def __init__(self) -> None:
        self._tiles = [[0] * WIDTH for _ in range(HEIGHT)]
        self.sprites: list[Sprite] = []
        self.half_brightness = False
        self.sounds: list[tuple[Any, int]] = []
        self._pause_requested = False

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError(f"tile position ({x}, {y}) is off the map")

    def load_tile_map(self, x: int, y: int, tiles: Iterable[int]) -> None:
        """Write tiles in reading order from (x, y), wrapping onto later rows."""
        tiles = list(tiles)
        self._check(x, y)
        start = y * WIDTH + x
        if start + len(tiles) > WIDTH * HEIGHT:
            raise IndexError("tile run goes past the end of the map")
        for offset, tile in enumerate(tiles, start):
            row, column = divmod(offset, WIDTH)
            self._tiles[row][column] = tile

    def load_tile_area(
        self, x: int, y: int, tiles: Iterable[int], width: int, height: int
    ) -> None:
        """Write a width-by-height block of tiles given row by row."""
        tiles = list(tiles)
        if width < 0 or height < 0:
            raise ValueError("area dimensions must not be negative")
        if len(tiles) != width * height:
            raise ValueError(f"expected {width * height} tiles, got {len(tiles)}")
        if width and height:
            self._check(x, y)
            self._check(x + width - 1, y + height - 1)
        for row in range(height):
            self._tiles[y + row][x : x + width] = tiles[row * width : (row + 1) * width]

    def tile_at(self, x: int, y: int) -> int:
        """The tile index shown at (x, y)."""
        self._check(x, y)
        return self._tiles[y][x]

    def add_sprite(self, x: int, y: int, tile: int) -> Sprite:
        """Allocate the next sprite slot."""
        if len(self.sprites) >= MAX_SPRITES:
            raise RuntimeError("sprite table is full")
        sprite = Sprite(len(self.sprites), x, y, tile)
        self.sprites.append(sprite)
        return sprite

    def move_sprite(self, sprite: Sprite, x: int, y: int) -> None:
        """Place a sprite and make it visible."""
        sprite.x = x
        sprite.y = y
        sprite.visible = True

    def hide_sprite(self, sprite: Sprite) -> None:
        sprite.visible = False

    def clear_sprites(self) -> None:
        """Release every sprite slot."""
        self.sprites.clear()

    @property
    def visible_sprites(self) -> list[Sprite]:
        return [sprite for sprite in self.sprites if sprite.visible]

    def set_brightness(self, half: bool) -> None:
        """Show the background at half or full brightness."""
        self.half_brightness = bool(half)

    def play_sound(self, effect: Any, channel: int) -> None:
        """Start a sound effect on the given channel."""
        self.sounds.append((effect, channel))

    @property
    def last_sound(self) -> Optional[tuple[Any, int]]:
        return self.sounds[-1] if self.sounds else None

    def request_pause(self) -> None:
        """Record a press of the pause button."""
        self._pause_requested = True

    def take_pause_request(self) -> bool:
        """Return whether pause was pressed, clearing the request."""
        requested = self._pause_requested
        self._pause_requested = False
        return requested