"""Menus, help pages and result screens."""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence

from .assets import tile_count
from .classic import PLAYERS, PlayerType
from .console import Console, Sprite
from .pads import ButtonState, Pads
from .sounds import SoundEffect
from .statemachine import State

MODE_CLASSIC = 0
MODE_CHALLENGE = 1
MODE_HELP = 2
MODE_COUNT = 3

MAX_LARGE_NUMBER = 999999
MAX_LARGE_DIGITS = 6
LARGE_NUMBERS_TILE_INDEX = tile_count("GameOverBacking")

TITLE_FIRST_COLOUR = 11
TITLE_LAST_COLOUR = 15
TITLE_FRAMES_PER_STEP = 8
TITLE_SHADOW_ENTRY = 1
TITLE_HIGHLIGHT_ENTRY = 2
TITLE_TRAIL_ENTRY = 15

MODE_CURSOR_PLACES = ((24, 55), (0, 92), (50, 125))
POINTER_TILE_INDEX = tile_count("SelectModeScreen")
POINTER_SPRITES = 8
POINTER_SWING = 4

PLAYER_POSITIONS = ((16, 8), (104, 8), (192, 8), (16, 96), (104, 96), (192, 96))
PLAYER_CURSOR_TILE_INDEX = tile_count("PlayerSelectBacking") + tile_count("MenuProfessors")
PORTRAIT_SIZE = 6
MIN_PLAYERS = 2
DEFAULT_PLAYER_TYPES = (
    PlayerType.HUMAN,
    PlayerType.CPU,
    PlayerType.NONE,
    PlayerType.NONE,
    PlayerType.NONE,
    PlayerType.NONE,
)

_PLAYER_CURSOR_LAYOUT = (
    ((0, 0), (8, 0), (0, 8)),
    ((32, 0), (40, 0), (40, 8)),
    ((0, 32), (0, 40), (8, 40)),
    ((40, 32), (32, 40), (40, 40)),
)


class _Picture(NamedTuple):
    """A full-screen picture: its asset name and the ROM bank holding it."""

    name: str
    bank: int


HELP_SCREENS = (
    _Picture("help_1", 8),
    _Picture("help_1_1", 8),
    _Picture("help_2", 8),
    _Picture("help_3", 8),
    _Picture("help_3_1", 8),
    _Picture("help_4", 8),
)

WINNER_SCREENS = tuple(
    _Picture(f"Winner_{player}_{kind}", 4 + 2 * (kind - 1) + (1 if player > 3 else 0))
    for kind in (1, 2)
    for player in range(1, PLAYERS + 1)
)


def winner_screen_index(winner: int, player_type: int) -> int:
    """Index into ``WINNER_SCREENS`` of the picture for this winner."""
    if not 1 <= winner <= PLAYERS:
        raise ValueError(f"no such player: {winner}")
    index = winner - 1
    if player_type == PlayerType.CPU:
        index += PLAYERS
    return index


def large_digit_tiles(number: int, digits: int) -> list[tuple[int, int, int, int]]:
    """The 2x2 tiles of each large digit of ``number``, most significant first.

    Numbers above 999999 show as nines; at most six digits are drawn and
    only the lowest ``digits`` digits of the number appear.
    """
    if number < 0:
        raise ValueError(f"cannot show a negative number: {number}")
    if digits < 0:
        raise ValueError(f"digit count must not be negative: {digits}")
    digits = min(digits, MAX_LARGE_DIGITS)
    number = min(number, MAX_LARGE_NUMBER)
    base = LARGE_NUMBERS_TILE_INDEX
    tiles = []
    for power in reversed(range(digits)):
        digit = (number // 10**power) % 10
        tiles.append((base + digit * 2, base + 1 + digit * 2, base + 20 + digit * 2, base + 21 + digit * 2))
    return tiles


def _released(button: ButtonState) -> bool:
    return button == ButtonState.RELEASED


class TitleScreen(State):
    """The title picture with a colour band running along the logo."""

    background = "Tile_Animated"

    def __init__(self, console: Console, pads: Pads, on_continue: Callable[[], None]) -> None:
        self._console = console
        self._pads = pads
        self._on_continue = on_continue
        # Which entry of the picture's palette each colour slot shows.
        self.palette = [0] * 16
        self.highlight = TITLE_FIRST_COLOUR
        self._frame = 0

    def _cycle(self) -> None:
        previous = self.highlight
        shadow = previous - 1
        if shadow < TITLE_FIRST_COLOUR:
            shadow = TITLE_LAST_COLOUR
        self.highlight += 1
        if self.highlight > TITLE_LAST_COLOUR:
            self.highlight = TITLE_FIRST_COLOUR
        self.palette[shadow] = TITLE_SHADOW_ENTRY
        self.palette[previous] = TITLE_TRAIL_ENTRY
        self.palette[self.highlight] = TITLE_HIGHLIGHT_ENTRY

    def start(self) -> None:
        self.palette = list(range(16))
        for slot in range(TITLE_FIRST_COLOUR, TITLE_LAST_COLOUR + 1):
            self.palette[slot] = TITLE_SHADOW_ENTRY
        self.highlight = TITLE_FIRST_COLOUR
        self._cycle()

    def update(self) -> None:
        if _released(self._pads[0].a):
            self._on_continue()
        self._frame += 1
        if self._frame == TITLE_FRAMES_PER_STEP:
            self._cycle()
            self._frame = 0

    def end(self) -> None:
        self.palette = [0] * 16


class ModeSelect(State):
    """Choose between classic play, the challenge mode and the help pages."""

    background = "SelectModeScreen"

    def __init__(self, console: Console, pads: Pads, on_choose: Callable[[int], None]) -> None:
        self._console = console
        self._pads = pads
        self._on_choose = on_choose
        self.selection = MODE_CLASSIC
        self.sprites: list[Sprite] = []
        self._anim = 0
        self._anim_counter = 0
        self._anim_direction = 0

    def _move_cursor(self) -> None:
        x, y = MODE_CURSOR_PLACES[self.selection]
        for i, sprite in enumerate(self.sprites):
            row, column = divmod(i, 4)
            self._console.move_sprite(sprite, x + column * 8 + self._anim, y + row * 8)

    def start(self) -> None:
        self.sprites = [
            self._console.add_sprite(0, 0, POINTER_TILE_INDEX + i) for i in range(POINTER_SPRITES)
        ]
        self.selection = MODE_CLASSIC
        self._move_cursor()

    def update(self) -> None:
        self._anim_counter += 1
        if self._anim_counter > 3:
            if self._anim_direction == 0:
                self._anim += 1
                if self._anim > POINTER_SWING:
                    self._anim_direction = 1
                    self._anim = POINTER_SWING
            else:
                self._anim -= 1
                if self._anim < 0:
                    self._anim_direction = 0
                    self._anim = 0
            self._move_cursor()
            self._anim_counter = 0

        pad = self._pads[0]
        if _released(pad.up):
            self.selection = (self.selection - 1) % MODE_COUNT
            self._console.play_sound(SoundEffect.BLIP, 3)
        elif _released(pad.down):
            self.selection = (self.selection + 1) % MODE_COUNT
            self._console.play_sound(SoundEffect.BLIP, 3)
        elif _released(pad.a):
            self._on_choose(self.selection)
            self._console.play_sound(SoundEffect.LASER_SHOOT, 3)

    def end(self) -> None:
        self._console.clear_sprites()
        self.sprites = []


class PlayerSelect(State):
    """Set each of the six slots to nobody, a human or the computer."""

    background = "PlayerSelectBacking"

    def __init__(
        self, console: Console, pads: Pads, on_start: Callable[[list[PlayerType]], None]
    ) -> None:
        self._console = console
        self._pads = pads
        self._on_start = on_start
        self.player_types: list[PlayerType] = list(DEFAULT_PLAYER_TYPES)
        # Portrait shown in each slot; the computer portraits follow the human ones.
        self.portraits: list[Optional[int]] = [None] * PLAYERS
        self.selection = 0
        self.cursor_sprites: list[list[Sprite]] = []

    def _move_cursor(self, sound: bool) -> None:
        x, y = PLAYER_POSITIONS[self.selection]
        for sprites, places in zip(self.cursor_sprites, _PLAYER_CURSOR_LAYOUT):
            for sprite, (dx, dy) in zip(sprites, places):
                self._console.move_sprite(sprite, x + dx, y + dy)
        if sound:
            self._console.play_sound(SoundEffect.BLIP, 3)

    def _update_player(self, slot: int) -> None:
        kind = self.player_types[slot]
        if kind == PlayerType.NONE:
            self.portraits[slot] = None
            x, y = PLAYER_POSITIONS[slot]
            self._console.load_tile_area(
                x // 8, y // 8, [0] * (PORTRAIT_SIZE * PORTRAIT_SIZE), PORTRAIT_SIZE, PORTRAIT_SIZE
            )
        else:
            self.portraits[slot] = slot + (PLAYERS if kind == PlayerType.CPU else 0)

    def start(self) -> None:
        self.cursor_sprites = [
            [
                self._console.add_sprite(x, y, PLAYER_CURSOR_TILE_INDEX + corner * 3 + part)
                for part, (x, y) in enumerate(places)
            ]
            for corner, places in enumerate(_PLAYER_CURSOR_LAYOUT)
        ]
        self.selection = 0
        self._move_cursor(False)
        for slot in range(PLAYERS):
            self._update_player(slot)

    def update(self) -> None:
        pad = self._pads[0]
        if _released(pad.left):
            self.selection = (self.selection - 1) % PLAYERS
            self._move_cursor(True)
        elif _released(pad.right):
            self.selection = (self.selection + 1) % PLAYERS
            self._move_cursor(True)
        elif _released(pad.up):
            self.selection = (self.selection - 3) % PLAYERS
            self._move_cursor(True)
        elif _released(pad.down):
            self.selection = (self.selection + 3) % PLAYERS
            self._move_cursor(True)

        if _released(pad.b):
            slot = self.selection
            self.player_types[slot] = PlayerType((self.player_types[slot] + 1) % len(PlayerType))
            self._console.play_sound(SoundEffect.HIT_HURT, 3)
            self._update_player(slot)

        if _released(pad.a):
            taking_part = sum(1 for kind in self.player_types if kind)
            if taking_part >= MIN_PLAYERS:
                self._console.play_sound(SoundEffect.LASER_SHOOT, 3)
                self._on_start(list(self.player_types))

    def end(self) -> None:
        self._console.clear_sprites()
        self.cursor_sprites = []


class HelpScreen(State):
    """Pages of instructions, turned with left and right."""

    def __init__(self, console: Console, pads: Pads, on_back: Callable[[], None]) -> None:
        self._console = console
        self._pads = pads
        self._on_back = on_back
        self.page = 0
        self.screen = HELP_SCREENS[0]

    def _show(self) -> None:
        self.screen = HELP_SCREENS[self.page]

    def start(self) -> None:
        self.page = 0
        self._show()

    def update(self) -> None:
        pad = self._pads[0]
        if _released(pad.b):
            self._console.play_sound(SoundEffect.LASER_SHOOT, 3)
            self._on_back()

        if _released(pad.left) and self.page != 0:
            self.page -= 1
            self._show()
            self._console.play_sound(SoundEffect.BLIP, 0)
        elif _released(pad.right) and self.page != len(HELP_SCREENS) - 1:
            self.page += 1
            self._show()
            self._console.play_sound(SoundEffect.BLIP, 0)

    def end(self) -> None:
        self._console.clear_sprites()


class WinnerScreen(State):
    """The picture of the winning player."""

    def __init__(
        self,
        console: Console,
        pads: Pads,
        winner: int,
        player_type: int,
        on_continue: Callable[[], None],
    ) -> None:
        self._console = console
        self._pads = pads
        self._on_continue = on_continue
        self.winner = winner
        self.player_type = player_type
        self.index = winner_screen_index(winner, player_type)
        self.screen: Optional[_Picture] = None

    def start(self) -> None:
        self.screen = WINNER_SCREENS[self.index]

    def update(self) -> None:
        if _released(self._pads[0].a):
            self._console.play_sound(SoundEffect.LASER_SHOOT, 3)
            self._on_continue()

    def end(self) -> None:
        self._console.clear_sprites()


class GameOverScreen(State):
    """Final score and level reached in the challenge mode."""

    background = "GameOverBacking"
    score_position = (9, 8)
    level_position = (13, 14)

    def __init__(
        self,
        console: Console,
        pads: Pads,
        score: int,
        level: int,
        on_continue: Callable[[], None],
    ) -> None:
        self._console = console
        self._pads = pads
        self._on_continue = on_continue
        self.score = score
        self.level = level

    def _draw(self, number: int, digits: int, position: Sequence[int]) -> None:
        x, y = position
        for tiles in large_digit_tiles(number, digits):
            self._console.load_tile_area(x, y, tiles, 2, 2)
            x += 2

    def start(self) -> None:
        self._draw(self.score, 6, self.score_position)
        self._draw(self.level + 1, 2, self.level_position)

    def update(self) -> None:
        if _released(self._pads[0].a):
            self._console.play_sound(SoundEffect.LASER_SHOOT, 3)
            self._on_continue()

    def end(self) -> None:
        self._console.clear_sprites()


class WinnerGallery(State):
    """Shows each winner picture in turn, one per visit."""

    def __init__(self, console: Console, pads: Pads, on_next: Callable[[], None]) -> None:
        self._console = console
        self._pads = pads
        self._on_next = on_next
        self.winner = 1
        self.kind = 1
        self.screen: Optional[_Picture] = None

    def start(self) -> None:
        index = self.winner - 1
        if self.kind == 2:
            index += PLAYERS
        self.kind += 1
        if self.kind > 2:
            self.winner += 1
            self.kind = 1
            if self.winner > PLAYERS:
                self.winner = 1
        self.screen = WINNER_SCREENS[index]

    def update(self) -> None:
        if _released(self._pads[0].a):
            self._on_next()

    def end(self) -> None:
        self._console.clear_sprites()