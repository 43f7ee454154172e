"""Timed single-player mode: clear the required atoms before the clock runs out."""

from __future__ import annotations

import enum
from typing import Callable, Optional, Sequence

from .assets import tile_count
from .console import Console, Sprite
from .fixed import fixed_frac, fixed_mul, fixed_to_int, to_fixed
from .grid import (
    ATOMS2_TILECOUNT,
    EXPLODING,
    Grid,
    cursor_sprite_positions,
    grow_frame,
    idle_frame,
)
from .pads import ButtonState, Pads
from .rng import Random
from .sounds import SoundEffect
from .statemachine import State

ATOMS_TILE_INDEX = tile_count("ChallengeModeBacking")
NUMBERS_TILE_INDEX = ATOMS_TILE_INDEX + ATOMS2_TILECOUNT
MINIATOMS_TILE_INDEX = NUMBERS_TILE_INDEX + tile_count("Numbers")
TIMER_TILE_INDEX = MINIATOMS_TILE_INDEX + tile_count("MiniAtoms")
CURSOR_TILE_INDEX = TIMER_TILE_INDEX + tile_count("timer_bar")
INFO_TILE_INDEX = CURSOR_TILE_INDEX + tile_count("MenuCursor2")

BAG_SIZE = 18
WAIT_FOR = 100
WAIT_FOR_COUNTDOWN = 30
SCORE_DIGITS = 6
INFO_SPRITE_COUNT = 32
MAX_NEEDED = 99
MAX_SCORE = 999999
PLAYERS = 6

INITIAL_LEVELING_AMOUNT = to_fixed(2.0)
LEVEL_BOOSTING = to_fixed(1.25)
INITIAL_MAX_TIME = to_fixed(70.0)
INITIAL_TIME_PER_EXPLOSION = to_fixed(1.5)
MAX_TIME_DECREASE = to_fixed(0.85)
TIME_PENALTY = to_fixed(0.60)
TIME_TICK = to_fixed(0.01666)

_CURSOR_LAYOUT = (
    ((0, 0), (8, 0), (0, 8)),
    ((16, 0), (24, 0), (24, 8)),
    ((0, 16), (0, 24), (8, 24)),
    ((24, 16), (16, 24), (24, 24)),
)


def _wrap16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


class Phase(enum.IntEnum):
    """What the challenge mode is doing this frame."""

    PLAY = 0
    ANIMATE = 1
    ANIMATE_WAIT = 2
    END_CHECK = 3
    LEVEL_UP = 4
    GAME_OVER = 5
    RESET = 6
    PAUSED = 7
    COUNTDOWN = 8


def two_digit_tiles(number: int, base: int) -> tuple[int, int]:
    """Tiles for a two-digit number; anything above 99 shows as 99."""
    if number < 0:
        raise ValueError(f"cannot show a negative number: {number}")
    if number > 99:
        return (base + 9, base + 9)
    tens, ones = divmod(number, 10)
    return (base + tens, base + ones)


def carry_score(bank: Sequence[int]) -> list[int]:
    """Propagate carries through score digits, most significant first.

    An overflowing top digit is held at 9.
    """
    digits = list(bank)
    for position in reversed(range(len(digits))):
        while digits[position] >= 10:
            if position > 0:
                digits[position] -= 10
                digits[position - 1] += 1
            else:
                digits[position] = 9
    return digits


class ChallengeMode(State):
    """Place atoms against the clock until the required explosions are made."""

    def __init__(
        self,
        console: Console,
        pads: Pads,
        rng: Random,
        on_game_over: Callable[[int, int], None],
    ) -> None:
        self._console = console
        self._pads = pads
        self._rng = rng
        self._on_game_over = on_game_over
        self.grid = Grid()

        self.score = 0
        self.level = 0
        self.phase = Phase.PLAY
        self.level_needed = 2
        self.leveling_amount = INITIAL_LEVELING_AMOUNT
        self.needed = [0] * (PLAYERS + 1)
        self.current_atom = 0
        self.next_atom = 0
        self.bag = [0] * BAG_SIZE
        self.bag_position = 0

        self.time = INITIAL_MAX_TIME
        self.max_time = INITIAL_MAX_TIME
        self.time_per_explosion = INITIAL_TIME_PER_EXPLOSION
        self.multiplier = 1
        self.exploded = False
        self.early_out = False

        self.score_bank = [0] * SCORE_DIGITS
        self.cursor_x = 0
        self.cursor_y = 0
        self.cursor_sprites: list[list[Sprite]] = []
        self.info_sprites: list[Sprite] = []
        self.info_message: Optional[str] = None
        self.loaded_frame: Optional[tuple[str, int, int]] = None

        self._anim = 0
        self._anim_timer = 0
        self._anim_counter = 0
        self._level_wait = WAIT_FOR
        self._countdown = 0
        self._draw_update_state = 0
        self._mini_flash = 0

    # Drawing helpers

    def _draw_two_digits(self, number: int, x: int, y: int) -> None:
        self._console.load_tile_map(x, y, two_digit_tiles(number, NUMBERS_TILE_INDEX))

    def _set_number(self, number: int, atom: int) -> None:
        self._draw_two_digits(number, 8 + atom * 3, 1)

    def _update_numbers(self) -> None:
        for atom, count in enumerate(self.needed[1:]):
            self._set_number(count, atom)

    def _show_score(self) -> None:
        if self.score > MAX_SCORE:
            tiles = [NUMBERS_TILE_INDEX + 9] * SCORE_DIGITS
        else:
            self.score_bank = carry_score(self.score_bank)
            tiles = [NUMBERS_TILE_INDEX + digit for digit in self.score_bank]
        self._console.load_tile_map(2, 0, tiles)

    def _show_multiplier(self) -> None:
        self._draw_two_digits(int(self.multiplier), 2, 1)

    def _show_time(self) -> None:
        whole = fixed_to_int(self.time) & 0xFFFF
        frac = int((fixed_frac(self.time) / 255.0) * 99)
        self._draw_two_digits(whole, 25, 0)
        self._draw_two_digits(frac, 28, 0)

    def _update_cursor(self) -> None:
        positions = cursor_sprite_positions(self.cursor_x, self.cursor_y)
        for sprites, places in zip(self.cursor_sprites, positions):
            for sprite, (x, y) in zip(sprites, places):
                self._console.move_sprite(sprite, x, y)

    def _hide_cursor(self) -> None:
        for sprites in self.cursor_sprites:
            for sprite in sprites:
                self._console.hide_sprite(sprite)

    def _show_info(self, message: str) -> None:
        self.info_message = message
        x, y = 96, 80
        for sprite in self.info_sprites:
            self._console.move_sprite(sprite, x, y)
            x += 8
            if x >= 160:
                x = 96
                y += 8

    def _hide_info(self) -> None:
        self.info_message = None
        for sprite in self.info_sprites:
            self._console.hide_sprite(sprite)

    def _load_idle(self, player: int, counter: int) -> None:
        frame = idle_frame(counter)
        if frame is not None:
            self.loaded_frame = ("idle", player, frame)

    def _load_grow(self, player: int, counter: int) -> None:
        frame = grow_frame(counter)
        if frame is not None:
            self.loaded_frame = ("grow", player, frame)

    def _flash_mini_atom(self) -> None:
        self._mini_flash += 1
        if self._mini_flash != 5:
            return
        self._mini_flash = 0
        if self._anim_counter == 0:
            tile = ATOMS_TILE_INDEX + self.current_atom - 1
            self._anim_counter = 1
        else:
            tile = 5 + self.current_atom - 1
            self._anim_counter = 0
        self._console.load_tile_map(7 + (self.current_atom - 1) * 3, 1, [tile])

    # Game logic

    def fill_bag(self, previous: int) -> None:
        """Refill the bag with three shuffles of 1..6, never repeating in a row."""
        self.bag = [0] * BAG_SIZE
        for place in range(0, BAG_SIZE, PLAYERS):
            for offset in range(PLAYERS):
                while True:
                    value = self._rng.randint(1, PLAYERS)
                    if value == previous:
                        continue
                    if value in self.bag[place : place + PLAYERS]:
                        continue
                    previous = value
                    self.bag[place + offset] = value
                    break

    def randomise_grid(self) -> None:
        """Scatter random atoms, each square kept below its explosion size."""
        for square in self.grid:
            square.changed = 0
            square.grow_size = 0
            square.player = 0
            square.size = 0
            square.animate = 1
            square.explode = 0
            square.change_anim = 0
        for square in self.grid:
            player = self._rng.randint(0, PLAYERS)
            size = 0
            if player != 0:
                size = self._rng.randint(1, square.max_size - 1)
            square.size = size
            square.player = player

    def setup_level(self) -> None:
        """Start the next level: shorter clock, new targets and a new board."""
        if self.level > 0:
            self.max_time = fixed_mul(self.max_time, MAX_TIME_DECREASE)
            self.time_per_explosion = fixed_mul(self.time_per_explosion, MAX_TIME_DECREASE)
        self.level = (self.level + 1) & 0xFF
        self.needed = [0] + [self.level_needed] * PLAYERS
        self.randomise_grid()
        self.leveling_amount = _wrap16(self.leveling_amount + LEVEL_BOOSTING)
        self.level_needed = min(
            (self.level_needed + fixed_to_int(self.leveling_amount)) & 0xFF, MAX_NEEDED
        )

    def _advance_atom(self) -> None:
        self.current_atom = self.next_atom
        self.next_atom = self.bag[self.bag_position]
        self.bag_position += 1
        if self.bag_position >= BAG_SIZE:
            self.fill_bag(self.current_atom)
            self.bag_position = 0
        self._console.load_tile_map(27, 1, [MINIATOMS_TILE_INDEX + self.next_atom - 1])
        self._console.load_tile_map(29, 1, [MINIATOMS_TILE_INDEX + self.current_atom - 1])

    def _clean_up(self) -> None:
        self._anim = 0
        for square in self.grid:
            square.grow_size = 0
            square.animate = 1
            if square.player == 0:
                square.size = 0

    def has_space(self) -> bool:
        """Whether the current atom can be placed anywhere."""
        return any(square.player in (0, self.current_atom) for square in self.grid)

    def animate(self) -> None:
        """Advance growth and explosions by one step and pick the next phase."""
        animating = 1
        all_same = True
        last_player = -1
        exploded = False
        done = True
        grew = False
        self.early_out = False

        for square in self.grid:
            if square.grow_size and square.size != EXPLODING:
                square.changed = 1
                done = False
                square.size += square.grow_size
                square.change_anim = 1
                if square.size > square.max_size:
                    square.grow_size = square.size - square.max_size
                    square.size = square.max_size
                else:
                    square.grow_size = 0
                square.animate = 1
            else:
                square.animate = 0

        for square in self.grid:
            size = square.size
            player = square.player
            if last_player == -1 and player != 0:
                last_player = player
            elif last_player != player and player != 0:
                all_same = False

            if not square.changed:
                continue
            animating = 2
            if size == square.max_size:
                square.changed = 1
                square.size = EXPLODING
                square.animate = 8
                exploded = True
                self.needed[square.player] = max(self.needed[square.player] - 1, 0)
                self.time = _wrap16(self.time + self.time_per_explosion)
                to_add = int(self.multiplier) & 0xFF
                self.score += to_add
                self.score_bank[-1] += to_add
                self.exploded = True
            elif size == EXPLODING:
                square.size = 0
                square.player = 0
                square.changed = 0
                square.animate = 1
                for x, y in self.grid.neighbours(square.x, square.y):
                    self.grid.increment(x, y, player)
            elif size:
                square.changed = 0
                grew = True

        if done:
            animating -= 1
        if all_same:
            animating = 0
            self.early_out = True

        if animating >= 1:
            self.phase = Phase.ANIMATE_WAIT
            if exploded:
                self._console.play_sound(SoundEffect.EXPLOSION, 0)
            elif grew:
                self._console.play_sound(SoundEffect.HIT_HURT, 0)
        else:
            self.phase = Phase.END_CHECK

    # State hooks

    def start(self) -> None:
        console = self._console
        self._draw_update_state = 0
        self.cursor_sprites = [
            [
                console.add_sprite(x, y, CURSOR_TILE_INDEX + corner * 3 + part)
                for part, (x, y) in enumerate(places)
            ]
            for corner, places in enumerate(_CURSOR_LAYOUT)
        ]
        self.info_sprites = []
        for i in range(INFO_SPRITE_COUNT):
            sprite = console.add_sprite(i * 8, 0, INFO_TILE_INDEX + i)
            console.hide_sprite(sprite)
            self.info_sprites.append(sprite)

        self.cursor_x = 0
        self.cursor_y = 0
        self.grid.setup()

        self.fill_bag(0)
        self.leveling_amount = INITIAL_LEVELING_AMOUNT
        self.level_needed = 2
        self.setup_level()
        self._update_cursor()

        self.next_atom = self._rng.randint(1, PLAYERS)
        self.next_atom = self.bag[0]
        self.bag_position = 1
        self.multiplier = 1

        self.time_per_explosion = INITIAL_TIME_PER_EXPLOSION
        self.max_time = INITIAL_MAX_TIME
        self.time = self.max_time
        self.phase = Phase.COUNTDOWN

        self._anim = 0
        self.score = 0
        self.score_bank = [0] * SCORE_DIGITS
        self.level = 0
        self._mini_flash = 0

        self._show_score()
        self._update_numbers()
        self._show_multiplier()
        self._show_info("three")
        self._hide_cursor()

        self._countdown = 3
        self._level_wait = WAIT_FOR_COUNTDOWN
        self.grid.draw(console)

        console.set_brightness(True)
        console.play_sound(SoundEffect.HIT_HURT, 0)
        self._pads.reset()
        self._advance_atom()

    def _player_input(self) -> None:
        pad = self._pads[0]
        console = self._console
        if pad.up == ButtonState.PRESSED:
            self.cursor_y -= 1
            console.play_sound(SoundEffect.BLIP, 0)
        elif pad.down == ButtonState.PRESSED:
            self.cursor_y += 1
            console.play_sound(SoundEffect.BLIP, 0)
        if pad.left == ButtonState.PRESSED:
            self.cursor_x -= 1
            console.play_sound(SoundEffect.BLIP, 0)
        elif pad.right == ButtonState.PRESSED:
            self.cursor_x += 1
            console.play_sound(SoundEffect.BLIP, 0)

        self.cursor_x = min(max(self.cursor_x, 0), 9)
        self.cursor_y = min(max(self.cursor_y, 0), 6)

        if pad.a == ButtonState.RELEASED:
            if self.grid.try_increment(self.cursor_x, self.cursor_y, self.current_atom):
                self.phase = Phase.ANIMATE
                self._anim = 0

        self._update_cursor()

        if console.take_pause_request():
            console.set_brightness(True)
            self._show_info("paused")
            self._hide_cursor()
            self.phase = Phase.PAUSED

    def _play(self) -> None:
        self._player_input()
        self.exploded = False
        self.time = _wrap16(self.time - TIME_TICK)
        if self.time < 0:
            self.time = 0
            self.phase = Phase.GAME_OVER
        self._load_idle(self.current_atom, self._anim)
        self._flash_mini_atom()
        self._anim = (self._anim + 1) % 32

    def _animate_step(self) -> None:
        self._hide_cursor()
        self.animate()
        self._anim_timer = 20
        self._anim_counter = 0
        self._set_number(self.needed[self.current_atom], self.current_atom - 1)
        self._show_score()
        self._show_multiplier()

    def _animate_wait(self) -> None:
        self._load_grow(self.current_atom, self._anim_counter)
        self._anim_counter += 1
        if self._anim_counter >= self._anim_timer:
            self.phase = Phase.ANIMATE
            self.grid.reset_anims()

    def _end_check(self) -> None:
        remaining = sum(1 for count in self.needed[1:] if count > 0)
        if remaining == 0:
            self.phase = Phase.LEVEL_UP
            self._level_wait = WAIT_FOR
        elif self.early_out:
            self._level_wait = WAIT_FOR
            self.phase = Phase.RESET
        else:
            self.phase = Phase.PLAY
            self._clean_up()
            self._advance_atom()
            if not self.has_space():
                self._level_wait = WAIT_FOR
                self.phase = Phase.RESET

        if self.exploded:
            self.multiplier += 1
            if self.multiplier > self.level:
                self.multiplier = self.level + 1
        else:
            self.multiplier = 1

    def _resume_play(self) -> None:
        self._console.set_brightness(False)
        self._hide_info()
        self.phase = Phase.PLAY
        self._anim = 0
        self._level_wait = WAIT_FOR + 1
        self._update_cursor()

    def _level_up(self) -> None:
        if self._level_wait == WAIT_FOR:
            self._console.set_brightness(True)
            self._show_info("level_up")
            self.setup_level()
            self.fill_bag(0)
            self._hide_cursor()
        if self._level_wait < 0:
            self._resume_play()
            self._update_numbers()
        self._level_wait -= 1

    def _reset(self) -> None:
        if self._level_wait == WAIT_FOR:
            self._console.set_brightness(True)
            self._show_info("time_lost")
            self.randomise_grid()
            self.fill_bag(self.current_atom)
            self._hide_cursor()
            self.multiplier = 1
            self.time = fixed_mul(self.time, TIME_PENALTY)
        if self._level_wait < 0:
            self._resume_play()
        self._level_wait -= 1

    def _paused(self) -> None:
        if self._console.take_pause_request():
            self._console.set_brightness(False)
            self._hide_info()
            self.phase = Phase.PLAY
            self._update_cursor()

    def _count_down(self) -> None:
        self._level_wait -= 1
        if self._level_wait != 0:
            return
        self._countdown -= 1
        if self._countdown == 2:
            self._show_info("two")
            self._level_wait = WAIT_FOR_COUNTDOWN
            self._console.play_sound(SoundEffect.HIT_HURT, 0)
        elif self._countdown == 1:
            self._show_info("one")
            self._level_wait = WAIT_FOR_COUNTDOWN
            self._console.play_sound(SoundEffect.HIT_HURT, 0)
        elif self._countdown == 0:
            self._hide_info()
            self._console.set_brightness(False)
            self._console.play_sound(SoundEffect.LASER_SHOOT, 3)
            self.phase = Phase.PLAY

    def update(self) -> None:
        if self.phase is Phase.GAME_OVER:
            self._on_game_over(self.score, self.level)
            return
        handlers = {
            Phase.PLAY: self._play,
            Phase.ANIMATE: self._animate_step,
            Phase.ANIMATE_WAIT: self._animate_wait,
            Phase.END_CHECK: self._end_check,
            Phase.LEVEL_UP: self._level_up,
            Phase.RESET: self._reset,
            Phase.PAUSED: self._paused,
            Phase.COUNTDOWN: self._count_down,
        }
        handlers[self.phase]()

        if self.phase is Phase.GAME_OVER:
            return
        self.needed = [max(count, 0) for count in self.needed]
        self.time = min(self.time, self.max_time)
        self.grid.draw(self._console)
        if self._draw_update_state == 2:
            self._show_time()
        self._draw_update_state += 1
        if self._draw_update_state > 3:
            self._draw_update_state = 0

    def end(self) -> None:
        self._console.clear_sprites()
        self.cursor_sprites = []
        self.info_sprites = []