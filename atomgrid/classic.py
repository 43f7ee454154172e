"""Classic mode: up to six human or computer players take turns on one board."""

from __future__ import annotations

import enum
from typing import Callable, Optional, Sequence

from .assets import tile_count
from .challenge import Phase, two_digit_tiles
from .console import Console, Sprite
from .grid import (
    ATOMS2_TILECOUNT,
    EXPLODING,
    HEIGHT,
    SQUARE_COUNT,
    WIDTH,
    Grid,
    cursor_sprite_positions,
    grow_frame,
    idle_frame,
)
from .pads import ButtonState, Pads
from .rng import Random
from .sounds import SoundEffect
from .statemachine import State

PLAYERS = 6

NUMBER_TILE_INDEX = tile_count("Backing")
ATOM_PROGRESS_1_INDEX = NUMBER_TILE_INDEX + tile_count("Numbers")
ATOM_PROGRESS_2_INDEX = ATOM_PROGRESS_1_INDEX + tile_count("atom_progress_1")
ATOM_PROGRESS_3_INDEX = ATOM_PROGRESS_2_INDEX + tile_count("atom_progress_2")
CURSOR_TILE_INDEX = tile_count("Backing") + ATOMS2_TILECOUNT

PROGRESS_PLACES = (5, 9, 13, 17, 21, 25)

AI_ATTEMPTS = 5
ANIM_FRAMES = 20

_CURSOR_LAYOUT = (
    ((0, 0), (8, 0), (0, 8)),
    ((16, 0), (24, 0), (24, 8)),
    ((0, 16), (0, 24), (8, 24)),
    ((24, 16), (16, 24), (24, 24)),
)


class PlayerType(enum.IntEnum):
    """Who controls a player slot."""

    NONE = 0
    HUMAN = 1
    CPU = 2


class ClassicGame(State):
    """Players take turns adding atoms; the last player with atoms wins."""

    def __init__(
        self,
        console: Console,
        pads: Pads,
        rng: Random,
        players: Sequence[int],
        on_winner: Callable[[int, PlayerType], None],
    ) -> None:
        types = [PlayerType(kind) for kind in players]
        if len(types) != PLAYERS:
            raise ValueError(f"expected {PLAYERS} player slots, got {len(types)}")
        if not any(types):
            raise ValueError("at least one player must take part")
        self._console = console
        self._pads = pads
        self._rng = rng
        self._on_winner = on_winner
        self.setup: list[PlayerType] = [PlayerType.NONE, *types]
        self.grid = Grid()

        self.seed_pump = 0
        self.winner = 0
        self.current_player = 0
        self.turn_count = 0
        self.phase = Phase.PLAY
        self.finished = False
        self.alive = [0] * (PLAYERS + 1)
        self.counts = [0] * (PLAYERS + 1)
        self.cursor_positions: list[Optional[tuple[int, int]]] = [None] * (PLAYERS + 1)
        self.cursor_x = 0
        self.cursor_y = 0
        self.cursor_sprites: list[list[Sprite]] = []
        self.loaded_frame: Optional[tuple[str, int, int]] = None

        self._anim = 0
        self._anim_timer = 0
        self._anim_counter = 0
        self._mini_flash = 0

    # Drawing helpers

    def _update_cursor(self) -> None:
        positions = cursor_sprite_positions(self.cursor_x, self.cursor_y)
        for sprites, places in zip(self.cursor_sprites, positions):
            for sprite, (x, y) in zip(sprites, places):
                self._console.move_sprite(sprite, x, y)

    def _hide_cursor(self) -> None:
        for sprites in self.cursor_sprites:
            for sprite in sprites:
                self._console.hide_sprite(sprite)

    def _update_progress(self) -> None:
        self.counts = self.progress_counts()
        for player in range(1, PLAYERS + 1):
            if not self.setup[player]:
                continue
            base = ATOM_PROGRESS_1_INDEX if self.alive[player] else ATOM_PROGRESS_3_INDEX
            tiles = [base + player - 1, *two_digit_tiles(self.counts[player], NUMBER_TILE_INDEX)]
            self._console.load_tile_map(PROGRESS_PLACES[player - 1], 1, tiles)

    def _flash_mini_atom(self) -> None:
        place = PROGRESS_PLACES[self.current_player - 1]
        if self._mini_flash == 0:
            self._console.load_tile_map(
                place, 1, [ATOM_PROGRESS_1_INDEX + self.current_player - 1]
            )
        if self._mini_flash == 5:
            self._console.load_tile_map(
                place, 1, [ATOM_PROGRESS_2_INDEX + self.current_player - 1]
            )
        elif self._mini_flash == 9:
            self._mini_flash = -1
        self._mini_flash += 1

    def _load_idle(self, player: int, counter: int) -> None:
        frame = idle_frame(counter)
        if frame is not None:
            self.loaded_frame = ("idle", player, frame)

    def _load_grow(self, player: int, counter: int) -> None:
        frame = grow_frame(counter)
        if frame is not None:
            self.loaded_frame = ("grow", player, frame)

    # Game logic

    def _setup_game(self) -> None:
        for square in self.grid:
            square.changed = 0
            square.grow_size = 0
            square.player = 0
            square.size = 0
            square.animate = 0
            square.change_anim = 0
        self.current_player = next(
            player for player in range(1, PLAYERS + 1) if self.setup[player]
        )
        self.finished = False
        self.turn_count = 0
        self.alive = [1 if kind else 0 for kind in self.setup]
        self.cursor_positions = [None] * (PLAYERS + 1)
        self._pads.reset()
        self._anim = 0
        self.phase = Phase.PLAY

    def progress_counts(self) -> list[int]:
        """Atoms held by each player, index 0 being the empty squares."""
        counts = [0] * (PLAYERS + 1)
        for square in self.grid:
            counts[square.player] += square.max_size if square.size == EXPLODING else square.size
        return counts

    def _pause_check(self) -> bool:
        if not self._console.take_pause_request():
            return False
        self._console.set_brightness(True)
        self._hide_cursor()
        self.phase = Phase.PAUSED
        return True

    def _player_input(self) -> None:
        if self._pause_check():
            return
        pad = self._pads[0]
        moved = False
        if pad.up == ButtonState.PRESSED:
            self.cursor_y -= 1
            moved = True
        elif pad.down == ButtonState.PRESSED:
            self.cursor_y += 1
            moved = True
        if pad.left == ButtonState.PRESSED:
            self.cursor_x -= 1
            moved = True
        elif pad.right == ButtonState.PRESSED:
            self.cursor_x += 1
            moved = True

        self.cursor_x = min(max(self.cursor_x, 0), WIDTH - 1)
        self.cursor_y = min(max(self.cursor_y, 0), HEIGHT - 1)

        if moved:
            self._update_cursor()
            self._console.play_sound(SoundEffect.BLIP, 0)
        elif pad.a == ButtonState.RELEASED:
            if self.grid.try_increment(self.cursor_x, self.cursor_y, self.current_player):
                self._hide_cursor()
                self.phase = Phase.ANIMATE
                self._anim = 0
                self._mini_flash = 0

    def ai_move(self) -> tuple[int, int]:
        """Place an atom for a computer player and return where it went."""
        rng = self._rng
        player = self.current_player
        x = y = 0
        done = False
        for _ in range(AI_ATTEMPTS):
            x = rng.next() & 0xF
            while x > WIDTH - 1:
                x = rng.next() & 0xF
            y = rng.next() & 0x7
            while y > HEIGHT - 1:
                y = rng.next() & 0x7
            if self.grid.player_at(x, y) in (0, player):
                self.grid.increment(x, y, player)
                done = True
                break

        steps = 0
        while not done:
            if steps > SQUARE_COUNT:
                raise RuntimeError(f"no square left for player {player}")
            steps += 1
            x += 1
            if x > WIDTH - 1:
                x = 0
                y += 1
            if y > HEIGHT - 1:
                x = y = 0
            if self.grid.player_at(x, y) in (0, player):
                self.grid.increment(x, y, player)
                done = True

        self.cursor_x = x
        self.cursor_y = y
        self.phase = Phase.ANIMATE
        self._anim = 0
        self._update_cursor()
        return x, y

    def animate(self) -> None:
        """Advance growth and explosions by one step and pick the next phase."""
        animating = 1
        all_same = True
        last_player = -1
        exploded = False
        done = True
        grew = False

        for square in self.grid:
            if square.grow_size and square.size != EXPLODING:
                square.changed = 1
                done = False
                square.change_anim = 1
                square.size += square.grow_size
                if square.size > square.max_size:
                    square.grow_size = square.size - square.max_size
                    square.size = square.max_size
                else:
                    square.grow_size = 0
                square.animate = 1
            else:
                square.animate = 0

        if self.turn_count:
            self.alive = [0] * (PLAYERS + 1)

        for square in self.grid:
            size = square.size
            player = square.player
            if last_player == -1 and player != 0:
                last_player = player
            elif last_player != player and player != 0:
                all_same = False

            if self.turn_count:
                self.alive[player] += 1

            if not square.changed:
                continue
            animating = 2
            if size == square.max_size:
                square.changed = 1
                square.size = EXPLODING
                square.animate = 8
                exploded = True
            elif size == EXPLODING:
                square.size = 0
                square.player = 0
                square.changed = 0
                square.animate = 1
                for x, y in self.grid.neighbours(square.x, square.y):
                    self.grid.increment(x, y, player)
            elif size:
                square.player = player
                square.changed = 0
                grew = True

        if done:
            animating -= 1

        if exploded:
            self._console.play_sound(SoundEffect.EXPLOSION, 0)
        elif grew:
            self._console.play_sound(SoundEffect.HIT_HURT, 0)

        if all_same and self.turn_count:
            self.finished = True
            self.winner = self.current_player
            animating = 0

        self.phase = Phase.ANIMATE_WAIT if animating >= 1 else Phase.END_CHECK

    def advance_player(self) -> None:
        """Move to the next player still in the game, detecting a finished game."""
        starting = self.current_player
        while True:
            self.current_player += 1
            if self.current_player > PLAYERS:
                self.current_player = 1
                self.turn_count = (self.turn_count + 1) & 0xFFFF
            if self.turn_count:
                if self.current_player == starting:
                    self.finished = True
                    self.winner = starting
                    break
                if self.alive[self.current_player] and self.setup[self.current_player]:
                    break
            elif self.setup[self.current_player]:
                break

    # State hooks

    def start(self) -> None:
        console = self._console
        self.cursor_sprites = [
            [
                console.add_sprite(x, y, CURSOR_TILE_INDEX + corner * 3 + part)
                for part, (x, y) in enumerate(places)
            ]
            for corner, places in enumerate(_CURSOR_LAYOUT)
        ]
        self.cursor_x = 0
        self.cursor_y = 0
        self.winner = 0

        self.grid.setup()
        self._setup_game()
        self._update_cursor()

        self.grid.reset_anims()
        console.set_brightness(False)
        self._rng.seed((self.seed_pump * self._rng.next()) & 0xFFFF)
        self._anim = 0
        self.counts = [0] * (PLAYERS + 1)
        self._update_progress()
        self._mini_flash = 0

    def _play(self) -> bool:
        if self._pause_check():
            return False
        kind = self.setup[self.current_player]
        if kind == PlayerType.HUMAN:
            self._player_input()
        elif kind == PlayerType.CPU:
            self.ai_move()
        self._load_idle(self.current_player, self._anim)
        self._flash_mini_atom()
        self._anim = (self._anim + 1) % 32
        return True

    def _animate_step(self) -> bool:
        self._anim_timer = ANIM_FRAMES
        self._anim_counter = 0
        self.animate()
        return True

    def _animate_wait(self) -> bool:
        self._load_grow(self.current_player, self._anim_counter)
        self._anim_counter += 1
        if self._anim_counter >= self._anim_timer:
            self.phase = Phase.ANIMATE
            self.grid.reset_anims()
        return True

    def _end_check(self) -> bool:
        self._update_progress()
        self.cursor_positions[self.current_player] = (self.cursor_x, self.cursor_y)
        self.advance_player()
        if self.finished:
            self.winner = self.current_player
            self._on_winner(self.winner, self.setup[self.winner])
            return False
        stored = self.cursor_positions[self.current_player]
        if stored is not None:
            self.cursor_x, self.cursor_y = stored
        self.phase = Phase.PLAY
        self._anim = 0
        self._update_cursor()
        return True

    def _paused(self) -> bool:
        if self._console.take_pause_request():
            self._console.set_brightness(False)
            self.phase = Phase.PLAY
            self._update_cursor()
        return True

    def update(self) -> None:
        handlers = {
            Phase.PLAY: self._play,
            Phase.ANIMATE: self._animate_step,
            Phase.ANIMATE_WAIT: self._animate_wait,
            Phase.END_CHECK: self._end_check,
            Phase.PAUSED: self._paused,
        }
        if handlers[self.phase]():
            self.grid.draw(self._console)

    def end(self) -> None:
        self._console.clear_sprites()
        self.cursor_sprites = []