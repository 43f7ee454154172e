"""Wires the screens and game modes into one frame-driven game."""

from __future__ import annotations

import argparse
from typing import Iterable, Optional, Sequence

from .challenge import ChallengeMode
from .classic import ClassicGame, PlayerType
from .console import Console
from .pads import Key, Pads
from .rng import Random
from .screens import (
    MODE_CHALLENGE,
    MODE_CLASSIC,
    MODE_HELP,
    GameOverScreen,
    HelpScreen,
    ModeSelect,
    PlayerSelect,
    TitleScreen,
    WinnerScreen,
)
from .statemachine import State, StateMachine


class Game:
    """The whole game: advance it one frame at a time with controller input."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = Console() if console is None else console
        self.pads = Pads()
        self.rng = Random()
        self.machine = StateMachine()
        self.rnd_pump = 0

        console = self.console
        self.title = TitleScreen(console, self.pads, self._to_mode_select)
        self.mode_select = ModeSelect(console, self.pads, self._choose_mode)
        self.player_select = PlayerSelect(console, self.pads, self._start_classic)
        self.help = HelpScreen(console, self.pads, self._to_mode_select)
        self.challenge = ChallengeMode(console, self.pads, self.rng, self._game_over)

        self.pads.update(0)
        self.machine.start(self.title)

    @property
    def state(self) -> Optional[State]:
        """The screen or mode currently running."""
        return self.machine.current

    def _to_mode_select(self) -> None:
        self.machine.change(self.mode_select)

    def _choose_mode(self, mode: int) -> None:
        targets = {
            MODE_CLASSIC: self.player_select,
            MODE_CHALLENGE: self.challenge,
            MODE_HELP: self.help,
        }
        try:
            self.machine.change(targets[mode])
        except KeyError:
            raise ValueError(f"unknown mode: {mode}") from None

    def _start_classic(self, players: Sequence[PlayerType]) -> None:
        game = ClassicGame(self.console, self.pads, self.rng, players, self._show_winner)
        self.machine.change(game)

    def _show_winner(self, winner: int, player_type: PlayerType) -> None:
        screen = WinnerScreen(self.console, self.pads, winner, player_type, self._to_mode_select)
        self.machine.change(screen)

    def _game_over(self, score: int, level: int) -> None:
        screen = GameOverScreen(self.console, self.pads, score, level, self._to_mode_select)
        self.machine.change(screen)

    def frame(self, keys: int) -> Optional[State]:
        """Run one frame with the given controller status word."""
        self.rnd_pump = (self.rnd_pump + 1) & 0xFFFF
        self.pads.update(int(keys))
        pending = self.machine.pending
        if isinstance(pending, ChallengeMode):
            self.rng.seed(self.rnd_pump)
        elif isinstance(pending, ClassicGame):
            pending.seed_pump = self.rnd_pump
        self.machine.update()
        return self.state

    def run(self, frames: Iterable[int]) -> int:
        """Run one frame per status word and return how many were run."""
        count = 0
        for keys in frames:
            self.frame(keys)
            count += 1
        return count


def _parse_keys(text: str) -> int:
    text = text.strip()
    if text in ("", "-"):
        return 0
    value = 0
    for name in text.split("+"):
        try:
            value |= Key[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown key: {name!r}") from None
    return value


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Drive the game with scripted input and report the screen it ends on."""
    parser = argparse.ArgumentParser(
        prog="atomgrid",
        description="Run the game on scripted controller input.",
    )
    parser.add_argument(
        "frames",
        nargs="*",
        help="one entry per frame: key names joined by '+', or '-' for none",
    )
    parser.add_argument("--idle", type=int, default=0, help="extra frames with no keys held")
    args = parser.parse_args(argv)
    if args.idle < 0:
        parser.error("--idle must not be negative")
    try:
        words = [_parse_keys(entry) for entry in args.frames]
    except ValueError as error:
        parser.error(str(error))

    game = Game()
    count = game.run(words + [0] * args.idle)
    print(f"{type(game.state).__name__} after {count} frames")
    return 0