"""Tile counts of the graphics assets, used to lay out video memory."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_IDLE_FRAME_TILES = 20
_GROW_FRAME_TILES = 16

_FIXED_COUNTS = {
    "Tile_Animated": 417,
    "Winner_1_1": 342,
    "Winner_2_1": 383,
    "Winner_3_1": 415,
    "Winner_4_1": 398,
    "Winner_5_1": 377,
    "Winner_6_1": 393,
    "Winner_1_2": 360,
    "Winner_2_2": 373,
    "Winner_3_2": 395,
    "Winner_4_2": 362,
    "Winner_5_2": 364,
    "Winner_6_2": 364,
    "MenuCursor2": 12,
    "PlayerSelectBacking": 64,
    "MenuProfessors": 351,
    "SelectModeScreen": 337,
    "help_1": 81,
    "help_1_1": 29,
    "help_2": 86,
    "help_3": 87,
    "help_3_1": 74,
    "help_4": 85,
    "timer_bar": 8,
    "miniAtoms2": 6,
    "MiniAtoms": 6,
    "modeSelectPointer": 8,
    "one": 32,
    "two": 32,
    "three": 32,
    "Paused": 32,
    "levelup": 32,
    "TimeLost": 32,
    "Backing": 6,
    "atom_progress_1": 6,
    "atom_progress_2": 6,
    "atom_progress_3": 6,
    "MiniProfessors": 48,
    "GameOverBacking": 154,
    "ChallengeModeBacking": 20,
    "LargeNumbers": 40,
    "Numbers": 10,
}


def _build_counts() -> dict[str, int]:
    counts = dict(_FIXED_COUNTS)
    for player in range(1, 7):
        for frame in range(1, 5):
            counts[f"p{player}_idle_anim_{frame}"] = _IDLE_FRAME_TILES
            counts[f"p{player}_grow_anim_{frame}"] = _GROW_FRAME_TILES
    return counts


TILE_COUNTS: Mapping[str, int] = MappingProxyType(_build_counts())

_SUFFIX = "_TILECOUNT"


def tile_count(name: str) -> int:
    """Number of 8x8 tiles in the named asset.

    A trailing ``_TILECOUNT`` on the name is accepted and ignored.
    """
    key = name[: -len(_SUFFIX)] if name.endswith(_SUFFIX) else name
    try:
        return TILE_COUNTS[key]
    except KeyError:
        raise KeyError(f"unknown asset: {name!r}") from None