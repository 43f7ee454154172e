"""The game's sound effects as tone-generator command streams."""

from __future__ import annotations

import enum


class SoundEffect(enum.Enum):
    """A short sound effect."""

    BLIP = "blip"
    EXPLOSION = "explosion"
    HIT_HURT = "hit_hurt"
    LASER_SHOOT = "laser_shoot"

    def data(self) -> bytes:
        """The encoded command stream of this effect."""
        return _DATA[self]

    @property
    def size(self) -> int:
        return len(_DATA[self])


_DATA = {
    SoundEffect.BLIP: bytes([
        0x87, 0x51, 0x92, 0x38, 0x85, 0x7E, 0x93, 0x38, 0x8F, 0x7F, 0x95, 0x38,
        0x96, 0x38, 0x98, 0x38, 0x9A, 0x38, 0x9B, 0x38, 0x9D, 0x38, 0x9F, 0x38,
        0x00,
    ]),
    SoundEffect.EXPLOSION: bytes([
        0xC1, 0x44, 0xDF, 0xE7, 0xF1, 0x38, 0xC3, 0xF3, 0x38, 0xC1, 0xF6, 0x38,
        0xCE, 0x43, 0xF9, 0x38, 0xCC, 0xFC, 0x38, 0xCA, 0xFE, 0x38, 0xFF, 0x00,
    ]),
    SoundEffect.HIT_HURT: bytes([
        0x8F, 0x7F, 0x92, 0x38, 0x95, 0x38, 0x98, 0x38, 0x9B, 0x38, 0x9D, 0x38,
        0x9F, 0x00,
    ]),
    SoundEffect.LASER_SHOOT: bytes([
        0x81, 0x44, 0x90, 0x38, 0x8F, 0x38, 0x8F, 0x45, 0x38, 0x9F, 0x00,
    ]),
}