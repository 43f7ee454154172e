"""Sixteen-bit xorshift random number generator used by the game modes."""

from __future__ import annotations

_MASK = 0xFFFF
_SEED_XOR = 0xD94B


class Random:
    """Deterministic xorshift generator over a 16-bit state."""

    def __init__(self, seed: int = 0) -> None:
        self._state = 0
        self.seed(seed)

    @property
    def state(self) -> int:
        """The current 16-bit internal state."""
        return self._state

    def seed(self, seed: int) -> None:
        """Reset the generator; the seed is mixed so that zero is usable."""
        self._state = ((seed & _MASK) ^ _SEED_XOR) & _MASK

    def next(self) -> int:
        """Advance the generator and return the new 16-bit value."""
        state = self._state
        state ^= state >> 5
        state ^= (state << 9) & _MASK
        state ^= state >> 7
        self._state = state
        return state

    def randint(self, low: int, high: int) -> int:
        """Return a value in the inclusive range ``low`` to ``high``."""
        if high < low:
            raise ValueError(f"empty range: {low}..{high}")
        return (low + self.next() % (high + 1 - low)) & _MASK