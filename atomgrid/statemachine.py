"""A minimal state machine driving the game's screens."""

from __future__ import annotations

from typing import Optional


class State:
    """A screen or mode with start, per-frame update and end hooks.

    The base hooks keep track of whether the state is active and how many
    frames it has been updated since it last started.
    """

    active: bool = False
    frames: int = 0

    def start(self) -> None:
        """Called when the machine enters this state."""
        self.active = True
        self.frames = 0

    def update(self) -> None:
        """Called once per frame while this state is current."""
        self.frames += 1

    def end(self) -> None:
        """Called when the machine leaves this state."""
        self.active = False


class StateMachine:
    """Runs one state at a time; changes take effect on the next update."""

    def __init__(self) -> None:
        self._current: Optional[State] = None
        self._pending: Optional[State] = None

    @property
    def current(self) -> Optional[State]:
        return self._current

    @property
    def pending(self) -> Optional[State]:
        return self._pending

    def start(self, state: Optional[State]) -> None:
        """Enter ``state`` immediately without ending the current one."""
        if state is None:
            return
        self._pending = None
        self._current = state
        state.start()

    def change(self, state: Optional[State]) -> None:
        """Schedule a switch to ``state`` at the next update."""
        if state is None:
            return
        self._pending = state

    def update(self) -> None:
        """Perform a pending switch, or else update the current state."""
        if self._current is None:
            raise RuntimeError("state machine has not been started")
        if self._pending is not None:
            self._current.end()
            self._current = self._pending
            self._current.start()
            self._pending = None
        else:
            self._current.update()