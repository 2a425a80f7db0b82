"""Card browsing state machine.

``transition`` is a pure function over ``NavState``; ``NavigationController``
applies it and owns the timer that clears the switching flag.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


class NavEvent(str, Enum):
    GO_TO = "go_to"
    NEXT = "next"
    PREV = "prev"
    TOGGLE_REVEAL = "toggle_reveal"
    SWITCH_ELAPSED = "switch_elapsed"


@dataclass(frozen=True)
class NavState:
    index: int = 0
    revealed: bool = False
    switching: bool = False


def transition(
    state: NavState, event: NavEvent, length: int, target: Optional[int] = None
) -> NavState:
    """Return the state after ``event`` for a set of ``length`` cards."""
    if event == NavEvent.TOGGLE_REVEAL:
        return replace(state, revealed=not state.revealed)
    if event == NavEvent.SWITCH_ELAPSED:
        return replace(state, switching=False)

    if event == NavEvent.NEXT:
        target = state.index + 1
    elif event == NavEvent.PREV:
        target = state.index - 1
    elif target is None:
        raise ValueError("go_to needs a target index")

    if target == state.index or not 0 <= target < length:
        return state
    return NavState(index=target, revealed=False, switching=True)


def default_scheduler(delay: float, callback: Callable[[], None]) -> Cancellable:
    """Schedule on the running event loop, or a daemon timer outside one."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
    return loop.call_later(delay, callback)


class NavigationController:
    """Bounds-checked position, reveal flag and switching flag over a card list."""

    def __init__(
        self,
        length: int = 0,
        *,
        switch_seconds: float = 0.22,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.length = length
        self.switch_seconds = switch_seconds
        self._schedule = scheduler or default_scheduler
        self._timer: Optional[Cancellable] = None
        self.state = NavState()

    @property
    def current_index(self) -> int:
        return self.state.index

    @property
    def revealed(self) -> bool:
        return self.state.revealed

    @property
    def switching(self) -> bool:
        return self.state.switching

    def reset(self, length: int, index: int = 0) -> None:
        """Point at ``index`` of a new card list, unrevealed and switching."""
        self.length = length
        index = max(0, min(index, length - 1)) if length else 0
        self._apply(NavState(index=index, revealed=False, switching=True))

    def go_to(self, index: int) -> None:
        self._apply(transition(self.state, NavEvent.GO_TO, self.length, index))

    def next(self) -> None:
        self._apply(transition(self.state, NavEvent.NEXT, self.length))

    def prev(self) -> None:
        self._apply(transition(self.state, NavEvent.PREV, self.length))

    def toggle_reveal(self) -> None:
        self.state = transition(self.state, NavEvent.TOGGLE_REVEAL, self.length)

    def _apply(self, new: NavState) -> None:
        if new is self.state:
            return
        self.state = new
        if new.switching:
            self._cancel_timer()
            self._timer = self._schedule(self.switch_seconds, self._switch_elapsed)

    def _switch_elapsed(self) -> None:
        self._timer = None
        self.state = transition(self.state, NavEvent.SWITCH_ELAPSED, self.length)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def clear(self) -> None:
        """Forget the card list and return to the initial state."""
        self._cancel_timer()
        self.length = 0
        self.state = NavState()

    def close(self) -> None:
        """Release the switching timer; safe to call more than once."""
        self._cancel_timer()
        self.state = replace(self.state, switching=False)
