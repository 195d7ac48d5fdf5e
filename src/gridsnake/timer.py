# timer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Protocol, Set, Tuple
import logging

import pygame  # type: ignore

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Host primitive: call `callback` every `interval` seconds until cancelled."""

    def schedule_interval(self, interval: float, callback: TickCallback) -> TimerHandle: ...


# -----------------------------------------------------------------------------
# pygame: custom event types fired by pygame.time.set_timer. Every timer also
# gets a fresh timer_id carried on its events, so a tick fetched before a
# cancel never reaches the timer that later reuses the same event type.
# -----------------------------------------------------------------------------
class _PygameTimer:
    def __init__(self, owner: "PygameScheduler", event_type: int, timer_id: int):
        self.owner = owner
        self.event_type = event_type
        self.timer_id = timer_id

    def cancel(self) -> None:
        self.owner._cancel(self.event_type, self.timer_id)


class PygameScheduler:
    """
    Interval timers on top of the pygame event queue.

    The main loop hands every event to dispatch(); timer events are consumed
    there (stale ones silently) and everything else is left to the caller.
    """

    def __init__(self) -> None:
        self._live: Dict[int, Tuple[int, TickCallback]] = {}   # event type -> (timer_id, callback)
        self._types: Set[int] = set()
        self._free_types: List[int] = []
        self._next_id = 0

    def schedule_interval(self, interval: float, callback: TickCallback) -> _PygameTimer:
        if self._free_types:
            event_type = self._free_types.pop()
        else:
            event_type = pygame.event.custom_type()
            self._types.add(event_type)
        self._next_id += 1
        timer_id = self._next_id
        millis = max(int(round(interval * 1000)), 1)
        self._live[event_type] = (timer_id, callback)
        pygame.time.set_timer(pygame.event.Event(event_type, timer_id=timer_id), millis)
        logger.debug("Timer %d (type %d) every %d ms", timer_id, event_type, millis)
        return _PygameTimer(self, event_type, timer_id)

    def _cancel(self, event_type: int, timer_id: int) -> None:
        live = self._live.get(event_type)
        if live is None or live[0] != timer_id:
            return
        del self._live[event_type]
        pygame.time.set_timer(event_type, 0)
        # Drop ticks that were already queued for this timer
        pygame.event.clear(event_type)
        self._free_types.append(event_type)

    def dispatch(self, event: "pygame.event.Event") -> bool:
        """Run the callback bound to a timer event. Returns True if consumed."""
        if event.type not in self._types:
            return False
        live = self._live.get(event.type)
        if live is None or getattr(event, "timer_id", None) != live[0]:
            # Tick from a cancelled timer
            return True
        live[1]()
        return True


# -----------------------------------------------------------------------------
# Simulated clock for headless runs
# -----------------------------------------------------------------------------
@dataclass
class _SteppedTimer:
    interval: float
    callback: TickCallback
    next_due: float
    order: int
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass
class SteppedScheduler:
    """
    Scheduler driven by advance() instead of a wall clock.
    Timers due at the same instant fire in the order they were created.
    """
    now: float = 0.0
    _timers: List[_SteppedTimer] = field(default_factory=list)
    _created: int = 0

    def schedule_interval(self, interval: float, callback: TickCallback) -> _SteppedTimer:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        timer = _SteppedTimer(interval, callback, self.now + interval, self._created)
        self._created += 1
        self._timers.append(timer)
        return timer

    @property
    def active_timers(self) -> int:
        return sum(1 for t in self._timers if t.active)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every due callback. Returns the fire count."""
        target = self.now + seconds
        fired = 0
        while True:
            self._timers = [t for t in self._timers if t.active]
            due = [t for t in self._timers if t.next_due <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: (t.next_due, t.order))
            self.now = timer.next_due
            timer.next_due += timer.interval
            timer.callback()
            fired += 1
        self.now = target
        return fired

    def run_ticks(self, count: int, interval: float) -> int:
        """Advance by `count` whole intervals, one at a time."""
        fired = 0
        for _ in range(count):
            fired += self.advance(interval)
        return fired
