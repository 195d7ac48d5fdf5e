# session.py
from __future__ import annotations

from typing import Optional
import logging
import random

from .config import TICK_INTERVAL_SECONDS
from .game import GameState, new_game_state, set_pending_direction, step_game
from .timer import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns the running GameState and its tick timer.

    Input goes through press_direction() and request_restart(); the scheduler
    calls on_tick(). At most one timer is ever active.
    """

    def __init__(
        self,
        grid_w: int,
        grid_h: int,
        scheduler: Scheduler,
        tick_interval: float = TICK_INTERVAL_SECONDS,
        rng: Optional[random.Random] = None,
    ):
        self.grid_w = grid_w
        self.grid_h = grid_h
        self.scheduler = scheduler
        self.tick_interval = tick_interval
        self.rng = rng if rng is not None else random.Random()
        self.state: GameState = new_game_state(grid_w, grid_h, self.rng)
        self.ticks = 0
        self._timer: Optional[TimerHandle] = None
        self._untouched = True     # state above has not been played yet

    @property
    def running(self) -> bool:
        return self._timer is not None

    # Commands -----------------------------------------------------------------
    def start(self) -> None:
        """Fresh state and a fresh timer."""
        if not self._untouched:
            self.state = new_game_state(self.grid_w, self.grid_h, self.rng)
        self._untouched = False
        self.ticks = 0
        self._start_loop()

    def press_direction(self, direction) -> None:
        set_pending_direction(self.state, direction)
        self._untouched = False

    def request_restart(self) -> bool:
        """Restart after game over. Ignored while a run is in progress."""
        if not self.state.is_over:
            return False
        logger.info("Restarting after score %d", self.state.score)
        self.start()
        return True

    # Timer --------------------------------------------------------------------
    def on_tick(self) -> None:
        if not self.state.is_over:
            self.ticks += 1
        step_game(self.state)
        if self.state.is_over:
            self.stop()

    def _start_loop(self) -> None:
        self.stop()
        self._timer = self.scheduler.schedule_interval(self.tick_interval, self.on_tick)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
