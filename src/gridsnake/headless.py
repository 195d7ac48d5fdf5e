# headless.py
from __future__ import annotations
import csv
import random
from typing import Callable, List, Tuple

import numpy as np  # type: ignore

from .autopilot import choose_direction
from .config import Config
from .game import GameState
from .render import board_to_text
from .session import GameSession
from .timer import SteppedScheduler

Policy = Callable[[GameState], tuple]


# --------------------------
# Episode loop
# --------------------------
def run_episode(session: GameSession, scheduler: SteppedScheduler, policy: Policy,
                max_steps: int = 10_000) -> Tuple[int, int]:
    """
    Play one run to game over (or max_steps ticks) on a simulated clock.
    The policy is asked for a direction before every tick, the way a
    player presses keys between timer events.

    Returns:
        steps: ticks played
        score: final score
    """
    session.start()
    while session.running and session.ticks < max_steps:
        session.press_direction(policy(session.state))
        scheduler.advance(session.tick_interval)
    session.stop()
    return session.ticks, session.state.score


def run_headless(cfg: Config, episodes: int, out_csv: str | None = None,
                 show: bool = False, max_steps: int = 10_000) -> List[Tuple[int, int, int]]:
    """
    Run `episodes` autopilot games, print `ep,steps,score` rows and
    optionally save them as CSV.
    """
    grid_w, grid_h = cfg.grid_size
    scheduler = SteppedScheduler()
    session = GameSession(grid_w, grid_h, scheduler, cfg.tick_interval,
                          rng=random.Random(cfg.seed))
    np_rng = np.random.default_rng(cfg.seed)

    def policy(state: GameState) -> tuple:
        return choose_direction(state, np_rng)

    print(f"Running {episodes} episode(s) on a {grid_w}x{grid_h} grid")
    print("ep,steps,score")
    rows = [("ep", "steps", "score")]
    for ep in range(1, episodes + 1):
        steps, score = run_episode(session, scheduler, policy, max_steps)
        print(f"{ep},{steps},{score}")
        rows.append((ep, steps, score))
        if show:
            print(board_to_text(session.state))

    if out_csv:
        with open(out_csv, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerows(rows)
        print(f"\nSaved results → {out_csv}")

    return rows[1:]
