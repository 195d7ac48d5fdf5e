"""
Tests for headless.py - autopilot episodes on a simulated clock.
"""

import csv
import random

from gridsnake.config import Config
from gridsnake.headless import run_episode, run_headless
from gridsnake.session import GameSession
from gridsnake.timer import SteppedScheduler


def straight_ahead(state):
    return state.direction


class TestRunEpisode:

    def test_runs_until_wall(self):
        scheduler = SteppedScheduler()
        session = GameSession(10, 10, scheduler, rng=random.Random(0))
        steps, score = run_episode(session, scheduler, straight_ahead)
        # x=2 to x=9 is 7 moves, the 8th tick hits the wall
        assert steps == 8
        assert score == session.state.score
        assert session.state.is_over is True
        assert session.running is False

    def test_max_steps(self):
        scheduler = SteppedScheduler()
        session = GameSession(40, 40, scheduler, rng=random.Random(0))
        steps, _ = run_episode(session, scheduler, straight_ahead, max_steps=5)
        assert steps == 5
        assert session.state.is_over is False
        assert session.running is False
        assert scheduler.active_timers == 0

    def test_episodes_back_to_back(self):
        scheduler = SteppedScheduler()
        session = GameSession(10, 10, scheduler, rng=random.Random(0))
        assert run_episode(session, scheduler, straight_ahead)[0] == 8
        assert run_episode(session, scheduler, straight_ahead)[0] == 8


class TestRunHeadless:

    def test_writes_csv(self, tmp_path, capsys):
        out = tmp_path / "runs.csv"
        cfg = Config(width=200, height=200, cell_size=20, seed=7)
        rows = run_headless(cfg, episodes=3, out_csv=str(out), max_steps=2000)
        assert len(rows) == 3
        with open(out, newline="") as f:
            lines = list(csv.reader(f))
        assert lines[0] == ["ep", "steps", "score"]
        assert [int(r[0]) for r in lines[1:]] == [1, 2, 3]
        assert "ep,steps,score" in capsys.readouterr().out

    def test_seed_is_reproducible(self):
        cfg = Config(width=160, height=160, cell_size=20, seed=11)
        assert run_headless(cfg, 2, max_steps=2000) == run_headless(cfg, 2, max_steps=2000)

    def test_show_prints_board(self, capsys):
        cfg = Config(width=100, height=60, cell_size=20, seed=1)
        run_headless(cfg, 1, show=True, max_steps=500)
        assert "Score:" in capsys.readouterr().out
