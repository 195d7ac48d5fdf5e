import os
import random

import pytest

# Off-screen pygame for drawing and timer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from gridsnake.config import RIGHT
from gridsnake.game import GameState


def make_state(snake, direction=RIGHT, food=(0, 0), grid_w=10, grid_h=10,
               pending=None, score=0, seed=0):
    """Build a GameState fixture directly, bypassing new_game_state."""
    return GameState(
        snake=list(snake),
        food=food,
        direction=direction,
        pending=direction if pending is None else pending,
        grid_w=grid_w,
        grid_h=grid_h,
        score=score,
        rng=random.Random(seed),
    )


@pytest.fixture
def state():
    """Three-cell snake in the middle of a 10x10 grid heading right."""
    return make_state([(5, 5), (4, 5), (3, 5)], food=(0, 0))


@pytest.fixture
def pygame_ready():
    import pygame
    pygame.init()
    yield pygame
    pygame.quit()
