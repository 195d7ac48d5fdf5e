# autopilot.py
from typing import List, Optional

import numpy as np  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, DIRECTIONS
from .game import GameState, is_opposite
from .render import board_array, BODY, HEAD_CELL


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int) -> List[tuple]:
    """
    Returns a preference ordering of moves that reduce Manhattan distance to food.
    Does NOT check collisions; caller should filter unsafe moves.
    """
    prefs = []
    if fx < hx:
        prefs.append(LEFT)
    elif fx > hx:
        prefs.append(RIGHT)
    if fy < hy:
        prefs.append(UP)
    elif fy > hy:
        prefs.append(DOWN)
    # Orthogonal options last so there is still a choice when the direct ones are blocked
    for d in DIRECTIONS:
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def is_safe(state: GameState, board: np.ndarray, direction) -> bool:
    """True if one step in `direction` hits neither a wall nor the body."""
    hx, hy = state.snake[0]
    nx, ny = hx + direction[0], hy + direction[1]
    if not state.in_bounds((nx, ny)):
        return False
    return board[ny, nx] not in (BODY, HEAD_CELL)


def choose_direction(state: GameState, rng: Optional[np.random.Generator] = None) -> tuple:
    """
    Greedy on food distance with simple safety:
    - prefer moves that reduce Manhattan distance
    - never pick a reversal (the engine would ignore it anyway)
    - if every move is fatal, pick one at random
    """
    if not state.snake:
        return state.direction
    hx, hy = state.snake[0]
    if state.food is not None:
        prefs = best_move_toward_food(hx, hy, state.food[0], state.food[1])
    else:
        prefs = list(DIRECTIONS)

    board = board_array(state)
    for d in prefs:
        if is_opposite(d, state.direction):
            continue
        if is_safe(state, board, d):
            return d

    # Boxed in
    rng = rng if rng is not None else np.random.default_rng()
    return DIRECTIONS[int(rng.integers(len(DIRECTIONS)))]
