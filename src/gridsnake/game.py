# game.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
import logging
import numbers
import random

from .config import DIRECTIONS, RIGHT

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


# ---------- Errors ----------
class GridSnakeError(Exception):
    """Base class for errors raised by the engine."""


class InvalidDirectionError(GridSnakeError, ValueError):
    """Raised when a direction is not one of the four unit vectors."""


class FoodPlacementExhausted(GridSnakeError):
    """Raised when every cell of the grid is occupied by the snake."""


# ---------- Helpers ----------
def is_opposite(a: Cell, b: Cell) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def _validate_direction(direction) -> Cell:
    try:
        cand = tuple(direction)
    except TypeError:
        cand = None
    if cand is not None and not all(
        isinstance(c, numbers.Integral) and not isinstance(c, bool) for c in cand
    ):
        cand = None
    if cand not in DIRECTIONS:
        raise InvalidDirectionError(f"Invalid direction {direction!r}")
    # Hand back the canonical int tuple
    return DIRECTIONS[DIRECTIONS.index(cand)]


# ---------- State ----------
@dataclass
class GameState:
    snake: List[Cell]              # head at index 0
    food: Optional[Cell]           # None only when the board is full
    direction: Cell                # committed on the last tick
    pending: Cell                  # latest input, checked at the next tick
    grid_w: int
    grid_h: int
    score: int = 0
    is_over: bool = False
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def head(self) -> Optional[Cell]:
        return self.snake[0] if self.snake else None

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.grid_w and 0 <= y < self.grid_h


def place_food(state: GameState, extra: Iterable[Cell] = ()) -> Cell:
    """
    Move the food to a uniformly random cell not covered by the snake.

    `extra` cells are treated as occupied too (the tick passes the head it is
    about to insert). Raises FoodPlacementExhausted when no cell is free.
    """
    occupied = set(state.snake)
    occupied.update(extra)
    free = state.grid_w * state.grid_h - sum(1 for c in occupied if state.in_bounds(c))
    if free <= 0:
        raise FoodPlacementExhausted(
            f"No free cell for food on a {state.grid_w}x{state.grid_h} grid"
        )

    while True:
        fx = state.rng.randrange(state.grid_w)
        fy = state.rng.randrange(state.grid_h)
        if (fx, fy) not in occupied:
            state.food = (fx, fy)
            logger.debug("Placed food at %s", state.food)
            return state.food


def new_game_state(grid_w: int, grid_h: int, rng: Optional[random.Random] = None) -> GameState:
    """Fresh run: a 3-cell snake heading right from a quarter of the way across."""
    if grid_w < 3 or grid_h < 1:
        raise ValueError(f"Grid must be at least 3x1 cells, got {grid_w}x{grid_h}")

    head_x = max(grid_w // 4, 2)
    head_y = grid_h // 2
    snake = [(head_x - i, head_y) for i in range(3)]
    state = GameState(
        snake=snake,
        food=None,
        direction=RIGHT,
        pending=RIGHT,
        grid_w=grid_w,
        grid_h=grid_h,
        rng=rng if rng is not None else random.Random(),
    )
    try:
        place_food(state)
    except FoodPlacementExhausted:
        # Only a 3x1 grid gets here
        logger.info("No room for food on a %dx%d grid", grid_w, grid_h)
    return state


# ---------- Input / Update ----------
def set_pending_direction(state: GameState, direction) -> None:
    """
    Buffer a direction for the next tick.

    Reversals are stored as-is; step_game rejects them when it commits. Input
    after game over is validated and then dropped.
    """
    cand = _validate_direction(direction)
    if state.is_over:
        return
    state.pending = cand


def _end(state: GameState, reason: str) -> GameState:
    state.is_over = True
    logger.info("Game over (%s), score %d", reason, state.score)
    return state


def step_game(state: GameState) -> GameState:
    """
    Advance the game by one tick.
    A collision only flips is_over; snake, food and score stay as they were.
    Ticks after game over do nothing.
    """
    if state.is_over:
        return state
    if not state.snake:
        logger.warning("Tick with an empty snake")
        return _end(state, "empty snake")

    # Commit direction once per tick
    if not is_opposite(state.pending, state.direction):
        state.direction = state.pending

    hx, hy = state.snake[0]
    dx, dy = state.direction
    new_head = (hx + dx, hy + dy)

    # Wall collision
    if not state.in_bounds(new_head):
        return _end(state, "wall")

    # Self collision; the head cell is vacated by this move
    if new_head in state.snake[1:]:
        return _end(state, "self")

    ate = new_head == state.food
    if ate:
        state.score += 1
        try:
            place_food(state, extra=(new_head,))
        except FoodPlacementExhausted:
            logger.info("Board full at score %d, no room for food", state.score)
            state.food = None

    # Move / grow
    state.snake.insert(0, new_head)
    if not ate:
        state.snake.pop()
    return state
