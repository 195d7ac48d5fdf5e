"""Grid-based Snake: fixed-tick simulation engine plus a pygame host."""

from .game import (
    GameState,
    GridSnakeError,
    InvalidDirectionError,
    FoodPlacementExhausted,
    new_game_state,
    place_food,
    set_pending_direction,
    step_game,
)
from .session import GameSession

__all__ = [
    "GameState",
    "GridSnakeError",
    "InvalidDirectionError",
    "FoodPlacementExhausted",
    "new_game_state",
    "place_food",
    "set_pending_direction",
    "step_game",
    "GameSession",
]
