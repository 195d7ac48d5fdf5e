# config.py
from dataclasses import dataclass
from typing import Optional, Tuple

# ----- Window & grid -----
WIDTH, HEIGHT = 640, 480
CELL_SIZE = 20
TICK_INTERVAL_SECONDS = 0.15

# ----- Colors -----
BG    = (26, 26, 38)
GREEN = (0, 255, 0)
HEAD  = (120, 255, 120)
RED   = (255, 0, 0)
TEXT  = (220, 220, 230)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


def grid_dimensions(width_px: int, height_px: int, cell_size: int = CELL_SIZE) -> Tuple[int, int]:
    """Number of whole cells that fit in a viewport."""
    return width_px // cell_size, height_px // cell_size


# ----- Tunables -----
@dataclass
class Config:
    width: int = WIDTH
    height: int = HEIGHT
    cell_size: int = CELL_SIZE
    tick_interval: float = TICK_INTERVAL_SECONDS
    seed: Optional[int] = None     # None -> nondeterministic food placement
    fps: int = 60                  # render frame cap; ticks are timer-driven

    @property
    def grid_size(self) -> Tuple[int, int]:
        return grid_dimensions(self.width, self.height, self.cell_size)

CFG = Config()
