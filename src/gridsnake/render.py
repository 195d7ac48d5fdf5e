# render.py
from typing import Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import BG, GREEN, HEAD, RED, TEXT, CELL_SIZE
from .game import GameState

# Board snapshot codes
EMPTY, BODY, HEAD_CELL, FOOD = 0, 1, 2, 3
GLYPHS = {EMPTY: ".", BODY: "o", HEAD_CELL: "@", FOOD: "*"}


# ---------- Snapshot ----------
def board_array(state: GameState) -> np.ndarray:
    """
    Grid snapshot of shape (grid_h, grid_w), dtype int8:
      0 empty, 1 body, 2 head, 3 food
    Indexed as board[y, x].
    """
    board = np.zeros((state.grid_h, state.grid_w), dtype=np.int8)
    if state.food is not None:
        fx, fy = state.food
        board[fy, fx] = FOOD
    for x, y in state.snake[1:]:
        board[y, x] = BODY
    if state.snake:
        hx, hy = state.snake[0]
        board[hy, hx] = HEAD_CELL
    return board


def board_to_text(state: GameState) -> str:
    """Terminal rendering: one line per row plus a score line."""
    board = board_array(state)
    rows = ["".join(GLYPHS[int(v)] for v in row) for row in board]
    status = f"Score: {state.score}"
    if state.is_over:
        status += "  GAME OVER"
    return "\n".join(rows + [status])


# ---------- pygame ----------
def to_pixel(gx: int, gy: int, cell_size: int = CELL_SIZE) -> Tuple[int, int]:
    return gx * cell_size, gy * cell_size


def load_fonts(cell_size: int = CELL_SIZE) -> Tuple[pygame.font.Font, pygame.font.Font]:
    """Score label at 1.5 cells, game-over text at 2 cells."""
    score_font = pygame.font.SysFont(None, max(cell_size * 3 // 2, 16))
    title_font = pygame.font.SysFont(None, max(cell_size * 2, 20))
    return score_font, title_font


def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, int, int],
              cell_size: int = CELL_SIZE) -> None:
    # One pixel smaller than the cell so grid lines show through
    px, py = to_pixel(gx, gy, cell_size)
    rect = pygame.Rect(px, py, cell_size - 1, cell_size - 1)
    pygame.draw.rect(screen, color, rect)


def draw_game(screen: pygame.Surface, font: pygame.font.Font, state: GameState,
              cell_size: int = CELL_SIZE) -> None:
    screen.fill(BG)
    # food
    if state.food is not None:
        draw_cell(screen, state.food[0], state.food[1], RED, cell_size)
    # snake
    for i, (x, y) in enumerate(state.snake):
        draw_cell(screen, x, y, HEAD if i == 0 else GREEN, cell_size)
    # score
    txt = font.render(f"Score: {state.score}", True, TEXT)
    screen.blit(txt, (cell_size, cell_size))


def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, score: int) -> None:
    width, height = screen.get_size()
    # Dim with translucent overlay
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    lines = ("Game Over!", f"Score: {score}", "(Press SPACE to Restart)")
    line_h = font.get_linesize()
    top = height // 2 - (line_h * len(lines)) // 2
    for i, line in enumerate(lines):
        surf = font.render(line, True, (240, 240, 250))
        rect = surf.get_rect(center=(width // 2, top + i * line_h + line_h // 2))
        screen.blit(surf, rect)
