# main.py
import argparse
import dataclasses
import logging
import random

import numpy as np  # type: ignore
import pygame  # type: ignore

from .autopilot import choose_direction
from .config import CFG, Config, UP, DOWN, LEFT, RIGHT
from .headless import run_headless
from .render import draw_game, draw_game_over, load_fonts
from .session import GameSession
from .timer import PygameScheduler

KEY_DIRECTIONS = {
    pygame.K_UP: UP, pygame.K_w: UP,
    pygame.K_DOWN: DOWN, pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT, pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT, pygame.K_d: RIGHT,
}
RESTART_KEYS = (pygame.K_SPACE, pygame.K_r)


def handle_event(session: GameSession, event: "pygame.event.Event") -> bool:
    """Translate one key/window event into session commands. Return False to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEY_DIRECTIONS:
            session.press_direction(KEY_DIRECTIONS[event.key])
        elif event.key in RESTART_KEYS:
            session.request_restart()
    return True


def run_window(cfg: Config, autopilot: bool = False) -> None:
    pygame.init()
    font, title_font = load_fonts(cfg.cell_size)
    screen = pygame.display.set_mode((cfg.width, cfg.height))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    grid_w, grid_h = cfg.grid_size
    scheduler = PygameScheduler()
    session = GameSession(grid_w, grid_h, scheduler, cfg.tick_interval,
                          rng=random.Random(cfg.seed))
    np_rng = np.random.default_rng(cfg.seed)
    session.start()

    running = True
    while running:
        # 1) input + timer ticks, in arrival order
        for event in pygame.event.get():
            if scheduler.dispatch(event):
                # Autopilot steers between ticks like a player would
                if autopilot and not session.state.is_over:
                    session.press_direction(choose_direction(session.state, np_rng))
                continue
            if not handle_event(session, event):
                running = False
                break

        # 2) render
        draw_game(screen, font, session.state, cfg.cell_size)
        if session.state.is_over:
            draw_game_over(screen, title_font, session.state.score)
        pygame.display.flip()
        clock.tick(cfg.fps)

    session.stop()
    pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridsnake", description="Grid Snake")
    parser.add_argument("--width", type=int, default=CFG.width, help="viewport width in pixels")
    parser.add_argument("--height", type=int, default=CFG.height, help="viewport height in pixels")
    parser.add_argument("--cell-size", type=int, default=CFG.cell_size, help="pixels per grid cell")
    parser.add_argument("--tick", type=float, default=CFG.tick_interval,
                        help="seconds between snake moves (lower is faster)")
    parser.add_argument("--seed", type=int, default=CFG.seed, help="seed for food placement")
    parser.add_argument("--autopilot", action="store_true",
                        help="let the greedy autopilot steer")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="no window: play autopilot episodes on a simulated clock",
    )
    parser.add_argument("--episodes", type=int, default=1, help="episodes for --headless")
    parser.add_argument("--max-steps", type=int, default=10_000,
                        help="tick cap per headless episode")
    parser.add_argument("--out", type=str, default=None, help="CSV path for --headless results")
    parser.add_argument("--show", action="store_true", help="print the final board after each headless episode")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return dataclasses.replace(
        CFG,
        width=args.width,
        height=args.height,
        cell_size=args.cell_size,
        tick_interval=args.tick,
        seed=args.seed,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cell_size <= 0:
        parser.error("--cell-size must be positive")
    if args.tick <= 0:
        parser.error("--tick must be positive")
    cfg = config_from_args(args)
    grid_w, grid_h = cfg.grid_size
    if grid_w < 3 or grid_h < 1:
        parser.error(f"viewport too small: {grid_w}x{grid_h} cells, need at least 3x1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        run_headless(cfg, args.episodes, args.out, show=args.show, max_steps=args.max_steps)
        return

    run_window(cfg, autopilot=args.autopilot)


if __name__ == "__main__":
    main()
