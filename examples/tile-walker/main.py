"""Tile Walker — click-to-move pathfinding demo with pygame."""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from game.state import GameState
from ui.constants import DEFAULT_MAP_SIZE, DEFAULT_TILE_SIZE, FPS, STATUS_H, TPS
from ui.renderer import draw_route, draw_terrain, draw_walker
from ui.status import StatusBar


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Tile Walker — tick-walk visual demo")
    p.add_argument("--seed", type=int, default=42, help="Terrain seed (default: 42)")
    p.add_argument("--map-size", type=int, default=DEFAULT_MAP_SIZE,
                   help=f"Grid width/height (default: {DEFAULT_MAP_SIZE})")
    p.add_argument("--tile-size", type=int, default=DEFAULT_TILE_SIZE,
                   help=f"Tile size in pixels (default: {DEFAULT_TILE_SIZE})")
    p.add_argument("--speed", type=float, default=2.0, help="Walker speed in pixels per tick")
    p.add_argument("--debug", action="store_true", help="Log pathfinding decisions")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    state = GameState(args.map_size, args.tile_size, args.seed, args.speed)
    map_px = args.map_size * args.tile_size

    pygame.init()
    screen = pygame.display.set_mode((map_px, map_px + STATUS_H))
    pygame.display.set_caption("Tile Walker")
    clock = pygame.time.Clock()
    status = StatusBar()
    status.notify("Click: walk  R: new map  Esc: quit")

    # Tick accumulator: movement advances at a fixed rate, input lands between ticks.
    tick_interval = 1.0 / TPS
    accumulator = 0.0

    running = True
    while running:
        accumulator += clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    state.regenerate(state.seed + 1)
                    status.notify(f"New terrain (seed {state.seed})")
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if event.pos[1] < map_px:
                    goal = state.click(*event.pos)
                    if goal is None:
                        status.notify("No route there", (255, 80, 80))
                    else:
                        status.notify(f"Walking to {goal}", (100, 255, 100))

        while accumulator >= tick_interval:
            state.tick()
            accumulator -= tick_interval

        screen.fill((20, 20, 30))
        draw_terrain(screen, state.tilemap)
        draw_route(screen, state.follower, state.walker)
        draw_walker(screen, state.walker, max(3, args.tile_size // 3))
        status.draw(screen, map_px, state)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
