"""Terrain, route and walker rendering."""
from __future__ import annotations

import pygame

from tick_walk import MovingEntity, PathFollower, TileMap

from ui.constants import GRID_LINE_COLOR, ROUTE_COLOR, WALKER_COLOR, WALKER_IDLE_COLOR


def draw_terrain(surface: pygame.Surface, tilemap: TileMap) -> None:
    size = int(tilemap.tile_size)
    for (gx, gy), tile in tilemap.tiles():
        pygame.draw.rect(surface, tile.color, pygame.Rect(gx * size, gy * size, size, size))

    width, height = (int(v) for v in tilemap.world_size)
    for gx in range(tilemap.width + 1):
        pygame.draw.line(surface, GRID_LINE_COLOR, (gx * size, 0), (gx * size, height))
    for gy in range(tilemap.height + 1):
        pygame.draw.line(surface, GRID_LINE_COLOR, (0, gy * size), (width, gy * size))


def draw_route(surface: pygame.Surface, follower: PathFollower, walker: MovingEntity) -> None:
    """Line from the walker through every waypoint it has not reached yet."""
    remaining = follower.remaining_path(walker)
    if not remaining:
        return
    points = [walker.position] + [follower.tilemap.grid_to_world(*cell) for cell in remaining]
    pygame.draw.lines(surface, ROUTE_COLOR, False, points, 1)
    gx, gy = remaining[-1]
    size = int(follower.tilemap.tile_size)
    pygame.draw.rect(surface, ROUTE_COLOR, pygame.Rect(gx * size, gy * size, size, size), 2)


def draw_walker(surface: pygame.Surface, walker: MovingEntity, radius: int) -> None:
    color = WALKER_COLOR if walker.moving else WALKER_IDLE_COLOR
    center = (round(walker.x), round(walker.y))
    pygame.draw.circle(surface, color, center, radius)
    pygame.draw.circle(surface, (0, 0, 0), center, radius, 1)
