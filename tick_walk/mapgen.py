"""Procedural terrain: grass plains, lakes joined by rivers, and dirt paths."""
from __future__ import annotations

import math
import random

from tick_walk.config import DEFAULT_TILE_SIZE
from tick_walk.tilemap import TileMap
from tick_walk.tiles import TileType


def generate_terrain(
    width: int,
    height: int,
    seed: int = 42,
    tile_size: float = DEFAULT_TILE_SIZE,
    lakes: int | None = None,
) -> TileMap:
    """Generate a grass map with lakes, rivers and snaking dirt paths.

    Lakes are ellipses with sine-noise shores. Consecutive lakes are joined by
    winding rivers. Dirt paths run across the map last and only replace
    grass, so they stop at water. The same seed always yields the same map.
    """
    rng = random.Random(seed)
    tilemap = TileMap(width, height, tile_size=tile_size, default=TileType.GRASS)

    if lakes is None:
        lakes = max(1, (width * height) // 1600)

    centers: list[tuple[int, int]] = []
    for _ in range(lakes):
        cx = rng.randrange(width)
        cy = rng.randrange(height)
        rx = max(2.0, rng.uniform(0.05, 0.12) * width)
        ry = max(2.0, rng.uniform(0.05, 0.12) * height)
        _add_lake(tilemap, cx, cy, rx, ry, irregularity=rng.uniform(0.3, 0.5))
        centers.append((cx, cy))

    for (x1, y1), (x2, y2) in zip(centers, centers[1:]):
        _add_river(tilemap, x1, y1, x2, y2, river_width=rng.randint(1, 2))

    margin = max(1, min(width, height) // 20)
    _add_snaking_path(tilemap, margin, height // 2, width - 1 - margin, height // 2)
    _add_snaking_path(tilemap, width // 2, margin, width // 2, height - 1 - margin)
    _add_snaking_path(tilemap, margin, margin, width - 1 - margin, height - 1 - margin)
    return tilemap


def _add_lake(
    tilemap: TileMap, cx: int, cy: int, rx: float, ry: float, irregularity: float
) -> None:
    x_lo, x_hi = max(0, int(cx - rx - 2)), min(tilemap.width - 1, int(cx + rx + 2))
    y_lo, y_hi = max(0, int(cy - ry - 2)), min(tilemap.height - 1, int(cy + ry + 2))
    for y in range(y_lo, y_hi + 1):
        for x in range(x_lo, x_hi + 1):
            dx, dy = x - cx, y - cy
            angle = math.atan2(dy, dx)
            noise = math.sin(angle * 6) * irregularity
            noise += math.sin(angle * 4 + 2.5) * irregularity * 0.5
            dist = math.hypot(dx / (rx + noise), dy / (ry + noise * 0.7))
            if dist < 1.0:
                tilemap.set_tile(x, y, TileType.WATER)


def _add_river(
    tilemap: TileMap, x1: int, y1: int, x2: int, y2: int, river_width: int
) -> None:
    steps = int(math.hypot(x2 - x1, y2 - y1))
    if steps == 0:
        return
    for step in range(steps + 1):
        t = step / steps
        curve = math.sin(t * math.pi * 2) * 8
        x = int(x1 * (1 - t) + x2 * t + curve)
        y = int(y1 * (1 - t) + y2 * t)
        for dx in range(-river_width, river_width + 1):
            for dy in range(-river_width, river_width + 1):
                if dx * dx + dy * dy <= river_width * river_width and tilemap.in_bounds(x + dx, y + dy):
                    tilemap.set_tile(x + dx, y + dy, TileType.WATER)


def _add_snaking_path(tilemap: TileMap, x1: int, y1: int, x2: int, y2: int) -> None:
    total = math.hypot(x2 - x1, y2 - y1)
    if total == 0:
        return
    steps = int(total)
    # Perpendicular to the main direction.
    perp_x, perp_y = -(y2 - y1) / total, (x2 - x1) / total
    amplitude = min(8.0, total / 10)
    for step in range(steps + 1):
        t = step / steps
        offset = math.sin(t * math.pi * 3) * amplitude
        offset += math.sin(t * math.pi * 7) * amplitude * 0.3
        gx = round(x1 * (1 - t) + x2 * t + perp_x * offset)
        gy = round(y1 * (1 - t) + y2 * t + perp_y * offset)
        # Widen with the 4-neighborhood so curves stay connected.
        for dx, dy in ((0, 0), (1, 0), (-1, 0), (0, 1), (0, -1)):
            _pave(tilemap, gx + dx, gy + dy)


def _pave(tilemap: TileMap, gx: int, gy: int) -> None:
    if tilemap.in_bounds(gx, gy) and tilemap.get_tile(gx, gy).name == "grass":
        tilemap.set_tile(gx, gy, TileType.PATH)
