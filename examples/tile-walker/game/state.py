"""Demo world: terrain, one walker and click handling."""
from __future__ import annotations

import logging

from tick_walk import MovingEntity, PathFollower, TileMap, generate_terrain

logger = logging.getLogger(__name__)


def spawn_cell(tilemap: TileMap) -> tuple[int, int]:
    """Walkable cell closest to the map center."""
    center = (tilemap.width // 2, tilemap.height // 2)
    cell = tilemap.nearest_walkable(center, max_radius=tilemap.width + tilemap.height)
    if cell is None:
        raise ValueError("generated map has no walkable tile")
    return cell


class GameState:
    """Holds the map, the walker and its follower."""

    def __init__(self, map_size: int, tile_size: int, seed: int, speed: float) -> None:
        self.map_size = map_size
        self.tile_size = tile_size
        self.speed = speed
        self.seed = seed
        self.arrivals = 0
        self.tilemap: TileMap
        self.follower: PathFollower
        self.walker: MovingEntity
        self.regenerate(seed)

    def regenerate(self, seed: int) -> None:
        self.seed = seed
        self.tilemap = generate_terrain(
            self.map_size, self.map_size, seed=seed, tile_size=self.tile_size
        )
        self.follower = PathFollower(self.tilemap, on_arrive=self._on_arrive)
        x, y = self.tilemap.grid_to_world(*spawn_cell(self.tilemap))
        self.walker = MovingEntity(x=x, y=y, speed=self.speed)
        logger.info("generated %dx%d map with seed %d", self.map_size, self.map_size, seed)

    def _on_arrive(self, walker: MovingEntity) -> None:
        self.arrivals += 1
        logger.info("arrived at %s", self.follower.cell_of(walker))

    def click(self, wx: float, wy: float) -> tuple[int, int] | None:
        """Send the walker toward a world point. Returns the goal cell, or None."""
        cell = self.tilemap.world_to_grid(wx, wy)
        if not self.tilemap.in_bounds(*cell):
            return None
        goal = self.tilemap.nearest_walkable(cell)
        if goal is None:
            return None
        if goal != cell:
            logger.debug("redirected click on %s to shore %s", cell, goal)
        if not self.follower.move_to(self.walker, goal):
            return None
        return goal

    def tick(self) -> None:
        self.follower.update(self.walker)
