"""Standard terrain types."""
from __future__ import annotations

from enum import Enum

from tick_walk.types import Tile


class TileType(Enum):
    GRASS = "grass"
    WATER = "water"
    PATH = "path"


TILES: dict[TileType, Tile] = {
    TileType.GRASS: Tile(name="grass", walk_speed=1.0, color=(144, 238, 144)),
    TileType.WATER: Tile(name="water", walkable=False, walk_speed=0.0, color=(65, 105, 225)),
    # Dirt paths are 50% faster than grass.
    TileType.PATH: Tile(name="path", walk_speed=1.5, color=(139, 69, 19)),
}
