"""tick-walk - Tile-grid pathfinding and smooth path following."""
from __future__ import annotations

from tick_walk.config import MovementConfig
from tick_walk.mapgen import generate_terrain
from tick_walk.movement import FollowState, MovingEntity, PathFollower
from tick_walk.pathfind import find_path, path_cost
from tick_walk.tilemap import TileMap
from tick_walk.tiles import TILES, TileType
from tick_walk.types import Cell, MapView, OutOfBoundsError, Path, Tile

__all__ = [
    "Cell",
    "FollowState",
    "MapView",
    "MovementConfig",
    "MovingEntity",
    "OutOfBoundsError",
    "Path",
    "PathFollower",
    "TILES",
    "Tile",
    "TileMap",
    "TileType",
    "find_path",
    "generate_terrain",
    "path_cost",
]
