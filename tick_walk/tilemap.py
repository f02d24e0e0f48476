"""TileMap - bounded 2D tile grid with world/grid coordinate conversion."""
from __future__ import annotations

import math
from typing import Iterator, Union

from tick_walk.config import DEFAULT_TILE_SIZE
from tick_walk.tiles import TILES, TileType
from tick_walk.types import Cell, OutOfBoundsError, Tile

TileLike = Union[Tile, TileType]


def _resolve(tile: TileLike) -> Tile:
    if isinstance(tile, TileType):
        return TILES[tile]
    return tile


class TileMap:
    """Maps cells to Tile definitions.

    Sparse storage: only cells that differ from the default are stored.
    Coordinates outside the map read as water, so the map behaves as if it
    were surrounded by impassable terrain.
    """

    def __init__(
        self,
        width: int,
        height: int,
        tile_size: float = DEFAULT_TILE_SIZE,
        default: TileLike = TileType.GRASS,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"map size must be positive, got {width}x{height}")
        if tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        self._width = width
        self._height = height
        self._tile_size = float(tile_size)
        self._default = _resolve(default)
        self._outside = TILES[TileType.WATER]
        self._cells: dict[Cell, Tile] = {}

    # --- Properties ---

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def tile_size(self) -> float:
        return self._tile_size

    @property
    def default(self) -> Tile:
        return self._default

    @property
    def world_size(self) -> tuple[float, float]:
        return self._width * self._tile_size, self._height * self._tile_size

    # --- Queries ---

    def in_bounds(self, gx: int, gy: int) -> bool:
        return 0 <= gx < self._width and 0 <= gy < self._height

    def _check_bounds(self, gx: int, gy: int) -> None:
        if not self.in_bounds(gx, gy):
            raise OutOfBoundsError((gx, gy), self._width, self._height)

    def get_tile(self, gx: int, gy: int) -> Tile:
        if not self.in_bounds(gx, gy):
            return self._outside
        return self._cells.get((gx, gy), self._default)

    def walkable(self, cell: Cell) -> bool:
        tile = self.get_tile(*cell)
        return tile.walkable and 0.0 < tile.walk_speed < math.inf

    def max_walk_speed(self) -> float:
        """Fastest finite walk speed among walkable tiles in use, 0.0 if none."""
        speeds = [
            tile.walk_speed
            for tile in {self._default, *self._cells.values()}
            if tile.walkable and tile.walk_speed < math.inf
        ]
        return max(speeds, default=0.0)

    def tiles(self) -> Iterator[tuple[Cell, Tile]]:
        """Yield every cell with its tile, row by row."""
        for gy in range(self._height):
            for gx in range(self._width):
                yield (gx, gy), self._cells.get((gx, gy), self._default)

    def nearest_walkable(self, cell: Cell, max_radius: int = 20) -> Cell | None:
        """Closest walkable cell by Manhattan ring search, or None within max_radius.

        Returns ``cell`` itself when it is already walkable. Rings are scanned
        column by column so the result is deterministic.
        """
        if self.walkable(cell):
            return cell
        cx, cy = cell
        for radius in range(1, max_radius + 1):
            for dx in range(-radius, radius + 1):
                rest = radius - abs(dx)
                for dy in sorted({-rest, rest}):
                    candidate = (cx + dx, cy + dy)
                    if self.in_bounds(*candidate) and self.walkable(candidate):
                        return candidate
        return None

    # --- Coordinates ---

    def world_to_grid(self, x: float, y: float) -> Cell:
        return math.floor(x / self._tile_size), math.floor(y / self._tile_size)

    def grid_to_world(self, gx: int, gy: int) -> tuple[float, float]:
        """World coordinates of the tile center."""
        half = self._tile_size / 2
        return gx * self._tile_size + half, gy * self._tile_size + half

    # --- Mutation ---

    def set_tile(self, gx: int, gy: int, tile: TileLike) -> None:
        self._check_bounds(gx, gy)
        resolved = _resolve(tile)
        if resolved == self._default:
            self._cells.pop((gx, gy), None)
        else:
            self._cells[(gx, gy)] = resolved

    def fill_rect(self, corner1: Cell, corner2: Cell, tile: TileLike) -> None:
        """Fill an inclusive rectangle, clipped to the map."""
        x1, y1 = max(0, min(corner1[0], corner2[0])), max(0, min(corner1[1], corner2[1]))
        x2 = min(self._width - 1, max(corner1[0], corner2[0]))
        y2 = min(self._height - 1, max(corner1[1], corner2[1]))
        for gx in range(x1, x2 + 1):
            for gy in range(y1, y2 + 1):
                self.set_tile(gx, gy, tile)

    def clear(self) -> None:
        """Reset every cell to the default tile."""
        self._cells.clear()
