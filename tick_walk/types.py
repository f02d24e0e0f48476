"""Shared types and protocols for tick-walk."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

Cell = tuple[int, int]
Path = tuple[Cell, ...]


class OutOfBoundsError(ValueError):
    """Raised when a cell lies outside the grid. Signals a caller bug, not a missing route."""

    def __init__(self, cell: Cell, width: int, height: int) -> None:
        self.cell = cell
        super().__init__(f"{cell} out of bounds for {width}x{height} grid")


@dataclass(frozen=True)
class Tile:
    """Immutable terrain definition.

    Attributes:
        name: Terrain type name ("grass", "water", ...).
        walkable: Whether entities can traverse this tile.
        walk_speed: Speed multiplier while walking on the tile (must be >= 0).
        color: RGB color used by renderers.
    """

    name: str
    walkable: bool = True
    walk_speed: float = 1.0
    color: tuple[int, int, int] = (128, 128, 128)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Tile name must be non-empty")
        if self.walk_speed < 0:
            raise ValueError(f"walk_speed must be >= 0, got {self.walk_speed}")


class MapView(Protocol):
    @property
    def width(self) -> int: ...
    @property
    def height(self) -> int: ...
    @property
    def world_size(self) -> tuple[float, float]: ...
    def in_bounds(self, gx: int, gy: int) -> bool: ...
    def get_tile(self, gx: int, gy: int) -> Tile: ...
    def max_walk_speed(self) -> float: ...
    def world_to_grid(self, x: float, y: float) -> Cell: ...
    def grid_to_world(self, gx: int, gy: int) -> tuple[float, float]: ...
