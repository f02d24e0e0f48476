"""Path following: moves entities continuously along pathfinder routes."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from tick_walk import vec
from tick_walk.config import MovementConfig
from tick_walk.pathfind import find_path
from tick_walk.types import Cell, Path

if TYPE_CHECKING:
    from tick_walk.types import MapView

logger = logging.getLogger(__name__)


class FollowState(Enum):
    IDLE = "idle"
    MOVING = "moving"


@dataclass
class MovingEntity:
    """An entity that walks along a path.

    ``x``/``y`` is the entity center in world units and ``speed`` is world
    units per tick. While moving, ``path[path_step]`` is the waypoint whose
    tile center is ``(target_x, target_y)``. An idle entity has no path and
    ``path_step == 0``.
    """

    x: float
    y: float
    speed: float = 3.0
    target_x: float = 0.0
    target_y: float = 0.0
    path: Path | None = None
    path_step: int = 0
    moving: bool = False

    def __post_init__(self) -> None:
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def target(self) -> tuple[float, float]:
        return self.target_x, self.target_y

    @property
    def state(self) -> FollowState:
        return FollowState.MOVING if self.moving else FollowState.IDLE


class PathFollower:
    """Drives MovingEntity instances across a tile map.

    ``move_to`` and ``update`` mutate the same entity fields without locking;
    the host must not run them concurrently for one entity.
    """

    def __init__(
        self,
        tilemap: MapView,
        config: MovementConfig | None = None,
        on_arrive: Callable[[MovingEntity], None] | None = None,
    ) -> None:
        self._tilemap = tilemap
        self._config = config if config is not None else MovementConfig()
        self._on_arrive = on_arrive

    @property
    def tilemap(self) -> MapView:
        return self._tilemap

    @property
    def config(self) -> MovementConfig:
        return self._config

    def cell_of(self, entity: MovingEntity) -> Cell:
        return self._tilemap.world_to_grid(entity.x, entity.y)

    def move_to(self, entity: MovingEntity, goal: Cell) -> bool:
        """Route ``entity`` to ``goal``. Returns True if a new route was adopted.

        A goal equal to the entity's own cell leaves it idle. When no route
        exists the entity keeps whatever it was doing, including following
        an older path.
        """
        start = self.cell_of(entity)
        path = find_path(self._tilemap, start, goal, self._config.max_expansions)
        if path is None:
            logger.debug("move_to %s from %s: no route, keeping current state", goal, start)
            return False
        if len(path) == 1:
            self.stop(entity)
            return False

        entity.path = path
        entity.path_step = 1
        entity.target_x, entity.target_y = self._tilemap.grid_to_world(*path[1])
        entity.moving = True
        return True

    def stop(self, entity: MovingEntity) -> None:
        """Halt in place."""
        entity.path = None
        entity.path_step = 0
        entity.moving = False

    def remaining_path(self, entity: MovingEntity) -> Path:
        """Cells still ahead of the entity, current waypoint first."""
        if not entity.moving or entity.path is None:
            return ()
        return entity.path[entity.path_step:]

    def effective_speed(self, entity: MovingEntity) -> float:
        if not self._config.terrain_speed:
            return entity.speed
        tile = self._tilemap.get_tile(*self.cell_of(entity))
        if not tile.walkable or tile.walk_speed <= 0.0:
            return entity.speed
        return entity.speed * tile.walk_speed

    def update(self, entity: MovingEntity) -> None:
        """Advance ``entity`` by one tick. Never raises; a no-op while idle."""
        if not entity.moving:
            return
        if entity.path is None:
            self.stop(entity)
            return

        position = vec.step_toward(
            entity.position,
            entity.target,
            self.effective_speed(entity),
            self._config.snap_epsilon,
        )
        entity.x, entity.y = position

        if vec.reached(position, entity.target, self._config.snap_epsilon):
            entity.x, entity.y = entity.target
            self._advance(entity, entity.path)

        if self._config.clamp_to_map:
            self._clamp(entity)

    def _advance(self, entity: MovingEntity, path: Path) -> None:
        next_step = entity.path_step + 1
        if next_step >= len(path):
            self.stop(entity)
            if self._on_arrive is not None:
                self._on_arrive(entity)
            return
        entity.path_step = next_step
        entity.target_x, entity.target_y = self._tilemap.grid_to_world(*path[next_step])

    def _clamp(self, entity: MovingEntity) -> None:
        # The far edge belongs to the next column, so stay just inside it.
        world_w, world_h = self._tilemap.world_size
        upper = (math.nextafter(world_w, 0.0), math.nextafter(world_h, 0.0))
        entity.x, entity.y = vec.clamp_point(entity.position, (0.0, 0.0), upper)
        entity.target_x, entity.target_y = vec.clamp_point(entity.target, (0.0, 0.0), upper)
