"""Movement and search configuration."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TILE_SIZE = 32.0
DEFAULT_SNAP_EPSILON = 0.1
DEFAULT_MAX_EXPANSIONS = 50_000


@dataclass(frozen=True)
class MovementConfig:
    """Immutable configuration for PathFollower.

    Attributes:
        snap_epsilon: Distance at or below which an entity is snapped onto its
            waypoint. Independent of, and much smaller than, entity speed.
        max_expansions: Node budget for each pathfinding search. Exhausting it
            is reported the same way as an unreachable goal.
        terrain_speed: Scale entity speed by the walk speed of the tile under it.
        clamp_to_map: Keep position and target inside the map's world bounds.
    """

    snap_epsilon: float = DEFAULT_SNAP_EPSILON
    max_expansions: int = DEFAULT_MAX_EXPANSIONS
    terrain_speed: bool = True
    clamp_to_map: bool = True

    def __post_init__(self) -> None:
        if self.snap_epsilon <= 0:
            raise ValueError(f"snap_epsilon must be positive, got {self.snap_epsilon}")
        if self.max_expansions <= 0:
            raise ValueError(f"max_expansions must be positive, got {self.max_expansions}")
