"""Layout and rendering constants."""
from __future__ import annotations

DEFAULT_MAP_SIZE = 40
DEFAULT_TILE_SIZE = 16
STATUS_H = 40
STATUS_BG = (30, 30, 40)
STATUS_TEXT = (200, 200, 200)
FPS = 60
TPS = 30

WALKER_COLOR = (240, 220, 60)
WALKER_IDLE_COLOR = (200, 200, 200)
ROUTE_COLOR = (255, 255, 255)
GRID_LINE_COLOR = (30, 30, 30)
