"""A* pathfinding over a tile map with 8-connected movement."""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from tick_walk.config import DEFAULT_MAX_EXPANSIONS
from tick_walk.types import Cell, OutOfBoundsError, Path

if TYPE_CHECKING:
    from tick_walk.types import MapView

logger = logging.getLogger(__name__)

DIAGONAL_COST = math.sqrt(2.0)

# Cardinal directions first, then diagonals.
_DIRS: tuple[tuple[int, int, float], ...] = (
    (0, 1, 1.0), (1, 0, 1.0), (0, -1, 1.0), (-1, 0, 1.0),
    (1, 1, DIAGONAL_COST), (-1, -1, DIAGONAL_COST),
    (1, -1, DIAGONAL_COST), (-1, 1, DIAGONAL_COST),
)


class _Node:
    __slots__ = ("cell", "g", "h", "f", "parent", "seq", "index")

    def __init__(self, cell: Cell, g: float, h: float, parent: _Node | None, seq: int) -> None:
        self.cell = cell
        self.g = g
        self.h = h
        self.f = g + h
        self.parent = parent
        self.seq = seq
        self.index = -1


class _OpenHeap:
    """Array-backed binary min-heap of nodes with in-place decrease-key.

    Ordered by (f, -seq): among equal f the most recently discovered node
    comes first.
    """

    def __init__(self) -> None:
        self._items: list[_Node] = []

    def __len__(self) -> int:
        return len(self._items)

    @staticmethod
    def _less(a: _Node, b: _Node) -> bool:
        if a.f != b.f:
            return a.f < b.f
        return a.seq > b.seq

    def push(self, node: _Node) -> None:
        node.index = len(self._items)
        self._items.append(node)
        self._sift_up(node.index)

    def pop(self) -> _Node:
        items = self._items
        top = items[0]
        last = items.pop()
        if items:
            items[0] = last
            last.index = 0
            self._sift_down(0)
        top.index = -1
        return top

    def decreased(self, node: _Node) -> None:
        """Restore heap order after ``node.f`` was lowered."""
        self._sift_up(node.index)

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        items[i].index = i
        items[j].index = j

    def _sift_up(self, i: int) -> None:
        items = self._items
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(items[i], items[parent]):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        items = self._items
        n = len(items)
        while True:
            smallest = i
            for child in (2 * i + 1, 2 * i + 2):
                if child < n and self._less(items[child], items[smallest]):
                    smallest = child
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest


def _walk_speed(tilemap: MapView, gx: int, gy: int) -> float | None:
    """Walk speed of a traversable tile, or None if the tile is excluded."""
    tile = tilemap.get_tile(gx, gy)
    if not tile.walkable or not 0.0 < tile.walk_speed < math.inf:
        return None
    return tile.walk_speed


def _heuristic(a: Cell, b: Cell, scale: float) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1]) * scale


def _reconstruct(node: _Node) -> Path:
    cells: list[Cell] = []
    current: _Node | None = node
    while current is not None:
        cells.append(current.cell)
        current = current.parent
    cells.reverse()
    return tuple(cells)


def find_path(
    tilemap: MapView,
    start: Cell,
    goal: Cell,
    max_expansions: int = DEFAULT_MAX_EXPANSIONS,
) -> Path | None:
    """Minimum-cost path from ``start`` to ``goal``, or None if there is none.

    Moves are 8-connected. A cardinal step costs 1 and a diagonal step
    sqrt(2), divided by the walk speed of the tile being entered. Tiles that
    are not walkable or have no positive finite walk speed are never entered.
    The heuristic is Euclidean distance divided by the fastest walk speed on
    the map when that exceeds 1, so returned paths are minimum-cost.

    None is a normal outcome: an unwalkable endpoint, a goal cut off from the
    start, or a search that expands more than ``max_expansions`` nodes.
    Cells outside the map raise OutOfBoundsError.
    """
    for cell in (start, goal):
        if not tilemap.in_bounds(*cell):
            raise OutOfBoundsError(cell, tilemap.width, tilemap.height)

    if start == goal:
        return (start,)

    if _walk_speed(tilemap, *goal) is None or _walk_speed(tilemap, *start) is None:
        logger.debug("no path %s -> %s: endpoint not walkable", start, goal)
        return None

    # Euclidean distance, shrunk on maps with terrain faster than grass so it
    # never exceeds the true remaining cost.
    h_scale = 1.0 / max(1.0, tilemap.max_walk_speed())

    open_heap = _OpenHeap()
    nodes: dict[Cell, _Node] = {}
    closed: set[Cell] = set()
    seq = 0

    start_node = _Node(start, 0.0, _heuristic(start, goal, h_scale), None, seq)
    nodes[start] = start_node
    open_heap.push(start_node)

    expansions = 0
    while open_heap:
        if expansions >= max_expansions:
            logger.debug(
                "no path %s -> %s: search budget of %d expansions exhausted",
                start, goal, max_expansions,
            )
            return None
        current = open_heap.pop()
        closed.add(current.cell)
        expansions += 1

        if current.cell == goal:
            path = _reconstruct(current)
            logger.debug(
                "path %s -> %s: %d cells, cost %.3f, %d expansions",
                start, goal, len(path), current.g, expansions,
            )
            return path

        cx, cy = current.cell
        for dx, dy, base in _DIRS:
            nx, ny = cx + dx, cy + dy
            neighbor = (nx, ny)
            if neighbor in closed or not tilemap.in_bounds(nx, ny):
                continue
            speed = _walk_speed(tilemap, nx, ny)
            if speed is None:
                continue
            tentative = current.g + base / speed

            node = nodes.get(neighbor)
            if node is None:
                seq += 1
                node = _Node(neighbor, tentative, _heuristic(neighbor, goal, h_scale), current, seq)
                nodes[neighbor] = node
                open_heap.push(node)
            elif tentative < node.g:
                node.parent = current
                node.g = tentative
                node.f = tentative + node.h
                open_heap.decreased(node)

    logger.debug("no path %s -> %s: goal unreachable", start, goal)
    return None


def path_cost(tilemap: MapView, path: Path) -> float:
    """Total traversal cost of ``path`` under the find_path cost model."""
    total = 0.0
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        base = DIAGONAL_COST if ax != bx and ay != by else 1.0
        total += base / tilemap.get_tile(bx, by).walk_speed
    return total
