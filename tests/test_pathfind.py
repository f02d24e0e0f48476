"""
Test suite for A* pathfinding on tile maps.

Tests cover:
- Path structure (includes start and goal, 8-connected, walkable)
- Optimal cost on hand-checkable grids
- Unreachable and unwalkable goals
- Terrain speed weighting
- Deterministic tie-breaking and open-set updates
- Optimality on maps with roads faster than grass
- Search budget
- Bounds preconditions
"""
from __future__ import annotations

import heapq
import math

import pytest

from tick_walk import (
    OutOfBoundsError,
    Tile,
    TileMap,
    TileType,
    find_path,
    generate_terrain,
    path_cost,
)
from tick_walk.pathfind import _Node, _OpenHeap


def _assert_valid(tm: TileMap, path: tuple[tuple[int, int], ...]) -> None:
    for cell in path:
        assert tm.walkable(cell)
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert max(abs(ax - bx), abs(ay - by)) == 1
    assert len(set(path)) == len(path)


class TestPathfindBasics:
    def test_straight_line_horizontal(self) -> None:
        tm = TileMap(10, 10)
        path = find_path(tm, (0, 0), (5, 0))
        assert path == tuple((x, 0) for x in range(6))

    def test_straight_line_vertical(self) -> None:
        tm = TileMap(10, 10)
        path = find_path(tm, (0, 0), (0, 5))
        assert path == tuple((0, y) for y in range(6))

    def test_diagonal(self) -> None:
        tm = TileMap(10, 10)
        path = find_path(tm, (0, 0), (3, 3))
        assert path == ((0, 0), (1, 1), (2, 2), (3, 3))

    def test_includes_start_and_goal(self) -> None:
        tm = TileMap(10, 10)
        path = find_path(tm, (2, 3), (7, 8))
        assert path is not None
        assert path[0] == (2, 3)
        assert path[-1] == (7, 8)
        _assert_valid(tm, path)

    def test_returns_tuple(self) -> None:
        path = find_path(TileMap(4, 4), (0, 0), (3, 1))
        assert isinstance(path, tuple)

    def test_same_start_and_goal(self) -> None:
        tm = TileMap(10, 10)
        assert find_path(tm, (5, 5), (5, 5)) == ((5, 5),)

    def test_same_start_and_goal_skips_walkability(self) -> None:
        tm = TileMap(3, 3, default=TileType.WATER)
        assert find_path(tm, (1, 1), (1, 1)) == ((1, 1),)

    def test_single_cell_map(self) -> None:
        assert find_path(TileMap(1, 1), (0, 0), (0, 0)) == ((0, 0),)


class TestPathfindCost:
    def test_three_by_three_corner_costs_two_root_two(self) -> None:
        tm = TileMap(3, 3)
        path = find_path(tm, (0, 0), (2, 2))
        assert path is not None
        assert math.isclose(path_cost(tm, path), 2 * math.sqrt(2))

    def test_knight_move_cost(self) -> None:
        tm = TileMap(5, 5)
        path = find_path(tm, (0, 0), (2, 1))
        assert path is not None
        assert len(path) == 3
        assert math.isclose(path_cost(tm, path), 1 + math.sqrt(2))

    def test_detour_cost_is_optimal(self) -> None:
        tm = TileMap(5, 3)
        # Wall across the middle row except the right edge.
        tm.fill_rect((0, 1), (3, 1), TileType.WATER)
        path = find_path(tm, (0, 0), (0, 2))
        assert path is not None
        _assert_valid(tm, path)
        # (0,0)->(3,0) straight, diagonal into (4,1), diagonal out to (3,2), back to (0,2).
        assert math.isclose(path_cost(tm, path), 3 + 2 * math.sqrt(2) + 3)

    def test_prefers_faster_terrain(self) -> None:
        tm = TileMap(7, 3)
        # A dirt road one row down makes the detour cheaper than the grass line.
        tm.fill_rect((1, 1), (5, 1), TileType.PATH)
        grass_cost = 6.0
        path = find_path(tm, (0, 0), (6, 0))
        assert path is not None
        assert path_cost(tm, path) < grass_cost
        assert (3, 1) in path

    def test_path_cost_of_single_cell(self) -> None:
        assert path_cost(TileMap(2, 2), ((0, 0),)) == 0.0


class TestPathfindUnreachable:
    def test_water_goal(self) -> None:
        tm = TileMap(5, 5)
        tm.set_tile(4, 4, TileType.WATER)
        assert find_path(tm, (0, 0), (4, 4)) is None

    def test_water_start(self) -> None:
        tm = TileMap(5, 5)
        tm.set_tile(0, 0, TileType.WATER)
        assert find_path(tm, (0, 0), (4, 4)) is None

    def test_enclosed_goal(self) -> None:
        tm = TileMap(10, 10)
        tm.fill_rect((4, 4), (6, 6), TileType.WATER)
        tm.set_tile(5, 5, TileType.GRASS)
        assert find_path(tm, (0, 0), (5, 5)) is None

    def test_full_wall(self) -> None:
        tm = TileMap(10, 10)
        tm.fill_rect((5, 0), (5, 9), TileType.WATER)
        assert find_path(tm, (0, 5), (9, 5)) is None

    def test_enclosed_goal_on_large_map(self) -> None:
        tm = TileMap(120, 120)
        tm.fill_rect((100, 100), (102, 102), TileType.WATER)
        tm.set_tile(101, 101, TileType.GRASS)
        assert find_path(tm, (0, 0), (101, 101)) is None


class TestPathfindObstacles:
    def test_path_around_wall(self) -> None:
        tm = TileMap(10, 10)
        tm.fill_rect((5, 2), (5, 7), TileType.WATER)
        path = find_path(tm, (3, 5), (7, 5))
        assert path is not None
        assert path[0] == (3, 5)
        assert path[-1] == (7, 5)
        _assert_valid(tm, path)

    def test_narrow_passage(self) -> None:
        tm = TileMap(10, 10)
        tm.fill_rect((0, 5), (9, 5), TileType.WATER)
        tm.set_tile(5, 5, TileType.GRASS)
        path = find_path(tm, (5, 0), (5, 9))
        assert path is not None
        assert (5, 5) in path
        _assert_valid(tm, path)

    def test_zero_speed_tile_excluded(self) -> None:
        tm = TileMap(3, 1)
        tm.set_tile(1, 0, Tile(name="tar", walk_speed=0.0))
        assert find_path(tm, (0, 0), (2, 0)) is None

    def test_infinite_speed_tile_excluded(self) -> None:
        tm = TileMap(3, 1)
        tm.set_tile(1, 0, Tile(name="warp", walk_speed=math.inf))
        assert find_path(tm, (0, 0), (2, 0)) is None


class TestPathfindDeterminism:
    def test_repeated_calls_identical(self) -> None:
        tm = TileMap(20, 20)
        tm.fill_rect((8, 3), (9, 16), TileType.WATER)
        first = find_path(tm, (0, 10), (19, 10))
        for _ in range(5):
            assert find_path(tm, (0, 10), (19, 10)) == first

    def test_equal_cost_routes_resolve_the_same_way(self) -> None:
        tm = TileMap(5, 5)
        paths = {find_path(tm, (0, 0), (4, 2)) for _ in range(10)}
        assert len(paths) == 1

    def test_maps_built_in_different_order_agree(self) -> None:
        a = TileMap(12, 12)
        b = TileMap(12, 12)
        walls = [(6, y) for y in range(1, 11)]
        for cell in walls:
            a.set_tile(*cell, TileType.WATER)
        for cell in reversed(walls):
            b.set_tile(*cell, TileType.WATER)
        assert find_path(a, (0, 6), (11, 6)) == find_path(b, (0, 6), (11, 6))


class TestOpenSetOrdering:
    def test_equal_f_pops_latest_discovery(self) -> None:
        heap = _OpenHeap()
        heap.push(_Node((9, 9), 0.5, 2.0, None, 0))
        for seq in range(1, 5):
            heap.push(_Node((seq, 0), 1.0, 2.0, None, seq))
        assert [heap.pop().seq for _ in range(5)] == [0, 4, 3, 2, 1]

    def test_decreased_node_moves_to_front(self) -> None:
        heap = _OpenHeap()
        nodes = [_Node((i, 0), float(i), 3.0, None, i) for i in range(1, 6)]
        for node in nodes:
            heap.push(node)
        slow = nodes[-1]
        slow.g = 0.0
        slow.f = slow.g + slow.h
        heap.decreased(slow)
        assert heap.pop() is slow
        assert [heap.pop().seq for _ in range(4)] == [1, 2, 3, 4]

    def test_equal_cost_routes_take_latest_discovery(self) -> None:
        # (1,0) and (1,1) tie on f; (1,1) was discovered last.
        path = find_path(TileMap(5, 5), (0, 0), (2, 1))
        assert path == ((0, 0), (1, 1), (2, 1))

    def test_open_node_takes_cheaper_parent(self) -> None:
        # (2,1) is the only way to the goal. It is first reached diagonally
        # from (1,2), then more cheaply across the mud at (1,1).
        tm = TileMap(4, 3)
        for cell in ((0, 0), (1, 0), (2, 0), (0, 2), (2, 2)):
            tm.set_tile(*cell, TileType.WATER)
        mud = Tile(name="mud", walk_speed=0.57)
        tm.set_tile(1, 1, mud)
        path = find_path(tm, (0, 1), (3, 1))
        assert path == ((0, 1), (1, 1), (2, 1), (3, 1))
        assert math.isclose(path_cost(tm, path), 1 / 0.57 + 2)


def _cheapest_cost(tm: TileMap, start: tuple[int, int], goal: tuple[int, int]) -> float | None:
    """Uniform-cost search under the same step costs, for cross-checking."""
    best = {start: 0.0}
    frontier = [(0.0, start)]
    while frontier:
        cost, (x, y) = heapq.heappop(frontier)
        if (x, y) == goal:
            return cost
        if cost > best[(x, y)]:
            continue
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                nxt = (x + dx, y + dy)
                if (dx, dy) == (0, 0) or not tm.in_bounds(*nxt) or not tm.walkable(nxt):
                    continue
                base = math.sqrt(2) if dx and dy else 1.0
                new_cost = cost + base / tm.get_tile(*nxt).walk_speed
                if new_cost < best.get(nxt, math.inf):
                    best[nxt] = new_cost
                    heapq.heappush(frontier, (new_cost, nxt))
    return None


class TestFastTerrainOptimality:
    @pytest.mark.parametrize("seed", [1, 5, 11])
    def test_matches_uniform_cost_search(self, seed: int) -> None:
        tm = generate_terrain(30, 30, seed=seed)
        corners = [(0, 0), (29, 0), (0, 29), (29, 29), (15, 15)]
        cells = [tm.nearest_walkable(c, max_radius=30) for c in corners]
        for start in cells:
            for goal in cells:
                assert start is not None and goal is not None
                expected = _cheapest_cost(tm, start, goal)
                path = find_path(tm, start, goal)
                if expected is None:
                    assert path is None
                    continue
                assert path is not None
                assert math.isclose(path_cost(tm, path), expected, rel_tol=1e-9)

    def test_max_walk_speed_reflects_roads(self) -> None:
        tm = TileMap(4, 4)
        assert tm.max_walk_speed() == 1.0
        tm.set_tile(2, 2, TileType.PATH)
        assert tm.max_walk_speed() == 1.5


class TestPathfindBudget:
    def test_budget_exhaustion_is_none(self) -> None:
        tm = TileMap(50, 50)
        assert find_path(tm, (0, 0), (49, 49), max_expansions=5) is None

    def test_sufficient_budget_finds_path(self) -> None:
        tm = TileMap(50, 50)
        path = find_path(tm, (0, 0), (49, 49), max_expansions=100)
        assert path is not None
        assert len(path) == 50


class TestPathfindBounds:
    def test_start_out_of_bounds(self) -> None:
        with pytest.raises(OutOfBoundsError):
            find_path(TileMap(10, 10), (-1, 0), (5, 5))

    def test_goal_out_of_bounds(self) -> None:
        with pytest.raises(OutOfBoundsError):
            find_path(TileMap(10, 10), (5, 5), (15, 15))

    def test_out_of_bounds_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            find_path(TileMap(3, 3), (0, 0), (3, 0))
