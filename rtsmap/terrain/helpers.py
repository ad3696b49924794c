"""Reachability and ground-distance queries over terrain structures."""

from __future__ import annotations

import heapq
import itertools
from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from ..position import TILE_SIZE, Position, Resolution
from .graph import RegionGraph
from .grid import TileGrid

# Integer step costs: 10 per orthogonal build tile, 14 ≈ 10·√2 per diagonal.
STRAIGHT_COST = 10
DIAGONAL_COST = 14

# Returned by ground_distance when the goal cannot be reached.
UNREACHABLE = -1.0

Tile = Tuple[int, int]


def connected_region_ids(graph: RegionGraph, region_id: int) -> Set[int]:
    """Return every region reachable from ``region_id``, itself included.

    Uses breadth-first search over chokepoint adjacency. Returns an empty set
    for unknown region ids.
    """

    if not graph.has_region(region_id):
        return set()
    visited = {region_id}
    queue: deque[int] = deque([region_id])
    while queue:
        current = queue.popleft()
        for neighbor in graph.neighbors(current):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            queue.append(neighbor)
    return visited


def regions_connected(graph: RegionGraph, first_id: int, second_id: int) -> bool:
    """Return True if the two regions lie in the same connected component."""

    if not graph.has_region(first_id) or not graph.has_region(second_id):
        return False
    if first_id == second_id:
        return True
    return second_id in connected_region_ids(graph, first_id)


def octile_heuristic(tile: Tile, goal: Tile) -> int:
    """Octile distance in step-cost units.

    ``min(dx, dy)`` diagonal steps cover the shared part of the offset and the
    remaining ``|dx - dy|`` is walked orthogonally.
    """

    dx = abs(tile[0] - goal[0])
    dy = abs(tile[1] - goal[1])
    return abs(dx - dy) * STRAIGHT_COST + min(dx, dy) * DIAGONAL_COST


def walkable_neighbors(grid: TileGrid, tile: Tile) -> List[Tuple[Tile, int]]:
    """Return the 8-connected neighbours of ``tile`` with their step costs.

    A neighbour must itself be low-res walkable. A diagonal step additionally
    needs at least one of the two orthogonal tiles it squeezes past to be
    walkable, otherwise it would slip through the gap between two blocked
    tiles.
    """

    x, y = tile
    min_x = max(x - 1, 0)
    max_x = min(x + 1, grid.width - 1)
    min_y = max(y - 1, 0)
    max_y = min(y + 1, grid.height - 1)

    result: List[Tuple[Tile, int]] = []
    for nx in range(min_x, max_x + 1):
        for ny in range(min_y, max_y + 1):
            if nx == x and ny == y:
                continue
            if not grid.is_low_res_walkable_tile(nx, ny):
                continue
            diagonal = nx != x and ny != y
            if diagonal and not (
                grid.is_low_res_walkable_tile(x, ny) or grid.is_low_res_walkable_tile(nx, y)
            ):
                continue
            result.append(((nx, ny), DIAGONAL_COST if diagonal else STRAIGHT_COST))
    return result


class _OpenSet:
    """Min-heap of tiles keyed by f-score with replaceable entries.

    Ties on f are broken by insertion order. Replacing a tile's entry marks the
    old heap entry dead instead of re-heapifying.
    """

    def __init__(self):
        self._heap: List[list] = []
        self._entries: Dict[Tile, list] = {}
        self._counter = itertools.count()

    def __bool__(self) -> bool:
        return bool(self._entries)

    def push(self, tile: Tile, priority: int) -> None:
        stale = self._entries.pop(tile, None)
        if stale is not None:
            stale[-1] = False
        entry = [priority, next(self._counter), tile, True]
        self._entries[tile] = entry
        heapq.heappush(self._heap, entry)

    def pop(self) -> Optional[Tile]:
        while self._heap:
            _, _, tile, alive = heapq.heappop(self._heap)
            if alive:
                del self._entries[tile]
                return tile
        return None


def ground_distance(grid: TileGrid, start: Position, goal: Position) -> float:
    """Shortest walkable distance in pixels between two build tiles, or -1.

    A* over the low-res walkability grid with 8-directional movement. All
    search state is local to the call, so concurrent queries on the same grid
    are independent.
    """

    start_pos = start.to(Resolution.BUILD)
    goal_pos = goal.to(Resolution.BUILD)
    if not grid.is_valid(start_pos) or not grid.is_valid(goal_pos):
        return UNREACHABLE

    start_tile: Tile = (start_pos.x, start_pos.y)
    goal_tile: Tile = (goal_pos.x, goal_pos.y)
    if start_tile != goal_tile and not grid.is_low_res_walkable_tile(*goal_tile):
        return UNREACHABLE

    open_set = _OpenSet()
    g_map: Dict[Tile, int] = {start_tile: 0}
    closed: Set[Tile] = set()
    open_set.push(start_tile, 0)

    while open_set:
        current = open_set.pop()
        if current is None:
            break
        if current == goal_tile:
            return g_map[current] * TILE_SIZE / STRAIGHT_COST
        closed.add(current)
        g_current = g_map[current]

        for neighbor, step_cost in walkable_neighbors(grid, current):
            if neighbor in closed:
                continue
            g = g_current + step_cost
            known = g_map.get(neighbor)
            if known is None or g < known:
                g_map[neighbor] = g
                open_set.push(neighbor, g + octile_heuristic(neighbor, goal_tile))

    return UNREACHABLE
