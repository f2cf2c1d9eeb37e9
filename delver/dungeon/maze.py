"""Growing-tree maze carving on the odd-coordinate lattice.

Carves TEMP corridors through every WALL region left between rooms and caves.
Each pass is a randomized depth-first walk that moves two cells at a time and
only enters lattice cells that are still WALL, so each connected maze is a
spanning tree. Disjoint mazes are joined later by connect_components.
"""

from __future__ import annotations

from typing import List, Optional

from .config import MapConfig
from .grid import Coord2D, Grid
from .rng import PseudoRandom
from .tiles import DELTAS, DIRECTIONS, TEMP, WALL


def get_first_blank(grid: Grid) -> Optional[Coord2D]:
    """First odd-aligned WALL cell in column-major order, or None."""
    for x in range(1, grid.width - 1, 2):
        for y in range(1, grid.height - 1, 2):
            if grid.get(x, y) == WALL:
                return (x, y)
    return None


def carve_from(grid: Grid, start: Coord2D, straight_tendency: float, rng: PseudoRandom) -> int:
    """Carve one maze component starting at ``start``. Returns cells carved."""
    stack: List[Coord2D] = [start]
    visited: List[Coord2D] = [start]
    last_dir = None
    carved = 1
    while stack:
        x, y = stack.pop()
        visited.append((x, y))
        grid.set(x, y, TEMP)

        next_dirs = [d for d in DIRECTIONS if grid.get(x + 2 * DELTAS[d][0], y + 2 * DELTAS[d][1]) == WALL]
        if not next_dirs:
            # dead end: step back to the previous cell in the walk
            visited.pop()
            if visited:
                stack.append(visited.pop())
            continue

        if last_dir is not None and last_dir in next_dirs and rng.next() < straight_tendency:
            direction = last_dir
        else:
            direction = rng.sample(next_dirs)
            last_dir = direction

        dx, dy = DELTAS[direction]
        grid.set(x + dx, y + dy, TEMP)
        grid.set(x + 2 * dx, y + 2 * dy, TEMP)
        carved += 2
        stack.append((x + 2 * dx, y + 2 * dy))
    return carved


def generate_maze(grid: Grid, config: MapConfig, rng: PseudoRandom) -> int:
    """Fill remaining wall space with mazes. Returns the number of maze components."""
    components = 0
    while True:
        start = get_first_blank(grid)
        if start is None:
            return components
        carve_from(grid, start, config.straight_tendency, rng)
        components += 1


__all__ = ["get_first_blank", "carve_from", "generate_maze"]
