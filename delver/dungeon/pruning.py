"""Pruning passes for map cleanup.

Run after connectivity repair: dead-end corridors are trimmed back until
nothing changes, then wall slivers too small to matter are erased.
"""

from __future__ import annotations

from .grid import Grid
from .tiles import FLOOR, TEMP, WALL, is_floor_tile


def kill_dead_ends(grid: Grid) -> bool:
    """One sweep turning FLOOR cells with exactly 3 WALL neighbours into WALL.

    Cells are rewritten during the sweep, so a corridor can shrink by more
    than one cell per call. Returns whether anything changed.
    """
    changed = False
    w = grid.width
    tiles = grid.tiles
    for x in range(1, w - 1):
        for y in range(1, grid.height - 1):
            idx = y * w + x
            if not is_floor_tile(tiles[idx]):
                continue
            walls = (
                (tiles[idx + 1] == WALL)
                + (tiles[idx - 1] == WALL)
                + (tiles[idx + w] == WALL)
                + (tiles[idx - w] == WALL)
            )
            if walls == 3:
                tiles[idx] = WALL
                changed = True
    return changed


def kill_all_dead_ends(grid: Grid) -> int:
    """Repeat :func:`kill_dead_ends` to a fixed point. Returns sweeps that changed the map."""
    sweeps = 0
    while kill_dead_ends(grid):
        sweeps += 1
    return sweeps


def kill_islands(grid: Grid, max_size: int) -> int:
    """Erase wall components smaller than ``max_size`` by turning them into FLOOR.

    Each unvisited WALL cell is flood-filled to TEMP to measure its component;
    small ones are refilled as FLOOR, the rest are restored to WALL at the end.
    Returns the number of islands removed.
    """
    removed = 0
    for x in range(1, grid.width - 1):
        for y in range(1, grid.height - 1):
            if grid.get(x, y) != WALL:
                continue
            size = grid.flood_fill(x, y, TEMP)
            if size < max_size:
                grid.flood_fill(x, y, FLOOR)
                removed += 1
    tiles = grid.tiles
    for idx, tile in enumerate(tiles):
        if tile == TEMP:
            tiles[idx] = WALL
    return removed


__all__ = ["kill_dead_ends", "kill_all_dead_ends", "kill_islands"]
