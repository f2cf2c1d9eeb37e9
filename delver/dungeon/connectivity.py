"""Connectivity repair and loop connectors.

After maze carving every would-be floor cell is TEMP. connect_components
grows a single FLOOR component from a random TEMP cell, repeatedly punching
through one-cell walls ("connectors") that separate TEMP from FLOOR, and
finally walls off whatever TEMP could not be reached. add_extra_connectors
then opens a few FLOOR/FLOOR connectors to put loops back into the
spanning-tree mazes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .config import MapConfig
from .grid import Coord2D, Grid
from .rng import PseudoRandom
from .tiles import FLOOR, TEMP, WALL


@dataclass
class ConnectResult:
    connectors_opened: int = 0
    stale_connectors: int = 0
    residual_cells: int = 0  # TEMP cells never reached, walled off at the end


def check_if_connector(grid: Grid, x: int, y: int, tile_from: str, tile_to: str) -> bool:
    """True if opposite orthogonal neighbours are one ``tile_from`` and one ``tile_to``."""
    north, south = grid.get(x, y + 1), grid.get(x, y - 1)
    if (north == tile_from and south == tile_to) or (north == tile_to and south == tile_from):
        return True
    east, west = grid.get(x + 1, y), grid.get(x - 1, y)
    if (east == tile_from and west == tile_to) or (east == tile_to and west == tile_from):
        return True
    return False


def get_connectors(grid: Grid, tile_from: str, tile_to: str) -> List[Coord2D]:
    """Interior WALL cells bridging ``tile_from`` and ``tile_to``, column-major."""
    connectors = []
    w = grid.width
    tiles = grid.tiles
    for x in range(1, w - 1):
        for y in range(1, grid.height - 1):
            if tiles[y * w + x] == WALL and check_if_connector(grid, x, y, tile_from, tile_to):
                connectors.append((x, y))
    return connectors


def count_interior(grid: Grid, tile: str) -> int:
    w = grid.width
    return sum(
        1
        for y in range(1, grid.height - 1)
        for t in grid.tiles[y * w + 1:(y + 1) * w - 1]
        if t == tile
    )


def connect_components(grid: Grid, rng: PseudoRandom) -> ConnectResult:
    result = ConnectResult()
    num_temp = count_interior(grid, TEMP)

    if num_temp:
        x = y = 0
        while grid.get(x, y) != TEMP:
            x = rng.next_int(1, grid.width)
            y = rng.next_int(1, grid.height)
        num_temp -= grid.flood_fill(x, y, FLOOR)

        while True:
            connectors = get_connectors(grid, TEMP, FLOOR)
            if not connectors:
                break
            cx, cy = rng.sample(connectors)
            if grid.get(cx, cy) == WALL:
                grid.set(cx, cy, TEMP)
                num_filled = grid.flood_fill(cx, cy, FLOOR) - 1
                if num_filled == 0:
                    # nothing behind it; put the wall back
                    grid.set(cx, cy, WALL)
                    result.stale_connectors += 1
                else:
                    num_temp -= num_filled
                    result.connectors_opened += 1
            if num_temp <= 0:
                break

    # Whatever was not reached becomes solid rock
    tiles = grid.tiles
    for idx, tile in enumerate(tiles):
        if tile == TEMP:
            tiles[idx] = WALL
            result.residual_cells += 1
    return result


def add_extra_connectors(grid: Grid, config: MapConfig, rng: PseudoRandom) -> int:
    """Open up to ``num_extra_connectors`` FLOOR/FLOOR walls. Returns how many were opened."""
    connectors = get_connectors(grid, FLOOR, FLOOR)
    thickness = config.connector_thickness - 1
    placed = 0
    while placed < config.num_extra_connectors and connectors:
        cx, cy = rng.sample_and_remove(connectors)
        for x in range(cx - thickness, cx + thickness + 1):
            for y in range(cy - thickness, cy + thickness + 1):
                if 0 < x < grid.width - 1 and 0 < y < grid.height - 1:
                    grid.set(x, y, FLOOR)
        placed += 1
    return placed


__all__ = [
    "ConnectResult",
    "check_if_connector",
    "get_connectors",
    "count_interior",
    "connect_components",
    "add_extra_connectors",
]
