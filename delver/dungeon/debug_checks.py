"""Structural checks for generated maps.

``analyze`` gathers every invariant a finished map is supposed to satisfy so
tests and ``scripts/diagnose_seeds.py`` can report them in one place.
"""

from __future__ import annotations

from typing import Dict, List

from .grid import Coord2D, Grid
from .tiles import FLOOR, SCRATCH_TILES, WALL


def floor_components(grid: Grid) -> List[List[Coord2D]]:
    """4-connected FLOOR components, largest first."""
    w, h = grid.width, grid.height
    tiles = grid.tiles
    seen = set()
    components = []
    for start, tile in enumerate(tiles):
        if tile != FLOOR or start in seen:
            continue
        seen.add(start)
        stack = [start]
        comp = []
        while stack:
            idx = stack.pop()
            x, y = idx % w, idx // w
            comp.append((x, y))
            for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if 0 <= nx < w and 0 <= ny < h:
                    n = ny * w + nx
                    if n not in seen and tiles[n] == FLOOR:
                        seen.add(n)
                        stack.append(n)
        components.append(comp)
    components.sort(key=len, reverse=True)
    return components


def scratch_cells(grid: Grid) -> List[Coord2D]:
    w = grid.width
    return [(i % w, i // w) for i, t in enumerate(grid.tiles) if t in SCRATCH_TILES]


def border_breaches(grid: Grid) -> List[Coord2D]:
    w, h = grid.width, grid.height
    ring = [(x, 0) for x in range(w)] + [(x, h - 1) for x in range(w)]
    ring += [(0, y) for y in range(1, h - 1)] + [(w - 1, y) for y in range(1, h - 1)]
    return [(x, y) for x, y in ring if grid.get(x, y) != WALL]


def dead_ends(grid: Grid) -> List[Coord2D]:
    return [
        (x, y)
        for x in range(1, grid.width - 1)
        for y in range(1, grid.height - 1)
        if grid.get(x, y) == FLOOR and grid.count_tiles_around(x, y, WALL) == 3
    ]


def analyze(grid: Grid) -> Dict[str, object]:
    components = floor_components(grid)
    floor_total = sum(len(c) for c in components)
    return {
        "floor_tiles": floor_total,
        "floor_components": len(components),
        "disconnected_tiles": floor_total - (len(components[0]) if components else 0),
        "scratch_cells": scratch_cells(grid),
        "border_breaches": border_breaches(grid),
        "dead_ends": dead_ends(grid),
    }


def issues(report: Dict[str, object]) -> Dict[str, int]:
    """Reduce an :func:`analyze` report to issue counts (all zero when healthy)."""
    return {
        "extra_floor_components": max(0, int(report["floor_components"]) - 1),
        "scratch_cells": len(report["scratch_cells"]),
        "border_breaches": len(report["border_breaches"]),
        "dead_ends": len(report["dead_ends"]),
    }


__all__ = ["floor_components", "scratch_cells", "border_breaches", "dead_ends", "analyze", "issues"]
