"""Pipeline orchestration for map generation.

MapGenerator sequences the passes over one shared Grid. Order is
load-bearing: every pass assumes the tile vocabulary left by the one before
it (rooms and caves leave TEMP/TEMP2, the maze only carves WALL, connectivity
repair turns TEMP into FLOOR, pruning only sees FLOOR and WALL).
"""
from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .caves import fix_temporary_walls, generate_caves
from .config import MapConfig
from .connectivity import add_extra_connectors, connect_components
from .grid import Grid
from .maze import generate_maze
from .metrics import collect_counts, init_metrics
from .pruning import kill_all_dead_ends, kill_islands
from .rng import PseudoRandom
from .rooms import Room, generate_rooms

log = get_logger("delver.pipeline")


class MapResult(NamedTuple):
    grid: Grid
    rooms: List[Room]
    metrics: Dict[str, Any]


class MapGenerator:
    def __init__(self, config: Optional[MapConfig] = None, rng: Optional[PseudoRandom] = None,
                 enable_metrics: bool = True):
        self.config = (config or MapConfig()).validate()
        if rng is None:
            rng = PseudoRandom(self.config.seed)
        self.rng = rng
        self.enable_metrics = enable_metrics
        self.grid = Grid(self.config.width, self.config.height, rng)
        self.rooms: List[Room] = []
        self.metrics: Dict[str, Any] = {}

    def generate(self) -> MapResult:
        """Run every pass in order on the owned grid and return the result.

        Calling again regenerates in place, continuing the same random stream.
        """
        cfg, grid, rng = self.config, self.grid, self.rng
        metrics = init_metrics()
        metrics['seed'] = rng.seed
        phase_times: Dict[str, int] = {}

        if self.enable_metrics:
            def _phase(label, fn, *a, **k):
                ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
                phase_times[label] = int((pe - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        start = time.perf_counter()
        _phase('fill', grid.fill)
        self.rooms = _phase('rooms', generate_rooms, grid, cfg, rng, cfg.num_room_attempts)
        metrics['rooms'] = len(self.rooms)
        metrics['caves'] = _phase('caves', generate_caves, grid, cfg, rng, cfg.num_caves)
        metrics['maze_components'] = _phase('maze', generate_maze, grid, cfg, rng)
        metrics['temp_walls_fixed'] = _phase('fix_temporary_walls', fix_temporary_walls, grid)
        connected = _phase('connect_components', connect_components, grid, rng)
        metrics['connectors_opened'] = connected.connectors_opened
        metrics['stale_connectors'] = connected.stale_connectors
        metrics['residual_cells'] = connected.residual_cells
        metrics['extra_connectors'] = _phase('extra_connectors', add_extra_connectors, grid, cfg, rng)
        metrics['dead_end_sweeps'] = _phase('dead_ends', kill_all_dead_ends, grid)
        metrics['islands_removed'] = _phase('islands', kill_islands, grid, cfg.island_threshold)
        _phase('border', grid.fill_border, False)

        collect_counts(grid, metrics)
        metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        if self.enable_metrics:
            metrics['phase_ms'] = phase_times
        self.metrics = metrics
        log.debug(
            event="map_generated",
            seed=rng.seed,
            size=f"{grid.width}x{grid.height}",
            rooms=metrics['rooms'],
            floor=metrics['tiles_floor'],
            residual=metrics['residual_cells'],
            runtime_ms=metrics['runtime_ms'],
        )
        return MapResult(grid, self.rooms, metrics)


def generate_map(config: Optional[MapConfig] = None, *, seed: Optional[int] = None, **overrides) -> MapResult:
    """One-shot helper: build a generator for ``config`` (plus overrides) and run it."""
    config = replace(config, **overrides) if config is not None else MapConfig(**overrides)
    if seed is not None:
        config = replace(config, seed=seed)
    return MapGenerator(config).generate()


__all__ = ["MapGenerator", "MapResult", "generate_map"]
