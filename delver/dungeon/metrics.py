from typing import Dict

from .grid import Grid
from .tiles import FLOOR, WALL


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'seed': 0,
        'rooms': 0,
        'caves': 0,
        'maze_components': 0,
        'temp_walls_fixed': 0,
        'connectors_opened': 0,
        'stale_connectors': 0,
        'residual_cells': 0,
        'extra_connectors': 0,
        'dead_end_sweeps': 0,
        'islands_removed': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'runtime_ms': 0.0,
    }


def collect_counts(grid: Grid, metrics: Dict) -> None:
    metrics['tiles_floor'] = grid.count(FLOOR)
    metrics['tiles_wall'] = grid.count(WALL)
