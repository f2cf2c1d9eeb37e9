"""Multi-level dungeon built from generated maps.

Levels are generated on demand and linked by staircases: a level's up
staircase sits on the same coordinate as the down staircase of the level
above, and vice versa. When a neighbouring level already fixes one of those
coordinates the map is regenerated until that cell is floor, up to a
bounded number of attempts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .config import MapConfig
from .grid import NOT_FOUND, Coord2D, Grid
from .pipeline import MapGenerator
from .rng import PseudoRandom
from .rooms import Room
from .tiles import SEEN, is_floor_tile

log = get_logger("delver.levels")

HOME_LEVEL_SIZE = (63, 31)
DEFAULT_MAX_ATTEMPTS = 50


class LevelGenerationError(RuntimeError):
    """Raised when a level cannot satisfy its staircase constraints."""


@dataclass
class Level:
    index: int
    grid: Grid
    rooms: List[Room] = field(default_factory=list)
    up_stairs: Optional[Coord2D] = None
    down_stairs: Optional[Coord2D] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    attempts: int = 1


class Dungeon:
    def __init__(self, config: Optional[MapConfig] = None, rng: Optional[PseudoRandom] = None):
        self.config = (config or MapConfig()).validate()
        self.rng = rng if rng is not None else PseudoRandom(self.config.seed)
        self.levels: Dict[int, Level] = {}

    def get_level(self, index: int) -> Optional[Level]:
        return self.levels.get(index)

    def is_level_initialized(self, index: int) -> bool:
        return index in self.levels

    def build_home_level(self, width: int = HOME_LEVEL_SIZE[0], height: int = HOME_LEVEL_SIZE[1]) -> Level:
        """Open walled field at index 0, fully known, with one down staircase."""
        grid = Grid(width, height, self.rng)
        grid.fill_border()
        for y in range(height):
            for x in range(width):
                grid.set_seen(x, y, SEEN)
        down = grid.get_random_floor_tile()
        if down is NOT_FOUND:
            raise LevelGenerationError("could not place staircase because there were no floor tiles on level 0")
        level = Level(index=0, grid=grid, down_stairs=down)
        self.levels[0] = level
        return level

    def build_level(self, index: int, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Level:
        above = self.levels.get(index - 1)
        below = self.levels.get(index + 1)
        up_required = above.down_stairs if above else None
        down_required = below.up_stairs if below else None

        generator = MapGenerator(self.config, self.rng)
        for pos in (up_required, down_required):
            if pos is not None and not generator.grid.in_bounds(*pos):
                raise LevelGenerationError(f"level {index}: staircase {pos} lies outside the map")
        result = None
        attempts = 0
        while attempts < max_attempts:
            attempts += 1
            result = generator.generate()
            if _floor_or_unset(result.grid, up_required) and _floor_or_unset(result.grid, down_required):
                break
            log.debug(event="level_regenerate", level=index, attempt=attempts)
        else:
            raise LevelGenerationError(
                f"level {index}: staircase cells not floor after {max_attempts} attempts"
            )

        grid = result.grid
        exclude: List[Coord2D] = [p for p in (up_required, down_required) if p is not None]
        up = up_required or self._place(grid, exclude, index, "up staircase")
        exclude.append(up)
        down = down_required or self._place(grid, exclude, index, "down staircase")

        level = Level(
            index=index,
            grid=grid,
            rooms=list(result.rooms),
            up_stairs=up,
            down_stairs=down,
            metrics=result.metrics,
            attempts=attempts,
        )
        self.levels[index] = level
        log.debug(event="level_built", level=index, attempts=attempts, floor=result.metrics.get('tiles_floor'))
        return level

    def _place(self, grid: Grid, exclude: List[Coord2D], index: int, what: str) -> Coord2D:
        pos = grid.get_random_floor_tile(exclude)
        if pos is NOT_FOUND:
            raise LevelGenerationError(
                f"could not place {what} because there were no floor tiles on level {index}"
            )
        return pos


def _floor_or_unset(grid: Grid, pos: Optional[Coord2D]) -> bool:
    return pos is None or is_floor_tile(grid.get(*pos))


__all__ = ["Dungeon", "Level", "LevelGenerationError", "HOME_LEVEL_SIZE"]
