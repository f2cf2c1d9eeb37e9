"""Public map generation package interface."""

from .config import InvalidMapConfiguration, MapConfig
from .grid import NOT_FOUND, Grid
from .levels import Dungeon, Level, LevelGenerationError
from .pipeline import MapGenerator, MapResult, generate_map
from .rng import PseudoRandom
from .rooms import Room
from .tiles import (
    DOOR,
    FLOOR,
    MAPPED,
    NOTHING,
    SEEN,
    TEMP,
    TEMP2,
    UNSEEN,
    WALL,
    is_floor_tile,
)  # noqa: F401

__all__ = [
    "MapConfig",
    "InvalidMapConfiguration",
    "Grid",
    "NOT_FOUND",
    "MapGenerator",
    "MapResult",
    "generate_map",
    "Dungeon",
    "Level",
    "LevelGenerationError",
    "PseudoRandom",
    "Room",
    "NOTHING",
    "FLOOR",
    "WALL",
    "TEMP",
    "TEMP2",
    "DOOR",
    "UNSEEN",
    "SEEN",
    "MAPPED",
    "is_floor_tile",
]
