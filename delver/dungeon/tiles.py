# Tile constants centralized for modular imports
NOTHING = " "  # unset / out of bounds
FLOOR = "."
WALL = "#"
TEMP = "t"  # scratch: will become floor (room interior, cave interior, maze cell)
TEMP2 = "T"  # scratch: cave exterior, forced to wall before connectivity repair
DOOR = "+"  # not structurally distinct from floor in generation

SCRATCH_TILES = frozenset({TEMP, TEMP2})

# Fog-of-war status, orthogonal to tiles
UNSEEN = 0
SEEN = 1
MAPPED = 2

# Cardinal directions in scan order; deltas are (dx, dy) with y growing south
NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3
DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
DELTAS = {
    NORTH: (0, -1),
    EAST: (1, 0),
    SOUTH: (0, 1),
    WEST: (-1, 0),
}


def is_floor_tile(tile: str) -> bool:
    """Return True if ``tile`` can be walked on."""
    return tile == FLOOR


__all__ = [
    "NOTHING",
    "FLOOR",
    "WALL",
    "TEMP",
    "TEMP2",
    "DOOR",
    "SCRATCH_TILES",
    "UNSEEN",
    "SEEN",
    "MAPPED",
    "NORTH",
    "EAST",
    "SOUTH",
    "WEST",
    "DIRECTIONS",
    "DELTAS",
    "is_floor_tile",
]
