from dataclasses import dataclass
from typing import List, Tuple

from .config import MapConfig
from .grid import Grid
from .rng import PseudoRandom
from .tiles import TEMP, WALL


@dataclass(frozen=True)
class Room:
    """Axis-aligned room; (x, y) is the wall corner and w, h the extents.

    All four values are even so the floor interior lands on the carving
    lattice. The drawn footprint spans x..x+w and y..y+h inclusive.
    """

    x: int
    y: int
    w: int
    h: int

    def cells(self):
        """Yield interior (floor) coordinates."""
        for ix in range(self.x + 1, self.x + self.w):
            for iy in range(self.y + 1, self.y + self.h):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def overlap(self, other: "Room") -> bool:
        if self.x + self.w <= other.x or other.x + other.w <= self.x:
            return False
        if self.y >= other.y + other.h or other.y >= self.y + self.h:
            return False
        return True

    def fits_on(self, grid: Grid, rooms: List["Room"], check_overlap: bool = True) -> bool:
        if self.x + self.w >= grid.width or self.y + self.h >= grid.height:
            return False
        if check_overlap:
            return not any(self.overlap(other) for other in rooms)
        return True

    def draw_on(self, grid: Grid) -> None:
        """Border ring becomes WALL, interior becomes TEMP (future floor)."""
        for x in range(self.x, self.x + self.w + 1):
            for y in range(self.y, self.y + self.h + 1):
                if x in (self.x, self.x + self.w) or y in (self.y, self.y + self.h):
                    grid.set(x, y, WALL)
                else:
                    grid.set(x, y, TEMP)

    def to_dict(self):
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


def random_room(grid: Grid, config: MapConfig, rng: PseudoRandom) -> Room:
    x = rng.next_int(0, (grid.width - 1) // 2) * 2
    y = rng.next_int(0, (grid.height - 1) // 2) * 2
    w = rng.next_int((config.min_room_size - 1) // 2, (config.max_room_size + 1) // 2) * 2
    h = rng.next_int((config.min_room_size - 1) // 2, (config.max_room_size + 1) // 2) * 2
    return Room(x, y, w, h)


def generate_rooms(grid: Grid, config: MapConfig, rng: PseudoRandom, attempts: int) -> List[Room]:
    """Try ``attempts`` random rooms and draw the ones that fit.

    Rejected candidates are dropped without retry, so fewer rooms than
    attempts is the normal outcome.
    """
    rooms: List[Room] = []
    for _ in range(attempts):
        room = random_room(grid, config, rng)
        if room.fits_on(grid, rooms, check_overlap=not config.allow_room_overlap):
            room.draw_on(grid)
            rooms.append(room)
    return rooms


__all__ = ["Room", "random_room", "generate_rooms"]
