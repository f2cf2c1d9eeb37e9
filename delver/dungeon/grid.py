"""Dense tile buffer for a single dungeon level.

Tiles live in a flat row-major list (``tiles[y * width + x]``) with a
parallel fog-of-war buffer. Reads outside the map return ``NOTHING`` /
``UNSEEN`` and writes outside the map are dropped, so generation passes can
probe neighbours without bounds checks of their own.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .config import check_dimensions
from .rng import PseudoRandom
from .tiles import FLOOR, NOTHING, UNSEEN, WALL, is_floor_tile

Coord2D = Tuple[int, int]

# Returned by get_random_floor_tile when the attempt budget runs out
NOT_FOUND = None
FLOOR_SEARCH_ATTEMPTS = 200


class Grid:
    def __init__(self, width: int, height: int, rng: Optional[PseudoRandom] = None):
        check_dimensions(width, height)
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else PseudoRandom()
        self.tiles: List[str] = [NOTHING] * (width * height)
        self.seen: List[int] = [UNSEEN] * (width * height)

    is_floor_tile = staticmethod(is_floor_tile)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # get and set for the tile buffer
    def get(self, x: int, y: int) -> str:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.tiles[y * self.width + x]
        return NOTHING

    def set(self, x: int, y: int, tile: str) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.tiles[y * self.width + x] = tile

    # get and set for the seen buffer
    def get_seen(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.seen[y * self.width + x]
        return UNSEEN

    def set_seen(self, x: int, y: int, status: int) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.seen[y * self.width + x] = status

    def fill(self, tile: str = WALL) -> None:
        self.tiles = [tile] * (self.width * self.height)

    def fill_border(self, fill_floor: bool = True) -> None:
        """Stamp the outer ring as WALL; optionally turn everything else to FLOOR."""
        w, h = self.width, self.height
        for y in range(h):
            for x in range(w):
                if x == 0 or y == 0 or x == w - 1 or y == h - 1:
                    self.tiles[y * w + x] = WALL
                elif fill_floor:
                    self.tiles[y * w + x] = FLOOR

    def count_tiles_around(self, x: int, y: int, tile: str) -> int:
        """Count orthogonal neighbours equal to ``tile``."""
        get = self.get
        return (
            (get(x + 1, y) == tile)
            + (get(x, y + 1) == tile)
            + (get(x - 1, y) == tile)
            + (get(x, y - 1) == tile)
        )

    def flood_fill(self, x: int, y: int, new_tile: str) -> int:
        """Replace the 4-connected region containing (x, y) with ``new_tile``.

        Uses an explicit stack. Returns how many cells changed value.
        """
        if not self.in_bounds(x, y):
            return 0
        w, h = self.width, self.height
        tiles = self.tiles
        old_tile = tiles[y * w + x]
        if old_tile == new_tile:
            return 0
        changed = 0
        stack = [(x, y)]
        while stack:
            px, py = stack.pop()
            idx = py * w + px
            if tiles[idx] != old_tile:
                continue
            tiles[idx] = new_tile
            changed += 1
            if px + 1 < w and tiles[idx + 1] == old_tile:
                stack.append((px + 1, py))
            if px > 0 and tiles[idx - 1] == old_tile:
                stack.append((px - 1, py))
            if py + 1 < h and tiles[idx + w] == old_tile:
                stack.append((px, py + 1))
            if py > 0 and tiles[idx - w] == old_tile:
                stack.append((px, py - 1))
        return changed

    def get_random_floor_tile(self, exclude: Iterable[Coord2D] = ()) -> Optional[Coord2D]:
        """Pick a random floor coordinate, skipping points in ``exclude``.

        Gives up after FLOOR_SEARCH_ATTEMPTS draws and returns NOT_FOUND so the
        caller can decide whether to regenerate.
        """
        excluded = {tuple(p) for p in exclude if p is not None}
        for _ in range(FLOOR_SEARCH_ATTEMPTS):
            x = self.rng.next_int(1, self.width)
            y = self.rng.next_int(1, self.height)
            if (x, y) in excluded:
                continue
            if is_floor_tile(self.get(x, y)):
                return (x, y)
        return NOT_FOUND

    # ---------------- Inspection helpers ----------------------------------------
    def count(self, tile: str) -> int:
        return self.tiles.count(tile)

    def rows(self) -> List[str]:
        w = self.width
        return ["".join(self.tiles[y * w:(y + 1) * w]) for y in range(self.height)]

    def to_text(self) -> str:
        return "\n".join(self.rows())

    def coords(self, tile: str) -> List[Coord2D]:
        w = self.width
        return [(i % w, i // w) for i, t in enumerate(self.tiles) if t == tile]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, floor={self.count(FLOOR)})"


__all__ = ["Grid", "Coord2D", "NOT_FOUND", "FLOOR_SEARCH_ATTEMPTS"]
