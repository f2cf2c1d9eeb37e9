"""Cellular-automaton caverns.

Each cave is grown on its own small bitmap and then stamped into the map:
alive cells become TEMP (future floor) and dead cells become TEMP2 so the
maze pass cannot thread corridors through the cave's dead space. TEMP2 is
turned back into WALL by :func:`fix_temporary_walls` once the maze is done.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List

from ..logging_utils import get_logger
from .config import MapConfig
from .grid import Grid
from .rng import PseudoRandom
from .tiles import TEMP, TEMP2, WALL

log = get_logger("delver.caves")

ALIVE = 1
DEAD = 0
DEAD_CHANCE = 0.35
CA_STEPS = 5
DEFAULT_BIRTH = frozenset({6, 7, 8})
SURVIVE = frozenset({4, 5, 6, 7, 8})


@dataclass(frozen=True)
class CellularRule:
    birth: FrozenSet[int]
    survive: FrozenSet[int] = SURVIVE


def run_automaton_step(cells: List[int], width: int, height: int, rule: CellularRule) -> None:
    """Apply one synchronous Moore-neighbourhood step in place.

    Cells outside the bitmap count as dead.
    """
    source = cells[:]
    for x in range(width):
        for y in range(height):
            alive_neighbors = 0
            for x2 in range(x - 1, x + 2):
                if x2 < 0 or x2 >= width:
                    continue
                for y2 in range(y - 1, y + 2):
                    if y2 < 0 or y2 >= height or (x2 == x and y2 == y):
                        continue
                    if source[y2 * width + x2] == ALIVE:
                        alive_neighbors += 1
            idx = y * width + x
            if source[idx] == DEAD:
                if alive_neighbors in rule.birth:
                    cells[idx] = ALIVE
            elif alive_neighbors not in rule.survive:
                cells[idx] = DEAD


def choose_birth_rule(config: MapConfig, rng: PseudoRandom) -> FrozenSet[int]:
    if config.cave_setting:
        return frozenset(config.cave_setting)
    # Each of 6, 7, 8 joins the rule on a coin flip; an empty draw means all three
    birth = {n for n in (6, 7, 8) if rng.next() < 0.5}
    return frozenset(birth) if birth else DEFAULT_BIRTH


def generate_cavern(width: int, height: int, config: MapConfig, rng: PseudoRandom) -> List[int]:
    cells = [DEAD if rng.next() < DEAD_CHANCE else ALIVE for _ in range(width * height)]
    rule = CellularRule(birth=choose_birth_rule(config, rng))
    for _ in range(CA_STEPS):
        run_automaton_step(cells, width, height, rule)
    return cells


def generate_caves(grid: Grid, config: MapConfig, rng: PseudoRandom, num_caves: int) -> int:
    """Stamp ``num_caves`` caverns at random odd offsets. Returns caves stamped."""
    cw, ch = config.cave_width, config.cave_height
    span_x = (grid.width - cw) // 2
    span_y = (grid.height - ch) // 2
    if num_caves and (span_x < 2 or span_y < 2):
        log.debug(event="caves_skipped", cave_w=cw, cave_h=ch, map_w=grid.width, map_h=grid.height)
        return 0
    for _ in range(num_caves):
        cavern = generate_cavern(cw, ch, config, rng)
        offset_x = rng.next_int(1, span_x) * 2 + 1
        offset_y = rng.next_int(1, span_y) * 2 + 1
        for x in range(cw):
            for y in range(ch):
                grid.set(offset_x + x, offset_y + y, TEMP if cavern[y * cw + x] == ALIVE else TEMP2)
    return num_caves


def fix_temporary_walls(grid: Grid) -> int:
    """Convert every TEMP2 left by cave stamping into WALL."""
    changed = 0
    tiles = grid.tiles
    for idx, tile in enumerate(tiles):
        if tile == TEMP2:
            tiles[idx] = WALL
            changed += 1
    return changed


__all__ = [
    "CellularRule",
    "run_automaton_step",
    "choose_birth_rule",
    "generate_cavern",
    "generate_caves",
    "fix_temporary_walls",
]
