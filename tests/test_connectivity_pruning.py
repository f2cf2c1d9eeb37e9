from delver.dungeon import Grid, MapConfig, PseudoRandom
from delver.dungeon.connectivity import (
    add_extra_connectors,
    check_if_connector,
    connect_components,
    get_connectors,
)
from delver.dungeon.pruning import kill_all_dead_ends, kill_dead_ends, kill_islands
from delver.dungeon.tiles import FLOOR, TEMP, WALL
from tests.map_test_utils import bfs_reachable, draw, floor_cells


def _walled(seed=1):
    g = Grid(15, 15, PseudoRandom(seed))
    g.fill(WALL)
    return g


def test_connector_detection():
    g = _walled()
    draw(g, ["#####", "#t#.#", "#####"])
    assert check_if_connector(g, 2, 1, TEMP, FLOOR)
    assert check_if_connector(g, 2, 1, FLOOR, TEMP)
    assert not check_if_connector(g, 2, 1, FLOOR, FLOOR)
    assert get_connectors(g, TEMP, FLOOR) == [(2, 1)]


def test_connect_joins_adjacent_regions():
    g = _walled(3)
    for x in range(1, 6):
        for y in range(1, 6):
            g.set(x, y, TEMP)
    for x in range(7, 10):
        for y in range(1, 6):
            g.set(x, y, TEMP)
    result = connect_components(g, g.rng)
    assert result.connectors_opened >= 1
    assert result.residual_cells == 0
    assert g.count(TEMP) == 0
    cells = floor_cells(g)
    assert len(bfs_reachable(g, cells[0])) == len(cells) == 25 + 15 + result.connectors_opened


def test_connect_walls_off_unreachable_region():
    g = _walled(4)
    for x in range(1, 4):
        for y in range(1, 4):
            g.set(x, y, TEMP)
    for x in range(6, 9):
        for y in range(6, 9):
            g.set(x, y, TEMP)
    result = connect_components(g, g.rng)
    assert result.connectors_opened == 0
    assert result.residual_cells == 9
    assert g.count(FLOOR) == 9
    assert g.count(TEMP) == 0


def test_connect_without_temp_is_noop():
    g = _walled()
    result = connect_components(g, g.rng)
    assert (result.connectors_opened, result.residual_cells) == (0, 0)
    assert g.count(WALL) == 15 * 15


def test_extra_connectors_budget():
    g = _walled(7)
    for x in range(1, 14):
        g.set(x, 1, FLOOR)
        g.set(x, 3, FLOOR)
    cfg = MapConfig(width=15, height=15, num_extra_connectors=5)
    assert add_extra_connectors(g, cfg, g.rng) == 5
    assert g.count(FLOOR) == 26 + 5
    cfg = MapConfig(width=15, height=15, num_extra_connectors=50)
    # only the remaining row-2 walls qualify
    assert add_extra_connectors(g, cfg, g.rng) == 8


def test_dead_end_corridor_collapses():
    g = _walled()
    for x in range(1, 14):
        g.set(x, 7, FLOOR)
    assert kill_all_dead_ends(g) == 1
    assert g.count(FLOOR) == 1
    assert kill_dead_ends(g) is False


def test_loop_has_no_dead_ends():
    g = _walled()
    for i in range(3, 10):
        g.set(i, 3, FLOOR)
        g.set(i, 9, FLOOR)
        g.set(3, i, FLOOR)
        g.set(9, i, FLOOR)
    before = g.count(FLOOR)
    assert kill_dead_ends(g) is False
    assert g.count(FLOOR) == before


def test_small_islands_removed_large_kept():
    g = Grid(31, 31)
    g.fill_border()
    # 2x2 island
    for x in (5, 6):
        for y in (5, 6):
            g.set(x, y, WALL)
    # 5x5 block
    for x in range(15, 20):
        for y in range(15, 20):
            g.set(x, y, WALL)
    assert kill_islands(g, 15) == 1
    assert g.get(5, 5) == FLOOR
    assert g.get(17, 17) == WALL
    assert g.count(TEMP) == 0
    assert g.get(0, 0) == WALL
