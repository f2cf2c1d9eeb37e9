from delver.dungeon import Grid, MapConfig, PseudoRandom, Room
from delver.dungeon.rooms import generate_rooms, random_room
from delver.dungeon.tiles import TEMP, WALL


def test_same_seed_same_stream():
    a, b = PseudoRandom(99), PseudoRandom(99)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]
    assert a.seed == 99


def test_next_int_range():
    r = PseudoRandom(3)
    vals = {r.next_int(2, 6) for _ in range(500)}
    assert vals == {2, 3, 4, 5}
    assert r.next_int(4, 4) == 4


def test_sample_and_remove_shrinks():
    r = PseudoRandom(1)
    items = [1, 2, 3]
    picked = r.sample_and_remove(items)
    assert picked not in items and len(items) == 2


def test_room_overlap_rules():
    a = Room(0, 0, 4, 4)
    assert a.overlap(Room(2, 2, 4, 4))
    assert not a.overlap(Room(6, 0, 4, 4))
    # Rooms may share a wall line
    assert not a.overlap(Room(4, 0, 4, 4))
    assert not a.overlap(Room(0, 6, 4, 4))


def test_room_draw_ring_and_interior():
    g = Grid(15, 15)
    g.fill(WALL)
    room = Room(2, 2, 4, 6)
    room.draw_on(g)
    assert g.count(TEMP) == 3 * 5
    assert all(g.get(x, y) == TEMP for x, y in room.cells())
    assert g.get(2, 2) == WALL and g.get(6, 8) == WALL
    assert room.center == (4, 5)


def test_random_room_on_even_lattice():
    g = Grid(31, 31)
    cfg = MapConfig(width=31, height=31)
    r = PseudoRandom(8)
    for _ in range(50):
        room = random_room(g, cfg, r)
        assert room.x % 2 == 0 and room.y % 2 == 0
        assert room.w % 2 == 0 and room.h % 2 == 0
        assert 4 <= room.w <= 10


def test_generated_rooms_never_overlap():
    g = Grid(61, 41)
    g.fill(WALL)
    cfg = MapConfig(width=61, height=41)
    rooms = generate_rooms(g, cfg, PseudoRandom(21), 200)
    assert rooms
    for i, a in enumerate(rooms):
        assert a.x + a.w < g.width and a.y + a.h < g.height
        for b in rooms[i + 1:]:
            assert not a.overlap(b)


def test_overlap_allowed_places_more_rooms():
    cfg = MapConfig(width=61, height=41, allow_room_overlap=True)
    g = Grid(61, 41)
    g.fill(WALL)
    loose = generate_rooms(g, cfg, PseudoRandom(21), 200)
    g.fill(WALL)
    strict = generate_rooms(g, MapConfig(width=61, height=41), PseudoRandom(21), 200)
    assert len(loose) >= len(strict)
