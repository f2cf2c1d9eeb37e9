from delver.routes import map_api
from delver.utils.tile_compress import decompress_row


def test_get_map_returns_rows(client):
    r = client.get("/api/map?seed=42&width=31&height=31&num_caves=0")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 42
    assert (data["width"], data["height"]) == (31, 31)
    assert len(data["rows"]) == 31 and all(len(row) == 31 for row in data["rows"])
    assert data["rows"][0] == "#" * 31
    assert data["metrics"]["tiles_floor"] > 0
    assert isinstance(data["rooms"], list)


def test_get_map_is_deterministic_and_cached(client, monkeypatch):
    url = "/api/map?seed=7&width=31&height=31&num_caves=0"
    first = client.get(url).get_json()
    calls = []
    real = map_api.MapGenerator

    class CountingGenerator(real):
        def generate(self):
            calls.append(1)
            return super().generate()

    monkeypatch.setattr(map_api, "MapGenerator", CountingGenerator)
    second = client.get(url).get_json()
    assert first["rows"] == second["rows"]
    assert calls == []  # served from cache


def test_cache_disabled_still_deterministic(client, monkeypatch):
    monkeypatch.setenv("DELVER_DISABLE_CACHE", "1")
    url = "/api/map?seed=8&width=31&height=31&num_caves=0"
    assert client.get(url).get_json()["rows"] == client.get(url).get_json()["rows"]


def test_compact_rows_decode_to_plain(client):
    plain = client.get("/api/map?seed=3&width=31&height=31&num_caves=0").get_json()["rows"]
    compact = client.get("/api/map?seed=3&width=31&height=31&num_caves=0&compact=1").get_json()["rows"]
    assert compact[0].startswith("L:")
    assert [decompress_row(r) for r in compact] == plain


def test_string_seed_is_hashed(client):
    a = client.get("/api/map?seed=abc&width=31&height=31&num_caves=0").get_json()
    b = client.get("/api/map?seed=abc&width=31&height=31&num_caves=0").get_json()
    assert a["seed"] == b["seed"] == map_api._coerce_seed("abc")


def test_env_defaults_apply(client, monkeypatch):
    monkeypatch.setenv("DELVER_MAP_WIDTH", "33")
    monkeypatch.setenv("DELVER_MAP_NUM_CAVES", "0")
    data = client.get("/api/map?seed=1&height=21").get_json()
    assert (data["width"], data["height"]) == (33, 21)


def test_invalid_config_is_400(client):
    r = client.get("/api/map?width=32&height=31")
    assert r.status_code == 400
    assert "odd" in r.get_json()["error"]
    r = client.get("/api/map?width=abc")
    assert r.status_code == 400
    r = client.get("/api/map?width=5001&height=31")
    assert r.status_code == 400


def test_seed_endpoint(client):
    assert client.post("/api/map/seed", json={"seed": "12345"}).get_json()["seed"] == 12345
    assert client.post("/api/map/seed", json={"seed": 99}).get_json()["seed"] == 99
    hashed = client.post("/api/map/seed", json={"seed": "dragon"}).get_json()["seed"]
    assert hashed == map_api._coerce_seed("dragon")
    rnd = client.post("/api/map/seed", json={}).get_json()["seed"]
    assert 1 <= rnd <= 1_000_000
    assert client.post("/api/map/seed", json={"seed": [1]}).status_code == 400


def test_coerce_seed_bounds():
    assert map_api._coerce_seed(map_api.MAX_SEED + 5) == 5
    assert 0 <= map_api._coerce_seed("x" * 100) < map_api.MAX_SEED
    assert 1 <= map_api._coerce_seed("  ") <= 1_000_000


def test_floor_endpoint(client):
    url = "/api/map/floor?seed=11&width=31&height=31&num_caves=0"
    data = client.get(url).get_json()
    rows = client.get("/api/map?seed=11&width=31&height=31&num_caves=0").get_json()["rows"]
    assert rows[data["y"]][data["x"]] == "."
    again = client.get(url).get_json()
    assert (again["x"], again["y"]) == (data["x"], data["y"])
    other = client.get(url + f"&exclude={data['x']},{data['y']}").get_json()
    assert (other["x"], other["y"]) != (data["x"], data["y"])


def test_floor_endpoint_not_found(client, monkeypatch):
    from delver.dungeon.grid import Grid

    monkeypatch.setattr(Grid, "get_random_floor_tile", lambda self, exclude=(): None)
    r = client.get("/api/map/floor?seed=1&width=31&height=31&num_caves=0")
    assert r.status_code == 404
    assert r.get_json() == {"error": "no floor tile"}


def test_floor_endpoint_bad_exclude(client):
    r = client.get("/api/map/floor?seed=1&width=31&height=31&exclude=1;2")
    assert r.status_code == 400
