"""
project: Delver
module: map_api.py
License: MIT

Map generation API routes.

Maps are generated from query arguments layered over ``DELVER_MAP_*``
environment defaults. Identical requests are served from a small in-process
cache so repeated fetches of one seed do not rerun the pipeline.
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from delver.dungeon import InvalidMapConfiguration, MapConfig, MapGenerator
from delver.logging_utils import get_logger
from delver.utils.tile_compress import compress_rows

bp_map = Blueprint("map_api", __name__)

log = get_logger("delver.map_api")

MAX_SEED = 9223372036854775807

# (seed, config) -> MapResult. Thread-safe with a lock because the dev server
# may serve requests from several threads.
_map_cache = {}
_map_cache_lock = threading.Lock()


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into bounded 64-bit signed int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        raise InvalidMapConfiguration(f"bad seed {payload_seed!r}")
    if isinstance(payload_seed, int):
        return payload_seed % MAX_SEED
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise InvalidMapConfiguration(f"bad seed {payload_seed!r}")


def _config_from_request():
    """Env defaults overlaid with query args; the seed is always resolved."""
    args = {k: v for k, v in request.args.items() if k != "seed"}
    base = MapConfig.from_env()
    data = {**vars(base), **args}
    data["seed"] = _coerce_seed(request.args.get("seed")) if "seed" in request.args else (
        base.seed if base.seed is not None else _coerce_seed(None)
    )
    return MapConfig.from_mapping(data).validate()


def get_cached_map(config: MapConfig):
    if os.environ.get("DELVER_DISABLE_CACHE") == "1":
        return MapGenerator(config).generate()
    key = tuple(sorted(vars(config).items()))
    with _map_cache_lock:
        result = _map_cache.get(key)
        if result is not None:
            return result
    result = MapGenerator(config, enable_metrics=current_app.config.get("MAP_ENABLE_GENERATION_METRICS", True)).generate()
    cache_max = current_app.config.get("MAP_CACHE_MAX", 8)
    with _map_cache_lock:
        _map_cache[key] = result
        while len(_map_cache) > max(cache_max, 1):
            first_key = next(iter(_map_cache.keys()))
            if first_key == key:
                break
            _map_cache.pop(first_key, None)
    return result


def clear_map_cache():
    with _map_cache_lock:
        _map_cache.clear()


def _parse_exclude(raw):
    """Parse ``x,y;x,y`` into a list of coordinate tuples."""
    points = []
    if not raw:
        return points
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            xs, ys = chunk.split(",")
            points.append((int(xs), int(ys)))
        except ValueError as exc:
            raise InvalidMapConfiguration(f"bad exclude point {chunk!r}") from exc
    return points


@bp_map.errorhandler(InvalidMapConfiguration)
def _invalid_config(exc):
    return jsonify({"error": str(exc)}), 400


@bp_map.route("/api/map", methods=["GET"])
def get_map():
    """Generate (or fetch from cache) a map.

    Query args: ``seed``, ``width``, ``height`` and any other MapConfig
    field; ``compact=1`` run-length encodes the rows.

    Response: { "seed", "width", "height", "rows", "rooms", "metrics" }
    """
    config = _config_from_request()
    result = get_cached_map(config)
    rows = result.grid.rows()
    if request.args.get("compact") in ("1", "true", "yes"):
        rows = compress_rows(rows)
    log.debug(event="map_served", seed=config.seed, width=config.width, height=config.height)
    return jsonify(
        {
            "seed": config.seed,
            "width": result.grid.width,
            "height": result.grid.height,
            "rows": rows,
            "rooms": [r.to_dict() for r in result.rooms],
            "metrics": result.metrics,
        }
    )


@bp_map.route("/api/map/seed", methods=["POST"])
def new_seed():
    """Resolve a seed.

    Body JSON (optional): { "seed": <int|str|null> }
    - Omitted, null or empty => random seed.
    - Digits => parsed; other strings => deterministic hash.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    seed = _coerce_seed(data.get("seed"))
    return jsonify({"seed": seed})


@bp_map.route("/api/map/floor", methods=["GET"])
def random_floor():
    """Random floor tile on the map for ``seed``, skipping ``exclude`` points.

    The map is generated fresh so the pick continues the map's own random
    stream and is reproducible for a given seed.
    """
    config = _config_from_request()
    exclude = _parse_exclude(request.args.get("exclude", ""))
    result = MapGenerator(config, enable_metrics=False).generate()
    pos = result.grid.get_random_floor_tile(exclude)
    if pos is None:
        return jsonify({"error": "no floor tile"}), 404
    return jsonify({"seed": config.seed, "x": pos[0], "y": pos[1]})
