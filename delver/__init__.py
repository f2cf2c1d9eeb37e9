"""
project: Delver
module: __init__.py
License: MIT

Flask application setup for the map service.

The generator itself lives in :mod:`delver.dungeon` and has no web
dependencies; this module wires it to a small JSON API. Configuration is
sourced from environment variables (optionally from a ``.env`` file) and a
local ``instance/`` directory holds runtime files such as the log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so DELVER_MAP_* defaults can be supplied without
# exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

# Ensure instance directory exists for the log file
try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # In some constrained environments this might fail; ignore
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    MAP_CACHE_MAX=int(os.getenv("DELVER_MAP_CACHE_MAX", "8")),
    MAP_ENABLE_GENERATION_METRICS=bool(os.getenv("DELVER_ENABLE_GENERATION_METRICS", "1") == "1"),
)

from delver.routes.map_api import bp_map  # noqa: E402

app.register_blueprint(bp_map)


def create_app():
    """Return the Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
