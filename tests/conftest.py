import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delver import create_app  # noqa: E402
from delver.routes.map_api import clear_map_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: timing guardrail for map generation")


@pytest.fixture(autouse=True)
def _clean_map_env(monkeypatch):
    """Keep DELVER_MAP_* defaults from a developer shell or .env out of tests."""
    for key in list(os.environ):
        if key.startswith("DELVER_MAP_"):
            monkeypatch.delenv(key, raising=False)
    clear_map_cache()
    yield
    clear_map_cache()
