import json

from delver import app
from delver.logging_utils import get_logger
from delver.server import _configure_logging


def test_configure_logging_creates_file(tmp_path, monkeypatch):
    # Redirect instance path to a temp directory to exercise logging setup
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    with app.app_context():
        # Run logging config twice to ensure idempotence (handler replace path)
        _configure_logging()
        path = _configure_logging()
    assert path == str(tmp_path / "app.log")
    assert (tmp_path / "app.log").exists()


def test_key_value_lines(monkeypatch, capsys):
    monkeypatch.setenv("DELVER_LOG_LEVEL", "debug")
    monkeypatch.delenv("DELVER_LOG_JSON", raising=False)
    get_logger("delver.test").debug(event="map generated", seed=3, skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=debug ")
    assert "event=map_generated" in out and "seed=3" in out
    assert "logger=delver.test" in out
    assert "skipped" not in out


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setenv("DELVER_LOG_LEVEL", "warn")
    log = get_logger("delver.test")
    log.info(event="quiet")
    log.error(event="loud")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=loud" in captured.err


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("DELVER_LOG_LEVEL", "info")
    monkeypatch.setenv("DELVER_LOG_JSON", "1")
    get_logger("delver.test").info(event="startup", port=5000)
    rec = json.loads(capsys.readouterr().out)
    assert rec["event"] == "startup" and rec["port"] == 5000 and rec["level"] == "info"
