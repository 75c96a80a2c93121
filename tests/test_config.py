import pytest

from xray.config import Settings
from xray.errors import ConfigError
from xray.store.factory import build_store
from xray.store.json_store import JsonRecordStore
from xray.store.sqlite_store import SqliteRecordStore


def test_defaults_match_reference_pipeline(monkeypatch):
    for name in ("XRAY_PRICE_THRESHOLD", "XRAY_ANCHOR_WINDOW_MS", "XRAY_STITCH_WINDOW_MS", "XRAY_DECISION_SERVICE"):
        monkeypatch.delenv(name, raising=False)
    policy = Settings.load().correlation_policy()
    assert policy.decision_service == "ranking-service"
    assert policy.price_threshold == 10
    assert policy.anchor_window_ms == 15000
    assert policy.stitch_window_ms == 3000


def test_env_overrides_and_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("XRAY_STITCH_WINDOW_MS", "500")
    monkeypatch.setenv("XRAY_ANCHOR_WINDOW_MS", "soon")
    monkeypatch.setenv("XRAY_STORE_BACKEND", " SQLite ")
    s = Settings.load()
    assert s.stitch_window_ms == 500
    assert s.anchor_window_ms == 15000
    assert s.store_backend == "sqlite"


def test_store_factory_selects_backend(monkeypatch, tmp_path):
    monkeypatch.setenv("XRAY_TRACES_DIR", str(tmp_path / "t"))
    monkeypatch.setenv("XRAY_SQLITE_PATH", str(tmp_path / "t.db"))

    monkeypatch.setenv("XRAY_STORE_BACKEND", "json")
    assert isinstance(build_store(Settings.load()), JsonRecordStore)

    monkeypatch.setenv("XRAY_STORE_BACKEND", "sqlite")
    store = build_store(Settings.load())
    assert isinstance(store, SqliteRecordStore)
    store.close()

    monkeypatch.setenv("XRAY_STORE_BACKEND", "redis")
    with pytest.raises(ConfigError):
        build_store(Settings.load())
