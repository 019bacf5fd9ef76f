# tests/test_config.py
from pathlib import Path

from app.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("SHOP_ID_STRATEGY", raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.id_strategy == "length"
    assert cfg.data_path.name == "data.json"
    assert cfg.port == 3000


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SHOP_ID_STRATEGY", "max")
    monkeypatch.setenv("SHOP_DATA_PATH", str(tmp_path / "catalog.json"))
    monkeypatch.setenv("SHOP_CORS_ORIGINS", '["http://localhost:4200"]')
    monkeypatch.setenv("UNRELATED_SETTING", "ignored")
    cfg = Settings(_env_file=None)
    assert cfg.id_strategy == "max"
    assert cfg.data_path == Path(tmp_path / "catalog.json")
    assert cfg.cors_origins == ["http://localhost:4200"]


def test_unprefixed_variables_are_ignored(monkeypatch):
    monkeypatch.setenv("PORT", "9999")
    assert Settings(_env_file=None).port == 3000


def test_config_is_declared_with_model_config():
    assert Settings.model_config["env_prefix"] == "SHOP_"
    assert Settings.model_config["extra"] == "ignore"
    assert "Config" not in Settings.__dict__
