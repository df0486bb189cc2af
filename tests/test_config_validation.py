"""
Tests for configuration loading and validation.

Ensures that config.yaml is merged over the defaults, environment
overrides apply, and bad values are rejected at startup.
"""

import pytest
import tempfile
import yaml
from pathlib import Path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("HIREBOARD_DB_PATH", raising=False)
    monkeypatch.delenv("PORT", raising=False)


def _write_config(data):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(data, f)
        return Path(f.name)


def test_defaults_without_config_file(monkeypatch, tmp_path):
    """An absent default config.yaml falls back to built-in defaults."""
    from hireboard import config as config_module

    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "config.yaml")
    config = config_module.Config()

    assert config.max_upload_bytes == 5 * 1024 * 1024
    assert config.min_text_length == 50
    assert config.scheduler_enabled is True
    assert config.scheduler_interval_seconds == 3600
    assert config.lookahead_hours == 24
    assert config.port == 5000
    assert config.cors_origins == ["http://localhost:5173"]


def test_explicit_missing_file_raises(tmp_path):
    """Test that an explicit config path must exist."""
    from hireboard.config import Config

    with pytest.raises(FileNotFoundError, match="Config file not found"):
        Config(config_path=tmp_path / "missing.yaml")


def test_file_values_merge_over_defaults():
    """Test that partial sections keep the remaining defaults."""
    from hireboard.config import Config

    config_path = _write_config({"scheduler": {"interval_minutes": 15}, "server": {"port": 8080}})

    try:
        config = Config(config_path=config_path)
        assert config.scheduler_interval_seconds == 900
        assert config.lookahead_hours == 24
        assert config.port == 8080
        assert config.host == "0.0.0.0"
    finally:
        config_path.unlink()


def test_config_must_be_mapping():
    """Test that a YAML list is rejected."""
    from hireboard.config import Config

    config_path = _write_config(["not", "a", "mapping"])

    try:
        with pytest.raises(ValueError, match="must contain a mapping"):
            Config(config_path=config_path)
    finally:
        config_path.unlink()


@pytest.mark.parametrize(
    "section, field, value",
    [
        ("uploads", "max_size_mb", 0),
        ("uploads", "min_text_length", -1),
        ("scheduler", "interval_minutes", "hourly"),
        ("scheduler", "lookahead_hours", True),
        ("server", "port", 0),
    ],
)
def test_positive_number_validation(section, field, value):
    """Test that numeric settings must be positive numbers."""
    from hireboard.config import Config

    config_path = _write_config({section: {field: value}})

    try:
        with pytest.raises(ValueError, match=f"'{section}.{field}' must be a positive number"):
            Config(config_path=config_path)
    finally:
        config_path.unlink()


def test_cors_origins_must_be_list():
    from hireboard.config import Config

    with pytest.raises(ValueError, match="cors.origins"):
        Config(overrides={"cors": {"origins": "http://localhost:5173"}})


def test_database_path_required():
    from hireboard.config import Config

    with pytest.raises(ValueError, match="database.path"):
        Config(overrides={"database": {"path": ""}})


def test_env_overrides_file(monkeypatch, tmp_path):
    """Test that HIREBOARD_DB_PATH and PORT win over the file."""
    from hireboard.config import Config

    monkeypatch.setenv("HIREBOARD_DB_PATH", str(tmp_path / "env.db"))
    monkeypatch.setenv("PORT", "9000")
    config_path = _write_config({"database": {"path": "file.db"}, "server": {"port": 8080}})

    try:
        config = Config(config_path=config_path)
        assert config.db_path == str(tmp_path / "env.db")
        assert config.port == 9000
    finally:
        config_path.unlink()


def test_overrides_win_over_env(monkeypatch):
    from hireboard.config import Config

    monkeypatch.setenv("PORT", "9000")
    config = Config(overrides={"server": {"port": 7000}})

    assert config.port == 7000


def test_get_dot_notation():
    from hireboard.config import Config

    config = Config(overrides={"uploads": {"max_size_mb": 2}})

    assert config.get("uploads.max_size_mb") == 2
    assert config.get("uploads.missing", "fallback") == "fallback"
    assert config.get("server.port.nested", "fallback") == "fallback"


def test_reload_picks_up_file_changes():
    from hireboard.config import Config

    config_path = _write_config({"uploads": {"max_size_mb": 1}})

    try:
        config = Config(config_path=config_path)
        assert config.max_upload_bytes == 1024 * 1024

        with open(config_path, "w") as f:
            yaml.dump({"uploads": {"max_size_mb": 2}}, f)
        config.reload()

        assert config.max_upload_bytes == 2 * 1024 * 1024
    finally:
        config_path.unlink()


def test_to_dict_is_a_copy():
    from hireboard.config import Config

    config = Config(overrides={"cors": {"origins": ["http://a.test"]}})
    snapshot = config.to_dict()
    snapshot["cors"]["origins"].append("http://b.test")

    assert config.cors_origins == ["http://a.test"]


def test_get_config_caches_until_reset(tmp_path):
    from hireboard.config import get_config, reset_config

    config_path = _write_config({"server": {"port": 8123}})

    try:
        reset_config()
        first = get_config(config_path)
        assert get_config() is first
        assert first.port == 8123

        reset_config()
        assert get_config(config_path) is not first
    finally:
        reset_config()
        config_path.unlink()


def test_invalid_config_aborts_app_creation(tmp_path):
    """create_app surfaces configuration errors instead of starting."""
    from hireboard import create_app

    with pytest.raises(FileNotFoundError):
        create_app(config_path=tmp_path / "missing.yaml")
