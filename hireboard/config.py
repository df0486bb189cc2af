"""
Configuration Loader for Hireboard

Loads settings from config.yaml (optional) and applies environment
overrides. Every key has a default so a bare checkout runs as-is.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

PROJECT_DIR = Path(__file__).parent.parent
DEFAULT_CONFIG_PATH = PROJECT_DIR / "config.yaml"

DEFAULTS: Dict[str, Any] = {
    "database": {"path": str(PROJECT_DIR / "hireboard.db")},
    "uploads": {"max_size_mb": 5, "min_text_length": 50},
    "scheduler": {"enabled": True, "interval_minutes": 60, "lookahead_hours": 24},
    "server": {"host": "0.0.0.0", "port": 5000},
    "cors": {"origins": ["http://localhost:5173"]},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for Hireboard."""

    def __init__(self, config_path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to a YAML file. An explicit path must exist;
                the default ./config.yaml is optional.
            overrides: Extra settings merged last (used by tests and the
                application factory)
        """
        self._explicit_path = config_path is not None
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._overrides = overrides or {}
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load defaults, then the YAML file, then env vars, then overrides."""
        file_config: Dict[str, Any] = {}

        if self.config_path.exists():
            with open(self.config_path, "r") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError(f"Config file must contain a mapping: {self.config_path}")
        elif self._explicit_path:
            raise FileNotFoundError(
                f"Config file not found: {self.config_path}\n"
                f"Copy config.example.yaml to config.yaml or omit the path to use defaults."
            )

        config = _merge(DEFAULTS, file_config)
        config = _merge(config, self._env_overrides())
        config = _merge(config, self._overrides)

        self._validate_config(config)
        return config

    @staticmethod
    def _env_overrides() -> Dict[str, Any]:
        env: Dict[str, Any] = {}
        if os.getenv("HIREBOARD_DB_PATH"):
            env["database"] = {"path": os.environ["HIREBOARD_DB_PATH"]}
        if os.getenv("PORT"):
            env["server"] = {"port": int(os.environ["PORT"])}
        return env

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate that numeric settings are usable."""
        positive_fields = [
            ("uploads", "max_size_mb"),
            ("uploads", "min_text_length"),
            ("scheduler", "interval_minutes"),
            ("scheduler", "lookahead_hours"),
            ("server", "port"),
        ]
        for section, field in positive_fields:
            value = config[section].get(field)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"Config value '{section}.{field}' must be a positive number")

        if not config["database"].get("path"):
            raise ValueError("Missing required config field: database.path")

        if not isinstance(config["cors"].get("origins"), list):
            raise ValueError("Config value 'cors.origins' must be a list")

    # ===== DATABASE =====

    @property
    def db_path(self) -> str:
        """Get SQLite database path."""
        return str(self._config["database"]["path"])

    # ===== UPLOADS =====

    @property
    def max_upload_bytes(self) -> int:
        """Get maximum resume upload size in bytes."""
        return int(self._config["uploads"]["max_size_mb"] * 1024 * 1024)

    @property
    def min_text_length(self) -> int:
        """Get minimum extracted resume text length."""
        return int(self._config["uploads"]["min_text_length"])

    # ===== SCHEDULER =====

    @property
    def scheduler_enabled(self) -> bool:
        return bool(self._config["scheduler"]["enabled"])

    @property
    def scheduler_interval_seconds(self) -> float:
        return self._config["scheduler"]["interval_minutes"] * 60

    @property
    def lookahead_hours(self) -> float:
        return self._config["scheduler"]["lookahead_hours"]

    # ===== SERVER =====

    @property
    def host(self) -> str:
        return self._config["server"]["host"]

    @property
    def port(self) -> int:
        return int(self._config["server"]["port"])

    @property
    def cors_origins(self) -> List[str]:
        return self._config["cors"]["origins"]

    # ===== UTILITY METHODS =====

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = self._load_config()

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the merged configuration dictionary."""
        return copy.deepcopy(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Example: config.get('scheduler.interval_minutes')
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value


# Global config instance
_config: Optional[Config] = None


def get_config(config_path: Optional[Path] = None) -> Config:
    """
    Get global configuration instance.
    Creates instance on first call, then returns cached instance.
    """
    global _config
    if _config is None or config_path is not None:
        _config = Config(config_path)
    return _config


def reset_config() -> None:
    """Drop the cached instance so the next get_config() reloads."""
    global _config
    _config = None
