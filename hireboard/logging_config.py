"""
Logging setup for Hireboard.

Two renderings of the same records: a short colored line for a terminal
and one JSON object per line for files and log shippers. Callers attach
structured counts with ``extra={"extra_data": {...}}``; both renderings
show them.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_LOG_FILE = Path(__file__).resolve().parent.parent / "logs" / "hireboard.log"
ROTATE_BYTES = 10 * 1024 * 1024
ROTATE_BACKUPS = 5

ENV_LEVELS = {
    "development": logging.DEBUG,
    "production": logging.INFO,
    "testing": logging.WARNING,
}

# Quieted to WARNING regardless of the app level
QUIET_LOGGERS = ("urllib3", "werkzeug", "pypdf")


def structured_data(record: logging.LogRecord) -> Optional[Dict[str, Any]]:
    data = getattr(record, "extra_data", None)
    return data if isinstance(data, dict) and data else None


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        data = structured_data(record)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored ``HH:MM:SS LEVEL logger: message key=value`` lines."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    MAX_MESSAGE_LENGTH = 500

    def __init__(self):
        super().__init__(datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        data = structured_data(record)
        if data:
            message += " " + " ".join(f"{key}={value}" for key, value in data.items())
        if len(message) > self.MAX_MESSAGE_LENGTH:
            message = message[: self.MAX_MESSAGE_LENGTH] + "..."

        color = self.LEVEL_COLORS.get(record.levelno, "")
        line = (
            f"{self.formatTime(record, self.datefmt)} "
            f"{color}{record.levelname:<8}{self.RESET} {record.name}: {message}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def current_env() -> str:
    return os.environ.get("FLASK_ENV", "development")


def resolve_log_level(level: Optional[str] = None, env: Optional[str] = None) -> int:
    """
    Numeric log level from an explicit name, else from the environment.

    Unknown names fall back to INFO.
    """
    if level:
        named = logging.getLevelName(level.upper())
        return named if isinstance(named, int) else logging.INFO
    return ENV_LEVELS.get(env or current_env(), logging.INFO)


def _stream_handler(level: int, json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_logs else ConsoleFormatter())
    return handler


def _rotating_file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        str(path), maxBytes=ROTATE_BYTES, backupCount=ROTATE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    level: Optional[str] = None,
    json_logs: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Replace the root logger's handlers with Hireboard's.

    Args:
        level: Level name; derived from FLASK_ENV when omitted
        json_logs: Emit JSON on the console instead of colored text
        log_file: JSON log file path. Production writes to
            logs/hireboard.log when none is given.

    Returns:
        The configured root logger
    """
    env = current_env()
    log_level = resolve_log_level(level, env)

    handlers = [_stream_handler(log_level, json_logs)]
    if log_file:
        handlers.append(_rotating_file_handler(Path(log_file), log_level))
    elif env == "production":
        handlers.append(_rotating_file_handler(DEFAULT_LOG_FILE, log_level))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
