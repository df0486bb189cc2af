"""
Hireboard - Application Factory

Job-application tracker backend: turns chat messages into reminders,
scores resumes for ATS compatibility and tracks opportunities.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from flask import Flask
from flask_cors import CORS

from hireboard.config import Config
from hireboard.database import init_db
from hireboard.scheduler import ReminderScheduler

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


def create_app(
    config_path=None,
    overrides: Optional[Dict[str, Any]] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> Flask:
    """
    Application factory for creating Flask app instances.

    The reminder scheduler is created but not started; run.py starts it.

    Args:
        config_path: Optional path to config.yaml file
        overrides: Settings merged over the file (e.g. database.path in tests)
        clock: Time source for relative dates and reminder windows

    Returns:
        Configured Flask application instance
    """
    # Load environment variables
    from dotenv import load_dotenv

    load_dotenv()

    try:
        config = Config(config_path, overrides=overrides)
    except FileNotFoundError as e:
        logger.error(f"Configuration Error: {e}")
        raise

    app = Flask(__name__)

    CORS(app, origins=config.cors_origins, supports_credentials=True)

    app.config["HIREBOARD_CONFIG"] = config
    app.config["DB_PATH"] = config.db_path
    app.config["CLOCK"] = clock
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes * 2

    init_db(config.db_path)

    app.config["REMINDER_SCHEDULER"] = ReminderScheduler(
        config.db_path,
        interval_seconds=config.scheduler_interval_seconds,
        lookahead_hours=config.lookahead_hours,
        clock=clock,
    )

    register_blueprints(app)

    return app


def register_blueprints(app):
    """Register all Flask blueprints."""
    from hireboard.routes import register_all_blueprints

    register_all_blueprints(app)
