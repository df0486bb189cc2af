#!/usr/bin/env python3
"""
Hireboard - Main Entry Point

Uses the application factory pattern via hireboard.create_app().

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development (default), production, testing
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (optional)
    HIREBOARD_DB_PATH: SQLite database path (optional)
    PORT: HTTP port (optional)
"""

import os
import sys
from pathlib import Path

APP_DIR = Path(__file__).parent

# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv(APP_DIR / ".env")

# Initialize logging first
from hireboard.logging_config import get_logger, setup_logging

flask_env = os.environ.get("FLASK_ENV", "development")
log_level = os.environ.get("LOG_LEVEL")
json_logs = flask_env == "production"

setup_logging(level=log_level, json_logs=json_logs)
logger = get_logger(__name__)


def log_notification(reminder):
    """Default notification sink: write the reminder to the log."""
    prefix = "OVERDUE" if reminder.get("isOverdue") else "Upcoming"
    logger.info(f"[{prefix}] {reminder['title']} ({reminder['category']}, {reminder['priority']})")


def main():
    """Main entry point for Hireboard."""
    from hireboard import create_app
    from hireboard.scheduler import register_notification_callback

    try:
        app = create_app()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    config = app.config["HIREBOARD_CONFIG"]

    if config.scheduler_enabled:
        register_notification_callback(log_notification)
        app.config["REMINDER_SCHEDULER"].start()

    logger.info("=" * 60)
    logger.info("  Hireboard - Starting Up")
    logger.info("=" * 60)
    logger.info(f"  Environment: {flask_env}")
    logger.info(f"  Database: {config.db_path}")
    if config.scheduler_enabled:
        logger.info(f"  Reminder checks: every {config.scheduler_interval_seconds / 60:g} min")
    else:
        logger.info("  Reminder checks: disabled")
    logger.info(f"  API: http://localhost:{config.port}/api")
    logger.info(f"  Health Check: http://localhost:{config.port}/api/health")
    logger.info("=" * 60)

    debug_mode = flask_env != "production"
    # One process, one scheduler thread
    app.run(debug=debug_mode, host=config.host, port=config.port, use_reloader=False)


if __name__ == "__main__":
    main()
