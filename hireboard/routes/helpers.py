"""
Shared helpers for route handlers.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator

from flask import current_app, jsonify, request

from hireboard.database import get_db


@contextmanager
def db_connection() -> Iterator[sqlite3.Connection]:
    """Open a connection to the app's database for one request."""
    conn = get_db(current_app.config["DB_PATH"])
    try:
        yield conn
    finally:
        conn.close()


def app_clock() -> Callable[[], datetime]:
    """The time source configured on the app (datetime.now unless overridden)."""
    return current_app.config.get("CLOCK", datetime.now)


def error_response(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def json_body() -> dict:
    """The request's JSON object, or an empty dict for anything else."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
