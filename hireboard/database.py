"""
Database - SQLite setup and connection management for Hireboard

This module creates the schema and hands out connections. Record-level
operations live in hireboard.repositories.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def create_tables(conn: sqlite3.Connection) -> None:
    """
    Create all tables and indexes if they don't exist.

    Creates tables for:
    - reminders: Tasks extracted from messages, with due date and
      notification state
    - resumes: Uploaded resumes with their ATS analysis
    - opportunities: Job applications being tracked

    Timestamps are ISO-8601 text.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS reminders (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT DEFAULT '',
            due_date TEXT NOT NULL,
            priority TEXT DEFAULT 'medium',
            category TEXT DEFAULT 'other',
            status TEXT DEFAULT 'pending',
            notified INTEGER DEFAULT 0,
            source TEXT DEFAULT 'whatsapp-parser',
            original_message TEXT,
            created_at TEXT,
            updated_at TEXT
        )
    """)

    conn.execute("CREATE INDEX IF NOT EXISTS idx_reminders_due_status ON reminders (due_date, status)")
    conn.execute("CREATE INDEX IF NOT EXISTS idx_reminders_status ON reminders (status)")

    conn.execute("""
        CREATE TABLE IF NOT EXISTS resumes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            file_name TEXT NOT NULL,
            file_type TEXT NOT NULL,
            extracted_text TEXT NOT NULL,
            ats_score INTEGER NOT NULL,
            analysis TEXT,
            uploaded_by TEXT DEFAULT 'User',
            created_at TEXT,
            updated_at TEXT
        )
    """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS opportunities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            company TEXT NOT NULL,
            role TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'saved',
            deadline TEXT,
            link TEXT,
            created_at TEXT,
            updated_at TEXT
        )
    """)


def init_db(db_path: PathLike) -> None:
    """
    Initialize the SQLite database file.

    Uses WAL (Write-Ahead Logging) mode so the scheduler thread and
    request handlers don't block each other.

    Args:
        db_path: Path to the database file
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), timeout=30.0)
    conn.execute("PRAGMA journal_mode=WAL")
    create_tables(conn)
    conn.commit()
    conn.close()
    logger.info(f"Database ready at {db_path}")


def get_db(db_path: PathLike) -> sqlite3.Connection:
    """
    Create and return a database connection with Row factory.

    The 30-second timeout covers concurrent writers. The Row factory
    allows dict-like access to rows.

    Examples:
        >>> conn = get_db(config.db_path)
        >>> row = conn.execute("SELECT * FROM reminders WHERE id = ?", (1,)).fetchone()
        >>> print(row['title'])
    """
    conn = sqlite3.connect(str(db_path), timeout=30.0)
    conn.row_factory = sqlite3.Row
    return conn
