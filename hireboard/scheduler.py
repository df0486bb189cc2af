"""
Reminder Notification Scheduler

Checks for reminders that are due soon (or already overdue) and hands
each one to the registered notification callbacks exactly once.

The check runs once when the scheduler starts and then once per interval
(hourly by default) on a background daemon thread.
"""

import sqlite3
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from hireboard.database import PathLike, get_db
from hireboard.logging_config import get_logger
from hireboard.repositories import (
    find_due_reminders,
    find_overdue_reminders,
    mark_notified,
    to_iso,
)

logger = get_logger(__name__)

NotificationCallback = Callable[[Dict[str, Any]], None]

DEFAULT_INTERVAL_SECONDS = 60 * 60
DEFAULT_LOOKAHEAD_HOURS = 24

_callbacks: List[NotificationCallback] = []
_callbacks_lock = threading.Lock()


def register_notification_callback(callback: NotificationCallback) -> None:
    """
    Register a function to call for every reminder notification.

    Args:
        callback: Called with the reminder dict; overdue reminders carry
            isOverdue=True
    """
    with _callbacks_lock:
        _callbacks.append(callback)


def clear_notification_callbacks() -> None:
    with _callbacks_lock:
        _callbacks.clear()


def send_notification(reminder: Dict[str, Any]) -> None:
    """Fan a reminder out to all callbacks. A failing callback doesn't stop the rest."""
    logger.info(f"Notification: {reminder['title']} - Due: {reminder['dueDate']}")

    with _callbacks_lock:
        callbacks = list(_callbacks)

    for callback in callbacks:
        try:
            callback(reminder)
        except Exception as e:
            logger.error(f"Notification callback error: {e}", exc_info=True)


def check_due_reminders(
    db_path: PathLike,
    clock: Callable[[], datetime] = datetime.now,
    lookahead_hours: float = DEFAULT_LOOKAHEAD_HOURS,
) -> Dict[str, int]:
    """
    Notify pending reminders that are due soon or overdue, then mark them.

    Process:
    - Reminders due between now and now + lookahead_hours are notified
    - Reminders due before now are notified with isOverdue=True
    - Each notified reminder gets notified=1 so it is never sent twice

    Database errors are logged rather than raised so the timer survives.

    Returns:
        Dict with counts: upcoming, overdue
    """
    now = clock()
    counts = {"upcoming": 0, "overdue": 0}

    try:
        conn = get_db(db_path)
    except sqlite3.Error as e:
        logger.error(f"Error checking reminders: {e}")
        return counts

    try:
        upcoming = find_due_reminders(conn, now, now + timedelta(hours=lookahead_hours))
        logger.info(f"Checking reminders... Found {len(upcoming)} upcoming")

        for reminder in upcoming:
            send_notification(reminder)
            mark_notified(conn, reminder["id"], now)
            counts["upcoming"] += 1

        overdue = find_overdue_reminders(conn, now)
        if overdue:
            logger.warning(f"Found {len(overdue)} overdue reminder(s)")

        for reminder in overdue:
            send_notification({**reminder, "isOverdue": True})
            mark_notified(conn, reminder["id"], now)
            counts["overdue"] += 1

        logger.info(
            "Reminder check complete",
            extra={"extra_data": {**counts, "lookaheadHours": lookahead_hours}},
        )

    except sqlite3.Error as e:
        logger.error(f"Error checking reminders: {e}")
    finally:
        conn.close()

    return counts


def get_reminder_stats(
    conn: sqlite3.Connection,
    clock: Callable[[], datetime] = datetime.now,
    lookahead_hours: float = DEFAULT_LOOKAHEAD_HOURS,
) -> Dict[str, int]:
    """
    Count reminders by notification state.

    Returns:
        Dict with total, pending, overdue and upcoming (pending and due
        within the lookahead window)
    """
    now = clock()
    window_end = now + timedelta(hours=lookahead_hours)

    def count(query: str, params: tuple = ()) -> int:
        return conn.execute(query, params).fetchone()[0]

    return {
        "total": count("SELECT COUNT(*) FROM reminders"),
        "pending": count("SELECT COUNT(*) FROM reminders WHERE status = 'pending'"),
        "overdue": count(
            "SELECT COUNT(*) FROM reminders WHERE due_date < ? AND status = 'pending'",
            (to_iso(now),),
        ),
        "upcoming": count(
            "SELECT COUNT(*) FROM reminders WHERE due_date >= ? AND due_date <= ? AND status = 'pending'",
            (to_iso(now), to_iso(window_end)),
        ),
    }


class ReminderScheduler:
    """
    Runs check_due_reminders() on a background thread.

    One check runs immediately on start(), then one per interval until
    stop() is called.
    """

    def __init__(
        self,
        db_path: PathLike,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        lookahead_hours: float = DEFAULT_LOOKAHEAD_HOURS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db_path = db_path
        self.interval_seconds = interval_seconds
        self.lookahead_hours = lookahead_hours
        self.clock = clock

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> Dict[str, int]:
        return check_due_reminders(self.db_path, self.clock, self.lookahead_hours)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Reminder check failed: {e}", exc_info=True)
            self._stop_event.wait(self.interval_seconds)

    def start(self) -> None:
        """Start the background thread (no-op if already running)."""
        if self.running:
            return

        logger.info("Initializing notification scheduler...")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="reminder-scheduler", daemon=True)
        self._thread.start()
        logger.info(f"Notification scheduler running every {self.interval_seconds:g}s")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the thread to exit and wait for it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
