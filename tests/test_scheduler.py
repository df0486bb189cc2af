"""
Tests for the reminder notification scheduler.
"""

import threading
from datetime import timedelta
from unittest.mock import Mock

import pytest

from hireboard.database import get_db
from hireboard.repositories import find_reminder_by_id, save_reminders, update_reminder_status
from hireboard.scheduler import (
    ReminderScheduler,
    check_due_reminders,
    clear_notification_callbacks,
    get_reminder_stats,
    register_notification_callback,
    send_notification,
)


@pytest.fixture(autouse=True)
def reset_callbacks():
    clear_notification_callbacks()
    yield
    clear_notification_callbacks()


def _seed(db_path, fixed_now):
    """Insert one overdue, one upcoming and one far-future reminder."""
    conn = get_db(db_path)
    try:
        saved = save_reminders(
            conn,
            [
                {"title": "Overdue lab", "dueDate": fixed_now - timedelta(hours=5)},
                {"title": "Quiz soon", "dueDate": fixed_now + timedelta(hours=2)},
                {"title": "Fest next week", "dueDate": fixed_now + timedelta(days=7)},
            ],
            now=fixed_now,
        )
    finally:
        conn.close()
    return {reminder["title"]: reminder["id"] for reminder in saved}


def test_check_notifies_upcoming_and_overdue(db_path, fixed_now, fixed_clock):
    ids = _seed(db_path, fixed_now)
    callback = Mock()
    register_notification_callback(callback)

    counts = check_due_reminders(db_path, fixed_clock)

    assert counts == {"upcoming": 1, "overdue": 1}
    sent = {call.args[0]["title"]: call.args[0] for call in callback.call_args_list}
    assert set(sent) == {"Overdue lab", "Quiz soon"}
    assert sent["Overdue lab"]["isOverdue"] is True
    assert "isOverdue" not in sent["Quiz soon"]

    conn = get_db(db_path)
    try:
        assert find_reminder_by_id(conn, ids["Quiz soon"])["notified"] is True
        assert find_reminder_by_id(conn, ids["Overdue lab"])["notified"] is True
        assert find_reminder_by_id(conn, ids["Fest next week"])["notified"] is False
    finally:
        conn.close()


def test_reminders_are_notified_only_once(db_path, fixed_now, fixed_clock):
    _seed(db_path, fixed_now)
    callback = Mock()
    register_notification_callback(callback)

    check_due_reminders(db_path, fixed_clock)
    second = check_due_reminders(db_path, fixed_clock)

    assert callback.call_count == 2
    assert second == {"upcoming": 0, "overdue": 0}


def test_lookahead_window_is_configurable(db_path, fixed_now, fixed_clock):
    _seed(db_path, fixed_now)

    counts = check_due_reminders(db_path, fixed_clock, lookahead_hours=24 * 8)

    assert counts["upcoming"] == 2


def test_completed_reminders_are_skipped(db_path, fixed_now, fixed_clock):
    ids = _seed(db_path, fixed_now)
    conn = get_db(db_path)
    try:
        update_reminder_status(conn, ids["Quiz soon"], "completed")
    finally:
        conn.close()

    assert check_due_reminders(db_path, fixed_clock) == {"upcoming": 0, "overdue": 1}


def test_failing_callback_does_not_block_others():
    failing = Mock(side_effect=RuntimeError("boom"))
    working = Mock()
    register_notification_callback(failing)
    register_notification_callback(working)

    send_notification({"title": "Quiz", "dueDate": "2024-03-11T10:00:00.000000"})

    failing.assert_called_once()
    working.assert_called_once()


def test_missing_tables_are_logged_not_raised(tmp_path, fixed_clock):
    """A database without the schema yields zero counts instead of an exception."""
    counts = check_due_reminders(tmp_path / "empty.db", fixed_clock)
    assert counts == {"upcoming": 0, "overdue": 0}


def test_reminder_stats(temp_db, fixed_now, fixed_clock):
    saved = save_reminders(
        temp_db,
        [
            {"title": "Past", "dueDate": fixed_now - timedelta(hours=1)},
            {"title": "Soon", "dueDate": fixed_now + timedelta(hours=1)},
            {"title": "Later", "dueDate": fixed_now + timedelta(days=3)},
            {"title": "Done", "dueDate": fixed_now + timedelta(hours=2)},
        ],
    )
    update_reminder_status(temp_db, saved[3]["id"], "completed")

    stats = get_reminder_stats(temp_db, fixed_clock)

    assert stats == {"total": 4, "pending": 3, "overdue": 1, "upcoming": 1}


class TestReminderScheduler:
    """Tests for the background scheduler thread"""

    def test_start_runs_check_immediately(self, db_path, fixed_now, fixed_clock):
        _seed(db_path, fixed_now)
        delivered = threading.Event()
        register_notification_callback(lambda reminder: delivered.set())

        scheduler = ReminderScheduler(db_path, interval_seconds=3600, clock=fixed_clock)
        scheduler.start()
        try:
            assert delivered.wait(timeout=5)
            assert scheduler.running
        finally:
            scheduler.stop()

        assert not scheduler.running

    def test_start_twice_keeps_one_thread(self, db_path, fixed_clock):
        scheduler = ReminderScheduler(db_path, interval_seconds=3600, clock=fixed_clock)
        scheduler.start()
        try:
            first = scheduler._thread
            scheduler.start()
            assert scheduler._thread is first
        finally:
            scheduler.stop()

    def test_run_once_uses_configured_window(self, db_path, fixed_now, fixed_clock):
        _seed(db_path, fixed_now)
        scheduler = ReminderScheduler(db_path, lookahead_hours=24 * 8, clock=fixed_clock)

        assert scheduler.run_once() == {"upcoming": 2, "overdue": 1}
