"""
Repositories - record operations for reminders, resumes and opportunities

Every function takes an open sqlite3 connection and commits its own
writes. Rows come back as camelCase dicts, the same shape the API serves.
Lookups that miss return None (or False for deletes); invalid input
raises ValueError.
"""

import json
import logging
import sqlite3
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dateutil import parser as date_parser

from hireboard.models import CATEGORIES, DEFAULT_CATEGORY, DEFAULT_PRIORITY, PRIORITIES, ResumeAnalysis

logger = logging.getLogger(__name__)

REMINDER_STATUSES = ("pending", "completed", "cancelled")
DEFAULT_REMINDER_SOURCE = "whatsapp-parser"

OPPORTUNITY_STATUSES = (
    "saved",
    "applied",
    "online-assessment",
    "interview-scheduled",
    "interview-completed",
    "offer-received",
    "rejected",
    "accepted",
)

STORED_TEXT_LIMIT = 5000
DEFAULT_HISTORY_LIMIT = 20


# ===== HELPERS =====


def to_iso(value: datetime) -> str:
    """Uniform ISO text so string comparison in SQL matches time order."""
    return value.isoformat(timespec="microseconds")


def parse_datetime(value: Any) -> datetime:
    """
    Coerce a datetime or date string to a naive local datetime.

    Raises:
        ValueError: If the value is missing or not a date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid date: {value}") from e
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _now(now: Optional[datetime]) -> str:
    return to_iso(now or datetime.now())


def _text(value: Any, label: str) -> str:
    """Stripped string value; None reads as empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    return value.strip()


# ===== REMINDERS =====


def reminder_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "description": row["description"] or "",
        "dueDate": row["due_date"],
        "priority": row["priority"],
        "category": row["category"],
        "status": row["status"],
        "notified": bool(row["notified"]),
        "source": row["source"],
        "originalMessage": row["original_message"] or "",
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }


def _reminder_values(reminder: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate one incoming reminder and fill defaults."""
    if not isinstance(reminder, Mapping):
        raise ValueError("Each reminder must be an object")

    title = _text(reminder.get("title"), "Reminder title")
    if not title:
        raise ValueError("Reminder title is required")

    due_date = reminder.get("dueDate", reminder.get("due_date"))
    if due_date is None:
        raise ValueError(f"Reminder '{title}' has no due date")

    priority = _text(reminder.get("priority"), "Reminder priority") or DEFAULT_PRIORITY
    if priority not in PRIORITIES:
        raise ValueError(f"Invalid priority: {priority}")

    category = _text(reminder.get("category"), "Reminder category") or DEFAULT_CATEGORY
    if category not in CATEGORIES:
        raise ValueError(f"Invalid category: {category}")

    return {
        "title": title,
        "description": _text(reminder.get("description"), "Reminder description"),
        "due_date": to_iso(parse_datetime(due_date)),
        "priority": priority,
        "category": category,
    }


def save_reminders(
    conn: sqlite3.Connection,
    reminders: Iterable[Mapping[str, Any]],
    original_message: str = "",
    source: str = DEFAULT_REMINDER_SOURCE,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Persist reminder candidates as pending, un-notified reminders.

    All reminders are validated before anything is written, so one bad
    entry saves nothing.

    Args:
        conn: Database connection
        reminders: Dicts with title, dueDate and optional description,
            priority, category
        original_message: Message the reminders were extracted from
        source: Origin tag
        now: Timestamp for createdAt/updatedAt

    Returns:
        Saved reminders as dicts
    """
    values = [_reminder_values(reminder) for reminder in reminders]
    timestamp = _now(now)
    ids = []

    for value in values:
        cursor = conn.execute(
            """
            INSERT INTO reminders (title, description, due_date, priority, category,
                                   status, notified, source, original_message,
                                   created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, 'pending', 0, ?, ?, ?, ?)
            """,
            (
                value["title"],
                value["description"],
                value["due_date"],
                value["priority"],
                value["category"],
                source,
                original_message or "",
                timestamp,
                timestamp,
            ),
        )
        ids.append(cursor.lastrowid)

    conn.commit()
    logger.info(f"Saved {len(ids)} reminder(s)")
    return [find_reminder_by_id(conn, reminder_id) for reminder_id in ids]


def find_reminders(conn: sqlite3.Connection, status: Optional[str] = None) -> List[Dict[str, Any]]:
    """List reminders sorted by due date, optionally filtered by status."""
    if status:
        rows = conn.execute(
            "SELECT * FROM reminders WHERE status = ? ORDER BY due_date ASC, id ASC", (status,)
        ).fetchall()
    else:
        rows = conn.execute("SELECT * FROM reminders ORDER BY due_date ASC, id ASC").fetchall()
    return [reminder_to_dict(row) for row in rows]


def find_reminder_by_id(conn: sqlite3.Connection, reminder_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM reminders WHERE id = ?", (reminder_id,)).fetchone()
    return reminder_to_dict(row) if row else None


def update_reminder_status(
    conn: sqlite3.Connection,
    reminder_id: int,
    status: str,
    now: Optional[datetime] = None,
) -> Optional[Dict[str, Any]]:
    """
    Change a reminder's status.

    Returns:
        Updated reminder, or None if it doesn't exist
    """
    if status not in REMINDER_STATUSES:
        raise ValueError(f"Invalid status: {status}")

    cursor = conn.execute(
        "UPDATE reminders SET status = ?, updated_at = ? WHERE id = ?",
        (status, _now(now), reminder_id),
    )
    conn.commit()

    if cursor.rowcount == 0:
        return None
    return find_reminder_by_id(conn, reminder_id)


def delete_reminder(conn: sqlite3.Connection, reminder_id: int) -> bool:
    cursor = conn.execute("DELETE FROM reminders WHERE id = ?", (reminder_id,))
    conn.commit()
    return cursor.rowcount > 0


def find_due_reminders(conn: sqlite3.Connection, start: datetime, end: datetime) -> List[Dict[str, Any]]:
    """Pending, un-notified reminders due within [start, end]."""
    rows = conn.execute(
        """
        SELECT * FROM reminders
        WHERE due_date >= ? AND due_date <= ? AND status = 'pending' AND notified = 0
        ORDER BY due_date ASC
        """,
        (to_iso(start), to_iso(end)),
    ).fetchall()
    return [reminder_to_dict(row) for row in rows]


def find_overdue_reminders(conn: sqlite3.Connection, now: datetime) -> List[Dict[str, Any]]:
    """Pending, un-notified reminders whose due date has passed."""
    rows = conn.execute(
        """
        SELECT * FROM reminders
        WHERE due_date < ? AND status = 'pending' AND notified = 0
        ORDER BY due_date ASC
        """,
        (to_iso(now),),
    ).fetchall()
    return [reminder_to_dict(row) for row in rows]


def mark_notified(conn: sqlite3.Connection, reminder_id: int, now: Optional[datetime] = None) -> None:
    conn.execute(
        "UPDATE reminders SET notified = 1, updated_at = ? WHERE id = ?",
        (_now(now), reminder_id),
    )
    conn.commit()


# ===== RESUMES =====


def resume_to_dict(row: sqlite3.Row, include_text: bool = True) -> Dict[str, Any]:
    resume = {
        "id": row["id"],
        "fileName": row["file_name"],
        "fileType": row["file_type"],
        "atsScore": row["ats_score"],
        "analysis": json.loads(row["analysis"]) if row["analysis"] else {},
        "uploadedBy": row["uploaded_by"],
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }
    if include_text:
        resume["extractedText"] = row["extracted_text"]
    return resume


def save_resume_analysis(
    conn: sqlite3.Connection,
    file_name: str,
    file_type: str,
    extracted_text: str,
    analysis: ResumeAnalysis,
    uploaded_by: str = "User",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Store a scored resume.

    Only the first 5000 characters of the text are kept.

    Returns:
        Saved resume as a dict
    """
    if file_type not in ("pdf", "docx"):
        raise ValueError(f"Invalid file type: {file_type}")

    stored = analysis.to_dict()
    score = stored.pop("score")
    timestamp = _now(now)

    cursor = conn.execute(
        """
        INSERT INTO resumes (file_name, file_type, extracted_text, ats_score, analysis,
                             uploaded_by, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            file_name,
            file_type,
            extracted_text[:STORED_TEXT_LIMIT],
            score,
            json.dumps(stored),
            uploaded_by or "User",
            timestamp,
            timestamp,
        ),
    )
    conn.commit()
    return find_resume_by_id(conn, cursor.lastrowid)


def find_resumes(conn: sqlite3.Connection, limit: int = DEFAULT_HISTORY_LIMIT) -> List[Dict[str, Any]]:
    """Newest resumes first, without the stored text."""
    rows = conn.execute(
        "SELECT * FROM resumes ORDER BY created_at DESC, id DESC LIMIT ?", (limit,)
    ).fetchall()
    return [resume_to_dict(row, include_text=False) for row in rows]


def find_resume_by_id(conn: sqlite3.Connection, resume_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM resumes WHERE id = ?", (resume_id,)).fetchone()
    return resume_to_dict(row) if row else None


def delete_resume(conn: sqlite3.Connection, resume_id: int) -> bool:
    cursor = conn.execute("DELETE FROM resumes WHERE id = ?", (resume_id,))
    conn.commit()
    return cursor.rowcount > 0


# ===== OPPORTUNITIES =====


def opportunity_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "company": row["company"],
        "role": row["role"],
        "status": row["status"],
        "deadline": row["deadline"],
        "link": row["link"],
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }


def _clean_opportunity_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate and normalize the editable opportunity fields present in fields."""
    cleaned: Dict[str, Any] = {}

    for key in ("company", "role"):
        if key in fields:
            value = _text(fields[key], f"Opportunity {key}")
            if not value:
                raise ValueError(f"Opportunity {key} cannot be empty")
            cleaned[key] = value

    if "status" in fields:
        status = _text(fields["status"], "Opportunity status") or "saved"
        if status not in OPPORTUNITY_STATUSES:
            raise ValueError(f"Invalid status: {status}")
        cleaned["status"] = status

    if "deadline" in fields:
        deadline = fields["deadline"]
        cleaned["deadline"] = to_iso(parse_datetime(deadline)) if deadline else None

    if "link" in fields:
        cleaned["link"] = _text(fields["link"], "Opportunity link") or None

    return cleaned


def create_opportunity(
    conn: sqlite3.Connection,
    fields: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Create an opportunity. Company and role are required; status defaults
    to 'saved'.
    """
    company = _text(fields.get("company"), "Opportunity company")
    role = _text(fields.get("role"), "Opportunity role")
    if not company or not role:
        raise ValueError("Please provide company name and role")

    cleaned = _clean_opportunity_fields(fields)
    timestamp = _now(now)

    cursor = conn.execute(
        """
        INSERT INTO opportunities (company, role, status, deadline, link, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            cleaned["company"],
            cleaned["role"],
            cleaned.get("status", "saved"),
            cleaned.get("deadline"),
            cleaned.get("link"),
            timestamp,
            timestamp,
        ),
    )
    conn.commit()
    return find_opportunity_by_id(conn, cursor.lastrowid)


def find_opportunities(conn: sqlite3.Connection) -> List[Dict[str, Any]]:
    """All opportunities, newest first."""
    rows = conn.execute("SELECT * FROM opportunities ORDER BY created_at DESC, id DESC").fetchall()
    return [opportunity_to_dict(row) for row in rows]


def find_opportunity_by_id(conn: sqlite3.Connection, opportunity_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM opportunities WHERE id = ?", (opportunity_id,)).fetchone()
    return opportunity_to_dict(row) if row else None


def update_opportunity(
    conn: sqlite3.Connection,
    opportunity_id: int,
    fields: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> Optional[Dict[str, Any]]:
    """
    Update the given fields of an opportunity.

    Returns:
        Updated opportunity, or None if it doesn't exist
    """
    cleaned = _clean_opportunity_fields(fields)

    # Build update query dynamically
    updates = [f"{field} = ?" for field in cleaned]
    params: List[Any] = list(cleaned.values())
    updates.append("updated_at = ?")
    params.append(_now(now))
    params.append(opportunity_id)

    cursor = conn.execute(f"UPDATE opportunities SET {', '.join(updates)} WHERE id = ?", params)
    conn.commit()

    if cursor.rowcount == 0:
        return None
    return find_opportunity_by_id(conn, opportunity_id)


def delete_opportunity(conn: sqlite3.Connection, opportunity_id: int) -> bool:
    cursor = conn.execute("DELETE FROM opportunities WHERE id = ?", (opportunity_id,))
    conn.commit()
    return cursor.rowcount > 0
