"""
Analytics - aggregate counts over opportunities and reminders

Plain SQL aggregations behind the dashboard's summary, trend and chart cards.
"""

import sqlite3
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from hireboard.repositories import parse_datetime, to_iso

UPCOMING_WINDOW_DAYS = 7
TOP_COMPANIES_LIMIT = 10

# Statuses reported in the summary breakdown
SUMMARY_STATUSES = (
    "saved",
    "applied",
    "online-assessment",
    "interview-scheduled",
    "offer-received",
    "rejected",
)

INTERVIEW_STATUSES = ("interview-scheduled", "online-assessment")


def _count(conn: sqlite3.Connection, query: str, params: tuple = ()) -> int:
    return conn.execute(query, params).fetchone()[0]


def status_breakdown(conn: sqlite3.Connection) -> Dict[str, int]:
    """Opportunity counts for the summary statuses (zero-filled)."""
    breakdown = {status: 0 for status in SUMMARY_STATUSES}
    rows = conn.execute("SELECT status, COUNT(*) AS count FROM opportunities GROUP BY status")
    for row in rows:
        if row["status"] in breakdown:
            breakdown[row["status"]] = row["count"]
    return breakdown


def top_companies(conn: sqlite3.Connection, limit: int = TOP_COMPANIES_LIMIT) -> List[Dict[str, Any]]:
    rows = conn.execute(
        """
        SELECT company, COUNT(*) AS count FROM opportunities
        GROUP BY company ORDER BY count DESC, company ASC LIMIT ?
        """,
        (limit,),
    ).fetchall()
    return [{"company": row["company"], "count": row["count"]} for row in rows]


def summary(conn: sqlite3.Connection, clock: Callable[[], datetime] = datetime.now) -> Dict[str, Any]:
    """
    Overall dashboard summary.

    Returns:
        Dict with totals, statusBreakdown and topCompanies
    """
    now = clock()
    week_ahead = now + timedelta(days=UPCOMING_WINDOW_DAYS)
    breakdown = status_breakdown(conn)

    totals = {
        "opportunities": _count(conn, "SELECT COUNT(*) FROM opportunities"),
        "applications": breakdown["applied"],
        "interviews": breakdown["interview-scheduled"] + breakdown["online-assessment"],
        "offers": breakdown["offer-received"],
        "rejections": breakdown["rejected"],
        "saved": breakdown["saved"],
        "reminders": _count(conn, "SELECT COUNT(*) FROM reminders"),
        "pendingReminders": _count(conn, "SELECT COUNT(*) FROM reminders WHERE status = 'pending'"),
        "completedReminders": _count(conn, "SELECT COUNT(*) FROM reminders WHERE status = 'completed'"),
        "upcomingReminders": _count(
            conn,
            "SELECT COUNT(*) FROM reminders WHERE due_date >= ? AND due_date <= ? AND status = 'pending'",
            (to_iso(now), to_iso(week_ahead)),
        ),
    }

    return {
        "totals": totals,
        "statusBreakdown": breakdown,
        "topCompanies": top_companies(conn),
    }


def _rate(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator * 100, 1)


def most_active_month(conn: sqlite3.Connection) -> Optional[Dict[str, int]]:
    row = conn.execute(
        """
        SELECT substr(created_at, 1, 7) AS month, COUNT(*) AS count FROM opportunities
        WHERE created_at IS NOT NULL
        GROUP BY month ORDER BY count DESC, month DESC LIMIT 1
        """
    ).fetchone()
    if not row:
        return None
    year, month = row["month"].split("-")
    return {"year": int(year), "month": int(month), "count": row["count"]}


def average_days_to_offer(conn: sqlite3.Connection) -> int:
    """Mean whole days between creation and last update for offers."""
    rows = conn.execute(
        """
        SELECT created_at, updated_at FROM opportunities
        WHERE status = 'offer-received' AND created_at IS NOT NULL AND updated_at IS NOT NULL
        """
    ).fetchall()
    if not rows:
        return 0
    total_days = sum(
        (parse_datetime(row["updated_at"]) - parse_datetime(row["created_at"])).days for row in rows
    )
    return round(total_days / len(rows))


def trends(conn: sqlite3.Connection) -> Dict[str, Any]:
    """
    Success and conversion rates across all opportunities.

    Returns:
        Dict with successRate, avgDaysToOffer, interviewConversionRate,
        totalApplications, totalOffers, totalInterviews, mostActiveMonth
    """
    total_applications = _count(conn, "SELECT COUNT(*) FROM opportunities WHERE status != 'saved'")
    total_offers = _count(conn, "SELECT COUNT(*) FROM opportunities WHERE status = 'offer-received'")
    total_interviews = _count(
        conn,
        "SELECT COUNT(*) FROM opportunities WHERE status IN (?, ?)",
        INTERVIEW_STATUSES,
    )

    return {
        "successRate": _rate(total_offers, total_applications),
        "avgDaysToOffer": average_days_to_offer(conn),
        "interviewConversionRate": _rate(total_offers, total_interviews),
        "totalApplications": total_applications,
        "totalOffers": total_offers,
        "totalInterviews": total_interviews,
        "mostActiveMonth": most_active_month(conn),
    }


def companies(conn: sqlite3.Connection) -> List[str]:
    rows = conn.execute("SELECT DISTINCT company FROM opportunities ORDER BY company ASC").fetchall()
    return [row["company"] for row in rows]


TIMELINE_LIMIT = 30
CHART_COMPANIES_LIMIT = 15


def _opportunity_filter(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    company: Optional[str] = None,
) -> Tuple[str, tuple]:
    clauses, params = [], []
    if start is not None:
        clauses.append("created_at >= ?")
        params.append(to_iso(start))
    if end is not None:
        clauses.append("created_at <= ?")
        params.append(to_iso(end))
    if company:
        clauses.append("company = ?")
        params.append(company)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, tuple(params)


def _distribution(
    conn: sqlite3.Connection,
    table: str,
    column: str,
    where: str = "",
    params: tuple = (),
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    query = (
        f"SELECT {column}, COUNT(*) AS count FROM {table} {where} "
        f"GROUP BY {column} ORDER BY count DESC, {column} ASC"
    )
    if limit is not None:
        query += f" LIMIT {int(limit)}"
    rows = conn.execute(query, params).fetchall()
    return [{column: row[column], "count": row["count"]} for row in rows]


def charts(
    conn: sqlite3.Connection,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    company: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Chart series for the dashboard.

    The timeline and the status/company distributions honor the
    creation-date range and company filters. Reminder priority and
    category distributions always cover every reminder.

    Returns:
        Dict with timeline, statusDistribution, companyDistribution,
        priorityDistribution and categoryDistribution
    """
    where, params = _opportunity_filter(start, end, company)

    timeline_rows = conn.execute(
        f"""
        SELECT substr(created_at, 1, 10) AS day, COUNT(*) AS count FROM opportunities
        {where}
        GROUP BY day ORDER BY day ASC LIMIT ?
        """,
        params + (TIMELINE_LIMIT,),
    ).fetchall()

    return {
        "timeline": [{"date": row["day"], "count": row["count"]} for row in timeline_rows],
        "statusDistribution": _distribution(conn, "opportunities", "status", where, params),
        "companyDistribution": _distribution(
            conn, "opportunities", "company", where, params, limit=CHART_COMPANIES_LIMIT
        ),
        "priorityDistribution": _distribution(conn, "reminders", "priority"),
        "categoryDistribution": _distribution(conn, "reminders", "category"),
    }
