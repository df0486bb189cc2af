"""
Message Analyzer - turn an informal chat message into reminder candidates

Combines the date scanner and the task scanner:

1. Dates and tasks are extracted independently
2. Tasks are paired with dates by position; tasks beyond the last date
   reuse the first date
3. Tasks with no dates at all fall due tomorrow
4. Dates with no tasks become generic 'event' reminders

A short extractive summary and line/word counts are returned alongside.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from hireboard.extraction.dates import extract_dates
from hireboard.extraction.tasks import extract_tasks
from hireboard.models import (
    AnalysisSummary,
    DateMention,
    MessageAnalysis,
    ReminderCandidate,
    TaskCandidate,
)

logger = logging.getLogger(__name__)

SUMMARY_KEYWORDS = ("important", "remember", "deadline", "submit", "exam", "meeting", "interview")
SUMMARY_MARKS = ("?", "!")
MAX_IMPORTANT_LINES = 3
MAX_FALLBACK_LINES = 2

AUTO_ASSIGNED_DATE_TEXT = "tomorrow (auto-assigned)"


def _non_blank_lines(text: str) -> List[str]:
    return [line for line in text.split("\n") if line.strip()]


def is_important_line(line: str) -> bool:
    lowered = line.lower()
    if any(keyword in lowered for keyword in SUMMARY_KEYWORDS):
        return True
    return any(mark in line for mark in SUMMARY_MARKS)


def generate_summary(text: str) -> str:
    """
    Build a one-line extractive summary.

    Joins the first three "important" lines (keyword, '?' or '!'), or the
    first two lines when nothing looks important.
    """
    lines = _non_blank_lines(text)
    important = [line for line in lines if is_important_line(line)]

    if important:
        return " ".join(important[:MAX_IMPORTANT_LINES])
    return " ".join(lines[:MAX_FALLBACK_LINES])


def compute_stats(text: str, dates: List[DateMention], tasks: List[TaskCandidate]) -> AnalysisSummary:
    return AnalysisSummary(
        total_lines=len(text.split("\n")),
        total_words=len(text.split()),
        dates_found=len(dates),
        tasks_found=len(tasks),
    )


def build_reminders(
    tasks: List[TaskCandidate],
    dates: List[DateMention],
    now: datetime,
) -> List[ReminderCandidate]:
    """
    Pair tasks with dates.

    Args:
        tasks: Tasks in line order
        dates: Date mentions in first-match order
        now: Reference instant for auto-assigned due dates

    Returns:
        ReminderCandidate list (empty when there are neither tasks nor dates)
    """
    if tasks and dates:
        reminders = []
        for index, task in enumerate(tasks):
            # Clamp to the first date, not modulo
            mention = dates[index] if index < len(dates) else dates[0]
            reminders.append(ReminderCandidate.from_task(task, mention.date, mention.text))
        return reminders

    if tasks:
        tomorrow = now + timedelta(days=1)
        return [
            ReminderCandidate.from_task(task, tomorrow, AUTO_ASSIGNED_DATE_TEXT)
            for task in tasks
        ]

    return [
        ReminderCandidate(
            title=f"Event on {mention.text}",
            category="event",
            priority="medium",
            due_date=mention.date,
            date_text=mention.text,
        )
        for mention in dates
    ]


def analyze_message(
    text: str,
    clock: Callable[[], datetime] = datetime.now,
    now: Optional[datetime] = None,
) -> MessageAnalysis:
    """
    Analyze a chat message.

    The caller rejects empty text before calling; any non-empty string
    produces a result.

    Args:
        text: Raw message text
        clock: Time source, read once per call
        now: Explicit reference instant; takes precedence over clock

    Returns:
        MessageAnalysis with summary, reminders and stats
    """
    now = now or clock()

    dates = extract_dates(text, now)
    tasks = extract_tasks(text)
    reminders = build_reminders(tasks, dates, now)

    logger.info(
        "Analyzed message",
        extra={"extra_data": {"dates": len(dates), "tasks": len(tasks), "reminders": len(reminders)}},
    )

    return MessageAnalysis(
        summary=generate_summary(text),
        reminders=tuple(reminders),
        stats=compute_stats(text, dates, tasks),
    )
