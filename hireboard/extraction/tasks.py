"""
Task Scanner - rule-based task detection in chat messages

Each non-blank line is classified by keyword tables. Tables are ordered
and the first hit wins, so the order below is part of the behavior:
"important" appears under both urgent and high and resolves to urgent.
"""

import logging
from typing import List, Sequence, Tuple

from hireboard.models import DEFAULT_CATEGORY, DEFAULT_PRIORITY, TaskCandidate

logger = logging.getLogger(__name__)

CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("assignment", ("assignment", "homework", "project", "submission", "submit")),
    ("exam", ("exam", "test", "quiz", "examination", "midterm", "final")),
    ("meeting", ("meeting", "meet", "discussion", "call", "conference")),
    ("interview", ("interview", "interview round", "hr round", "technical round")),
    ("deadline", ("deadline", "due", "last date")),
    ("event", ("event", "seminar", "workshop", "webinar", "session")),
)

PRIORITY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("urgent", ("urgent", "asap", "immediate", "critical", "emergency", "important")),
    ("high", ("important", "priority", "crucial", "essential", "mandatory")),
    ("medium", ("soon", "upcoming", "scheduled")),
    ("low", ("optional", "if possible", "when free")),
)

TASK_INDICATORS = (
    "submit", "complete", "finish", "prepare", "attend", "join", "remember", "don't forget",
)


def _first_match(line: str, table: Sequence[Tuple[str, Sequence[str]]], default: str) -> str:
    lowered = line.lower()
    for label, keywords in table:
        if any(keyword in lowered for keyword in keywords):
            return label
    return default


def detect_category(line: str) -> str:
    """Return the first category whose keywords appear in line, else 'other'."""
    return _first_match(line, CATEGORY_KEYWORDS, DEFAULT_CATEGORY)


def detect_priority(line: str) -> str:
    """Return the first priority tier whose keywords appear in line, else 'medium'."""
    return _first_match(line, PRIORITY_KEYWORDS, DEFAULT_PRIORITY)


def has_task_indicator(line: str) -> bool:
    lowered = line.lower()
    return any(indicator in lowered for indicator in TASK_INDICATORS)


def extract_tasks(text: str) -> List[TaskCandidate]:
    """
    Extract task candidates from a message, one per qualifying line.

    A line qualifies when it contains a task verb or falls into any
    category other than 'other'.

    Args:
        text: Raw message text

    Returns:
        TaskCandidate list in line order
    """
    tasks = []

    for line in text.split("\n"):
        if not line.strip():
            continue

        category = detect_category(line)
        if not has_task_indicator(line) and category == DEFAULT_CATEGORY:
            continue

        tasks.append(
            TaskCandidate(
                title=line.strip(),
                category=category,
                priority=detect_priority(line),
            )
        )

    logger.debug(f"Extracted {len(tasks)} task(s)")
    return tasks
