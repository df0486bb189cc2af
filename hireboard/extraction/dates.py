"""
Date Scanner - find date phrases in chat text and resolve them to datetimes

Four pattern families are applied in order (numeric, month-first,
day-first, relative words). Matches are collected verbatim into an
insertion-ordered set, then each phrase is resolved against a single
"now". Phrases that do not resolve are dropped without comment: chat
text is noisy and an unreadable date is not an error.
"""

import re
from datetime import datetime, timedelta
from typing import List, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from hireboard.models import DateMention

MONTHS = (
    r"(?:January|February|March|April|May|June|July|August|September|October|November|December"
    r"|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"
)
ORDINAL = r"(?:st|nd|rd|th)?"

# Order matters: earlier families claim insertion position first
DATE_PATTERNS = [
    # 25/12/2024, 25-12-2024, 25.12.2024
    re.compile(r"\d{1,2}[/.\-]\d{1,2}[/.\-]\d{4}"),
    # December 25, 2024 / Dec 25th 2024
    re.compile(rf"\b{MONTHS}\s+\d{{1,2}}{ORDINAL},?\s+\d{{4}}\b", re.IGNORECASE),
    # 25th December / 25 Dec / 25 Dec 2024
    re.compile(rf"\b\d{{1,2}}{ORDINAL}\s+{MONTHS}\b(?:,?\s+\d{{4}}\b)?", re.IGNORECASE),
    # today, tomorrow, tonight, next week, next month
    re.compile(r"(?:today|tomorrow|tonight|next\s+week|next\s+month)", re.IGNORECASE),
]

TONIGHT_HOUR = 20


def scan_date_phrases(text: str) -> List[str]:
    """
    Collect every distinct date phrase in text.

    Args:
        text: Raw message text

    Returns:
        Matched substrings, verbatim, in first-match order. Duplicates are
        detected on the exact text, so "Today" and "today" are both kept.
    """
    phrases: List[str] = []
    seen = set()

    for pattern in DATE_PATTERNS:
        for match in pattern.finditer(text):
            phrase = match.group(0)
            if phrase not in seen:
                seen.add(phrase)
                phrases.append(phrase)

    return phrases


def resolve_date_phrase(phrase: str, now: datetime) -> Optional[datetime]:
    """
    Resolve a date phrase relative to now.

    Args:
        phrase: Verbatim phrase returned by scan_date_phrases()
        now: Reference instant

    Returns:
        Resolved datetime, or None when the phrase is not a real date
        (e.g. "31/02/2024")
    """
    lowered = " ".join(phrase.lower().split())

    if lowered == "today":
        return now
    if lowered == "tomorrow":
        return now + timedelta(days=1)
    if lowered == "tonight":
        return now.replace(hour=TONIGHT_HOUR, minute=0, second=0, microsecond=0)
    if "next week" in lowered:
        return now + timedelta(days=7)
    if "next month" in lowered:
        return now + relativedelta(months=1)

    # Missing fields (year, time) come from today's midnight
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        return date_parser.parse(phrase, default=midnight, dayfirst=True)
    except (ValueError, OverflowError):
        return None


def extract_dates(text: str, now: Optional[datetime] = None) -> List[DateMention]:
    """
    Find and resolve all date mentions in text.

    Args:
        text: Raw message text
        now: Reference instant (defaults to the current local time)

    Returns:
        DateMention list in first-match order
    """
    now = now or datetime.now()
    mentions = []

    for phrase in scan_date_phrases(text):
        resolved = resolve_date_phrase(phrase, now)
        if resolved is not None:
            mentions.append(DateMention(text=phrase, date=resolved))

    return mentions
