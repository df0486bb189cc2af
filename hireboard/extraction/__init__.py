"""
Message Extraction Package - heuristic reminder extraction from chat text

- Date scanner: find and resolve date phrases
- Task scanner: classify lines by category and priority
- Message analyzer: merge both into reminder candidates with a summary
"""

from .dates import extract_dates, resolve_date_phrase, scan_date_phrases
from .message import (
    AUTO_ASSIGNED_DATE_TEXT,
    analyze_message,
    build_reminders,
    generate_summary,
)
from .tasks import detect_category, detect_priority, extract_tasks

__all__ = [
    # Dates
    'extract_dates',
    'resolve_date_phrase',
    'scan_date_phrases',
    # Tasks
    'detect_category',
    'detect_priority',
    'extract_tasks',
    # Message
    'AUTO_ASSIGNED_DATE_TEXT',
    'analyze_message',
    'build_reminders',
    'generate_summary',
]
