"""
Value objects produced by the message and resume analyzers.

Every analyzer call builds fresh instances; nothing here is mutated after
construction. to_dict() renders the camelCase shape the API returns.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Tuple

CATEGORIES = ("assignment", "exam", "meeting", "interview", "deadline", "event", "other")
PRIORITIES = ("urgent", "high", "medium", "low")
DEFAULT_CATEGORY = "other"
DEFAULT_PRIORITY = "medium"


@dataclass(frozen=True)
class DateMention:
    """A verbatim date phrase from the message and the instant it resolves to."""
    text: str
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "date": self.date.isoformat()}


@dataclass(frozen=True)
class TaskCandidate:
    """A message line that looks like something the user has to do."""
    title: str
    category: str = DEFAULT_CATEGORY
    priority: str = DEFAULT_PRIORITY

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "category": self.category, "priority": self.priority}


@dataclass(frozen=True)
class ReminderCandidate:
    """A task paired with a due date, ready to be saved as a reminder."""
    title: str
    category: str
    priority: str
    due_date: datetime
    date_text: str

    @classmethod
    def from_task(cls, task: TaskCandidate, due_date: datetime, date_text: str) -> "ReminderCandidate":
        return cls(
            title=task.title,
            category=task.category,
            priority=task.priority,
            due_date=due_date,
            date_text=date_text,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "category": self.category,
            "priority": self.priority,
            "dueDate": self.due_date.isoformat(),
            "dateText": self.date_text,
        }


@dataclass(frozen=True)
class AnalysisSummary:
    """Counts derived from a message."""
    total_lines: int
    total_words: int
    dates_found: int
    tasks_found: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLines": self.total_lines,
            "totalWords": self.total_words,
            "datesFound": self.dates_found,
            "tasksFound": self.tasks_found,
        }


@dataclass(frozen=True)
class MessageAnalysis:
    """Full result of analyzing one message."""
    summary: str
    reminders: Tuple[ReminderCandidate, ...]
    stats: AnalysisSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "reminders": [r.to_dict() for r in self.reminders],
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class ResumeAnalysis:
    """ATS compatibility score for a resume plus the feedback behind it."""
    score: int
    strengths: Tuple[str, ...]
    improvements: Tuple[str, ...]
    sections_found: Tuple[str, ...]
    keywords_found: Tuple[str, ...]
    word_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "sectionsFound": list(self.sections_found),
            "keywordsFound": list(self.keywords_found),
            "wordCount": self.word_count,
        }
