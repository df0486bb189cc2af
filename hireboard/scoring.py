"""
Scoring Module - Resume ATS compatibility scoring

This module centralizes the rule-based resume score for Hireboard.

Scoring components (additive, each capped):
1. Sections (25): experience, education, skills, summary, projects,
   certifications - 5 points each
2. Keywords (25): technical and soft-skill keywords, full marks at 10
3. Contact info (10): email, phone, LinkedIn, GitHub - 2.5 points each
4. Length (15): 300-800 words is optimal
5. Formatting (15): no ATS-hostile characters, enough action verbs
6. Quantified impact (10): percentages, "N+", "increased by", "N years"

The total is rounded and clamped to 0-100. The score is a pure function
of the text: same text, same result.
"""

import logging
import math
import re
from typing import Dict, List, Tuple

from hireboard.models import ResumeAnalysis

logger = logging.getLogger(__name__)

SECTION_POINTS = 5
SECTIONS_MAX = 25
KEYWORDS_MAX = 25
KEYWORDS_FOR_FULL_MARKS = 10
CONTACT_POINTS = 2.5
LENGTH_OPTIMAL_RANGE = (300, 800)
FORMATTING_MAX = 15
FORMATTING_PENALTY = 5
MIN_ACTION_VERBS = 5
MIN_QUANTIFIERS = 3
LOW_SCORE_THRESHOLD = 60

# Ordered: sectionsFound follows this order
SECTION_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("experience", re.compile(r"\b(experience|work history|employment|professional experience)\b", re.I)),
    ("education", re.compile(r"\b(education|academic|qualification|degree)\b", re.I)),
    ("skills", re.compile(r"\b(skills|technical skills|core competencies|expertise)\b", re.I)),
    ("summary", re.compile(r"\b(summary|profile|objective|about me)\b", re.I)),
    ("projects", re.compile(r"\b(projects|portfolio|work samples)\b", re.I)),
    ("certifications", re.compile(r"\b(certifications|certificates|licenses)\b", re.I)),
)

TECH_KEYWORDS = [
    "javascript", "python", "java", "react", "node", "sql", "aws", "docker",
    "kubernetes", "git", "agile", "html", "css", "typescript", "mongodb",
    "express", "api", "rest", "testing", "ci/cd", "leadership", "management",
    "analytics", "data", "machine learning", "ai", "cloud", "azure", "gcp",
]

CONTACT_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
    "phone": re.compile(r"\b(\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b"),
    "linkedin": re.compile(r"linkedin\.com/in/[\w-]+", re.I),
    "github": re.compile(r"github\.com/[\w-]+", re.I),
}

SPECIAL_CHARS = re.compile(r"[|{}\[\]<>]")

ACTION_VERBS = re.compile(
    r"\b(developed|managed|created|led|built|designed|implemented|achieved|improved|increased|reduced)\b",
    re.I,
)

# Symbol-terminated alternatives carry no trailing \b so "30% " still counts
QUANTIFIERS = re.compile(
    r"\b\d+%|\b\d+\+|\bincreased by\b|\breduced by\b|\bsaved \$|\bgenerated \$|\b\d+ years?\b",
    re.I,
)

LOW_SCORE_ADVICE = [
    "Focus on relevant experience and technical skills",
    "Ensure all major sections are present and well-detailed",
]


def _keyword_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(keyword)}\b", re.I)


KEYWORD_PATTERNS = [(keyword, _keyword_pattern(keyword)) for keyword in TECH_KEYWORDS]


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split())


def score_sections(text: str) -> Tuple[float, List[str]]:
    """
    Detect standard resume sections.

    Returns:
        (points capped at 25, capitalized section names found)
    """
    lowered = text.lower()
    found = [name.capitalize() for name, pattern in SECTION_PATTERNS if pattern.search(lowered)]
    return min(len(found) * SECTION_POINTS, SECTIONS_MAX), found


def score_keywords(text: str) -> Tuple[float, List[str]]:
    """
    Count distinct keywords present as whole words.

    Returns:
        (points, keywords found in table order without duplicates)
    """
    lowered = text.lower()
    found: List[str] = []
    for keyword, pattern in KEYWORD_PATTERNS:
        if keyword not in found and pattern.search(lowered):
            found.append(keyword)
    points = min(len(found) / KEYWORDS_FOR_FULL_MARKS * KEYWORDS_MAX, KEYWORDS_MAX)
    return points, found


def score_contact_info(text: str) -> float:
    """2.5 points for each contact channel present."""
    return sum(CONTACT_POINTS for pattern in CONTACT_PATTERNS.values() if pattern.search(text))


def score_length(word_count: int) -> float:
    low, high = LENGTH_OPTIMAL_RANGE
    if low <= word_count <= high:
        return 15
    if word_count < low:
        return 5
    return 10


def analyze_resume(text: str) -> ResumeAnalysis:
    """
    Score a resume for ATS compatibility.

    The caller validates the text first (non-empty, at least 50 characters);
    this function accepts anything and always returns a result.

    Args:
        text: Plain resume text

    Returns:
        ResumeAnalysis with score, strengths, improvements, sections,
        keywords and word count

    Example:
        >>> analysis = analyze_resume(resume_text)
        >>> analysis.score
        87
    """
    strengths: List[str] = []
    improvements: List[str] = []
    score = 0.0

    # 1. Sections
    section_points, sections_found = score_sections(text)
    score += section_points
    if len(sections_found) >= 4:
        strengths.append("Well-structured resume with key sections")
    else:
        improvements.append("Add missing sections: Skills, Experience, Education, Summary")

    # 2. Keywords
    keyword_points, keywords_found = score_keywords(text)
    score += keyword_points
    if len(keywords_found) >= 8:
        strengths.append(f"Contains {len(keywords_found)} relevant technical keywords")
    else:
        improvements.append("Add more relevant technical skills and keywords")

    # 3. Contact info
    contact_points = score_contact_info(text)
    score += contact_points
    if contact_points >= 7.5:
        strengths.append("Complete contact information provided")
    else:
        improvements.append("Add email, phone, LinkedIn, and GitHub links")

    # 4. Length
    word_count = count_words(text)
    score += score_length(word_count)
    low, high = LENGTH_OPTIMAL_RANGE
    if low <= word_count <= high:
        strengths.append(f"Optimal resume length ({low}-{high} words)")
    elif word_count < low:
        improvements.append("Resume is too short. Add more details about your experience")
    else:
        improvements.append(f"Resume might be too long. Keep it concise (under {high} words)")

    # 5. Formatting
    format_points = FORMATTING_MAX
    if SPECIAL_CHARS.search(text):
        format_points -= FORMATTING_PENALTY
        improvements.append(
            "Avoid special characters like |, {}, [], <> for better ATS compatibility"
        )
    if len(ACTION_VERBS.findall(text)) >= MIN_ACTION_VERBS:
        strengths.append("Uses strong action verbs")
    else:
        format_points -= FORMATTING_PENALTY
        improvements.append("Use more action verbs (developed, managed, created, led, etc.)")
    score += format_points

    # 6. Quantified impact
    if len(QUANTIFIERS.findall(text)) >= MIN_QUANTIFIERS:
        score += 10
        strengths.append("Includes quantifiable achievements")
    else:
        score += 3
        improvements.append('Add measurable results (e.g., "Increased sales by 30%")')

    # Halves round up
    final_score = min(max(int(math.floor(score + 0.5)), 0), 100)

    if final_score < LOW_SCORE_THRESHOLD:
        improvements.extend(LOW_SCORE_ADVICE)

    logger.debug(
        f"Resume scored {final_score} ({len(sections_found)} sections, "
        f"{len(keywords_found)} keywords, {word_count} words)"
    )

    return ResumeAnalysis(
        score=final_score,
        strengths=tuple(strengths),
        improvements=tuple(improvements),
        sections_found=tuple(sections_found),
        keywords_found=tuple(keywords_found),
        word_count=word_count,
    )


def get_score_tier(score: int) -> str:
    """
    Get a human-readable tier label for a score.

    Args:
        score: ATS score (0-100)

    Returns:
        Tier label string
    """
    if score >= 80:
        return "Excellent"
    elif score >= 60:
        return "Good"
    elif score >= 40:
        return "Fair"
    else:
        return "Low"


__all__ = [
    "analyze_resume",
    "count_words",
    "score_sections",
    "score_keywords",
    "score_contact_info",
    "score_length",
    "get_score_tier",
]
