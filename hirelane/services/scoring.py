"""
Screening score calculator.

Turns the answers of the screening questionnaire into a 0-100 score:
experience (0-30), React/Next experience (0-30), system design answer
quality (0-20) and availability plus notice period (0-20).
"""
import re
from typing import Dict, Iterable, Optional

# system design vocabulary, overridable through SCREENING_KEYWORDS
DEFAULT_KEYWORDS = [
    "scalability",
    "scalable",
    "performance",
    "caching",
    "cache",
    "database",
    "db",
    "microservices",
    "api",
    "load balancing",
    "queue",
    "async",
    "event-driven",
    "redis",
    "postgres",
    "mongodb",
    "architecture",
    "patterns",
    "security",
    "monitoring",
    "testing",
    "ci/cd",
    "docker",
    "kubernetes",
    "cloud",
    "aws",
    "azure",
    "gcp",
]

EXPERIENCE_TIERS = [(8, 30), (5, 25), (3, 20), (1, 10)]
EXPERIENCE_FLOOR = 5

STACK_TIERS = [(5, 30), (3, 25), (2, 20), (1, 10)]
STACK_FLOOR = 0

KEYWORD_TIERS = [(6, 20), (4, 15), (2, 10)]
LONG_ANSWER_CHARS = 50
LONG_ANSWER_POINTS = 5

AVAILABILITY_SCALE = {
    "immediate": 10,
    "2weeks": 8,
    "1month": 6,
    "2months": 3,
    "3months": 1,
}

NOTICE_SCALE = {
    "none": 10,
    "1week": 8,
    "2weeks": 6,
    "1month": 4,
    "2months": 2,
    "3months": 0,
}

AVAILABILITY_CAP = 20
MIN_SCORE, MAX_SCORE = 0, 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value) -> int:
    """Leading integer of ``value``; anything unparsable is 0."""
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else 0


def _tier(value: int, tiers, floor: int) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return floor


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Number of distinct keywords found in ``text``, case-insensitive."""
    lowered = (text or "").lower()
    return sum(1 for kw in set(k.lower() for k in keywords) if kw and kw in lowered)


def experience_points(answers: Dict[str, str]) -> int:
    return _tier(parse_int(answers.get("yearsExperience")), EXPERIENCE_TIERS, EXPERIENCE_FLOOR)


def stack_points(answers: Dict[str, str]) -> int:
    return _tier(parse_int(answers.get("reactExperience")), STACK_TIERS, STACK_FLOOR)


def system_design_points(answers: Dict[str, str], keywords: Iterable[str]) -> int:
    answer = str(answers.get("systemDesign") or "")
    matches = count_keywords(answer, keywords)
    points = _tier(matches, KEYWORD_TIERS, 0)
    if points == 0 and len(answer) > LONG_ANSWER_CHARS:
        return LONG_ANSWER_POINTS
    return points


def availability_points(answers: Dict[str, str]) -> int:
    availability = AVAILABILITY_SCALE.get(answers.get("availability") or "", 0)
    notice = NOTICE_SCALE.get(answers.get("noticePeriod") or "", 0)
    return min(AVAILABILITY_CAP, availability + notice)


def calculate_screening_score(answers: Optional[Dict[str, str]],
                              keywords: Optional[Iterable[str]] = None) -> int:
    """
    Score a set of screening answers.

    Args:
        answers: question key -> answer text; missing keys count as blank
        keywords: system design vocabulary (default: DEFAULT_KEYWORDS)

    Returns:
        Integer between 0 and 100
    """
    answers = answers or {}
    keywords = list(keywords) if keywords else DEFAULT_KEYWORDS

    score = (
        experience_points(answers)
        + stack_points(answers)
        + system_design_points(answers, keywords)
        + availability_points(answers)
    )
    return min(MAX_SCORE, max(MIN_SCORE, score))
