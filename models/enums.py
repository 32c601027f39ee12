"""
Enumerations and constants for the FACT-G scoring engine.

This module defines all the fixed values used by the deterministic scoring model.
"""

from enum import Enum
from typing import Dict, List


class Polarity(str, Enum):
    """
    Item polarity.

    Reverse items are inverted before scoring (higher raw response means
    lower well-being).
    """
    DIRECT = "direct"
    REVERSE = "reverse"


class Subscale(str, Enum):
    """FACT-G subscales, keyed by the category name the store sends."""
    PHYSICAL = "Physical well-being"
    SOCIAL = "Social/Family well-being"
    EMOTIONAL = "Emotional well-being"
    FUNCTIONAL = "Functional well-being"


class AssessmentKind(str, Enum):
    """Which FACT-G instrument instance is being filled in."""
    BASELINE = "baseline"
    WEEKLY = "weekly"


class RecordState(str, Enum):
    """Upsert correlation state of an assessment instance."""
    NEW = "NEW"
    PERSISTED = "PERSISTED"


# Canonical display (and total) order
SUBSCALE_ORDER: List[Subscale] = [
    Subscale.PHYSICAL,
    Subscale.SOCIAL,
    Subscale.EMOTIONAL,
    Subscale.FUNCTIONAL,
]

SUBSCALE_SHORT_CODES: Dict[Subscale, str] = {
    Subscale.PHYSICAL: "P",
    Subscale.SOCIAL: "S",
    Subscale.EMOTIONAL: "E",
    Subscale.FUNCTIONAL: "F",
}

# Field names of ScoreResult, one per subscale
SUBSCALE_SCORE_KEYS: Dict[Subscale, str] = {
    Subscale.PHYSICAL: "PWB",
    Subscale.SOCIAL: "SWB",
    Subscale.EMOTIONAL: "EWB",
    Subscale.FUNCTIONAL: "FWB",
}

# Response scale (0 = Not at all ... 4 = Very much)
RESPONSE_MIN = 0
RESPONSE_MAX = 4

ANSWER_SCALE = {
    0: "Not at all",
    1: "A little bit",
    2: "Somewhat",
    3: "Quite a bit",
    4: "Very much",
}

# Wire markers
REVERSE_MARKER = "-"
UNANSWERED_SENTINEL = "x"

# Store endpoints per assessment kind
FETCH_ENDPOINTS = {
    AssessmentKind.BASELINE: "/getParticipantFactGQuestionBaseline",
    AssessmentKind.WEEKLY: "/getParticipantFactGQuestionWeekly",
}

SUBMIT_ENDPOINTS = {
    AssessmentKind.BASELINE: "/AddParticipantFactGQuestionsBaseline",
    AssessmentKind.WEEKLY: "/AddParticipantFactGQuestionsWeekly",
}

WEEKLY_DATES_ENDPOINT = "/GetParticipantFactGQuestionsWeeklyWeeks"
