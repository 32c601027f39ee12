"""Models package for the FACT-G Scoring Service."""

from .schemas import (
    QuestionRecord,
    ScoreResult,
    SubscaleBreakdown,
    SubmissionItem,
    SubmissionPayload,
    ScoreRequest,
    ScoreResponse,
    SubmissionRequest,
    SubmissionResponse,
    HealthResponse,
    ServiceStatus,
    ErrorResponse,
)
from .enums import (
    Polarity,
    Subscale,
    AssessmentKind,
    RecordState,
    SUBSCALE_ORDER,
)

__all__ = [
    "QuestionRecord",
    "ScoreResult",
    "SubscaleBreakdown",
    "SubmissionItem",
    "SubmissionPayload",
    "ScoreRequest",
    "ScoreResponse",
    "SubmissionRequest",
    "SubmissionResponse",
    "HealthResponse",
    "ServiceStatus",
    "ErrorResponse",
    "Polarity",
    "Subscale",
    "AssessmentKind",
    "RecordState",
    "SUBSCALE_ORDER",
]
