"""
Pydantic schemas for the FACT-G Scoring Service.

Defines the store wire records, the submit payload and the HTTP
request/response models. Store field names (FactGQuestionId, ScaleValue...)
are kept verbatim at the boundary so payloads round-trip unchanged.
"""

from datetime import date
from typing import Dict, List, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, field_validator
from .enums import AssessmentKind


class QuestionRecord(BaseModel):
    """
    One question row as returned by the study backend.

    The same shape carries the catalog (ScaleValue empty) and the stored
    answers (ScaleValue populated). Both the store's FactG* names and the
    generic CategoryName/QuestionId/QuestionText names are accepted.
    """
    model_config = ConfigDict(extra="ignore")

    category_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("FactGCategoryId", "CategoryId", "category_id"),
    )
    category_name: str = Field(
        ...,
        validation_alias=AliasChoices("FactGCategoryName", "CategoryName", "category_name"),
    )
    question_id: str = Field(
        ...,
        validation_alias=AliasChoices("FactGQuestionId", "QuestionId", "question_id"),
    )
    question_text: str = Field(
        "",
        validation_alias=AliasChoices("FactGQuestion", "QuestionText", "question_text"),
    )
    type_of_question: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("TypeOfQuestion", "type_of_question"),
        description='"-" marks a reverse-coded item',
    )
    scale_value: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("ScaleValue", "scale_value"),
        description='Stringified 0-4 response, or "x" when unanswered',
    )

    @field_validator("category_id", "question_id", "scale_value", mode="before")
    @classmethod
    def stringify_numbers(cls, v):
        """The backend is loose about numeric vs string ids and values."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ScoreResult(BaseModel):
    """Subscale and total scores. Always derived, never persisted as truth."""
    PWB: int = Field(0, ge=0, description="Physical well-being")
    SWB: int = Field(0, ge=0, description="Social/Family well-being")
    EWB: int = Field(0, ge=0, description="Emotional well-being")
    FWB: int = Field(0, ge=0, description="Functional well-being")
    TOTAL: int = Field(0, ge=0, description="PWB + SWB + EWB + FWB")


class SubscaleBreakdown(BaseModel):
    """Per-subscale detail for display."""
    name: str
    short_code: str
    score: int = Field(..., ge=0)
    max_score: int = Field(..., ge=0, description="Item count × 4")
    answered_items: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)


class SubmissionItem(BaseModel):
    """One per-item row of the submit payload."""
    FactGCategoryId: str
    FactGQuestionId: str
    ScaleValue: str
    FlagStatus: str = "Yes"
    WeekNo: int = 1


class SubmissionPayload(BaseModel):
    """
    Body of the AddParticipantFactGQuestions* calls.

    The correlation id is not part of the model; the store adapter adds it
    only when the submission is an update.
    """
    StudyId: str
    ParticipantId: str
    SessionNo: str
    FactGData: List[SubmissionItem]
    CreatedBy: str
    CreatedDate: Optional[str] = None


AnswerValue = Optional[Union[StrictInt, str]]


class ScoreRequest(BaseModel):
    """
    Request schema for POST /factg/score.

    Integer answers must be 0-4. String answers are treated like stored
    values: "x", empty and non-numeric strings mean unanswered.
    """
    questions: List[QuestionRecord] = Field(..., description="Catalog question records")
    answers: Dict[str, AnswerValue] = Field(
        default_factory=dict,
        description="Item id → response",
    )


class ScoreResponse(BaseModel):
    """Response schema for POST /factg/score."""
    scores: ScoreResult
    subscales: List[SubscaleBreakdown]
    answered_items: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)
    max_total: int = Field(..., ge=0)


class SubmissionRequest(ScoreRequest):
    """Request schema for POST /factg/submission."""
    participant_id: str = Field(..., min_length=1)
    kind: AssessmentKind = AssessmentKind.BASELINE
    study_id: Optional[str] = None
    created_by: Optional[str] = None
    created_date: Optional[date] = None
    record_id: Optional[str] = Field(
        None,
        description="Existing record id; present only when updating",
    )


class SubmissionResponse(BaseModel):
    """Response schema for POST /factg/submission."""
    operation: str = Field(..., description="insert|update")
    record_id: Optional[str] = None
    payload: SubmissionPayload
    scores: ScoreResult


class ServiceStatus(BaseModel):
    """Status of individual external services."""
    store: str = Field(..., description="Study backend status: configured|unconfigured")


class HealthResponse(BaseModel):
    """Response schema for GET /factg/health."""
    status: str = Field(default="healthy", description="Overall health status")
    version: str = Field(..., description="API version")
    services: ServiceStatus = Field(..., description="External service configuration status")


class ErrorResponse(BaseModel):
    """Standardized error response."""
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict] = Field(None, description="Additional error details")

    class Config:
        json_schema_extra = {
            "example": {
                "error_code": "INVALID_RESPONSE_VALUE",
                "message": "Response for item GP1 must be an integer 0-4, got 7",
                "details": {"item_id": "GP1", "value": 7},
            }
        }
