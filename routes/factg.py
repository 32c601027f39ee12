"""
FACT-G scoring routes.

Stateless: every request carries the catalog records and the answers, and
the response is recomputed from them.
"""

import logging

from fastapi import APIRouter

from evaluators.answers import AnswerStore
from evaluators.catalog import QuestionCatalog
from evaluators.scoring import compute_scores, generate_score_response
from evaluators.submission import RecordCorrelation, build_submission_payload
from models.schemas import (
    ErrorResponse,
    ScoreRequest,
    ScoreResponse,
    SubmissionRequest,
    SubmissionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/factg", tags=["FACT-G"])


def _load_answers(request: ScoreRequest) -> AnswerStore:
    catalog = QuestionCatalog.from_records(request.questions)
    answers = AnswerStore(catalog)
    answers.merge_edits(request.answers)
    return answers


@router.post(
    "/score",
    response_model=ScoreResponse,
    responses={422: {"model": ErrorResponse, "description": "Invalid response value or item"}},
    summary="Compute FACT-G subscale and total scores",
)
def score(request: ScoreRequest) -> ScoreResponse:
    """
    Score an answer set against a question catalog.

    **Scoring Model:**
    - reverse items ("-") are inverted: 4 - response
    - subscale = round_half_up(sum × items / answered), 0 if none answered
    - TOTAL = PWB + SWB + EWB + FWB
    """
    answers = _load_answers(request)
    if answers.catalog.is_empty:
        logger.info("Score requested for an empty FACT-G catalog")
    return generate_score_response(answers.catalog, answers.snapshot())


@router.post(
    "/submission",
    response_model=SubmissionResponse,
    responses={422: {"model": ErrorResponse, "description": "No responses entered or invalid values"}},
    summary="Build the store submit payload for an answer set",
)
def build_submission(request: SubmissionRequest) -> SubmissionResponse:
    """
    Build the insert/update payload the study backend expects.

    Nothing is sent to the backend. The operation is "update" when a
    record id is supplied and "insert" otherwise.
    """
    answers = _load_answers(request)
    correlation = RecordCorrelation(request.record_id)

    payload = build_submission_payload(
        answers,
        participant_id=request.participant_id,
        study_id=request.study_id,
        created_by=request.created_by,
        created_date=request.created_date,
    )

    logger.info(
        f"Built {request.kind.value} FACT-G {correlation.operation} payload "
        f"for participant {request.participant_id}"
    )

    return SubmissionResponse(
        operation=correlation.operation,
        record_id=correlation.record_id,
        payload=payload,
        scores=compute_scores(answers.catalog, answers.snapshot()),
    )
