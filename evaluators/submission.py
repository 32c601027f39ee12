"""
Submission building and upsert correlation.

An assessment instance is NEW until its first successful save, after
which it carries the record id returned by the store and every later
save is an update of that record.
"""

import logging
from datetime import date
from typing import Optional

from config import settings
from evaluators.answers import AnswerStore
from evaluators.errors import NoResponsesEntered
from models.enums import RecordState
from models.schemas import SubmissionPayload

logger = logging.getLogger(__name__)


class RecordCorrelation:
    """
    Tracks the external record id of one assessment instance.

    States:
        NEW --save--> PERSISTED (insert, id assigned by the store)
        PERSISTED --save--> PERSISTED (update, id unchanged)
        any --reset--> NEW (Clear / new date)
    """

    def __init__(self, record_id: Optional[str] = None):
        self._record_id = record_id or None

    @property
    def record_id(self) -> Optional[str]:
        return self._record_id

    @property
    def state(self) -> RecordState:
        return RecordState.PERSISTED if self._record_id else RecordState.NEW

    @property
    def operation(self) -> str:
        return "update" if self._record_id else "insert"

    def mark_saved(self, record_id: Optional[str]) -> None:
        """
        Record a successful save.

        Call only after the store confirmed the save, so a failed save
        leaves the correlation untouched.

        Raises:
            ValueError: If an insert completed without a record id
        """
        if self._record_id is None:
            if not record_id:
                raise ValueError("Insert completed without a record id")
            self._record_id = record_id
            return

        if record_id and record_id != self._record_id:
            logger.warning(
                f"Store returned record id {record_id} for update of {self._record_id}; keeping {self._record_id}"
            )

    def reset(self) -> None:
        self._record_id = None


def build_submission_payload(
    answers: AnswerStore,
    participant_id: str,
    study_id: Optional[str] = None,
    created_by: Optional[str] = None,
    created_date: Optional[date] = None,
) -> SubmissionPayload:
    """
    Build the store submit payload for the whole answer set.

    Args:
        answers: Answer store to submit
        participant_id: Participant identifier
        study_id: Study identifier (defaults to settings.default_study_id)
        created_by: Submitting user (defaults to settings.default_created_by)
        created_date: Assessment date (defaults to today)

    Returns:
        SubmissionPayload

    Raises:
        NoResponsesEntered: If no item is answered
    """
    if answers.answered_count == 0:
        raise NoResponsesEntered(answers.validate_for_save())

    return SubmissionPayload(
        StudyId=study_id or settings.default_study_id,
        ParticipantId=str(participant_id),
        SessionNo=settings.default_session_no,
        FactGData=answers.to_submission_items(settings.default_category_id),
        CreatedBy=created_by or settings.default_created_by,
        CreatedDate=(created_date or date.today()).isoformat(),
    )
