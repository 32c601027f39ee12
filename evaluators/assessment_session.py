"""
Assessment session.

Owns the mutable state of one open FACT-G assessment: the catalog, the
answer store, the upsert correlation and (for weekly assessments) the
selected date. Scoring stays pure; this class only wires it to the
study backend.
"""

import logging
from datetime import date
from typing import List, Optional

from adapters.store_adapter import FactGStoreAdapter
from config import settings
from evaluators.answers import AnswerStore
from evaluators.catalog import QuestionCatalog
from evaluators.scoring import compute_scores, generate_score_response
from evaluators.submission import RecordCorrelation, build_submission_payload
from models.enums import AssessmentKind
from models.schemas import ScoreResponse, ScoreResult, SubmissionPayload

logger = logging.getLogger(__name__)


class AssessmentSession:
    """
    One FACT-G assessment instance for one participant.

    Loads are stamped with a generation number. When a newer load (or a
    clear) starts before an older one finishes, the older response is
    discarded so it can never overwrite newer local state.

    Args:
        store: Study backend adapter
        participant_id: Participant identifier
        kind: Baseline or weekly instrument
        study_id: Study identifier (defaults to settings.default_study_id)
        created_by: Submitting user (defaults to settings.default_created_by)
    """

    def __init__(
        self,
        store: FactGStoreAdapter,
        participant_id: str,
        kind: AssessmentKind = AssessmentKind.BASELINE,
        study_id: Optional[str] = None,
        created_by: Optional[str] = None,
    ):
        self.store = store
        self.participant_id = str(participant_id)
        self.kind = kind
        self.study_id = study_id or settings.default_study_id
        self.created_by = created_by or settings.default_created_by

        self.catalog = QuestionCatalog()
        self.answers = AnswerStore(self.catalog)
        self.correlation = RecordCorrelation()
        self.selected_date: Optional[date] = None
        self.available_dates: List[date] = []
        self._generation = 0

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def open(self) -> bool:
        """
        Open the assessment the way the data-entry screen does.

        Weekly: list stored dates and load today's record if one exists,
        otherwise a blank form. Baseline: load the stored record.

        Returns:
            True if the load was applied, False if it was superseded
        """
        if self.kind == AssessmentKind.WEEKLY:
            await self.load_available_dates()
            today = date.today()
            return await self.load(today if today in self.available_dates else None)
        return await self.load()

    async def load_available_dates(self) -> List[date]:
        """Refresh the list of stored weekly assessment dates (newest first)."""
        self.available_dates = await self.store.fetch_assessment_dates(self.study_id, self.participant_id)
        return self.available_dates

    async def load(self, created_date: Optional[date] = None) -> bool:
        """
        Load the catalog and stored answers.

        A weekly load without a date is a new blank form: every item is
        unset and the instance is NEW, whatever the store returns.

        Args:
            created_date: Weekly assessment date to open

        Returns:
            True if the load was applied, False if a newer load or a clear
            superseded it

        Raises:
            StoreError: If the backend fails; local state is left unchanged
        """
        generation = self._next_generation()

        records = await self.store.fetch_catalog(self.kind, self.study_id, self.participant_id)
        if self._is_stale(generation):
            logger.debug(f"Discarding superseded catalog load for participant {self.participant_id}")
            return False

        catalog = QuestionCatalog.from_records(records)
        answers = AnswerStore(catalog)
        correlation = RecordCorrelation()

        blank_form = self.kind == AssessmentKind.WEEKLY and created_date is None
        if not catalog.is_empty and not blank_form:
            fetched = await self.store.fetch_answers(
                self.kind, self.study_id, self.participant_id, created_date
            )
            if self._is_stale(generation):
                logger.debug(f"Discarding superseded answer load for participant {self.participant_id}")
                return False

            answers.hydrate(fetched.records)
            record_id = fetched.record_id
            if record_id is None and created_date in self.available_dates:
                # weekly records are keyed by their date
                record_id = created_date.isoformat()
            correlation = RecordCorrelation(record_id)

        if catalog.is_empty:
            logger.info(f"No FACT-G questions available for participant {self.participant_id}")

        self.catalog = catalog
        self.answers = answers
        self.correlation = correlation
        self.selected_date = created_date
        return True

    async def select_date(self, created_date: Optional[date]) -> bool:
        """Switch the weekly assessment date (None for a new form)."""
        return await self.load(created_date)

    def scores(self) -> ScoreResult:
        return compute_scores(self.catalog, self.answers.snapshot())

    def score_response(self) -> ScoreResponse:
        return generate_score_response(self.catalog, self.answers.snapshot())

    def build_submission(self) -> SubmissionPayload:
        """
        Raises:
            NoResponsesEntered: If no item is answered
        """
        return build_submission_payload(
            self.answers,
            participant_id=self.participant_id,
            study_id=self.study_id,
            created_by=self.created_by,
            created_date=self.selected_date,
        )

    async def save(self) -> ScoreResult:
        """
        Submit the whole answer set.

        The first successful save inserts and stores the returned record
        id; later saves update that record. If the store fails nothing
        local changes, so the same save can simply be retried.

        If a load or clear starts while the submit is in flight, the
        result is recorded on the instance that was saved and the newer
        state is left alone.

        Returns:
            The scores that were saved

        Raises:
            NoResponsesEntered: If no item is answered (nothing is sent)
            StoreError: If the backend fails
        """
        payload = self.build_submission()
        scores = self.scores()
        generation = self._generation
        correlation = self.correlation

        record_id = await self.store.submit(self.kind, payload, correlation.record_id)
        correlation.mark_saved(record_id)

        if self._is_stale(generation):
            logger.debug(f"Save for participant {self.participant_id} finished after a newer load")
            return scores

        if self.kind == AssessmentKind.WEEKLY:
            saved_date = date.fromisoformat(payload.CreatedDate)
            if saved_date not in self.available_dates:
                self.available_dates = sorted(self.available_dates + [saved_date], reverse=True)
            self.selected_date = saved_date

        logger.info(
            f"Saved FACT-G {self.kind.value} for participant {self.participant_id}: "
            f"total={scores.TOTAL}, record_id={self.correlation.record_id}"
        )
        return scores

    def clear(self) -> None:
        """
        Clear action: unset every answer and return to NEW.

        The catalog is kept. Any load still in flight is invalidated.
        """
        self._next_generation()
        self.answers.clear()
        self.correlation = RecordCorrelation()
        self.selected_date = None
