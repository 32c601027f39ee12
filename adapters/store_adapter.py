"""
Study backend adapter.

Fetches FACT-G question catalogs and stored answers from the study REST
backend and submits answer sets to it. Every endpoint is a JSON POST and
list results come back under "ResponseData".
"""

import hashlib
import httpx
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from pydantic import ValidationError

from config import settings
from models.enums import (
    AssessmentKind,
    FETCH_ENDPOINTS,
    SUBMIT_ENDPOINTS,
    WEEKLY_DATES_ENDPOINT,
)
from models.schemas import QuestionRecord, SubmissionPayload
from utils.cache import cache_result

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The study backend could not complete a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass
class FetchedAnswers:
    """
    Stored answers for one assessment instance.

    Attributes:
        records: Question records with ScaleValue populated
        record_id: Correlation id of the stored record, None if none exists
    """
    records: List[QuestionRecord] = field(default_factory=list)
    record_id: Optional[str] = None


class FactGStoreAdapter:
    """
    Adapter for the study backend.

    Environment Variables:
        STORE_BASE_URL: Backend base URL
        STORE_API_TOKEN: Bearer token (optional)

    No retry policy is applied here; a failed call raises StoreError and
    the caller decides whether to retry.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.store_base_url
        self.api_token = api_token or settings.store_api_token
        self.is_configured = bool(self.base_url)
        self.timeout = settings.request_timeout_seconds
        self.transport = transport

    def __repr__(self) -> str:
        # Used in catalog cache keys; catalogs are per backend and per credential
        token_tag = hashlib.sha256(self.api_token.encode()).hexdigest()[:12] if self.api_token else "anonymous"
        return f"FactGStoreAdapter({self.base_url}, token={token_tag})"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _post(self, endpoint: str, payload: dict) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        if not self.is_configured:
            raise StoreError("Study backend is not configured (STORE_BASE_URL)")

        logger.info(f"Store request: POST {endpoint}")
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(endpoint, json=payload, headers=self._headers())
                response.raise_for_status()
                logger.info(f"Store response: {response.status_code} {endpoint}")
                if not response.content:
                    return {}
                return response.json()

        except httpx.TimeoutException as e:
            logger.error(f"Store timeout for {endpoint}")
            raise StoreError("Study backend request timed out") from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Store error {status_code} for {endpoint}")
            raise StoreError(f"Study backend error: {status_code}", status_code=status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Store transport error for {endpoint}: {e}")
            raise StoreError(f"Study backend unreachable: {e}") from e
        except ValueError as e:
            logger.error(f"Store returned invalid JSON for {endpoint}")
            raise StoreError("Study backend returned invalid JSON") from e

    @staticmethod
    def _response_rows(data: Any) -> List[dict]:
        if not isinstance(data, dict):
            return []
        rows = data.get("ResponseData") or []
        return [row for row in rows if isinstance(row, dict)]

    def _parse_records(self, rows: List[dict]) -> List[QuestionRecord]:
        records = []
        for row in rows:
            try:
                records.append(QuestionRecord.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed question record: {e.errors()}")
        return records

    def _extract_record_id(self, data: Any, rows: List[dict]) -> Optional[str]:
        """Find the correlation id at top level, or on the first row carrying it."""
        key = settings.record_id_field
        if isinstance(data, dict) and data.get(key):
            return str(data[key])
        for row in rows:
            if row.get(key):
                return str(row[key])
        return None

    @cache_result("factg_catalog", key_prefix="catalog_")
    async def fetch_catalog(
        self,
        kind: AssessmentKind,
        study_id: str,
        participant_id: str,
    ) -> List[QuestionRecord]:
        """
        Fetch the question catalog records.

        Args:
            kind: Baseline or weekly instrument
            study_id: Study identifier
            participant_id: Participant identifier

        Returns:
            Question records in store order, empty if the store has none

        Raises:
            StoreError: On any backend failure
        """
        data = await self._post(FETCH_ENDPOINTS[kind], {
            "StudyId": study_id,
            "ParticipantId": participant_id,
        })
        records = self._parse_records(self._response_rows(data))
        logger.info(f"Fetched {kind.value} catalog: {len(records)} records")
        return records

    async def fetch_answers(
        self,
        kind: AssessmentKind,
        study_id: str,
        participant_id: str,
        created_date: Optional[date] = None,
    ) -> FetchedAnswers:
        """
        Fetch stored answers.

        Args:
            kind: Baseline or weekly instrument
            study_id: Study identifier
            participant_id: Participant identifier
            created_date: Weekly assessment date (ignored for baseline)

        Returns:
            FetchedAnswers with records and correlation id

        Raises:
            StoreError: On any backend failure
        """
        payload = {"StudyId": study_id, "ParticipantId": participant_id}
        if created_date and kind == AssessmentKind.WEEKLY:
            payload["CreatedDate"] = created_date.isoformat()

        data = await self._post(FETCH_ENDPOINTS[kind], payload)
        rows = self._response_rows(data)
        return FetchedAnswers(
            records=self._parse_records(rows),
            record_id=self._extract_record_id(data, rows),
        )

    async def fetch_assessment_dates(self, study_id: str, participant_id: str) -> List[date]:
        """
        List the dates of stored weekly assessments.

        Returns:
            Unique dates, newest first

        Raises:
            StoreError: On any backend failure
        """
        data = await self._post(WEEKLY_DATES_ENDPOINT, {
            "ParticipantId": participant_id,
            "StudyId": study_id,
        })

        dates = set()
        for row in self._response_rows(data):
            raw = row.get("CreatedDate")
            if not raw:
                continue
            try:
                # "2025-09-12T12:25:48.000Z" or "2025-09-12"
                dates.add(date.fromisoformat(str(raw)[:10]))
            except ValueError:
                logger.warning(f"Skipping unparsable assessment date: {raw!r}")

        return sorted(dates, reverse=True)

    async def submit(
        self,
        kind: AssessmentKind,
        payload: SubmissionPayload,
        record_id: Optional[str] = None,
    ) -> str:
        """
        Insert or update an answer set.

        The correlation id is sent only when updating. Weekly records are
        keyed by their date, so a weekly insert that comes back without an
        id is correlated by CreatedDate.

        Args:
            kind: Baseline or weekly instrument
            payload: Submit payload
            record_id: Existing record id, None for an insert

        Returns:
            The record id to correlate later saves with

        Raises:
            StoreError: On any backend failure or a missing id on insert
        """
        body = payload.model_dump()
        if record_id:
            body[settings.record_id_field] = record_id

        operation = "update" if record_id else "insert"
        logger.info(f"Submitting {kind.value} FACT-G {operation} for participant {payload.ParticipantId}")

        data = await self._post(SUBMIT_ENDPOINTS[kind], body)
        returned = self._extract_record_id(data, [])

        if returned:
            return returned
        if record_id:
            return record_id
        if kind == AssessmentKind.WEEKLY and payload.CreatedDate:
            return payload.CreatedDate
        raise StoreError("Study backend did not return a record id")
