"""
Answer store.

Holds the current per-item responses of one assessment instance and
merges stored answers with in-progress edits.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from evaluators.catalog import QuestionCatalog
from evaluators.item_scorer import check_response
from models.enums import RESPONSE_MAX, RESPONSE_MIN, UNANSWERED_SENTINEL
from models.schemas import QuestionRecord, SubmissionItem

logger = logging.getLogger(__name__)


def _decode_integer(text: str) -> Optional[int]:
    """Decode a stringified integer: optional sign and ASCII digits only."""
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits.isascii() or not digits.isdigit():
        return None
    return int(text)


def parse_stored_value(raw: Any) -> Optional[int]:
    """
    Normalize a stored ScaleValue to a response.

    Every spelling of "unanswered" ("x", None, "", non-numeric text,
    out-of-range numbers) becomes None. Never raises.

    Examples:
        >>> parse_stored_value("3")
        3
        >>> parse_stored_value("x") is None
        True
        >>> parse_stored_value("abc") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, int):
        value = raw
    else:
        value = _decode_integer(str(raw).strip())
        if value is None:
            return None

    if not RESPONSE_MIN <= value <= RESPONSE_MAX:
        return None
    return value


class AnswerStore:
    """
    Mutable answer set bound to a catalog.

    Every catalog item has a slot, unset (None) until answered. Keys are
    validated against the catalog; values are validated on write.
    """

    def __init__(self, catalog: QuestionCatalog):
        self._catalog = catalog
        self._answers: Dict[str, Optional[int]] = {item_id: None for item_id in catalog.item_ids}

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    def hydrate(self, existing: Union[Mapping[str, Any], Iterable[QuestionRecord]]) -> None:
        """
        Merge stored answers into the store.

        Items present in ``existing`` are overwritten with their parsed
        value (unset when the stored value is a sentinel or unparsable);
        items not mentioned keep their current value. Ids unknown to the
        catalog are skipped.

        Args:
            existing: item id → stored ScaleValue, or the fetched records
        """
        if isinstance(existing, Mapping):
            pairs = existing.items()
        else:
            pairs = ((record.question_id, record.scale_value) for record in existing)

        for item_id, raw in pairs:
            if item_id not in self._answers:
                logger.debug(f"Skipping stored answer for unknown item {item_id}")
                continue
            self._answers[item_id] = parse_stored_value(raw)

    def merge_edits(self, edits: Mapping[str, Any]) -> None:
        """
        Apply client edits.

        Integers and stringified integers are recorded strictly (0-4).
        None, "x", empty and non-numeric strings unset the item.

        Raises:
            InvalidResponseValue: For an out-of-range value, e.g. 7 or "7"
            UnknownItem: For an id not in the catalog
        """
        for item_id, value in edits.items():
            if isinstance(value, str):
                value = _decode_integer(value.strip())
            if value is None:
                self.unset_answer(item_id)
            else:
                self.set_answer(item_id, value)

    def set_answer(self, item_id: str, value: int) -> None:
        """
        Record a response.

        Raises:
            UnknownItem: If item_id is not in the catalog
            InvalidResponseValue: If value is not an integer in [0, 4]
        """
        self._catalog.get_item(item_id)
        self._answers[item_id] = check_response(value, item_id)

    def unset_answer(self, item_id: str) -> None:
        self._catalog.get_item(item_id)
        self._answers[item_id] = None

    def get(self, item_id: str) -> Optional[int]:
        self._catalog.get_item(item_id)
        return self._answers[item_id]

    def clear(self) -> None:
        """Reset every item to unset; the catalog is kept."""
        for item_id in self._answers:
            self._answers[item_id] = None

    @property
    def answered_count(self) -> int:
        return sum(1 for value in self._answers.values() if value is not None)

    @property
    def total_items(self) -> int:
        return len(self._answers)

    def snapshot(self) -> Mapping[str, Optional[int]]:
        """Read-only copy of the current answers, safe to hand to scoring."""
        return MappingProxyType(dict(self._answers))

    def validate_for_save(self) -> List[str]:
        """
        Check the at-least-one-response rule.

        Returns:
            Item ids to flag; empty when the answer set may be saved
        """
        if self.answered_count > 0:
            return []
        return self._catalog.item_ids

    def to_submission_items(self, default_category_id: str) -> List[SubmissionItem]:
        """
        Build the per-item rows of the submit payload, in display order.

        Unset items are sent with the "x" sentinel.
        """
        rows = []
        for item in self._catalog.items:
            value = self._answers.get(item.id)
            rows.append(SubmissionItem(
                FactGCategoryId=item.category_id or default_category_id,
                FactGQuestionId=item.id,
                ScaleValue=str(value) if value is not None else UNANSWERED_SENTINEL,
            ))
        return rows
