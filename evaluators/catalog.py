"""
Question catalog.

Turns the flat list of question records fetched from the study backend
into the four ordered FACT-G subscales.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from evaluators.errors import UnknownItem
from models.enums import (
    Polarity,
    Subscale,
    SUBSCALE_ORDER,
    SUBSCALE_SHORT_CODES,
    REVERSE_MARKER,
    RESPONSE_MAX,
)
from models.schemas import QuestionRecord

logger = logging.getLogger(__name__)


def polarity_from_marker(marker: Optional[str]) -> Polarity:
    """'-' means reverse-coded; anything else, absent included, is direct."""
    if marker is not None and marker.strip() == REVERSE_MARKER:
        return Polarity.REVERSE
    return Polarity.DIRECT


@dataclass(frozen=True)
class Item:
    """
    A single FACT-G question.

    Attributes:
        id: Question identifier (e.g. "GP1")
        category_id: Backend category identifier, if the store sent one
        text: Question text
        polarity: Direct or reverse scoring
    """
    id: str
    category_id: Optional[str]
    text: str
    polarity: Polarity = Polarity.DIRECT


@dataclass(frozen=True)
class Category:
    """One subscale and its items in display order."""
    subscale: Subscale
    items: Tuple[Item, ...]

    @property
    def name(self) -> str:
        return self.subscale.value

    @property
    def short_code(self) -> str:
        return SUBSCALE_SHORT_CODES[self.subscale]

    @property
    def max_score(self) -> int:
        return len(self.items) * RESPONSE_MAX


class QuestionCatalog:
    """
    Ordered, deduplicated FACT-G subscales.

    Grouping rules:
    - duplicate (category, question id) pairs keep the first-seen record
    - items are sorted by id using plain string comparison
    - categories follow the canonical order Physical, Social/Family,
      Emotional, Functional; any other category name is dropped

    An empty catalog is a valid state meaning "no scoreable items".
    """

    def __init__(self, categories: Sequence[Category] = ()):
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._index: Dict[str, Item] = {}
        for category in self._categories:
            for item in category.items:
                if item.id in self._index:
                    logger.warning(f"Item {item.id} appears in more than one subscale; keeping the first")
                    continue
                self._index[item.id] = item

    @classmethod
    def from_records(cls, records: Iterable[QuestionRecord]) -> "QuestionCatalog":
        """
        Build a catalog from raw store records.

        Args:
            records: Question records in the order the store returned them

        Returns:
            QuestionCatalog (possibly empty)
        """
        grouped: Dict[Subscale, Dict[str, Item]] = {}
        dropped = set()

        for record in records:
            name = record.category_name.strip()
            try:
                subscale = Subscale(name)
            except ValueError:
                dropped.add(name)
                continue

            items = grouped.setdefault(subscale, {})
            if record.question_id in items:
                continue
            items[record.question_id] = Item(
                id=record.question_id,
                category_id=record.category_id,
                text=record.question_text,
                polarity=polarity_from_marker(record.type_of_question),
            )

        if dropped:
            logger.debug(f"Ignoring non FACT-G categories: {sorted(dropped)}")

        categories = [
            Category(
                subscale=subscale,
                items=tuple(sorted(grouped[subscale].values(), key=lambda item: item.id)),
            )
            for subscale in SUBSCALE_ORDER
            if subscale in grouped
        ]
        return cls(categories)

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    @property
    def is_empty(self) -> bool:
        return not self._index

    @property
    def items(self) -> List[Item]:
        """All items in display order."""
        return [item for category in self._categories for item in category.items]

    @property
    def item_ids(self) -> List[str]:
        return [item.id for item in self.items]

    @property
    def max_total(self) -> int:
        return sum(category.max_score for category in self._categories)

    def category(self, subscale: Subscale) -> Optional[Category]:
        for category in self._categories:
            if category.subscale == subscale:
                return category
        return None

    def get_item(self, item_id: str) -> Item:
        try:
            return self._index[item_id]
        except KeyError:
            raise UnknownItem(item_id) from None

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._index

    def __len__(self) -> int:
        return len(self._index)
