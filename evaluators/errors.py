"""
Errors raised by the FACT-G scoring engine.

Only caller contract violations are exceptions. An empty catalog and
unparsable stored values are ordinary states (see QuestionCatalog.is_empty
and parse_stored_value).
"""

from typing import Any, List, Optional


class InvalidResponseValue(ValueError):
    """A response outside the 0-4 scale was recorded or scored."""

    def __init__(self, value: Any, item_id: Optional[str] = None):
        self.value = value
        self.item_id = item_id
        where = f" for item {item_id}" if item_id else ""
        super().__init__(f"Response{where} must be an integer 0-4, got {value!r}")


class UnknownItem(KeyError):
    """An answer was addressed to an item id that is not in the catalog."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(item_id)

    def __str__(self) -> str:
        return f"Unknown FACT-G item: {self.item_id}"


class NoResponsesEntered(Exception):
    """Save attempted while every item is unanswered."""

    def __init__(self, flagged_items: List[str]):
        self.flagged_items = flagged_items
        super().__init__("No responses entered. Please fill at least one question before saving.")
