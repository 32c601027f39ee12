"""Evaluators package: the FACT-G scoring engine."""

from .catalog import Category, Item, QuestionCatalog
from .answers import AnswerStore, parse_stored_value
from .item_scorer import score_item
from .scoring import compute_scores, generate_score_response, score_subscale
from .submission import RecordCorrelation, build_submission_payload
from .errors import InvalidResponseValue, NoResponsesEntered, UnknownItem

__all__ = [
    "Category",
    "Item",
    "QuestionCatalog",
    "AnswerStore",
    "parse_stored_value",
    "score_item",
    "compute_scores",
    "generate_score_response",
    "score_subscale",
    "RecordCorrelation",
    "build_submission_payload",
    "InvalidResponseValue",
    "NoResponsesEntered",
    "UnknownItem",
]
