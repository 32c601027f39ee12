"""
Subscale and total scoring.

Combines item contributions per subscale into a rescaled subscale score
that compensates for unanswered items, then sums the subscales into the
FACT-G total. Everything here is a pure function of (catalog, answers).
"""

from typing import List, Mapping, Optional, Sequence

from evaluators.catalog import Item, QuestionCatalog
from evaluators.item_scorer import score_item
from models.enums import SUBSCALE_ORDER, SUBSCALE_SCORE_KEYS
from models.schemas import ScoreResponse, ScoreResult, SubscaleBreakdown
from utils.rounding import compute_rescaled_score


Answers = Mapping[str, Optional[int]]


def _answered_scores(answers: Answers, items: Sequence[Item]) -> List[int]:
    scored = []
    for item in items:
        contribution = score_item(answers.get(item.id), item.polarity)
        if contribution is not None:
            scored.append(contribution)
    return scored


def score_subscale(answers: Answers, items: Sequence[Item]) -> int:
    """
    Compute one subscale score.

    Formula:
        scored = item contributions of the answered items only
        score = round_half_up(sum(scored) × len(items) / len(scored))

    Returns 0 when nothing is answered or the subscale has no items.

    Args:
        answers: item id → response (None when unanswered)
        items: The subscale's items

    Returns:
        Subscale score as integer

    Raises:
        InvalidResponseValue: If any answer is outside [0, 4]
    """
    return compute_rescaled_score(_answered_scores(answers, items), len(items))


def compute_scores(catalog: QuestionCatalog, answers: Answers) -> ScoreResult:
    """
    Compute PWB, SWB, EWB, FWB and TOTAL.

    Formula:
        TOTAL = PWB + SWB + EWB + FWB

    A subscale missing from the catalog scores 0. There is no rescaling
    at the total level.
    """
    values = {}
    for subscale in SUBSCALE_ORDER:
        category = catalog.category(subscale)
        values[SUBSCALE_SCORE_KEYS[subscale]] = (
            score_subscale(answers, category.items) if category else 0
        )

    return ScoreResult(TOTAL=sum(values.values()), **values)


def compute_subscale_breakdown(catalog: QuestionCatalog, answers: Answers) -> List[SubscaleBreakdown]:
    """Per-subscale detail (score, range, completion) in display order."""
    breakdown = []
    for category in catalog.categories:
        breakdown.append(SubscaleBreakdown(
            name=category.name,
            short_code=category.short_code,
            score=score_subscale(answers, category.items),
            max_score=category.max_score,
            answered_items=sum(1 for item in category.items if answers.get(item.id) is not None),
            total_items=len(category.items),
        ))
    return breakdown


def generate_score_response(catalog: QuestionCatalog, answers: Answers) -> ScoreResponse:
    """
    Generate the complete presentation-ready score response.

    Args:
        catalog: Question catalog
        answers: Current answers

    Returns:
        ScoreResponse ready for JSON serialization
    """
    subscales = compute_subscale_breakdown(catalog, answers)

    return ScoreResponse(
        scores=compute_scores(catalog, answers),
        subscales=subscales,
        answered_items=sum(s.answered_items for s in subscales),
        total_items=sum(s.total_items for s in subscales),
        max_total=catalog.max_total,
    )
