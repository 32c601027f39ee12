"""
Deterministic rounding utilities.

This module provides the round_half_up function and the missing-data
rescaling used by FACT-G subscale scoring, so that clinical scores are
reproducible across runs and platforms.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Union


Number = Union[int, float, Decimal]


def round_half_up(value: Number, decimals: int = 0) -> Union[int, float]:
    """
    Round a number using "round half up" strategy.

    This ensures deterministic rounding where 0.5 always rounds up,
    avoiding Python's default banker's rounding.

    Args:
        value: Number to round (int, float or Decimal)
        decimals: Number of decimal places (0 for integer)

    Returns:
        Rounded integer (or float when decimals > 0)

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(7.5)
        8
        >>> round_half_up(2.4)
        2
    """
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    if decimals == 0:
        return int(d.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    quantize_str = "0." + "0" * decimals
    return float(d.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP))


def compute_rescaled_score(scores: List[int], total_items: int) -> int:
    """
    Rescale the achieved sum of a partially answered subscale.

    Formula:
        raw_sum = sum(scores)
        rescaled = raw_sum × total_items / len(scores)
        score = round_half_up(rescaled)

    The sum is projected as if every item had been answered at the
    observed average. The division is done in Decimal so that exact
    halves (e.g. 7.5) are never perturbed by float representation.

    Args:
        scores: Item contributions for the answered items only (each 0-4)
        total_items: Number of items in the subscale, answered or not

    Returns:
        Subscale score as integer, 0 when nothing is answered

    Examples:
        >>> compute_rescaled_score([2, 2, 2, 2, 2, 2, 2], 7)
        14
        >>> compute_rescaled_score([3, 1], 4)
        8
        >>> compute_rescaled_score([], 7)
        0
    """
    if not scores or total_items == 0:
        return 0

    rescaled = Decimal(sum(scores) * total_items) / Decimal(len(scores))
    return round_half_up(rescaled)
