"""
Item scoring.

Maps one raw 0-4 response and its polarity to a score contribution.
"""

from typing import Any, Optional

from evaluators.errors import InvalidResponseValue
from models.enums import Polarity, RESPONSE_MAX, RESPONSE_MIN


def check_response(value: Any, item_id: Optional[str] = None) -> int:
    """
    Validate a response value.

    Args:
        value: Candidate response
        item_id: Item the value belongs to, for the error message

    Returns:
        The value, unchanged

    Raises:
        InvalidResponseValue: If value is not an integer in [0, 4]
    """
    # bool is an int subclass but never a valid response
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidResponseValue(value, item_id)
    if not RESPONSE_MIN <= value <= RESPONSE_MAX:
        raise InvalidResponseValue(value, item_id)
    return value


def score_item(response: Optional[int], polarity: Polarity) -> Optional[int]:
    """
    Compute the contribution of a single item.

    Direct items keep the response (0→0 … 4→4); reverse items are
    inverted (0→4 … 4→0). An unset response stays unset so the caller
    can exclude it rather than count it as zero.

    Args:
        response: Raw response 0-4, or None when unanswered
        polarity: Item polarity

    Returns:
        Contribution 0-4, or None

    Raises:
        InvalidResponseValue: If response is set but outside [0, 4]

    Examples:
        >>> score_item(1, Polarity.REVERSE)
        3
        >>> score_item(None, Polarity.DIRECT) is None
        True
    """
    if response is None:
        return None

    check_response(response)

    if polarity == Polarity.REVERSE:
        return RESPONSE_MAX - response
    return response
