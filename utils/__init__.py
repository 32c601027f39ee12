"""Utilities package for the FACT-G Scoring Service."""

from .cache import get_cache, cache_result, clear_cache
from .rounding import round_half_up, compute_rescaled_score

__all__ = [
    "get_cache",
    "cache_result",
    "clear_cache",
    "round_half_up",
    "compute_rescaled_score",
]
