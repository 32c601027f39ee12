"""Adapters package for the study backend integration."""

from .store_adapter import FactGStoreAdapter, FetchedAnswers, StoreError

__all__ = [
    "FactGStoreAdapter",
    "FetchedAnswers",
    "StoreError",
]
