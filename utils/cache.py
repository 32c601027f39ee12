"""
TTL caches for study backend lookups.

A question catalog does not change for a given assessment instance, so
it is fetched once per (backend, kind, study, participant) and reused
across date switches until the TTL (settings.cache_ttl_seconds) expires.
"""

import threading
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Tuple

from cachetools import TTLCache

from config import settings

_registry_lock = threading.Lock()
_caches: Dict[str, TTLCache] = {}


def get_cache(name: str, ttl: Optional[int] = None) -> TTLCache:
    """Return the named cache, creating it on first use."""
    with _registry_lock:
        cache = _caches.get(name)
        if cache is None:
            cache = TTLCache(
                maxsize=settings.cache_max_size,
                ttl=ttl or settings.cache_ttl_seconds,
            )
            _caches[name] = cache
        return cache


def make_cache_key(*args: Any, **kwargs: Any) -> Tuple[Hashable, ...]:
    """Key on the repr of each argument; kwargs order does not matter."""
    return tuple(repr(arg) for arg in args) + tuple(
        f"{name}={value!r}" for name, value in sorted(kwargs.items())
    )


def cache_result(cache_name: str, ttl: Optional[int] = None, key_prefix: str = "") -> Callable:
    """
    Cache the result of a coroutine function.

    Only successful results are stored, so a failed fetch is retried on
    the next call.

    Example:
        @cache_result("factg_catalog", key_prefix="catalog_")
        async def fetch_catalog(self, kind, study_id, participant_id):
            ...
    """
    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache = get_cache(cache_name, ttl=ttl)
            key = (key_prefix,) + make_cache_key(*args, **kwargs)
            try:
                return cache[key]
            except KeyError:
                pass

            result = await func(*args, **kwargs)
            cache[key] = result
            return result

        return wrapper

    return decorator


def clear_cache(cache_name: Optional[str] = None) -> None:
    """Empty one named cache, or all of them."""
    with _registry_lock:
        targets = [_caches[cache_name]] if cache_name in _caches else []
        if cache_name is None:
            targets = list(_caches.values())
        for cache in targets:
            cache.clear()
