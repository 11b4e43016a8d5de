"""Caller-side memoization of pipeline results.

Requests and settings hold read-only mapping proxies, which are not hashable,
so :func:`functools.lru_cache` cannot key on them directly. Results are keyed
on a SHA-256 fingerprint of the arguments' ``repr`` instead; every engine
record is a dataclass whose ``repr`` lists all of its fields.
"""

from __future__ import annotations

import functools
import hashlib
from collections import OrderedDict
from typing import Any, Callable, TypeVar

__all__ = ["fingerprint", "memoize"]

R = TypeVar("R")


def fingerprint(*parts: Any) -> str:
    """Return a stable hex digest identifying ``parts``."""

    text = "\x1f".join(repr(part) for part in parts)
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def memoize(func: Callable[..., R] | None = None, *, maxsize: int = 128):
    """Cache the most recent ``maxsize`` results of ``func`` by fingerprint.

    The wrapper exposes ``cache_clear()`` and ``cache_size()``.
    """

    def decorator(inner: Callable[..., R]) -> Callable[..., R]:
        cache: OrderedDict[str, R] = OrderedDict()

        @functools.wraps(inner)
        def wrapper(*args: Any, **kwargs: Any) -> R:
            key = fingerprint(args, sorted(kwargs.items()))
            if key in cache:
                cache.move_to_end(key)
                return cache[key]
            result = inner(*args, **kwargs)
            cache[key] = result
            if maxsize > 0 and len(cache) > maxsize:
                cache.popitem(last=False)
            return result

        wrapper.cache_clear = cache.clear  # type: ignore[attr-defined]
        wrapper.cache_size = lambda: len(cache)  # type: ignore[attr-defined]
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
