"""Domain-level helpers shared by the estimators and settings loaders."""
from __future__ import annotations

from .values import (
    coerce_float_or_none,
    non_negative,
    safe_float,
    to_bool,
    to_float,
    to_int,
)

__all__ = [
    "coerce_float_or_none",
    "non_negative",
    "safe_float",
    "to_bool",
    "to_float",
    "to_int",
]
