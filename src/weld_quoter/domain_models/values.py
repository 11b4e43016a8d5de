"""Domain-level value coercion helpers."""
from __future__ import annotations

import math
import re
from typing import Any


_UNIT_PATTERN = re.compile(
    r"(?i)\b(?:millimeters?|mm/min|mm|deg|degrees?|hrs?|hours?|h)\b\.?")


def coerce_float_or_none(value: Any) -> float | None:
    """Attempt to coerce the given value to ``float`` returning ``None`` on failure.

    Job files are often typed by hand or exported from spreadsheets, so values
    such as ``"25 mm"``, ``"37.5°"`` or ``"1,250"`` are accepted alongside plain
    numbers. Booleans are rejected because ``True`` is never a dimension.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        cleaned = (
            cleaned.replace(",", "")
            .replace("\u00B0", "")  # degree sign
            .replace("\u00A0", " ")  # non-breaking space
            .replace("%", "")
        )
        cleaned = _UNIT_PATTERN.sub("", cleaned)
        cleaned = cleaned.strip().rstrip(". ")
        try:
            return float(cleaned)
        except ValueError:
            return None
    if hasattr(value, "__float__"):
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    return None


def to_float(value: Any) -> float | None:
    """Best-effort conversion of ``value`` to a finite float."""

    if value is None:
        return None
    coerced = coerce_float_or_none(value)
    if coerced is None or not math.isfinite(coerced):
        return None
    return coerced


def to_int(value: Any) -> int | None:
    """Best-effort conversion of ``value`` to an integer via rounding."""

    numeric = to_float(value)
    if numeric is None:
        return None
    return int(round(numeric))


_TRUE_STRINGS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "n", "off", ""})


def to_bool(value: Any, default: bool = False) -> bool:
    """Interpret flags typed as ``"false"``, ``"no"``, ``0`` or ``"Yes"``.

    Unrecognised text returns ``default``.
    """

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return default


def safe_float(value: Any, default: float = 0.0) -> float:
    """Return ``value`` coerced to ``float`` with NaN/Inf protection."""

    coerced = to_float(value)
    if coerced is None:
        return default
    return coerced


def non_negative(value: float) -> float:
    """Clamp ``value`` at zero."""

    return value if value > 0.0 else 0.0


__all__ = [
    "coerce_float_or_none",
    "non_negative",
    "safe_float",
    "to_bool",
    "to_float",
    "to_int",
]
