"""Tests for value coercion helpers."""
from __future__ import annotations

import math

import pytest

from weld_quoter.domain_models.values import (
    coerce_float_or_none,
    non_negative,
    safe_float,
    to_bool,
    to_float,
    to_int,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("25 mm", 25.0),
        ("37.5°", 37.5),
        ("1,250", 1250.0),
        ("150 mm/min", 150.0),
        ("0.5 h", 0.5),
        ("70%", 70.0),
        (12, 12.0),
    ],
)
def test_coerce_float_or_none_handles_shop_units(raw, expected: float) -> None:
    result = coerce_float_or_none(raw)
    assert result is not None
    assert math.isclose(result, expected)


@pytest.mark.parametrize("raw", [None, "", "abc", True, object()])
def test_coerce_float_or_none_rejects_garbage(raw) -> None:
    assert coerce_float_or_none(raw) is None


def test_to_float_rejects_non_finite() -> None:
    assert to_float(float("nan")) is None
    assert to_float("inf") is None
    assert to_float("3.5") == 3.5


def test_to_int_rounds() -> None:
    assert to_int("2.6") == 3
    assert to_int(None) is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("false", False),
        ("0", False),
        ("no", False),
        (" OFF ", False),
        ("true", True),
        ("Yes", True),
        ("1", True),
        (1, True),
        (0.0, False),
        (True, True),
    ],
)
def test_to_bool_reads_typed_flags(raw, expected: bool) -> None:
    assert to_bool(raw) is expected


def test_to_bool_default_for_unknown_text() -> None:
    assert to_bool(None) is False
    assert to_bool("maybe", default=True) is True


def test_safe_float_default() -> None:
    assert safe_float("n/a", 4.0) == 4.0
    assert safe_float("7") == 7.0


def test_non_negative() -> None:
    assert non_negative(-0.1) == 0.0
    assert non_negative(2.5) == 2.5
