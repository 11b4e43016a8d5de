from __future__ import annotations

import logging

import pytest

from weld_quoter.engine.settings import (
    FactorBracket,
    SpeedBracket,
    TravelSpeedTable,
    WeldSettings,
)
from weld_quoter.engine.speeds import (
    factor_bracket,
    operator_factors_for,
    resolve_bead,
    resolve_speed,
    speed_bracket,
)
from weld_quoter.engine.types import BeadSize, Process


@pytest.mark.parametrize(
    "thickness,expected",
    [
        (0.0, SpeedBracket.THIN),
        (19.99, SpeedBracket.THIN),
        (20.0, SpeedBracket.MEDIUM),
        (39.99, SpeedBracket.MEDIUM),
        (40.0, SpeedBracket.THICK),
        (150.0, SpeedBracket.THICK),
    ],
)
def test_speed_bracket_boundaries(thickness: float, expected: SpeedBracket) -> None:
    assert speed_bracket(thickness) is expected


@pytest.mark.parametrize(
    "thickness,expected",
    [
        (11.9, FactorBracket.RANGE1),
        (12.0, FactorBracket.RANGE2),
        (17.9, FactorBracket.RANGE2),
        (18.0, FactorBracket.RANGE3),
        (25.0, FactorBracket.RANGE4),
        (35.0, FactorBracket.RANGE5),
        (49.9, FactorBracket.RANGE5),
        (50.0, FactorBracket.RANGE6),
    ],
)
def test_factor_bracket_boundaries(thickness: float, expected: FactorBracket) -> None:
    assert factor_bracket(thickness) is expected


def test_operator_factors_for_thickness(settings: WeldSettings) -> None:
    factors = operator_factors_for(25.0, settings)

    assert factors.inside == pytest.approx(1.6)
    assert factors.outside == pytest.approx(1.5)


def test_resolve_speed_from_table(settings: WeldSettings) -> None:
    speed = resolve_speed(
        Process.SAW, SpeedBracket.MEDIUM, settings.travel_speeds, settings.fallback_speed
    )

    assert speed == 350.0


def test_skip_resolves_to_zero_speed_and_no_bead(settings: WeldSettings) -> None:
    assert resolve_speed(Process.SKIP, SpeedBracket.THIN, settings.travel_speeds, 150.0) == 0.0
    assert resolve_bead(Process.SKIP, settings) is None


def test_missing_speed_uses_fallback(caplog: pytest.LogCaptureFixture) -> None:
    table = TravelSpeedTable({SpeedBracket.THIN: {Process.GTAW: 80.0}})

    with caplog.at_level(logging.WARNING):
        speed = resolve_speed(Process.GMAW, SpeedBracket.THIN, table, 150.0)

    assert speed == 150.0
    assert "GMAW" in caplog.text


def test_missing_bead_uses_fallback(settings: WeldSettings, caplog: pytest.LogCaptureFixture) -> None:
    sparse = WeldSettings(
        bead_sizes={Process.GTAW: BeadSize(2.5, 6.0)},
        travel_speeds=settings.travel_speeds,
        operator_factors=settings.operator_factors,
    )

    with caplog.at_level(logging.WARNING):
        bead = resolve_bead(Process.FCAW, sparse)

    assert bead == BeadSize(3.0, 8.0)
    assert "FCAW" in caplog.text
