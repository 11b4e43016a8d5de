"""Thickness brackets and per-process lookups for speeds, factors and beads.

Bracket boundaries belong to the bracket above them: a 20 mm shell is
``medium`` and a 40 mm shell is ``thick``.
"""

from __future__ import annotations

import logging

from weld_quoter.engine.settings import (
    FactorBracket,
    OperatorFactors,
    SpeedBracket,
    TravelSpeedTable,
    WeldSettings,
)
from weld_quoter.engine.types import BeadSize, Process

logger = logging.getLogger(__name__)

SPEED_BRACKET_LIMITS: tuple[tuple[float, SpeedBracket], ...] = (
    (20.0, SpeedBracket.THIN),
    (40.0, SpeedBracket.MEDIUM),
)

FACTOR_BRACKET_LIMITS: tuple[tuple[float, FactorBracket], ...] = (
    (12.0, FactorBracket.RANGE1),
    (18.0, FactorBracket.RANGE2),
    (25.0, FactorBracket.RANGE3),
    (35.0, FactorBracket.RANGE4),
    (50.0, FactorBracket.RANGE5),
)

__all__ = [
    "FACTOR_BRACKET_LIMITS",
    "SPEED_BRACKET_LIMITS",
    "factor_bracket",
    "operator_factors_for",
    "resolve_bead",
    "resolve_speed",
    "speed_bracket",
]


def speed_bracket(thickness: float) -> SpeedBracket:
    for limit, bracket in SPEED_BRACKET_LIMITS:
        if thickness < limit:
            return bracket
    return SpeedBracket.THICK


def factor_bracket(thickness: float) -> FactorBracket:
    for limit, bracket in FACTOR_BRACKET_LIMITS:
        if thickness < limit:
            return bracket
    return FactorBracket.RANGE6


def operator_factors_for(thickness: float, settings: WeldSettings) -> OperatorFactors:
    return settings.operator_factors.row(factor_bracket(thickness))


def resolve_speed(
    process: Process,
    bracket: SpeedBracket,
    table: TravelSpeedTable,
    fallback: float,
) -> float:
    """Return the travel speed of ``process`` in ``bracket``.

    ``Skip`` resolves to 0; a process missing from the table resolves to
    ``fallback``.
    """

    if process.is_skip:
        return 0.0
    speed = table.row(bracket).get(process)
    if speed is None:
        logger.warning(
            "No %s travel speed for %s; using fallback %.1f mm/min",
            bracket.value,
            process.value,
            fallback,
        )
        return fallback
    return speed


def resolve_bead(process: Process, settings: WeldSettings) -> BeadSize | None:
    """Return the bead size of ``process``; ``None`` for ``Skip``."""

    if process.is_skip:
        return None
    bead = settings.bead_sizes.get(process)
    if bead is None:
        logger.warning(
            "No bead size configured for %s; using fallback %.1f x %.1f mm",
            process.value,
            settings.fallback_bead.height,
            settings.fallback_bead.width,
        )
        return settings.fallback_bead
    return bead
