"""Arc time and labour hour arithmetic."""

from __future__ import annotations

__all__ = ["MINUTES_PER_HOUR", "arc_time_minutes", "labor_hours"]

MINUTES_PER_HOUR = 60.0


def arc_time_minutes(passes: int, weld_length: float, speed: float) -> float:
    """Minutes of arc-on time for ``passes`` runs of ``weld_length`` at ``speed``."""

    if passes <= 0 or speed <= 0:
        return 0.0
    return passes * weld_length / speed


def labor_hours(arc_minutes: float, operator_factor: float) -> float:
    return arc_minutes / MINUTES_PER_HOUR * operator_factor
