"""Settings bundle consumed by the weld calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from weld_quoter.domain_models.values import to_float
from weld_quoter.engine.types import BeadSize, Process

DEFAULT_FALLBACK_SPEED = 150.0


class SpeedBracket(str, Enum):
    THIN = "thin"
    MEDIUM = "medium"
    THICK = "thick"


class FactorBracket(str, Enum):
    RANGE1 = "range1"
    RANGE2 = "range2"
    RANGE3 = "range3"
    RANGE4 = "range4"
    RANGE5 = "range5"
    RANGE6 = "range6"


@dataclass(frozen=True, slots=True)
class OperatorFactors:
    """Multipliers turning arc time into labour time."""

    inside: float
    outside: float


def _freeze(mapping: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class TravelSpeedTable:
    """Per-process travel speeds (mm/min) for each thickness bracket."""

    rows: Mapping[SpeedBracket, Mapping[Process, float]]

    def __post_init__(self) -> None:
        frozen = {SpeedBracket(k): _freeze(v) for k, v in self.rows.items()}
        object.__setattr__(self, "rows", _freeze(frozen))

    def row(self, bracket: SpeedBracket) -> Mapping[Process, float]:
        return self.rows.get(bracket, MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class OperatorFactorTable:
    """Inside/outside operator factors for each thickness bracket."""

    rows: Mapping[FactorBracket, OperatorFactors]

    def __post_init__(self) -> None:
        frozen = {FactorBracket(k): v for k, v in self.rows.items()}
        object.__setattr__(self, "rows", _freeze(frozen))

    def row(self, bracket: FactorBracket) -> OperatorFactors:
        return self.rows.get(bracket, OperatorFactors(1.0, 1.0))


@dataclass(frozen=True, slots=True)
class WeldSettings:
    """Bead sizes, speeds and operator factors applied to every weld item.

    ``fallback_speed`` and ``fallback_bead`` stand in for processes missing from
    the lookup tables; ``default_process`` receives the whole inside zone when
    no process layers are given.
    """

    bead_sizes: Mapping[Process, BeadSize]
    travel_speeds: TravelSpeedTable
    operator_factors: OperatorFactorTable
    fallback_speed: float = DEFAULT_FALLBACK_SPEED
    fallback_bead: BeadSize = field(default_factory=lambda: BeadSize(3.0, 8.0))
    default_process: Process = Process.SMAW

    def __post_init__(self) -> None:
        object.__setattr__(self, "bead_sizes", _freeze(self.bead_sizes))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "WeldSettings":
        """Build settings from the ``app_settings.json`` layout."""

        bead_sizes: dict[Process, BeadSize] = {}
        for key, value in dict(raw.get("bead_sizes") or {}).items():
            bead = _bead_from_mapping(value)
            if bead is not None:
                bead_sizes[Process.parse(key)] = bead

        speed_rows: dict[SpeedBracket, dict[Process, float]] = {}
        for bracket_key, row in dict(raw.get("travel_speeds") or {}).items():
            speeds: dict[Process, float] = {}
            for process_key, value in dict(row or {}).items():
                numeric = to_float(value)
                if numeric is None:
                    continue
                speeds[Process.parse(process_key)] = numeric
            speed_rows[SpeedBracket(bracket_key)] = speeds

        factor_rows: dict[FactorBracket, OperatorFactors] = {}
        for bracket_key, row in dict(raw.get("operator_factors") or {}).items():
            row = dict(row or {})
            inside = to_float(row.get("inside"))
            outside = to_float(row.get("outside"))
            factor_rows[FactorBracket(bracket_key)] = OperatorFactors(
                inside=1.0 if inside is None else inside,
                outside=1.0 if outside is None else outside,
            )

        fallback_speed = to_float(raw.get("fallback_travel_speed"))
        fallback_bead = _bead_from_mapping(raw.get("fallback_bead_size"))
        default_process = raw.get("default_process")

        return cls(
            bead_sizes=bead_sizes,
            travel_speeds=TravelSpeedTable(speed_rows),
            operator_factors=OperatorFactorTable(factor_rows),
            fallback_speed=DEFAULT_FALLBACK_SPEED if fallback_speed is None else fallback_speed,
            fallback_bead=fallback_bead or BeadSize(3.0, 8.0),
            default_process=Process.parse(default_process) if default_process else Process.SMAW,
        )

    def to_mapping(self) -> dict[str, Any]:
        """Return the settings in the ``app_settings.json`` layout."""

        return {
            "bead_sizes": {
                process.value: {"h": bead.height, "w": bead.width}
                for process, bead in self.bead_sizes.items()
            },
            "travel_speeds": {
                bracket.value: {process.value: speed for process, speed in row.items()}
                for bracket, row in self.travel_speeds.rows.items()
            },
            "operator_factors": {
                bracket.value: {"inside": factors.inside, "outside": factors.outside}
                for bracket, factors in self.operator_factors.rows.items()
            },
            "fallback_travel_speed": self.fallback_speed,
            "fallback_bead_size": {"h": self.fallback_bead.height, "w": self.fallback_bead.width},
            "default_process": self.default_process.value,
        }


def _bead_from_mapping(value: Any) -> BeadSize | None:
    if isinstance(value, BeadSize):
        return value
    if not isinstance(value, Mapping):
        return None
    height = to_float(value.get("h", value.get("height")))
    width = to_float(value.get("w", value.get("width")))
    if height is None or width is None:
        return None
    return BeadSize(height=height, width=width)


__all__ = [
    "DEFAULT_FALLBACK_SPEED",
    "FactorBracket",
    "OperatorFactorTable",
    "OperatorFactors",
    "SpeedBracket",
    "TravelSpeedTable",
    "WeldSettings",
]
