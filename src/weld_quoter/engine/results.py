"""Immutable result records returned by the weld calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from weld_quoter.engine.geometry import ResolvedGeometry
from weld_quoter.engine.settings import FactorBracket, OperatorFactors, SpeedBracket
from weld_quoter.engine.types import BeadSize, Process, Zone

__all__ = [
    "ArcTimeResult",
    "LayerResult",
    "PassResult",
    "TimeResult",
    "VolumeResult",
    "WeldResult",
    "ZoneResult",
]


@dataclass(frozen=True, slots=True)
class LayerResult:
    """Passes and arc time for one process within a zone."""

    process: Process
    volume: float
    percentage: float
    bead: BeadSize | None
    passes: int
    speed: float
    arc_minutes: float
    width_start: float | None = None
    width_end: float | None = None


@dataclass(frozen=True, slots=True)
class ZoneResult:
    """Everything computed for one zone of a joint."""

    zone: Zone
    volume: float
    operator_factor: float
    layers: tuple[LayerResult, ...]
    passes: int
    arc_minutes: float
    hours: float


@dataclass(frozen=True, slots=True)
class _ZoneTotals:
    zones: Mapping[Zone, float]
    total: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "zones", MappingProxyType(dict(self.zones)))

    def __getitem__(self, zone: Zone | str) -> float:
        return self.zones[Zone(zone)]

    def __iter__(self) -> Iterator[Zone]:
        return iter(self.zones)

    def get(self, zone: Zone | str, default: float = 0.0) -> float:
        return self.zones.get(Zone(zone), default)


@dataclass(frozen=True, slots=True)
class VolumeResult(_ZoneTotals):
    """Zone volumes (mm^3) and the depths they were derived from."""

    inside_depth: float = 0.0
    outside_depth: float = 0.0


@dataclass(frozen=True, slots=True)
class PassResult(_ZoneTotals):
    """Pass counts per zone.

    ``layer_passes`` keeps the per-process counts of each zone in apportioned
    order, e.g. the root/fill/cap split of a multi-process inside weld.
    """

    layer_passes: Mapping[Zone, tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _ZoneTotals.__post_init__(self)
        object.__setattr__(self, "layer_passes", MappingProxyType(dict(self.layer_passes)))


@dataclass(frozen=True, slots=True)
class ArcTimeResult(_ZoneTotals):
    """Arc-on minutes per zone."""


@dataclass(frozen=True, slots=True)
class TimeResult(_ZoneTotals):
    """Labour hours per zone after operator factors."""


@dataclass(frozen=True, slots=True)
class WeldResult:
    """Complete outcome of one pipeline run."""

    geometry: ResolvedGeometry
    weld_length: float
    speed_bracket: SpeedBracket
    factor_bracket: FactorBracket
    factors: OperatorFactors
    zones: tuple[ZoneResult, ...]
    volumes: VolumeResult
    passes: PassResult
    arc_times: ArcTimeResult
    times: TimeResult

    def zone(self, zone: Zone | str) -> ZoneResult | None:
        key = Zone(zone)
        for result in self.zones:
            if result.zone is key:
                return result
        return None

    @property
    def total_passes(self) -> int:
        return int(self.passes.total)

    @property
    def total_hours(self) -> float:
        return self.times.total
