"""Weld calculation pipeline shared by every weld type.

``calculate_weld`` covers vessel joints welded in inside/outside/fillet zones
(nozzles, long seams, circ seams); ``calculate_pipe_butt`` covers single-vee
pipe butts welded root/fill/cap. Both run the same stages: resolve geometry,
apportion volume, count passes, look up speeds and factors once per item and
accumulate arc time and hours into a :class:`WeldResult`.

Nothing here reads configuration or keeps state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from weld_quoter.domain_models.values import non_negative
from weld_quoter.engine.geometry import ResolvedGeometry, resolve_geometry
from weld_quoter.engine.layers import (
    LayerShare,
    apportion_by_distribution,
    apportion_by_width,
)
from weld_quoter.engine.passes import count_passes
from weld_quoter.engine.results import (
    ArcTimeResult,
    LayerResult,
    PassResult,
    TimeResult,
    VolumeResult,
    WeldResult,
    ZoneResult,
)
from weld_quoter.engine.settings import SpeedBracket, WeldSettings
from weld_quoter.engine.speeds import factor_bracket, resolve_bead, resolve_speed, speed_bracket
from weld_quoter.engine.timing import arc_time_minutes, labor_hours
from weld_quoter.engine.types import (
    Circumference,
    GeometryInput,
    InsideAssignment,
    JointProfile,
    Process,
    ProcessLayer,
    Zone,
    ZoneDistribution,
)

logger = logging.getLogger(__name__)

__all__ = [
    "PipeButtRequest",
    "WeldRequest",
    "calculate_pipe_butt",
    "calculate_weld",
]


@dataclass(frozen=True, slots=True)
class WeldRequest:
    """Geometry plus process assignment for one inside/outside/fillet joint.

    ``inside`` is either a sequence of width-threshold layers or a legacy
    :class:`ZoneDistribution`. The fillet zone is only welded when
    ``fillet_process`` is set.
    """

    geometry: GeometryInput
    inside: InsideAssignment = ()
    outside_process: Process = Process.FCAW
    fillet_process: Process | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.inside, ZoneDistribution):
            object.__setattr__(self, "inside", tuple(self.inside))


@dataclass(frozen=True, slots=True)
class PipeButtRequest:
    """Single-vee pipe butt joint welded root, fill and cap."""

    outside_diameter: float
    wall_thickness: float
    root_gap: float
    root_face: float
    bevel_angle: float
    root_process: Process = Process.GTAW
    fill_process: Process = Process.SMAW
    cap_process: Process = Process.SMAW

    def geometry(self) -> GeometryInput:
        return GeometryInput(
            thickness=self.wall_thickness,
            profile=JointProfile.SINGLE_VEE,
            length=Circumference(self.outside_diameter),
            root_gap=self.root_gap,
            root_face=self.root_face,
            inside_angle=self.bevel_angle,
        )


def _layer_result(
    share: LayerShare,
    weld_length: float,
    bracket: SpeedBracket,
    settings: WeldSettings,
) -> LayerResult:
    bead = resolve_bead(share.process, settings)
    speed = resolve_speed(share.process, bracket, settings.travel_speeds, settings.fallback_speed)
    passes = 0
    if bead is not None:
        passes = count_passes(share.volume, bead.height, bead.width, weld_length)
    return LayerResult(
        process=share.process,
        volume=share.volume,
        percentage=share.percentage,
        bead=bead,
        passes=passes,
        speed=speed,
        arc_minutes=arc_time_minutes(passes, weld_length, speed),
        width_start=share.width_start,
        width_end=share.width_end,
    )


def _zone_result(
    zone: Zone,
    volume: float,
    shares: Sequence[LayerShare],
    weld_length: float,
    bracket: SpeedBracket,
    operator_factor: float,
    settings: WeldSettings,
) -> ZoneResult:
    layers = tuple(_layer_result(share, weld_length, bracket, settings) for share in shares)
    arc_minutes = sum(layer.arc_minutes for layer in layers)
    return ZoneResult(
        zone=zone,
        volume=volume,
        operator_factor=operator_factor,
        layers=layers,
        passes=sum(layer.passes for layer in layers),
        arc_minutes=arc_minutes,
        hours=labor_hours(arc_minutes, operator_factor),
    )


def _single_process(process: Process, volume: float) -> tuple[LayerShare, ...]:
    return (LayerShare(process=process, volume=volume, percentage=100.0),)


def _inside_shares(
    inside: InsideAssignment,
    resolved: ResolvedGeometry,
    settings: WeldSettings,
) -> tuple[LayerShare, ...]:
    volume = resolved.inside_volume
    if isinstance(inside, ZoneDistribution):
        return apportion_by_distribution(inside, volume)
    layers: Sequence[ProcessLayer] = inside
    return apportion_by_width(
        layers,
        volume,
        resolved.inside.bottom_width,
        resolved.inside.top_width,
        default_process=settings.default_process,
    )


def _assemble(
    resolved: ResolvedGeometry,
    settings: WeldSettings,
    zones: tuple[ZoneResult, ...],
) -> WeldResult:
    thickness = resolved.thickness
    factors = settings.operator_factors.row(factor_bracket(thickness))
    volumes = {zone.zone: zone.volume for zone in zones}
    passes = {zone.zone: zone.passes for zone in zones}
    arc_times = {zone.zone: zone.arc_minutes for zone in zones}
    hours = {zone.zone: zone.hours for zone in zones}
    return WeldResult(
        geometry=resolved,
        weld_length=resolved.weld_length,
        speed_bracket=speed_bracket(thickness),
        factor_bracket=factor_bracket(thickness),
        factors=factors,
        zones=zones,
        volumes=VolumeResult(
            zones=volumes,
            total=sum(volumes.values()),
            inside_depth=resolved.inside_depth,
            outside_depth=resolved.outside_depth,
        ),
        passes=PassResult(
            zones=passes,
            total=sum(passes.values()),
            layer_passes={
                zone.zone: tuple(layer.passes for layer in zone.layers) for zone in zones
            },
        ),
        arc_times=ArcTimeResult(zones=arc_times, total=sum(arc_times.values())),
        times=TimeResult(zones=hours, total=sum(hours.values())),
    )


def calculate_weld(request: WeldRequest, settings: WeldSettings) -> WeldResult:
    """Run the full pipeline for an inside/outside(/fillet) joint.

    The inside zone uses the inside operator factor; the outside and fillet
    zones share the outside factor.
    """

    resolved = resolve_geometry(request.geometry)
    length = resolved.weld_length
    bracket = speed_bracket(resolved.thickness)
    factors = settings.operator_factors.row(factor_bracket(resolved.thickness))

    zones = [
        _zone_result(
            Zone.INSIDE,
            resolved.inside_volume,
            _inside_shares(request.inside, resolved, settings),
            length,
            bracket,
            factors.inside,
            settings,
        ),
        _zone_result(
            Zone.OUTSIDE,
            resolved.outside_volume,
            _single_process(request.outside_process, resolved.outside_volume),
            length,
            bracket,
            factors.outside,
            settings,
        ),
    ]
    if request.fillet_process is not None:
        zones.append(
            _zone_result(
                Zone.FILLET,
                resolved.fillet_volume,
                _single_process(request.fillet_process, resolved.fillet_volume),
                length,
                bracket,
                factors.outside,
                settings,
            )
        )

    result = _assemble(resolved, settings, tuple(zones))
    logger.debug(
        "%s weld %.1f mm long: %d passes, %.2f h",
        resolved.profile.value,
        length,
        result.total_passes,
        result.total_hours,
    )
    return result


def calculate_pipe_butt(request: PipeButtRequest, settings: WeldSettings) -> WeldResult:
    """Run the pipeline for a pipe butt joint split into root, fill and cap.

    The root takes the gap-by-face rectangle, the cap takes one pass of the
    fill bead (the cap bead when the fill is skipped) and the fill takes what
    is left. A skipped cap takes nothing. Every zone uses the inside operator
    factor.
    """

    resolved = resolve_geometry(request.geometry())
    length = resolved.weld_length
    bracket = speed_bracket(resolved.thickness)
    factor = settings.operator_factors.row(factor_bracket(resolved.thickness)).inside

    total = resolved.inside_volume
    root_volume = min(total, resolved.inside.root_face_area * length)
    remaining = non_negative(total - root_volume)
    cap_bead = resolve_bead(request.fill_process, settings) or resolve_bead(
        request.cap_process, settings
    )
    cap_volume = 0.0
    if cap_bead is not None and not request.cap_process.is_skip:
        cap_volume = min(remaining, cap_bead.area * length)
    fill_volume = non_negative(remaining - cap_volume)

    zones = tuple(
        _zone_result(zone, volume, _single_process(process, volume), length, bracket, factor, settings)
        for zone, volume, process in (
            (Zone.ROOT, root_volume, request.root_process),
            (Zone.FILL, fill_volume, request.fill_process),
            (Zone.CAP, cap_volume, request.cap_process),
        )
    )

    result = _assemble(resolved, settings, zones)
    logger.debug(
        "Pipe butt OD %.1f x %.2f: %d passes, %.2f h",
        request.outside_diameter,
        request.wall_thickness,
        result.total_passes,
        result.total_hours,
    )
    return result
