"""Groove geometry: depths, widths, areas and volumes of each weld zone.

A groove side is a trapezoid standing on the root gap: ``bottom_width`` is the
gap, ``top_width`` is the gap plus the bevel opening (once for bevel profiles,
twice for vee profiles) and the height is the bevelled depth. The unbevelled
root face adds a rectangle ``root_gap * root_face`` that is credited whole to
single-sided joints and half to each side of double-sided joints.

Negative figures produced by oversized root faces are clamped to zero; nothing
here raises for degenerate input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from weld_quoter.domain_models.values import non_negative
from weld_quoter.engine.types import Circumference, GeometryInput, JointProfile

# Seal pass on the reverse of a single-sided seam after back-gouging.
BACK_WELD_MAX_DEPTH = 5.0
BACK_WELD_DEPTH_OVER_FACE = 2.0
BACK_WELD_EXTRA_WIDTH = 6.0

__all__ = [
    "GrooveSide",
    "ResolvedGeometry",
    "bevel_width",
    "fillet_area",
    "fillet_leg",
    "resolve_geometry",
    "resolve_groove_side",
    "trapezoid_area",
    "validate_geometry",
]


def bevel_width(depth: float, angle_deg: float) -> float:
    """Horizontal opening of one bevelled wall of ``depth`` at ``angle_deg``."""

    return depth * math.tan(math.radians(angle_deg))


def trapezoid_area(top_width: float, bottom_width: float, height: float) -> float:
    return (top_width + bottom_width) / 2.0 * height


def fillet_leg(throat: float) -> float:
    """Equal-leg fillet leg length from its throat."""

    return throat * math.sqrt(2.0)


def fillet_area(leg: float) -> float:
    return 0.5 * leg * leg


@dataclass(frozen=True, slots=True)
class GrooveSide:
    """Cross-section figures for one side of a groove."""

    depth: float
    bevel_depth: float
    bevel_width: float
    bottom_width: float
    top_width: float
    root_face_height: float
    bevel_area: float
    root_face_area: float

    @property
    def area(self) -> float:
        return self.bevel_area + self.root_face_area

    @property
    def has_bevel(self) -> bool:
        return self.top_width > self.bottom_width


_EMPTY_SIDE = GrooveSide(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class ResolvedGeometry:
    """Every intermediate figure of a joint, reused for diagrams and reports.

    ``inside_depth``/``outside_depth`` are the zone depths measured from each
    surface (the full thickness for single-sided joints); the bevelled depths
    used for areas live on the individual :class:`GrooveSide` records.
    """

    profile: JointProfile
    thickness: float
    weld_length: float
    inside: GrooveSide
    outside: GrooveSide
    fillet_leg: float
    fillet_area: float

    @property
    def inside_depth(self) -> float:
        return self.inside.depth

    @property
    def outside_depth(self) -> float:
        return self.outside.depth

    @property
    def inside_volume(self) -> float:
        return self.inside.area * self.weld_length

    @property
    def outside_volume(self) -> float:
        return self.outside.area * self.weld_length

    @property
    def fillet_volume(self) -> float:
        return self.fillet_area * self.weld_length

    @property
    def total_volume(self) -> float:
        return self.inside_volume + self.outside_volume + self.fillet_volume


def resolve_groove_side(
    depth: float,
    bevel_depth: float,
    angle_deg: float,
    root_gap: float,
    root_face_height: float,
    profile: JointProfile,
) -> GrooveSide:
    """Return the figures of one groove side from its bevelled depth."""

    depth = non_negative(depth)
    bevel_depth = non_negative(bevel_depth)
    root_gap = non_negative(root_gap)
    root_face_height = non_negative(root_face_height)

    opening = non_negative(bevel_width(bevel_depth, angle_deg))
    top_width = root_gap + profile.walls_opened * opening
    return GrooveSide(
        depth=depth,
        bevel_depth=bevel_depth,
        bevel_width=opening,
        bottom_width=root_gap,
        top_width=top_width,
        root_face_height=root_face_height,
        bevel_area=trapezoid_area(top_width, root_gap, bevel_depth),
        root_face_area=root_gap * root_face_height,
    )


def _back_weld_side(root_gap: float, root_face: float) -> GrooveSide:
    depth = min(BACK_WELD_MAX_DEPTH, root_face + BACK_WELD_DEPTH_OVER_FACE)
    width = root_gap + BACK_WELD_EXTRA_WIDTH
    return GrooveSide(
        depth=depth,
        bevel_depth=depth,
        bevel_width=0.0,
        bottom_width=width,
        top_width=width,
        root_face_height=0.0,
        bevel_area=0.5 * width * depth,
        root_face_area=0.0,
    )


def resolve_geometry(geometry: GeometryInput) -> ResolvedGeometry:
    """Resolve depths, widths and areas for every zone of ``geometry``."""

    profile = geometry.profile
    thickness = non_negative(geometry.thickness)
    root_gap = non_negative(geometry.root_gap)
    root_face = non_negative(geometry.root_face)

    if profile.double_sided:
        split = geometry.split_ratio / 100.0
        inside_depth = non_negative(thickness * split)
        outside_depth = non_negative(thickness * (1.0 - split))
        half_face = root_face / 2.0
        inside = resolve_groove_side(
            inside_depth,
            inside_depth - half_face,
            geometry.inside_angle,
            root_gap,
            min(half_face, inside_depth),
            profile,
        )
        outside = resolve_groove_side(
            outside_depth,
            outside_depth - half_face,
            geometry.outside_angle,
            root_gap,
            min(half_face, outside_depth),
            profile,
        )
    else:
        inside = resolve_groove_side(
            thickness,
            thickness - root_face,
            geometry.inside_angle,
            root_gap,
            min(root_face, thickness),
            profile,
        )
        outside = _EMPTY_SIDE
        if geometry.back_weld and thickness > 0.0:
            outside = _back_weld_side(root_gap, root_face)

    leg = fillet_leg(non_negative(geometry.fillet_throat))
    return ResolvedGeometry(
        profile=profile,
        thickness=thickness,
        weld_length=non_negative(geometry.weld_length),
        inside=inside,
        outside=outside,
        fillet_leg=leg,
        fillet_area=fillet_area(leg),
    )


def validate_geometry(geometry: GeometryInput) -> list[str]:
    """Return human readable problems with ``geometry``; empty when usable.

    The resolver clamps everything listed here, so callers decide whether a
    problem is fatal.
    """

    problems: list[str] = []
    if geometry.thickness < 0:
        problems.append(f"thickness must be >= 0 (got {geometry.thickness:g})")
    if geometry.root_gap < 0:
        problems.append(f"root gap must be >= 0 (got {geometry.root_gap:g})")
    if geometry.root_face < 0:
        problems.append(f"root face must be >= 0 (got {geometry.root_face:g})")
    if geometry.fillet_throat < 0:
        problems.append(f"fillet throat must be >= 0 (got {geometry.fillet_throat:g})")

    if isinstance(geometry.length, Circumference):
        if geometry.length.diameter < 0:
            problems.append(f"diameter must be >= 0 (got {geometry.length.diameter:g})")
    elif geometry.length.length < 0:
        problems.append(f"weld length must be >= 0 (got {geometry.length.length:g})")

    angles = [("inside", geometry.inside_angle)]
    if geometry.profile.double_sided:
        angles.append(("outside", geometry.outside_angle))
        if not 0 <= geometry.split_ratio <= 100:
            problems.append(f"split ratio must be within 0-100% (got {geometry.split_ratio:g})")
    for side, angle in angles:
        if not 0 <= angle < 90:
            problems.append(f"{side} bevel angle must be within 0-90 degrees (got {angle:g})")

    if geometry.thickness > 0 and geometry.root_face >= geometry.thickness:
        problems.append("root face is not smaller than the thickness; groove depth is zero")
    return problems
