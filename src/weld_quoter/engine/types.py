"""Input types shared by every stage of the weld calculation engine.

All lengths are millimetres, angles are degrees, travel speeds are mm/min and
labour is reported in hours. Every record here is immutable so one request can
be handed to the pipeline any number of times with identical results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Process(str, Enum):
    """Welding process identifiers, plus the ``Skip`` sentinel."""

    GTAW = "GTAW"
    SMAW = "SMAW"
    FCAW = "FCAW"
    GMAW = "GMAW"
    SAW = "SAW"
    SKIP = "Skip"

    @property
    def is_skip(self) -> bool:
        return self is Process.SKIP

    @classmethod
    def parse(cls, value: "Process | str") -> "Process":
        """Return the process for ``value`` accepting any letter case."""

        if isinstance(value, Process):
            return value
        text = str(value or "").strip()
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        raise ValueError(f"Unknown welding process: {value!r}")


class Zone(str, Enum):
    """Named regions of a joint that are welded and reported separately."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    FILLET = "fillet"
    ROOT = "root"
    FILL = "fill"
    CAP = "cap"


class JointProfile(str, Enum):
    """Groove shape of a joint.

    Bevel profiles open from one wall only (nozzle penetrations); vee profiles
    open from both walls about the centreline (plate seams, pipe butts).
    """

    SINGLE_BEVEL = "single-bevel"
    DOUBLE_BEVEL = "double-bevel"
    SINGLE_VEE = "single-vee"
    DOUBLE_VEE = "double-vee"

    @property
    def double_sided(self) -> bool:
        return self in (JointProfile.DOUBLE_BEVEL, JointProfile.DOUBLE_VEE)

    @property
    def symmetric(self) -> bool:
        return self in (JointProfile.SINGLE_VEE, JointProfile.DOUBLE_VEE)

    @property
    def walls_opened(self) -> int:
        """Number of groove walls that are bevelled."""

        return 2 if self.symmetric else 1

    @classmethod
    def parse(cls, value: "JointProfile | str") -> "JointProfile":
        """Accept canonical names and the legacy ``doublebevel`` style spellings."""

        if isinstance(value, JointProfile):
            return value
        key = str(value or "").strip().lower().replace("_", "").replace("-", "").replace(" ", "")
        for member in cls:
            if member.value.replace("-", "") == key:
                return member
        raise ValueError(f"Unknown joint profile: {value!r}")


@dataclass(frozen=True, slots=True)
class Circumference:
    """Weld runs around a bore or shell of the given diameter."""

    diameter: float

    @property
    def length(self) -> float:
        return math.pi * self.diameter


@dataclass(frozen=True, slots=True)
class Linear:
    """Weld runs along a straight seam of explicit length."""

    length: float


WeldLength = Union[Circumference, Linear]


def circumference(diameter: float) -> float:
    """Return ``pi * diameter``."""

    return math.pi * diameter


@dataclass(frozen=True, slots=True)
class GeometryInput:
    """Joint parameters for one weld item.

    ``inside_angle`` is the shared bevel angle of single-sided joints.
    ``split_ratio`` is the percentage of thickness welded from the inside and
    only applies to double-sided profiles. ``back_weld`` adds a seal pass on
    the reverse of a single-sided joint after back-gouging.
    """

    thickness: float
    profile: JointProfile
    length: WeldLength
    root_gap: float = 0.0
    root_face: float = 0.0
    inside_angle: float = 0.0
    outside_angle: float = 0.0
    split_ratio: float = 50.0
    fillet_throat: float = 0.0
    back_weld: bool = False

    @property
    def weld_length(self) -> float:
        return self.length.length


@dataclass(frozen=True, slots=True)
class ProcessLayer:
    """Weld with ``process`` once the groove is at least ``min_width`` wide."""

    process: Process
    min_width: float


@dataclass(frozen=True, slots=True)
class BeadSize:
    """Cross-section deposited by a single pass."""

    height: float
    width: float

    @property
    def area(self) -> float:
        return self.height * self.width


@dataclass(frozen=True, slots=True)
class ZoneDistribution:
    """Legacy fixed-percentage split of the inside zone into root/fill/cap."""

    zone1_pct: float
    zone2_pct: float
    zone3_pct: float
    zone1_process: Process = Process.GTAW
    zone2_process: Process = Process.SMAW
    zone3_process: Process = Process.SMAW

    @property
    def total_pct(self) -> float:
        return self.zone1_pct + self.zone2_pct + self.zone3_pct

    def pairs(self) -> tuple[tuple[Process, float], ...]:
        return (
            (self.zone1_process, self.zone1_pct),
            (self.zone2_process, self.zone2_pct),
            (self.zone3_process, self.zone3_pct),
        )


InsideAssignment = Union[tuple[ProcessLayer, ...], ZoneDistribution]


__all__ = [
    "BeadSize",
    "Circumference",
    "GeometryInput",
    "InsideAssignment",
    "JointProfile",
    "Linear",
    "Process",
    "ProcessLayer",
    "WeldLength",
    "Zone",
    "ZoneDistribution",
    "circumference",
]
