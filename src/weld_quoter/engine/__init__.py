"""Pure weld volume, pass and labour calculations."""

from __future__ import annotations

from weld_quoter.engine.caching import fingerprint, memoize
from weld_quoter.engine.geometry import (
    GrooveSide,
    ResolvedGeometry,
    bevel_width,
    resolve_geometry,
    validate_geometry,
)
from weld_quoter.engine.layers import (
    LayerShare,
    apportion_by_distribution,
    apportion_by_width,
    validate_distribution,
    validate_layers,
)
from weld_quoter.engine.passes import count_passes
from weld_quoter.engine.pipeline import (
    PipeButtRequest,
    WeldRequest,
    calculate_pipe_butt,
    calculate_weld,
)
from weld_quoter.engine.results import (
    ArcTimeResult,
    LayerResult,
    PassResult,
    TimeResult,
    VolumeResult,
    WeldResult,
    ZoneResult,
)
from weld_quoter.engine.settings import (
    FactorBracket,
    OperatorFactors,
    OperatorFactorTable,
    SpeedBracket,
    TravelSpeedTable,
    WeldSettings,
)
from weld_quoter.engine.speeds import factor_bracket, speed_bracket
from weld_quoter.engine.timing import arc_time_minutes, labor_hours
from weld_quoter.engine.types import (
    BeadSize,
    Circumference,
    GeometryInput,
    JointProfile,
    Linear,
    Process,
    ProcessLayer,
    Zone,
    ZoneDistribution,
    circumference,
)

__all__ = [
    "ArcTimeResult",
    "BeadSize",
    "Circumference",
    "FactorBracket",
    "GeometryInput",
    "GrooveSide",
    "JointProfile",
    "LayerResult",
    "LayerShare",
    "Linear",
    "OperatorFactorTable",
    "OperatorFactors",
    "PassResult",
    "PipeButtRequest",
    "Process",
    "ProcessLayer",
    "ResolvedGeometry",
    "SpeedBracket",
    "TimeResult",
    "TravelSpeedTable",
    "VolumeResult",
    "WeldRequest",
    "WeldResult",
    "WeldSettings",
    "Zone",
    "ZoneDistribution",
    "ZoneResult",
    "apportion_by_distribution",
    "apportion_by_width",
    "arc_time_minutes",
    "bevel_width",
    "calculate_pipe_butt",
    "calculate_weld",
    "circumference",
    "count_passes",
    "factor_bracket",
    "fingerprint",
    "labor_hours",
    "memoize",
    "resolve_geometry",
    "speed_bracket",
    "validate_distribution",
    "validate_geometry",
    "validate_layers",
]
