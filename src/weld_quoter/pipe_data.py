"""Standard pipe dimensions and pipe-joint presets.

Outside diameters and wall thicknesses follow ASME B36.10M (carbon steel) and
B36.19M (stainless) in millimetres. NPS labels are accepted with or without a
trailing inch mark (``2`` and ``2"`` name the same size) and are returned with
it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Iterable, Mapping

import pandas as pd

from weld_quoter.config import RESOURCE_DIR
from weld_quoter.domain_models.values import to_float
from weld_quoter.engine.types import Process

logger = logging.getLogger(__name__)

PIPE_TABLE_CSV = RESOURCE_DIR / "pipe_schedules.csv"
INCH_MARK = '"'
KEY_SEPARATOR = "|"

__all__ = [
    "PipeDimensions",
    "PipeJointPreset",
    "UnknownPipeSizeError",
    "all_nps_sizes",
    "effective_preset",
    "load_presets",
    "normalize_nps",
    "normalize_schedule",
    "parse_pipe_size_key",
    "pipe_dimensions",
    "pipe_size_key",
    "pipe_table",
    "require_pipe_dimensions",
    "schedules_for",
]


class UnknownPipeSizeError(KeyError):
    """Raised when an NPS/schedule combination is not in the pipe library."""


@dataclass(frozen=True, slots=True)
class PipeDimensions:
    od: float
    wall_thickness: float


@dataclass(frozen=True, slots=True)
class PipeJointPreset:
    """Weld settings for one pipe size and schedule.

    ``od`` and ``wall_thickness`` always come from the pipe library; the rest
    is shop configuration.
    """

    nps: str
    schedule: str
    od: float
    wall_thickness: float
    root_gap: float = 3.0
    root_face: float = 1.5
    bevel_angle: float = 30.0
    root_process: Process = Process.GTAW
    fill_process: Process = Process.SMAW
    cap_process: Process = Process.SMAW
    fit_up_time: float = 0.5
    preheat_time: float = 0.25
    nde_time: float = 0.5
    enabled: bool = True


_PRESET_NUMBER_FIELDS = (
    "root_gap",
    "root_face",
    "bevel_angle",
    "fit_up_time",
    "preheat_time",
    "nde_time",
)
_PRESET_PROCESS_FIELDS = ("root_process", "fill_process", "cap_process")


def normalize_nps(nps: Any) -> str:
    """Return ``nps`` without whitespace or a trailing inch mark."""

    text = str(nps or "").strip()
    return text.rstrip(INCH_MARK).strip()


def normalize_schedule(schedule: Any) -> str:
    """Return a canonical schedule label, e.g. ``sch40`` -> ``SCH 40``."""

    text = re.sub(r"\s+", " ", str(schedule or "").strip().upper())
    match = re.fullmatch(r"(?:SCH\s?)?(\d+S?)", text)
    if match:
        return f"SCH {match.group(1)}"
    return text


def _label(nps: str) -> str:
    return f"{nps}{INCH_MARK}"


@lru_cache(maxsize=1)
def _load_pipe_table() -> pd.DataFrame:
    df = pd.read_csv(PIPE_TABLE_CSV, dtype={"nps": str, "schedule": str})
    df["nps"] = df["nps"].map(normalize_nps)
    df["schedule"] = df["schedule"].map(normalize_schedule)
    logger.debug("Loaded %d pipe schedule rows from %s", len(df), PIPE_TABLE_CSV.name)
    return df


def pipe_table() -> pd.DataFrame:
    """Return a copy of the pipe library (columns nps, od_mm, schedule, wall_mm)."""

    return _load_pipe_table().copy()


def all_nps_sizes() -> list[str]:
    """Return every nominal size in library order, with inch marks."""

    sizes = _load_pipe_table()["nps"].drop_duplicates()
    return [_label(nps) for nps in sizes]


def schedules_for(nps: Any) -> list[str]:
    df = _load_pipe_table()
    rows = df[df["nps"] == normalize_nps(nps)]
    return rows["schedule"].tolist()


def pipe_dimensions(nps: Any, schedule: Any) -> PipeDimensions | None:
    """Return OD and wall thickness for ``nps``/``schedule``; ``None`` if unknown."""

    df = _load_pipe_table()
    rows = df[(df["nps"] == normalize_nps(nps)) & (df["schedule"] == normalize_schedule(schedule))]
    if rows.empty:
        return None
    row = rows.iloc[0]
    return PipeDimensions(od=float(row["od_mm"]), wall_thickness=float(row["wall_mm"]))


def require_pipe_dimensions(nps: Any, schedule: Any) -> PipeDimensions:
    dims = pipe_dimensions(nps, schedule)
    if dims is None:
        raise UnknownPipeSizeError(f"No pipe dimensions for NPS {nps} {schedule}")
    return dims


def pipe_size_key(nps: Any, schedule: Any) -> str:
    return f"{_label(normalize_nps(nps))}{KEY_SEPARATOR}{normalize_schedule(schedule)}"


def parse_pipe_size_key(key: str) -> tuple[str, str] | None:
    """Split a key built by :func:`pipe_size_key` back into (nps, schedule)."""

    parts = str(key).split(KEY_SEPARATOR)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def _preset_overrides(raw: Mapping[str, Any]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in _PRESET_NUMBER_FIELDS:
        value = to_float(raw.get(name))
        if value is not None:
            overrides[name] = value
    for name in _PRESET_PROCESS_FIELDS:
        value = raw.get(name)
        if value:
            overrides[name] = Process.parse(value)
    if "enabled" in raw:
        overrides["enabled"] = bool(raw["enabled"])
    return overrides


def load_presets(raw_presets: Iterable[Mapping[str, Any]]) -> dict[str, PipeJointPreset]:
    """Return presets keyed by :func:`pipe_size_key`.

    Entries naming a size that is not in the library are logged and dropped.
    """

    presets: dict[str, PipeJointPreset] = {}
    for raw in raw_presets:
        nps = normalize_nps(raw.get("nps"))
        schedule = normalize_schedule(raw.get("schedule"))
        dims = pipe_dimensions(nps, schedule)
        if dims is None:
            logger.warning("Ignoring preset for unknown pipe size %s %s", _label(nps), schedule)
            continue
        preset = PipeJointPreset(
            nps=_label(nps),
            schedule=schedule,
            od=dims.od,
            wall_thickness=dims.wall_thickness,
            **_preset_overrides(raw),
        )
        presets[pipe_size_key(nps, schedule)] = preset
    return presets


def effective_preset(
    nps: Any,
    schedule: Any,
    presets: Mapping[str, PipeJointPreset],
    *,
    default: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> PipeJointPreset:
    """Return the settings that apply to one pipe joint.

    Uses the configured preset for the size when there is one, otherwise
    ``default`` over the built-in values. ``overrides`` are applied last;
    OD and wall thickness always come from the library.
    """

    dims = require_pipe_dimensions(nps, schedule)
    key = pipe_size_key(nps, schedule)
    preset = presets.get(key)
    if preset is None:
        label, canonical_schedule = parse_pipe_size_key(key) or (_label(normalize_nps(nps)), schedule)
        preset = PipeJointPreset(
            nps=label,
            schedule=canonical_schedule,
            od=dims.od,
            wall_thickness=dims.wall_thickness,
            **_preset_overrides(default or {}),
        )
    if overrides:
        preset = replace(preset, **_preset_overrides(overrides))
    return replace(preset, od=dims.od, wall_thickness=dims.wall_thickness)
