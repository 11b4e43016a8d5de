"""Weld-type estimators and the job-entry dispatcher."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from weld_quoter.config import get_logger, load_item_defaults
from weld_quoter.engine.settings import WeldSettings

from . import circ_seam, long_seam, nozzle, pipe_joint
from .base import ItemEstimate, UnknownWeldTypeError

logger = get_logger("estimators")

_ALIASES = {
    "nozzles": nozzle.WELD_TYPE,
    "long_weld": long_seam.WELD_TYPE,
    "longweld": long_seam.WELD_TYPE,
    "longwelds": long_seam.WELD_TYPE,
    "circ_weld": circ_seam.WELD_TYPE,
    "circweld": circ_seam.WELD_TYPE,
    "circwelds": circ_seam.WELD_TYPE,
    "pipe": pipe_joint.WELD_TYPE,
    "pipejoint": pipe_joint.WELD_TYPE,
    "pipejoints": pipe_joint.WELD_TYPE,
}


def _estimate_nozzle(raw: Mapping[str, Any], settings: WeldSettings, defaults: Mapping[str, Any]) -> ItemEstimate:
    return nozzle.estimate(nozzle.NozzleItem.from_mapping(raw, defaults), settings)


def _estimate_long_seam(raw: Mapping[str, Any], settings: WeldSettings, defaults: Mapping[str, Any]) -> ItemEstimate:
    return long_seam.estimate(long_seam.LongSeamItem.from_mapping(raw, defaults), settings)


def _estimate_circ_seam(raw: Mapping[str, Any], settings: WeldSettings, defaults: Mapping[str, Any]) -> ItemEstimate:
    return circ_seam.estimate(circ_seam.CircSeamItem.from_mapping(raw, defaults), settings)


def _estimate_pipe_joint(raw: Mapping[str, Any], settings: WeldSettings, defaults: Mapping[str, Any]) -> ItemEstimate:
    return pipe_joint.estimate(pipe_joint.PipeJointItem.from_mapping(raw), settings, defaults)


ESTIMATORS: dict[str, Callable[[Mapping[str, Any], WeldSettings, Mapping[str, Any]], ItemEstimate]] = {
    nozzle.WELD_TYPE: _estimate_nozzle,
    long_seam.WELD_TYPE: _estimate_long_seam,
    circ_seam.WELD_TYPE: _estimate_circ_seam,
    pipe_joint.WELD_TYPE: _estimate_pipe_joint,
}


def normalize_weld_type(value: Any) -> str:
    """Return the canonical weld type for ``value`` or raise ``UnknownWeldTypeError``."""

    key = str(value or "").strip().lower().replace("-", "_").replace(" ", "_")
    key = _ALIASES.get(key, key)
    if key not in ESTIMATORS:
        raise UnknownWeldTypeError(f"Unknown weld type: {value!r}")
    return key


def estimate_item(
    raw: Mapping[str, Any],
    settings: WeldSettings,
    defaults: Mapping[str, Any] | None = None,
) -> ItemEstimate:
    """Estimate one job entry, dispatching on its ``type`` key."""

    weld_type = normalize_weld_type(raw.get("type"))
    if defaults is None:
        defaults = load_item_defaults(weld_type)
    estimate = ESTIMATORS[weld_type](raw, settings, defaults)
    logger.debug("%s %s: %.2f h per item", weld_type, estimate.tag, estimate.per_item_hours)
    return estimate


def estimate_items(items: Iterable[Mapping[str, Any]], settings: WeldSettings) -> list[ItemEstimate]:
    return [estimate_item(raw, settings) for raw in items]


__all__ = [
    "ESTIMATORS",
    "ItemEstimate",
    "UnknownWeldTypeError",
    "circ_seam",
    "estimate_item",
    "estimate_items",
    "long_seam",
    "normalize_weld_type",
    "nozzle",
    "pipe_joint",
]
