"""Shared dataclasses and helpers for the weld-type estimators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from weld_quoter.domain_models.values import safe_float, to_float, to_int
from weld_quoter.engine.results import WeldResult
from weld_quoter.engine.types import Process, ProcessLayer

# Thickness from which a mechanised 2nd side is assumed for FCAW/GMAW.
SUB_ARC_MIN_THICKNESS = 12.0


class UnknownWeldTypeError(KeyError):
    """Raised when a job entry names a weld type with no estimator."""


@dataclass(slots=True)
class ItemEstimate:
    """Estimated labour for one job line.

    ``activity_codes`` holds hours per single item; ``total_hours`` scales
    them by ``quantity``.
    """

    weld_type: str
    tag: str
    quantity: int
    result: WeldResult
    activity_codes: dict[str, float] = field(default_factory=dict)

    @property
    def per_item_hours(self) -> float:
        return sum(self.activity_codes.values())

    @property
    def total_hours(self) -> float:
        return self.per_item_hours * self.quantity

    @property
    def weld_hours(self) -> float:
        return self.result.total_hours


def is_sub_arc(process: Process, thickness: float) -> bool:
    """Return ``True`` when the 2nd side counts as submerged-arc work."""

    if process is Process.SAW:
        return True
    return thickness >= SUB_ARC_MIN_THICKNESS and process not in (Process.GTAW, Process.SMAW)


def section(raw: Mapping[str, Any], defaults: Mapping[str, Any], name: str) -> dict[str, Any]:
    """Return ``defaults[name]`` overlaid with ``raw[name]``."""

    merged = dict(defaults.get(name) or {})
    merged.update(dict(raw.get(name) or {}))
    return merged


def number(values: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    return safe_float(values.get(key), default)


def quantity(raw: Mapping[str, Any]) -> int:
    value = to_int(raw.get("quantity"))
    if value is None or value < 0:
        return 1
    return value


def process_value(value: Any, default: Process) -> Process:
    if value is None or value == "":
        return default
    return Process.parse(value)


def parse_layers(raw_layers: Iterable[Any] | None) -> tuple[ProcessLayer, ...]:
    """Build process layers from ``{"process": ..., "min_width": ...}`` entries."""

    layers: list[ProcessLayer] = []
    for entry in raw_layers or ():
        if isinstance(entry, ProcessLayer):
            layers.append(entry)
            continue
        if not isinstance(entry, Mapping):
            continue
        width = to_float(entry.get("min_width", entry.get("minWidth")))
        layers.append(
            ProcessLayer(
                process=Process.parse(entry.get("process")),
                min_width=0.0 if width is None else width,
            )
        )
    return tuple(layers)


def activity_times(raw: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, float]:
    """Return manually entered activity hours keyed by activity name."""

    merged = section(raw, defaults, "activity_times")
    return {key: safe_float(value) for key, value in merged.items()}


__all__ = [
    "ItemEstimate",
    "SUB_ARC_MIN_THICKNESS",
    "UnknownWeldTypeError",
    "activity_times",
    "is_sub_arc",
    "number",
    "parse_layers",
    "process_value",
    "quantity",
    "section",
]
