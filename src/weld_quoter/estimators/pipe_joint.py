"""Single-vee pipe butt joints sized from the NPS/schedule library."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from weld_quoter.config import load_item_defaults
from weld_quoter.engine.pipeline import PipeButtRequest, calculate_pipe_butt
from weld_quoter.engine.results import WeldResult
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.estimators.base import ItemEstimate, quantity
from weld_quoter.pipe_data import PipeJointPreset, effective_preset, load_presets

WELD_TYPE = "pipe_joint"


@dataclass(slots=True)
class PipeJointItem:
    """One pipe butt joint; ``overrides`` replace preset values for this item only."""

    tag: str
    nps: str
    schedule: str
    quantity: int = 1
    overrides: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "PipeJointItem":
        overrides: dict[str, Any] = {}
        custom = raw.get("custom_settings")
        if isinstance(custom, Mapping) and raw.get("use_custom_settings", True):
            overrides = dict(custom)
        return cls(
            tag=str(raw.get("tag") or "Pipe joint"),
            nps=str(raw.get("nps") or '2"'),
            schedule=str(raw.get("schedule") or "SCH 40"),
            quantity=quantity(raw),
            overrides=overrides,
        )

    def preset(self, defaults: Mapping[str, Any] | None = None) -> PipeJointPreset:
        """Return the effective preset; raises ``UnknownPipeSizeError`` for unknown sizes."""

        if defaults is None:
            defaults = load_item_defaults(WELD_TYPE)
        presets = load_presets(defaults.get("presets") or ())
        return effective_preset(
            self.nps,
            self.schedule,
            presets,
            default=defaults.get("preset"),
            overrides=self.overrides,
        )


def butt_request(preset: PipeJointPreset) -> PipeButtRequest:
    return PipeButtRequest(
        outside_diameter=preset.od,
        wall_thickness=preset.wall_thickness,
        root_gap=preset.root_gap,
        root_face=preset.root_face,
        bevel_angle=preset.bevel_angle,
        root_process=preset.root_process,
        fill_process=preset.fill_process,
        cap_process=preset.cap_process,
    )


def activity_codes(preset: PipeJointPreset, result: WeldResult) -> dict[str, float]:
    return {
        "FPIPE": preset.fit_up_time,
        "PREHEAT": preset.preheat_time,
        "WPIPE": result.total_hours,
        "NDE": preset.nde_time,
    }


def estimate(
    item: PipeJointItem,
    settings: WeldSettings,
    defaults: Mapping[str, Any] | None = None,
) -> ItemEstimate:
    preset = item.preset(defaults)
    result = calculate_pipe_butt(butt_request(preset), settings)
    return ItemEstimate(
        weld_type=WELD_TYPE,
        tag=item.tag,
        quantity=item.quantity,
        result=result,
        activity_codes=activity_codes(preset, result),
    )


__all__ = ["PipeJointItem", "WELD_TYPE", "activity_codes", "butt_request", "estimate"]
