"""Nozzle-to-shell penetration welds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from weld_quoter.config import load_item_defaults
from weld_quoter.engine.pipeline import WeldRequest, calculate_weld
from weld_quoter.engine.results import WeldResult
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.engine.types import (
    Circumference,
    GeometryInput,
    JointProfile,
    Process,
    ProcessLayer,
    Zone,
)
from weld_quoter.estimators.base import (
    ItemEstimate,
    activity_times,
    number,
    parse_layers,
    process_value,
    quantity,
    section,
)

WELD_TYPE = "nozzle"


@dataclass(slots=True)
class NozzleItem:
    tag: str
    nozzle_od: float
    shell_thickness: float
    joint_type: JointProfile = JointProfile.DOUBLE_BEVEL
    root_gap: float = 3.0
    root_face: float = 2.0
    fillet_throat: float = 6.0
    inside_bevel_angle: float = 35.0
    outside_bevel_angle: float = 15.0
    split_ratio: float = 70.0
    single_bevel_angle: float = 35.0
    inside_layers: tuple[ProcessLayer, ...] = ()
    outside_process: Process = Process.FCAW
    fillet_process: Process = Process.FCAW
    quantity: int = 1
    activity_times: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], defaults: Mapping[str, Any] | None = None
    ) -> "NozzleItem":
        if defaults is None:
            defaults = load_item_defaults(WELD_TYPE)
        geometry = section(raw, defaults, "geometry")
        layers = raw.get("inside_layers")
        if layers is None:
            layers = defaults.get("inside_layers")
        return cls(
            tag=str(raw.get("tag") or "Nozzle"),
            nozzle_od=number(geometry, "nozzle_od"),
            shell_thickness=number(geometry, "shell_thickness"),
            joint_type=JointProfile.parse(geometry.get("joint_type") or "double-bevel"),
            root_gap=number(geometry, "root_gap"),
            root_face=number(geometry, "root_face"),
            fillet_throat=number(geometry, "fillet_throat"),
            inside_bevel_angle=number(geometry, "inside_bevel_angle"),
            outside_bevel_angle=number(geometry, "outside_bevel_angle"),
            split_ratio=number(geometry, "split_ratio", 50.0),
            single_bevel_angle=number(geometry, "single_bevel_angle"),
            inside_layers=parse_layers(layers),
            outside_process=process_value(
                raw.get("outside_process", defaults.get("outside_process")), Process.FCAW
            ),
            fillet_process=process_value(
                raw.get("fillet_process", defaults.get("fillet_process")), Process.FCAW
            ),
            quantity=quantity(raw),
            activity_times=activity_times(raw, defaults),
        )

    def geometry(self) -> GeometryInput:
        double = self.joint_type.double_sided
        return GeometryInput(
            thickness=self.shell_thickness,
            profile=self.joint_type,
            length=Circumference(self.nozzle_od),
            root_gap=self.root_gap,
            root_face=self.root_face,
            inside_angle=self.inside_bevel_angle if double else self.single_bevel_angle,
            outside_angle=self.outside_bevel_angle,
            split_ratio=self.split_ratio,
            fillet_throat=self.fillet_throat,
        )

    def request(self) -> WeldRequest:
        return WeldRequest(
            geometry=self.geometry(),
            inside=self.inside_layers,
            outside_process=self.outside_process,
            fillet_process=self.fillet_process,
        )


def activity_codes(times: Mapping[str, float], result: WeldResult) -> dict[str, float]:
    """Fold activity times and weld hours into nozzle activity codes."""

    def t(key: str) -> float:
        return float(times.get(key, 0.0))

    return {
        "CUTNOZZ": t("mark_position") + t("cut_and_bevel"),
        "FNOZZ": t("fit_nozzle"),
        "PREHEAT": t("preheat_1") + t("preheat_2"),
        "WNOZZ": result.times.get(Zone.INSIDE)
        + result.times.get(Zone.OUTSIDE)
        + result.times.get(Zone.FILLET),
        "BACGRI": t("back_gouge"),
        "MATCUT": t("grind_bevel_clean") + t("grind_1st_side") + t("grind_2nd_side"),
        "NDE": t("nde"),
    }


def estimate(item: NozzleItem, settings: WeldSettings) -> ItemEstimate:
    result = calculate_weld(item.request(), settings)
    return ItemEstimate(
        weld_type=WELD_TYPE,
        tag=item.tag,
        quantity=item.quantity,
        result=result,
        activity_codes=activity_codes(item.activity_times, result),
    )


__all__ = ["NozzleItem", "WELD_TYPE", "activity_codes", "estimate"]
