"""Fields and parsing shared by long and circumferential shell seams."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from weld_quoter.domain_models.values import to_bool
from weld_quoter.engine.pipeline import WeldRequest
from weld_quoter.engine.results import WeldResult
from weld_quoter.engine.types import (
    GeometryInput,
    JointProfile,
    Process,
    ProcessLayer,
    WeldLength,
    Zone,
)
from weld_quoter.estimators.base import (
    activity_times,
    is_sub_arc,
    number,
    parse_layers,
    process_value,
    quantity,
    section,
)


@dataclass(slots=True)
class SeamItem(ABC):
    """Plate seam welded from the inside, then back-milled and welded outside."""

    tag: str
    shell_thickness: float
    joint_type: JointProfile = JointProfile.DOUBLE_VEE
    inside_bevel_angle: float = 30.0
    outside_bevel_angle: float = 30.0
    root_gap: float = 3.0
    root_face: float = 2.0
    split_ratio: float = 60.0
    back_weld: bool = False
    inside_layers: tuple[ProcessLayer, ...] = ()
    outside_process: Process = Process.SAW
    quantity: int = 1
    activity_times: dict[str, float] = field(default_factory=dict)

    @abstractmethod
    def weld_length(self) -> WeldLength:
        """Return the length source of the seam."""

    def geometry(self) -> GeometryInput:
        return GeometryInput(
            thickness=self.shell_thickness,
            profile=self.joint_type,
            length=self.weld_length(),
            root_gap=self.root_gap,
            root_face=self.root_face,
            inside_angle=self.inside_bevel_angle,
            outside_angle=self.outside_bevel_angle,
            split_ratio=self.split_ratio,
            back_weld=self.back_weld,
        )

    def request(self) -> WeldRequest:
        return WeldRequest(
            geometry=self.geometry(),
            inside=self.inside_layers,
            outside_process=self.outside_process,
        )

    def second_side_is_sub_arc(self) -> bool:
        return is_sub_arc(self.outside_process, self.shell_thickness)


def seam_fields(
    raw: Mapping[str, Any], defaults: Mapping[str, Any], default_tag: str
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the common ``SeamItem`` keyword arguments and the merged geometry."""

    geometry = section(raw, defaults, "geometry")
    layers = raw.get("inside_layers")
    if layers is None:
        layers = defaults.get("inside_layers")
    fields = {
        "tag": str(raw.get("tag") or default_tag),
        "shell_thickness": number(geometry, "shell_thickness"),
        "joint_type": JointProfile.parse(geometry.get("joint_type") or "double-vee"),
        "inside_bevel_angle": number(geometry, "inside_bevel_angle"),
        "outside_bevel_angle": number(geometry, "outside_bevel_angle"),
        "root_gap": number(geometry, "root_gap"),
        "root_face": number(geometry, "root_face"),
        "split_ratio": number(geometry, "split_ratio", 50.0),
        "back_weld": to_bool(geometry.get("back_weld")),
        "inside_layers": parse_layers(layers),
        "outside_process": process_value(
            raw.get("outside_process", defaults.get("outside_process")), Process.SAW
        ),
        "quantity": quantity(raw),
        "activity_times": activity_times(raw, defaults),
    }
    return fields, geometry


def second_side_hours(item: SeamItem, result: WeldResult) -> tuple[float, float]:
    """Return (sub-arc, manual) hours for the outside zone."""

    hours = result.times.get(Zone.OUTSIDE)
    if item.second_side_is_sub_arc():
        return hours, 0.0
    return 0.0, hours


__all__ = ["SeamItem", "second_side_hours", "seam_fields"]
