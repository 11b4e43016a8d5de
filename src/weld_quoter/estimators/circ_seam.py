"""Circumferential seams joining shell courses and heads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from weld_quoter.config import load_item_defaults
from weld_quoter.engine.pipeline import calculate_weld
from weld_quoter.engine.results import WeldResult
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.engine.types import Circumference, WeldLength, Zone
from weld_quoter.estimators.base import ItemEstimate, number
from weld_quoter.estimators.seam import SeamItem, seam_fields, second_side_hours

WELD_TYPE = "circ_seam"


@dataclass(slots=True)
class CircSeamItem(SeamItem):
    inside_diameter: float = 0.0

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], defaults: Mapping[str, Any] | None = None
    ) -> "CircSeamItem":
        if defaults is None:
            defaults = load_item_defaults(WELD_TYPE)
        fields, geometry = seam_fields(raw, defaults, "Circ seam")
        return cls(inside_diameter=number(geometry, "inside_diameter"), **fields)

    def weld_length(self) -> WeldLength:
        return Circumference(self.inside_diameter)


def activity_codes(item: CircSeamItem, result: WeldResult) -> dict[str, float]:
    times = item.activity_times

    def t(key: str) -> float:
        return float(times.get(key, 0.0))

    sub_arc, manual = second_side_hours(item, result)
    return {
        "CRANE": t("move_to_assembly"),
        "FCIRC": t("fit_up"),
        "PREHEAT": t("preheat_1st_side") + t("preheat_2nd_side"),
        "WECIRC": result.times.get(Zone.INSIDE),
        "BACMIL": t("back_mill"),
        "SUBCIRC": sub_arc,
        "MANCIR": manual,
        "NDE": t("nde"),
    }


def estimate(item: CircSeamItem, settings: WeldSettings) -> ItemEstimate:
    result = calculate_weld(item.request(), settings)
    return ItemEstimate(
        weld_type=WELD_TYPE,
        tag=item.tag,
        quantity=item.quantity,
        result=result,
        activity_codes=activity_codes(item, result),
    )


__all__ = ["CircSeamItem", "WELD_TYPE", "activity_codes", "estimate"]
