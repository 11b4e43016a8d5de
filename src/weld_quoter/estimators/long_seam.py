"""Longitudinal seams joining the rolled edges of a shell course."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from weld_quoter.config import load_item_defaults
from weld_quoter.engine.pipeline import calculate_weld
from weld_quoter.engine.results import WeldResult
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.engine.types import Linear, WeldLength, Zone
from weld_quoter.estimators.base import ItemEstimate, number
from weld_quoter.estimators.seam import SeamItem, seam_fields, second_side_hours

WELD_TYPE = "long_seam"


@dataclass(slots=True)
class LongSeamItem(SeamItem):
    length: float = 0.0

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], defaults: Mapping[str, Any] | None = None
    ) -> "LongSeamItem":
        if defaults is None:
            defaults = load_item_defaults(WELD_TYPE)
        fields, geometry = seam_fields(raw, defaults, "Long seam")
        return cls(length=number(geometry, "weld_length"), **fields)

    def weld_length(self) -> WeldLength:
        return Linear(self.length)


def activity_codes(item: LongSeamItem, result: WeldResult) -> dict[str, float]:
    times = item.activity_times

    def t(key: str) -> float:
        return float(times.get(key, 0.0))

    sub_arc, manual = second_side_hours(item, result)
    return {
        "MATCUT": t("cut_plate") + t("clean_plate"),
        "CRANE": t("move_to_roll")
        + t("move_to_weld_1")
        + t("move_to_mill")
        + t("move_to_weld_2")
        + t("move_to_re_roll"),
        "ROLL": t("roll") + t("re_roll"),
        "FLON": t("fit_up"),
        "PREHEAT": t("preheat_1st_side") + t("preheat_2nd_side"),
        "WELON": result.times.get(Zone.INSIDE),
        "BACMIL": t("back_mill"),
        "SUBLON": sub_arc,
        "MANLON": manual,
        "NDE": t("nde"),
    }


def estimate(item: LongSeamItem, settings: WeldSettings) -> ItemEstimate:
    result = calculate_weld(item.request(), settings)
    return ItemEstimate(
        weld_type=WELD_TYPE,
        tag=item.tag,
        quantity=item.quantity,
        result=result,
        activity_codes=activity_codes(item, result),
    )


__all__ = ["LongSeamItem", "WELD_TYPE", "activity_codes", "estimate"]
