"""Nozzle, long seam and circ seam items with their activity codes."""
from __future__ import annotations

import math

import pytest

from weld_quoter.config import load_item_defaults
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.engine.types import JointProfile, Process, ProcessLayer, Zone
from weld_quoter.estimators import (
    UnknownWeldTypeError,
    estimate_item,
    normalize_weld_type,
)
from weld_quoter.estimators.base import is_sub_arc, parse_layers
from weld_quoter.estimators.circ_seam import CircSeamItem
from weld_quoter.estimators.long_seam import LongSeamItem
from weld_quoter.estimators.nozzle import NozzleItem
from weld_quoter.estimators.seam import SeamItem


def test_nozzle_defaults_come_from_settings() -> None:
    item = NozzleItem.from_mapping({"tag": "N1"})

    assert item.nozzle_od == 300.0
    assert item.shell_thickness == 25.0
    assert item.joint_type is JointProfile.DOUBLE_BEVEL
    assert item.inside_layers[-1] == ProcessLayer(Process.FCAW, 20.0)
    assert item.activity_times["fit_nozzle"] == 1.0


def test_nozzle_geometry_overrides_merge_with_defaults() -> None:
    item = NozzleItem.from_mapping(
        {"geometry": {"nozzle_od": "450 mm", "joint_type": "singlebevel"}, "quantity": "3"}
    )

    assert item.nozzle_od == 450.0
    assert item.root_gap == 3.0
    assert item.quantity == 3
    geometry = item.geometry()
    assert geometry.profile is JointProfile.SINGLE_BEVEL
    assert geometry.inside_angle == item.single_bevel_angle


def test_nozzle_activity_codes(settings: WeldSettings) -> None:
    estimate = estimate_item({"type": "nozzle", "tag": "N1", "quantity": 2}, settings)
    codes = estimate.activity_codes

    assert list(codes) == ["CUTNOZZ", "FNOZZ", "PREHEAT", "WNOZZ", "BACGRI", "MATCUT", "NDE"]
    assert codes["CUTNOZZ"] == pytest.approx(1.25)
    assert codes["PREHEAT"] == pytest.approx(0.75)
    assert codes["MATCUT"] == pytest.approx(1.5)
    assert codes["WNOZZ"] == pytest.approx(estimate.result.total_hours)
    assert estimate.result.zone(Zone.FILLET) is not None
    assert estimate.total_hours == pytest.approx(2 * estimate.per_item_hours)


def test_long_seam_uses_linear_length(settings: WeldSettings) -> None:
    estimate = estimate_item({"type": "long_seam", "tag": "S1-LS"}, settings)

    assert estimate.result.weld_length == 2000.0
    codes = estimate.activity_codes
    assert codes["CRANE"] == pytest.approx(1.25)
    assert codes["ROLL"] == pytest.approx(0.75)
    assert codes["WELON"] == pytest.approx(estimate.result.times[Zone.INSIDE])
    assert codes["SUBLON"] == pytest.approx(estimate.result.times[Zone.OUTSIDE])
    assert codes["MANLON"] == 0.0


def test_long_seam_manual_second_side(settings: WeldSettings) -> None:
    estimate = estimate_item(
        {"type": "longweld", "outside_process": "SMAW"}, settings
    )

    assert estimate.activity_codes["SUBLON"] == 0.0
    assert estimate.activity_codes["MANLON"] > 0.0


def test_circ_seam_length_is_shell_circumference(settings: WeldSettings) -> None:
    item = CircSeamItem.from_mapping({"tag": "C1"})
    estimate = estimate_item({"type": "circ_seam", "tag": "C1"}, settings)

    assert item.inside_diameter == 3000.0
    assert estimate.result.weld_length == pytest.approx(math.pi * 3000.0)
    assert set(estimate.activity_codes) == {
        "CRANE",
        "FCIRC",
        "PREHEAT",
        "WECIRC",
        "BACMIL",
        "SUBCIRC",
        "MANCIR",
        "NDE",
    }


def test_single_vee_seam_can_opt_into_back_weld(settings: WeldSettings) -> None:
    defaults = load_item_defaults("long_seam")
    plain = LongSeamItem.from_mapping({"geometry": {"joint_type": "single-vee"}}, defaults)
    backed = LongSeamItem.from_mapping(
        {"geometry": {"joint_type": "single-vee", "back_weld": True}}, defaults
    )

    assert plain.request().geometry.back_weld is False
    assert backed.request().geometry.back_weld is True


@pytest.mark.parametrize("flag", ["false", "0", "no", "No ", 0])
def test_back_weld_text_flags_stay_off(settings: WeldSettings, flag) -> None:
    estimate = estimate_item(
        {"type": "long_seam", "geometry": {"joint_type": "single-vee", "back_weld": flag}},
        settings,
    )

    assert estimate.result.volumes[Zone.OUTSIDE] == 0.0
    assert estimate.result.passes[Zone.OUTSIDE] == 0


def test_back_weld_text_flag_turns_it_on(settings: WeldSettings) -> None:
    estimate = estimate_item(
        {"type": "long_seam", "geometry": {"joint_type": "single-vee", "back_weld": "yes"}},
        settings,
    )

    assert estimate.result.volumes[Zone.OUTSIDE] > 0.0


def test_seam_item_requires_a_length_source() -> None:
    with pytest.raises(TypeError):
        SeamItem(tag="S", shell_thickness=20.0)


@pytest.mark.parametrize(
    "process,thickness,expected",
    [
        (Process.SAW, 6.0, True),
        (Process.FCAW, 12.0, True),
        (Process.FCAW, 11.0, False),
        (Process.SMAW, 30.0, False),
        (Process.GTAW, 30.0, False),
    ],
)
def test_sub_arc_rule(process: Process, thickness: float, expected: bool) -> None:
    assert is_sub_arc(process, thickness) is expected


def test_parse_layers_accepts_legacy_keys() -> None:
    layers = parse_layers([{"process": "gtaw", "minWidth": "0"}, {"process": "SAW", "min_width": 15}])

    assert layers == (ProcessLayer(Process.GTAW, 0.0), ProcessLayer(Process.SAW, 15.0))


def test_unknown_weld_type(settings: WeldSettings) -> None:
    with pytest.raises(UnknownWeldTypeError):
        estimate_item({"type": "flange"}, settings)
    assert normalize_weld_type("Circ Weld") == "circ_seam"
