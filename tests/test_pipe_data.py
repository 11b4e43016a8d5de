from __future__ import annotations

import pytest

from weld_quoter import pipe_data


def test_all_nps_sizes_in_library_order() -> None:
    sizes = pipe_data.all_nps_sizes()

    assert sizes[0] == '1/2"'
    assert sizes[-1] == '48"'
    assert '1-1/2"' in sizes
    assert len(sizes) == len(set(sizes))


def test_schedules_for_accepts_inch_mark() -> None:
    assert pipe_data.schedules_for('2"') == pipe_data.schedules_for("2")
    assert "SCH 40" in pipe_data.schedules_for("2")
    assert pipe_data.schedules_for("7") == []


def test_pipe_dimensions_lookup() -> None:
    dims = pipe_data.pipe_dimensions('24"', "SCH 40")

    assert dims is not None
    assert dims.od == pytest.approx(609.6)
    assert dims.wall_thickness == pytest.approx(17.48)
    assert pipe_data.pipe_dimensions("2", "SCH 999") is None


def test_require_pipe_dimensions_raises_key_error() -> None:
    with pytest.raises(KeyError):
        pipe_data.require_pipe_dimensions("3", "SCH 999")


@pytest.mark.parametrize(
    "raw,expected",
    [("sch40", "SCH 40"), ("SCH  80", "SCH 80"), ("40", "SCH 40"), ("xs", "XS")],
)
def test_normalize_schedule(raw: str, expected: str) -> None:
    assert pipe_data.normalize_schedule(raw) == expected


def test_pipe_size_key_round_trip() -> None:
    key = pipe_data.pipe_size_key("6", "sch 40")

    assert key == '6"|SCH 40'
    assert pipe_data.parse_pipe_size_key(key) == ('6"', "SCH 40")
    assert pipe_data.parse_pipe_size_key("no-separator") is None


def test_load_presets_drops_unknown_sizes(caplog: pytest.LogCaptureFixture) -> None:
    presets = pipe_data.load_presets(
        [
            {"nps": '2"', "schedule": "SCH 80", "root_face": 1.0, "enabled": False},
            {"nps": "7", "schedule": "SCH 40"},
        ]
    )

    assert list(presets) == ['2"|SCH 80']
    preset = presets['2"|SCH 80']
    assert preset.wall_thickness == pytest.approx(5.54)
    assert preset.root_face == 1.0
    assert preset.enabled is False
    assert "unknown pipe size" in caplog.text


def test_pipe_table_is_a_copy() -> None:
    table = pipe_data.pipe_table()
    table.loc[:, "od_mm"] = 0.0

    assert pipe_data.pipe_dimensions("2", "SCH 40").od == pytest.approx(60.3)
