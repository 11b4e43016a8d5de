from __future__ import annotations

import io

import pandas as pd
import pytest

from weld_quoter.engine.settings import WeldSettings
from weld_quoter.estimators import estimate_items
from weld_quoter.render.summary import (
    activity_code_totals,
    format_hours,
    render_summary_text,
    summarize_job,
    summary_to_csv,
)


@pytest.fixture
def estimates(settings: WeldSettings):
    return estimate_items(
        [
            {"type": "nozzle", "tag": "N1", "quantity": 2},
            {"type": "long_seam", "tag": "S1-LS"},
            {"type": "pipe_joint", "tag": "P1", "nps": "2", "schedule": "SCH 40", "quantity": 4},
        ],
        settings,
    )


def test_summarize_job_has_one_row_per_item(estimates) -> None:
    summary = summarize_job(estimates)

    assert list(summary["tag"]) == ["N1", "S1-LS", "P1"]
    assert list(summary.columns[:5]) == ["weld_type", "tag", "quantity", "passes", "weld_hours"]
    assert list(summary.columns[-2:]) == ["per_item_hours", "total_hours"]
    assert summary.loc[0, "WNOZZ"] == pytest.approx(estimates[0].activity_codes["WNOZZ"])
    assert summary.loc[1, "WNOZZ"] == 0.0
    assert summary.loc[2, "total_hours"] == pytest.approx(4 * estimates[2].per_item_hours)


def test_activity_code_totals_weight_by_quantity(estimates) -> None:
    totals = activity_code_totals(estimates)

    nde = 2 * 1.0 + 1 * 0.5 + 4 * 0.5
    assert totals["NDE"] == pytest.approx(nde)
    assert list(totals.values) == sorted(totals.values, reverse=True)


def test_summary_to_csv_round_trips_through_pandas(estimates) -> None:
    text = summary_to_csv(summarize_job(estimates))
    frame = pd.read_csv(io.StringIO(text))

    assert list(frame["tag"]) == ["N1", "S1-LS", "P1"]
    assert "," in text.splitlines()[0]


def test_render_summary_text(estimates) -> None:
    text = render_summary_text(estimates, title="Job 42")
    lines = text.splitlines()

    assert lines[0] == "Job 42"
    assert any(line.startswith("nozzle") and "N1" in line for line in lines)
    grand_total = sum(estimate.total_hours for estimate in estimates)
    assert lines[-1].endswith(format_hours(grand_total))


def test_format_hours() -> None:
    assert format_hours(1.234) == "1.23 hr"
    assert format_hours(None) == "0.00 hr"


def test_empty_job() -> None:
    summary = summarize_job([])

    assert summary.empty
    assert activity_code_totals([]).empty
