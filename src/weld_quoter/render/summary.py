"""Job-level rollups of item estimates for display and CSV export."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import pandas as pd

from weld_quoter.estimators.base import ItemEstimate

BASE_COLUMNS = ("weld_type", "tag", "quantity", "passes", "weld_hours")
TOTAL_COLUMNS = ("per_item_hours", "total_hours")

__all__ = [
    "activity_code_totals",
    "format_hours",
    "render_summary_text",
    "summarize_job",
    "summary_to_csv",
]


def format_hours(value: Any) -> str:
    """Format an hour value with an ``hr`` suffix."""

    try:
        hours = float(value or 0.0)
    except (TypeError, ValueError):
        hours = 0.0
    return f"{hours:.2f} hr"


def _code_order(estimates: Sequence[ItemEstimate]) -> list[str]:
    codes: list[str] = []
    for estimate in estimates:
        for code in estimate.activity_codes:
            if code not in codes:
                codes.append(code)
    return codes


def summarize_job(estimates: Iterable[ItemEstimate]) -> pd.DataFrame:
    """Return one row per item with its activity codes and hour totals.

    Activity code columns hold hours per single item and appear in first-seen
    order; codes an item does not use are 0.
    """

    estimates = list(estimates)
    codes = _code_order(estimates)
    columns = [*BASE_COLUMNS, *codes, *TOTAL_COLUMNS]
    rows: list[dict[str, Any]] = []
    for estimate in estimates:
        row: dict[str, Any] = {
            "weld_type": estimate.weld_type,
            "tag": estimate.tag,
            "quantity": estimate.quantity,
            "passes": estimate.result.total_passes,
            "weld_hours": estimate.weld_hours,
        }
        for code in codes:
            row[code] = float(estimate.activity_codes.get(code, 0.0))
        row["per_item_hours"] = estimate.per_item_hours
        row["total_hours"] = estimate.total_hours
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def activity_code_totals(estimates: Iterable[ItemEstimate]) -> pd.Series:
    """Return quantity-weighted hours per activity code, largest first."""

    totals: dict[str, float] = {}
    for estimate in estimates:
        for code, hours in estimate.activity_codes.items():
            totals[code] = totals.get(code, 0.0) + hours * estimate.quantity
    series = pd.Series(totals, dtype=float, name="hours")
    return series.sort_values(ascending=False, kind="stable")


def summary_to_csv(summary: pd.DataFrame) -> str:
    """Render ``summary`` as CSV text with hours to two decimals."""

    return summary.to_csv(index=False, float_format="%.2f")


def render_summary_text(
    estimates: Sequence[ItemEstimate],
    *,
    title: str = "Weld labour summary",
    page_width: int = 74,
) -> str:
    """Return a fixed-width text summary of ``estimates``."""

    divider = "-" * page_width
    lines = [title, divider]
    tag_width = max(10, page_width - 44)
    lines.append(f"{'Type':<12}{'Tag':<{tag_width}}{'Qty':>5}{'Passes':>8}{'Each':>10}{'Total':>9}")
    for estimate in estimates:
        lines.append(
            f"{estimate.weld_type:<12}"
            f"{estimate.tag[: tag_width - 1]:<{tag_width}}"
            f"{estimate.quantity:>5}"
            f"{estimate.result.total_passes:>8}"
            f"{estimate.per_item_hours:>10.2f}"
            f"{estimate.total_hours:>9.2f}"
        )
    lines.append(divider)

    totals = activity_code_totals(estimates)
    for code, hours in totals.items():
        lines.append(f"  {code:<12}{format_hours(hours):>14}")
    grand_total = sum(estimate.total_hours for estimate in estimates)
    lines.append(divider)
    lines.append(f"{'Total':<14}{format_hours(grand_total):>14}")
    return "\n".join(lines)
