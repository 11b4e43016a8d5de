"""Helpers for rendering job summaries."""

from __future__ import annotations

from .summary import (
    activity_code_totals,
    format_hours,
    render_summary_text,
    summarize_job,
    summary_to_csv,
)

__all__ = [
    "activity_code_totals",
    "format_hours",
    "render_summary_text",
    "summarize_job",
    "summary_to_csv",
]
