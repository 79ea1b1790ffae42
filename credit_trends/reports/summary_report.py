"""
Summary Report — overview, top states, top credit types, year-by-year breakdown.

All figures come from the aggregation engine so the report always agrees
with the dashboard summary.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path

import pandas as pd

from credit_trends.config import REPORT_TOP_N
from credit_trends.analytics.aggregation import by_credit_type, by_state, by_year, summary_metrics
from credit_trends.analytics.common import sanitize_for_json
from credit_trends.data.errors import EmptyExportError
from credit_trends.reports.csv_export import export_filename


def _money(value: float) -> str:
    return f"${value:,.2f}"


def _heading(title: str) -> list[str]:
    return [title, "=" * len(title)]


def generate_json(df: pd.DataFrame) -> dict:
    if df is None or df.empty:
        raise EmptyExportError()

    m = summary_metrics(df)
    return sanitize_for_json({
        "totals": m,
        "top_states": by_state(df, REPORT_TOP_N)[["state", "total_amount"]].to_dict("records"),
        "top_credit_types": by_credit_type(df, REPORT_TOP_N)[["credit_type", "total_amount"]].to_dict("records"),
        "by_year": by_year(df)[["year", "total_amount", "total_claims"]].to_dict("records"),
    })


def to_summary_report(df: pd.DataFrame, generated: dt.date | None = None) -> str:
    """Human-readable plain-text report of the subset."""
    data = generate_json(df)
    t = data["totals"]
    generated = generated or dt.date.today()

    lines = ["TAX CREDIT UTILIZATION SUMMARY REPORT", f"Generated: {generated.isoformat()}", ""]

    lines += _heading("OVERVIEW")
    lines += [
        f"Data Period: {t['year_min']} - {t['year_max']}",
        f"Total Claims Amount: {_money(t['total_amount'])}",
        f"Total Claims Count: {t['total_claims']:,}",
        f"Average Claim Amount: {_money(t['avg_claim_size'])}",
        f"States Covered: {t['states']}",
        f"Credit Types: {t['credit_types']}",
        "",
    ]

    lines += _heading(f"TOP {REPORT_TOP_N} STATES BY AMOUNT")
    for i, row in enumerate(data["top_states"], 1):
        lines.append(f"{i}. {row['state']}: {_money(row['total_amount'])}")
    lines.append("")

    lines += _heading(f"TOP {REPORT_TOP_N} CREDIT TYPES BY AMOUNT")
    for i, row in enumerate(data["top_credit_types"], 1):
        lines.append(f"{i}. {row['credit_type']}: {_money(row['total_amount'])}")
    lines.append("")

    lines += _heading("YEAR-BY-YEAR BREAKDOWN")
    for row in data["by_year"]:
        lines.append(f"{row['year']}: {_money(row['total_amount'])} ({row['total_claims']:,} claims)")

    return "\n".join(lines) + "\n"


def write_report(
    df: pd.DataFrame,
    output_dir: str | Path,
    today: dt.date | None = None,
) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename("report", today)
    path.write_text(to_summary_report(df, today), encoding="utf-8")
    return path
