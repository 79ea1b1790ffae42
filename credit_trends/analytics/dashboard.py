"""
Dashboard analytics — chart-ready projections for the dashboard pages.

Summary cards, Trends (time series), Analysis (distributions and efficiency).
"""
from __future__ import annotations

import pandas as pd

from credit_trends.config import TOP_CREDIT_TYPES, TOP_STATES, TOP_STATES_EFFICIENCY
from credit_trends.analytics.aggregation import (
    aggregate_by,
    by_credit_type,
    by_income_bracket,
    by_sector,
    by_state,
    summary_metrics,
    top_n,
    year_over_year,
)
from credit_trends.analytics.common import sanitize_for_json
from credit_trends.data.schemas import Dimension


def _records(table: pd.DataFrame, columns: list[str]) -> list[dict]:
    return table[columns].to_dict("records")


def summary_cards(df: pd.DataFrame) -> dict:
    """The four headline stat cards."""
    m = summary_metrics(df)
    return sanitize_for_json({
        "has_data": not df.empty,
        "metrics": m,
        "cards": [
            {
                "key": "total_amount",
                "title": "Total Claims Amount",
                "value": m["total_amount"],
                "description": f"From {m['year_min']} to {m['year_max']}",
            },
            {
                "key": "total_claims",
                "title": "Total Claims Count",
                "value": m["total_claims"],
                "description": f"Average: ${m['avg_claim_size']:,.2f} per claim",
            },
            {
                "key": "states",
                "title": "States Covered",
                "value": m["states"],
                "description": f"Top state: {m['top_state']}",
            },
            {
                "key": "credit_types",
                "title": "Credit Types",
                "value": m["credit_types"],
                "description": "Different tax credit programs",
            },
        ],
    })


def trend_view(df: pd.DataFrame) -> dict:
    """Claims over time: amount and claim count per year, ascending."""
    yearly = year_over_year(df)
    return sanitize_for_json({
        "has_data": not df.empty,
        "yearly": _records(yearly, ["year", "total_amount", "total_claims", "avg_claim_size", "change_pct"]),
    })


def state_efficiency(df: pd.DataFrame, limit: int = TOP_STATES_EFFICIENCY) -> pd.DataFrame:
    """Claims per million dollars for the states with the largest amounts."""
    return top_n(aggregate_by(df, Dimension.STATES), limit)


def analysis_view(df: pd.DataFrame) -> dict:
    """Detailed breakdowns for the analysis page."""
    row_cols = ["total_amount", "total_claims", "avg_claim_size", "share_pct"]
    return sanitize_for_json({
        "has_data": not df.empty,
        "summary": summary_metrics(df),
        "yearly": _records(year_over_year(df), ["year", "total_amount", "total_claims", "change_pct"]),
        "credit_types": _records(by_credit_type(df, TOP_CREDIT_TYPES), ["credit_type"] + row_cols),
        "states": _records(by_state(df, TOP_STATES), ["state"] + row_cols),
        "sectors": _records(by_sector(df), ["sector"] + row_cols + ["efficiency"]),
        "income_brackets": _records(by_income_bracket(df), ["income_bracket"] + row_cols),
        "state_efficiency": _records(state_efficiency(df), ["state", "total_amount", "total_claims", "efficiency"]),
    })
