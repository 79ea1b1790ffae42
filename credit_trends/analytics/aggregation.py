"""
Aggregation engine — grouped tables and derived metrics over an active subset.

Every function is a pure function of the frame it receives. Groups are built
in one pass (first-encountered order) and only sorted on output.
"""
from __future__ import annotations

import pandas as pd

from credit_trends.config import EFFICIENCY_SCALE, TOP_STATES_CONCENTRATION
from credit_trends.analytics.common import pct_change, pct_of_total, safe_divide, safe_series_divide
from credit_trends.data.schemas import Dimension


AGG_COLUMNS = ["total_amount", "total_claims", "record_count", "avg_claim_size", "efficiency", "share_pct"]


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def aggregate_by(df: pd.DataFrame, dimension: "str | Dimension") -> pd.DataFrame:
    """Group the subset by one dimension.

    Rows come back in first-encountered order with total_amount,
    total_claims, record_count, avg_claim_size (amount per claim),
    efficiency (claims per million dollars) and share_pct of the subset
    total amount.
    """
    key = Dimension.parse(dimension).field
    if df.empty:
        return pd.DataFrame({
            key: pd.Series(dtype="int64" if key == "year" else object),
            "total_amount": pd.Series(dtype="float64"),
            "total_claims": pd.Series(dtype="int64"),
            "record_count": pd.Series(dtype="int64"),
            "avg_claim_size": pd.Series(dtype="float64"),
            "efficiency": pd.Series(dtype="float64"),
            "share_pct": pd.Series(dtype="float64"),
        })

    grouped = df.groupby(key, sort=False).agg(
        total_amount=("claimed_amount", "sum"),
        total_claims=("claims_count", "sum"),
        record_count=("claimed_amount", "size"),
    ).reset_index()

    grouped["avg_claim_size"] = safe_series_divide(grouped["total_amount"], grouped["total_claims"])
    grouped["efficiency"] = safe_series_divide(grouped["total_claims"], grouped["total_amount"]) * EFFICIENCY_SCALE
    total = float(df["claimed_amount"].sum())
    grouped["share_pct"] = grouped["total_amount"].apply(lambda v: pct_of_total(v, total))
    return grouped


def top_n(table: pd.DataFrame, n: int, by: str = "total_amount") -> pd.DataFrame:
    """Largest n rows by `by`; ties keep their first-encountered order."""
    ranked = table.sort_values(by, ascending=False, kind="mergesort")
    return ranked.head(n).reset_index(drop=True)


def by_year(df: pd.DataFrame) -> pd.DataFrame:
    """Time series: one row per year, ascending."""
    table = aggregate_by(df, Dimension.YEARS)
    return table.sort_values("year", kind="mergesort").reset_index(drop=True)


def by_state(df: pd.DataFrame, limit: int | None = None) -> pd.DataFrame:
    table = aggregate_by(df, Dimension.STATES)
    return top_n(table, limit if limit is not None else len(table))


def by_credit_type(df: pd.DataFrame, limit: int | None = None) -> pd.DataFrame:
    table = aggregate_by(df, Dimension.CREDIT_TYPES)
    return top_n(table, limit if limit is not None else len(table))


def by_sector(df: pd.DataFrame, limit: int | None = None) -> pd.DataFrame:
    table = aggregate_by(df, Dimension.SECTORS)
    return top_n(table, limit if limit is not None else len(table))


def by_income_bracket(df: pd.DataFrame) -> pd.DataFrame:
    """Income brackets ordered by bracket label (stored as strings)."""
    table = aggregate_by(df, Dimension.INCOME_BRACKETS)
    return table.sort_values("income_bracket", kind="mergesort").reset_index(drop=True)


def year_over_year(df: pd.DataFrame) -> pd.DataFrame:
    """Yearly rows with change_pct against the previous year present."""
    yearly = by_year(df)
    changes = []
    previous = None
    for amount in yearly["total_amount"]:
        changes.append(None if previous is None else pct_change(float(amount), previous))
        previous = float(amount)
    yearly["change_pct"] = pd.Series(changes, index=yearly.index, dtype=object)
    return yearly


# ---------------------------------------------------------------------------
# Derived metrics
# ---------------------------------------------------------------------------

def growth_rate(df: pd.DataFrame) -> float:
    """Percent change from the earliest year's total to the latest year's.

    0 when fewer than two distinct years are present or the earliest
    total is 0.
    """
    yearly = by_year(df)
    if len(yearly) < 2:
        return 0.0
    earliest = float(yearly["total_amount"].iloc[0])
    latest = float(yearly["total_amount"].iloc[-1])
    return safe_divide(latest - earliest, earliest) * 100


def market_concentration(df: pd.DataFrame, top: int = TOP_STATES_CONCENTRATION) -> float:
    """Share (percent) of the total amount held by the top states."""
    if df.empty:
        return 0.0
    leaders = by_state(df, top)
    return pct_of_total(float(leaders["total_amount"].sum()), float(df["claimed_amount"].sum()))


def efficiency(total_claims: float, total_amount: float) -> float:
    """Claims per million dollars claimed."""
    return safe_divide(total_claims, total_amount) * EFFICIENCY_SCALE


def summary_metrics(df: pd.DataFrame) -> dict:
    """Whole-subset scalars."""
    if df.empty:
        return {
            "record_count": 0,
            "total_amount": 0.0,
            "total_claims": 0,
            "avg_claim_size": 0.0,
            "states": 0,
            "credit_types": 0,
            "sectors": 0,
            "income_brackets": 0,
            "year_min": 0,
            "year_max": 0,
            "growth_rate": 0.0,
            "market_concentration": 0.0,
            "efficiency": 0.0,
            "top_state": "",
        }

    total_amount = float(df["claimed_amount"].sum())
    total_claims = int(df["claims_count"].sum())
    states = by_state(df)

    return {
        "record_count": int(len(df)),
        "total_amount": total_amount,
        "total_claims": total_claims,
        "avg_claim_size": safe_divide(total_amount, total_claims),
        "states": int(df["state"].nunique()),
        "credit_types": int(df["credit_type"].nunique()),
        "sectors": int(df["sector"].nunique()),
        "income_brackets": int(df["income_bracket"].nunique()),
        "year_min": int(df["year"].min()),
        "year_max": int(df["year"].max()),
        "growth_rate": growth_rate(df),
        "market_concentration": market_concentration(df),
        "efficiency": efficiency(total_claims, total_amount),
        "top_state": str(states["state"].iloc[0]),
    }
