"""
Dashboard endpoints — Summary cards, Trends, Analysis.

Each request recomputes from the full dataset and the current selection
(or a one-off selection from query params).
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from credit_trends.data.schemas import FilterSelection
from credit_trends.data.store import DataStore
from credit_trends.api.dependencies import get_store, parse_selection
from credit_trends.analytics.dashboard import analysis_view, summary_cards, trend_view

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/summary")
def summary(
    store: DataStore = Depends(get_store),
    selection: FilterSelection | None = Depends(parse_selection),
):
    """Headline stat cards for the active subset."""
    return summary_cards(store.get_active(selection))


@router.get("/trends")
def trends(
    store: DataStore = Depends(get_store),
    selection: FilterSelection | None = Depends(parse_selection),
):
    """Yearly amount and claims series."""
    return trend_view(store.get_active(selection))


@router.get("/analysis")
def analysis(
    store: DataStore = Depends(get_store),
    selection: FilterSelection | None = Depends(parse_selection),
):
    """Credit type, state, sector and income bracket breakdowns."""
    return analysis_view(store.get_active(selection))
