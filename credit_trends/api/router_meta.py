"""
Meta endpoints: health.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from credit_trends.data.store import DataStore
from credit_trends.api.dependencies import get_store_or_empty
from credit_trends.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store_or_empty)):
    return HealthResponse(
        status="ok",
        loaded=store.is_loaded,
        rows=store.row_count(),
        active_rows=store.active_count(),
        skipped_rows=store.skipped_rows,
        active_filters=store.selection.active_count(),
        source=store.source_name,
    )
