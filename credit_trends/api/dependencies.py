"""
FastAPI dependencies — DataStore singleton, selection parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from credit_trends.data.schemas import FilterSelection, selection_from_mapping
from credit_trends.data.store import DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    """The session store; 503 until a dataset has been uploaded."""
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "No data loaded yet. Upload a CSV first.")
    return _store


def get_store_or_empty() -> DataStore:
    """Return the store even if it has no data (for upload/health endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Ad-hoc selection from query params
# ---------------------------------------------------------------------------

def parse_selection(
    year: Optional[list[int]] = Query(None),
    state: Optional[list[str]] = Query(None),
    credit_type: Optional[list[str]] = Query(None),
    sector: Optional[list[str]] = Query(None),
    income_bracket: Optional[list[str]] = Query(None),
) -> FilterSelection | None:
    """Query-param selection overriding the session's; None when no params given."""
    raw = {
        "years": year,
        "states": state,
        "credit_types": credit_type,
        "sectors": sector,
        "income_brackets": income_bracket,
    }
    if not any(raw.values()):
        return None
    return selection_from_mapping(raw)
