"""
Filter endpoints: current selection and options, add, remove, clear.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from credit_trends.data.schemas import Dimension
from credit_trends.data.store import DataStore
from credit_trends.api.dependencies import get_store
from credit_trends.api.response_models import FilterValueRequest, FiltersResponse

router = APIRouter(prefix="/api/filters", tags=["filters"])


def _dimension(name: str) -> Dimension:
    try:
        return Dimension.parse(name)
    except ValueError as exc:
        raise HTTPException(400, str(exc))


def _response(store: DataStore) -> FiltersResponse:
    return FiltersResponse(
        selection=store.selection.to_dict(),
        options=store.filter_options(),
        active_filters=store.selection.active_count(),
        active_rows=store.active_count(),
        total_rows=store.row_count(),
    )


@router.get("", response_model=FiltersResponse)
def get_filters(store: DataStore = Depends(get_store)):
    return _response(store)


@router.post("/{dimension}", response_model=FiltersResponse)
def add_filter(
    dimension: str,
    req: FilterValueRequest,
    store: DataStore = Depends(get_store),
):
    dim = _dimension(dimension)
    try:
        store.add_filter(dim, req.value)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return _response(store)


@router.delete("/{dimension}/{value}", response_model=FiltersResponse)
def remove_filter(
    dimension: str,
    value: str,
    store: DataStore = Depends(get_store),
):
    dim = _dimension(dimension)
    try:
        store.remove_filter(dim, value)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return _response(store)


@router.delete("", response_model=FiltersResponse)
def clear_filters(store: DataStore = Depends(get_store)):
    store.clear_filters()
    return _response(store)
