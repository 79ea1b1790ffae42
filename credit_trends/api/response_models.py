"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    loaded: bool
    rows: int
    active_rows: int
    skipped_rows: int
    active_filters: int
    source: Optional[str] = None


class UploadResponse(BaseModel):
    status: str
    source: str
    records: int
    skipped_rows: int


class FilterValueRequest(BaseModel):
    value: Union[int, str]


class FiltersResponse(BaseModel):
    selection: dict[str, list[Any]]
    options: dict[str, list[Any]]
    active_filters: int
    active_rows: int
    total_rows: int
