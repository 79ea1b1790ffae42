"""
Export endpoints: filtered CSV download and plain-text summary report.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from credit_trends.data.errors import EmptyExportError
from credit_trends.data.schemas import FilterSelection
from credit_trends.data.store import DataStore
from credit_trends.api.dependencies import get_store, parse_selection
from credit_trends.reports.csv_export import export_filename, to_delimited_text
from credit_trends.reports.summary_report import to_summary_report

router = APIRouter(prefix="/api/export", tags=["export"])


def _download(content: str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/csv")
def export_csv(
    store: DataStore = Depends(get_store),
    selection: FilterSelection | None = Depends(parse_selection),
):
    try:
        content = to_delimited_text(store.get_active(selection))
    except EmptyExportError as exc:
        raise HTTPException(400, str(exc))
    return _download(content, export_filename("csv"), "text/csv; charset=utf-8")


@router.get("/report")
def export_report(
    store: DataStore = Depends(get_store),
    selection: FilterSelection | None = Depends(parse_selection),
):
    try:
        content = to_summary_report(store.get_active(selection))
    except EmptyExportError as exc:
        raise HTTPException(400, str(exc))
    return _download(content, export_filename("report"), "text/plain; charset=utf-8")
