"""
Upload endpoint: replaces the session dataset with a parsed CSV.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from credit_trends.data.errors import EmptyDatasetError
from credit_trends.data.loader import decode_upload
from credit_trends.data.store import DataStore
from credit_trends.api.dependencies import get_store_or_empty
from credit_trends.api.response_models import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
def upload_csv(
    file: UploadFile = File(...),
    store: DataStore = Depends(get_store_or_empty),
):
    """Parse an uploaded CSV and replace the current dataset.

    A rejected upload leaves the previous dataset and filters untouched.
    """
    if not file.filename:
        raise HTTPException(400, "Missing filename")
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(400, f"Only .csv files are accepted (got '{file.filename}')")

    content = file.file.read()
    try:
        text = decode_upload(content)
    except UnicodeDecodeError:
        raise HTTPException(400, f"'{file.filename}' is not valid UTF-8 text")

    try:
        store.load_text(text, source_name=file.filename)
    except EmptyDatasetError as exc:
        logger.warning("Upload rejected: %s: %s", file.filename, exc)
        raise HTTPException(400, str(exc))

    return UploadResponse(
        status="uploaded",
        source=file.filename,
        records=store.row_count(),
        skipped_rows=store.skipped_rows,
    )
