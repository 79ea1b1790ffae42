"""
Delimited-text export of the active subset, plus export file naming.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path

import pandas as pd

from credit_trends.config import COLUMNS, DELIMITER, EXPORT_NAMES, FIELDS, FLOAT_FIELDS, INT_FIELDS
from credit_trends.data.errors import EmptyExportError


def format_value(field_name: str, value) -> str:
    """Render one field so that parsing it again yields the same value."""
    if field_name in INT_FIELDS:
        return str(int(value))
    if field_name in FLOAT_FIELDS:
        v = float(value)
        return str(int(v)) if v.is_integer() else repr(v)
    return str(value)


def to_delimited_text(df: pd.DataFrame) -> str:
    """Header row of the column names, then one line per record.

    Raises EmptyExportError on an empty subset instead of producing a
    header-only file.
    """
    if df is None or df.empty:
        raise EmptyExportError()

    lines = [DELIMITER.join(COLUMNS)]
    for row in df[FIELDS].itertuples(index=False, name=None):
        lines.append(DELIMITER.join(format_value(f, v) for f, v in zip(FIELDS, row)))
    return "\n".join(lines)


def export_filename(kind: str, today: dt.date | None = None) -> str:
    """``tax_credit_data_YYYY-MM-DD.csv`` / ``tax_credit_summary_YYYY-MM-DD.txt``."""
    if kind not in EXPORT_NAMES:
        raise ValueError(f"Unknown export kind: {kind}. Valid: {list(EXPORT_NAMES)}")
    prefix, ext = EXPORT_NAMES[kind]
    today = today or dt.date.today()
    return f"{prefix}_{today.isoformat()}.{ext}"


def write_csv(df: pd.DataFrame, output_dir: str | Path, today: dt.date | None = None) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename("csv", today)
    path.write_text(to_delimited_text(df), encoding="utf-8")
    return path
