"""
Delimited-text parsing, field coercion, and record/frame conversion.
"""
from __future__ import annotations

import logging
import re
from dataclasses import astuple
from pathlib import Path
from typing import Iterable

import pandas as pd

from credit_trends.config import (
    DELIMITER, EXPECTED_COLUMN_COUNT, FIELDS, FLOAT_FIELDS, INT_FIELDS, STRING_FIELDS,
)
from credit_trends.data.errors import EmptyDatasetError, MalformedRowSkipped
from credit_trends.data.schemas import TaxCreditRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

_INT_PREFIX_RE = re.compile(r"^[+-]?\d+")
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_int(token: str | None) -> int:
    """Leading integer prefix of the token ("12.7" → 12, "3x" → 3); 0 if none.

    Prefixes outside the int64 range also coerce to 0.
    """
    m = _INT_PREFIX_RE.match((token or "").strip())
    if not m:
        return 0
    try:
        value = int(m.group(0))
    except ValueError:
        return 0
    return value if _INT64_MIN <= value <= _INT64_MAX else 0


def coerce_float(token: str | None) -> float:
    """Leading float prefix of the token ("1e3" → 1000.0); 0.0 if none."""
    m = _FLOAT_PREFIX_RE.match((token or "").strip())
    if not m:
        return 0.0
    try:
        value = float(m.group(0))
    except (ValueError, OverflowError):
        return 0.0
    return value if pd.notna(value) and abs(value) != float("inf") else 0.0


def coerce_str(token: str | None) -> str:
    return (token or "").strip()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_line(line: str, line_number: int = 0) -> TaxCreditRecord:
    """Parse one data line by column position.

    Raises MalformedRowSkipped when the line has fewer than 8 fields.
    Quoted delimiters are not special-cased.
    """
    tokens = line.split(DELIMITER)
    if len(tokens) < EXPECTED_COLUMN_COUNT:
        raise MalformedRowSkipped(line_number, len(tokens))

    raw = dict(zip(FIELDS, tokens))
    values = {}
    for name in FIELDS:
        if name in INT_FIELDS:
            values[name] = coerce_int(raw.get(name))
        elif name in FLOAT_FIELDS:
            values[name] = coerce_float(raw.get(name))
        else:
            values[name] = coerce_str(raw.get(name))
    return TaxCreditRecord(**values)


def parse_records_with_stats(text: str) -> tuple[list[TaxCreditRecord], int]:
    """Parse raw text into (records, skipped_line_count).

    The first line is a header and is ignored. Raises EmptyDatasetError
    when no line survives.
    """
    lines = (text or "").strip().split("\n")
    records: list[TaxCreditRecord] = []
    skipped = 0
    for i, line in enumerate(lines[1:], start=2):
        try:
            records.append(parse_line(line, i))
        except MalformedRowSkipped as exc:
            skipped += 1
            logger.debug("Skipping row: %s", exc)

    if not records:
        raise EmptyDatasetError()

    logger.info("Parsed %s records (%s rows skipped)", f"{len(records):,}", f"{skipped:,}")
    return records, skipped


def parse_records(text: str) -> list[TaxCreditRecord]:
    """Parse raw text into an ordered record list."""
    records, _ = parse_records_with_stats(text)
    return records


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8, tolerating a byte-order mark."""
    return content.decode("utf-8-sig")


def load_csv_file(filepath: Path) -> tuple[list[TaxCreditRecord], int]:
    """Read a UTF-8 CSV file from disk and parse it."""
    filepath = Path(filepath)
    logger.info("Loading %s", filepath.name)
    return parse_records_with_stats(decode_upload(filepath.read_bytes()))


# ---------------------------------------------------------------------------
# Record ↔ frame conversion
# ---------------------------------------------------------------------------

def empty_frame() -> pd.DataFrame:
    return _typed(pd.DataFrame(columns=FIELDS))


def _typed(df: pd.DataFrame) -> pd.DataFrame:
    for col in INT_FIELDS:
        df[col] = df[col].astype("int64")
    for col in FLOAT_FIELDS:
        df[col] = df[col].astype("float64")
    for col in STRING_FIELDS:
        df[col] = df[col].astype(object)
    return df


def records_to_frame(records: Iterable[TaxCreditRecord]) -> pd.DataFrame:
    """One row per record, original order, internal column names."""
    rows = [astuple(r) for r in records]
    if not rows:
        return empty_frame()
    return _typed(pd.DataFrame(rows, columns=FIELDS))


def frame_to_records(df: pd.DataFrame) -> list[TaxCreditRecord]:
    records = []
    for row in df[FIELDS].itertuples(index=False, name=None):
        values = dict(zip(FIELDS, row))
        records.append(TaxCreditRecord(
            year=int(values["year"]),
            state=str(values["state"]),
            credit_type=str(values["credit_type"]),
            sector=str(values["sector"]),
            claimed_amount=float(values["claimed_amount"]),
            claims_count=int(values["claims_count"]),
            income_bracket=str(values["income_bracket"]),
            source=str(values["source"]),
        ))
    return records
