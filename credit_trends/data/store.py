"""
DataStore — the session: full record set plus the current filter selection.

The full frame is replaced wholesale on upload and never mutated; the active
subset is recomputed from it on every access.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from credit_trends.data.filters import apply_filters, distinct_values
from credit_trends.data.loader import (
    empty_frame,
    load_csv_file,
    parse_records_with_stats,
    records_to_frame,
)
from credit_trends.data.schemas import Dimension, FilterSelection, TaxCreditRecord

logger = logging.getLogger(__name__)


class DataStore:
    """In-memory tax-credit records with filter-aware accessors."""

    def __init__(self) -> None:
        self.df: pd.DataFrame = empty_frame()
        self.selection = FilterSelection()
        self.source_name: Optional[str] = None
        self.skipped_rows = 0
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_text(self, text: str, source_name: str | None = None) -> "DataStore":
        """Parse text and replace the record set.

        On EmptyDatasetError the previous records and selection are kept.
        """
        records, skipped = parse_records_with_stats(text)
        self._replace(records, skipped, source_name)
        return self

    def load_file(self, filepath: Path) -> "DataStore":
        filepath = Path(filepath)
        records, skipped = load_csv_file(filepath)
        self._replace(records, skipped, filepath.name)
        return self

    def _replace(self, records: list[TaxCreditRecord], skipped: int, source_name: str | None) -> None:
        self.df = records_to_frame(records)
        self.selection = FilterSelection()
        self.source_name = source_name
        self.skipped_rows = skipped
        self._loaded = True
        logger.info(
            "Loaded %s records from %s (%s skipped)",
            f"{len(self.df):,}", source_name or "upload", f"{skipped:,}",
        )

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def add_filter(self, dimension: "str | Dimension", value) -> FilterSelection:
        selection = self.selection.copy()
        selection.add(dimension, value)
        self.selection = selection
        logger.debug("Filter added: %s=%s (%s active)", dimension, value, selection.active_count())
        return selection

    def remove_filter(self, dimension: "str | Dimension", value) -> FilterSelection:
        selection = self.selection.copy()
        selection.remove(dimension, value)
        self.selection = selection
        logger.debug("Filter removed: %s=%s (%s active)", dimension, value, selection.active_count())
        return selection

    def clear_filters(self) -> FilterSelection:
        self.selection = FilterSelection()
        return self.selection

    def set_selection(self, selection: FilterSelection) -> FilterSelection:
        self.selection = selection.copy()
        return self.selection

    def get_active(self, selection: FilterSelection | None = None) -> pd.DataFrame:
        """Active subset for the given selection (default: the session's)."""
        return apply_filters(self.df, self.selection if selection is None else selection)

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def filter_options(self) -> dict[str, list]:
        """Distinct values per dimension over the full record set."""
        return {dim.value: values for dim, values in distinct_values(self.df).items()}

    def row_count(self) -> int:
        return len(self.df)

    def active_count(self) -> int:
        return len(self.get_active())
