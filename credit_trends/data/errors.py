"""
Recoverable pipeline errors. None of these are fatal; callers keep prior state.
"""
from __future__ import annotations

from credit_trends.config import COLUMNS, EXPECTED_COLUMN_COUNT


class EmptyDatasetError(ValueError):
    """Parsing produced zero usable rows."""

    def __init__(self, message: str | None = None) -> None:
        self.expected_columns = list(COLUMNS)
        if message is None:
            message = (
                f"No valid data found: expected {EXPECTED_COLUMN_COUNT} columns "
                f"({', '.join(COLUMNS)})"
            )
        super().__init__(message)


class MalformedRowSkipped(ValueError):
    """A single line was dropped. Raised and counted inside the parser only."""

    def __init__(self, line_number: int, token_count: int) -> None:
        self.line_number = line_number
        self.token_count = token_count
        super().__init__(
            f"Line {line_number}: {token_count} fields, expected at least {EXPECTED_COLUMN_COUNT}"
        )


class EmptyExportError(ValueError):
    """Export requested on an empty active subset."""

    def __init__(self, message: str = "No data to export: the active subset is empty") -> None:
        super().__init__(message)
