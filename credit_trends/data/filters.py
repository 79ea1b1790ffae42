"""
Filter engine — evaluates a FilterSelection against the full record frame.
"""
from __future__ import annotations

import pandas as pd

from credit_trends.data.schemas import Dimension, FilterSelection


def apply_filters(df: pd.DataFrame, selection: FilterSelection | None) -> pd.DataFrame:
    """Rows passing every non-empty dimension, in their original order.

    Always evaluated against the frame it is given; callers pass the full
    record set so that removing a value restores excluded rows.
    """
    if selection is None or selection.is_empty() or df.empty:
        return df.copy()

    mask = pd.Series(True, index=df.index)
    for dim in Dimension:
        wanted = selection.values(dim)
        if wanted:
            mask &= df[dim.field].isin(list(wanted))
    return df[mask].copy()


def distinct_values(df: pd.DataFrame) -> dict[Dimension, list]:
    """Distinct values per dimension for populating selection controls.

    Years descending; string dimensions ascending.
    """
    options: dict[Dimension, list] = {}
    for dim in Dimension:
        if df.empty:
            options[dim] = []
            continue
        unique = df[dim.field].drop_duplicates().tolist()
        if dim == Dimension.YEARS:
            options[dim] = sorted((int(v) for v in unique), reverse=True)
        else:
            options[dim] = sorted(str(v) for v in unique)
    return options
