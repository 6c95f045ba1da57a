"""
DataFrame export of a (filtered) record collection.
"""

from typing import Any, Sequence

import pandas as pd

from .columns import ColumnDef


def to_dataframe(rows: Sequence[Any], columns: Sequence[ColumnDef],
                 use_labels: bool = False) -> pd.DataFrame:
    """
    Build a DataFrame with one column per ColumnDef, values from its accessor.

    Args:
        rows: Records, typically engine.apply(data)
        columns: Column schema; column order is kept
        use_labels: Name DataFrame columns by label instead of id

    Returns:
        DataFrame in row order. Empty rows give an empty frame with the
        schema's columns.
    """
    names = [c.label if use_labels else c.id for c in columns]
    records = [[c.accessor(row) for c in columns] for row in rows]
    return pd.DataFrame(records, columns=names)
