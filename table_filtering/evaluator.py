"""
Filter evaluator - decides whether one record satisfies one column's filter.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .columns import ColumnDef
from .filter_values import (
    BooleanFilter,
    DatePresetFilter,
    EnumFilter,
    FilterValue,
    RangeFilter,
    TextFilter,
)
from .utils import date_buckets, is_number, is_truthy, stringify


def matches(row: Any, column: ColumnDef, filter_value: FilterValue,
            now: Optional[datetime] = None) -> bool:
    """
    Evaluate a single column filter against a record.

    Args:
        row: The record
        column: The column the filter is installed on
        filter_value: The active filter
        now: Evaluation instant for date presets (default: datetime.now())

    Returns:
        True if the record passes the filter
    """
    raw = column.accessor(row)

    if isinstance(filter_value, TextFilter):
        return filter_value.query.lower() in stringify(raw).lower()

    if isinstance(filter_value, EnumFilter):
        return stringify(raw) in filter_value.selected

    if isinstance(filter_value, RangeFilter):
        if not is_number(raw):
            return False
        if filter_value.min is not None and raw < filter_value.min:
            return False
        if filter_value.max is not None and raw > filter_value.max:
            return False
        return True

    if isinstance(filter_value, DatePresetFilter):
        buckets = date_buckets(raw, now or datetime.now())
        # "never" only ever comes back alone, for missing/unparseable values
        return any(b in filter_value.selected for b in buckets)

    if isinstance(filter_value, BooleanFilter):
        return is_truthy(raw) == (filter_value.value == "has")

    raise TypeError(f"Unknown filter value: {filter_value!r}")


def apply_filters(rows: Iterable[Any], columns: Dict[str, ColumnDef],
                  filters: Dict[str, FilterValue],
                  now: Optional[datetime] = None) -> List[Any]:
    """
    Keep the rows that satisfy every active filter (logical AND).

    Filters naming a column missing from `columns` are skipped.
    """
    now = now or datetime.now()
    items = list(rows)
    for column_id, filter_value in filters.items():
        column = columns.get(column_id)
        if column is None:
            continue
        items = [row for row in items if matches(row, column, filter_value, now)]
    return items
