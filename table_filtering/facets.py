"""
Facet counter - how many records of the full, unfiltered collection fall
into each option or date bucket of a column.

Counts ignore the current filters on purpose: next to each option they
preview how many records would match if it were chosen.
"""

from collections import Counter
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from .columns import ColumnDef, FilterKind
from .utils import date_buckets, stringify


def enum_counts(rows: Iterable[Any], column: ColumnDef) -> Dict[str, int]:
    """Tally the stringified accessor value of every row, skipping empty keys."""
    counts = Counter()
    for row in rows:
        key = stringify(column.accessor(row))
        if key:
            counts[key] += 1
    return dict(counts)


def date_preset_counts(rows: Iterable[Any], column: ColumnDef,
                       now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Count rows per date bucket. A row increments every bucket it satisfies
    ("today" and "this_week" can co-occur). Non date-preset columns give {}.
    """
    if column.filter_kind != FilterKind.DATE_PRESET:
        return {}
    now = now or datetime.now()
    counts = Counter()
    for row in rows:
        for bucket in date_buckets(column.accessor(row), now):
            counts[bucket] += 1
    return dict(counts)
