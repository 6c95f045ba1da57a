"""
Sort comparator - orders records by a single column.

Records whose sort value is None always go last, whichever the direction.
"""

import locale
import unicodedata
from functools import cmp_to_key
from typing import Any, Dict, List, Optional

from .columns import ColumnDef
from .filter_values import SortConfig
from .utils import is_number, stringify


def _base_form(text: str) -> str:
    # Accent- and case-insensitive form, like a "base" sensitivity collator
    decomposed = unicodedata.normalize('NFKD', text)
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def _sign(value) -> int:
    return (value > 0) - (value < 0)


def compare_values(a: Any, b: Any) -> int:
    """Ascending comparison of two non-None sort values."""
    if isinstance(a, str) and isinstance(b, str):
        return _sign(locale.strcoll(_base_form(a), _base_form(b)))
    if is_number(a) and is_number(b):
        return _sign(a - b)
    return _sign(locale.strcoll(stringify(a), stringify(b)))


def compare(a: Any, b: Any, sort_config: Optional[SortConfig],
            columns: Dict[str, ColumnDef]) -> int:
    """
    Compare two records under a sort config.

    Returns a negative number if `a` goes first, positive if `b` does,
    0 if they tie. No config or an unknown column means every pair ties.
    """
    if sort_config is None:
        return 0
    column = columns.get(sort_config.column_id)
    if column is None:
        return 0

    a_val = column.sort_value(a)
    b_val = column.sort_value(b)

    if a_val is None and b_val is None:
        return 0
    if a_val is None:
        return 1
    if b_val is None:
        return -1

    cmp = compare_values(a_val, b_val)
    return -cmp if sort_config.direction == "desc" else cmp


def sort_rows(rows: List[Any], sort_config: Optional[SortConfig],
              columns: Dict[str, ColumnDef]) -> List[Any]:
    """Return a new, stably sorted list. Without a sort config the order is kept."""
    if sort_config is None or sort_config.column_id not in columns:
        return list(rows)
    return sorted(rows, key=cmp_to_key(lambda a, b: compare(a, b, sort_config, columns)))
