"""
Human-readable descriptions of active filters, for chip/badge rendering.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .columns import ColumnDef
from .filter_values import (
    BooleanFilter,
    DatePresetFilter,
    EnumFilter,
    FilterValue,
    RangeFilter,
    TextFilter,
)

MAX_ENUM_LABELS = 3


@dataclass(frozen=True)
class ActiveFilter:
    column_id: str
    column_label: str
    summary: str
    filter_value: FilterValue

    def to_dict(self) -> Dict:
        return {
            'column_id': self.column_id,
            'column_label': self.column_label,
            'summary': self.summary,
        }


def format_number(value: float) -> str:
    """Thousands separators, up to three decimals: 1500 -> "1,500", 1234.5 -> "1,234.5"."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip('0').rstrip('.')


def format_currency(cents: float) -> str:
    """Integer cents to dollars: 123450 -> "$1,234.5"."""
    return f"${format_number(cents / 100)}"


def _ordered_labels(column: ColumnDef, selected: Iterable[str]) -> List[str]:
    declared = column.option_values()
    selected = set(selected)
    ordered = [v for v in declared if v in selected]
    ordered += sorted(selected - set(declared))
    return [column.option_label(v) for v in ordered]


def _describe_range(column: ColumnDef, value: RangeFilter) -> str:
    fmt = format_currency if column.range_format == "currency" else format_number
    if value.min is not None and value.max is not None:
        return f"{fmt(value.min)} – {fmt(value.max)}"
    if value.min is not None:
        return f"≥ {fmt(value.min)}"
    if value.max is not None:
        return f"≤ {fmt(value.max)}"
    return ""


def describe_filter(column: ColumnDef, value: FilterValue) -> str:
    """
    Render one filter value.

    Examples:
        TextFilter('acme')                -> '"acme"'
        EnumFilter({'a', 'b', 'c', 'd'})  -> 'A, B, C +1'
        RangeFilter(min=100000)           -> '≥ $1,000' (currency column)
    """
    if isinstance(value, TextFilter):
        return f'"{value.query}"'
    if isinstance(value, EnumFilter):
        labels = _ordered_labels(column, value.selected)
        summary = ", ".join(labels[:MAX_ENUM_LABELS])
        if len(labels) > MAX_ENUM_LABELS:
            summary += f" +{len(labels) - MAX_ENUM_LABELS}"
        return summary
    if isinstance(value, RangeFilter):
        return _describe_range(column, value)
    if isinstance(value, DatePresetFilter):
        return ", ".join(_ordered_labels(column, value.selected))
    if isinstance(value, BooleanFilter):
        has_label, lacks_label = column.boolean_labels
        return has_label if value.value == "has" else lacks_label
    raise TypeError(f"Unknown filter value: {value!r}")


def describe_filters(columns: Dict[str, ColumnDef],
                     filters: Dict[str, FilterValue]) -> List[ActiveFilter]:
    """One ActiveFilter per active column, in the order the filters were set."""
    result = []
    for column_id, value in filters.items():
        column: Optional[ColumnDef] = columns.get(column_id)
        if column is None:
            continue
        result.append(ActiveFilter(
            column_id=column_id,
            column_label=column.label,
            summary=describe_filter(column, value),
            filter_value=value,
        ))
    return result
