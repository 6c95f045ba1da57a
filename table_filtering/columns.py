"""
Column schema - static declarations of the fields a table can be filtered
and sorted on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .errors import ColumnSchemaError


class FilterKind(str, Enum):
    TEXT = "text"
    ENUM = "enum"
    RANGE = "range"
    DATE_PRESET = "date_preset"
    BOOLEAN = "boolean"


RANGE_FORMATS = ("number", "currency")

DEFAULT_BOOLEAN_LABELS = ("Has", "Doesn't have")
DEFAULT_SORT_LABELS = ("A → Z", "Z → A")


@dataclass(frozen=True)
class EnumOption:
    value: str
    label: str
    color: Optional[str] = None


@dataclass(frozen=True)
class DatePreset:
    value: str
    label: str


# Bucket keys understood by the date-preset evaluator
STANDARD_DATE_PRESETS = (
    DatePreset("today", "Today"),
    DatePreset("this_week", "This week"),
    DatePreset("7plus_days", "7+ days ago"),
    DatePreset("never", "Never"),
)


@dataclass(frozen=True)
class ColumnDef:
    """
    One queryable field of a record collection.

    `accessor` is used for filtering and counting, and for sorting unless a
    `sort_accessor` is given (e.g. a formatted date vs. its timestamp).
    Both must be pure; the engine calls them any number of times.

    Usage:
        ColumnDef(
            id='status', label='Status', filter_kind=FilterKind.ENUM,
            accessor=lambda row: row['status'],
            enum_options=(EnumOption('open', 'Open'), EnumOption('closed', 'Closed')),
        )
    """

    id: str
    label: str
    filter_kind: FilterKind
    accessor: Callable[[Any], Any]
    sort_accessor: Optional[Callable[[Any], Any]] = None
    enum_options: Tuple[EnumOption, ...] = ()
    date_presets: Tuple[DatePreset, ...] = ()
    range_format: str = "number"
    boolean_labels: Tuple[str, str] = DEFAULT_BOOLEAN_LABELS
    sort_labels: Tuple[str, str] = DEFAULT_SORT_LABELS
    sortable: bool = True
    filterable: bool = True

    def sort_value(self, row):
        accessor = self.sort_accessor or self.accessor
        return accessor(row)

    def option_values(self) -> List[str]:
        """Declared option values, in order, for enum and date-preset columns."""
        if self.filter_kind == FilterKind.ENUM:
            return [o.value for o in self.enum_options]
        if self.filter_kind == FilterKind.DATE_PRESET:
            return [p.value for p in self.date_presets]
        return []

    def option_label(self, value: str) -> str:
        for option in self.enum_options:
            if option.value == value:
                return option.label
        for preset in self.date_presets:
            if preset.value == value:
                return preset.label
        return value

    def describe(self) -> Dict:
        """JSON-friendly description of the column for a rendering layer."""
        description = {
            'id': self.id,
            'label': self.label,
            'filter_kind': self.filter_kind.value,
            'sortable': self.sortable,
            'filterable': self.filterable,
            'sort_labels': list(self.sort_labels),
        }
        if self.filter_kind == FilterKind.ENUM:
            description['enum_options'] = [
                {'value': o.value, 'label': o.label, 'color': o.color}
                for o in self.enum_options
            ]
        elif self.filter_kind == FilterKind.DATE_PRESET:
            description['date_presets'] = [
                {'value': p.value, 'label': p.label} for p in self.date_presets
            ]
        elif self.filter_kind == FilterKind.RANGE:
            description['range_format'] = self.range_format
        elif self.filter_kind == FilterKind.BOOLEAN:
            description['boolean_labels'] = list(self.boolean_labels)
        return description


def validate_columns(columns: Sequence[ColumnDef]) -> Dict[str, ColumnDef]:
    """
    Check a schema and index it by column id.

    Raises:
        ColumnSchemaError: on duplicate ids, an enum column without options,
            a date-preset column without presets, or an unknown range format
    """
    by_id: Dict[str, ColumnDef] = {}
    for col in columns:
        if col.id in by_id:
            raise ColumnSchemaError(f"Duplicate column id: {col.id}")
        if not isinstance(col.filter_kind, FilterKind):
            raise ColumnSchemaError(f"Column {col.id} has invalid filter kind: {col.filter_kind!r}")
        if col.filter_kind == FilterKind.ENUM and not col.enum_options:
            raise ColumnSchemaError(f"Enum column {col.id} declares no enum_options")
        if col.filter_kind == FilterKind.DATE_PRESET and not col.date_presets:
            raise ColumnSchemaError(f"Date preset column {col.id} declares no date_presets")
        if col.filter_kind == FilterKind.RANGE and col.range_format not in RANGE_FORMATS:
            raise ColumnSchemaError(f"Column {col.id} has unknown range_format: {col.range_format}")
        by_id[col.id] = col
    return by_id


def find_column(columns: Sequence[ColumnDef], column_id: str) -> Optional[ColumnDef]:
    for col in columns:
        if col.id == column_id:
            return col
    return None
