"""
Filter values - the constraint currently active on one column, tagged by
filter kind - and the sort configuration.
"""

from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Optional, Union

from .columns import ColumnDef, FilterKind
from .utils import is_number

SORT_DIRECTIONS = ("asc", "desc")
BOOLEAN_VALUES = ("has", "lacks")


@dataclass(frozen=True)
class TextFilter:
    query: str
    kind: ClassVar[FilterKind] = FilterKind.TEXT


@dataclass(frozen=True)
class EnumFilter:
    selected: FrozenSet[str]
    kind: ClassVar[FilterKind] = FilterKind.ENUM

    def __post_init__(self):
        object.__setattr__(self, 'selected', frozenset(self.selected))


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive numeric bounds. Currency columns use integer cents."""
    min: Optional[float] = None
    max: Optional[float] = None
    kind: ClassVar[FilterKind] = FilterKind.RANGE


@dataclass(frozen=True)
class DatePresetFilter:
    selected: FrozenSet[str]
    kind: ClassVar[FilterKind] = FilterKind.DATE_PRESET

    def __post_init__(self):
        object.__setattr__(self, 'selected', frozenset(self.selected))


@dataclass(frozen=True)
class BooleanFilter:
    value: str  # "has" | "lacks"
    kind: ClassVar[FilterKind] = FilterKind.BOOLEAN


FilterValue = Union[TextFilter, EnumFilter, RangeFilter, DatePresetFilter, BooleanFilter]

FILTER_VALUE_TYPES = (TextFilter, EnumFilter, RangeFilter, DatePresetFilter, BooleanFilter)


@dataclass(frozen=True)
class SortConfig:
    column_id: str
    direction: str  # "asc" | "desc"


def normalize_filter(column: ColumnDef, value: Optional[FilterValue]) -> Optional[FilterValue]:
    """
    Collapse a neutral filter to None.

    Neutral means: whitespace-only text, an empty selection, an enum or
    date-preset selection covering every declared option, a range with no
    bounds. None always means "no filter on this column".
    """
    if value is None:
        return None
    if isinstance(value, TextFilter):
        return value if value.query.strip() else None
    if isinstance(value, (EnumFilter, DatePresetFilter)):
        if not value.selected:
            return None
        options = set(column.option_values())
        if options and value.selected >= options:
            return None
        return value
    if isinstance(value, RangeFilter):
        if value.min is None and value.max is None:
            return None
        return value
    if isinstance(value, BooleanFilter):
        return value
    raise TypeError(f"Unknown filter value: {value!r}")


def is_valid_for(column: ColumnDef, value: FilterValue) -> bool:
    """True if the filter's tag matches the column's filter kind and its payload is well formed."""
    if not isinstance(value, FILTER_VALUE_TYPES) or value.kind != column.filter_kind:
        return False
    if isinstance(value, TextFilter):
        return isinstance(value.query, str)
    if isinstance(value, RangeFilter):
        return all(is_number(b) for b in (value.min, value.max) if b is not None)
    if isinstance(value, BooleanFilter):
        return value.value in BOOLEAN_VALUES
    return all(isinstance(v, str) for v in value.selected)
