from .errors import TableFilteringError, ColumnSchemaError
from .columns import (
    ColumnDef,
    FilterKind,
    EnumOption,
    DatePreset,
    STANDARD_DATE_PRESETS,
    validate_columns,
    find_column,
)
from .filter_values import (
    FilterValue,
    TextFilter,
    EnumFilter,
    RangeFilter,
    DatePresetFilter,
    BooleanFilter,
    SortConfig,
    normalize_filter,
)
from .evaluator import matches, apply_filters
from .sorting import compare, sort_rows
from .facets import enum_counts, date_preset_counts
from .summaries import ActiveFilter, describe_filter, describe_filters
from .codec import (
    CodecError,
    serialize_state,
    deserialize_state,
    filter_value_from_dict,
    filter_value_to_dict,
)
from .stores import KeyValueStore, MemoryStore, JsonFileStore
from .filter_engine import TableFilterEngine, TableView
from .export import to_dataframe
from .logging_config import configure_logging

__all__ = [
    "TableFilteringError",
    "ColumnSchemaError",
    "ColumnDef",
    "FilterKind",
    "EnumOption",
    "DatePreset",
    "STANDARD_DATE_PRESETS",
    "validate_columns",
    "find_column",
    "FilterValue",
    "TextFilter",
    "EnumFilter",
    "RangeFilter",
    "DatePresetFilter",
    "BooleanFilter",
    "SortConfig",
    "normalize_filter",
    "matches",
    "apply_filters",
    "compare",
    "sort_rows",
    "enum_counts",
    "date_preset_counts",
    "ActiveFilter",
    "describe_filter",
    "describe_filters",
    "CodecError",
    "serialize_state",
    "deserialize_state",
    "filter_value_from_dict",
    "filter_value_to_dict",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "TableFilterEngine",
    "TableView",
    "to_dataframe",
    "configure_logging",
]
