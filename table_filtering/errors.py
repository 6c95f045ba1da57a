"""
Exceptions raised by table_filtering.
"""


class TableFilteringError(Exception):
    pass


class ColumnSchemaError(TableFilteringError, ValueError):
    """Raised when a column schema is invalid (duplicate ids, missing options)."""
