"""
TableFilterEngine - owns the filter and sort state of one table and derives
the filtered/sorted view, active-filter summaries and facet counts from it.
Works with any record collection plus a column schema.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from .codec import deserialize_state, serialize_state
from .columns import ColumnDef, FilterKind, validate_columns
from .evaluator import apply_filters
from .facets import date_preset_counts, enum_counts
from .filter_values import SORT_DIRECTIONS, FilterValue, SortConfig, is_valid_for, normalize_filter
from .sorting import sort_rows
from .stores import KeyValueStore, MemoryStore
from .summaries import ActiveFilter, describe_filters

logger = logging.getLogger(__name__)


@dataclass
class TableView:
    """Everything a rendering layer needs for one pass over the data."""
    filtered_data: List[Any]
    active_filters: List[ActiveFilter]
    sort_config: Optional[SortConfig]
    total: int
    filtered: int = field(init=False)

    def __post_init__(self):
        self.filtered = len(self.filtered_data)

    @property
    def has_active_filters(self) -> bool:
        return bool(self.active_filters)


class TableFilterEngine:
    """
    Holds at most one filter per column plus a single-column sort, and
    applies them to data. Mutations are validated against the column
    schema; neutral filters (empty text, empty or full selections, open
    ranges) are never stored.

    Data is passed in at apply time - the engine doesn't own the data.

    With a `scope`, state is loaded from `store` on construction and
    written back after every mutation. Without one the engine is
    memory-only and never touches a store.

    Usage:
        engine = TableFilterEngine(columns, scope='outreach-targets', store=store)
        engine.set_filter('status', EnumFilter({'open'}))
        engine.toggle_sort('amount')
        rows = engine.apply(data)
    """

    def __init__(self, columns: Sequence[ColumnDef], scope: Optional[str] = None,
                 store: Optional[KeyValueStore] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.columns: List[ColumnDef] = list(columns)
        self._columns: Dict[str, ColumnDef] = validate_columns(self.columns)
        self.scope = scope
        self.store = (store if store is not None else MemoryStore()) if scope else None
        self.clock = clock
        self.filters: Dict[str, FilterValue] = {}
        self.sort_config: Optional[SortConfig] = None
        # Filters and sort are replaced as a unit; readers take a snapshot under the lock
        self._lock = threading.RLock()
        self._load()

    # --- Filter actions ---

    def set_filter(self, column_id: str, value: Optional[FilterValue]) -> bool:
        """
        Install or remove one column's filter. A neutral value removes it.

        Returns:
            False if the call was rejected (unknown or unfilterable column,
            value whose kind doesn't match the column), True otherwise
        """
        column = self._columns.get(column_id)
        if column is None:
            logger.warning("Ignoring filter on unknown column %s", column_id)
            return False
        if value is not None:
            if not column.filterable:
                logger.warning("Ignoring filter on unfilterable column %s", column_id)
                return False
            if not is_valid_for(column, value):
                logger.warning("Ignoring %r on %s column %s", value, column.filter_kind.value, column_id)
                return False

        normalized = normalize_filter(column, value)
        with self._lock:
            filters = dict(self.filters)
            if normalized is None:
                filters.pop(column_id, None)
            else:
                filters[column_id] = normalized
            self.filters = filters
            logger.debug("Filter on %s set to %r", column_id, normalized)
            self._persist()
        return True

    def clear_filter(self, column_id: str):
        """Remove one column's filter. Clearing an absent filter is a no-op on state."""
        with self._lock:
            self.filters = {k: v for k, v in self.filters.items() if k != column_id}
            logger.debug("Filter on %s cleared", column_id)
            self._persist()

    def clear_all_filters(self):
        """
        Remove all filters and delete the persisted entry. The in-memory
        sort is kept; the next mutation writes it back.
        """
        with self._lock:
            self.filters = {}
            logger.debug("All filters cleared")
            self._forget()

    def reset(self):
        """Drop filters and sort, and delete the persisted entry."""
        with self._lock:
            self.filters = {}
            self.sort_config = None
            logger.debug("Filter state reset")
            self._forget()

    def get_filter(self, column_id: str) -> Optional[FilterValue]:
        return self.filters.get(column_id)

    @property
    def has_active_filters(self) -> bool:
        return len(self.filters) > 0

    # --- Sort actions ---

    def toggle_sort(self, column_id: str) -> Optional[SortConfig]:
        """
        Advance the sort cycle none -> asc -> desc -> none for a column.
        Switching to a different column starts it at asc.

        Returns:
            The new sort config (None when sorting was switched off)
        """
        if not self._check_sortable(column_id):
            return self.sort_config
        with self._lock:
            current = self.sort_config
            if current is None or current.column_id != column_id:
                self.sort_config = SortConfig(column_id, "asc")
            elif current.direction == "asc":
                self.sort_config = SortConfig(column_id, "desc")
            else:
                self.sort_config = None
            logger.debug("Sort toggled to %r", self.sort_config)
            self._persist()
            return self.sort_config

    def set_sort(self, column_id: str, direction: Optional[str]) -> bool:
        """Set the sort absolutely. A None direction switches sorting off."""
        if direction is not None:
            if direction not in SORT_DIRECTIONS:
                logger.warning("Ignoring unknown sort direction %r", direction)
                return False
            if not self._check_sortable(column_id):
                return False
        with self._lock:
            self.sort_config = SortConfig(column_id, direction) if direction else None
            logger.debug("Sort set to %r", self.sort_config)
            self._persist()
        return True

    def get_sort_direction(self, column_id: str) -> Optional[str]:
        sort_config = self.sort_config
        if sort_config is not None and sort_config.column_id == column_id:
            return sort_config.direction
        return None

    def _check_sortable(self, column_id: str) -> bool:
        column = self._columns.get(column_id)
        if column is None:
            logger.warning("Ignoring sort on unknown column %s", column_id)
            return False
        if not column.sortable:
            logger.warning("Ignoring sort on unsortable column %s", column_id)
            return False
        return True

    # --- Derived data ---

    def apply(self, data: Sequence[Any]) -> List[Any]:
        """
        Filter then sort data.

        Args:
            data: Records to filter; never mutated

        Returns:
            New list of the matching records, sorted by the current sort
            config, or in input order when there is none
        """
        with self._lock:
            filters, sort_config = self.filters, self.sort_config
        rows = apply_filters(data, self._columns, filters, now=self.clock())
        return sort_rows(rows, sort_config, self._columns)

    def get_active_filters(self) -> List[ActiveFilter]:
        """Return one summary per active filter, in the order they were set."""
        return describe_filters(self._columns, self.filters)

    def get_enum_counts(self, data: Sequence[Any], column_id: str) -> Dict[str, int]:
        """Option counts over the full, unfiltered data. Unknown column -> {}."""
        column = self._columns.get(column_id)
        if column is None:
            return {}
        return enum_counts(data, column)

    def get_date_preset_counts(self, data: Sequence[Any], column_id: str) -> Dict[str, int]:
        """Date bucket counts over the full, unfiltered data. Unknown column -> {}."""
        column = self._columns.get(column_id)
        if column is None:
            return {}
        return date_preset_counts(data, column, now=self.clock())

    def get_counts(self, data: Sequence[Any], column_id: str) -> Dict[str, int]:
        """Facet counts suited to the column's kind ({} for text, range and boolean)."""
        column = self._columns.get(column_id)
        if column is None:
            return {}
        if column.filter_kind == FilterKind.ENUM:
            return enum_counts(data, column)
        if column.filter_kind == FilterKind.DATE_PRESET:
            return date_preset_counts(data, column, now=self.clock())
        return {}

    def view(self, data: Sequence[Any]) -> TableView:
        with self._lock:
            active_filters = self.get_active_filters()
            sort_config = self.sort_config
            filtered_data = self.apply(data)
        return TableView(
            filtered_data=filtered_data,
            active_filters=active_filters,
            sort_config=sort_config,
            total=len(data),
        )

    # --- Persistence ---

    def serialize(self) -> str:
        with self._lock:
            return serialize_state(self.filters, self.sort_config)

    def restore(self, blob: Optional[str], persist: bool = False):
        """
        Replace the live state with a serialized one. Entries that don't fit
        the schema are dropped; a corrupt blob restores the empty state.
        """
        filters, sort_config = deserialize_state(blob)
        with self._lock:
            self.filters = self._validated_filters(filters)
            self.sort_config = self._validated_sort(sort_config)
            if persist:
                self._persist()

    def _validated_filters(self, filters: Dict[str, FilterValue]) -> Dict[str, FilterValue]:
        result = {}
        for column_id, value in filters.items():
            column = self._columns.get(column_id)
            if column is None or not column.filterable or not is_valid_for(column, value):
                logger.warning("Dropping persisted filter on %s: does not fit the schema", column_id)
                continue
            normalized = normalize_filter(column, value)
            if normalized is not None:
                result[column_id] = normalized
        return result

    def _validated_sort(self, sort_config: Optional[SortConfig]) -> Optional[SortConfig]:
        if sort_config is None:
            return None
        column = self._columns.get(sort_config.column_id)
        if column is None or not column.sortable:
            logger.warning("Dropping persisted sort on %s", sort_config.column_id)
            return None
        return sort_config

    def _load(self):
        if self.store is None:
            return
        try:
            blob = self.store.get(self.scope)
        except Exception as e:
            logger.warning("Could not read filter state for %s: %s", self.scope, e,
                           extra={'scope': self.scope})
            return
        self.restore(blob)
        logger.debug("Loaded filter state for %s: %d filters, sort %r",
                     self.scope, len(self.filters), self.sort_config,
                     extra={'scope': self.scope})

    def _persist(self):
        if self.store is None:
            return
        try:
            self.store.set(self.scope, serialize_state(self.filters, self.sort_config))
        except Exception as e:
            logger.warning("Could not write filter state for %s: %s", self.scope, e,
                           extra={'scope': self.scope})

    def _forget(self):
        if self.store is None:
            return
        try:
            self.store.remove(self.scope)
        except Exception as e:
            logger.warning("Could not remove filter state for %s: %s", self.scope, e,
                           extra={'scope': self.scope})
