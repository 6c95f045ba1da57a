"""
State codec - converts live filter/sort state to and from a flat JSON blob.

This is the only place that knows sets become lists on the way out.
Decoding never raises: a corrupt blob decodes to the empty state and a
malformed filter entry is dropped on its own.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from .filter_values import (
    BOOLEAN_VALUES,
    SORT_DIRECTIONS,
    BooleanFilter,
    DatePresetFilter,
    EnumFilter,
    FilterValue,
    RangeFilter,
    SortConfig,
    TextFilter,
)
from .utils import is_number

logger = logging.getLogger(__name__)


class CodecError(ValueError):
    pass


def filter_value_to_dict(value: FilterValue) -> Dict:
    if isinstance(value, TextFilter):
        return {'type': value.kind.value, 'query': value.query}
    if isinstance(value, (EnumFilter, DatePresetFilter)):
        return {'type': value.kind.value, 'selected': sorted(value.selected)}
    if isinstance(value, RangeFilter):
        data = {'type': value.kind.value}
        if value.min is not None:
            data['min'] = value.min
        if value.max is not None:
            data['max'] = value.max
        return data
    if isinstance(value, BooleanFilter):
        return {'type': value.kind.value, 'value': value.value}
    raise TypeError(f"Unknown filter value: {value!r}")


def _string_set(data: Dict):
    selected = data.get('selected')
    if not isinstance(selected, list) or not all(isinstance(v, str) for v in selected):
        raise CodecError(f"'selected' must be a list of strings, got {selected!r}")
    return frozenset(selected)


def _bound(data: Dict, key: str):
    bound = data.get(key)
    if bound is not None and not is_number(bound):
        raise CodecError(f"'{key}' must be a number, got {bound!r}")
    return bound


def filter_value_from_dict(data: Any) -> FilterValue:
    """
    Rebuild a filter value from its dict form.

    Raises:
        CodecError: if the tag is unknown or a field is missing or mistyped
    """
    if not isinstance(data, dict):
        raise CodecError(f"Filter value must be an object, got {data!r}")
    kind = data.get('type')

    if kind == 'text':
        query = data.get('query')
        if not isinstance(query, str):
            raise CodecError(f"'query' must be a string, got {query!r}")
        return TextFilter(query)
    if kind == 'enum':
        return EnumFilter(_string_set(data))
    if kind == 'date_preset':
        return DatePresetFilter(_string_set(data))
    if kind == 'range':
        return RangeFilter(min=_bound(data, 'min'), max=_bound(data, 'max'))
    if kind == 'boolean':
        value = data.get('value')
        if value not in BOOLEAN_VALUES:
            raise CodecError(f"'value' must be one of {BOOLEAN_VALUES}, got {value!r}")
        return BooleanFilter(value)
    raise CodecError(f"Unknown filter type: {kind!r}")


def sort_config_from_dict(data: Any) -> Optional[SortConfig]:
    """Rebuild a sort config; anything malformed decodes to None."""
    if not isinstance(data, dict):
        return None
    column_id = data.get('column_id')
    direction = data.get('direction')
    if not isinstance(column_id, str) or direction not in SORT_DIRECTIONS:
        return None
    return SortConfig(column_id, direction)


def serialize_state(filters: Dict[str, FilterValue],
                    sort_config: Optional[SortConfig]) -> str:
    """Encode filters (in insertion order) and sort config as a JSON string."""
    payload = {
        'filters': [[column_id, filter_value_to_dict(value)]
                    for column_id, value in filters.items()],
        'sort_config': (
            {'column_id': sort_config.column_id, 'direction': sort_config.direction}
            if sort_config else None
        ),
    }
    return json.dumps(payload)


def deserialize_state(blob: Optional[str]) -> Tuple[Dict[str, FilterValue], Optional[SortConfig]]:
    """
    Decode a JSON blob produced by serialize_state.

    Returns:
        (filters, sort_config). ({}, None) for a missing or corrupt blob.
    """
    if not blob:
        return {}, None
    try:
        payload = json.loads(blob)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("Discarding corrupt persisted filter state: %s", e)
        return {}, None
    if not isinstance(payload, dict):
        logger.warning("Discarding persisted filter state with unexpected shape: %r", type(payload).__name__)
        return {}, None

    filters: Dict[str, FilterValue] = {}
    entries: List = payload.get('filters') if isinstance(payload.get('filters'), list) else []
    for entry in entries:
        if not (isinstance(entry, list) and len(entry) == 2 and isinstance(entry[0], str)):
            logger.warning("Dropping malformed persisted filter entry: %r", entry)
            continue
        column_id, raw_value = entry
        try:
            filters[column_id] = filter_value_from_dict(raw_value)
        except CodecError as e:
            logger.warning("Dropping persisted filter for column %s: %s", column_id, e)

    return filters, sort_config_from_dict(payload.get('sort_config'))
