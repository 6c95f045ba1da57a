"""Tests for the per-record filter evaluator."""
from datetime import date, datetime, timezone

import pytest

from table_filtering import (
    BooleanFilter,
    ColumnDef,
    DatePresetFilter,
    EnumFilter,
    FilterKind,
    RangeFilter,
    TextFilter,
    apply_filters,
    matches,
)
from table_filtering.utils import date_buckets, parse_date


def _col(kind, **kwargs):
    return ColumnDef(id='v', label='V', filter_kind=kind, accessor=lambda row: row['v'], **kwargs)


class TestTextFilter:

    def test_case_insensitive_substring(self):
        col = _col(FilterKind.TEXT)
        assert matches({'v': 'Acme Capital'}, col, TextFilter('CAP'))
        assert not matches({'v': 'Acme Capital'}, col, TextFilter('fund'))

    def test_none_matches_only_empty_query(self):
        col = _col(FilterKind.TEXT)
        assert not matches({'v': None}, col, TextFilter('a'))
        assert matches({'v': None}, col, TextFilter(''))

    def test_numbers_are_stringified(self):
        col = _col(FilterKind.TEXT)
        assert matches({'v': 2024.0}, col, TextFilter('2024'))
        assert not matches({'v': 2024.0}, col, TextFilter('.0'))


class TestEnumFilter:

    def test_membership(self):
        col = _col(FilterKind.ENUM)
        f = EnumFilter({'open'})
        assert matches({'v': 'open'}, col, f)
        assert not matches({'v': 'closed'}, col, f)

    def test_non_string_values_compare_as_strings(self):
        col = _col(FilterKind.ENUM)
        assert matches({'v': 3}, col, EnumFilter({'3'}))
        assert matches({'v': True}, col, EnumFilter({'true'}))

    def test_none_is_empty_string(self):
        col = _col(FilterKind.ENUM)
        assert not matches({'v': None}, col, EnumFilter({'open'}))


class TestRangeFilter:

    @pytest.mark.parametrize('value,expected', [
        (999, False),
        (1000, True),
        (2000, True),
        (2001, False),
    ])
    def test_bounds_are_inclusive(self, value, expected):
        col = _col(FilterKind.RANGE)
        assert matches({'v': value}, col, RangeFilter(1000, 2000)) is expected

    def test_open_sided(self):
        col = _col(FilterKind.RANGE)
        assert matches({'v': 10 ** 9}, col, RangeFilter(min=1000))
        assert matches({'v': -5}, col, RangeFilter(max=0))

    def test_non_numbers_never_match(self):
        col = _col(FilterKind.RANGE)
        for value in (None, '1500', True):
            assert not matches({'v': value}, col, RangeFilter(min=0))


class TestBooleanFilter:

    @pytest.mark.parametrize('value', [None, False, 0, 0.0, '', float('nan')])
    def test_falsy_values_lack(self, value):
        col = _col(FilterKind.BOOLEAN)
        assert matches({'v': value}, col, BooleanFilter('lacks'))
        assert not matches({'v': value}, col, BooleanFilter('has'))

    @pytest.mark.parametrize('value', [True, 1, -2.5, 'task', [0]])
    def test_truthy_values_have(self, value):
        col = _col(FilterKind.BOOLEAN)
        assert matches({'v': value}, col, BooleanFilter('has'))
        assert not matches({'v': value}, col, BooleanFilter('lacks'))


class TestParseDate:

    def test_date_only_string_is_utc_midnight(self):
        expected = datetime(2024, 5, 15, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parse_date('2024-05-15') == expected
        assert parse_date(' 2024-05-15 ') == expected

    def test_naive_datetime_string_is_local(self):
        assert parse_date('2024-05-15T00:00:00') == datetime(2024, 5, 15)

    def test_date_object_is_local_midnight(self):
        assert parse_date(date(2024, 5, 15)) == datetime(2024, 5, 15)


class TestDateBuckets:

    def test_today_and_this_week_overlap(self, now):
        assert date_buckets('2024-05-15T08:00:00', now) == ['today', 'this_week']

    def test_less_than_a_day_old_counts_as_today(self, now):
        # Yesterday evening is under 24h ago
        assert 'today' in date_buckets('2024-05-14T20:00:00', now)

    def test_earlier_this_week(self, now):
        assert date_buckets('2024-05-13T09:00:00', now) == ['this_week']

    def test_before_week_start_but_under_seven_days(self, now):
        assert date_buckets('2024-05-11T12:00:00', now) == []

    def test_exactly_seven_days(self, now):
        assert date_buckets('2024-05-08T12:00:00', now) == ['7plus_days']

    def test_week_starts_on_sunday(self, now):
        assert date_buckets('2024-05-12T00:00:00', now) == ['this_week']
        assert date_buckets('2024-05-11T23:59:59', now) == []

    @pytest.mark.parametrize('value', [None, 'not a date', '', 1715774400, True])
    def test_unparseable_is_never(self, value, now):
        assert date_buckets(value, now) == ['never']

    def test_date_and_datetime_objects(self, now):
        assert date_buckets(date(2024, 5, 1), now) == ['7plus_days']
        assert date_buckets(datetime(2024, 5, 15, 1), now) == ['today', 'this_week']

    def test_aware_values_are_converted(self, now):
        local_now = now.astimezone()
        aware = (local_now.astimezone(timezone.utc)).isoformat()
        assert 'today' in date_buckets(aware, now)


class TestDatePresetFilter:

    def test_nine_days_old_matches_7plus_but_null_does_not(self, now):
        col = _col(FilterKind.DATE_PRESET)
        f = DatePresetFilter({'7plus_days'})
        assert matches({'v': '2024-05-06T12:00:00'}, col, f, now=now)
        assert not matches({'v': None}, col, f, now=now)

    def test_never_only_matches_missing_values(self, now):
        col = _col(FilterKind.DATE_PRESET)
        f = DatePresetFilter({'never'})
        assert matches({'v': None}, col, f, now=now)
        assert matches({'v': 'garbage'}, col, f, now=now)
        assert not matches({'v': '2024-05-01T00:00:00'}, col, f, now=now)

    def test_presets_combine_with_or(self, now):
        col = _col(FilterKind.DATE_PRESET)
        f = DatePresetFilter({'today', 'never'})
        assert matches({'v': '2024-05-15T10:00:00'}, col, f, now=now)
        assert matches({'v': None}, col, f, now=now)
        assert not matches({'v': '2024-05-13T10:00:00'}, col, f, now=now)


class TestApplyFilters:

    def test_status_and_amount_example(self, columns):
        by_id = {c.id: c for c in columns}
        data = [
            {'status': 'open', 'amount': 500},
            {'status': 'closed', 'amount': 1500},
            {'status': 'open', 'amount': 3000},
        ]
        result = apply_filters(data, by_id, {
            'status': EnumFilter({'open'}),
            'amount': RangeFilter(min=1000),
        })
        assert result == [{'status': 'open', 'amount': 3000}]

    def test_conjunction_is_intersection(self, columns, rows, now):
        by_id = {c.id: c for c in columns}
        f1 = {'status': EnumFilter({'open'})}
        f2 = {'has_task': BooleanFilter('has')}
        both = apply_filters(rows, by_id, {**f1, **f2}, now=now)
        alone1 = apply_filters(rows, by_id, f1, now=now)
        alone2 = apply_filters(rows, by_id, f2, now=now)
        assert both == [r for r in alone1 if r in alone2]
        assert [r['name'] for r in both] == ['Acme', 'Dunmore']

    def test_unknown_column_is_skipped(self, columns, rows):
        by_id = {c.id: c for c in columns}
        assert apply_filters(rows, by_id, {'nope': TextFilter('x')}) == rows

    def test_input_is_not_mutated(self, columns, rows):
        by_id = {c.id: c for c in columns}
        snapshot = list(rows)
        apply_filters(rows, by_id, {'status': EnumFilter({'closed'})})
        assert rows == snapshot
