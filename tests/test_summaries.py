"""Tests for active filter descriptions."""
import pytest

from table_filtering import (
    BooleanFilter,
    ColumnDef,
    DatePresetFilter,
    EnumFilter,
    EnumOption,
    FilterKind,
    RangeFilter,
    TextFilter,
    describe_filter,
    describe_filters,
)
from table_filtering.summaries import format_currency, format_number


@pytest.fixture
def by_id(columns):
    return {c.id: c for c in columns}


class TestFormatting:

    @pytest.mark.parametrize('value,expected', [
        (0, '0'),
        (1500, '1,500'),
        (1234.5, '1,234.5'),
        (1.23456, '1.235'),
        (-2000000, '-2,000,000'),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize('cents,expected', [
        (1000, '$10'),
        (123450, '$1,234.5'),
        (99, '$0.99'),
    ])
    def test_format_currency(self, cents, expected):
        assert format_currency(cents) == expected


class TestDescribeFilter:

    def test_text_is_quoted(self, by_id):
        assert describe_filter(by_id['name'], TextFilter('acme')) == '"acme"'

    def test_enum_uses_labels_in_declared_order(self, by_id):
        assert describe_filter(by_id['status'], EnumFilter({'closed', 'open'})) == 'Open, Closed'

    def test_enum_overflow(self):
        col = ColumnDef(
            id='stage', label='Stage', filter_kind=FilterKind.ENUM,
            accessor=lambda row: row['stage'],
            enum_options=tuple(EnumOption(v, v.title()) for v in ('a', 'b', 'c', 'd', 'e', 'f')),
        )
        assert describe_filter(col, EnumFilter({'a', 'b', 'c', 'd', 'e'})) == 'A, B, C +2'

    def test_enum_undeclared_value_falls_back_to_raw(self, by_id):
        assert describe_filter(by_id['status'], EnumFilter({'archived'})) == 'archived'

    def test_currency_range(self, by_id):
        col = by_id['amount']
        assert describe_filter(col, RangeFilter(100000, 250000)) == '$1,000 – $2,500'
        assert describe_filter(col, RangeFilter(min=100000)) == '≥ $1,000'
        assert describe_filter(col, RangeFilter(max=50)) == '≤ $0.5'

    def test_number_range(self):
        col = ColumnDef(id='shares', label='Shares', filter_kind=FilterKind.RANGE,
                        accessor=lambda row: row['shares'])
        assert describe_filter(col, RangeFilter(1000, 5000)) == '1,000 – 5,000'

    def test_date_presets(self, by_id):
        value = DatePresetFilter({'never', 'today'})
        assert describe_filter(by_id['last_contacted'], value) == 'Today, Never'

    def test_boolean_labels(self, by_id):
        assert describe_filter(by_id['has_task'], BooleanFilter('has')) == 'Has task'
        assert describe_filter(by_id['has_task'], BooleanFilter('lacks')) == 'No task'

    def test_default_boolean_labels(self):
        col = ColumnDef(id='b', label='B', filter_kind=FilterKind.BOOLEAN, accessor=bool)
        assert describe_filter(col, BooleanFilter('lacks')) == "Doesn't have"


class TestDescribeFilters:

    def test_keeps_insertion_order_and_skips_unknown(self, by_id):
        filters = {
            'status': EnumFilter({'open'}),
            'ghost': TextFilter('x'),
            'name': TextFilter('ac'),
        }
        result = describe_filters(by_id, filters)
        assert [f.column_id for f in result] == ['status', 'name']
        assert result[0].column_label == 'Status'
        assert result[0].to_dict() == {'column_id': 'status', 'column_label': 'Status', 'summary': 'Open'}
