"""Tests for DataFrame export."""
from table_filtering import EnumFilter, TableFilterEngine, to_dataframe


class TestToDataFrame:

    def test_one_column_per_definition(self, columns, rows):
        df = to_dataframe(rows, columns)
        assert list(df.columns) == ['name', 'status', 'amount', 'last_contacted', 'has_task']
        assert len(df) == 4
        assert df['name'].tolist() == ['Acme', 'birchwood', 'Cobalt', 'Dunmore']

    def test_labels_as_headers(self, columns, rows):
        df = to_dataframe(rows, columns, use_labels=True)
        assert list(df.columns) == ['Name', 'Status', 'Amount', 'Last contacted', 'Follow-up']

    def test_exports_filtered_view(self, columns, rows, clock):
        engine = TableFilterEngine(columns, clock=clock)
        engine.set_filter('status', EnumFilter({'closed'}))
        df = to_dataframe(engine.apply(rows), columns)
        assert df['name'].tolist() == ['birchwood']

    def test_empty_rows_keep_columns(self, columns):
        df = to_dataframe([], columns)
        assert df.empty
        assert list(df.columns) == ['name', 'status', 'amount', 'last_contacted', 'has_task']
