"""Shared test fixtures."""
from datetime import datetime

import pytest

from table_filtering import (
    ColumnDef,
    EnumOption,
    FilterKind,
    MemoryStore,
    STANDARD_DATE_PRESETS,
)

# Wednesday; the week started on Sunday 2024-05-12
NOW = datetime(2024, 5, 15, 12, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def columns():
    return [
        ColumnDef(
            id='name', label='Name', filter_kind=FilterKind.TEXT,
            accessor=lambda row: row.get('name'),
        ),
        ColumnDef(
            id='status', label='Status', filter_kind=FilterKind.ENUM,
            accessor=lambda row: row.get('status'),
            enum_options=(EnumOption('open', 'Open'), EnumOption('closed', 'Closed')),
        ),
        ColumnDef(
            id='amount', label='Amount', filter_kind=FilterKind.RANGE,
            accessor=lambda row: row.get('amount'),
            range_format='currency',
        ),
        ColumnDef(
            id='last_contacted', label='Last contacted', filter_kind=FilterKind.DATE_PRESET,
            accessor=lambda row: row.get('last_contacted_at'),
            date_presets=STANDARD_DATE_PRESETS,
        ),
        ColumnDef(
            id='has_task', label='Follow-up', filter_kind=FilterKind.BOOLEAN,
            accessor=lambda row: row.get('task'),
            boolean_labels=('Has task', 'No task'),
            sortable=False,
        ),
    ]


@pytest.fixture
def rows():
    return [
        {'name': 'Acme', 'status': 'open', 'amount': 500,
         'last_contacted_at': '2024-05-15T08:00:00', 'task': 'Call back'},
        {'name': 'birchwood', 'status': 'closed', 'amount': 1500,
         'last_contacted_at': '2024-05-06T12:00:00', 'task': None},
        {'name': 'Cobalt', 'status': 'open', 'amount': 3000,
         'last_contacted_at': None, 'task': ''},
        {'name': 'Dunmore', 'status': 'open', 'amount': None,
         'last_contacted_at': '2024-05-13T09:00:00', 'task': 'Intro'},
    ]


@pytest.fixture
def store():
    return MemoryStore()
