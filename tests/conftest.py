"""
Shared test fixtures.

Provides an in-memory stand-in for the Supabase client that understands
the query builder calls the services make (eq filters, ordering, insert,
upsert, delete).
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Settings are read at import time; tests never reach a real project
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from contextlib import ExitStack
from datetime import datetime
from typing import Generator, Optional
from uuid import uuid4

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Chainable query builder over one mock table."""

    def __init__(self, table: "MockSupabaseTable", operation: str, payload=None, **options):
        self._table = table
        self._operation = operation
        self._payload = payload
        self._options = options
        self._filters: list[tuple[str, object]] = []
        self._in_filters: list[tuple[str, list]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None

    # Filters and modifiers

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def in_(self, column, values):
        self._in_filters.append((column, list(values)))
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        if any(row.get(column) != value for column, value in self._filters):
            return False
        return all(row.get(column) in values for column, values in self._in_filters)

    # Execution

    def execute(self) -> MockSupabaseResponse:
        self._table.client.calls.append((self._table.name, self._operation, self._payload))

        if self._table.error is not None:
            raise self._table.error

        handler = getattr(self, f"_execute_{self._operation}")
        return handler()

    def _execute_select(self) -> MockSupabaseResponse:
        rows = [dict(row) for row in self._table.rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda row: (row.get(column) is None, row.get(column) or ""), reverse=desc)
        if self._limit is not None:
            rows = rows[:self._limit]
        return MockSupabaseResponse(data=rows)

    def _execute_insert(self) -> MockSupabaseResponse:
        payload = self._payload if isinstance(self._payload, list) else [self._payload]
        inserted = []
        for item in payload:
            row = {"id": str(uuid4()), "created_at": datetime.utcnow().isoformat() + "Z", **item}
            self._table.rows.append(row)
            inserted.append(dict(row))
        return MockSupabaseResponse(data=inserted)

    def _execute_upsert(self) -> MockSupabaseResponse:
        key = self._options.get("on_conflict") or "id"
        item = dict(self._payload)
        for index, row in enumerate(self._table.rows):
            if key in item and row.get(key) == item[key]:
                merged = {**row, **item}
                self._table.rows[index] = merged
                return MockSupabaseResponse(data=[dict(merged)])
        item.setdefault("id", str(uuid4()))
        self._table.rows.append(item)
        return MockSupabaseResponse(data=[dict(item)])

    def _execute_update(self) -> MockSupabaseResponse:
        updated = []
        for row in self._table.rows:
            if self._matches(row):
                row.update(self._payload)
                updated.append(dict(row))
        return MockSupabaseResponse(data=updated)

    def _execute_delete(self) -> MockSupabaseResponse:
        removed = [row for row in self._table.rows if self._matches(row)]
        self._table.rows[:] = [row for row in self._table.rows if not self._matches(row)]
        return MockSupabaseResponse(data=removed)


class MockSupabaseTable:
    """Mock Supabase table backed by a list of row dicts."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self.client = client
        self.name = name
        self.rows: list[dict] = []
        self.error: Optional[Exception] = None

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self, "select")

    def insert(self, data):
        return MockSupabaseQuery(self, "insert", data)

    def upsert(self, data, **kwargs):
        return MockSupabaseQuery(self, "upsert", data, **kwargs)

    def update(self, data):
        return MockSupabaseQuery(self, "update", data)

    def delete(self):
        return MockSupabaseQuery(self, "delete")


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables: dict[str, MockSupabaseTable] = {}
        self.calls: list[tuple] = []

    def set_table_data(self, table_name: str, data: list):
        """Replace the rows of a table."""
        self.table(table_name).rows = [dict(row) for row in data]

    def set_table_error(self, table_name: str, error: Exception):
        """Make every query on a table raise error."""
        self.table(table_name).error = error

    def rows(self, table_name: str) -> list[dict]:
        """Current rows of a table."""
        return self.table(table_name).rows

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable(self, name)
        return self._tables[name]


# ===================
# FIXTURES
# ===================

SERVICE_MODULES = [
    "services.company_service",
    "services.department_service",
    "services.employment_settings_service",
    "services.contract_service",
    "services.csv_mapping_service",
]

SINGLETONS = [
    ("services.company_service", "_company_service"),
    ("services.department_service", "_department_service"),
    ("services.employment_settings_service", "_employment_settings_service"),
    ("services.contract_service", "_contract_service"),
    ("services.csv_mapping_service", "_csv_mapping_service"),
]


def _reset_singletons():
    import importlib
    for module_name, attribute in SINGLETONS:
        setattr(importlib.import_module(module_name), attribute, None)


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("departments", [
                {"id": "1", "company_id": "company-1", "code": "D01", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("contracts", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with ExitStack() as stack:
        stack.enter_context(patch("config.database.get_supabase_client", return_value=mock_supabase))
        for module_name in SERVICE_MODULES:
            stack.enter_context(
                patch(f"{module_name}.get_supabase_client", return_value=mock_supabase)
            )
        _reset_singletons()
        yield mock_supabase
        _reset_singletons()


@pytest.fixture
def company_id() -> str:
    return "company-1"


@pytest.fixture
def sample_mapping_items() -> dict:
    """Items spread over the five categories, with one duplicated symbol."""
    return {
        "income_items": [
            {"header_symbol": "KY01", "item_name": "基本給", "column_index": 2},
            {"header_symbol": "KY02", "item_name": "残業代", "column_index": 3},
        ],
        "deduction_items": [
            {"header_symbol": "KY11", "item_name": "健康保険", "column_index": 4},
        ],
        "attendance_items": [
            {"header_symbol": "  ", "item_name": "空欄", "column_index": 5},
        ],
        "item_code_items": [
            {"header_symbol": "CODE1", "item_name": "社員番号", "column_index": 0},
        ],
        "ky_items": [
            {"header_symbol": "KY01", "item_name": "基本給(重複)", "column_index": 9},
        ],
    }


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("contracts", [...])
            response = test_client_with_mock_db.get("/api/contracts")
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
