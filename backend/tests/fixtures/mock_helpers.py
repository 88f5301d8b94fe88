"""Helper functions for creating mocked external services."""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock


def create_mock_supabase(return_data: Optional[List[Dict[str, Any]]] = None):
    """
    Create a mocked Supabase client with chainable query builder.

    Args:
        return_data: Data to return from execute() call

    Returns:
        Mock Supabase client with chainable methods
    """
    mock = Mock()

    # Make all query builder methods return the mock itself (chainable)
    mock.table.return_value = mock
    mock.select.return_value = mock
    mock.eq.return_value = mock
    mock.neq.return_value = mock
    mock.in_.return_value = mock
    mock.not_ = mock
    mock.is_.return_value = mock
    mock.gte.return_value = mock
    mock.order.return_value = mock
    mock.limit.return_value = mock
    mock.range.return_value = mock
    mock.single.return_value = mock
    mock.insert.return_value = mock
    mock.update.return_value = mock
    mock.delete.return_value = mock

    # execute() returns mock response with data
    mock_response = Mock()
    mock_response.data = return_data if return_data is not None else []
    mock.execute.return_value = mock_response

    return mock


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    """Chainable query over one in-memory table, mirroring the postgrest builder."""

    def __init__(self, client: "FakeSupabase", table: str):
        self._client = client
        self._table = table
        self._action = "select"
        self._payload: Any = None
        self._filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._negate_next = False
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None
        self._range: Optional[tuple] = None

    # Actions
    def select(self, *columns, **kwargs):
        self._action = "select"
        return self

    def insert(self, payload, **kwargs):
        self._action = "insert"
        self._payload = payload
        return self

    def update(self, payload, **kwargs):
        self._action = "update"
        self._payload = payload
        return self

    def delete(self, **kwargs):
        self._action = "delete"
        return self

    # Filters
    @property
    def not_(self):
        self._negate_next = True
        return self

    def _add(self, predicate):
        if self._negate_next:
            self._negate_next = False
            inner = predicate

            def predicate(row):
                return not inner(row)

        self._filters.append(predicate)
        return self

    def eq(self, column, value):
        return self._add(lambda row: row.get(column) == value)

    def neq(self, column, value):
        return self._add(lambda row: row.get(column) != value)

    def is_(self, column, value):
        if value in (None, "null"):
            return self._add(lambda row: row.get(column) is None)
        return self._add(lambda row: row.get(column) == value)

    def in_(self, column, values):
        values = list(values)
        return self._add(lambda row: row.get(column) in values)

    def gte(self, column, value):
        return self._add(lambda row: row.get(column) is not None and row.get(column) >= value)

    def lte(self, column, value):
        return self._add(lambda row: row.get(column) is not None and row.get(column) <= value)

    # Modifiers
    def order(self, column, desc=False, **kwargs):
        self._order = (column, desc)
        return self

    def limit(self, count, **kwargs):
        self._limit = count
        return self

    def range(self, start, end, **kwargs):
        self._range = (start, end)
        return self

    def execute(self):
        self._client.executed.append((self._table, self._action))

        error = self._client.failures.get((self._table, self._action)) or self._client.failures.get(self._table)
        if error is not None:
            raise error

        rows = self._client.tables.setdefault(self._table, [])

        if self._action == "insert":
            payloads = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = [self._client._insert_row(self._table, p) for p in payloads]
            return FakeResponse([dict(r) for r in inserted])

        matched = [row for row in rows if all(f(row) for f in self._filters)]

        if self._action == "delete":
            self._client.tables[self._table] = [row for row in rows if row not in matched]
            return FakeResponse([dict(r) for r in matched])

        if self._action == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(r) for r in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(
                matched,
                key=lambda row: (row.get(column) is not None, row.get(column) or ""),
                reverse=desc,
            )

        if self._limit is not None:
            matched = matched[: self._limit]

        if self._range is not None:
            start, end = self._range
            matched = matched[start : end + 1]

        if self._client.max_rows is not None:
            matched = matched[: self._client.max_rows]

        return FakeResponse([dict(r) for r in matched])


class FakeSupabase:
    """
    In-memory stand-in for a Supabase client, for workflow tests.

    Args:
        tables: Initial rows per table name
        unique: Unique column sets per table; inserts violating one raise like
            postgres does (rows with a NULL in the key never conflict)
        now: Timestamp assigned to created_at on insert
        max_rows: Cap on rows returned per select, like PostgREST's db-max-rows
    """

    def __init__(
        self,
        tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        unique: Optional[Dict[str, tuple]] = None,
        now: Optional[datetime] = None,
        max_rows: Optional[int] = None,
    ):
        self.tables = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.unique = unique or {}
        self.now = now or datetime.now(timezone.utc)
        self.max_rows = max_rows
        self.failures: Dict[Any, Exception] = {}
        self.executed: List[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, error: Exception, action: Optional[str] = None) -> None:
        """Make every query on table (optionally one action only) raise error."""
        self.failures[(table, action) if action else table] = error

    def rows(self, table: str, **filters) -> List[Dict[str, Any]]:
        return [
            row for row in self.tables.get(table, [])
            if all(row.get(k) == v for k, v in filters.items())
        ]

    def _insert_row(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(payload)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self.now.isoformat())

        key = self.unique.get(table)
        if key and all(row.get(col) is not None for col in key):
            for existing in self.tables.setdefault(table, []):
                if all(existing.get(col) == row.get(col) for col in key):
                    raise Exception(
                        f'duplicate key value violates unique constraint "{table}_{"_".join(key)}_key"'
                    )

        self.tables.setdefault(table, []).append(row)
        return row
