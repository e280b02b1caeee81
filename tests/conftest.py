from __future__ import annotations

from typing import Any

import pytest

from ops_dashboard.app.domain.contracts import Session
from ops_dashboard.app.domain.errors import PersistenceError
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.table_engine import TableEngine
from ops_dashboard.app.ui.listing_view import ColumnDef


class FakeRecordStore:
    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records = [dict(record) for record in records or []]
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: PersistenceError | None = None
        self._next_id = 1000

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def list(self, order_by: str | None = None, descending: bool = False) -> list[dict[str, Any]]:
        self.calls.append(("list", (order_by, descending)))
        self._maybe_fail()
        return [dict(record) for record in self.records]

    def insert(self, fields: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("insert", fields))
        self._maybe_fail()
        self._next_id += 1
        record = {"id": self._next_id, **fields}
        self.records.append(record)
        return dict(record)

    def update(self, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("update", (record_id, fields)))
        self._maybe_fail()
        for record in self.records:
            if str(record["id"]) == record_id:
                record.update(fields)
                return dict(record)
        raise PersistenceError("record not found", code="RECORD_NOT_FOUND")

    def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        self._maybe_fail()
        self.records = [record for record in self.records if str(record["id"]) != record_id]

    def count(self) -> int:
        self.calls.append(("count", None))
        self._maybe_fail()
        return len(self.records)


class FakeClipboard:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.copied: list[str] = []

    def copy_text(self, text: str) -> bool:
        if self.ok:
            self.copied.append(text)
        return self.ok


class FakeSessions:
    def __init__(self, session: Session | None = None) -> None:
        self.session = session

    def current_session(self) -> Session | None:
        return self.session


def make_rows(*names: str, **extra: Any) -> list[Row]:
    return [Row(id=str(index + 1), fields={"name": name, **extra}) for index, name in enumerate(names)]


def build_engine(page_size: int = 10, type_field: str | None = None) -> TableEngine:
    columns = [
        ColumnDef("name", "Name"),
        ColumnDef("number", "Number"),
        ColumnDef("arrangement", "Arrangement", filterable=True),
        ColumnDef("quantity", "Quantity"),
        ColumnDef("notes", "Notes", sortable=False),
    ]
    return TableEngine(columns, search_fields=("name", "number"), type_field=type_field, page_size=page_size)


@pytest.fixture
def admin_session() -> Session:
    return Session(user_id="user-1", email="admin@example.com", role="admin", access_token="token-1")


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore(
        [
            {"id": 1, "name": "Alice", "number": "E-001", "position": "Clerk", "arrangement": "full-time", "status": "pending", "start_date": "2024-03-01"},
            {"id": 2, "name": "Bob", "number": "E-002", "position": "Driver", "arrangement": "contract", "status": None, "start_date": "2024-02-01"},
            {"id": 3, "name": "Carol", "number": "E-003", "position": "Manager", "arrangement": "full-time", "status": "success", "start_date": "2024-01-01"},
        ]
    )


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def store_factory():
    return FakeRecordStore


@pytest.fixture
def sessions_factory():
    return FakeSessions


@pytest.fixture
def engine_factory():
    return build_engine


@pytest.fixture
def rows_factory():
    return make_rows
