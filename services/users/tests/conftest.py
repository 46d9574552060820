from __future__ import annotations

from datetime import datetime, timezone
from itertools import count
from unittest.mock import MagicMock

import pytest

from services.users.application.interfaces import KeyPage
from services.users.infrastructure.users import DocumentUserRepository

TABLE = "test-table"
NAME_INDEX = "nameIndex"
NOW = datetime(2021, 5, 1, 17, 52, 48, 299871, tzinfo=timezone.utc)


class SequentialIdProvider:
    def __init__(self) -> None:
        self._counter = count(1)

    def generate(self) -> str:
        return f"user-{next(self._counter)}"


class InMemoryDocumentStore:
    """Dict-backed store keyed by ``id`` with an exact-match name index."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, dict]] = {}

    def _table(self, table: str) -> dict[str, dict]:
        return self.tables.setdefault(table, {})

    def get(self, table, key):
        item = self._table(table).get(key["id"])
        return dict(item) if item else None

    def put(self, table, item):
        self._table(table)[item["id"]] = dict(item)

    def delete(self, table, key):
        return self._table(table).pop(key["id"], None)

    def _page(self, items, limit, start_key):
        ids = [item["id"] for item in items]
        start = ids.index(start_key["id"]) + 1 if start_key else 0
        chunk = items[start : start + limit]
        last_key = None
        if start + limit < len(items):
            last_key = {"id": chunk[-1]["id"], "name": chunk[-1]["name"]}
        projections = [{"id": item["id"], "name": item["name"]} for item in chunk]
        return KeyPage(items=projections, last_key=last_key)

    def query(self, table, *, index, field, value, limit, start_key=None):
        matches = [i for i in self._table(table).values() if i.get(field) == value]
        return self._page(matches, limit, start_key)

    def scan(self, table, *, limit, start_key=None):
        return self._page(list(self._table(table).values()), limit, start_key)

    def batch_get(self, table, keys):
        rows = self._table(table)
        # Reverse to mimic the store's lack of ordering guarantees.
        found = [dict(rows[k["id"]]) for k in keys if k["id"] in rows]
        return {table: list(reversed(found))}


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def mock_store():
    return MagicMock()


def build_repository(store) -> DocumentUserRepository:
    return DocumentUserRepository(
        store,
        table_name=TABLE,
        name_index=NAME_INDEX,
        id_provider=SequentialIdProvider(),
        clock=lambda: NOW,
    )


@pytest.fixture
def repository(store):
    return build_repository(store)


@pytest.fixture
def mock_repository(mock_store):
    return build_repository(mock_store)
