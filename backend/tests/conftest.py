"""Shared fixtures: an in-memory stand-in for the Supabase query builder."""

from __future__ import annotations

import copy
import re
import time
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError
from supabase import AuthApiError

from backend.src.api.dependencies import get_supabase
from backend.src.api.main import app
from backend.src.api.middleware import AuthContext, get_auth_context
from backend.src.models.auth import JWTPayload
from backend.src.services import config as config_module
from backend.src.services.auth import get_auth_service
from backend.src.services.sessions import reset_session_registry

TEST_USER_ID = "user-123"
BASE_TIME = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _split_conditions(expression: str) -> List[str]:
    """Split an or=(...) body on commas outside double quotes."""
    parts, current, quoted, escaped = [], "", False, False
    for char in expression:
        if escaped:
            current += char
            escaped = False
        elif char == "\\":
            current += char
            escaped = True
        elif char == '"':
            current += char
            quoted = not quoted
        elif char == "," and not quoted:
            parts.append(current)
            current = ""
        else:
            current += char
    parts.append(current)
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return re.sub(r"\\(.)", r"\1", value[1:-1])
    return value


def _ilike(pattern: str) -> Callable[[Any], bool]:
    regex = re.compile(
        "^" + ".*".join(re.escape(part) for part in pattern.split("%")) + "$",
        re.IGNORECASE | re.DOTALL,
    )
    return lambda value: value is not None and bool(regex.match(str(value)))


class FakeQuery:
    """Subset of the PostgREST request builder used by the services."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode: Optional[str] = None
        self.head = False
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.order_by: List[tuple[str, bool]] = []
        self.bounds: Optional[tuple[int, int]] = None
        self.max_rows: Optional[int] = None
        self.payload: Any = None
        self.on_conflict = ""
        self.ignore_duplicates = False

    def select(self, columns: str = "*", count: Optional[str] = None, head: bool = False):
        self.columns = columns
        self.count_mode = count
        self.head = head
        return self

    def insert(self, rows):
        self.operation, self.payload = "insert", rows
        return self

    def update(self, values):
        self.operation, self.payload = "update", values
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def upsert(self, rows, on_conflict: str = "", ignore_duplicates: bool = False):
        self.operation, self.payload = "upsert", rows
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def eq(self, column: str, value: Any):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def contains(self, column: str, values: List[str]):
        self.filters.append(lambda row: all(v in (row.get(column) or []) for v in values))
        return self

    def or_(self, expression: str):
        checks = []
        for condition in _split_conditions(expression):
            column, operator, value = condition.split(".", 2)
            assert operator == "ilike", operator
            checks.append((column, _ilike(_unquote(value))))
        self.filters.append(lambda row: any(match(row.get(col)) for col, match in checks))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by.append((column, desc))
        return self

    def range(self, start: int, end: int):
        self.bounds = (start, end)
        return self

    def limit(self, size: int):
        self.max_rows = size
        return self

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        names = [name.strip() for name in self.columns.split(",")]
        return {name: copy.deepcopy(row.get(name)) for name in names}

    def _matching(self) -> List[Dict[str, Any]]:
        return [row for row in self.db.tables.setdefault(self.table, []) if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.calls.append((self.table, self.operation))
        if self.db.delay:
            time.sleep(self.db.delay)
        failure = self.db.failures.get((self.table, self.operation)) or self.db.failures.get(
            (self.table, "*")
        )
        if failure is not None:
            raise failure

        handler = getattr(self, f"_execute_{self.operation}")
        return handler()

    def _execute_select(self):
        rows = self._matching()
        for column, desc in reversed(self.order_by):
            rows = sorted(rows, key=lambda row: (row.get(column) is None, row.get(column) or ""), reverse=desc)
        total = len(rows)
        if self.bounds is not None:
            start, end = self.bounds
            rows = rows[start : end + 1]
        if self.max_rows is not None:
            rows = rows[: self.max_rows]
        data = [] if self.head else [self._project(row) for row in rows]
        return SimpleNamespace(data=data, count=total if self.count_mode else None)

    def _execute_insert(self):
        rows = self.payload if isinstance(self.payload, list) else [self.payload]
        created = [self.db.add_row(self.table, row) for row in rows]
        return SimpleNamespace(data=copy.deepcopy(created), count=None)

    def _execute_update(self):
        rows = self._matching()
        for row in rows:
            row.update(copy.deepcopy(self.payload))
        return SimpleNamespace(data=copy.deepcopy(rows), count=None)

    def _execute_delete(self):
        rows = self._matching()
        table = self.db.tables.setdefault(self.table, [])
        self.db.tables[self.table] = [row for row in table if row not in rows]
        return SimpleNamespace(data=copy.deepcopy(rows), count=None)

    def _execute_upsert(self):
        rows = self.payload if isinstance(self.payload, list) else [self.payload]
        keys = [key.strip() for key in self.on_conflict.split(",") if key.strip()]
        affected = []
        for row in rows:
            existing = next(
                (
                    current
                    for current in self.db.tables.setdefault(self.table, [])
                    if keys and all(current.get(k) == row.get(k) for k in keys)
                ),
                None,
            )
            if existing is None:
                affected.append(self.db.add_row(self.table, row))
            elif not self.ignore_duplicates:
                existing.update(copy.deepcopy(row))
                affected.append(existing)
        return SimpleNamespace(data=copy.deepcopy(affected), count=None)


class FakeSession:
    """Stands in for the httpx session a per-request client owns."""

    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeSupabase:
    """In-memory tables plus call log, injectable failures and latency."""

    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple[str, str]] = []
        self.failures: Dict[tuple[str, str], Exception] = {}
        self.users: Dict[str, Any] = {}
        self.delay = 0.0
        self.session = FakeSession()
        self._next_id = 1
        self.auth = SimpleNamespace(get_user=self._get_user)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add_row(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(row)
        if table == "entries":
            stored.setdefault("id", self._next_id)
            stored.setdefault(
                "created_at", (BASE_TIME + timedelta(minutes=self._next_id)).isoformat()
            )
            self._next_id += 1
        self.tables.setdefault(table, []).append(stored)
        return stored

    def seed_entries(self, count: int, **fields: Any) -> List[Dict[str, Any]]:
        return [
            self.add_row("entries", {"title": f"Entry {i}", "content": f"Body {i}", "tags": [], **fields})
            for i in range(1, count + 1)
        ]

    def fail(self, table: str, operation: str = "*", message: str = "boom", code: str = "500") -> None:
        self.failures[(table, operation)] = APIError({"message": message, "code": code})

    def _get_user(self, token: str):
        user = self.users.get(token)
        if user is None:
            raise AuthApiError("invalid JWT", 401, None)
        return SimpleNamespace(user=user)


@pytest.fixture(autouse=True)
def restore_config_cache():
    """Ensure configuration and auth caches are cleared between tests."""
    config_module.reload_config()
    get_auth_service.cache_clear()
    reset_session_registry()
    yield
    config_module.reload_config()
    get_auth_service.cache_clear()
    reset_session_registry()


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def auth_context() -> AuthContext:
    return AuthContext(
        user_id=TEST_USER_ID,
        token="test-token",
        payload=JWTPayload(sub=TEST_USER_ID, email="reader@example.com", aud="authenticated"),
    )


@pytest.fixture
def client(fake_db: FakeSupabase, auth_context: AuthContext):
    app.dependency_overrides[get_auth_context] = lambda: auth_context
    app.dependency_overrides[get_supabase] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture
def anonymous_client():
    app.dependency_overrides = {}
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}
