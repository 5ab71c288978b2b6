"""
테스트 공통 설정

Supabase 클라이언트 대신 메모리 기반 가짜 클라이언트를 데이터 계층에 주입합니다.
"""

import os
import uuid
from datetime import datetime
from types import SimpleNamespace

os.environ["APP_TIMEZONE"] = "Asia/Tokyo"
os.environ["MONTHLY_TARGET_MINUTES"] = "3000"

import pytest
from fastapi.testclient import TestClient
from supabase import AuthError

from study_tracker.auth import get_current_user
from study_tracker.config import Settings, get_settings
from study_tracker.date_utils import convert_local_date_to_utc, to_utc_iso
from study_tracker.main import app
from study_tracker.models import database
from study_tracker.models.user import AuthUser

USER = AuthUser(id="user-1", email="user@example.com")
OTHER_USER = AuthUser(id="user-2", email="other@example.com")
ADMIN = AuthUser(id="admin-1", email="admin@example.com")


def _comparable(value):
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


def _sort_key(value):
    value = _comparable(value)
    return isinstance(value, str), value


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """supabase-py 쿼리 빌더에서 사용하는 메서드만 구현"""

    def __init__(self, tables, name, max_rows=None):
        self._rows = tables.setdefault(name, [])
        self._max_rows = max_rows
        self._action = "select"
        self._columns = "*"
        self._count = None
        self._payload = None
        self._filters = []
        self._orders = []
        self._limit = None
        self._range = None

    def select(self, columns="*", count=None):
        self._columns = columns
        self._count = count
        return self

    def insert(self, payload):
        self._action = "insert"
        self._payload = payload
        return self

    def update(self, payload):
        self._action = "update"
        self._payload = payload
        return self

    def delete(self):
        self._action = "delete"
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self._filters.append(
            lambda row: row.get(column) is not None
            and _comparable(row[column]) >= _comparable(value)
        )
        return self

    def lte(self, column, value):
        self._filters.append(
            lambda row: row.get(column) is not None
            and _comparable(row[column]) <= _comparable(value)
        )
        return self

    def order(self, column, desc=False):
        self._orders.append((column, desc))
        return self

    def limit(self, size):
        self._limit = size
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def _project(self, row):
        if self._columns == "*":
            return dict(row)
        columns = [c.strip() for c in self._columns.split(",")]
        return {c: row.get(c) for c in columns}

    def execute(self):
        if self._action == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in payload:
                row = dict(item)
                row.setdefault("id", uuid.uuid4().hex)
                self._rows.append(row)
                inserted.append(dict(row))
            return FakeResponse(inserted)

        matched = [row for row in self._rows if all(f(row) for f in self._filters)]

        if self._action == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in matched])

        if self._action == "delete":
            for row in matched:
                self._rows.remove(row)
            return FakeResponse([dict(row) for row in matched])

        # 마지막 정렬 키부터 안정 정렬하면 앞쪽 키가 우선
        for column, desc in reversed(self._orders):
            matched = sorted(matched, key=lambda row: _sort_key(row.get(column)), reverse=desc)
        count = len(matched) if self._count else None
        if self._range is not None:
            start, end = self._range
            matched = matched[start:end + 1]
        if self._limit is not None:
            matched = matched[:self._limit]
        # PostgREST db-max-rows
        if self._max_rows is not None:
            matched = matched[:self._max_rows]
        return FakeResponse([self._project(row) for row in matched], count=count)


class FakeAuthError(AuthError):
    def __init__(self, message):
        Exception.__init__(self, message)
        self.message = message


class FakeAuth:
    def __init__(self):
        self.tokens = {}

    def get_user(self, token):
        if token not in self.tokens:
            raise FakeAuthError("invalid JWT")
        user = self.tokens[token]
        return SimpleNamespace(user=SimpleNamespace(id=user.id, email=user.email))


class FakeRpc:
    def __init__(self, db, name, params):
        self._db = db
        self._name = name
        self._params = params

    def execute(self):
        self._db.rpc_calls.append((self._name, self._params))
        if self._name == "delete_user_account":
            user_id = self._params["target_user_id"]
            tables = self._db.tables
            tables["study_sessions"] = [r for r in tables["study_sessions"] if r["user_id"] != user_id]
            tables["profiles"] = [r for r in tables["profiles"] if r["id"] != user_id]
        return FakeResponse(None)


class FakeSupabase:
    def __init__(self):
        self.tables = {"profiles": [], "study_sessions": []}
        self.auth = FakeAuth()
        self.rpc_calls = []
        self.max_rows = None

    def table(self, name):
        return FakeQuery(self.tables, name, self.max_rows)

    def rpc(self, name, params):
        return FakeRpc(self, name, params)

    def add_profile(self, user, **fields):
        row = {"id": user.id, "email": user.email}
        row.update(fields)
        self.tables["profiles"].append(row)
        return row

    def add_session(self, user_id, subject, duration, day, memo=None):
        row = {
            "id": uuid.uuid4().hex,
            "user_id": user_id,
            "subject": subject,
            "duration": duration,
            "date": to_utc_iso(convert_local_date_to_utc(day)),
            "memo": memo,
        }
        self.tables["study_sessions"].append(row)
        return row


@pytest.fixture
def fake_db(monkeypatch):
    fake = FakeSupabase()
    monkeypatch.setattr(database, "_supabase_client", fake)
    monkeypatch.setattr(database, "_supabase_initialized", True)
    return fake


def _client_for(user):
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_settings] = lambda: Settings(
        admin_emails=(ADMIN.email,),
        monthly_target_minutes=3000,
    )
    return TestClient(app)


@pytest.fixture
def client(fake_db):
    yield _client_for(USER)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(fake_db):
    yield _client_for(ADMIN)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(fake_db):
    """인증 의존성을 대체하지 않는 클라이언트"""
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
