"""
Shared pytest fixtures: in-memory stand-ins for Supabase and OpenAI
"""
import base64
import itertools
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest

from app.core import dependencies
from app.core.config import settings

# 1x1 PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
JPEG_BASE64 = base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg-bytes").decode("ascii")

TABLE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "profiles": {"avatar_url": None},
    "habit_stacks": {},
    "habits": {"description": None, "completed": False, "position": 0},
    "habit_verifications": {
        "is_verified": False,
        "pending_verification": False,
        "image_url": None,
        "verified_at": None,
    },
    "user_points": {"total_points": 0, "current_streak": 0, "last_activity_date": None},
}

# Tables keyed by something other than a generated id
PRIMARY_KEYS = {"user_points": "user_id"}


class FakeQuery:
    """Chainable query mimicking the postgrest builder used by the repositories"""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.action = "select"
        self.columns = "*"
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.ordering: List[tuple] = []
        self.max_rows: Optional[int] = None

    # actions
    def select(self, columns: str = "*"):
        self.columns = columns
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def upsert(self, payload, on_conflict: Optional[str] = None):
        self.action, self.payload = "upsert", payload
        self.on_conflict = on_conflict or PRIMARY_KEYS.get(self.table, "id")
        return self

    def delete(self):
        self.action = "delete"
        return self

    # filters
    def _filter(self, column, predicate):
        self.filters.append(lambda row: predicate(row.get(column)))
        return self

    def eq(self, column, value):
        return self._filter(column, lambda v: v == value)

    def neq(self, column, value):
        return self._filter(column, lambda v: v != value)

    def in_(self, column, values):
        values = list(values)
        return self._filter(column, lambda v: v in values)

    def gt(self, column, value):
        return self._filter(column, lambda v: v is not None and v > value)

    def gte(self, column, value):
        return self._filter(column, lambda v: v is not None and v >= value)

    def lt(self, column, value):
        return self._filter(column, lambda v: v is not None and v < value)

    def lte(self, column, value):
        return self._filter(column, lambda v: v is not None and v <= value)

    def order(self, column, desc: bool = False):
        self.ordering.append((column, desc))
        return self

    def limit(self, count: int):
        self.max_rows = count
        return self

    # execution
    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        return {c.strip(): row.get(c.strip()) for c in self.columns.split(",")}

    def execute(self):
        if self.table in self.db.failing_tables:
            raise Exception(f"simulated failure on {self.table}")

        rows = self.db.tables.setdefault(self.table, [])

        if self.action == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            return SimpleNamespace(data=[dict(self.db.add_row(self.table, item)) for item in items])

        if self.action == "upsert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            stored = []
            for item in items:
                existing = next((r for r in rows if r.get(self.on_conflict) == item.get(self.on_conflict)), None)
                if existing is None:
                    stored.append(dict(self.db.add_row(self.table, item)))
                else:
                    existing.update(item)
                    stored.append(dict(existing))
            return SimpleNamespace(data=stored)

        matched = [r for r in rows if self._matches(r)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched])

        if self.action == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=[dict(r) for r in matched])

        for column, desc in reversed(self.ordering):
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        if self.max_rows is not None:
            matched = matched[:self.max_rows]
        return SimpleNamespace(data=[self._project(r) for r in matched])


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        if "rpc" in self.db.failing_tables:
            raise Exception("simulated rpc failure")
        if self.name != "add_user_points":
            raise Exception(f"unknown function {self.name}")

        rows = self.db.tables.setdefault("user_points", [])
        row = next((r for r in rows if r["user_id"] == self.params["p_user_id"]), None)
        if row is None:
            row = self.db.add_row("user_points", {"user_id": self.params["p_user_id"]})
        row["total_points"] += self.params["p_amount"]
        return SimpleNamespace(data=row["total_points"])


class FakeBucket:
    def __init__(self, storage: "FakeStorage", bucket: str):
        self.storage = storage
        self.bucket = bucket

    def upload(self, path, file, file_options=None):
        if self.storage.fail:
            raise Exception("simulated upload failure")
        self.storage.objects[(self.bucket, path)] = (file, file_options or {})
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.bucket}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects: Dict[tuple, tuple] = {}
        self.fail = False

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def sign_out(self, jwt, scope="global"):
        if jwt not in self.auth.tokens:
            raise Exception("Invalid token")
        self.auth.tokens.pop(jwt)


class FakeAuth:
    """Email/password and OAuth calls of the Supabase auth client"""

    def __init__(self):
        self.users: Dict[str, Dict[str, str]] = {}
        self.tokens: Dict[str, SimpleNamespace] = {}
        self.confirm_email = False
        self.admin = FakeAdmin(self)
        self._ids = itertools.count(1)

    def _session_for(self, user):
        token = f"token-{user.id}-{next(self._ids)}"
        self.tokens[token] = user
        return SimpleNamespace(access_token=token, refresh_token=f"refresh-{token}", expires_at=4102444800)

    def issue_token(self, user_id: str, email: Optional[str] = None) -> str:
        """Register a user directly and return a valid access token"""
        user = SimpleNamespace(id=user_id, email=email)
        return self._session_for(user).access_token

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise Exception("User already registered")
        user = SimpleNamespace(id=f"user-{next(self._ids)}", email=email)
        self.users[email] = {"password": credentials["password"], "id": user.id}
        session = None if self.confirm_email else self._session_for(user)
        return SimpleNamespace(user=user, session=session)

    def sign_in_with_password(self, credentials):
        account = self.users.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise Exception("Invalid login credentials")
        user = SimpleNamespace(id=account["id"], email=credentials["email"])
        return SimpleNamespace(user=user, session=self._session_for(user))

    def sign_in_with_oauth(self, credentials):
        redirect = credentials.get("options", {}).get("redirect_to")
        return SimpleNamespace(
            provider=credentials["provider"],
            url=f"https://fake.supabase.co/auth/v1/authorize?provider={credentials['provider']}&redirect_to={redirect}"
        )

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=user)


class FakeSupabase:
    """In-memory Supabase client: tables, RPC, storage and auth"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failing_tables = set()
        self.storage = FakeStorage()
        self.auth = FakeAuth()
        self._ids = itertools.count(1)
        self._clock = datetime(2025, 1, 1)

    def add_row(self, table: str, item: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(TABLE_DEFAULTS.get(table, {}))
        row.setdefault("id", f"{table}-{next(self._ids)}")
        if table != "user_points":
            self._clock += timedelta(seconds=1)
            row.setdefault("created_at", self._clock.isoformat() + "+00:00")
        row.update(item)
        self.tables.setdefault(table, []).append(row)
        return row

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Dict[str, Any]) -> FakeRpc:
        return FakeRpc(self, name, params)

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])


class FakeOpenAI:
    """Returns canned chat completion replies and records requests"""

    def __init__(self, reply: str = '{"isVerified": true, "confidence": 0.9, "explanation": "Looks done"}'):
        self.reply = reply
        self.error: Optional[Exception] = None
        self.requests: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))])


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    monkeypatch.setattr(dependencies, "_supabase_client", db)
    monkeypatch.setattr(dependencies, "create_auth_client", lambda: db)
    return db


@pytest.fixture
def fake_openai(monkeypatch):
    client = FakeOpenAI()
    monkeypatch.setattr(dependencies, "_openai_client", client)
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    return client


@pytest.fixture
def make_stack(fake_db):
    """Insert a stack with habits for a user; returns (stack_row, habit_rows)"""
    def _make(user_id: str, name: str = "Morning", habits=("Stretch",)):
        stack = fake_db.add_row("habit_stacks", {"user_id": user_id, "name": name})
        habit_rows = [
            fake_db.add_row("habits", {"stack_id": stack["id"], "name": habit, "position": i})
            for i, habit in enumerate(habits)
        ]
        return stack, habit_rows
    return _make
