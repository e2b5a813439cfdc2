"""
Shared fixtures: an in-memory stand-in for the Supabase client (postgrest
query builder, RPCs and auth) and a TestClient wired to it through
dependency overrides.
"""

import copy
import itertools
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database.supabase_client import get_supabase
from app.core.dependencies import get_current_user_id
from app.modules.auth.service import clear_auth_cache

_EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)

TABLE_DEFAULTS = {
    "ideas": {
        "description": None,
        "business_unit": None,
        "techstack": None,
        "tags": None,
        "status": "draft",
        "priority_level": "medium",
        "progress_percentage": 0,
        "expected_start_date": None,
        "expected_end_date": None,
    },
    "comments": {"parent_comment_id": None},
    "idea_volunteers": {
        "status": "pending",
        "message": None,
        "skills": [],
        "approved_by": None,
        "approved_at": None,
        "updated_at": None,
    },
    "notifications": {"is_read": False, "idea_id": None},
    "idea_gitlab_integration": {
        "access_token_encrypted": None,
        "total_issues": 0,
        "closed_issues": 0,
        "last_sync_at": None,
    },
    "team_members": {"role": "member"},
}


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.ordering = None
        self.row_limit = None
        self.single_mode = None
        self.count_mode = None

    def select(self, columns="*", count=None):
        self.op = "select"
        self.count_mode = count
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        if value == "null":
            self.filters.append(lambda row: row.get(column) is None)
        else:
            self.filters.append(lambda row: row.get(column) is value)
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, size):
        self.row_limit = size
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def _matching(self):
        return [row for row in self.db.rows(self.table) if all(f(row) for f in self.filters)]

    def execute(self):
        if self.table in self.db.failing_tables:
            raise RuntimeError(f"relation {self.table} is unavailable")

        if self.op == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [self.db.add(self.table, p) for p in payloads]
            return FakeResponse(copy.deepcopy(inserted))

        matched = self._matching()

        if self.op == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse(copy.deepcopy(matched))

        if self.op == "delete":
            table_rows = self.db.rows(self.table)
            table_rows[:] = [row for row in table_rows if row not in matched]
            return FakeResponse(copy.deepcopy(matched))

        if self.ordering:
            column, desc = self.ordering
            matched = sorted(matched, key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        count = len(matched) if self.count_mode else None
        if self.row_limit is not None:
            matched = matched[:self.row_limit]
        rows = copy.deepcopy(matched)

        if self.single_mode == "maybe":
            if not rows:
                return None
            return FakeResponse(rows[0], count)
        if self.single_mode == "single":
            if len(rows) != 1:
                raise RuntimeError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(rows[0], count)
        return FakeResponse(rows, count)


class FakeRpc:
    def __init__(self, db, name, params):
        self.db = db
        self.name = name
        self.params = params or {}

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        if self.name in self.db.failing_rpcs:
            raise RuntimeError(f"function {self.name} failed")
        handler = self.db.rpc_handlers.get(self.name)
        if handler is None:
            raise RuntimeError(f"function {self.name} does not exist")
        return FakeResponse(handler(self.params))


class FakeAuth:
    """Supabase Auth surface: users by email, tokens 'token-<user id>'."""

    def __init__(self):
        self.users = {}
        self.get_user_calls = 0
        self.signed_out = 0

    def _user(self, user_id, email, metadata=None):
        return SimpleNamespace(
            id=user_id,
            email=email,
            user_metadata=metadata or {},
            app_metadata={},
            created_at=_EPOCH.isoformat(),
            updated_at=None,
        )

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise RuntimeError("User already registered")
        user_id = str(uuid.uuid4())
        metadata = credentials.get("options", {}).get("data", {})
        self.users[email] = (credentials["password"], self._user(user_id, email, metadata))
        return SimpleNamespace(user=self.users[email][1], session=None)

    def sign_in_with_password(self, credentials):
        entry = self.users.get(credentials["email"])
        if entry is None or entry[0] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        user = entry[1]
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=f"token-{user.id}"))

    def get_user(self, jwt=None):
        self.get_user_calls += 1
        for _, user in self.users.values():
            if jwt == f"token-{user.id}":
                return SimpleNamespace(user=user)
        raise RuntimeError("invalid JWT: token is expired")

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.rpc_calls = []
        self.emails = []
        self.failing_tables = set()
        self.failing_rpcs = set()
        self.auth = FakeAuth()
        self._clock = itertools.count(1)
        self.rpc_handlers = {
            "is_admin": self._is_admin,
            "log_idea_activity": self._log_idea_activity,
            "create_notification": self._create_notification,
            "send_idea_notification_email": self._send_email,
            "sync_gitlab_issues": self._sync_gitlab_issues,
            "update_idea_progress_from_gitlab": self._update_progress,
        }

    def now(self):
        return (_EPOCH + timedelta(seconds=next(self._clock))).isoformat()

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def add(self, table, payload):
        row = copy.deepcopy(TABLE_DEFAULTS.get(table, {}))
        row.update(copy.deepcopy(payload))
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self.now())
        if table == "team_members":
            row.setdefault("joined_at", row["created_at"])
        self.rows(table).append(row)
        return row

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params)

    def rpc_names(self):
        return [name for name, _ in self.rpc_calls]

    # RPC handlers

    def _is_admin(self, params):
        return any(
            r.get("user_id") == params["user_id"] and r.get("role") == "admin"
            for r in self.rows("user_roles")
        )

    def _log_idea_activity(self, params):
        row = self.add("idea_activity", {
            "idea_id": params["p_idea_id"],
            "user_id": params["p_user_id"],
            "action_type": params["p_action_type"],
            "description": params["p_description"],
            "metadata": params.get("p_metadata"),
        })
        return row["id"]

    def _create_notification(self, params):
        row = self.add("notifications", {
            "user_id": params["p_user_id"],
            "idea_id": params["p_idea_id"],
            "title": params["p_title"],
            "message": params["p_message"],
            "type": params["p_type"],
        })
        return row["id"]

    def _send_email(self, params):
        self.emails.append(params)
        return None

    def _sync_gitlab_issues(self, params):
        for row in self.rows("idea_gitlab_integration"):
            if row["idea_id"] == params["p_idea_id"]:
                row["total_issues"] = 4
                row["closed_issues"] = 3
                row["last_sync_at"] = self.now()
                return {"success": True, "total_issues": 4, "closed_issues": 3}
        return {"success": False}

    def _update_progress(self, params):
        integration = next(
            (r for r in self.rows("idea_gitlab_integration") if r["idea_id"] == params["p_idea_id"]),
            None,
        )
        if integration and integration["total_issues"]:
            progress = round(integration["closed_issues"] * 100 / integration["total_issues"])
            for idea in self.rows("ideas"):
                if idea["id"] == params["p_idea_id"]:
                    idea["progress_percentage"] = progress
        return None

    # Seeding helpers

    def add_user(self, user_id, full_name=None, email=None, admin=False):
        self.add("profiles", {
            "id": user_id,
            "full_name": full_name,
            "email": email or f"{user_id}@example.com",
            "avatar_url": None,
        })
        if admin:
            self.add("user_roles", {"user_id": user_id, "role": "admin"})

    def add_idea(self, created_by, title="An idea", **fields):
        return self.add("ideas", {"title": title, "created_by": created_by, **fields})


@pytest.fixture(autouse=True)
def _reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def fake_db():
    db = FakeSupabase()
    db.add_user("alice", "Alice Owner")
    db.add_user("bob", "Bob Builder")
    db.add_user("carol", "Carol Admin", admin=True)
    return db


@pytest.fixture
def auth_state():
    return {"user": {"id": "alice", "email": "alice@example.com"}}


@pytest.fixture
def login_as(auth_state):
    def _login(user_id):
        auth_state["user"] = {"id": user_id, "email": f"{user_id}@example.com"}
    return _login


@pytest.fixture
def client(fake_db, auth_state):
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_current_user_id] = lambda: auth_state["user"]
    yield TestClient(app)
    app.dependency_overrides.clear()
