"""
Shared fixtures: an in-memory stand-in for the Supabase client that speaks the
subset of the PostgREST query builder the services use, plus a TestClient whose
auth dependency reads the caller's profile id from a header.
"""

import re
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi import HTTPException, Request
from fastapi.testclient import TestClient

from g4g.core.dependencies import get_current_user_id
from g4g.database.supabase_client import get_supabase
from g4g.main import app
from g4g.modules.auth.service import clear_auth_cache

TEST_USER_HEADER = "X-Test-User"


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


def _norm(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _parse_temporal(value):
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _compare(left, right):
    """-1/0/1 comparing a stored value with a filter value"""
    if isinstance(left, (int, float)) and not isinstance(left, bool):
        try:
            right = float(right)
        except (TypeError, ValueError):
            pass
        else:
            return (left > right) - (left < right)
    if isinstance(left, str) and isinstance(right, str):
        lt, rt = _parse_temporal(left), _parse_temporal(right)
        if lt is not None and rt is not None:
            return (lt > rt) - (lt < rt)
    left, right = str(left), str(right)
    return (left > right) - (left < right)


def _condition(column, op, value):
    def check(row):
        stored = row.get(column)
        if op == "eq":
            return _norm(stored) == _norm(value)
        if op == "neq":
            return _norm(stored) != _norm(value)
        if op == "in":
            return _norm(stored) in {_norm(v) for v in value}
        if op == "ilike":
            if stored is None:
                return False
            pattern = "^" + ".*".join(re.escape(part) for part in str(value).split("%")) + "$"
            return re.match(pattern, str(stored), re.IGNORECASE) is not None
        if stored is None:
            return False
        result = _compare(stored, value)
        return {"gt": result > 0, "gte": result >= 0, "lt": result < 0, "lte": result <= 0}[op]
    return check


def _split_top_level(expr):
    parts, depth, current = [], 0, ""
    for ch in expr:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current)
            current = ""
        else:
            current += ch
    if current:
        parts.append(current)
    return parts


def _parse_or(expr):
    """Turn a PostgREST or=() expression into a row predicate"""
    checks = []
    for part in _split_top_level(expr):
        part = part.strip()
        if part.startswith("and(") and part.endswith(")"):
            inner = [_parse_simple(p) for p in _split_top_level(part[4:-1])]
            checks.append(lambda row, inner=inner: all(c(row) for c in inner))
        else:
            checks.append(_parse_simple(part))
    return lambda row: any(c(row) for c in checks)


def _parse_simple(part):
    column, op, value = part.strip().split(".", 2)
    return _condition(column, op, value)


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.count_mode = None
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.orders = []
        self._limit = None
        self._offset = 0

    # Verbs
    def select(self, columns="*", count=None):
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def upsert(self, payload, on_conflict="id"):
        self.op, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def delete(self):
        self.op = "delete"
        return self

    # Filters
    def eq(self, column, value):
        self.filters.append(_condition(column, "eq", value))
        return self

    def neq(self, column, value):
        self.filters.append(_condition(column, "neq", value))
        return self

    def gt(self, column, value):
        self.filters.append(_condition(column, "gt", value))
        return self

    def gte(self, column, value):
        self.filters.append(_condition(column, "gte", value))
        return self

    def lt(self, column, value):
        self.filters.append(_condition(column, "lt", value))
        return self

    def lte(self, column, value):
        self.filters.append(_condition(column, "lte", value))
        return self

    def in_(self, column, values):
        self.filters.append(_condition(column, "in", list(values)))
        return self

    def ilike(self, column, pattern):
        self.filters.append(_condition(column, "ilike", pattern))
        return self

    def or_(self, expr):
        self.filters.append(_parse_or(expr))
        return self

    # Shaping
    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def offset(self, count):
        self._offset = count
        return self

    def range(self, start, end):
        self._offset = start
        self._limit = end - start + 1
        return self

    def _matching(self):
        return [row for row in self.db.rows(self.table) if all(f(row) for f in self.filters)]

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        wanted = [c.strip() for c in self.columns.split(",")]
        return {c: row.get(c) for c in wanted}

    def execute(self):
        self.db.maybe_fail(self.table, self.op)
        if self.op == "select":
            rows = self._matching()
            count = len(rows) if self.count_mode else None
            for column, desc in reversed(self.orders):
                present = [r for r in rows if r.get(column) is not None]
                missing = [r for r in rows if r.get(column) is None]
                present.sort(key=lambda r: r[column], reverse=desc)
                rows = present + missing
            rows = rows[self._offset:]
            if self._limit is not None:
                rows = rows[:self._limit]
            return FakeResponse([self._project(r) for r in rows], count)
        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            return FakeResponse([dict(self.db.insert_row(self.table, item)) for item in items])
        if self.op == "update":
            updated = []
            for row in self._matching():
                row.update(self.payload)
                updated.append(dict(row))
            return FakeResponse(updated)
        if self.op == "upsert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            keys = [k.strip() for k in self.on_conflict.split(",")]
            result = []
            for item in items:
                existing = next(
                    (r for r in self.db.rows(self.table)
                     if all(_norm(r.get(k)) == _norm(item.get(k)) for k in keys)),
                    None
                )
                if existing is not None:
                    existing.update(item)
                    result.append(dict(existing))
                else:
                    result.append(dict(self.db.insert_row(self.table, item)))
            return FakeResponse(result)
        if self.op == "delete":
            removed = self._matching()
            self.db.tables[self.table] = [r for r in self.db.rows(self.table) if r not in removed]
            return FakeResponse([dict(r) for r in removed])
        raise ValueError(f"Unsupported operation {self.op}")


class FakeSupabase:
    """In-memory tables keyed by name; rows are plain dicts."""

    def __init__(self):
        self.tables = {}
        self.triggers = {}
        self.failures = set()
        self._seq = 0

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, name):
        return self.tables.setdefault(name, [])

    def now_iso(self):
        self._seq += 1
        stamp = datetime.now(timezone.utc) + timedelta(microseconds=self._seq)
        return stamp.isoformat(timespec="microseconds")

    def insert_row(self, table, item):
        row = dict(item)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self.now_iso())
        self.rows(table).append(row)
        trigger = self.triggers.get(table)
        if trigger:
            trigger(self, row)
        return row

    def fail(self, table, op):
        self.failures.add((table, op))

    def maybe_fail(self, table, op):
        if (table, op) in self.failures:
            raise RuntimeError(f"simulated {op} failure on {table}")


def award_mission_xp(db, log):
    """Mirror of the user_logs insert trigger: +100 XP, +1 workout, +1 streak"""
    for profile in db.rows("profiles"):
        if profile["id"] == log["user_id"]:
            profile["xp"] = (profile.get("xp") or 0) + 100
            profile["workout_count"] = (profile.get("workout_count") or 0) + 1
            profile["current_streak"] = (profile.get("current_streak") or 0) + 1
            profile["last_active"] = db.now_iso()


@pytest.fixture
def db():
    fake = FakeSupabase()
    fake.triggers["user_logs"] = award_mission_xp
    return fake


def _header_user(request: Request) -> dict:
    user_id = request.headers.get(TEST_USER_HEADER)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return {"id": user_id, "email": f"{user_id}@example.com", "user_metadata": {}, "app_metadata": {}}


@pytest.fixture
def client(db):
    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_current_user_id] = _header_user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_profile(db):
    def _make(role="user", tier=".223", **fields):
        user_id = fields.pop("id", None) or str(uuid.uuid4())
        profile = {
            "id": user_id,
            "email": fields.pop("email", f"{user_id[:8]}@example.com"),
            "full_name": None,
            "role": role,
            "tier": tier,
            "xp": 0,
            "current_streak": 0,
            "workout_count": 0,
            "coach_id": None,
            "last_active": None,
            "onboarding_completed": False,
            "dossier_complete": False,
            "created_at": db.now_iso(),
        }
        profile.update(fields)
        db.rows("profiles").append(profile)
        return profile
    return _make


def auth(profile):
    return {TEST_USER_HEADER: profile["id"]}
