# tests/conftest.py
"""
In-memory stand-in for the Supabase client.

Mirrors the query-builder chain the backend uses
(table().select().eq().order().execute() and friends) and records every
executed request in order, so tests can assert on request sequencing.
"""
import itertools
from types import SimpleNamespace

import pytest


class FakeAPIError(Exception):
    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_n = None

    # -- verbs --
    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, rows):
        self.op = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, values):
        self.op = "update"
        self.payload = values
        return self

    def upsert(self, row):
        self.op = "upsert"
        self.payload = row
        return self

    def delete(self):
        self.op = "delete"
        return self

    # -- modifiers --
    def eq(self, column, value):
        self.filters.append((column, "eq", value))
        return self

    def neq(self, column, value):
        self.filters.append((column, "neq", value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        for column, kind, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "neq" and row.get(column) == value:
                return False
        return True

    def execute(self):
        self.db.calls.append(SimpleNamespace(table=self.table, op=self.op, payload=self.payload, filters=list(self.filters)))
        if (self.table, self.op) in self.db.fail_on:
            raise FakeAPIError(self.db.fail_on[(self.table, self.op)])

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            created = []
            for r in self.payload:
                row = dict(r)
                row.setdefault("id", f"{self.table}-{next(self.db.ids)}")
                row.setdefault("created_at", f"2024-01-{next(self.db.days):02d}T10:00:00+00:00")
                rows.append(row)
                created.append(dict(row))
            return SimpleNamespace(data=[] if self.db.empty_inserts else created)

        if self.op == "upsert":
            for row in rows:
                if row.get("id") == self.payload.get("id"):
                    row.update(self.payload)
                    return SimpleNamespace(data=[dict(row)])
            rows.append(dict(self.payload))
            return SimpleNamespace(data=[dict(self.payload)])

        matched = [r for r in rows if self._matches(r)]

        if self.op == "update":
            for r in matched:
                r.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=[dict(r) for r in matched])

        result = [dict(r) for r in matched]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda r: r.get(column), reverse=desc)
        if self.limit_n is not None:
            result = result[: self.limit_n]
        return SimpleNamespace(data=result)


class FakeAuth:
    def __init__(self):
        self.calls = []
        self.errors = {}
        self.sign_in_response = SimpleNamespace(
            user=SimpleNamespace(id="user-1", email="jane.doe@lendbridge.io"),
            session=SimpleNamespace(access_token="access-1", refresh_token="refresh-1"),
        )
        self.sign_up_response = SimpleNamespace(user=SimpleNamespace(id="user-2", email="new@lendbridge.io"), session=None)
        self.get_user_response = SimpleNamespace(user=SimpleNamespace(id="user-1", email="jane.doe@lendbridge.io"))

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    def sign_in_with_password(self, credentials):
        self._call("sign_in_with_password", credentials)
        return self.sign_in_response

    def sign_up(self, credentials):
        self._call("sign_up", credentials)
        return self.sign_up_response

    def get_user(self, jwt=None):
        self._call("get_user", jwt)
        return self.get_user_response

    def set_session(self, access_token, refresh_token):
        self._call("set_session", access_token, refresh_token)

    def sign_out(self):
        self._call("sign_out")


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self.fail_on = {}
        self.empty_inserts = False
        self.ids = itertools.count(1)
        self.days = itertools.count(1)
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def executed(self, table=None):
        return [c for c in self.calls if table is None or c.table == table]


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def terms_values():
    return {"loan_amount": 12000, "loan_term": 24, "interest_rate": 7.5, "purpose": "Business"}


@pytest.fixture
def personal_values():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@lendbridge.io",
        "phone": "555-0100",
        "address": "1 Main Street, Springfield",
    }


@pytest.fixture
def new_card_values():
    return {
        "saved_card": "",
        "card_number": "4242424242424242",
        "card_name": "Jane Doe",
        "expiry_date": "12/29",
        "cvv": "123",
        "save_card": False,
    }


@pytest.fixture
def complete_values(terms_values, personal_values, new_card_values):
    return {**terms_values, **personal_values, **new_card_values}
