"""In-memory stand-in for the hosted auth + table backend.

Speaks just enough of the GoTrue and PostgREST wire protocols for the
client code: sign-up, password sign-in, logout, health, and
select/insert/update/delete with ``eq`` filters and ``order``.
Plug it in with ``httpx.MockTransport(backend.handler)``.
"""

import json
from typing import Any
from urllib.parse import parse_qsl

import httpx

TABLES = ("users", "calendars", "tasks", "projects")

TEST_EMAIL = "ana@example.com"
TEST_PASSWORD = "secret-password"


class FakeBackend:
    """Fake backend holding tables and accounts in dictionaries."""

    def __init__(self, auto_confirm: bool = True) -> None:
        self.auto_confirm = auto_confirm
        self.healthy = True
        self.accounts: dict[str, dict[str, str]] = {}
        self.tokens: dict[str, str] = {}
        self.tables: dict[str, list[dict[str, Any]]] = {name: [] for name in TABLES}
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], tuple[int, dict[str, Any]]] = {}
        self._counters: dict[str, int] = {}
        self._clock = 0

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    # Test helpers

    def _next_id(self, scope: str) -> str:
        self._counters[scope] = self._counters.get(scope, 0) + 1
        return str(self._counters[scope])

    def _timestamp(self) -> str:
        self._clock += 1
        return f"2024-01-01T{self._clock // 3600:02d}:{self._clock // 60 % 60:02d}:{self._clock % 60:02d}Z"

    def add_account(self, email: str, password: str, **profile: Any) -> str:
        """Register an account and its profile row; returns the user id."""
        user_id = f"user-{self._next_id('account')}"
        self.accounts[email] = {"id": user_id, "email": email, "password": password}
        self.tables["users"].append(
            {
                "id": user_id,
                "email": email,
                "full_name": profile.get("full_name", "Test User"),
                "avatar_url": None,
                "language": profile.get("language", "es"),
                "tutorial_completed": profile.get("tutorial_completed", True),
                "created_at": self._timestamp(),
            }
        )
        return user_id

    def seed(self, table: str, **values: Any) -> dict[str, Any]:
        """Insert a row directly, filling id and created_at."""
        row = self._with_defaults(table, values)
        self.tables[table].append(row)
        return row

    def fail(self, table: str, method: str, status: int = 500, message: str = "boom") -> None:
        """Make every ``method`` request on ``table`` fail."""
        self.failures[(table, method)] = (status, {"message": message, "code": "XX000"})

    def rows(self, table: str, **filters: Any) -> list[dict[str, Any]]:
        return [row for row in self.tables[table] if all(row.get(k) == v for k, v in filters.items())]

    def _with_defaults(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        row = dict(values)
        row.setdefault("id", self._next_id(table))
        row.setdefault("created_at", self._timestamp())
        if table == "calendars":
            row.setdefault("is_default", False)
            row.setdefault("color", "bg-blue-500")
            row.setdefault("description", None)
        elif table == "tasks":
            row.setdefault("completed", False)
            row.setdefault("priority", "medium")
            row.setdefault("tags", [])
        elif table == "projects":
            row.setdefault("progress", 0)
            row.setdefault("priority", "medium")
            row.setdefault("status", "in-progress")
            row.setdefault("team_members", [])
            row.setdefault("milestones", [])
        return row

    # Transport

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/auth/v1/"):
            return self._auth(request, path.removeprefix("/auth/v1/"))
        if path.startswith("/rest/v1/"):
            return self._rest(request, path.removeprefix("/rest/v1/"))
        return httpx.Response(404, json={"message": "not found"})

    def _session_payload(self, account: dict[str, str]) -> dict[str, Any]:
        token = f"token-{account['id']}-{len(self.tokens) + 1}"
        self.tokens[token] = account["id"]
        return {
            "access_token": token,
            "refresh_token": f"refresh-{token}",
            "token_type": "bearer",
            "expires_in": 3600,
            "user": {"id": account["id"], "email": account["email"]},
        }

    def _auth(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        if endpoint == "health":
            if not self.healthy:
                return httpx.Response(503, json={"msg": "unavailable"})
            return httpx.Response(200, json={"name": "GoTrue", "version": "fake"})

        body = json.loads(request.content) if request.content else {}
        if endpoint == "signup":
            email = body.get("email", "")
            if email in self.accounts:
                return httpx.Response(
                    422,
                    json={"code": 422, "error_code": "user_already_exists", "msg": "User already registered"},
                )
            if len(body.get("password", "")) < 6:
                return httpx.Response(
                    422,
                    json={"code": 422, "error_code": "weak_password", "msg": "Password should be at least 6 characters."},
                )
            user_id = f"user-{self._next_id('account')}"
            account = {"id": user_id, "email": email, "password": body["password"]}
            self.accounts[email] = account
            if self.auto_confirm:
                return httpx.Response(200, json=self._session_payload(account))
            return httpx.Response(200, json={"id": user_id, "email": email})

        if endpoint == "token":
            account = self.accounts.get(body.get("email", ""))
            if account is None or account["password"] != body.get("password"):
                return httpx.Response(
                    400,
                    json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
                )
            return httpx.Response(200, json=self._session_payload(account))

        if endpoint == "logout":
            token = request.headers.get("authorization", "").removeprefix("Bearer ")
            self.tokens.pop(token, None)
            return httpx.Response(204)

        return httpx.Response(404, json={"msg": "not found"})

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        if table not in self.tables:
            return httpx.Response(404, json={"message": f'relation "{table}" does not exist', "code": "42P01"})
        failure = self.failures.get((table, request.method))
        if failure is not None:
            status, body = failure
            return httpx.Response(status, json=body)

        params = parse_qsl(request.url.query.decode())
        filters = [(col, value.removeprefix("eq.")) for col, value in params if value.startswith("eq.")]
        orders = [value for col, value in params if col == "order"]

        if request.method == "GET":
            rows = [row for row in self.tables[table] if _matches(row, filters)]
            return httpx.Response(200, json=_sorted(rows, orders))

        if request.method == "POST":
            payload = json.loads(request.content)
            values = payload if isinstance(payload, list) else [payload]
            inserted = [self._with_defaults(table, value) for value in values]
            self.tables[table].extend(inserted)
            return httpx.Response(201, json=inserted)

        if request.method == "PATCH":
            changes = json.loads(request.content)
            updated = []
            for row in self.tables[table]:
                if _matches(row, filters):
                    row.update(changes)
                    updated.append(dict(row))
            return httpx.Response(200, json=updated)

        if request.method == "DELETE":
            deleted = [row for row in self.tables[table] if _matches(row, filters)]
            self.tables[table] = [row for row in self.tables[table] if not _matches(row, filters)]
            return httpx.Response(200, json=deleted)

        return httpx.Response(405, json={"message": "method not allowed"})


def _matches(row: dict[str, Any], filters: list[tuple[str, str]]) -> bool:
    for column, expected in filters:
        value = row.get(column)
        if isinstance(value, bool):
            value = "true" if value else "false"
        if str(value) != expected:
            return False
    return True


def _sorted(rows: list[dict[str, Any]], orders: list[str]) -> list[dict[str, Any]]:
    keys = [key for order in orders for key in order.split(",")]
    for key in reversed(keys):
        column, _, direction = key.partition(".")
        rows = sorted(rows, key=lambda row: str(row.get(column) or ""), reverse=direction == "desc")
    return rows
