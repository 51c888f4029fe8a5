"""
In-memory Supabase doubles for the test suite.

FakeSupabaseClient simulates the parts of the Supabase client the note
client uses:

    client.table("notes").select("*").order("created_at", desc=True).execute()
    client.table("notes").insert(record).execute()
    client.table("notes").update(patch).eq("id", note_id).execute()
    client.table("notes").delete().eq("id", note_id).execute()
    client.auth.get_user() / sign_in_with_password() / sign_up() / ...

Rows are stored in a plain list. Row-level security is simulated the way
Supabase applies it: reads, updates, and deletes only see rows owned by the
signed-in user, and inserts must carry that user's id.

Every executed query is appended to `client.calls` as (operation, payload)
so tests can assert on exactly what was sent. `client.fail_ops` makes the
next execute of an operation return a dict-style error response.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import httpx
from supabase import AuthError as SupabaseAuthError

BASE_TIME = datetime(2026, 1, 5, 14, 30, tzinfo=timezone.utc)


class FakeInvalidCredentials(SupabaseAuthError):
    """Stand-in for the provider's credential error."""

    def __init__(self, message: str) -> None:
        Exception.__init__(self, message)
        self.message = message


class FakeResponse:
    """SDK-style response: `.data` plus an optional `.error`."""

    def __init__(self, data: Any = None, error: Optional[str] = None) -> None:
        self.data = data
        self.error = error


# ---------------------------------------------------------------------------
# Query builder
# ---------------------------------------------------------------------------


class FakeQuery:
    def __init__(self, client: "FakeSupabaseClient", table_name: str) -> None:
        self.client = client
        self.table_name = table_name
        self.op: Optional[str] = None
        self.payload: Any = None
        self.filters: Dict[str, Any] = {}
        self.order_by: Optional[Tuple[str, bool]] = None

    def select(self, columns: str = "*") -> "FakeQuery":
        self.op = "select"
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def insert(self, record: Dict[str, Any]) -> "FakeQuery":
        self.op = "insert"
        self.payload = record
        return self

    def update(self, patch: Dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.payload = patch
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters[column] = value
        return self

    def execute(self) -> Any:
        op = self.op or "select"
        self.client.calls.append((op, self.payload if op != "delete" else dict(self.filters)))

        if op in self.client.fail_ops:
            message = self.client.fail_ops.pop(op)
            return {"status": 500, "data": None, "error": message}

        return getattr(self, f"_run_{op}")()

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    def _visible_rows(self) -> List[Dict[str, Any]]:
        uid = self.client.auth.current_user_id
        rows = [r for r in self.client.rows if r["user_id"] == uid]
        for column, value in self.filters.items():
            rows = [r for r in rows if r.get(column) == value]
        return rows

    def _run_select(self) -> FakeResponse:
        rows = [dict(r) for r in self._visible_rows()]
        if self.order_by is not None:
            column, desc = self.order_by
            rows.sort(key=lambda r: r[column], reverse=desc)
        return FakeResponse(rows)

    def _run_insert(self) -> Any:
        uid = self.client.auth.current_user_id
        if uid is None or self.payload.get("user_id") != uid:
            return {"status": 403, "data": None, "error": "new row violates row-level security policy"}

        row = dict(self.payload)
        row["id"] = self.client.next_id()
        row["created_at"] = self.client.next_created_at()
        self.client.rows.append(row)
        return FakeResponse([dict(row)])

    def _run_update(self) -> FakeResponse:
        updated = []
        for row in self._visible_rows():
            row.update(self.payload)
            updated.append(dict(row))
        return FakeResponse(updated)

    def _run_delete(self) -> FakeResponse:
        doomed = self._visible_rows()
        self.client.rows = [r for r in self.client.rows if r not in doomed]
        return FakeResponse([dict(r) for r in doomed])


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class FakeAuth:
    """Password auth with in-memory accounts and opaque token pairs."""

    def __init__(self) -> None:
        self.accounts: Dict[str, Dict[str, str]] = {}
        self.tokens: Dict[str, str] = {}  # access_token -> user id
        self.current: Optional[SimpleNamespace] = None
        self.session: Optional[SimpleNamespace] = None
        self.require_confirmation = False
        self.sign_out_calls = 0
        # When set, every call fails the way the SDK does with no network.
        self.offline = False

    @property
    def current_user_id(self) -> Optional[str]:
        return self.current.id if self.current is not None else None

    def add_account(self, email: str, password: str, user_id: str) -> None:
        self.accounts[email] = {"password": password, "id": user_id}

    def _check_network(self) -> None:
        if self.offline:
            raise httpx.ConnectError("offline")

    def _start_session(self, email: str) -> SimpleNamespace:
        account = self.accounts[email]
        self.current = SimpleNamespace(id=account["id"], email=email)
        token = f"access-{account['id']}-{len(self.tokens) + 1}"
        self.tokens[token] = email
        self.session = SimpleNamespace(access_token=token, refresh_token=f"refresh-{token}")
        return SimpleNamespace(user=self.current, session=self.session)

    def get_user(self, jwt: Optional[str] = None) -> Optional[SimpleNamespace]:
        self._check_network()
        if self.current is None:
            return None
        return SimpleNamespace(user=self.current)

    def get_session(self) -> Optional[SimpleNamespace]:
        return self.session

    def set_session(self, access_token: str, refresh_token: str) -> SimpleNamespace:
        self._check_network()
        email = self.tokens.get(access_token)
        if email is None:
            raise FakeInvalidCredentials("Invalid Refresh Token")
        return self._start_session(email)

    def sign_in_with_password(self, credentials: Dict[str, str]) -> SimpleNamespace:
        self._check_network()
        account = self.accounts.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise FakeInvalidCredentials("Invalid login credentials")
        return self._start_session(credentials["email"])

    def sign_up(self, credentials: Dict[str, str]) -> SimpleNamespace:
        self._check_network()
        email = credentials["email"]
        if email in self.accounts:
            raise FakeInvalidCredentials("User already registered")
        self.add_account(email, credentials["password"], f"user-{len(self.accounts) + 1}")
        if self.require_confirmation:
            return SimpleNamespace(user=SimpleNamespace(id=self.accounts[email]["id"], email=email), session=None)
        return self._start_session(email)

    def sign_out(self) -> None:
        self._check_network()
        self.sign_out_calls += 1
        self.current = None
        self.session = None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class FakeSupabaseClient:
    def __init__(self) -> None:
        self.auth = FakeAuth()
        self.rows: List[Dict[str, Any]] = []
        self.calls: List[Tuple[str, Any]] = []
        self.fail_ops: Dict[str, str] = {}
        self._ids = 0
        self._created = 0

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def next_id(self) -> str:
        self._ids += 1
        return f"note-{self._ids}"

    def next_created_at(self) -> str:
        self._created += 1
        return (BASE_TIME + timedelta(minutes=self._created)).isoformat()

    def seed(self, user_id: str, title: str, content: str) -> Dict[str, Any]:
        """Insert a row directly, bypassing the query log."""
        row = {
            "id": self.next_id(),
            "user_id": user_id,
            "title": title,
            "content": content,
            "created_at": self.next_created_at(),
            "updated_at": BASE_TIME.isoformat(),
        }
        self.rows.append(row)
        return dict(row)

    def ops(self) -> List[str]:
        return [op for op, _ in self.calls]
