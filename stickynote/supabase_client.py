"""
Supabase-backed note access layer.

This module wraps a Supabase-compatible client and exposes the four note
operations the rest of the application relies on:

    • list_notes()               → every note visible to the session, newest first
    • create_note(data)          → insert one note owned by the current user
    • update_note(id, data)      → patch title/content of one note
    • delete_note(id)            → remove one note

The wrapper is intentionally thin. Ownership and authorization are enforced
by row-level security inside Supabase, not here. What the wrapper *does* own:

    • stamping `user_id` from the session on insert
    • stamping `updated_at` with the client clock on every write
    • normalizing SDK-style and dict-style responses
    • turning every remote rejection into a StoreError

Injected clients only need the `.table(name)` query-builder chain used
below, which lets tests pass an in-memory fake instead of the real SDK.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar, cast

import httpx
from supabase import Client, PostgrestAPIError, create_client

from stickynote.config import Settings
from stickynote.errors import AuthError, StoreError
from stickynote.types import (
    CreateNoteData,
    NoteRecord,
    SessionSource,
    UpdateNoteData,
)

T = TypeVar("T", bound=Dict[str, Any])

NOTES_TABLE = "notes"

# ---------------------------------------------------------------------------
# Helper: normalize Supabase responses
# ---------------------------------------------------------------------------


def _extract_data(resp: Any) -> List[T]:
    """
    Normalize Supabase responses across:
        • real SDK objects (`.data` / `.error` attributes)
        • dict-style responses (`{"status": ..., "data": ...}`) from test doubles

    Always returns a list of row dictionaries.
    Raises StoreError on any Supabase error.
    """

    # Dict-style response
    if isinstance(resp, dict):
        status = resp.get("status", 200)
        if status >= 400:
            raise StoreError(f"Supabase error: {resp.get('error') or resp}")
        data = resp.get("data") or []
        if not isinstance(data, list):
            data = [data]
        return cast(List[T], data)

    # SDK-style response
    error = getattr(resp, "error", None)
    if error:
        raise StoreError(f"Supabase error: {error}")

    data = getattr(resp, "data", None)
    if data is None:
        return []

    if isinstance(data, list):
        return cast(List[T], data)

    return cast(List[T], [data])


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_sdk_client(settings: Settings) -> Client:
    """Create the official Supabase SDK client from resolved settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


# ---------------------------------------------------------------------------
# Main wrapper class
# ---------------------------------------------------------------------------


class NotesService:
    """
    Note access layer over a Supabase-compatible client.

    None of the methods touch controller state; they are pure remote calls.
    Callers decide what to do with the results (the controller always
    reloads the full list afterwards).
    """

    def __init__(
        self,
        client: Any,
        session: Optional[SessionSource] = None,
        clock: Optional[Callable[[], datetime]] = None,
        table: str = NOTES_TABLE,
    ) -> None:
        """
        Parameters
        ----------
        client : Any
            A Supabase-compatible client (real SDK or test fake). Typed as Any
            because the SDK's query builder is dynamic.
        session : SessionSource | None
            Identity source used to stamp `user_id` on new notes. Without one,
            create_note always raises AuthError.
        clock : callable | None
            Returns the current time as an aware datetime. Defaults to UTC now.
        table : str
            Target table. Defaults to "notes".
        """
        self.client = client
        self.session = session
        self.clock = clock or _utc_now
        self.table = table

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _require_client(self) -> Any:
        if self.client is None:
            raise StoreError("Supabase client is not configured")
        return self.client

    def _query(self) -> Any:
        return self._require_client().table(self.table)

    def _now(self) -> str:
        return self.clock().isoformat()

    def _execute(self, query: Any, action: str) -> List[NoteRecord]:
        """
        Run a built query and normalize the result.

        The SDK raises on HTTP-level problems instead of returning an error
        field, so both paths end up as StoreError here.
        """
        try:
            resp = query.execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise StoreError(f"Failed to {action}: {e}") from e
        return cast(List[NoteRecord], _extract_data(resp))

    # -----------------------------------------------------------------------
    # List
    # -----------------------------------------------------------------------

    def list_notes(self) -> List[NoteRecord]:
        """
        Fetch all notes visible to the current session, newest first.

        Ordering is done by the store (`created_at` descending); the result
        is returned as-is. An empty table yields an empty list.

        Raises
        ------
        StoreError
            If the remote call fails.
        """
        query = self._query().select("*").order("created_at", desc=True)
        return self._execute(query, "load notes")

    # -----------------------------------------------------------------------
    # Create
    # -----------------------------------------------------------------------

    def create_note(self, data: CreateNoteData) -> NoteRecord:
        """
        Insert a note owned by the signed-in user.

        The identity is resolved *before* anything is sent, so an anonymous
        caller never reaches the store.

        Returns
        -------
        NoteRecord
            The row as persisted, including the store-assigned `id` and
            `created_at`.

        Raises
        ------
        AuthError
            If no user is signed in.
        StoreError
            If the insert is rejected or returns no row.
        """
        user = self.session.get_current_user() if self.session is not None else None
        if user is None:
            raise AuthError("User not authenticated")

        record: NoteRecord = {
            "title": data["title"],
            "content": data["content"],
            "user_id": user["id"],
            "updated_at": self._now(),
        }

        rows = self._execute(self._query().insert(record), "create note")
        if not rows:
            raise StoreError("Supabase insert returned no rows.")
        return rows[0]

    # -----------------------------------------------------------------------
    # Update
    # -----------------------------------------------------------------------

    def update_note(self, note_id: str, data: UpdateNoteData) -> NoteRecord:
        """
        Patch one note by id.

        Only `title` and `content` are taken from `data`; `updated_at` is
        always replaced with the current time, whatever the caller passed.

        Raises
        ------
        StoreError
            If the update is rejected, or if no row matched (the id does not
            exist or belongs to someone else).
        """
        patch: Dict[str, Any] = {}
        if "title" in data:
            patch["title"] = data["title"]
        if "content" in data:
            patch["content"] = data["content"]
        patch["updated_at"] = self._now()

        rows = self._execute(self._query().update(patch).eq("id", note_id), "update note")
        if not rows:
            raise StoreError(f"Note {note_id} was not found or cannot be modified.")
        return rows[0]

    # -----------------------------------------------------------------------
    # Delete
    # -----------------------------------------------------------------------

    def delete_note(self, note_id: str) -> None:
        """
        Delete one note by id.

        Row-level security hides other users' rows instead of rejecting the
        request, so an empty result is treated as a rejection too.

        Raises
        ------
        StoreError
            If the delete is rejected or nothing was deleted.
        """
        rows = self._execute(self._query().delete().eq("id", note_id), "delete note")
        if not rows:
            raise StoreError(f"Note {note_id} was not found or cannot be deleted.")
