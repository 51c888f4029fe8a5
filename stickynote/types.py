"""
stickynote/types.py

Centralized type definitions for the sticky note client.

This module defines the TypedDicts and Protocols shared by the Supabase
access layer, the session provider, the note list controller, and the
test doubles. Keeping these types in one place gives:

    • a single source of truth for the `notes` row schema
    • clear contracts between the CLI, the controller, and Supabase
    • easy mocking and dependency injection in tests

When the `notes` table changes in Supabase, this file should be updated first.
"""

from typing import Callable, List, Optional, Protocol, TypedDict


# ---------------------------------------------------------------------------
# NoteRecord
# ---------------------------------------------------------------------------
# A single row of the Supabase `notes` table, as returned by the store.
#
#   • id and created_at are assigned by the store on insert
#   • user_id is stamped from the session on insert and never changes
#   • updated_at is stamped by the access layer on every write
#
# total=False allows partial construction (e.g., before Supabase assigns "id").
# ---------------------------------------------------------------------------
class NoteRecord(TypedDict, total=False):
    id: str
    user_id: str
    title: str
    content: str
    created_at: str
    updated_at: str


class CreateNoteData(TypedDict):
    title: str
    content: str


class UpdateNoteData(TypedDict, total=False):
    title: str
    content: str


# ---------------------------------------------------------------------------
# SessionUser
# ---------------------------------------------------------------------------
# The resolved identity of the signed-in user. Only the fields the client
# actually uses are kept; the full Supabase user object stays inside the
# session provider.
# ---------------------------------------------------------------------------
class SessionUser(TypedDict):
    id: str
    email: str


class StoredTokens(TypedDict):
    access_token: str
    refresh_token: str


SessionListener = Callable[[Optional[SessionUser]], None]


# ---------------------------------------------------------------------------
# SessionSource
# ---------------------------------------------------------------------------
# Structural interface for anything that can publish the current identity.
# Satisfied by SessionProvider and by the lightweight fakes in tests.
# ---------------------------------------------------------------------------
class SessionSource(Protocol):
    @property
    def current_user(self) -> Optional[SessionUser]: ...

    def get_current_user(self) -> Optional[SessionUser]: ...

    def subscribe(self, listener: SessionListener) -> Callable[[], None]: ...


# ---------------------------------------------------------------------------
# NoteAccessLayer
# ---------------------------------------------------------------------------
# The four remote operations the controller depends on. NotesService is the
# production implementation; controller tests inject in-memory versions.
# ---------------------------------------------------------------------------
class NoteAccessLayer(Protocol):
    def list_notes(self) -> List[NoteRecord]: ...

    def create_note(self, data: CreateNoteData) -> NoteRecord: ...

    def update_note(self, note_id: str, data: UpdateNoteData) -> NoteRecord: ...

    def delete_note(self, note_id: str) -> None: ...
