"""
stickynote: a small personal notes client backed by Supabase.

Public surface:

    from stickynote import NotesService, SessionProvider, NoteListController
"""

from .controller import NoteListController
from .errors import AuthError, ConfigError, StickyNoteError, StoreError
from .session import SessionProvider
from .supabase_client import NotesService

__all__ = [
    "AuthError",
    "ConfigError",
    "NoteListController",
    "NotesService",
    "SessionProvider",
    "StickyNoteError",
    "StoreError",
]
