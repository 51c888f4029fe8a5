"""
Exception hierarchy for the sticky note client.

Every failure the client knows how to describe derives from
StickyNoteError, so the CLI can catch one type and print a clean
`Error: ...` line instead of a traceback.
"""


class StickyNoteError(RuntimeError):
    """Base class for all client errors."""


class AuthError(StickyNoteError):
    """No authenticated identity where one is required, or sign-in was rejected."""


class StoreError(StickyNoteError):
    """
    Any rejection from the remote note store.

    Network failures, constraint violations, and row-level security denials
    all surface as this one type; the client does not distinguish them.
    """


class ConfigError(StickyNoteError):
    """Required configuration (e.g., Supabase credentials) is missing."""
