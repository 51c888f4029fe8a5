"""
Dependency wiring for CLI commands.

The CLI is responsible for dependency creation: it resolves settings,
creates the Supabase SDK client, restores the saved session, and hands
the pieces to the commands. Nothing below this layer reads the
environment.
"""

from typing import Any, Optional

from stickynote.config import Settings, load_settings
from stickynote.session import SessionProvider, TokenStore
from stickynote.supabase_client import NotesService, create_sdk_client


class Runtime:
    """The wired-up client, session, and note service for one invocation."""

    def __init__(self, client: Any, session: SessionProvider, service: NotesService) -> None:
        self.client = client
        self.session = session
        self.service = service


def build_runtime(settings: Optional[Settings] = None) -> Runtime:
    """
    Build a Runtime from the environment (or explicit settings).

    Raises
    ------
    ConfigError
        If Supabase credentials are missing.
    """
    settings = settings or load_settings()

    client = create_sdk_client(settings)
    session = SessionProvider(client.auth, token_store=TokenStore(settings.session_file))
    session.restore()

    service = NotesService(client, session=session)
    return Runtime(client, session, service)
