"""
Runtime configuration for the sticky note client.

Values are read from the process environment. The CLI entrypoint calls
`load_dotenv()` first, so a local `.env` file works too:

    SUPABASE_URL=https://<project>.supabase.co
    SUPABASE_KEY=<anon key>
    STICKYNOTE_SESSION_FILE=~/.stickynote/session.json   (optional)

The anon key is used on purpose: every request runs as the signed-in user,
and row-level security in Supabase decides which notes that user may see.
"""

import os
from pathlib import Path

from stickynote.errors import ConfigError

DEFAULT_SESSION_FILE = "~/.stickynote/session.json"


class Settings:
    """Resolved connection settings."""

    def __init__(self, supabase_url: str, supabase_key: str, session_file: Path) -> None:
        self.supabase_url = supabase_url
        self.supabase_key = supabase_key
        self.session_file = session_file

    def __repr__(self) -> str:
        # Never echo the key.
        return f"Settings(supabase_url={self.supabase_url!r}, session_file={self.session_file!r})"


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises
    ------
    ConfigError
        If SUPABASE_URL or SUPABASE_KEY is not set.
    """
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")

    if not url or not key:
        raise ConfigError(
            "Supabase credentials not found. Ensure SUPABASE_URL and SUPABASE_KEY "
            "are set in your environment or .env file."
        )

    session_file = Path(os.getenv("STICKYNOTE_SESSION_FILE") or DEFAULT_SESSION_FILE)
    return Settings(url, key, session_file.expanduser())
