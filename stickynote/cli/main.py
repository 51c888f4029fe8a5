"""
Root entrypoint for the sticky note CLI.

This module defines the top-level `stickynote` command and mounts the
sub-apps from the other modules under stickynote/cli/:

    • stickynote/cli/auth_cli.py    →  `stickynote auth ...`
    • stickynote/cli/notes_cli.py   →  `stickynote notes ...`
    • stickynote/cli/app_cli.py     →  `stickynote app`

Typical first run:

    stickynote auth signin
    stickynote notes new --title "Groceries" --content "eggs"
    stickynote notes list
"""

# ---------------------------------------------------------------------------
# Imports (must be at top to satisfy flake8 E402)
# ---------------------------------------------------------------------------
from dotenv import load_dotenv
import typer

from .app_cli import run_app
from .auth_cli import auth_app
from .notes_cli import notes_app

# Load environment variables
load_dotenv()

# ---------------------------------------------------------------------------
# Root CLI application
# ---------------------------------------------------------------------------
cli = typer.Typer(
    help=(
        "Personal notes, stored in Supabase.\n\n"
        "Sign in once with `stickynote auth signin`; the session is saved "
        "for later commands. Then use `stickynote notes ...` for one-off "
        "changes, or `stickynote app` for the interactive view."
    )
)

# ---------------------------------------------------------------------------
# Register sub-applications
# ---------------------------------------------------------------------------
cli.add_typer(auth_app, name="auth")
cli.add_typer(notes_app, name="notes")
cli.command("app")(run_app)

# ---------------------------------------------------------------------------
# Entry point for `python -m stickynote.cli.main`
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cli()
