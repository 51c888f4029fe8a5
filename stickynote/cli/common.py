"""
Helpers shared by the note, auth, and interactive commands.
"""

from typing import Callable

import typer

from stickynote.cli.runtime import Runtime, build_runtime
from stickynote.controller import NoteListController
from stickynote.errors import StickyNoteError
from stickynote.types import SessionUser


def fail(message: str) -> typer.Exit:
    """Print `Error: <message>` to stderr and return an Exit to raise."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    return typer.Exit(code=1)


def load_runtime() -> Runtime:
    try:
        return build_runtime()
    except StickyNoteError as e:
        raise fail(str(e))


def require_user(runtime: Runtime) -> SessionUser:
    user = runtime.session.current_user
    if user is None:
        typer.echo("Not signed in. Run `stickynote auth signin` first.", err=True)
        raise typer.Exit(code=1)
    return user


def confirm_prompt(assume_yes: bool = False) -> Callable[[str], bool]:
    if assume_yes:
        return lambda message: True
    return lambda message: typer.confirm(message, default=False)


def open_controller(runtime: Runtime, assume_yes: bool = False) -> NoteListController:
    """Create a controller bound to the session and load the list."""
    controller = NoteListController(
        runtime.service,
        confirm=confirm_prompt(assume_yes),
        session=runtime.session,
    )
    controller.attach()
    return controller
