"""
Command-line interface for working with notes.

Mounted by stickynote/cli/main.py as:

    stickynote notes list
    stickynote notes new   [--title T] [--content C] [--editor]
    stickynote notes edit  <ref> [--title T] [--content C] [--editor]
    stickynote notes delete <ref> [--yes]

`<ref>` is either the position shown by `notes list` (1 = newest) or the
note id.

Every command goes through the NoteListController, exactly like the
interactive view: the list is loaded when the session resolves, and
reloaded after every successful change. Failures of a change are shown as
`Error: ...` with exit code 1; they are never retried.
"""

from typing import Optional

import typer

from stickynote.cli.common import fail, load_runtime, open_controller, require_user
from stickynote.cli.forms import prompt_note_form
from stickynote.cli.render import render_notes
from stickynote.errors import StickyNoteError
from stickynote.logging_utils import log_verbose

notes_app = typer.Typer(help="Create, list, edit, and delete your notes.")


@notes_app.command("list")
def list_notes(
    verbose: bool = typer.Option(False, "--verbose", help="Show high-level progress logs."),
) -> None:
    """Show all of your notes, newest first."""
    runtime = load_runtime()
    require_user(runtime)

    log_verbose("Loading notes...", verbose)
    controller = open_controller(runtime)

    typer.echo(render_notes(controller.notes, controller.is_loading))


@notes_app.command("new")
def new_note(
    title: Optional[str] = typer.Option(None, "--title", help="Note title."),
    content: Optional[str] = typer.Option(None, "--content", help="Note content."),
    editor: bool = typer.Option(False, "--editor", help="Write the content in $EDITOR."),
    verbose: bool = typer.Option(False, "--verbose", help="Show high-level progress logs."),
) -> None:
    """Create a note. Prompts for anything not given as an option."""
    runtime = load_runtime()
    require_user(runtime)
    controller = open_controller(runtime)

    controller.open_form()
    if title is None or content is None:
        title, content = prompt_note_form(None, use_editor=editor, title=title, content=content)

    log_verbose("Creating note...", verbose)
    try:
        controller.submit_form(title, content)
    except StickyNoteError as e:
        raise fail(str(e))

    typer.echo("Note created.")
    typer.echo(render_notes(controller.notes, controller.is_loading))


@notes_app.command("edit")
def edit_note(
    ref: str = typer.Argument(..., help="Position from `notes list`, or the note id."),
    title: Optional[str] = typer.Option(None, "--title", help="New title."),
    content: Optional[str] = typer.Option(None, "--content", help="New content."),
    editor: bool = typer.Option(False, "--editor", help="Edit the content in $EDITOR."),
    verbose: bool = typer.Option(False, "--verbose", help="Show high-level progress logs."),
) -> None:
    """Edit a note's title and content."""
    runtime = load_runtime()
    require_user(runtime)
    controller = open_controller(runtime)

    note = controller.find_note(ref)
    if note is None:
        raise fail(f"No note matches {ref!r}.")

    controller.begin_edit(note)
    if title is None and content is None:
        title, content = prompt_note_form(note, use_editor=editor)
    else:
        # Fields not given keep their current value.
        title = title if title is not None else note.get("title", "")
        content = content if content is not None else note.get("content", "")

    log_verbose(f"Updating note {note.get('id')}...", verbose)
    try:
        controller.submit_form(title, content)
    except StickyNoteError as e:
        raise fail(str(e))

    typer.echo("Note updated.")
    typer.echo(render_notes(controller.notes, controller.is_loading))


@notes_app.command("delete")
def delete_note(
    ref: str = typer.Argument(..., help="Position from `notes list`, or the note id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    verbose: bool = typer.Option(False, "--verbose", help="Show high-level progress logs."),
) -> None:
    """Delete a note. This cannot be undone."""
    runtime = load_runtime()
    require_user(runtime)
    controller = open_controller(runtime, assume_yes=yes)

    note = controller.find_note(ref)
    if note is None:
        raise fail(f"No note matches {ref!r}.")

    log_verbose(f"Deleting note {note.get('id')}...", verbose)
    try:
        deleted = controller.delete(note["id"])
    except StickyNoteError as e:
        raise fail(str(e))

    if not deleted:
        typer.echo("Cancelled.")
        return

    typer.echo("Note deleted.")
    typer.echo(render_notes(controller.notes, controller.is_loading))
