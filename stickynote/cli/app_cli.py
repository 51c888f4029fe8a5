"""
Interactive notes view.

`stickynote app` keeps one NoteListController alive for the whole
session and renders it after every action:

    n            new note
    e <ref>      edit a note
    d <ref>      delete a note (asks first)
    r            reload
    s            sign out
    q            quit

Unlike the one-shot commands, a failed change does not end the program;
the error is shown and the view is drawn again.
"""

from typing import List

import typer

from stickynote.cli.common import load_runtime, open_controller, require_user
from stickynote.cli.forms import prompt_note_form
from stickynote.cli.render import render_header, render_notes
from stickynote.controller import NoteListController
from stickynote.errors import StickyNoteError
from stickynote.logging_utils import log_error

ACTIONS_HELP = "[n]ew  [e]dit <#>  [d]elete <#>  [r]eload  [s]ign out  [q]uit"


def _draw(controller: NoteListController, header: str) -> None:
    typer.echo("")
    typer.echo(header)
    typer.echo(render_notes(controller.notes, controller.is_loading, new_hint="n"))
    typer.echo(ACTIONS_HELP)


def _handle(controller: NoteListController, words: List[str], editor: bool) -> None:
    action = words[0].lower()
    ref = words[1] if len(words) > 1 else ""

    if action == "n":
        controller.open_form()
        title, content = prompt_note_form(None, use_editor=editor)
        controller.submit_form(title, content)
        return

    if action == "r":
        controller.reload()
        return

    if action in ("e", "d"):
        note = controller.find_note(ref)
        if note is None:
            log_error(f"No note matches {ref!r}.")
            return
        if action == "e":
            controller.begin_edit(note)
            title, content = prompt_note_form(note, use_editor=editor)
            controller.submit_form(title, content)
        else:
            controller.delete(note["id"])
        return

    log_error(f"Unknown action {action!r}.")


def run_app(
    editor: bool = typer.Option(False, "--editor", help="Write note content in $EDITOR."),
) -> None:
    """Open the interactive notes view."""
    runtime = load_runtime()
    user = require_user(runtime)
    controller = open_controller(runtime)
    header = render_header(user)

    try:
        while True:
            _draw(controller, header)
            line = typer.prompt(">", default="", show_default=False).strip()
            if not line:
                continue

            words = line.split()
            action = words[0].lower()
            if action == "q":
                break
            if action == "s":
                try:
                    runtime.session.sign_out()
                except StickyNoteError as e:
                    log_error(f"Error: {e}")
                typer.echo("Signed out.")
                break

            try:
                _handle(controller, words, editor)
            except StickyNoteError as e:
                # Nothing was saved; discard the form and redraw.
                log_error(f"Error: {e}")
                controller.close_form()
    finally:
        controller.detach()
