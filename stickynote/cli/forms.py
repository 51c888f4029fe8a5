"""
Interactive create/edit form.

Blank when creating; pre-populated from the note when editing. Content can
be entered on one line at the prompt or, with `use_editor`, in $EDITOR so
multi-line notes keep their line breaks. Fields already supplied (e.g. as
command-line options) are not asked for again.
"""

from typing import Optional, Tuple

import typer

from stickynote.types import NoteRecord


def prompt_note_form(
    note: Optional[NoteRecord] = None,
    use_editor: bool = False,
    title: Optional[str] = None,
    content: Optional[str] = None,
) -> Tuple[str, str]:
    heading = "Edit Note" if note is not None else "New Note"
    typer.secho(heading, bold=True)

    current_title = note.get("title") if note is not None else None
    current_content = (note.get("content") if note is not None else None) or ""

    if title is None:
        title = typer.prompt("Title", default=current_title)

    if content is None:
        if use_editor:
            edited = typer.edit(current_content)
            # None means the editor was closed without saving.
            content = current_content if edited is None else edited.rstrip("\n")
        else:
            content = typer.prompt("Content", default=current_content or None)

    return title, content
