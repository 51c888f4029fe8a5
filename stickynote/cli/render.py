"""
Text rendering for the note views.

Pure functions returning strings, so the commands stay thin and the
layout can be tested without a terminal.
"""

import re
from datetime import datetime, tzinfo
from typing import List, Optional

import typer

from stickynote.types import NoteRecord, SessionUser

APP_TITLE = "My Notes"
CARD_RULE = "-" * 48

_FRACTION = re.compile(r"\.(\d+)")


def _normalize_iso(value: str) -> str:
    # Postgres trims trailing zeros from fractional seconds and clients may
    # send a "Z" suffix; datetime.fromisoformat before 3.11 accepts neither.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)


def format_timestamp(value: Optional[str], tz: Optional[tzinfo] = None) -> str:
    """
    Render an ISO-8601 timestamp as e.g. "Jan 5, 2026, 02:30 PM".

    The time is shown in `tz`, or the local timezone when omitted. Values
    that do not parse are returned unchanged.
    """
    if not value:
        return ""
    try:
        dt = datetime.fromisoformat(_normalize_iso(value))
    except ValueError:
        return value

    dt = dt.astimezone(tz)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def count_label(count: int) -> str:
    return f"{count} {'note' if count == 1 else 'notes'}"


def render_header(user: SessionUser) -> str:
    title = typer.style(APP_TITLE, bold=True)
    return f"{title}  ·  {user['email']}"


def render_card(position: int, note: NoteRecord, tz: Optional[tzinfo] = None) -> str:
    # Content keeps its own line breaks; each line is indented under the title.
    lines = [f"[{position}] {typer.style(note.get('title', ''), bold=True)}"]
    for line in (note.get("content") or "").splitlines():
        lines.append(f"    {line}")
    lines.append(typer.style(f"    {format_timestamp(note.get('updated_at'), tz)}", dim=True))
    return "\n".join(lines)


def render_notes(
    notes: List[NoteRecord],
    is_loading: bool = False,
    tz: Optional[tzinfo] = None,
    new_hint: str = "stickynote notes new",
) -> str:
    """Render the count line followed by the card list (or an empty/loading state)."""
    if is_loading:
        return "Loading notes..."

    parts = [count_label(len(notes))]
    if not notes:
        parts.append("")
        parts.append("No notes yet")
        parts.append("Create your first note to get started: " + new_hint)
        return "\n".join(parts)

    for position, note in enumerate(notes, start=1):
        parts.append(CARD_RULE)
        parts.append(render_card(position, note, tz))
    parts.append(CARD_RULE)
    return "\n".join(parts)
