"""
Note list controller.

Holds the authoritative in-memory list of notes for the current session
and the small amount of UI state around it:

    • notes            newest-first snapshot of the store
    • is_loading       a reload is in flight
    • is_form_visible  the create/edit form is open
    • editing_note     the note the form is editing, or None when creating

The controller never merges results into the list. After every successful
create, update, or delete it reloads the whole list from the store and
replaces `notes` wholesale, so server-assigned fields (ids, timestamps)
are always what the store says they are.

Reloads are sequenced: each one takes a ticket, and a response is applied
only if its ticket is still the latest one issued. A slow, older response
can therefore never overwrite a newer one.
"""

from typing import Callable, List, Optional

from stickynote.errors import StickyNoteError
from stickynote.logging_utils import log_error
from stickynote.types import (
    NoteAccessLayer,
    NoteRecord,
    SessionSource,
    SessionUser,
)

DELETE_CONFIRMATION = "Are you sure you want to delete this note?"


class NoteListController:
    """
    Parameters
    ----------
    service : NoteAccessLayer
        The list/create/update/delete operations (NotesService in production).
    confirm : callable
        Asked before every delete with DELETE_CONFIRMATION; must return True
        to proceed.
    session : SessionSource | None
        Identity to observe once `attach()` is called.
    report_error : callable | None
        Receives a message when a reload fails. Defaults to printing to stderr.
    """

    def __init__(
        self,
        service: NoteAccessLayer,
        confirm: Callable[[str], bool],
        session: Optional[SessionSource] = None,
        report_error: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.service = service
        self.confirm = confirm
        self.session = session
        self.report_error = report_error or log_error

        self.notes: List[NoteRecord] = []
        # Loading until the first session resolution says otherwise.
        self.is_loading = True
        self.is_form_visible = False
        self.editing_note: Optional[NoteRecord] = None
        self.last_error: Optional[StickyNoteError] = None

        self._latest_ticket = 0
        self._unsubscribe: Optional[Callable[[], None]] = None

    # -----------------------------------------------------------------------
    # Session lifecycle
    # -----------------------------------------------------------------------

    def attach(self) -> None:
        """
        Start observing the session and react to its current value.

        Equivalent to mounting the view: a signed-in user triggers the first
        reload immediately.
        """
        if self.session is None or self._unsubscribe is not None:
            return
        self._unsubscribe = self.session.subscribe(self.on_session_change)
        self.on_session_change(self.session.current_user)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_session_change(self, user: Optional[SessionUser]) -> None:
        if user is not None:
            self.reload()
            return

        self.notes = []
        self.is_loading = False

    # -----------------------------------------------------------------------
    # Reload
    # -----------------------------------------------------------------------

    def reload(self) -> bool:
        """
        Refetch the full list and replace `notes` with it.

        Failures are reported, not raised: the list keeps its previous
        (possibly stale) value. Returns True when this call's result was
        applied.
        """
        self._latest_ticket += 1
        ticket = self._latest_ticket
        self.is_loading = True

        try:
            notes = self.service.list_notes()
        except StickyNoteError as e:
            self.report_error(f"Error loading notes: {e}")
            if ticket == self._latest_ticket:
                self.last_error = e
                self.is_loading = False
            return False

        if ticket != self._latest_ticket:
            # A newer reload was issued while this one was in flight.
            return False

        self.notes = list(notes)
        self.last_error = None
        self.is_loading = False
        return True

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------
    # Failures from create/update/delete propagate to the caller untouched;
    # state only changes after the remote call succeeded.

    def create(self, title: str, content: str) -> None:
        self.service.create_note({"title": title, "content": content})
        self.reload()

    def update(self, title: str, content: str) -> None:
        """Save the form against `editing_note`; does nothing when not editing."""
        if self.editing_note is None:
            return

        self.service.update_note(self.editing_note["id"], {"title": title, "content": content})
        self.reload()
        self.editing_note = None

    def delete(self, note_id: str) -> bool:
        """
        Delete a note after the user confirms.

        Returns False (with no remote call) when the user declines.
        """
        if not self.confirm(DELETE_CONFIRMATION):
            return False

        self.service.delete_note(note_id)
        self.reload()
        return True

    # -----------------------------------------------------------------------
    # Form state
    # -----------------------------------------------------------------------

    def open_form(self) -> None:
        self.editing_note = None
        self.is_form_visible = True

    def begin_edit(self, note: NoteRecord) -> None:
        self.editing_note = note
        self.is_form_visible = True

    def close_form(self) -> None:
        self.is_form_visible = False
        self.editing_note = None

    def submit_form(self, title: str, content: str) -> None:
        """
        Submit the open form: update when editing, create otherwise.

        The form closes only after the save succeeded, so a failure leaves it
        open with the user's input.
        """
        if self.editing_note is not None:
            self.update(title, content)
        else:
            self.create(title, content)
        self.close_form()

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def find_note(self, ref: str) -> Optional[NoteRecord]:
        """
        Resolve a note by its 1-based position in `notes` or by its id.
        """
        if ref.isdigit():
            index = int(ref)
            if 1 <= index <= len(self.notes):
                return self.notes[index - 1]

        for note in self.notes:
            if note.get("id") == ref:
                return note
        return None
