"""
Note editing session.

``NoteSession`` owns the "current note" workflow: which note is selected,
the draft title/document being edited, whether it has unsaved changes, and
whether the editor is open. Remote operations go through a ``RemoteSync``
store; transitions are coroutines that suspend only while awaiting it.

States:
  CLOSED            editor closed, nothing being edited
  EDITING_NEW       draft for a note that has never been saved
  EDITING_EXISTING  draft loaded from (or saved to) the store

The note list is a read-mostly cache that is re-fetched after every
confirmed create/update/delete; it is never patched locally.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Union

from ...content.codec import deserialize, serialize
from ...content.model import Document, empty_document
from ...exceptions import NotFoundError, RemoteSyncError
from .models import Note, NoteSummary
from .sync import RemoteSync

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLE = "New Note"

# notify(message, severity) with severity in {"information", "warning", "error"}
Notifier = Callable[[str, str], None]
Confirmer = Callable[[str], Union[bool, Awaitable[bool]]]


class SessionState(str, Enum):
    CLOSED = "closed"
    EDITING_NEW = "editing-new"
    EDITING_EXISTING = "editing-existing"


@dataclass
class Session:
    selected_note_id: Optional[str] = None
    draft_title: str = DEFAULT_TITLE
    draft_document: Document = field(default_factory=empty_document)
    is_dirty: bool = False
    is_open: bool = False
    is_saving: bool = False


def _log_notice(message: str, severity: str) -> None:
    level = {"error": logging.ERROR, "warning": logging.WARNING}.get(
        severity, logging.INFO
    )
    LOGGER.log(level, "notice: %s", message)


class NoteSession:
    """
    Session state machine over a ``RemoteSync`` store.

    ``notify`` receives user-facing notices; ``confirm`` is asked before a
    delete (sync or async callable; omitted means no confirmation step).
    """

    def __init__(
        self,
        store: RemoteSync,
        *,
        notify: Optional[Notifier] = None,
        confirm: Optional[Confirmer] = None,
    ):
        self._store = store
        self._notify = notify or _log_notice
        self._confirm = confirm
        self._session = Session()
        self._notes: List[Note] = []
        # Bumped on every draft edit; lets save() tell whether the user kept
        # typing while the write was in flight.
        self._revision = 0
        # Bumped on every navigation; a select_note() whose fetch completes
        # after a later navigation is dropped.
        self._nav_token = 0
        self._deleting = False

    # -------------------------- Read-only views ------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionState:
        if not self._session.is_open:
            return SessionState.CLOSED
        if self._session.selected_note_id is None:
            return SessionState.EDITING_NEW
        return SessionState.EDITING_EXISTING

    @property
    def notes(self) -> List[Note]:
        return list(self._notes)

    @property
    def is_busy(self) -> bool:
        return self._session.is_saving or self._deleting

    def summaries(self) -> List[NoteSummary]:
        selected = self._session.selected_note_id
        return [
            NoteSummary(
                id=n.id,
                title=n.title,
                preview=n.preview,
                created_at=n.created_at,
                is_selected=n.id == selected,
            )
            for n in self._notes
            if n.id is not None
        ]

    def serialized_draft(self) -> str:
        return serialize(self._session.draft_document)

    # -------------------------- Internal helpers -----------------------------

    def _reject_if_busy(self, transition: str) -> bool:
        if self.is_busy:
            LOGGER.warning("notes.session.rejected %s: operation in flight", transition)
            self._notify("Please wait for the current operation to finish", "warning")
            return True
        return False

    def _reset(self, *, is_open: bool) -> None:
        self._nav_token += 1
        self._revision += 1
        self._session = Session(is_open=is_open)

    def _close_missing(self, note_id: str) -> None:
        LOGGER.warning("notes.session.not_found id=%s", note_id)
        self._reset(is_open=False)
        self._notify("This note no longer exists", "error")

    # -------------------------- Transitions ----------------------------------

    async def refresh_notes(self) -> bool:
        """Re-fetch the note list. On failure the previous list is kept."""
        try:
            notes = await self._store.list_notes()
        except RemoteSyncError as e:
            LOGGER.error("Error fetching notes: %s", e)
            self._notify("Failed to load notes", "error")
            return False
        self._notes = list(notes)
        LOGGER.debug("notes.session.refreshed count=%d", len(self._notes))
        return True

    async def select_note(self, note_id: str) -> bool:
        if self._reject_if_busy("select_note"):
            return False
        self._nav_token += 1
        token = self._nav_token
        try:
            note = await self._store.get_note(note_id)
        except NotFoundError:
            if token == self._nav_token:
                self._close_missing(note_id)
                await self.refresh_notes()
            return False
        except RemoteSyncError as e:
            LOGGER.error("Error fetching note details: %s", e)
            self._notify("Failed to open note", "error")
            return False
        if token != self._nav_token:
            LOGGER.debug("notes.session.stale_select id=%s", note_id)
            return False

        self._revision += 1
        self._session = Session(
            selected_note_id=note.id or note_id,
            draft_title=note.title,
            draft_document=deserialize(note.content),
            is_dirty=False,
            is_open=True,
        )
        LOGGER.debug("notes.session.selected id=%s", note_id)
        return True

    def new_note(self) -> bool:
        if self._reject_if_busy("new_note"):
            return False
        self._reset(is_open=True)
        LOGGER.debug("notes.session.new")
        return True

    def edit_content(self, document: Document) -> bool:
        if not self._session.is_open:
            LOGGER.warning("notes.session.rejected edit_content: editor closed")
            return False
        self._revision += 1
        self._session.draft_document = document
        self._session.is_dirty = True
        return True

    def edit_title(self, title: str) -> bool:
        if not self._session.is_open:
            LOGGER.warning("notes.session.rejected edit_title: editor closed")
            return False
        self._revision += 1
        self._session.draft_title = title
        self._session.is_dirty = True
        return True

    async def save(self) -> bool:
        """
        Persist the draft: update when a note is selected, otherwise create
        and adopt the new id. At most one save runs at a time.
        """
        s = self._session
        if not s.is_open:
            LOGGER.warning("notes.session.rejected save: editor closed")
            return False
        if self._reject_if_busy("save"):
            return False

        note_id = s.selected_note_id
        title = s.draft_title
        content = serialize(s.draft_document)
        revision = self._revision
        self._nav_token += 1
        s.is_saving = True
        try:
            if note_id:
                saved = await self._store.update_note(note_id, title, content)
            else:
                saved = await self._store.create_note(title, content)
        except NotFoundError:
            self._close_missing(note_id or "")
            await self.refresh_notes()
            return False
        except RemoteSyncError as e:
            LOGGER.error("Error saving note: %s", e)
            self._notify("Failed to save note", "error")
            return False
        finally:
            s.is_saving = False

        if note_id is None:
            s.selected_note_id = saved.id
        s.is_dirty = self._revision != revision
        LOGGER.debug("notes.session.saved id=%s dirty=%s", s.selected_note_id, s.is_dirty)
        await self.refresh_notes()
        self._notify("Note saved successfully!", "information")
        return True

    async def delete(self) -> bool:
        s = self._session
        note_id = s.selected_note_id
        if not s.is_open or note_id is None:
            LOGGER.warning("notes.session.rejected delete: no saved note selected")
            return False
        if self._reject_if_busy("delete"):
            return False
        if self._confirm is not None:
            answer = self._confirm("Are you sure you want to delete this note?")
            if inspect.isawaitable(answer):
                answer = await answer
            if not answer:
                LOGGER.debug("notes.session.delete_cancelled id=%s", note_id)
                return False
            if self._session is not s or self.is_busy:
                LOGGER.warning("notes.session.rejected delete: session changed")
                return False

        self._deleting = True
        try:
            await self._store.delete_note(note_id)
        except NotFoundError:
            self._close_missing(note_id)
            await self.refresh_notes()
            return False
        except RemoteSyncError as e:
            LOGGER.error("Error deleting note: %s", e)
            self._notify("Failed to delete note", "error")
            return False
        finally:
            self._deleting = False

        self._reset(is_open=False)
        LOGGER.debug("notes.session.deleted id=%s", note_id)
        await self.refresh_notes()
        self._notify("Note deleted successfully!", "information")
        return True

    def close(self) -> bool:
        """Discard the draft without persisting it."""
        if not self._session.is_open:
            return False
        if self._reject_if_busy("close"):
            return False
        self._reset(is_open=False)
        LOGGER.debug("notes.session.closed")
        return True
