"""Public API for the Notes service."""

from .client import NotesApiClient
from .models import Note, NoteSummary
from .session import DEFAULT_TITLE, NoteSession, Session, SessionState
from .sync import RemoteSync

__all__ = [
    "DEFAULT_TITLE",
    "NotesApiClient",
    "Note",
    "NoteSession",
    "NoteSummary",
    "RemoteSync",
    "Session",
    "SessionState",
]
