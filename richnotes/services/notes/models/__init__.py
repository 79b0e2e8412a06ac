"""Public exports for Notes service data models."""

from __future__ import annotations

from .dto import Note, NoteSummary
from .wire import NoteListResponse, NoteRecord, NoteWriteRequest

__all__ = [
    "Note",
    "NoteSummary",
    "NoteListResponse",
    "NoteRecord",
    "NoteWriteRequest",
]
