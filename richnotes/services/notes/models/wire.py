"""
Pydantic models for the note store's JSON resource (``/api/todos``).

The store keeps a note's serialized document in ``description`` and its
identifier in ``_id``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .dto import Note


# ─── Base and Shared Config ──────────────────────────────────────────────────
class WireModel(BaseModel):
    """Base class allowing population by name and ignoring unknown fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ─── Records ────────────────────────────────────────────────────────────────
class NoteRecord(WireModel):
    """A note as stored server-side."""

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    """Server-assigned identifier."""

    title: str = ""
    """Note title."""

    description: str = ""
    """Serialized document (or legacy plain text)."""

    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    """Creation timestamp (ISO-8601)."""

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_note(self) -> Note:
        return Note(
            id=self.id,
            title=self.title,
            content=self.description,
            created_at=self.created_at,
        )


# ─── List endpoint ──────────────────────────────────────────────────────────
class NoteListResponse(WireModel):
    """Envelope returned by ``GET /api/todos``."""

    todos: List[NoteRecord] = Field(default_factory=list)

    @field_validator("todos", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v


# ─── Write requests ─────────────────────────────────────────────────────────
class NoteWriteRequest(WireModel):
    """Body for ``POST /api/todos`` and ``PUT /api/todos/{id}``."""

    title: str
    description: str
    completed: bool = False
