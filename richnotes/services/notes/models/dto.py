"""High-level Notes data transfer objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....content.codec import extract_preview_text


@dataclass(frozen=True)
class Note:
    """A persisted note. ``content`` is the serialized document string."""

    id: Optional[str]
    title: str
    content: str
    created_at: Optional[datetime] = None

    @property
    def preview(self) -> str:
        return extract_preview_text(self.content)


@dataclass(frozen=True)
class NoteSummary:
    """Sidebar list item."""

    id: str
    title: str
    preview: str
    created_at: Optional[datetime]
    is_selected: bool = False

    @property
    def date_label(self) -> str:
        """Creation date as ``"October 19, 2026"``; empty when unknown."""
        if self.created_at is None:
            return ""
        dt = self.created_at
        return f"{dt.strftime('%B')} {dt.day}, {dt.year}"
