"""
Note store seam consumed by the session state machine.

Implementations are asynchronous: a session transition suspends only while
awaiting one of these calls. Failures are reported with the exceptions in
``richnotes.exceptions``:
  - ``NotFoundError`` when the id is unknown (get/update/delete)
  - ``TransientSyncError`` for network trouble that may succeed on retry
  - ``RemoteSyncError`` for anything else
"""

from __future__ import annotations

from typing import List, Protocol

from .models import Note


class RemoteSync(Protocol):
    """CRUD operations against a note store."""

    async def list_notes(self) -> List[Note]: ...

    async def get_note(self, note_id: str) -> Note: ...

    async def create_note(self, title: str, content: str) -> Note: ...

    async def update_note(self, note_id: str, title: str, content: str) -> Note: ...

    async def delete_note(self, note_id: str) -> None: ...
