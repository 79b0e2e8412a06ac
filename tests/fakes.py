"""In-memory note store used by the session and CLI tests."""

import asyncio
import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional

from richnotes.exceptions import NotFoundError
from richnotes.services.notes import Note

CREATED_AT = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class InMemoryNoteStore:
    """RemoteSync implementation keeping notes in a dict."""

    def __init__(self, notes: Optional[List[Note]] = None):
        self.records: Dict[str, Note] = {n.id: n for n in notes or []}
        self.calls: List[str] = []
        self.failures: Dict[str, Exception] = {}
        self.gate: Optional[asyncio.Event] = None
        self._ids = itertools.count(1)

    async def _enter(self, op: str) -> None:
        self.calls.append(op)
        if self.gate is not None:
            await self.gate.wait()
        if op in self.failures:
            raise self.failures.pop(op)

    async def list_notes(self) -> List[Note]:
        await self._enter("list")
        return list(self.records.values())

    async def get_note(self, note_id: str) -> Note:
        await self._enter("get")
        if note_id not in self.records:
            raise NotFoundError(note_id)
        return self.records[note_id]

    async def create_note(self, title: str, content: str) -> Note:
        await self._enter("create")
        note = Note(
            id=f"n{next(self._ids)}",
            title=title,
            content=content,
            created_at=CREATED_AT,
        )
        self.records[note.id] = note
        return note

    async def update_note(self, note_id: str, title: str, content: str) -> Note:
        await self._enter("update")
        if note_id not in self.records:
            raise NotFoundError(note_id)
        old = self.records[note_id]
        note = Note(id=note_id, title=title, content=content, created_at=old.created_at)
        self.records[note_id] = note
        return note

    async def delete_note(self, note_id: str) -> None:
        await self._enter("delete")
        if note_id not in self.records:
            raise NotFoundError(note_id)
        del self.records[note_id]
