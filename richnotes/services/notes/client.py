"""
HTTP client for the note store.

``NotesApiClient`` implements the ``RemoteSync`` protocol on top of a
``requests.Session``. Blocking HTTP calls run in a worker thread so the
event loop driving the session state machine stays responsive.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ...config import Settings
from ...exceptions import NotFoundError, RemoteSyncError, TransientSyncError
from .models import Note, NoteListResponse, NoteRecord, NoteWriteRequest

LOGGER = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)

NOTES_PATH = "/api/todos"


# ------------------------------- Transport -----------------------------------


class _NotesHttpClient:
    """
    Minimal HTTP transport:
      - JSON requests via `json=payload`
      - status codes mapped onto the richnotes exception hierarchy
    """

    def __init__(self, base_url: str, session, timeout: Optional[float] = None):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout
        LOGGER.debug("Initialized _NotesHttpClient with base_url: %s", self._base_url)

    def _build_url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict] = None,
        *,
        note_id: Optional[str] = None,
    ) -> Any:
        url = self._build_url(path)
        LOGGER.info("%s %s", method, url)
        try:
            resp = self._session.request(
                method, url, json=payload, timeout=self._timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            LOGGER.warning("%s %s failed: %s", method, url, e)
            raise TransientSyncError(f"{method} {path}: {e}") from e
        except requests.RequestException as e:
            LOGGER.error("%s %s failed: %s", method, url, e)
            raise RemoteSyncError(f"{method} {path}: {e}") from e

        code = getattr(resp, "status_code", 0)
        LOGGER.debug("%s %s returned status %d", method, url, code)
        if code >= 400:
            body = self._error_body(resp)
            if code == 404:
                LOGGER.warning("%s %s: not found", method, url)
                raise NotFoundError(note_id or path, payload=body)
            if code == 429:
                retry_after = None
                try:
                    hdr = resp.headers.get("Retry-After")
                    if hdr:
                        retry_after = float(hdr)
                except (TypeError, ValueError):
                    retry_after = None
                LOGGER.warning(
                    "%s %s was rate-limited. Retry after: %s", method, url, retry_after
                )
                raise TransientSyncError(
                    "HTTP 429: rate limited", payload=body, retry_after=retry_after
                )
            if code >= 500:
                LOGGER.warning("%s %s failed with server error %d", method, url, code)
                raise TransientSyncError(f"HTTP {code}", payload=body)
            LOGGER.error("%s %s failed with code %d", method, url, code)
            raise RemoteSyncError(f"HTTP {code}", payload=body)

        if method == "DELETE" or code == 204:
            return None
        try:
            return resp.json()
        except ValueError:
            LOGGER.error("Failed to parse JSON response from %s", url)
            raise RemoteSyncError(
                "Invalid JSON response", payload=getattr(resp, "text", None)
            )

    @staticmethod
    def _error_body(resp) -> Optional[object]:
        try:
            return resp.json()
        except ValueError:
            return getattr(resp, "text", None)


# ------------------------------ API client -----------------------------------


class NotesApiClient:
    """
    Note store over HTTP. Methods map 1:1 to the ``/api/todos`` resource:
      - GET    /api/todos
      - GET    /api/todos/{id}
      - POST   /api/todos
      - PUT    /api/todos/{id}
      - DELETE /api/todos/{id}
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self._http = _NotesHttpClient(base_url, session or requests.Session(), timeout)
        LOGGER.info("NotesApiClient initialized.")

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[requests.Session] = None
    ) -> "NotesApiClient":
        return cls(settings.api_url, session=session, timeout=settings.timeout)

    async def _call(self, method: str, path: str, payload=None, note_id=None) -> Any:
        return await asyncio.to_thread(
            self._http.request, method, path, payload, note_id=note_id
        )

    # ----- Read -----

    async def list_notes(self) -> List[Note]:
        data = await self._call("GET", NOTES_PATH)
        resp = self._validate(NoteListResponse, data, "list")
        LOGGER.info("List returned %d notes.", len(resp.todos))
        return [rec.to_note() for rec in resp.todos]

    async def get_note(self, note_id: str) -> Note:
        data = await self._call("GET", f"{NOTES_PATH}/{note_id}", note_id=note_id)
        return self._record(data, "get").to_note()

    # ----- Write -----

    async def create_note(self, title: str, content: str) -> Note:
        payload = NoteWriteRequest(title=title, description=content).model_dump()
        data = await self._call("POST", NOTES_PATH, payload)
        note = self._record(data, "create").to_note()
        LOGGER.info("Created note %s.", note.id)
        return note

    async def update_note(self, note_id: str, title: str, content: str) -> Note:
        payload = NoteWriteRequest(title=title, description=content).model_dump()
        data = await self._call(
            "PUT", f"{NOTES_PATH}/{note_id}", payload, note_id=note_id
        )
        return self._record(data, "update").to_note()

    async def delete_note(self, note_id: str) -> None:
        await self._call("DELETE", f"{NOTES_PATH}/{note_id}", note_id=note_id)
        LOGGER.info("Deleted note %s.", note_id)

    # ----- Validation -----

    def _record(self, data: Any, op: str) -> NoteRecord:
        # Write endpoints may wrap the record as {"todo": {...}}
        if isinstance(data, dict) and isinstance(data.get("todo"), dict):
            data = data["todo"]
        return self._validate(NoteRecord, data, op)

    @staticmethod
    def _validate(model: Type[_M], data: Any, op: str) -> _M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            LOGGER.error("%s response validation failed: %s", op, e)
            raise RemoteSyncError(f"{op} response validation failed", payload=data)
