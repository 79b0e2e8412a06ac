"""Library exceptions."""

from typing import Optional


class RichNotesException(Exception):
    """Generic richnotes exception."""


# ------------------------------- Content --------------------------------------


class DecodeError(RichNotesException):
    """Persisted content is not in the serialized document layout."""


class InvalidSelectionError(RichNotesException):
    """A selection references a block or offset that does not exist."""


# ------------------------------- Remote store ---------------------------------


class RemoteSyncError(RichNotesException):
    """Catch-all note store error."""

    def __init__(self, message: str, payload: Optional[object] = None):
        super().__init__(message)
        self.payload = payload


class NotFoundError(RemoteSyncError):
    """The note id is unknown to the store (404)."""

    def __init__(self, note_id: str, payload: Optional[object] = None):
        super().__init__(f"Note {note_id} not found", payload=payload)
        self.note_id = note_id


class TransientSyncError(RemoteSyncError):
    """Network failure, timeout, 429 or 5xx. Safe to retry."""

    def __init__(
        self,
        message: str,
        payload: Optional[object] = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, payload=payload)
        self.retry_after = retry_after
