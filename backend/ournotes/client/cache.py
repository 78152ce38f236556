"""
OurNotes — Note Cache (one per note kind)
===========================================

What:  The client's in-memory copy of one collection and the rules for
       reconciling it with the Note Service.
How:   Every operation tries the service first. When the service cannot be
       used the error is recorded on the owning NotesContext and the cache
       falls back as follows:

       operation │ service OK                  │ service failed
       ──────────┼─────────────────────────────┼──────────────────────────────
       refresh   │ replace notes               │ restore local snapshots
       add       │ append server record,       │ append local-only record,
                 │ persist                     │ persist
       delete    │ drop note, persist          │ drop note, persist
                 │ (404 counts as success)     │
       update    │ refresh from the service    │ nothing (error recorded)

       A local-only record keeps its local id forever; it is never matched
       up with a later server id.
"""

import datetime as dt
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import ValidationError as PayloadError

from ournotes.client.api import NotesApiClient
from ournotes.client.models import LOCAL_MODELS, SNAPSHOTS, LocalNote, local_note_id, utc_now
from ournotes.exceptions import NetworkError
from ournotes.kinds import NoteKind

if TYPE_CHECKING:
    from ournotes.client.context import NotesContext

logger = logging.getLogger(__name__)


def as_calendar_days(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a datetime `date` to the day on its own clock (no UTC shift)."""
    value = fields.get("date")
    if isinstance(value, dt.datetime):
        return {**fields, "date": value.date()}
    return fields


def to_wire(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize date/datetime values for a JSON request body."""
    return {
        name: value.isoformat() if isinstance(value, (dt.date, dt.datetime)) else value
        for name, value in fields.items()
    }


class NoteCache:
    """
    Local mirror of one note collection.

    Attributes:
        kind:  The NoteKind this cache mirrors
        notes: Current records, in the order last received or appended
    """

    def __init__(self, kind: NoteKind, api: NotesApiClient, context: "NotesContext"):
        self.kind = kind
        self.notes: List[LocalNote] = []
        self._api = api
        self._context = context
        self._model = LOCAL_MODELS[kind.slug]
        self._snapshot = SNAPSHOTS[kind.slug]

    # ── Snapshot codec ────────────────────────────────────────────────────

    def snapshot(self) -> str:
        """The whole collection as a JSON array (dates as ISO strings)."""
        return self._snapshot.dump_json(self.notes).decode("utf-8")

    def load_snapshot(self, raw: str) -> None:
        """
        Replace the collection with a stored snapshot.

        Raises:
            pydantic.ValidationError: snapshot is not a valid JSON array of
                this kind's records (the collection is left untouched).
        """
        self.notes = self._snapshot.validate_json(raw)

    # ── Operations ────────────────────────────────────────────────────────

    async def refresh(self) -> None:
        """Replace the collection with the service's copy, or restore snapshots."""
        async with self._context.loading():
            self._context.clear_error()
            try:
                rows = await self._api.list_notes(self.kind)
                notes = [self._model.model_validate(row) for row in rows]
            except NetworkError as e:
                await self._fall_back_to_snapshots(e.message)
                return
            except (PayloadError, TypeError) as e:
                await self._fall_back_to_snapshots(f"Unexpected {self.kind.plural} payload: {e}")
                return

            self.notes = notes

    async def add(self, text: str, **extra: Any) -> Optional[LocalNote]:
        """
        Create a note remotely, or locally when the service is unreachable.

        Calendar notes pass `date=` and `person=` as extra fields; a datetime
        `date` is reduced to its own calendar day first.

        Returns:
            The record that was appended (server or local-only), or None when
            not even a local record could be built (e.g. calendar note without
            a date). The error is recorded either way.
        """
        fields = as_calendar_days({"text": text, **extra})
        try:
            data = await self._api.create_note(self.kind, to_wire(fields))
            note = self._model.model_validate(data)
        except (NetworkError, PayloadError) as e:
            message = e.message if isinstance(e, NetworkError) else str(e)
            logger.error("Error adding %s: %s", self.kind.label, message)
            self._context.record_error(message)
            try:
                note = self._model(id=local_note_id(), created_at=utc_now(), **fields)
            except PayloadError as invalid:
                logger.error("Cannot keep %s locally: %s", self.kind.label, str(invalid))
                return None

        self.notes.append(note)
        await self._context.persist()
        return note

    async def delete(self, note_id: str) -> None:
        """Delete remotely when possible; always delete locally."""
        try:
            await self._api.delete_note(self.kind, note_id)
        except NetworkError as e:
            # 404: already gone upstream
            if e.status_code != 404:
                logger.error("Error deleting %s %s: %s", self.kind.label, note_id, e.message)
                self._context.record_error(e.message)

        self.notes = [note for note in self.notes if note.id != note_id]
        await self._context.persist()

    async def update(self, note_id: str, text: str, **extra: Any) -> None:
        """
        Update remotely, then re-read the whole collection.

        Unlike add() and delete() there is no local-only fallback: a failed
        update leaves the cached record unchanged and only records the error.
        Kept as-is until the intended offline behaviour is confirmed.
        """
        async with self._context.loading():
            self._context.clear_error()
            fields = as_calendar_days({"text": text, **extra})
            try:
                await self._api.update_note(self.kind, note_id, to_wire(fields))
            except NetworkError as e:
                logger.error("Error updating %s %s: %s", self.kind.label, note_id, e.message)
                self._context.record_error(e.message)
                return

            await self.refresh()

    async def _fall_back_to_snapshots(self, message: str) -> None:
        logger.error("Error fetching %s: %s", self.kind.plural, message)
        self._context.record_error(message)
        await self._context.restore()
