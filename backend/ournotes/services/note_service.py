"""
OurNotes — Note Service (per-kind CRUD)
=========================================

What:  The list/create/update/delete operations behind every /api/{kind}
       resource.
How:   One NoteService instance per NoteKind. Each operation validates the
       payload first, then issues exactly one parameterized statement on the
       request's AsyncSession.
Who:   Called by the route handlers in ournotes.routes.notes.

Outcome mapping:
    missing/falsy required field  → ValidationError (400), nothing executed
    UPDATE/DELETE affected 0 rows → NotFoundError (404)
    any exception from the store  → StoreError (500), logged with traceback

NoteService keeps no per-request state; the session is passed into each call.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ournotes.exceptions import NotFoundError, StoreError, ValidationError
from ournotes.kinds import NOTE_KINDS, PERSONS, NoteKind
from ournotes.models.note import MODELS
from ournotes.schemas.note import SCHEMAS, NotePayload, NoteRecord, NoteUpdated

logger = logging.getLogger(__name__)


class NoteService:
    """
    CRUD operations for one note collection.

    The kind supplies the table (through MODELS), the mutable fields, the sort
    key and the messages; the code path is identical for all three kinds.
    """

    def __init__(self, kind: NoteKind):
        self.kind = kind
        self.model = MODELS[kind.slug]
        self.schemas = SCHEMAS[kind.slug]

    def validate(self, payload: NotePayload) -> Dict[str, Any]:
        """
        Extract the kind's mutable fields from a payload and check them.

        Every field must be present and truthy (an empty `text` is rejected
        just like a missing one). Calendar notes additionally need `person`
        to be 1 or 2.

        Returns:
            Dict of field name → value, ready for INSERT or UPDATE.

        Raises:
            ValidationError with the kind's required-fields message.
        """
        values = {name: getattr(payload, name, None) for name in self.kind.fields}

        missing = [name for name in self.kind.required_fields if not values[name]]
        if missing:
            raise ValidationError(
                message=self.kind.required_message,
                context={"kind": self.kind.slug, "missing": missing},
            )

        if "person" in values and values["person"] not in PERSONS:
            raise ValidationError(message="Person must be 1 or 2", field="person")

        return values

    async def list_notes(self, db: AsyncSession) -> List[NoteRecord]:
        """
        Return every row of the collection, sort key descending.

        Shopping and map notes come back newest first; calendar notes latest
        date first (ties broken by creation time).
        """
        sort_column = getattr(self.model, self.kind.sort_key)
        query = select(self.model).order_by(desc(sort_column))
        if self.kind.sort_key != "created_at":
            query = query.order_by(desc(self.model.created_at))

        try:
            result = await db.execute(query)
            rows = result.scalars().all()
        except Exception as e:
            logger.error("Error fetching %s: %s", self.kind.plural, str(e), exc_info=True)
            raise StoreError(
                message=self.kind.failure_message("fetch", many=True),
                context={"error_type": type(e).__name__},
            )

        return [self.schemas.record.model_validate(row) for row in rows]

    async def create_note(self, db: AsyncSession, payload: NotePayload) -> NoteRecord:
        """
        Insert one new row and return it.

        The id (UUID4 string) and created_at (UTC now) are minted here; the
        client never supplies them. Submitting the same body twice creates two
        rows.

        Raises:
            ValidationError: required field missing (→ 400)
            StoreError: insert failed (→ 500)
        """
        values = self.validate(payload)
        note = self.model(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            **values,
        )

        try:
            db.add(note)
            await db.flush()
        except Exception as e:
            logger.error("Error creating %s: %s", self.kind.label, str(e), exc_info=True)
            raise StoreError(
                message=self.kind.failure_message("create"),
                context={"error_type": type(e).__name__},
            )

        logger.info("Created %s %s", self.kind.label, note.id)
        return self.schemas.record.model_validate(note)

    async def update_note(
        self, db: AsyncSession, note_id: str, payload: NotePayload
    ) -> NoteUpdated:
        """
        Overwrite the mutable fields of one row.

        The response echoes the validated fields that were sent; the row is
        not read back.

        Raises:
            ValidationError: required field missing (→ 400)
            NotFoundError: no row with this id (→ 404)
            StoreError: update failed (→ 500)
        """
        values = self.validate(payload)

        try:
            result = await db.execute(
                update(self.model).where(self.model.id == note_id).values(**values)
            )
        except Exception as e:
            logger.error("Error updating %s %s: %s", self.kind.label, note_id, str(e), exc_info=True)
            raise StoreError(
                message=self.kind.failure_message("update"),
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource=self.kind.label, resource_id=note_id)

        logger.info("Updated %s %s", self.kind.label, note_id)
        return self.schemas.updated(id=note_id, **values)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        """
        Hard-delete one row.

        A second delete of the same id raises NotFoundError.

        Raises:
            NotFoundError: no row with this id (→ 404)
            StoreError: delete failed (→ 500)
        """
        try:
            result = await db.execute(delete(self.model).where(self.model.id == note_id))
        except Exception as e:
            logger.error("Error deleting %s %s: %s", self.kind.label, note_id, str(e), exc_info=True)
            raise StoreError(
                message=self.kind.failure_message("delete"),
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource=self.kind.label, resource_id=note_id)

        logger.info("Deleted %s %s", self.kind.label, note_id)


# ── Service Instances ─────────────────────────────────────────────────────
# One stateless service per kind, looked up by slug
note_services: Dict[str, NoteService] = {kind.slug: NoteService(kind) for kind in NOTE_KINDS}
