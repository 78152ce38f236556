"""
OurNotes — Notes Route Handlers
=================================

What:  GET/POST /api/{kind} and PUT/DELETE /api/{kind}/{note_id} for every
       note kind (shopping-notes, map-notes, calendar-notes).
How:   build_router() creates one APIRouter per NoteKind; handlers extract the
       path id and body and delegate to that kind's NoteService.
Who:   Called by the Client Note Cache (ournotes.client).

Status codes:
    GET     200 array of records        | 500
    POST    201 created record          | 400, 500
    PUT     200 echoed fields + success | 400, 404, 500
    DELETE  200 {"success": true}       | 404, 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ournotes.database import get_db_session
from ournotes.kinds import NOTE_KINDS, NoteKind
from ournotes.schemas.note import SCHEMAS, DeleteResponse, ErrorResponse
from ournotes.services.note_service import note_services

logger = logging.getLogger(__name__)


def build_router(kind: NoteKind) -> APIRouter:
    """
    Create the four CRUD routes for one note kind.

    The body and response models come from SCHEMAS so each kind gets its own
    OpenAPI shapes. The service is looked up per call in `note_services`.
    """
    schemas = SCHEMAS[kind.slug]
    payload_model = schemas.payload
    router = APIRouter(prefix=f"/api/{kind.slug}", tags=[kind.plural.title()])

    @router.get(
        "",
        response_model=List[schemas.record],
        responses={500: {"description": "Row store error", "model": ErrorResponse}},
        summary=f"List all {kind.plural}",
        description=f"Returns every {kind.label}, ordered by {kind.sort_key} descending.",
    )
    async def list_notes(db: AsyncSession = Depends(get_db_session)):
        return await note_services[kind.slug].list_notes(db)

    @router.post(
        "",
        status_code=201,
        response_model=schemas.record,
        responses={
            400: {"description": "Missing required fields", "model": ErrorResponse},
            500: {"description": "Row store error", "model": ErrorResponse},
        },
        summary=f"Create a {kind.label}",
    )
    async def create_note(
        payload: payload_model,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await note_services[kind.slug].create_note(db, payload)

    @router.put(
        "/{note_id}",
        response_model=schemas.updated,
        responses={
            400: {"description": "Missing required fields", "model": ErrorResponse},
            404: {"description": "Note not found", "model": ErrorResponse},
            500: {"description": "Row store error", "model": ErrorResponse},
        },
        summary=f"Update a {kind.label}",
        description="Echoes the accepted fields back; the row is not re-read.",
    )
    async def update_note(
        note_id: str,
        payload: payload_model,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await note_services[kind.slug].update_note(db, note_id, payload)

    @router.delete(
        "/{note_id}",
        response_model=DeleteResponse,
        responses={
            404: {"description": "Note not found", "model": ErrorResponse},
            500: {"description": "Row store error", "model": ErrorResponse},
        },
        summary=f"Delete a {kind.label}",
    )
    async def delete_note(
        note_id: str,
        db: AsyncSession = Depends(get_db_session),
    ) -> DeleteResponse:
        await note_services[kind.slug].delete_note(db, note_id)
        return DeleteResponse(success=True)

    return router


routers: List[APIRouter] = [build_router(kind) for kind in NOTE_KINDS]
