"""
OurNotes — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the HTTP contract of the Note Service.
How:   FastAPI uses these models to parse request bodies, serialize responses
       and generate the OpenAPI document. SCHEMAS maps each NoteKind slug to
       its payload/record/update models so the generic routes can be built
       per kind.

Payload fields are all optional on purpose: a missing `text` has to reach the
service and come back as the kind's own 400 message, not as FastAPI's
generic 422.
"""

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, Field, StrictInt, field_validator

from ournotes.kinds import CALENDAR, MAP, SHOPPING


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """Create/update body for shopping and map notes: {"text": "..."}."""
    text: Optional[str] = Field(default=None, description="Note body (required)")


class CalendarNotePayload(NotePayload):
    """
    Create/update body for calendar notes.

    `date` should be a plain day ("2024-05-01"). A full ISO timestamp is also
    accepted and read as the wall-clock day in its own offset:
    "2024-05-01T00:00:00+09:00" is May 1st. A "Z" timestamp is a UTC day, so
    clients must not send `toISOString()` of a local midnight.

    `person` is a strict integer; JSON booleans and numeric strings are
    rejected as an invalid body.
    """
    date: Optional[dt.date] = Field(default=None, description="Calendar day (required)")
    person: Optional[StrictInt] = Field(default=None, description="Author, 1 or 2 (required)")

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            if not v:
                return None
            if "T" in v:
                v = dt.datetime.fromisoformat(v.replace("Z", "+00:00"))
        # .date() keeps the timestamp's own offset, never converts to UTC
        if isinstance(v, dt.datetime):
            return v.date()
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteRecord(BaseModel):
    """A stored shopping or map note."""
    id: str = Field(description="Server-assigned identifier")
    text: str = Field(description="Note body")
    created_at: dt.datetime = Field(description="Creation time (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: dt.datetime) -> dt.datetime:
        # SQLite hands timestamps back without tzinfo
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v


class CalendarNoteRecord(NoteRecord):
    """A stored calendar note."""
    date: dt.date = Field(description="Calendar day")
    person: int = Field(description="Author, 1 or 2")


class NoteUpdated(BaseModel):
    """Echo of an accepted update (fields as sent, not re-read)."""
    id: str
    text: str
    success: bool = True


class CalendarNoteUpdated(NoteUpdated):
    date: dt.date
    person: int


class DeleteResponse(BaseModel):
    success: bool = True


class MessageResponse(BaseModel):
    """Liveness message returned by GET /."""
    message: str


class ErrorResponse(BaseModel):
    """
    Error body shared by every failing endpoint.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Per-kind lookup
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class KindSchemas:
    payload: Type[NotePayload]
    record: Type[NoteRecord]
    updated: Type[NoteUpdated]


SCHEMAS: Dict[str, KindSchemas] = {
    SHOPPING.slug: KindSchemas(NotePayload, NoteRecord, NoteUpdated),
    MAP.slug: KindSchemas(NotePayload, NoteRecord, NoteUpdated),
    CALENDAR.slug: KindSchemas(CalendarNotePayload, CalendarNoteRecord, CalendarNoteUpdated),
}
