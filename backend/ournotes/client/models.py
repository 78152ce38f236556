"""
OurNotes — Client-Side Note Records
=====================================

What:  The shapes the client keeps in memory and in its local snapshots.
How:   Pydantic models parse wire JSON (ISO strings) into datetime/date
       objects. SNAPSHOTS holds a TypeAdapter per kind that turns a whole
       collection into a JSON array and back.
"""

import datetime as dt
import uuid
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, TypeAdapter

from ournotes.kinds import CALENDAR, MAP, SHOPPING


class LocalNote(BaseModel):
    """A shopping or map note as the client holds it."""
    id: str
    text: str
    created_at: dt.datetime


class LocalCalendarNote(LocalNote):
    """A calendar note as the client holds it."""
    date: dt.date
    person: Optional[int] = None


LOCAL_MODELS: Dict[str, Type[LocalNote]] = {
    SHOPPING.slug: LocalNote,
    MAP.slug: LocalNote,
    CALENDAR.slug: LocalCalendarNote,
}

SNAPSHOTS: Dict[str, TypeAdapter] = {
    slug: TypeAdapter(List[model]) for slug, model in LOCAL_MODELS.items()
}


def local_note_id() -> str:
    """Id for a note created while the service is unreachable."""
    return f"local-{uuid.uuid4().hex}"


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)
