"""
OurNotes — Note Kind Registry
===============================

What:  Declares the three note collections (shopping, map, calendar) as data.
How:   Each NoteKind lists its URL slug, mutable fields, required fields,
       sort key, local snapshot key and user-facing messages. The service,
       routes, ORM mapping and client cache all look kinds up here instead of
       carrying one hand-written copy per collection.
Who:   Imported by services, routes, models, schemas and the client package.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class NoteKind:
    """
    Configuration for one note collection.

    Attributes:
        slug:             URL segment under /api (e.g. "shopping-notes")
        table:            Row store table name
        label:            Singular noun used in messages ("shopping note")
        fields:           Mutable fields accepted by create and update
        sort_key:         Column listed in descending order
        storage_key:      Key of the client's local snapshot
        required_message: Error message when a required field is missing
    """

    slug: str
    table: str
    label: str
    fields: Tuple[str, ...]
    sort_key: str
    storage_key: str
    required_message: str

    @property
    def plural(self) -> str:
        return f"{self.label}s"

    @property
    def required_fields(self) -> Tuple[str, ...]:
        # Every mutable field is required on both create and update
        return self.fields

    def failure_message(self, verb: str, many: bool = False) -> str:
        """Generic store-error message, e.g. 'Failed to create map note'."""
        noun = self.plural if many else self.label
        return f"Failed to {verb} {noun}"


SHOPPING = NoteKind(
    slug="shopping-notes",
    table="shopping_notes",
    label="shopping note",
    fields=("text",),
    sort_key="created_at",
    storage_key="shoppingNotes",
    required_message="Text is required",
)

MAP = NoteKind(
    slug="map-notes",
    table="map_notes",
    label="map note",
    fields=("text",),
    sort_key="created_at",
    storage_key="mapNotes",
    required_message="Text is required",
)

CALENDAR = NoteKind(
    slug="calendar-notes",
    table="calendar_notes",
    label="calendar note",
    fields=("text", "date", "person"),
    sort_key="date",
    storage_key="calendarNotes",
    required_message="Text, date, and person are required",
)

NOTE_KINDS: Tuple[NoteKind, ...] = (SHOPPING, MAP, CALENDAR)

KINDS_BY_SLUG: Dict[str, NoteKind] = {kind.slug: kind for kind in NOTE_KINDS}

# Allowed values of CalendarNote.person
PERSONS = (1, 2)
