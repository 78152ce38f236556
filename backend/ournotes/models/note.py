"""
OurNotes — Note SQLAlchemy Models
===================================

What:  ORM models for the three note tables: shopping_notes, map_notes and
       calendar_notes.
How:   The shared columns (id, text, created_at) come from NoteColumns; each
       model adds its table name, its extra columns and an index on its sort
       key. MODELS maps every NoteKind slug to its model.
Who:   Used by NoteService for statements and by Alembic for schema management.

Table Design:
    - id: string primary key minted by the service (UUID4 text). Strings keep
      the column portable across PostgreSQL and SQLite.
    - text: TEXT, no length limit
    - created_at: UTC timestamp with timezone, set by the service
    - calendar_notes.date / person: the day the note belongs to and which of
      the two people wrote it (1 or 2)
    No foreign keys, no joins: every row belongs to exactly one table.
"""

import datetime as dt
from typing import Dict, Type

from sqlalchemy import CheckConstraint, Date, DateTime, Index, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ournotes.database import Base
from ournotes.kinds import CALENDAR, MAP, SHOPPING


class NoteColumns:
    """Columns shared by every note table."""

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Identifier minted by the service at creation; never changes",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body",
    )

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the note was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, created_at='{self.created_at}')>"


class ShoppingNote(NoteColumns, Base):
    """One line of the shopping list. Listed newest first."""

    __tablename__ = SHOPPING.table
    __table_args__ = (
        Index("idx_shopping_notes_created_at", "created_at"),
    )


class MapNote(NoteColumns, Base):
    """A place annotation. Listed newest first."""

    __tablename__ = MAP.table
    __table_args__ = (
        Index("idx_map_notes_created_at", "created_at"),
    )


class CalendarNote(NoteColumns, Base):
    """
    A calendar entry for a given day, written by person 1 or 2.

    Listed by `date` descending (latest day first), not by creation time.
    """

    __tablename__ = CALENDAR.table

    date: Mapped[dt.date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar day the note belongs to",
    )

    person: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        comment="Author: 1 or 2",
    )

    __table_args__ = (
        CheckConstraint("person IN (1, 2)", name="ck_calendar_notes_person"),
        Index("idx_calendar_notes_date", "date"),
    )


MODELS: Dict[str, Type[NoteColumns]] = {
    SHOPPING.slug: ShoppingNote,
    MAP.slug: MapNote,
    CALENDAR.slug: CalendarNote,
}
