"""Create note tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates shopping_notes, map_notes and calendar_notes with an index on
       each table's sort key (created_at, created_at, date).
How:   Portable column types only (String ids minted by the service, TEXT,
       TIMESTAMP WITH TIME ZONE, DATE, SMALLINT) so the same migration runs
       on PostgreSQL and SQLite.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _note_columns() -> list:
    return [
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Identifier minted by the service at creation; never changes",
        ),
        sa.Column("text", sa.Text(), nullable=False, comment="Note body"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            comment="When the note was created (UTC)",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "shopping_notes",
        *_note_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_shopping_notes_created_at", "shopping_notes", ["created_at"])

    op.create_table(
        "map_notes",
        *_note_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_map_notes_created_at", "map_notes", ["created_at"])

    op.create_table(
        "calendar_notes",
        *_note_columns(),
        sa.Column("date", sa.Date(), nullable=False, comment="Calendar day the note belongs to"),
        sa.Column("person", sa.SmallInteger(), nullable=False, comment="Author: 1 or 2"),
        sa.CheckConstraint("person IN (1, 2)", name="ck_calendar_notes_person"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_calendar_notes_date", "calendar_notes", ["date"])


def downgrade() -> None:
    op.drop_index("idx_calendar_notes_date", table_name="calendar_notes")
    op.drop_table("calendar_notes")
    op.drop_index("idx_map_notes_created_at", table_name="map_notes")
    op.drop_table("map_notes")
    op.drop_index("idx_shopping_notes_created_at", table_name="shopping_notes")
    op.drop_table("shopping_notes")
