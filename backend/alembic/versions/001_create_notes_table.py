"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2024-11-20 00:00:00.000000+00:00

What:  Creates the `notes` table holding diary notes.
How:   Generic SQLAlchemy types (Uuid, Text, DateTime(timezone=True)), so the
       same migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table (destructive, all notes are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table and its created_at index."""
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Unique identifier assigned on insert",
        ),
        sa.Column("title", sa.Text(), nullable=False, comment="Note title (non-empty)"),
        sa.Column("content", sa.Text(), nullable=False, comment="Note body (non-empty)"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this note was last updated (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # GET /notes orders by creation time
    op.create_index("idx_notes_created_at", "notes", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
