"""Create users and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `users` and the owner-scoped `notes` table.
How:   PostgreSQL-specific: UUID keys, TIMESTAMP WITH TIME ZONE, and a GIN
       full-text index whose expression matches NoteStore's search clause.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Must stay identical to the expression built in services/note_store.py
_SEARCH_DOCUMENT = "to_tsvector('english'::regconfig, title || ' ' || content)"


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "notes",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["owner_id"], ["users.id"], name="fk_notes_owner_id_users", ondelete="CASCADE"
        ),
        sa.CheckConstraint("length(title) BETWEEN 1 AND 100", name="ck_notes_title_length"),
        sa.CheckConstraint("length(content) BETWEEN 1 AND 5000", name="ck_notes_content_length"),
    )

    # Listing: WHERE owner_id = :owner ORDER BY created_at DESC
    op.create_index(
        "idx_notes_owner_created_at",
        "notes",
        ["owner_id", sa.text("created_at DESC")],
    )

    # Search: to_tsvector(...) @@ websearch_to_tsquery(...)
    op.create_index(
        "idx_notes_search",
        "notes",
        [sa.text(_SEARCH_DOCUMENT)],
        postgresql_using="gin",
    )


def downgrade() -> None:
    op.drop_index("idx_notes_search", table_name="notes")
    op.drop_index("idx_notes_owner_created_at", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
