"""
NoteKeep Backend — Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteStore for owner-scoped CRUD and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: Non-sequential, so note IDs cannot be enumerated
    - owner_id: Foreign key to users; every query filters on it
    - title / content: Length limits duplicated as CHECK constraints so that
      no write path can persist an invalid note
    - created_at / updated_at: UTC timestamps assigned by the store

    Index on (owner_id, created_at DESC):
        Serves the listing query "this user's notes, newest first" directly.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notekeep.database import Base

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 5000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A personal text note owned by exactly one user.

    Lifecycle:
        1. Created by the owner (id, owner_id, timestamps assigned by the store)
        2. title/content replaced by updates; updated_at refreshed each time
        3. Deleted permanently (no soft-delete, no versions)

    Query Patterns:
        - List: WHERE owner_id = :owner [AND <search>] ORDER BY created_at DESC, id DESC
        - Point lookup: WHERE id = :id AND owner_id = :owner
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)

    # Why TEXT: 5000 characters exceeds common VARCHAR index limits
    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    __table_args__ = (
        CheckConstraint(
            f"length(title) BETWEEN 1 AND {TITLE_MAX_LENGTH}",
            name="ck_notes_title_length",
        ),
        CheckConstraint(
            f"length(content) BETWEEN 1 AND {CONTENT_MAX_LENGTH}",
            name="ck_notes_content_length",
        ),
        Index("idx_notes_owner_created_at", "owner_id", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, owner_id={self.owner_id}, created_at='{self.created_at}')>"
