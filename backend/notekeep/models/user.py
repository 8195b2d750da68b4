"""
NoteKeep Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table.
Why:   The authenticator resolves token subjects against this table, and
       notes reference it as their owner.

The note core treats a user as an opaque `id`. `email` and `display_name`
are the public profile fields carried on the Identity; `password_hash` never
leaves the account service.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notekeep.database import Base


class User(Base):
    """A registered account. Deleting it removes its notes (ON DELETE CASCADE)."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Stored lower-cased; uniqueness is case-insensitive by construction
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    display_name: Mapped[str] = mapped_column(String(100), nullable=False)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
