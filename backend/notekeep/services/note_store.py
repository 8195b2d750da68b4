"""
NoteKeep Backend — Note Store
===============================

What:  Owner-scoped persistence operations over the `notes` table.
Why:   Keeps every query that touches notes in one place, so the ownership
       filter cannot be forgotten by a caller.
How:   Each method takes the request's AsyncSession and an owner_id, and
       issues at most one statement per note. Atomicity for racing writes on
       the same note is the database's single-statement atomicity.

Ownership Rule:
    Every statement carries `owner_id = :owner` in its WHERE clause, conjoined
    with whatever else the operation needs (id, search). A note owned by
    someone else behaves exactly like a missing note.

Outcomes:
    NotFoundError           → well-formed id, no such note for this owner
    InvalidIdentifierError  → id is not a UUID
    PersistenceError        → storage failure (wraps the original as __cause__)

Search:
    PostgreSQL:  to_tsvector(<lang>, title || ' ' || content)
                 @@ websearch_to_tsquery(<lang>, :search)
                 (matches the GIN index created by migration 001)
    Other:       every whitespace-separated term must appear in title or
                 content, case-insensitively (ILIKE, wildcards escaped)
    Results keep the listing order (newest first) in both cases.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple, Union

from sqlalchemy import ColumnElement, and_, delete, func, literal_column, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.config import settings
from notekeep.exceptions import InvalidIdentifierError, NotFoundError, PersistenceError
from notekeep.models.note import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH, Note

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1

# Upper bound for page and page_size; (MAX - 1) * MAX still fits a signed
# 64-bit OFFSET, so an absurd page number is just a page past the end
MAX_PAGING_VALUE = 2**31 - 1

NoteId = Union[str, uuid.UUID]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    return min(number, MAX_PAGING_VALUE)


def normalize_pagination(page: Any, page_size: Any) -> Tuple[int, int]:
    """
    Apply listing defaults: page 1 and the configured page size whenever the
    value is absent, not an integer, or below 1. Values above
    MAX_PAGING_VALUE are clamped to it.

    Idempotent: NoteService normalizes to build pagination metadata, and
    NoteStore.list normalizes again for callers that use the store directly.
    """
    return (
        _coerce_positive_int(page, DEFAULT_PAGE),
        _coerce_positive_int(page_size, settings.default_page_size),
    )


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class NoteStore:
    """Stateless; the session passed to each call carries all request state."""

    # ── Identifiers ───────────────────────────────────────────────────────

    @staticmethod
    def parse_id(note_id: NoteId) -> uuid.UUID:
        if isinstance(note_id, uuid.UUID):
            return note_id
        try:
            return uuid.UUID(str(note_id))
        except ValueError:
            raise InvalidIdentifierError(str(note_id)) from None

    @staticmethod
    def _check_fields(title: str, content: str) -> None:
        # Second line of defence behind the validation gate
        if not 1 <= len(title) <= TITLE_MAX_LENGTH:
            raise PersistenceError("refusing to persist note: title length out of range")
        if not 1 <= len(content) <= CONTENT_MAX_LENGTH:
            raise PersistenceError("refusing to persist note: content length out of range")

    # ── Queries ───────────────────────────────────────────────────────────

    @staticmethod
    def _search_clause(db: AsyncSession, search_text: str) -> ColumnElement[bool]:
        if db.get_bind().dialect.name == "postgresql":
            language = literal_column(f"'{settings.search_language}'::regconfig")
            document = func.to_tsvector(
                language, Note.title + literal_column("' '") + Note.content
            )
            return document.op("@@")(func.websearch_to_tsquery(language, search_text))

        return and_(
            *[
                or_(
                    Note.title.ilike(_like_pattern(term), escape="\\"),
                    Note.content.ilike(_like_pattern(term), escape="\\"),
                )
                for term in search_text.split()
            ]
        )

    async def create(
        self, db: AsyncSession, owner_id: uuid.UUID, title: str, content: str
    ) -> Note:
        """Insert a note for `owner_id` with fresh id and timestamps."""
        self._check_fields(title, content)
        now = _utcnow()
        note = Note(
            id=uuid.uuid4(),
            owner_id=owner_id,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(note)
            await db.flush()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to insert note") from e

        logger.debug("Note %s created for owner %s", note.id, owner_id)
        return note

    async def get(self, db: AsyncSession, owner_id: uuid.UUID, note_id: NoteId) -> Note:
        """Point lookup conjoined with the owner filter."""
        nid = self.parse_id(note_id)
        try:
            result = await db.execute(
                select(Note).where(Note.id == nid, Note.owner_id == owner_id)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to load note") from e

        if note is None:
            raise NotFoundError(str(nid))
        return note

    async def list(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        page: Any = None,
        page_size: Any = None,
        search_text: Optional[str] = None,
    ) -> Tuple[List[Note], int]:
        """
        One page of the owner's notes plus the size of the full matching set.

        Order: created_at DESC, id DESC. The id tie-breaker makes the order
        total, so consecutive pages never overlap or skip notes.
        """
        # Already normalized when called through NoteService; a no-op then
        page, page_size = normalize_pagination(page, page_size)

        criteria = [Note.owner_id == owner_id]
        if search_text and search_text.strip():
            criteria.append(self._search_clause(db, search_text.strip()))

        try:
            count_result = await db.execute(
                select(func.count()).select_from(Note).where(*criteria)
            )
            total = count_result.scalar_one()

            result = await db.execute(
                select(Note)
                .where(*criteria)
                .order_by(Note.created_at.desc(), Note.id.desc())
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise PersistenceError("failed to list notes") from e

        return notes, total

    # ── Mutations ─────────────────────────────────────────────────────────

    async def update(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        note_id: NoteId,
        title: str,
        content: str,
    ) -> Note:
        """Replace title/content in one conditional UPDATE ... RETURNING."""
        nid = self.parse_id(note_id)
        self._check_fields(title, content)
        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == nid, Note.owner_id == owner_id)
                .values(title=title, content=content, updated_at=_utcnow())
                .returning(Note)
                .execution_options(populate_existing=True)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to update note") from e

        if note is None:
            raise NotFoundError(str(nid))
        return note

    async def delete(self, db: AsyncSession, owner_id: uuid.UUID, note_id: NoteId) -> uuid.UUID:
        """Remove the note permanently in one conditional DELETE ... RETURNING."""
        nid = self.parse_id(note_id)
        try:
            result = await db.execute(
                delete(Note)
                .where(Note.id == nid, Note.owner_id == owner_id)
                .returning(Note.id)
            )
            deleted_id = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to delete note") from e

        if deleted_id is None:
            raise NotFoundError(str(nid))
        return deleted_id


note_store = NoteStore()
