"""
NoteKeep Backend — Note Access Service
========================================

What:  Request-facing orchestration of note operations.
Why:   Turns an authenticated Identity plus request input into store calls,
       and store outcomes into caller-facing errors.
How:   Validation gate first (writes only), then exactly one store call,
       then mapping to response models.
Who:   Called by the notes route handlers with an explicit Identity.

Outcome Mapping:
    ┌─────────────────────────────┬──────────────────────────────┐
    │ Gate / Store outcome        │ Raised to caller             │
    ├─────────────────────────────┼──────────────────────────────┤
    │ validation errors           │ ValidationFailedError (400)  │
    │ NotFoundError               │ ResourceNotFoundError (404)  │
    │ InvalidIdentifierError      │ BadRequestError (400)        │
    │ PersistenceError / anything │ InternalFailureError (500)   │
    └─────────────────────────────┴──────────────────────────────┘

    Validation failures short-circuit before the store is invoked.
    Internal failures are logged with the traceback; the caller only gets
    a generic message.
"""

import logging
import math
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.exceptions import (
    BadRequestError,
    InternalFailureError,
    InvalidIdentifierError,
    NoteKeepError,
    NotFoundError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from notekeep.schemas.auth import Identity
from notekeep.schemas.note import (
    DeleteResponse,
    NoteListResponse,
    NoteResponse,
    PaginationMeta,
)
from notekeep.services.note_store import NoteStore, normalize_pagination, note_store
from notekeep.services.validation import NoteValidator, note_validator

logger = logging.getLogger(__name__)


class NoteService:
    """
    Ownership-enforcing access layer for notes.

    The owner of every store call is `identity.user_id`. No method accepts
    an owner from request input.
    """

    def __init__(
        self,
        store: Optional[NoteStore] = None,
        validator: Optional[NoteValidator] = None,
    ):
        self.store = store or note_store
        self.validator = validator or note_validator

    @contextmanager
    def _store_outcomes(
        self, operation: str, identity: Identity, note_id: Any = None
    ) -> Iterator[None]:
        """Translate store outcomes raised inside the block into caller-facing errors."""
        try:
            yield
        except NotFoundError:
            raise ResourceNotFoundError(
                resource="note",
                context={"note_id": str(note_id), "operation": operation},
            ) from None
        except InvalidIdentifierError:
            raise BadRequestError(context={"note_id": str(note_id)[:64]}) from None
        except NoteKeepError:
            raise
        except Exception as e:
            logger.error(
                "Note %s failed for user %s: %s",
                operation,
                identity.user_id,
                e,
                exc_info=True,
            )
            raise InternalFailureError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e

    def _validated(self, title: Any, content: Any):
        result = self.validator.validate(title, content)
        if not result.ok:
            raise ValidationFailedError(errors=result.error_dicts())
        return result

    async def create_note(
        self, db: AsyncSession, identity: Identity, title: Any, content: Any
    ) -> NoteResponse:
        """Validate and persist a new note owned by the caller."""
        clean = self._validated(title, content)
        with self._store_outcomes("create", identity):
            note = await self.store.create(db, identity.user_id, clean.title, clean.content)
        logger.info("Note %s created by user %s", note.id, identity.user_id)
        return NoteResponse.model_validate(note)

    async def get_note(self, db: AsyncSession, identity: Identity, note_id: Any) -> NoteResponse:
        """Fetch one of the caller's notes."""
        with self._store_outcomes("get", identity, note_id):
            note = await self.store.get(db, identity.user_id, note_id)
        return NoteResponse.model_validate(note)

    async def list_notes(
        self,
        db: AsyncSession,
        identity: Identity,
        page: Any = None,
        page_size: Any = None,
        search_text: Optional[str] = None,
    ) -> NoteListResponse:
        """
        One page of the caller's notes, optionally filtered by search text.

        Pagination:
            page defaults to 1 and page_size to DEFAULT_PAGE_SIZE when absent
            or invalid. total_pages = ceil(total_notes / page_size).
        """
        page, page_size = normalize_pagination(page, page_size)
        with self._store_outcomes("list", identity):
            notes, total = await self.store.list(
                db, identity.user_id, page, page_size, search_text
            )

        total_pages = math.ceil(total / page_size)
        return NoteListResponse(
            notes=[NoteResponse.model_validate(n) for n in notes],
            pagination=PaginationMeta(
                current_page=page,
                page_size=page_size,
                total_pages=total_pages,
                total_notes=total,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
        )

    async def update_note(
        self,
        db: AsyncSession,
        identity: Identity,
        note_id: Any,
        title: Any,
        content: Any,
    ) -> NoteResponse:
        """Replace title/content of one of the caller's notes."""
        clean = self._validated(title, content)
        with self._store_outcomes("update", identity, note_id):
            note = await self.store.update(
                db, identity.user_id, note_id, clean.title, clean.content
            )
        logger.info("Note %s updated by user %s", note.id, identity.user_id)
        return NoteResponse.model_validate(note)

    async def delete_note(
        self, db: AsyncSession, identity: Identity, note_id: Any
    ) -> DeleteResponse:
        """Permanently delete one of the caller's notes."""
        with self._store_outcomes("delete", identity, note_id):
            deleted_id = await self.store.delete(db, identity.user_id, note_id)
        logger.info("Note %s deleted by user %s", deleted_id, identity.user_id)
        return DeleteResponse(message="Note deleted successfully", id=deleted_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
