"""
NoteKeep Backend — Notes Route Handlers
=========================================

What:  CRUD and search endpoints for the caller's notes under /api/notes.
How:   Resolves the Identity, delegates to NoteService, returns JSON.

Routes are thin: every rule (ownership, validation, pagination defaults,
error mapping) lives in the services. Note ids are taken as plain strings
so that a malformed id reaches the store and comes back as 400 bad_request
rather than FastAPI's 422.

Caching:
    Note data is private and mutable, so every response is `no-store`.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.database import get_db_session
from notekeep.routes.dependencies import get_current_identity
from notekeep.schemas.auth import Identity
from notekeep.schemas.note import (
    DeleteResponse,
    ErrorResponse,
    NoteListResponse,
    NoteResponse,
    NoteWriteRequest,
)
from notekeep.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

_AUTH_ERRORS = {
    401: {"description": "Missing, invalid, or expired token", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Validation failed", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteWriteRequest,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await note_service.create_note(db, identity, payload.title, payload.content)
    response.headers["Location"] = f"/api/notes/{note.id}"
    return note


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses=_AUTH_ERRORS,
    summary="List or search the caller's notes",
    description=(
        "Returns one page of the caller's notes, newest first. `page` and "
        "`page_size` fall back to 1 and 10 when missing or invalid. A non-empty "
        "`search` restricts results to notes whose title or content match."
    ),
)
async def list_notes(
    response: Response,
    page: Optional[str] = Query(default=None, description="1-indexed page number"),
    page_size: Optional[str] = Query(default=None, description="Notes per page"),
    search: Optional[str] = Query(default=None, description="Text to search for"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    """
    Example client usage:
        GET /api/notes?page=2&page_size=20
        GET /api/notes?search=report
    """
    result = await note_service.list_notes(
        db, identity, page=page, page_size=page_size, search_text=search
    )
    response.headers["X-Total-Count"] = str(result.pagination.total_notes)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Get one of the caller's notes",
)
async def get_note(
    note_id: str,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    result = await note_service.get_note(db, identity, note_id)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Validation failed or malformed note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Replace the title and content of a note",
)
async def update_note(
    note_id: str,
    payload: NoteWriteRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db, identity, note_id, payload.title, payload.content
    )


@router.delete(
    "/notes/{note_id}",
    response_model=DeleteResponse,
    responses={
        400: {"description": "Malformed note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Permanently delete a note",
)
async def delete_note(
    note_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await note_service.delete_note(db, identity, note_id)
