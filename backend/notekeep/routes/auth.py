"""
NoteKeep Backend — Account Route Handlers
===========================================

What:  Registration, login, and the caller's own account under /api/auth.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.database import get_db_session
from notekeep.routes.dependencies import get_current_identity
from notekeep.schemas.auth import (
    Identity,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from notekeep.schemas.note import DeleteResponse, ErrorResponse
from notekeep.services.user_service import user_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid registration data", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.register(
        db, payload.email, payload.password, payload.display_name
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid email or password", "model": ErrorResponse}},
    summary="Exchange email and password for a bearer token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await user_service.login(db, payload.email, payload.password)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "Not authenticated", "model": ErrorResponse}},
    summary="The authenticated user's profile",
)
async def me(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.get_profile(db, identity)


@router.delete(
    "/me",
    response_model=DeleteResponse,
    responses={401: {"description": "Not authenticated", "model": ErrorResponse}},
    summary="Delete the authenticated user's account and all their notes",
)
async def delete_me(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await user_service.delete_account(db, identity)
