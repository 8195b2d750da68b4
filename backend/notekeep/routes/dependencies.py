"""
NoteKeep Backend — Route Dependencies
=======================================

What:  FastAPI dependency that turns the Authorization header into an Identity.
Why:   Routes receive the Identity as an ordinary argument and pass it on
       explicitly; nothing downstream reads request state.

The header is read with `Header()` instead of FastAPI's HTTPBearer so that
the authenticator, not the framework, decides what counts as malformed.
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.database import get_db_session
from notekeep.schemas.auth import Identity
from notekeep.services.authenticator import authenticator


async def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Identity:
    """Raises AccessDeniedError (→ 401) before any route logic runs."""
    return await authenticator.authenticate(db, authorization)
