"""
NoteKeep Backend — Token Authenticator
========================================

What:  Resolves an Authorization header value to an Identity.
Why:   Every note operation needs an owner; there is no anonymous path.
How:   Three checks, in order, each with its own failure kind:

    ┌──────────────────┐    ┌──────────────────┐    ┌──────────────────┐
    │ "Bearer <token>" │───▶│ signature + exp  │───▶│  user lookup     │
    │   shape check    │    │  (python-jose)   │    │  (users table)   │
    └──────────────────┘    └──────────────────┘    └──────────────────┘
      Malformed               InvalidCredential       UnknownIdentity
      Credential

    All three are AccessDeniedError subclasses and render as the same 401.
    The subclass only shows up in server logs.

Side effects: none. The lookup is a read.
"""

import logging
import uuid
from typing import Optional

from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.exceptions import (
    InvalidCredentialError,
    MalformedCredentialError,
    UnknownIdentityError,
)
from notekeep.models.user import User
from notekeep.schemas.auth import Identity
from notekeep.services.security import decode_access_token

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


class TokenAuthenticator:
    """Stateless; safe to share across concurrent requests."""

    def extract_token(self, raw_header: Optional[str]) -> str:
        """
        Return the token from a `"Bearer <token>"` header value.

        Raises:
            MalformedCredentialError: Header missing, other scheme, or empty token
        """
        if not raw_header or not isinstance(raw_header, str):
            raise MalformedCredentialError("Authorization header missing")

        scheme, _, token = raw_header.partition(" ")
        if scheme != BEARER_SCHEME:
            raise MalformedCredentialError(
                "Unsupported authorization scheme",
                context={"scheme": scheme[:20]},
            )

        token = token.strip()
        if not token:
            raise MalformedCredentialError("Empty bearer token")
        return token

    def verify_token(self, token: str) -> uuid.UUID:
        """
        Verify the token and return its subject.

        Raises:
            InvalidCredentialError: Bad signature, expired, or unusable `sub`
        """
        try:
            claims = decode_access_token(token)
        except JWTError as e:
            raise InvalidCredentialError(
                "Token verification failed",
                context={"jwt_error": type(e).__name__},
            ) from None

        try:
            return uuid.UUID(str(claims["sub"]))
        except (KeyError, ValueError):
            raise InvalidCredentialError("Token subject is not a user identifier") from None

    async def authenticate(self, db: AsyncSession, raw_header: Optional[str]) -> Identity:
        """
        Resolve `raw_header` to the Identity of an existing user.

        Raises:
            MalformedCredentialError, InvalidCredentialError, UnknownIdentityError
        """
        try:
            token = self.extract_token(raw_header)
            user_id = self.verify_token(token)

            user = await db.get(User, user_id)
            if user is None:
                raise UnknownIdentityError(
                    "Token subject no longer exists",
                    context={"user_id": str(user_id)},
                )
        except (MalformedCredentialError, InvalidCredentialError, UnknownIdentityError) as e:
            logger.info("Authentication rejected (%s): %s %s", e.reason, e.message, e.context)
            raise

        return Identity(user_id=user.id, email=user.email, display_name=user.display_name)


authenticator = TokenAuthenticator()
