"""
NoteKeep Backend — Account Service
====================================

What:  Registration, login, profile, and account deletion.
Why:   Tokens have to come from somewhere, and deleting an account is the
       only way a valid token stops resolving to a user.
Who:   Called by the auth route handlers.

Login failures use one message for "no such email" and "wrong password",
and an unknown email still pays for a hash verification, so responses do
not reveal which emails are registered.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.exceptions import ConflictError, InvalidCredentialError, UnknownIdentityError
from notekeep.models.note import Note
from notekeep.models.user import User
from notekeep.schemas.auth import Identity, TokenResponse, UserResponse
from notekeep.schemas.note import DeleteResponse
from notekeep.services.security import (
    create_access_token,
    dummy_verify,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Invalid email or password"


class UserService:

    async def register(
        self, db: AsyncSession, email: str, password: str, display_name: str
    ) -> UserResponse:
        """
        Create an account.

        Raises:
            ConflictError: The email is already registered
        """
        existing = await db.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("An account with this email already exists")

        user = User(email=email, display_name=display_name, password_hash=hash_password(password))
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError("An account with this email already exists") from None

        logger.info("User %s registered", user.id)
        return UserResponse.model_validate(user)

    async def login(self, db: AsyncSession, email: str, password: str) -> TokenResponse:
        """
        Exchange credentials for an access token.

        Raises:
            InvalidCredentialError: Unknown email or wrong password
        """
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None:
            dummy_verify()
            raise InvalidCredentialError(
                "Login for unknown email", public_message=LOGIN_FAILED_MESSAGE
            )
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialError(
                "Login with wrong password",
                context={"user_id": str(user.id)},
                public_message=LOGIN_FAILED_MESSAGE,
            )

        token, expires_in = create_access_token(user.id)
        logger.info("User %s logged in", user.id)
        return TokenResponse(access_token=token, expires_in=expires_in)

    async def get_profile(self, db: AsyncSession, identity: Identity) -> UserResponse:
        user = await db.get(User, identity.user_id)
        if user is None:
            # Deleted between authentication and this read
            raise UnknownIdentityError("Profile owner disappeared mid-request")
        return UserResponse.model_validate(user)

    async def delete_account(self, db: AsyncSession, identity: Identity) -> DeleteResponse:
        """
        Delete the caller's account and all of their notes.

        Notes are deleted explicitly as well as through ON DELETE CASCADE,
        because SQLite does not enforce foreign keys by default.
        """
        await db.execute(delete(Note).where(Note.owner_id == identity.user_id))
        await db.execute(delete(User).where(User.id == identity.user_id))
        logger.info("User %s deleted their account", identity.user_id)
        return DeleteResponse(message="Account deleted successfully", id=identity.user_id)


user_service = UserService()
