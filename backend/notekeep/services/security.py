"""
NoteKeep Backend — Token & Password Primitives
================================================

What:  Signs/verifies access tokens and hashes/verifies passwords.
Why:   Keeps the cryptography in one small module so the authenticator and
       the account service never touch python-jose or passlib directly.

Token format:
    HS256 JWT (algorithm configurable) with claims:
        sub: user UUID (string)
        iat: issue time (epoch seconds)
        exp: expiry (epoch seconds)
    Tokens are stateless; the only revocation is deleting the user, which
    the authenticator detects on lookup.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from jose import jwt
from passlib.context import CryptContext

from notekeep.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

# Every decoded token must carry these claims
_DECODE_OPTIONS = {"require_exp": True, "require_iat": True, "require_sub": True}


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend the same time as a real verify when the account does not exist."""
    pwd_context.dummy_verify()


def create_access_token(
    user_id: uuid.UUID,
    expires_delta: Optional[timedelta] = None,
) -> Tuple[str, int]:
    """
    Issue a signed token for `user_id`.

    Returns:
        (token, lifetime in seconds)
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, int(lifetime.total_seconds())


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        jose.JWTError: Bad signature, expired, malformed, or missing claims
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options=_DECODE_OPTIONS,
    )
