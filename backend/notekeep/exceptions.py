"""
NoteKeep Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking internal
       details to the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.

Exception Hierarchy:
    NoteKeepError (base, caller-facing)
    ├── AccessDeniedError            → 401 Unauthorized
    │   ├── MalformedCredentialError   (no/invalid "Bearer <token>" header)
    │   ├── InvalidCredentialError     (bad signature, expired, bad claims)
    │   └── UnknownIdentityError       (valid token, user no longer exists)
    ├── ValidationFailedError        → 400 Bad Request (field-level errors)
    ├── BadRequestError              → 400 Bad Request (malformed identifier)
    ├── ResourceNotFoundError        → 404 Not Found (absent OR not owned)
    ├── ConflictError                → 409 Conflict
    └── InternalFailureError         → 500 Internal Server Error

    StoreError (store-level, never rendered directly)
    ├── NotFoundError
    ├── InvalidIdentifierError
    └── PersistenceError

    The three AccessDeniedError subclasses render identically. The subclass
    is only used for server-side logging.
"""

from typing import Any, Dict, List, Optional


class NoteKeepError(Exception):
    """
    Base exception for all caller-facing NoteKeep errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ══════════════════════════════════════════════════════════════════════════
# Authentication
# ══════════════════════════════════════════════════════════════════════════

class AccessDeniedError(NoteKeepError):
    """
    Raised when a request cannot be resolved to an existing user.

    HTTP:    401 Unauthorized

    Attributes:
        message:         Internal reason, logged only
        public_message:  What the client sees; identical for every bearer-token
                         failure so that expired, forged, and orphaned tokens
                         cannot be told apart
    """

    default_public_message = "Access denied. A valid bearer token is required."

    def __init__(
        self,
        message: str = "Access denied",
        context: Optional[Dict[str, Any]] = None,
        public_message: Optional[str] = None,
    ):
        super().__init__(message=message, context=context)
        self.public_message = public_message or self.default_public_message

    @property
    def reason(self) -> str:
        return type(self).__name__


class MalformedCredentialError(AccessDeniedError):
    """Missing Authorization header, wrong scheme, or empty token."""

    def __init__(self, message: str = "Malformed credential", **kwargs):
        super().__init__(message=message, **kwargs)


class InvalidCredentialError(AccessDeniedError):
    """Signature check failed, token expired, claims unusable, or bad login."""

    def __init__(self, message: str = "Invalid credential", **kwargs):
        super().__init__(message=message, **kwargs)


class UnknownIdentityError(AccessDeniedError):
    """Token verified but its subject no longer exists."""

    def __init__(self, message: str = "Unknown identity", **kwargs):
        super().__init__(message=message, **kwargs)


# ══════════════════════════════════════════════════════════════════════════
# Request Errors
# ══════════════════════════════════════════════════════════════════════════

class ValidationFailedError(NoteKeepError):
    """
    Raised when note input fails the validation gate.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_failed",
            "message": "Validation failed",
            "details": {"errors": [{"field": "title", "message": "..."}]}
        }
    """

    def __init__(
        self,
        errors: List[Dict[str, str]],
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors


class BadRequestError(NoteKeepError):
    """
    Raised when a note identifier is not well-formed.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Invalid note ID format",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ResourceNotFoundError(NoteKeepError):
    """
    Raised when a note does not exist or belongs to another user.

    HTTP:    404 Not Found

    Security Note:
        Absence and foreign ownership are deliberately indistinguishable,
        so the response never confirms that another user's note exists.
    """

    def __init__(
        self,
        resource: str = "note",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class ConflictError(NoteKeepError):
    """
    Raised when a write would violate a uniqueness rule (e.g. duplicate email).

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalFailureError(NoteKeepError):
    """
    Raised when a storage fault or unexpected error interrupts an operation.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The original
        error is logged server-side by whoever raises this.
    """

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# ══════════════════════════════════════════════════════════════════════════
# Store-Level Errors
# ══════════════════════════════════════════════════════════════════════════

class StoreError(Exception):
    """Base class for Note Store outcomes that are not a returned value."""


class NotFoundError(StoreError):
    """Well-formed identifier, but no note with it is owned by the caller."""

    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(f"note {note_id} not found for owner")


class InvalidIdentifierError(StoreError):
    """Identifier does not fit the store's addressing scheme (UUID)."""

    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(f"malformed note identifier: {note_id!r}")


class PersistenceError(StoreError):
    """The storage layer failed. Carries the original exception as __cause__."""
