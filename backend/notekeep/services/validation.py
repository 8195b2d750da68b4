"""
NoteKeep Backend — Note Validation Gate
=========================================

What:  Field-level validation of note title and content before any write.
Why:   The access service must reject bad input before touching the store,
       and report every failing field at once.
How:   Trims surrounding whitespace, then checks non-emptiness and length.
       Returns a ValidationResult instead of raising, so the caller decides
       how to surface errors.

Rules:
    title:   1-100 characters after trimming
    content: 1-5000 characters after trimming
    Anything that is not a string counts as empty.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from notekeep.models.note import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH

TITLE_MESSAGE = f"Title is required and must be between 1-{TITLE_MAX_LENGTH} characters"
CONTENT_MESSAGE = f"Content is required and must be between 1-{CONTENT_MAX_LENGTH} characters"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one note write.

    `title` and `content` are the trimmed values; they are only meaningful
    (and only persisted) when `ok` is true.
    """
    title: str
    content: str
    errors: Tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_dicts(self) -> List[Dict[str, str]]:
        return [{"field": e.field, "message": e.message} for e in self.errors]


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class NoteValidator:
    """Validates note writes. Stateless; one shared instance is enough."""

    def validate(self, title: Any, content: Any) -> ValidationResult:
        clean_title = _trimmed(title)
        clean_content = _trimmed(content)

        errors: List[FieldError] = []
        if not 1 <= len(clean_title) <= TITLE_MAX_LENGTH:
            errors.append(FieldError("title", TITLE_MESSAGE))
        if not 1 <= len(clean_content) <= CONTENT_MAX_LENGTH:
            errors.append(FieldError("content", CONTENT_MESSAGE))

        return ValidationResult(
            title=clean_title,
            content=clean_content,
            errors=tuple(errors),
        )


note_validator = NoteValidator()
