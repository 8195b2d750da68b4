"""
NoteKeep Backend — Note Request/Response Schemas
==================================================

What:  Pydantic models defining the notes API contract.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation.

Design Decision:
    NoteWriteRequest only checks that title/content are strings. Length and
    emptiness rules belong to the validation gate (services/validation.py),
    which reports every failing field at once with stable messages.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteWriteRequest(BaseModel):
    """Body of POST /api/notes and PUT /api/notes/{id}."""
    title: str = Field(description="Note title (1-100 characters after trimming)")
    content: str = Field(description="Note body (1-5000 characters after trimming)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note. Only ever returned to its owner."""
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    owner_id: uuid.UUID = Field(description="Identifier of the owning user")
    created_at: datetime = Field(description="When the note was created (UTC)")
    updated_at: datetime = Field(description="When the note was last modified (UTC)")

    model_config = {"from_attributes": True}


class PaginationMeta(BaseModel):
    """
    Offset pagination state for a note listing.

    total_pages = ceil(total_notes / page_size); 0 when nothing matches.
    """
    current_page: int = Field(description="1-indexed page that was returned")
    page_size: int = Field(description="Page size that was applied")
    total_pages: int = Field(description="Number of pages for the full matching set")
    total_notes: int = Field(description="Number of notes matching the query")
    has_next: bool = Field(description="Whether a later page exists")
    has_prev: bool = Field(description="Whether an earlier page exists")


class NoteListResponse(BaseModel):
    """Response of GET /api/notes."""
    notes: List[NoteResponse] = Field(description="Notes on this page, newest first")
    pagination: PaginationMeta


class DeleteResponse(BaseModel):
    """Confirmation returned by delete operations."""
    message: str = Field(description="Human-readable confirmation")
    id: uuid.UUID = Field(description="Identifier of the deleted resource")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_failed",
            "message": "Validation failed",
            "details": {"errors": [{"field": "title", "message": "..."}]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
