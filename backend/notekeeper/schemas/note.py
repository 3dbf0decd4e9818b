"""
NoteKeeper Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to parse request bodies, serialize
       responses and generate the OpenAPI documentation.

Conventions:
    - Python attributes are snake_case; JSON keys are camelCase
      (createdAt, updatedAt, noteCount) through the to_camel alias generator.
    - Every response body is an Envelope: {"message": str, "data": T | null}.
    - Request fields are all optional at the schema level. A missing title is
      a business-rule 400 raised by the route, not a schema-level 422.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from notekeeper.models.note import Note

T = TypeVar("T")

_camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Envelope — wraps every response, success or error
# ══════════════════════════════════════════════════════════════════════════


class Envelope(BaseModel, Generic[T]):
    """
    What:  Standard response wrapper used on every endpoint.

    Example:
        {"message": "Note found!", "data": {"id": "...", "title": "T", ...}}
        {"message": "Note not found", "data": null}
    """
    message: str = Field(description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Payload, null on errors")


class ErrorResponse(BaseModel):
    """Envelope shape of every 4xx/5xx body; documents error responses in OpenAPI."""
    message: str = Field(description="What went wrong")
    data: None = Field(default=None, description="Always null")


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes. The route rejects a missing or blank title with 400."""
    title: Optional[str] = Field(default=None, description="Note title (required, non-blank)")
    content: Optional[str] = Field(default=None, description="Note body (optional)")


class NotePatchRequest(BaseModel):
    """
    Body of PATCH /notes/{id}.

    Absent (or null) fields keep their stored value; at least one field
    must be present.
    """
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New content")

    def is_empty(self) -> bool:
        return self.title is None and self.content is None


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note."""
    model_config = _camel_config

    id: str = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body, may be null")
    created_at: int = Field(description="Creation time, epoch milliseconds")
    updated_at: int = Field(description="Last modification time, epoch milliseconds")

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    @classmethod
    def from_notes(cls, notes: List[Note]) -> List["NoteResponse"]:
        return [cls.from_note(note) for note in notes]


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for container and load balancer health checks.
    """
    model_config = _camel_config

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="Backing file state: writable, unwritable")
    note_count: int = Field(description="Number of notes currently held")
    uptime_seconds: float = Field(description="Seconds since service started")
