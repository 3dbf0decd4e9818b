"""
NoteKeeper Backend — Notes Route Handlers
===========================================

What:  The /notes resource: create, list, get, search, patch, delete.
How:   Each handler checks presence/shape of its input, delegates to
       NoteService, and wraps the result in an Envelope. Domain outcomes are
       mapped to HTTP by raising ValidationError (400) or NotFoundError (404);
       the global handlers in main.py render them as envelopes too.

Route Inventory:
    POST   /notes                          → 201 / 400
    GET    /notes                          → 200
    GET    /notes/search?title=&content=   → 200 / 400
    GET    /notes/{id}                     → 200 / 404
    PATCH  /notes/{id}                     → 200 / 400 / 404
    DELETE /notes/{id}                     → 200 / 404

/notes/search is registered before /notes/{id} so "search" is never taken
for an id.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from notekeeper.exceptions import NotFoundError, ValidationError
from notekeeper.schemas.note import (
    Envelope,
    ErrorResponse,
    NoteCreateRequest,
    NotePatchRequest,
    NoteResponse,
)
from notekeeper.services.note_service import NoteService, get_note_service

router = APIRouter(prefix="/notes", tags=["Notes"])

_error_responses = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@router.post(
    "",
    response_model=Envelope[NoteResponse],
    status_code=201,
    responses={k: _error_responses[k] for k in (400, 500)},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreateRequest,
    service: NoteService = Depends(get_note_service),
) -> Envelope[NoteResponse]:
    if _is_blank(payload.title):
        raise ValidationError(message="Title is required and must not be blank", field="title")

    note = await service.create_note(title=payload.title, content=payload.content)
    return Envelope[NoteResponse](
        message="Note created successfully!",
        data=NoteResponse.from_note(note),
    )


@router.get(
    "",
    response_model=Envelope[List[NoteResponse]],
    summary="List every note",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> Envelope[List[NoteResponse]]:
    notes = await service.list_notes()
    message = "All notes retrieved!" if notes else "No notes found"
    return Envelope[List[NoteResponse]](message=message, data=NoteResponse.from_notes(notes))


@router.get(
    "/search",
    response_model=Envelope[List[NoteResponse]],
    responses={400: _error_responses[400]},
    summary="Search notes by title and/or content",
    description=(
        "Case-insensitive substring search. A note matches when its title "
        "contains `title` or its content contains `content`. At least one "
        "non-blank parameter is required."
    ),
)
async def search_notes(
    title: Optional[str] = Query(default=None, description="Substring to look for in titles"),
    content: Optional[str] = Query(default=None, description="Substring to look for in contents"),
    service: NoteService = Depends(get_note_service),
) -> Envelope[List[NoteResponse]]:
    # A blank term would match every note, so it counts as absent
    title = None if _is_blank(title) else title
    content = None if _is_blank(content) else content
    if title is None and content is None:
        raise ValidationError(message="At least one search parameter must be provided")

    notes = await service.search_notes(title=title, content=content)
    message = "Notes retrieved!" if notes else "No notes found that matches the title or content"
    return Envelope[List[NoteResponse]](message=message, data=NoteResponse.from_notes(notes))


@router.get(
    "/{note_id}",
    response_model=Envelope[NoteResponse],
    responses={404: _error_responses[404]},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Envelope[NoteResponse]:
    note = await service.get_note(note_id)
    if note is None:
        raise NotFoundError(message="Note not found", note_id=note_id)
    return Envelope[NoteResponse](message="Note found!", data=NoteResponse.from_note(note))


@router.patch(
    "/{note_id}",
    response_model=Envelope[NoteResponse],
    responses=_error_responses,
    summary="Partially update a note",
    description="Only fields present in the body are changed. updatedAt is refreshed.",
)
async def patch_note(
    note_id: str,
    payload: NotePatchRequest,
    service: NoteService = Depends(get_note_service),
) -> Envelope[NoteResponse]:
    if payload.is_empty():
        raise ValidationError(message="No fields provided to update")
    if payload.title is not None and not payload.title.strip():
        raise ValidationError(message="Title must not be blank", field="title")

    updated = await service.update_note(note_id, title=payload.title, content=payload.content)
    if updated is None:
        raise NotFoundError(message="Update failed no note found", note_id=note_id)
    return Envelope[NoteResponse](message="Note updated!", data=NoteResponse.from_note(updated))


@router.delete(
    "/{note_id}",
    response_model=Envelope[NoteResponse],
    responses={k: _error_responses[k] for k in (404, 500)},
    summary="Delete a note by ID",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Envelope[NoteResponse]:
    deleted = await service.delete_note(note_id)
    if deleted is None:
        raise NotFoundError(message="Delete failed no note found", note_id=note_id)
    return Envelope[NoteResponse](
        message="Note deleted successfully!",
        data=NoteResponse.from_note(deleted),
    )
