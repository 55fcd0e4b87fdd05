from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tasknote.core.modules.note.models import Note
from tasknote.web.deps import AppDep, CallerDep
from tasknote.web.openapi import ErrorResponse, MessageResponse

router: APIRouter = APIRouter(tags=["notes"])


class NoteRequest(BaseModel):
    """Request to create or rename a note."""

    title: str = Field(..., description="Note title, 1-100 characters after trimming; markup is removed")

    model_config = {"json_schema_extra": {"examples": [{"title": "Groceries"}]}}


@router.get(
    "/notes",
    summary="List notes",
    description="Get all notes owned by the current user.",
    operation_id="listNotes",
    responses={
        200: {"description": "List of notes"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_notes(app: AppDep, caller: CallerDep) -> list[Note]:
    return await app.get_notes(caller)


@router.post(
    "/notes",
    summary="Create note",
    description="Create a new note owned by the current user.",
    operation_id="createNote",
    status_code=201,
    responses={
        201: {"description": "Note created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid title"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_note(request: NoteRequest, app: AppDep, caller: CallerDep) -> Note:
    return await app.create_note(caller, request.title)


@router.put(
    "/notes/{note_id}",
    summary="Rename note",
    description="Update the title of a note owned by the current user.",
    operation_id="updateNote",
    responses={
        200: {"description": "Note updated successfully"},
        400: {"model": ErrorResponse, "description": "Invalid title"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def update_note(note_id: UUID, request: NoteRequest, app: AppDep, caller: CallerDep) -> Note:
    return await app.update_note(caller, note_id, request.title)


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    description="Delete a note and all of its tasks. Either everything is deleted or nothing is.",
    operation_id="deleteNote",
    responses={
        200: {"description": "Note and its tasks deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
        500: {"model": ErrorResponse, "description": "Deletion failed and was rolled back"},
    },
)
async def delete_note(note_id: UUID, app: AppDep, caller: CallerDep) -> MessageResponse:
    await app.delete_note(caller, note_id)
    return MessageResponse(message="Note deleted successfully")
