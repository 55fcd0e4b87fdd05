from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tasknote.core.modules.task.models import Task
from tasknote.web.deps import AppDep, CallerDep
from tasknote.web.openapi import ErrorResponse, MessageResponse

router: APIRouter = APIRouter(tags=["tasks"])


class CreateTaskRequest(BaseModel):
    """Request to create a task."""

    title: str = Field(..., description="Task title, 1-255 characters after trimming; markup is removed")
    status: str | None = Field(None, description="`pending` (default) or `completed`")
    priority: str | None = Field(None, description="`` (default, no priority) or `high`")


class UpdateTaskRequest(BaseModel):
    """Request to update task fields (partial update)."""

    title: str | None = Field(None, description="New title")
    status: str | None = Field(None, description="`pending` or `completed`")
    priority: str | None = Field(None, description="`` to clear, or `high`")

    model_config = {"json_schema_extra": {"examples": [{"status": "completed"}, {"priority": "high"}]}}


@router.get(
    "/notes/{note_id}/tasks",
    summary="List note tasks",
    description="Get all tasks of a note owned by the current user.",
    operation_id="listTasks",
    responses={
        200: {"description": "List of tasks"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def list_tasks(note_id: UUID, app: AppDep, caller: CallerDep) -> list[Task]:
    return await app.get_tasks(caller, note_id)


@router.post(
    "/notes/{note_id}/tasks",
    summary="Create task",
    description="Add a task to a note owned by the current user.",
    operation_id="createTask",
    status_code=201,
    responses={
        201: {"description": "Task created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid title, status or priority"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def create_task(note_id: UUID, request: CreateTaskRequest, app: AppDep, caller: CallerDep) -> Task:
    return await app.create_task(caller, note_id, request.title, request.status, request.priority)


@router.put(
    "/notes/{note_id}/tasks/{task_id}",
    summary="Update task",
    description=(
        "Partially update a task. Only the fields provided are changed. "
        "If any provided value is invalid, nothing is changed."
    ),
    operation_id="updateTask",
    responses={
        200: {"description": "Task updated successfully"},
        400: {"model": ErrorResponse, "description": "Invalid title, status or priority"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def update_task(
    note_id: UUID, task_id: UUID, request: UpdateTaskRequest, app: AppDep, caller: CallerDep
) -> Task:
    return await app.update_task(caller, note_id, task_id, request.title, request.status, request.priority)


@router.delete(
    "/notes/{note_id}/tasks/{task_id}",
    summary="Delete task",
    description="Delete a single task.",
    operation_id="deleteTask",
    responses={
        200: {"description": "Task deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def delete_task(note_id: UUID, task_id: UUID, app: AppDep, caller: CallerDep) -> MessageResponse:
    await app.delete_task(caller, note_id, task_id)
    return MessageResponse(message="Task deleted successfully")
