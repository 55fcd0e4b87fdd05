from fastapi import APIRouter

from tasknote.core.modules.task.models import Task
from tasknote.web.deps import AppDep, CallerDep
from tasknote.web.openapi import ErrorResponse

router = APIRouter(tags=["tasks"])


@router.get(
    "/priorities",
    summary="List high-priority tasks",
    description="Get all tasks of the current user marked `high` priority, across all notes.",
    operation_id="listPriorityTasks",
    responses={
        200: {"description": "List of high-priority tasks"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_priority_tasks(app: AppDep, caller: CallerDep) -> list[Task]:
    return await app.get_priority_tasks(caller)
