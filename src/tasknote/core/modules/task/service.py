from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.client_session import AsyncClientSession
from pymongo.asynchronous.database import AsyncDatabase

from tasknote.core.core import Service
from tasknote.core.modules.task.models import Task, TaskPriority
from tasknote.core.modules.task.validators import parse_priority, parse_status, validate_task_title
from tasknote.errors import NotFoundError, ValidationError
from tasknote.utils import now

logger = structlog.get_logger(__name__)


class TaskService(Service):
    """Owner-scoped tasks, reachable only through a note the caller owns."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("tasks")

    async def on_start(self) -> None:
        """Create indexes for per-note listing, cascade deletes and priority lookup."""
        await self._collection.create_index([("owner_id", 1), ("note_id", 1), ("created_at", 1)])
        await self._collection.create_index([("note_id", 1)])
        await self._collection.create_index([("owner_id", 1), ("priority", 1)])

    async def list_tasks(self, owner_id: UUID, note_id: UUID) -> list[Task]:
        """Get all tasks of a note, oldest first."""
        await self.core.services.note.get_note(owner_id, note_id)
        cursor = self._collection.find({"owner_id": owner_id, "note_id": note_id}).sort([("created_at", 1), ("_id", 1)])
        return await Task.list_cursor(cursor)

    async def list_priority_tasks(self, owner_id: UUID) -> list[Task]:
        """Get all high-priority tasks of the owner across notes."""
        cursor = self._collection.find({"owner_id": owner_id, "priority": TaskPriority.HIGH.value}).sort(
            [("created_at", 1), ("_id", 1)]
        )
        return await Task.list_cursor(cursor)

    async def create_task(
        self,
        owner_id: UUID,
        note_id: UUID,
        title: str,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """Create task under a note owned by the caller."""
        note = await self.core.services.note.get_note(owner_id, note_id)
        task = Task(note_id=note.id, owner_id=note.owner_id, title=validate_task_title(title))
        if status is not None:
            task.status = parse_status(status)
        if priority is not None:
            task.priority = parse_priority(priority)

        await self._collection.insert_one(task.to_mongo())
        logger.debug("task_created", owner_id=owner_id, note_id=note_id, task_id=task.id)
        return task

    async def update_task(
        self,
        owner_id: UUID,
        note_id: UUID,
        task_id: UUID,
        title: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """Partially update a task.

        Only fields that are not None are changed. All supplied fields are
        validated before anything is written, so one invalid value leaves the
        task untouched. An empty priority is a valid value, not an omission.
        """
        update_doc: dict[str, Any] = {}
        if title is not None:
            update_doc["title"] = validate_task_title(title)
        if status is not None:
            update_doc["status"] = parse_status(status).value
        if priority is not None:
            update_doc["priority"] = parse_priority(priority).value
        if not update_doc:
            raise ValidationError("No fields to update")

        update_doc["updated_at"] = now()
        doc = await self._collection.find_one_and_update(
            {"_id": task_id, "note_id": note_id, "owner_id": owner_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("Task not found")
        return Task.model_validate(doc)

    async def delete_task(self, owner_id: UUID, note_id: UUID, task_id: UUID) -> None:
        """Delete a single task."""
        result = await self._collection.delete_one({"_id": task_id, "note_id": note_id, "owner_id": owner_id})
        if result.deleted_count == 0:
            raise NotFoundError("Task not found")
        logger.debug("task_deleted", owner_id=owner_id, note_id=note_id, task_id=task_id)

    async def delete_tasks_by_note(self, note_id: UUID, session: AsyncClientSession | None = None) -> int:
        """Delete all tasks of a note and return count of deleted tasks.

        Only called from the note cascade delete, which has already resolved
        the note under the ownership filter.
        """
        result = await self._collection.delete_many({"note_id": note_id}, session=session)
        return result.deleted_count
