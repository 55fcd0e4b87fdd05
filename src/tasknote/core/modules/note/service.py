from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from tasknote.core.core import Service
from tasknote.core.db import transaction
from tasknote.core.modules.note.models import Note
from tasknote.core.modules.note.validators import validate_note_title
from tasknote.errors import InternalError, NotFoundError
from tasknote.utils import now

logger = structlog.get_logger(__name__)

TRANSACTION_ATTEMPTS = 3


class NoteService(Service):
    """Owner-scoped notes. Every query filters on owner_id."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("notes")

    async def on_start(self) -> None:
        """Create index for per-owner listing."""
        await self._collection.create_index([("owner_id", 1), ("created_at", 1)])

    async def list_notes(self, owner_id: UUID) -> list[Note]:
        """Get all notes of the owner, oldest first."""
        cursor = self._collection.find({"owner_id": owner_id}).sort([("created_at", 1), ("_id", 1)])
        return await Note.list_cursor(cursor)

    async def get_note(self, owner_id: UUID, note_id: UUID) -> Note:
        """Get note by ID. Notes of other owners are reported as not found."""
        doc = await self._collection.find_one({"_id": note_id, "owner_id": owner_id})
        if doc is None:
            raise NotFoundError("Note not found")
        return Note.model_validate(doc)

    async def create_note(self, owner_id: UUID, title: str) -> Note:
        """Create note owned by the caller."""
        note = Note(owner_id=owner_id, title=validate_note_title(title))
        await self._collection.insert_one(note.to_mongo())
        logger.debug("note_created", owner_id=owner_id, note_id=note.id)
        return note

    async def update_note(self, owner_id: UUID, note_id: UUID, title: str) -> Note:
        """Rename a note."""
        cleaned = validate_note_title(title)
        doc = await self._collection.find_one_and_update(
            {"_id": note_id, "owner_id": owner_id},
            {"$set": {"title": cleaned, "updated_at": now()}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("Note not found")
        return Note.model_validate(doc)

    async def delete_note(self, owner_id: UUID, note_id: UUID) -> None:
        """Delete a note together with all of its tasks, atomically.

        Tasks are removed before the note. Any storage failure rolls back both
        deletes and surfaces as InternalError; the note and its tasks are left
        exactly as they were. Transient transaction errors (a concurrent delete
        of the same note) retry the whole scope, so the loser sees NotFoundError.
        """
        attempt = 1
        while True:
            try:
                deleted_tasks = await self._delete_with_tasks(owner_id, note_id)
            except PyMongoError as e:
                if attempt < TRANSACTION_ATTEMPTS and e.has_error_label("TransientTransactionError"):
                    logger.warning("note_delete_retry", owner_id=owner_id, note_id=note_id, attempt=attempt)
                    attempt += 1
                    continue
                logger.exception("note_cascade_delete_failed", owner_id=owner_id, note_id=note_id)
                raise InternalError("Failed to delete note") from e
            break

        logger.debug("note_deleted", owner_id=owner_id, note_id=note_id, deleted_tasks=deleted_tasks)

    async def _delete_with_tasks(self, owner_id: UUID, note_id: UUID) -> int:
        note_filter = {"_id": note_id, "owner_id": owner_id}
        async with transaction(self.core.mongo_client) as session:
            if await self._collection.find_one(note_filter, session=session) is None:
                raise NotFoundError("Note not found")

            deleted_tasks = await self.core.services.task.delete_tasks_by_note(note_id, session=session)

            result = await self._collection.delete_one(note_filter, session=session)
            if result.deleted_count == 0:
                # A concurrent delete got there first
                raise NotFoundError("Note not found")
        return deleted_tasks
