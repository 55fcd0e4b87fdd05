from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from tasknote.core.db import MongoModel
from tasknote.utils import now


class TaskStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    NONE = ""  # stored as empty string, never a space
    HIGH = "high"


class Task(MongoModel):
    """Task inside a note.

    owner_id is copied from the parent note at creation and never changes.
    """

    note_id: UUID
    owner_id: UUID
    title: str
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.NONE
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
