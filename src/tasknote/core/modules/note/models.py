from datetime import datetime
from uuid import UUID

from pydantic import Field

from tasknote.core.db import MongoModel
from tasknote.utils import now


class Note(MongoModel):
    """Note owned by exactly one user; visible and mutable only to that user."""

    owner_id: UUID
    title: str
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
