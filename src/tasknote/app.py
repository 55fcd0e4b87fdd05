from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pymongo import AsyncMongoClient

from tasknote.config import Config
from tasknote.core.core import Core
from tasknote.core.modules.note.models import Note
from tasknote.core.modules.task.models import Task
from tasknote.core.modules.token.models import AuthResult, CallerIdentity
from tasknote.core.modules.user.models import UserView


class App:
    """Facade for all application operations.

    Resource operations take the verified CallerIdentity produced by
    `authenticate` and pass its id to the owner-scoped services.
    """

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, mongo_client)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def authenticate(self, authorization: str | None) -> CallerIdentity:
        """Verify the Authorization header and return the caller."""
        return self._core.services.access.authenticate(authorization)

    async def register(self, email: str, password: str) -> AuthResult:
        """Create a user and issue a token for it."""
        user = await self._core.services.user.create_user(email, password)
        token = self._core.tokens.issue(user.id, user.email)
        return AuthResult(token=token, user=UserView.from_domain(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token."""
        user = await self._core.services.user.authenticate(email, password)
        token = self._core.tokens.issue(user.id, user.email)
        return AuthResult(token=token, user=UserView.from_domain(user))

    async def get_current_user(self, caller: CallerIdentity) -> UserView:
        """Get the caller's profile from the credential store."""
        user = await self._core.services.user.get_user(caller.id)
        return UserView.from_domain(user)

    async def get_notes(self, caller: CallerIdentity) -> list[Note]:
        return await self._core.services.note.list_notes(caller.id)

    async def create_note(self, caller: CallerIdentity, title: str) -> Note:
        return await self._core.services.note.create_note(caller.id, title)

    async def update_note(self, caller: CallerIdentity, note_id: UUID, title: str) -> Note:
        return await self._core.services.note.update_note(caller.id, note_id, title)

    async def delete_note(self, caller: CallerIdentity, note_id: UUID) -> None:
        """Delete a note and all of its tasks."""
        await self._core.services.note.delete_note(caller.id, note_id)

    async def get_tasks(self, caller: CallerIdentity, note_id: UUID) -> list[Task]:
        return await self._core.services.task.list_tasks(caller.id, note_id)

    async def create_task(
        self, caller: CallerIdentity, note_id: UUID, title: str, status: str | None = None, priority: str | None = None
    ) -> Task:
        return await self._core.services.task.create_task(caller.id, note_id, title, status, priority)

    async def update_task(
        self,
        caller: CallerIdentity,
        note_id: UUID,
        task_id: UUID,
        title: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """Update task fields (partial update)."""
        return await self._core.services.task.update_task(caller.id, note_id, task_id, title, status, priority)

    async def delete_task(self, caller: CallerIdentity, note_id: UUID, task_id: UUID) -> None:
        await self._core.services.task.delete_task(caller.id, note_id, task_id)

    async def get_priority_tasks(self, caller: CallerIdentity) -> list[Task]:
        """Get the caller's high-priority tasks across all notes."""
        return await self._core.services.task.list_priority_tasks(caller.id)
