from tasknote.web.routers.auth import router as auth_router
from tasknote.web.routers.notes import router as notes_router
from tasknote.web.routers.priorities import router as priorities_router
from tasknote.web.routers.profile import router as profile_router
from tasknote.web.routers.tasks import router as tasks_router

__all__ = [
    "auth_router",
    "notes_router",
    "priorities_router",
    "profile_router",
    "tasks_router",
]
