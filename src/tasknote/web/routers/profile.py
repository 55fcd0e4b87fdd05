from fastapi import APIRouter

from tasknote.core.modules.user.models import UserView
from tasknote.web.deps import AppDep, CallerDep
from tasknote.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the profile of the currently authenticated user.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "User no longer exists"},
    },
)
async def get_profile(app: AppDep, caller: CallerDep) -> UserView:
    return await app.get_current_user(caller)
