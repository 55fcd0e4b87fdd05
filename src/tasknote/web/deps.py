from typing import Annotated, cast

from fastapi import Depends, Header, Request

from tasknote.app import App
from tasknote.core.modules.token.models import CallerIdentity


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_caller(
    app: Annotated[App, Depends(get_app)],
    authorization: Annotated[str | None, Header(description="Bearer token: `Bearer <token>`")] = None,
) -> CallerIdentity:
    """Run the authorization gate on the raw Authorization header."""
    return app.authenticate(authorization)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
CallerDep = Annotated[CallerIdentity, Depends(get_caller)]
