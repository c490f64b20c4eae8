"""Presence endpoints for the impersonation banner.

Available to any caller: they only describe (or end) the session named by
the caller's own pointer cookie.
"""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Request, Response
from fastapi.responses import StreamingResponse

from src.saas_admin.api.dependencies import (
    ImpersonationManagerDep,
    ImpersonationPointer,
    build_impersonation_manager,
)
from src.saas_admin.api.outcomes import unwrap
from src.saas_admin.core.config import get_settings
from src.saas_admin.core.db import get_session
from src.saas_admin.core.security import clear_pointer_cookie
from src.saas_admin.schemas.impersonation import ImpersonationStopped, PresenceRead
from src.saas_admin.services.outcome import Failure
from src.saas_admin.services.presence import format_sse, watch_presence

router = APIRouter(prefix="/impersonation", tags=["impersonation"])


@router.get(
    "",
    response_model=PresenceRead,
    responses={
        200: {
            "description": "Current impersonation presence",
            "content": {
                "application/json": {
                    "example": {
                        "active": True,
                        "admin_email": "admin@example.com",
                        "user_email": "jane@example.com",
                        "expires_at": "2024-01-15T11:30:00Z",
                        "banner": "Viewing as jane@example.com (Admin: admin@example.com)",
                    }
                }
            },
        },
        503: {"description": "Session store unavailable"},
    },
)
async def get_presence(
    pointer: ImpersonationPointer, manager: ImpersonationManagerDep
) -> PresenceRead:
    """Describe the active impersonation, if any. Stale pointers read as inactive."""
    view = unwrap(await manager.resolve_outcome(pointer))
    return PresenceRead.from_view(view)


@router.get(
    "/events",
    response_class=StreamingResponse,
    responses={200: {"description": "Server-Sent Events stream of presence changes"}},
)
async def stream_presence(request: Request, pointer: ImpersonationPointer) -> StreamingResponse:
    """Push presence changes to the banner as Server-Sent Events.

    Each poll uses its own short-lived database session.
    """
    settings = get_settings()

    async def resolve() -> PresenceRead | None:
        async with get_session() as session:
            manager = build_impersonation_manager(session, settings)
            outcome = await manager.resolve_outcome(pointer)
        if isinstance(outcome, Failure):
            return None
        return PresenceRead.from_view(outcome.data)

    async def events() -> AsyncIterator[str]:
        async for presence in watch_presence(
            resolve,
            interval=settings.impersonation_poll_interval_seconds,
            is_disconnected=request.is_disconnected,
        ):
            yield format_sse(presence)

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.delete(
    "",
    response_model=ImpersonationStopped,
    responses={
        200: {
            "description": "Impersonation ended (or there was none)",
            "content": {
                "application/json": {
                    "example": {"redirect_to": "/admin/users", "message": "Stopped impersonation"}
                }
            },
        },
    },
)
async def stop_impersonation(
    response: Response, pointer: ImpersonationPointer, manager: ImpersonationManagerDep
) -> ImpersonationStopped:
    """End the current impersonation and clear the pointer cookie. Idempotent."""
    settings = get_settings()
    await manager.stop(pointer)
    clear_pointer_cookie(response, settings)
    return ImpersonationStopped(redirect_to=settings.admin_return_path)
