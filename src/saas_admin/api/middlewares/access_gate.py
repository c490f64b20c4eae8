"""Request gate - impersonation barrier followed by role-based page routing.

Stage order matters: the impersonation barrier runs first so that an admin
who is viewing the app as someone else is never routed back into the admin
area by the role router (their underlying session still says "admin").

Both stages are plain decision functions returning ``Redirect | None``;
the middleware only gathers their inputs.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from src.saas_admin.api.dependencies.auth import extract_session_token
from src.saas_admin.api.dependencies.services import build_impersonation_manager
from src.saas_admin.core.config import Settings, get_settings
from src.saas_admin.core.db import STORE_ERRORS, get_session
from src.saas_admin.core.logging import get_logger
from src.saas_admin.models import UserRole
from src.saas_admin.repositories import ProfileRepository
from src.saas_admin.services.auth_service import AuthService
from src.saas_admin.services.outcome import Redirect

logger = get_logger(__name__)

# Paths that are never pages (role routing does not apply)
NON_PAGE_PREFIXES = ("/api", "/health", "/metrics", "/docs", "/redoc", "/openapi.json")
AUTH_PAGES = ("/sign-in", "/sign-up")
SIGNED_IN_ONLY_PAGES = ("/admin", "/protected")
ADMIN_PAGES = "/admin"
SIGN_IN_PATH = "/sign-in"
UNAUTHORIZED_PATH = "/unauthorized"


def path_is_under(path: str, prefix: str) -> bool:
    """Segment-aware prefix match: /admin matches /admin and /admin/x, not /administrator."""
    if prefix == "/":
        return True
    return path == prefix or path.startswith(prefix + "/")


def is_admin_area(path: str, prefixes: list[str]) -> bool:
    return any(path_is_under(path, prefix) for prefix in prefixes)


def is_page(path: str) -> bool:
    return not any(path_is_under(path, prefix) for prefix in NON_PAGE_PREFIXES)


def needs_role_routing(path: str) -> bool:
    """Only the root, auth pages and signed-in-only pages are role-routed."""
    if not is_page(path):
        return False
    return (
        path == "/"
        or any(path_is_under(path, p) for p in AUTH_PAGES)
        or any(path_is_under(path, p) for p in SIGNED_IN_ONLY_PAGES)
    )


def impersonation_barrier(path: str, impersonating: bool, settings: Settings) -> Redirect | None:
    """Keep an active impersonation out of the admin area."""
    if impersonating and is_admin_area(path, settings.admin_area_prefixes):
        return Redirect(settings.impersonation_landing_path)
    return None


def route_by_role(
    path: str,
    role: UserRole | None,
    impersonating: bool = False,
    landing_override: str | None = None,
) -> Redirect | None:
    """Ordinary page routing by the caller's own role.

    Args:
        path: Requested path
        role: Caller's role, or None when there is no authenticated caller
        impersonating: Whether an impersonation pointer is active
        landing_override: Landing path used instead of the role's while impersonating
    """
    if not needs_role_routing(path):
        return None

    if role is None:
        if any(path_is_under(path, p) for p in SIGNED_IN_ONLY_PAGES):
            return Redirect(SIGN_IN_PATH)
        return None

    if path_is_under(path, ADMIN_PAGES) and not role.has_admin_capability:
        return Redirect(UNAUTHORIZED_PATH)

    if path == "/" or any(path_is_under(path, p) for p in AUTH_PAGES):
        if impersonating and landing_override:
            return Redirect(landing_override)
        return Redirect(role.landing_path)

    return None


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Runs the impersonation barrier, then role routing, before any handler.

    A store failure while checking the pointer is logged and treated as
    "no active impersonation"; the route-level auth dependencies remain the
    real gate for admin handlers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        settings = get_settings()
        path = request.url.path
        pointer = request.cookies.get(settings.impersonation_cookie_name)

        check_pointer = bool(pointer) and (
            is_admin_area(path, settings.admin_area_prefixes) or needs_role_routing(path)
        )
        if not check_pointer and not needs_role_routing(path):
            return await call_next(request)

        decision: Redirect | None = None
        async with get_session() as session:
            impersonating = False
            if check_pointer:
                impersonating = await self._pointer_is_active(session, pointer, settings)

            decision = impersonation_barrier(path, impersonating, settings)

            if decision is None and needs_role_routing(path):
                role = await self._caller_role(session, request, settings)
                decision = route_by_role(
                    path,
                    role,
                    impersonating=impersonating,
                    landing_override=settings.impersonation_landing_path,
                )

        if decision is not None:
            logger.info("Access gate redirect", path=path, location=decision.path)
            return RedirectResponse(url=decision.path)

        return await call_next(request)

    async def _pointer_is_active(
        self, session: AsyncSession, pointer: str | None, settings: Settings
    ) -> bool:
        manager = build_impersonation_manager(session, settings)
        try:
            return await manager.is_active(pointer)
        except STORE_ERRORS:
            logger.exception("Impersonation check failed, treating as inactive")
            return False

    async def _caller_role(
        self, session: AsyncSession, request: Request, settings: Settings
    ) -> UserRole | None:
        token = extract_session_token(
            request.headers.get("authorization"),
            request.cookies.get(settings.session_cookie_name),
        )
        if token is None:
            return None
        try:
            profile = await AuthService(ProfileRepository(session)).lookup_session(token)
        except STORE_ERRORS:
            logger.exception("Caller lookup failed in access gate")
            return None
        if profile is None:
            return None
        return profile.role_enum
