"""Caller authentication dependencies.

The caller's session token is accepted from an ``Authorization: Bearer``
header or, for browser page loads, from the session cookie.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.saas_admin.api.dependencies.repositories import ProfileRepo
from src.saas_admin.core.config import get_settings
from src.saas_admin.core.logging import bind_user_context
from src.saas_admin.models import Profile
from src.saas_admin.services.auth_service import AuthService


def extract_session_token(authorization: str | None, cookie_token: str | None) -> str | None:
    """Pick the session token, preferring the Authorization header."""
    if authorization and authorization.startswith("Bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return cookie_token or None


def get_impersonation_pointer(request: Request) -> str | None:
    """Raw impersonation pointer from its cookie. Validated by the manager, never here."""
    return request.cookies.get(get_settings().impersonation_cookie_name)


ImpersonationPointer = Annotated[str | None, Depends(get_impersonation_pointer)]


async def get_optional_profile(
    request: Request,
    profile_repo: ProfileRepo,
    pointer: ImpersonationPointer,
    authorization: Annotated[str | None, Header()] = None,
) -> Profile | None:
    """Resolve the caller's own profile, or None when there is no valid session."""
    settings = get_settings()
    token = extract_session_token(
        authorization, request.cookies.get(settings.session_cookie_name)
    )
    profile = await AuthService(profile_repo).lookup_session(token)
    if profile is not None:
        bind_user_context(profile.id, impersonation_id=pointer)
    return profile


async def get_current_profile(
    profile: Annotated[Profile | None, Depends(get_optional_profile)],
) -> Profile:
    """Require an authenticated caller."""
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return profile


OptionalProfile = Annotated[Profile | None, Depends(get_optional_profile)]
CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
