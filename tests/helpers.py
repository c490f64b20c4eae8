"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.saas_admin.core.config import get_settings
from src.saas_admin.core.security import create_access_token
from src.saas_admin.models import Profile


async def persist[M: SQLModel](session: AsyncSession, *objs: M) -> tuple[M, ...]:
    """Add and commit objects, returning them refreshed."""
    for obj in objs:
        session.add(obj)
    await session.commit()
    for obj in objs:
        await session.refresh(obj)
    return objs


def auth_headers(profile: Profile) -> dict[str, str]:
    """Bearer header for a profile's session."""
    return {"Authorization": f"Bearer {create_access_token(profile.id)}"}


def session_cookies(profile: Profile, pointer: str | None = None) -> dict[str, str]:
    """Browser-style cookies: the session token and, optionally, the impersonation pointer."""
    settings = get_settings()
    cookies = {settings.session_cookie_name: create_access_token(profile.id)}
    if pointer is not None:
        cookies[settings.impersonation_cookie_name] = pointer
    return cookies
