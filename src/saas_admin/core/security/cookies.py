"""Cookie helpers for the caller session and the impersonation pointer."""

from uuid import UUID

from starlette.responses import Response

from src.saas_admin.core.config import Settings


def set_pointer_cookie(response: Response, session_id: UUID, settings: Settings) -> None:
    """Set the client-visible impersonation pointer.

    Not HTTP-only: the presence indicator reads it from client-side code.
    """
    response.set_cookie(
        key=settings.impersonation_cookie_name,
        value=str(session_id),
        max_age=settings.impersonation_ttl_seconds,
        path="/",
        httponly=False,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_pointer_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.impersonation_cookie_name,
        path="/",
        httponly=False,
        secure=settings.is_production,
        samesite="lax",
    )


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the HTTP-only caller session cookie issued at sign-in."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
