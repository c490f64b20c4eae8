"""Schemas for the admin impersonation feature."""

from uuid import UUID

from pydantic import BaseModel, Field

from src.saas_admin.models import UserRole
from src.saas_admin.schemas.types import UtcDatetime


class StartImpersonationRequest(BaseModel):
    """Request to view the application as another profile."""

    target_user_id: UUID = Field(description="ID of the profile to view the app as")


class ImpersonationView(BaseModel):
    """An active session resolved to both parties' display identity."""

    session_id: UUID
    admin_id: UUID
    admin_email: str
    impersonated_id: UUID
    user_email: str
    user_role: UserRole
    created_at: UtcDatetime
    expires_at: UtcDatetime

    @property
    def banner(self) -> str:
        return f"Viewing as {self.user_email} (Admin: {self.admin_email})"


class ImpersonationStarted(BaseModel):
    """Response returned once a session is created and the pointer is set."""

    session: ImpersonationView
    redirect_to: str = Field(description="Where the admin UI navigates next")
    message: str


class PresenceRead(BaseModel):
    """Presence state polled by the impersonation banner."""

    active: bool
    admin_email: str | None = None
    user_email: str | None = None
    expires_at: UtcDatetime | None = None
    banner: str | None = None

    @classmethod
    def from_view(cls, view: ImpersonationView | None) -> "PresenceRead":
        if view is None:
            return cls(active=False)
        return cls(
            active=True,
            admin_email=view.admin_email,
            user_email=view.user_email,
            expires_at=view.expires_at,
            banner=view.banner,
        )


class ImpersonationStopped(BaseModel):
    redirect_to: str
    message: str = "Stopped impersonation"


class PurgeResult(BaseModel):
    deleted: int
    cutoff: UtcDatetime
