"""Repository for ImpersonationSession entity."""

from datetime import datetime
from typing import NamedTuple
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.orm import aliased
from sqlmodel import select

from src.saas_admin.models import ImpersonationSession, Profile, UserRole
from src.saas_admin.repositories.base import BaseRepository


class EnrichedSession(NamedTuple):
    """A session row joined with the display identity of both parties."""

    session: ImpersonationSession
    admin_email: str
    impersonated_email: str
    impersonated_role: UserRole


class ImpersonationSessionRepository(BaseRepository[ImpersonationSession]):
    """Repository for impersonation sessions.

    Every read that answers "is this pointer live?" filters on
    ``expires_at > now``; expired rows are never returned.
    """

    model = ImpersonationSession

    async def get_active(self, session_id: UUID, now: datetime) -> ImpersonationSession | None:
        """Get a session by id only if it has not expired."""
        result = await self.session.execute(
            select(ImpersonationSession).where(
                ImpersonationSession.id == session_id,
                ImpersonationSession.expires_at > now,
            )
        )
        return result.scalar_one_or_none()

    async def exists_active(self, session_id: UUID, now: datetime) -> bool:
        """Existence + expiry check without the display join."""
        result = await self.session.execute(
            select(ImpersonationSession.id).where(
                ImpersonationSession.id == session_id,
                ImpersonationSession.expires_at > now,
            )
        )
        return result.scalar_one_or_none() is not None

    async def get_enriched(
        self, session_id: UUID, now: datetime | None = None
    ) -> EnrichedSession | None:
        """Load a session joined with admin email and target email/role.

        When ``now`` is given, expired sessions are filtered out.
        """
        admin = aliased(Profile, name="admin")
        impersonated = aliased(Profile, name="impersonated")

        query = (
            select(ImpersonationSession, admin.email, impersonated.email, impersonated.role)
            .join(admin, admin.id == ImpersonationSession.admin_id)  # type: ignore[arg-type]
            .join(
                impersonated,
                impersonated.id == ImpersonationSession.impersonated_id,  # type: ignore[arg-type]
            )
            .where(ImpersonationSession.id == session_id)
        )
        if now is not None:
            query = query.where(ImpersonationSession.expires_at > now)

        result = await self.session.execute(query)
        row = result.one_or_none()
        if row is None:
            return None

        session, admin_email, impersonated_email, impersonated_role = row
        return EnrichedSession(
            session=session,
            admin_email=admin_email,
            impersonated_email=impersonated_email,
            impersonated_role=UserRole.from_value(impersonated_role),
        )

    async def purge_expired(self, cutoff: datetime) -> int:
        """Delete sessions that expired before ``cutoff``.

        Returns:
            Number of sessions deleted
        """
        stmt = delete(ImpersonationSession).where(
            ImpersonationSession.expires_at < cutoff,  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
