"""Repository for Profile entity."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.saas_admin.models import Profile, UserRole
from src.saas_admin.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile entity."""

    model = Profile

    async def get_by_email(self, email: str) -> Profile | None:
        """Get profile by email address."""
        result = await self.session.execute(select(Profile).where(Profile.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a profile with the given email exists."""
        return await self.get_by_email(email) is not None

    async def get_role(self, profile_id: UUID) -> UserRole | None:
        """Look up a profile's role. None means the profile does not exist."""
        result = await self.session.execute(select(Profile.role).where(Profile.id == profile_id))
        row = result.one_or_none()
        if row is None:
            return None
        return UserRole.from_value(row[0])

    async def list_by_tenant(self, tenant_id: UUID) -> list[Profile]:
        """List profiles assigned to a tenant."""
        result = await self.session.execute(
            select(Profile).where(Profile.tenant_id == tenant_id).order_by(Profile.created_at)
        )
        return list(result.scalars().all())

    async def unassign_tenant(self, tenant_id: UUID) -> int:
        """Detach every profile from a tenant. Returns the number of profiles updated."""
        stmt = (
            update(Profile)
            .where(Profile.tenant_id == tenant_id)  # type: ignore[arg-type]
            .values(tenant_id=None)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
