"""Repository for Tenant entity."""

from sqlalchemy import or_
from sqlmodel import select

from src.saas_admin.models import Tenant
from src.saas_admin.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entity."""

    model = Tenant

    async def get_by_name_or_domain(self, name: str, domain: str) -> Tenant | None:
        """Find a tenant that already uses either the name or the domain."""
        result = await self.session.execute(
            select(Tenant)
            .where(or_(Tenant.name == name, Tenant.domain == domain))  # type: ignore[arg-type]
            .limit(1)
        )
        return result.scalars().first()
