"""Tenant administration service."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.saas_admin.core.logging import get_logger
from src.saas_admin.models import Tenant, UserRole, utc_now
from src.saas_admin.repositories import ProfileRepository, TenantRepository
from src.saas_admin.schemas.tenant import TenantCreate
from src.saas_admin.services.guards import AdminGuard
from src.saas_admin.services.outcome import ErrorKind, Failure, Success

logger = get_logger(__name__)

TENANT_EXISTS = "A tenant with this name or domain already exists"


class TenantService:
    """Creates, lists and deletes tenants on behalf of an admin caller."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        profile_repo: ProfileRepository,
        guard: AdminGuard,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.profile_repo = profile_repo
        self.guard = guard
        self.session = session

    async def list_tenants(self, caller_id: UUID) -> Success[list[Tenant]] | Failure:
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict
        return Success(await self.tenant_repo.list_all())

    async def create_tenant(self, caller_id: UUID, data: TenantCreate) -> Success[Tenant] | Failure:
        """Create a tenant owned by ``data.admin_id``.

        Checks, in order:
        1. Caller holds the admin capability
        2. Neither the name nor the domain is taken
        3. The owning profile exists, has role ``user`` and has no tenant yet

        The tenant insert and the owner's ``tenant_id`` assignment commit
        together or not at all.
        """
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict

        existing = await self.tenant_repo.get_by_name_or_domain(data.name, data.domain)
        if existing is not None:
            logger.warning(
                "Tenant name or domain already exists",
                tenant_name=data.name,
                domain=data.domain,
                existing_tenant_id=str(existing.id),
            )
            return Failure(ErrorKind.CONFLICT, TENANT_EXISTS)

        owner = await self.profile_repo.get_by_id(data.admin_id)
        if owner is None:
            return Failure(ErrorKind.NOT_FOUND, "Failed to verify user")
        if owner.role_enum is not UserRole.USER:
            return Failure(ErrorKind.CONFLICT, "Selected profile must be a user")
        if owner.tenant_id is not None:
            return Failure(ErrorKind.CONFLICT, "Selected user is already assigned to a tenant")

        tenant = Tenant(name=data.name, domain=data.domain, admin_id=owner.id)
        try:
            self.tenant_repo.add(tenant)
            await self.session.flush()
            owner.tenant_id = tenant.id
            owner.updated_at = utc_now()
            owner.updated_by = caller_id
            await self.session.commit()
            await self.session.refresh(tenant)
        except IntegrityError:
            await self.session.rollback()
            return Failure(ErrorKind.CONFLICT, TENANT_EXISTS)

        logger.info(
            "Tenant created",
            tenant_id=str(tenant.id),
            admin_id=str(owner.id),
            created_by=str(caller_id),
        )
        return Success(tenant)

    async def delete_tenant(self, caller_id: UUID, tenant_id: UUID) -> Success[None] | Failure:
        """Delete a tenant after detaching every profile assigned to it."""
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict

        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            return Failure(ErrorKind.NOT_FOUND, "Tenant not found")

        try:
            detached = await self.profile_repo.unassign_tenant(tenant_id)
            await self.tenant_repo.delete_by_id(tenant_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Tenant deleted",
            tenant_id=str(tenant_id),
            detached_profiles=detached,
            deleted_by=str(caller_id),
        )
        return Success(None)
