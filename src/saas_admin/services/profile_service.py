"""Profile administration - the admin user-management surface."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.saas_admin.core.logging import get_logger
from src.saas_admin.core.security import hash_password
from src.saas_admin.models import Profile, UserRole, utc_now
from src.saas_admin.repositories import ProfileRepository, TenantRepository
from src.saas_admin.schemas.profile import ProfileCreate
from src.saas_admin.services.guards import AdminGuard
from src.saas_admin.services.outcome import ErrorKind, Failure, Success

logger = get_logger(__name__)


class ProfileService:
    """Admin operations on profiles. Every mutation re-checks the guard."""

    def __init__(
        self,
        profile_repo: ProfileRepository,
        tenant_repo: TenantRepository,
        guard: AdminGuard,
        session: AsyncSession,
    ):
        self.profile_repo = profile_repo
        self.tenant_repo = tenant_repo
        self.guard = guard
        self.session = session

    async def list_profiles(self, caller_id: UUID) -> Success[list[Profile]] | Failure:
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict
        return Success(await self.profile_repo.list_all())

    async def create_profile(
        self, caller_id: UUID, data: ProfileCreate
    ) -> Success[Profile] | Failure:
        """Create a profile, defaulting its tenant to the creating admin's tenant."""
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict

        if await self.profile_repo.exists_by_email(data.email):
            return Failure(ErrorKind.CONFLICT, "A user with this email already exists")

        tenant_id = data.tenant_id
        if tenant_id is None:
            admin = await self.profile_repo.get_by_id(caller_id)
            tenant_id = admin.tenant_id if admin else None
        elif await self.tenant_repo.get_by_id(tenant_id) is None:
            return Failure(ErrorKind.NOT_FOUND, "Tenant not found")

        profile = Profile(
            email=data.email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
            role=data.role.value,
            tenant_id=tenant_id,
            created_by=caller_id,
            updated_by=caller_id,
        )
        try:
            self.profile_repo.add(profile)
            await self.session.commit()
            await self.session.refresh(profile)
        except IntegrityError:
            await self.session.rollback()
            return Failure(ErrorKind.CONFLICT, "A user with this email already exists")

        logger.info(
            "Profile created",
            profile_id=str(profile.id),
            role=profile.role,
            created_by=str(caller_id),
        )
        return Success(profile)

    async def update_role(
        self, caller_id: UUID, profile_id: UUID, role: UserRole
    ) -> Success[Profile] | Failure:
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict

        profile = await self.profile_repo.get_by_id(profile_id)
        if profile is None:
            return Failure(ErrorKind.NOT_FOUND, "User not found")

        try:
            profile.role = role.value
            profile.updated_at = utc_now()
            profile.updated_by = caller_id
            await self.session.commit()
            await self.session.refresh(profile)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Profile role updated",
            profile_id=str(profile_id),
            role=role.value,
            updated_by=str(caller_id),
        )
        return Success(profile)

    async def delete_profile(self, caller_id: UUID, profile_id: UUID) -> Success[None] | Failure:
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict

        if profile_id == caller_id:
            return Failure(ErrorKind.CONFLICT, "Admins cannot delete their own account")

        try:
            deleted = await self.profile_repo.delete_by_id(profile_id)
            if not deleted:
                await self.session.rollback()
                return Failure(ErrorKind.NOT_FOUND, "User not found")
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Profile deleted", profile_id=str(profile_id), deleted_by=str(caller_id))
        return Success(None)
