"""Service factory dependencies."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.saas_admin.api.dependencies.db import DBSession
from src.saas_admin.api.dependencies.repositories import ImpersonationRepo, ProfileRepo, TenantRepo
from src.saas_admin.core.config import Settings, get_settings
from src.saas_admin.models import utc_now
from src.saas_admin.repositories import ImpersonationSessionRepository, ProfileRepository
from src.saas_admin.services.auth_service import AuthService
from src.saas_admin.services.guards import AdminGuard
from src.saas_admin.services.impersonation_service import ImpersonationManager
from src.saas_admin.services.profile_service import ProfileService
from src.saas_admin.services.tenant_service import TenantService


def build_impersonation_manager(session: AsyncSession, settings: Settings) -> ImpersonationManager:
    """Wire a manager outside of FastAPI's DI (middleware, SSE polling)."""
    profile_repo = ProfileRepository(session)
    return ImpersonationManager(
        ImpersonationSessionRepository(session),
        profile_repo,
        AdminGuard(profile_repo),
        session,
        ttl=timedelta(seconds=settings.impersonation_ttl_seconds),
        clock=utc_now,
    )


def get_admin_guard(profile_repo: ProfileRepo) -> AdminGuard:
    return AdminGuard(profile_repo)


AdminGuardDep = Annotated[AdminGuard, Depends(get_admin_guard)]


def get_impersonation_manager(
    session_repo: ImpersonationRepo,
    profile_repo: ProfileRepo,
    guard: AdminGuardDep,
    session: DBSession,
) -> ImpersonationManager:
    """Get impersonation manager with TTL from settings."""
    settings = get_settings()
    return ImpersonationManager(
        session_repo,
        profile_repo,
        guard,
        session,
        ttl=timedelta(seconds=settings.impersonation_ttl_seconds),
        clock=utc_now,
    )


def get_auth_service(profile_repo: ProfileRepo) -> AuthService:
    return AuthService(profile_repo)


def get_profile_service(
    profile_repo: ProfileRepo,
    tenant_repo: TenantRepo,
    guard: AdminGuardDep,
    session: DBSession,
) -> ProfileService:
    return ProfileService(profile_repo, tenant_repo, guard, session)


def get_tenant_service(
    tenant_repo: TenantRepo,
    profile_repo: ProfileRepo,
    guard: AdminGuardDep,
    session: DBSession,
) -> TenantService:
    return TenantService(tenant_repo, profile_repo, guard, session)


ImpersonationManagerDep = Annotated[ImpersonationManager, Depends(get_impersonation_manager)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
