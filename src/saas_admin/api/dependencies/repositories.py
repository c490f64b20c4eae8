"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.saas_admin.api.dependencies.db import DBSession
from src.saas_admin.repositories import (
    ImpersonationSessionRepository,
    ProfileRepository,
    TenantRepository,
)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    return TenantRepository(session)


def get_impersonation_repository(session: DBSession) -> ImpersonationSessionRepository:
    return ImpersonationSessionRepository(session)


ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
ImpersonationRepo = Annotated[ImpersonationSessionRepository, Depends(get_impersonation_repository)]
