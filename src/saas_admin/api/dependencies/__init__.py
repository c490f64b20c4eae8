"""FastAPI dependency injection definitions.

Re-exports all dependencies for route modules.
"""

# Auth
from src.saas_admin.api.dependencies.auth import (
    CurrentProfile,
    ImpersonationPointer,
    OptionalProfile,
    extract_session_token,
    get_current_profile,
    get_impersonation_pointer,
    get_optional_profile,
)

# Database
from src.saas_admin.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.saas_admin.api.dependencies.repositories import (
    ImpersonationRepo,
    ProfileRepo,
    TenantRepo,
    get_impersonation_repository,
    get_profile_repository,
    get_tenant_repository,
)

# Services
from src.saas_admin.api.dependencies.services import (
    AdminGuardDep,
    AuthServiceDep,
    ImpersonationManagerDep,
    ProfileServiceDep,
    TenantServiceDep,
    build_impersonation_manager,
    get_admin_guard,
    get_auth_service,
    get_impersonation_manager,
    get_profile_service,
    get_tenant_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentProfile",
    "ImpersonationPointer",
    "OptionalProfile",
    "extract_session_token",
    "get_current_profile",
    "get_impersonation_pointer",
    "get_optional_profile",
    # Repositories
    "ImpersonationRepo",
    "ProfileRepo",
    "TenantRepo",
    "get_impersonation_repository",
    "get_profile_repository",
    "get_tenant_repository",
    # Services
    "AdminGuardDep",
    "AuthServiceDep",
    "ImpersonationManagerDep",
    "ProfileServiceDep",
    "TenantServiceDep",
    "build_impersonation_manager",
    "get_admin_guard",
    "get_auth_service",
    "get_impersonation_manager",
    "get_profile_service",
    "get_tenant_service",
]
