from src.saas_admin.services.auth_service import AuthService
from src.saas_admin.services.guards import AdminGuard
from src.saas_admin.services.impersonation_service import ImpersonationManager
from src.saas_admin.services.profile_service import ProfileService
from src.saas_admin.services.tenant_service import TenantService

__all__ = ["AdminGuard", "AuthService", "ImpersonationManager", "ProfileService", "TenantService"]
