from src.saas_admin.schemas.auth import SignInRequest, SignInResponse
from src.saas_admin.schemas.impersonation import (
    ImpersonationStarted,
    ImpersonationStopped,
    ImpersonationView,
    PresenceRead,
    PurgeResult,
    StartImpersonationRequest,
)
from src.saas_admin.schemas.profile import ProfileCreate, ProfileRead, ProfileRoleUpdate
from src.saas_admin.schemas.tenant import TenantCreate, TenantRead

__all__ = [
    # Auth
    "SignInRequest",
    "SignInResponse",
    # Impersonation
    "ImpersonationStarted",
    "ImpersonationStopped",
    "ImpersonationView",
    "PresenceRead",
    "PurgeResult",
    "StartImpersonationRequest",
    # Profile
    "ProfileCreate",
    "ProfileRead",
    "ProfileRoleUpdate",
    # Tenant
    "TenantCreate",
    "TenantRead",
]
