"""Model exports.

Import from here: `from src.saas_admin.models import Profile, Tenant`
"""

from src.saas_admin.models.base import utc_now
from src.saas_admin.models.enums import ROLE_LANDING_PATHS, UserRole
from src.saas_admin.models.impersonation import ImpersonationSession, is_active
from src.saas_admin.models.profile import Profile
from src.saas_admin.models.tenant import Tenant

__all__ = [
    # Enums
    "ROLE_LANDING_PATHS",
    "UserRole",
    # Models
    "ImpersonationSession",
    "Profile",
    "Tenant",
    # Helpers
    "is_active",
    "utc_now",
]
