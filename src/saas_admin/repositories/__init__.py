"""Repository layer - data access abstraction."""

from src.saas_admin.repositories.base import BaseRepository
from src.saas_admin.repositories.impersonation import (
    EnrichedSession,
    ImpersonationSessionRepository,
)
from src.saas_admin.repositories.profile import ProfileRepository
from src.saas_admin.repositories.tenant import TenantRepository

__all__ = [
    "BaseRepository",
    "EnrichedSession",
    "ImpersonationSessionRepository",
    "ProfileRepository",
    "TenantRepository",
]
