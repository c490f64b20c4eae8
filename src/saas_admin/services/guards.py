"""Authorization guard for admin-only mutations."""

from dataclasses import dataclass
from uuid import UUID

from src.saas_admin.core.logging import get_logger
from src.saas_admin.repositories import ProfileRepository
from src.saas_admin.services.outcome import ErrorKind, Failure, Success

logger = get_logger(__name__)

USER_NOT_FOUND = "User not found"
ADMIN_REQUIRED = "Only admins can perform this action"


@dataclass(frozen=True)
class AdminIdentity:
    """Proof that the caller held the admin capability at check time."""

    id: UUID


class AdminGuard:
    """Checks the admin capability of a trusted caller identity.

    The caller id must come from the authenticated session lookup, never
    from request input. The guard only reads; it has no side effects and
    is called inline by every admin mutation.
    """

    def __init__(self, profile_repo: ProfileRepository):
        self.profile_repo = profile_repo

    async def check(self, caller_id: UUID | None) -> Success[AdminIdentity] | Failure:
        if caller_id is None:
            return Failure(ErrorKind.UNAUTHORIZED, USER_NOT_FOUND)

        role = await self.profile_repo.get_role(caller_id)
        if role is None:
            return Failure(ErrorKind.UNAUTHORIZED, USER_NOT_FOUND)

        if not role.has_admin_capability:
            logger.info("Admin capability denied", caller_id=str(caller_id), role=role.value)
            return Failure(ErrorKind.UNAUTHORIZED, ADMIN_REQUIRED)

        return Success(AdminIdentity(id=caller_id))
