"""Impersonation manager - lets admins view the app as another profile.

Lifecycle is (no session) -> (active session) -> (no session). Expiry is
passive: a session stops resolving once ``expires_at <= now`` but its row
stays until ``stop`` or the purge sweep removes it.

The pointer (the session id carried in the ``impersonation_id`` cookie) is
always passed in explicitly. It confers no authority on its own; every
read re-validates existence and expiry against the store.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.saas_admin.core.db import STORE_ERRORS
from src.saas_admin.core.logging import get_logger
from src.saas_admin.models import ImpersonationSession, utc_now
from src.saas_admin.repositories import (
    EnrichedSession,
    ImpersonationSessionRepository,
    ProfileRepository,
)
from src.saas_admin.schemas.impersonation import ImpersonationView
from src.saas_admin.services.guards import AdminGuard
from src.saas_admin.services.outcome import ErrorKind, Failure, Success

logger = get_logger(__name__)

DEFAULT_TTL = timedelta(hours=1)

SESSION_CREATION_FAILED = "Failed to impersonate user"


def parse_pointer(pointer: str | None) -> UUID | None:
    """Turn a raw cookie value into a session id. Garbage yields None."""
    if not pointer:
        return None
    try:
        return UUID(pointer)
    except (ValueError, TypeError, AttributeError):
        return None


def to_view(enriched: EnrichedSession) -> ImpersonationView:
    session = enriched.session
    return ImpersonationView(
        session_id=session.id,
        admin_id=session.admin_id,
        admin_email=enriched.admin_email,
        impersonated_id=session.impersonated_id,
        user_email=enriched.impersonated_email,
        user_role=enriched.impersonated_role,
        created_at=session.created_at,
        expires_at=session.expires_at,
    )


class ImpersonationManager:
    """Owns start, resolve and stop for impersonation sessions.

    Holds no state between calls; every operation is a short round trip to
    the session store through the injected repositories.
    """

    def __init__(
        self,
        session_repo: ImpersonationSessionRepository,
        profile_repo: ProfileRepository,
        guard: AdminGuard,
        session: AsyncSession,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_repo = session_repo
        self.profile_repo = profile_repo
        self.guard = guard
        self.session = session
        self.ttl = ttl
        self.clock = clock

    async def start(
        self, caller_id: UUID | None, target_user_id: UUID
    ) -> Success[ImpersonationView] | Failure:
        """Start viewing the app as ``target_user_id``.

        Args:
            caller_id: Authenticated caller from the session lookup (None if anonymous)
            target_user_id: Profile to impersonate

        Returns:
            Success with the enriched session, or a Failure with kind
            UNAUTHENTICATED, UNAUTHORIZED, TARGET_NOT_FOUND or
            SESSION_CREATION_FAILED. On failure nothing is persisted.
        """
        if caller_id is None:
            return Failure(ErrorKind.UNAUTHENTICATED, "Not authenticated")

        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict
        admin_id = verdict.data.id

        if await self.profile_repo.get_by_id(target_user_id) is None:
            return Failure(ErrorKind.TARGET_NOT_FOUND, "Target user not found")

        if target_user_id == admin_id:
            # Allowed: a self-targeted session is a degenerate no-op view.
            logger.warning("Admin is impersonating themselves", admin_id=str(admin_id))

        # Insert and enrichment run in one transaction; commit only when
        # both display identities resolve.
        record = ImpersonationSession.open(
            admin_id=admin_id,
            impersonated_id=target_user_id,
            ttl=self.ttl,
            now=self.clock(),
        )
        try:
            self.session_repo.add(record)
            await self.session.flush()
            enriched = await self.session_repo.get_enriched(record.id)
            if enriched is None or not enriched.admin_email or not enriched.impersonated_email:
                await self.session.rollback()
                logger.error(
                    "Impersonation enrichment failed",
                    admin_id=str(admin_id),
                    impersonated_id=str(target_user_id),
                )
                return Failure(ErrorKind.SESSION_CREATION_FAILED, SESSION_CREATION_FAILED)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception(
                "Impersonation session insert failed",
                admin_id=str(admin_id),
                impersonated_id=str(target_user_id),
            )
            return Failure(ErrorKind.SESSION_CREATION_FAILED, SESSION_CREATION_FAILED)

        logger.info(
            "Impersonation session started",
            session_id=str(record.id),
            admin_id=str(admin_id),
            impersonated_id=str(target_user_id),
            expires_at=record.expires_at.isoformat(),
        )
        return Success(to_view(enriched))

    async def resolve(
        self, pointer: str | None, now: datetime | None = None
    ) -> ImpersonationView | None:
        """Resolve a pointer to the active session, or None.

        Read-only: a stale or forged pointer simply resolves to None and is
        not cleared here. Store errors propagate.
        """
        session_id = parse_pointer(pointer)
        if session_id is None:
            return None

        enriched = await self.session_repo.get_enriched(session_id, now or self.clock())
        if enriched is None:
            return None
        return to_view(enriched)

    async def resolve_outcome(
        self, pointer: str | None, now: datetime | None = None
    ) -> Success[ImpersonationView | None] | Failure:
        """Same as ``resolve`` but reports store errors as STORE_UNAVAILABLE."""
        try:
            return Success(await self.resolve(pointer, now))
        except STORE_ERRORS:
            logger.exception("Impersonation lookup failed")
            return Failure(ErrorKind.STORE_UNAVAILABLE, "Session store unavailable")

    async def is_active(self, pointer: str | None, now: datetime | None = None) -> bool:
        """Lightweight existence + expiry check used on the request path."""
        session_id = parse_pointer(pointer)
        if session_id is None:
            return False
        return await self.session_repo.exists_active(session_id, now or self.clock())

    async def stop(self, pointer: str | None) -> None:
        """End the session named by the pointer.

        Idempotent: a missing pointer or an already-deleted row is a no-op.
        No role check; ending impersonation is always allowed.
        """
        session_id = parse_pointer(pointer)
        if session_id is None:
            return

        try:
            deleted = await self.session_repo.delete_by_id(session_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Impersonation session stopped", session_id=str(session_id), deleted=deleted)

    async def purge_expired(
        self, caller_id: UUID | None, retention: timedelta
    ) -> Success[tuple[int, datetime]] | Failure:
        """Delete sessions that expired more than ``retention`` ago (admin only).

        Returns:
            Success with (rows deleted, cutoff used)
        """
        verdict = await self.guard.check(caller_id)
        if isinstance(verdict, Failure):
            return verdict

        cutoff = self.clock() - retention
        try:
            deleted = await self.session_repo.purge_expired(cutoff)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Expired impersonation sessions purged",
            deleted=deleted,
            cutoff=cutoff.isoformat(),
            caller_id=str(caller_id),
        )
        return Success((deleted, cutoff))
