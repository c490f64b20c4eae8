"""Integration tests for the impersonation manager against the session store."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.saas_admin.models import ImpersonationSession, Profile, UserRole
from src.saas_admin.services.guards import ADMIN_REQUIRED, USER_NOT_FOUND
from src.saas_admin.services.impersonation_service import SESSION_CREATION_FAILED
from src.saas_admin.services.outcome import ErrorKind, Failure, Success
from tests.factories import ImpersonationSessionFactory
from tests.helpers import persist

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def count_sessions(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(ImpersonationSession))
    return result.scalar_one()


class TestStart:
    """Tests for ImpersonationManager.start."""

    async def test_admin_starts_session(self, manager, admin: Profile, user: Profile) -> None:
        """Admin viewing as a user gets an enriched session back."""
        outcome = await manager.start(admin.id, user.id)

        assert isinstance(outcome, Success)
        view = outcome.data
        assert view.admin_id == admin.id
        assert view.impersonated_id == user.id
        assert view.admin_email == "admin@example.com"
        assert view.user_email == "jane@example.com"
        assert view.user_role is UserRole.USER
        assert view.expires_at - view.created_at == timedelta(hours=1)

    async def test_resolve_right_after_start_matches(
        self, manager, admin: Profile, user: Profile
    ) -> None:
        outcome = await manager.start(admin.id, user.id)
        assert isinstance(outcome, Success)

        resolved = await manager.resolve(str(outcome.data.session_id))

        assert resolved is not None
        assert resolved.admin_id == admin.id
        assert resolved.impersonated_id == user.id

    async def test_user_rejected_and_nothing_stored(
        self, manager, db_session: AsyncSession, user: Profile, second_admin: Profile
    ) -> None:
        outcome = await manager.start(user.id, second_admin.id)

        assert outcome == Failure(ErrorKind.UNAUTHORIZED, ADMIN_REQUIRED)
        assert await count_sessions(db_session) == 0

    async def test_guest_rejected_and_nothing_stored(
        self, manager, db_session: AsyncSession, guest: Profile, user: Profile
    ) -> None:
        outcome = await manager.start(guest.id, user.id)

        assert outcome == Failure(ErrorKind.UNAUTHORIZED, ADMIN_REQUIRED)
        assert await count_sessions(db_session) == 0

    async def test_unknown_caller_rejected(self, manager, db_session, user: Profile) -> None:
        outcome = await manager.start(uuid4(), user.id)

        assert outcome == Failure(ErrorKind.UNAUTHORIZED, USER_NOT_FOUND)
        assert await count_sessions(db_session) == 0

    async def test_anonymous_caller_rejected(self, manager, user: Profile) -> None:
        outcome = await manager.start(None, user.id)

        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.UNAUTHENTICATED

    async def test_missing_target_rejected(self, manager, db_session, admin: Profile) -> None:
        outcome = await manager.start(admin.id, uuid4())

        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.TARGET_NOT_FOUND
        assert await count_sessions(db_session) == 0

    async def test_self_impersonation_is_allowed(self, manager, admin: Profile) -> None:
        """Targeting yourself creates a degenerate session rather than failing."""
        outcome = await manager.start(admin.id, admin.id)

        assert isinstance(outcome, Success)
        assert outcome.data.admin_id == outcome.data.impersonated_id == admin.id
        assert outcome.data.user_email == outcome.data.admin_email

    async def test_enrichment_failure_rolls_back(
        self, manager, db_session, admin: Profile, user: Profile, monkeypatch
    ) -> None:
        """No row survives when the display identities cannot be loaded."""

        async def _no_enrichment(*args, **kwargs):
            return None

        monkeypatch.setattr(manager.session_repo, "get_enriched", _no_enrichment)

        outcome = await manager.start(admin.id, user.id)

        assert outcome == Failure(ErrorKind.SESSION_CREATION_FAILED, SESSION_CREATION_FAILED)
        assert await count_sessions(db_session) == 0

    async def test_store_error_reported_as_creation_failure(
        self, manager, db_session, admin: Profile, user: Profile, monkeypatch
    ) -> None:
        async def _broken_flush(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(manager.session, "flush", _broken_flush)

        outcome = await manager.start(admin.id, user.id)

        assert outcome == Failure(ErrorKind.SESSION_CREATION_FAILED, SESSION_CREATION_FAILED)
        assert await count_sessions(db_session) == 0

    async def test_demoted_admin_cannot_start(
        self, manager, db_session: AsyncSession, admin: Profile, user: Profile
    ) -> None:
        """Role is read at call time, not cached from sign-in."""
        admin.role = UserRole.USER.value
        await db_session.commit()

        outcome = await manager.start(admin.id, user.id)

        assert outcome == Failure(ErrorKind.UNAUTHORIZED, ADMIN_REQUIRED)


class TestResolve:
    """Tests for pointer resolution and expiry."""

    async def test_expiry_boundary(self, manager, clock, admin: Profile, user: Profile) -> None:
        """Active one second before expiry, gone one second after."""
        t0 = clock.now
        outcome = await manager.start(admin.id, user.id)
        assert isinstance(outcome, Success)
        pointer = str(outcome.data.session_id)

        assert await manager.resolve(pointer, now=t0 + timedelta(seconds=3599)) is not None
        assert await manager.resolve(pointer, now=t0 + timedelta(seconds=3600)) is None
        assert await manager.resolve(pointer, now=t0 + timedelta(seconds=3601)) is None

    async def test_expired_row_still_exists(
        self, manager, clock, db_session, admin: Profile, user: Profile
    ) -> None:
        """Expiry is decided at read time; the row is not removed."""
        outcome = await manager.start(admin.id, user.id)
        assert isinstance(outcome, Success)

        clock.advance(timedelta(hours=2))

        assert await manager.resolve(str(outcome.data.session_id)) is None
        assert await manager.is_active(str(outcome.data.session_id)) is False
        assert await count_sessions(db_session) == 1

    async def test_custom_ttl(self, make_manager, clock, admin: Profile, user: Profile) -> None:
        manager = make_manager(ttl=timedelta(minutes=5))
        outcome = await manager.start(admin.id, user.id)
        assert isinstance(outcome, Success)
        pointer = str(outcome.data.session_id)

        clock.advance(timedelta(minutes=4))
        assert await manager.is_active(pointer)
        clock.advance(timedelta(minutes=1))
        assert not await manager.is_active(pointer)

    @pytest.mark.parametrize("pointer", [None, "", "garbage", str(uuid4())])
    async def test_unknown_pointers_resolve_to_nothing(self, manager, pointer) -> None:
        assert await manager.resolve(pointer) is None
        assert await manager.is_active(pointer) is False
        assert await manager.resolve_outcome(pointer) == Success(None)

    async def test_store_failure_surfaces_in_outcome(self, manager, monkeypatch) -> None:
        async def _broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        monkeypatch.setattr(manager.session_repo, "get_enriched", _broken)

        outcome = await manager.resolve_outcome(str(uuid4()))

        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.STORE_UNAVAILABLE


class TestStop:
    """Tests for ending a session."""

    async def test_stop_ends_session(self, manager, admin: Profile, user: Profile) -> None:
        outcome = await manager.start(admin.id, user.id)
        assert isinstance(outcome, Success)
        pointer = str(outcome.data.session_id)

        await manager.stop(pointer)

        assert await manager.resolve(pointer) is None

    async def test_stop_is_idempotent(self, manager, admin: Profile, user: Profile) -> None:
        outcome = await manager.start(admin.id, user.id)
        assert isinstance(outcome, Success)
        pointer = str(outcome.data.session_id)

        await manager.stop(pointer)
        await manager.stop(pointer)

        assert await manager.resolve(pointer) is None

    @pytest.mark.parametrize("pointer", [None, "", "garbage", str(uuid4())])
    async def test_stop_without_session_is_noop(self, manager, pointer) -> None:
        await manager.stop(pointer)

    async def test_stop_only_removes_named_session(
        self, manager, db_session, admin: Profile, second_admin: Profile, user: Profile
    ) -> None:
        first = await manager.start(admin.id, user.id)
        second = await manager.start(second_admin.id, user.id)
        assert isinstance(first, Success) and isinstance(second, Success)

        await manager.stop(str(first.data.session_id))

        assert await manager.resolve(str(second.data.session_id)) is not None
        assert await count_sessions(db_session) == 1


class TestPurgeExpired:
    """Tests for the retention sweep."""

    async def test_purges_only_rows_past_retention(
        self, manager, db_session, admin: Profile, user: Profile
    ) -> None:
        ids = {"admin_id": admin.id, "impersonated_id": user.id}
        old, recent, live = await persist(
            db_session,
            ImpersonationSessionFactory.expired(ago=timedelta(days=45), **ids),
            ImpersonationSessionFactory.expired(ago=timedelta(days=1), **ids),
            ImpersonationSessionFactory.build(**ids),
        )
        old_id, recent_id, live_id = old.id, recent.id, live.id

        outcome = await manager.purge_expired(admin.id, retention=timedelta(days=30))

        assert isinstance(outcome, Success)
        deleted, _cutoff = outcome.data
        assert deleted == 1
        remaining = set(
            (await db_session.execute(select(ImpersonationSession.id))).scalars().all()
        )
        assert remaining == {recent_id, live_id}
        assert old_id not in remaining

    async def test_non_admin_cannot_purge(self, manager, db_session, admin, user: Profile) -> None:
        await persist(
            db_session,
            ImpersonationSessionFactory.expired(
                ago=timedelta(days=90), admin_id=admin.id, impersonated_id=user.id
            ),
        )

        outcome = await manager.purge_expired(user.id, retention=timedelta(days=30))

        assert outcome == Failure(ErrorKind.UNAUTHORIZED, ADMIN_REQUIRED)
        assert await count_sessions(db_session) == 1
