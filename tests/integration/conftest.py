"""Integration test fixtures for database and HTTP client operations.

Tests run against a private in-memory SQLite database per test (aiosqlite,
single shared connection) bound into the app through ``set_engine``.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.saas_admin.models  # noqa: F401 - registers tables on the metadata
from src.saas_admin.core import db
from src.saas_admin.main import create_app
from src.saas_admin.models import Profile, utc_now
from src.saas_admin.repositories import ImpersonationSessionRepository, ProfileRepository
from src.saas_admin.services.guards import AdminGuard
from src.saas_admin.services.impersonation_service import DEFAULT_TTL, ImpersonationManager
from tests.factories import ProfileFactory
from tests.helpers import persist


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime | None = None):
        self.now = now or utc_now()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables, installed as the app engine."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    db.set_engine(test_engine)
    yield test_engine
    db.set_engine(None)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for seeding and inspecting data.

    Does NOT auto-commit. Use ``persist`` or commit explicitly.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def admin(db_session: AsyncSession) -> Profile:
    (profile,) = await persist(db_session, ProfileFactory.admin(email="admin@example.com"))
    return profile


@pytest.fixture
async def second_admin(db_session: AsyncSession) -> Profile:
    (profile,) = await persist(db_session, ProfileFactory.admin(email="admin2@example.com"))
    return profile


@pytest.fixture
async def user(db_session: AsyncSession) -> Profile:
    (profile,) = await persist(db_session, ProfileFactory.build(email="jane@example.com"))
    return profile


@pytest.fixture
async def guest(db_session: AsyncSession) -> Profile:
    (profile,) = await persist(db_session, ProfileFactory.guest(email="guest@example.com"))
    return profile


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def service_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session owned by the service under test, separate from the seeding session.

    Services roll back on failure; keeping them off ``db_session`` leaves the
    seeded fixtures loaded.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def make_manager(
    service_session: AsyncSession, clock: FakeClock
) -> Callable[..., ImpersonationManager]:
    """Build a manager with the fake clock."""

    def _make(ttl: timedelta = DEFAULT_TTL) -> ImpersonationManager:
        profile_repo = ProfileRepository(service_session)
        return ImpersonationManager(
            ImpersonationSessionRepository(service_session),
            profile_repo,
            AdminGuard(profile_repo),
            service_session,
            ttl=ttl,
            clock=clock,
        )

    return _make


@pytest.fixture
def manager(make_manager: Callable[..., ImpersonationManager]) -> ImpersonationManager:
    return make_manager()


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client over the ASGI app, bound to the test database."""
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
