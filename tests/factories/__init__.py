"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, TenantFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.impersonation import ImpersonationSessionFactory
from tests.factories.profile import DEFAULT_TEST_PASSWORD, ProfileFactory
from tests.factories.tenant import TenantFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Profile
    "DEFAULT_TEST_PASSWORD",
    "ProfileFactory",
    # Tenant
    "TenantFactory",
    # Impersonation
    "ImpersonationSessionFactory",
]
