"""Impersonation session model."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.saas_admin.models.base import utc_now


class ImpersonationSession(SQLModel, table=True):
    """Time-boxed pairing of an admin with the profile they are viewing as.

    Rows are immutable once created. Expired rows stay in the table until
    explicitly deleted; "active" is decided at read time.
    """

    __tablename__ = "impersonation_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    admin_id: UUID = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    impersonated_id: UUID = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime = Field(index=True)

    @classmethod
    def open(
        cls,
        admin_id: UUID,
        impersonated_id: UUID,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> "ImpersonationSession":
        """Build a new session whose expiry is ``created_at + ttl``."""
        created_at = now or utc_now()
        return cls(
            admin_id=admin_id,
            impersonated_id=impersonated_id,
            created_at=created_at,
            expires_at=created_at + ttl,
        )

    def is_active_at(self, now: datetime) -> bool:
        return is_active(self.expires_at, now)


def is_active(expires_at: datetime, now: datetime) -> bool:
    """A session is active strictly before its expiry instant."""
    return expires_at > now
