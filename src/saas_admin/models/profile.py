"""Profile model - the identity table every role and session references."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.saas_admin.models.base import utc_now
from src.saas_admin.models.enums import UserRole


class Profile(SQLModel, table=True):
    """Authenticated identity with its role and tenant assignment."""

    __tablename__ = "profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    full_name: str | None = Field(default=None, max_length=100)
    role: str | None = Field(default=UserRole.USER.value, max_length=20)
    tenant_id: UUID | None = Field(
        default=None, foreign_key="tenants.id", index=True, ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: UUID | None = Field(default=None)
    updated_by: UUID | None = Field(default=None)

    @property
    def role_enum(self) -> UserRole:
        """Role as UserRole; a missing role counts as GUEST."""
        return UserRole.from_value(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role_enum.has_admin_capability
