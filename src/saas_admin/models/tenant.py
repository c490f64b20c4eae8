"""Tenant model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.saas_admin.models.base import utc_now


class Tenant(SQLModel, table=True):
    """Tenant registry. ``admin_id`` names the profile that owns the tenant."""

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    domain: str = Field(max_length=255, unique=True, index=True)
    admin_id: UUID | None = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
