from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.saas_admin.models import UserRole
from src.saas_admin.schemas.types import UtcDatetime


class ProfileRead(BaseModel):
    id: UUID
    email: EmailStr
    full_name: str | None = None
    role: UserRole | None = None
    tenant_id: UUID | None = None
    created_at: UtcDatetime

    model_config = {"from_attributes": True}


class ProfileCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    full_name: str | None = Field(default=None, min_length=1, max_length=100)
    role: UserRole = UserRole.USER
    tenant_id: UUID | None = Field(
        default=None,
        description="Tenant to assign. Defaults to the creating admin's own tenant.",
    )


class ProfileRoleUpdate(BaseModel):
    role: UserRole
