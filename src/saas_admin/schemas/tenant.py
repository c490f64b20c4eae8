import re
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.saas_admin.schemas.types import UtcDatetime

_DOMAIN_PATTERN = re.compile(
    r"^[a-z0-9]([a-z0-9.-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)*$",
    re.IGNORECASE,
)


class TenantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    admin_id: UUID = Field(description="Profile that will own the tenant")
    domain: str = Field(
        min_length=1,
        max_length=255,
        json_schema_extra={"examples": ["example.com", "acme.io"]},
    )

    @field_validator("domain")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        if not _DOMAIN_PATTERN.match(v):
            raise ValueError("Please enter a valid domain name (e.g. example.com)")
        return v.lower()


class TenantRead(BaseModel):
    id: UUID
    name: str
    domain: str
    admin_id: UUID | None = None
    created_at: UtcDatetime

    model_config = {"from_attributes": True}
