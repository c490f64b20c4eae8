"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Profile role. SUPER_ADMIN and ADMIN carry the admin capability."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"

    @property
    def has_admin_capability(self) -> bool:
        return self in (UserRole.SUPER_ADMIN, UserRole.ADMIN)

    @property
    def landing_path(self) -> str:
        """Default area a signed-in caller with this role is routed to."""
        return ROLE_LANDING_PATHS[self]

    @classmethod
    def from_value(cls, value: str | None) -> "UserRole":
        """Parse a stored role; a missing or unknown role is treated as GUEST."""
        try:
            return cls(value)
        except ValueError:
            return cls.GUEST


ROLE_LANDING_PATHS: dict[UserRole, str] = {
    UserRole.SUPER_ADMIN: "/admin",
    UserRole.ADMIN: "/admin",
    UserRole.USER: "/protected",
    UserRole.GUEST: "/protected",
}
