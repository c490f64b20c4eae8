"""Tagged results returned by domain operations.

Services never raise to signal navigation or expected failures. They return
``Success``, ``Failure`` or ``Redirect`` and the caller decides how each maps
onto HTTP.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Failure taxonomy shared by the guard and the services."""

    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"
    TARGET_NOT_FOUND = "target_not_found"
    SESSION_CREATION_FAILED = "session_creation_failed"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    STORE_UNAVAILABLE = "store_unavailable"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.TARGET_NOT_FOUND: 404,
    ErrorKind.SESSION_CREATION_FAILED: 500,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_UNAVAILABLE: 503,
}


@dataclass(frozen=True, slots=True)
class Success[T]:
    data: T


@dataclass(frozen=True, slots=True)
class Failure:
    kind: ErrorKind
    reason: str


@dataclass(frozen=True, slots=True)
class Redirect:
    path: str


type Outcome[T] = Success[T] | Failure | Redirect
