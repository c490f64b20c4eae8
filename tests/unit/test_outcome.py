"""Tests for tagged service outcomes."""

from dataclasses import FrozenInstanceError
from typing import get_args, get_type_hints

import pytest
from fastapi import HTTPException

from src.saas_admin.api.outcomes import unwrap
from src.saas_admin.services.outcome import ErrorKind, Failure, Redirect, Success

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("kind", "status"),
    [
        (ErrorKind.UNAUTHENTICATED, 401),
        (ErrorKind.UNAUTHORIZED, 403),
        (ErrorKind.TARGET_NOT_FOUND, 404),
        (ErrorKind.SESSION_CREATION_FAILED, 500),
        (ErrorKind.CONFLICT, 409),
        (ErrorKind.NOT_FOUND, 404),
        (ErrorKind.STORE_UNAVAILABLE, 503),
    ],
)
def test_error_kind_status_codes(kind: ErrorKind, status: int) -> None:
    assert kind.status_code == status


def test_every_error_kind_has_a_status() -> None:
    for kind in ErrorKind:
        assert isinstance(kind.status_code, int)


def test_outcomes_are_immutable() -> None:
    failure = Failure(ErrorKind.CONFLICT, "taken")
    with pytest.raises(FrozenInstanceError):
        failure.reason = "other"  # type: ignore[misc]


def test_outcomes_compare_by_value() -> None:
    assert Success(1) == Success(1)
    assert Redirect("/dashboard") == Redirect("/dashboard")
    assert Failure(ErrorKind.NOT_FOUND, "x") != Failure(ErrorKind.CONFLICT, "x")


def test_unwrap_returns_success_payload() -> None:
    assert unwrap(Success({"id": 1})) == {"id": 1}


def test_unwrap_raises_failure_as_http_error() -> None:
    with pytest.raises(HTTPException) as exc_info:
        unwrap(Failure(ErrorKind.STORE_UNAVAILABLE, "Session store unavailable"))

    assert exc_info.value.status_code == 503
    assert exc_info.value.detail == "Session store unavailable"
    assert exc_info.value.headers is None


def test_unwrap_does_not_accept_redirects() -> None:
    assert Redirect not in get_args(get_type_hints(unwrap)["outcome"])
