"""Tests for rate limiter construction (src/saas_admin/core/rate_limit.py)."""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from src.saas_admin.core import rate_limit
from src.saas_admin.core.rate_limit import create_limiter, get_rate_limit_key

pytestmark = pytest.mark.unit


def _request(host: str | None, headers: dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/v1/auth/sign-in",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": (host, 12345) if host else None,
    }
    return Request(scope)


def test_key_is_client_ip() -> None:
    assert get_rate_limit_key(_request("192.168.1.100")) == "192.168.1.100"


def test_key_ignores_user_controlled_headers() -> None:
    request = _request("10.0.0.1", {"X-Impersonation-Id": "anything"})
    assert get_rate_limit_key(request) == "10.0.0.1"


def test_limiter_disabled_in_testing() -> None:
    assert create_limiter().enabled is False


def test_limiter_enabled_outside_testing(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = MagicMock()
    settings.app_env = "development"
    monkeypatch.setattr(rate_limit, "get_settings", lambda: settings)

    assert create_limiter().enabled is True
