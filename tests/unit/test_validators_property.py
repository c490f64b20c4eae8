"""Property-based tests for validators using hypothesis."""

from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from src.saas_admin.schemas.tenant import TenantCreate

pytestmark = pytest.mark.unit

label = st.from_regex(r"^[a-z0-9]{1,12}$", fullmatch=True)
valid_domain = st.lists(label, min_size=1, max_size=4).map(".".join)


def _tenant(domain: str) -> TenantCreate:
    return TenantCreate(name="Test Company", admin_id=uuid4(), domain=domain)


@given(domain=valid_domain)
@settings(max_examples=100)
def test_valid_domains_accepted(domain: str):
    assert _tenant(domain).domain == domain


@given(domain=valid_domain)
def test_domains_are_lowercased(domain: str):
    assert _tenant(domain.upper()).domain == domain


@given(domain=valid_domain, bad=st.sampled_from(["-", ".", "_", " ", "/"]))
def test_leading_separator_or_symbol_rejected(domain: str, bad: str):
    with pytest.raises(ValidationError) as exc_info:
        _tenant(bad + domain)
    assert any(error["loc"] == ("domain",) for error in exc_info.value.errors())


@given(domain=valid_domain, bad=st.sampled_from(["_", " ", "/", "@", ":"]))
def test_illegal_characters_rejected(domain: str, bad: str):
    with pytest.raises(ValidationError) as exc_info:
        _tenant(f"{domain}{bad}example")
    assert any(error["loc"] == ("domain",) for error in exc_info.value.errors())


class TestDomainValidatorEdgeCases:
    def test_single_label(self):
        assert _tenant("localhost").domain == "localhost"

    def test_hyphenated_label(self):
        assert _tenant("my-company.example.com").domain == "my-company.example.com"

    def test_trailing_dot_rejected(self):
        with pytest.raises(ValidationError):
            _tenant("example.com.")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            _tenant("")
